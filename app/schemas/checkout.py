from pydantic import BaseModel, Field
from typing import Optional


class CheckoutRequest(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    phone: str = ""
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = "ca"
    zip_code: str = Field(min_length=1)

    # Collected but never charged or validated beyond presence
    payment_method: str = "credit"
    card_name: Optional[str] = None
    card_number: Optional[str] = None
    card_expiry: Optional[str] = None
    card_cvc: Optional[str] = None
