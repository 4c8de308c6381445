class ValidationError(Exception):
    pass


class InsufficientStock(ValidationError):
    def __init__(self, available: int):
        self.available = available
        super().__init__(f"Sorry, only {available} items available in stock")


class EmptyCart(ValidationError):
    def __init__(self, message: str = "Your cart is empty", redirect: str = "/cart"):
        self.redirect = redirect
        super().__init__(message)


class ServiceError(Exception):
    """A catalog/order service call failed; ``detail`` carries the upstream error."""

    def __init__(self, message: str, detail=None):
        self.detail = detail
        super().__init__(message)


class OrderSubmissionError(Exception):
    def __init__(self, message: str, order_id=None):
        self.order_id = order_id
        super().__init__(message)
