import json
import logging
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, List, Optional

from app.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_CART_KEY = "cart"


class CorruptCartRecord(ValueError):
    pass


@dataclass(frozen=True)
class CartLine:
    product_id: int
    name: str
    unit_price: Decimal
    quantity: int
    image_url: Optional[str] = None
    available_stock: int = 0

    def with_quantity(self, quantity: int) -> "CartLine":
        return replace(self, quantity=quantity)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_record(self) -> dict:
        return {
            "id": self.product_id,
            "name": self.name,
            "price": float(self.unit_price),
            "quantity": self.quantity,
            "image_url": self.image_url,
            "stock": self.available_stock,
        }

    @classmethod
    def from_record(cls, record: dict) -> "CartLine":
        try:
            product_id = record["id"]
            quantity = record["quantity"]
            stock = record.get("stock", 0)
            if not all(isinstance(v, int) and not isinstance(v, bool) for v in (product_id, quantity, stock)):
                raise CorruptCartRecord(f"non-integer field in {record!r}")
            if quantity < 1:
                raise CorruptCartRecord(f"quantity below 1 for product {product_id}")
            unit_price = Decimal(str(record["price"]))
            if not unit_price.is_finite() or unit_price < 0:
                raise CorruptCartRecord(f"invalid price for product {product_id}")
            return cls(
                product_id=product_id,
                name=str(record["name"]),
                unit_price=unit_price,
                quantity=quantity,
                image_url=record.get("image_url"),
                available_stock=stock,
            )
        except (KeyError, TypeError, AttributeError, InvalidOperation) as e:
            raise CorruptCartRecord(str(e)) from e


class Cart:
    """Cart lines keyed by product id; insertion order is kept for display."""

    def __init__(self, lines=None):
        self._lines: Dict[int, CartLine] = {}
        for line in lines or []:
            if line.product_id in self._lines:
                raise CorruptCartRecord(f"duplicate line for product {line.product_id}")
            self._lines[line.product_id] = line

    def __iter__(self) -> Iterator[CartLine]:
        return iter(list(self._lines.values()))

    def __len__(self):
        return len(self._lines)

    def __eq__(self, other):
        return isinstance(other, Cart) and self._lines == other._lines

    def get(self, product_id: int) -> Optional[CartLine]:
        return self._lines.get(product_id)

    def put(self, line: CartLine) -> None:
        self._lines[line.product_id] = line

    def remove(self, product_id: int) -> bool:
        return self._lines.pop(product_id, None) is not None

    def is_empty(self) -> bool:
        return not self._lines

    def to_records(self) -> List[dict]:
        return [line.to_record() for line in self._lines.values()]

    @classmethod
    def from_records(cls, records) -> "Cart":
        if not isinstance(records, list):
            raise CorruptCartRecord("cart record is not a list")
        return cls(CartLine.from_record(r) for r in records)


class LocalCartStore:
    """Owns the serialized cart under one well-known storage key.

    The store exposes whole-cart operations only: callers read, modify and
    write back the full cart.
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_CART_KEY):
        self.storage = storage
        self.key = key

    def read(self) -> Cart:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return Cart()
        try:
            return Cart.from_records(json.loads(raw))
        except (ValueError, TypeError) as e:
            # json.JSONDecodeError and CorruptCartRecord are both ValueErrors
            logger.warning("discarding unreadable cart record: %s", e)
            self.storage.remove_item(self.key)
            return Cart()

    def write(self, cart: Cart) -> None:
        self.storage.set_item(self.key, json.dumps(cart.to_records()))

    def clear(self) -> None:
        self.storage.remove_item(self.key)
