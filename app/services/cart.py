import logging
from collections import namedtuple
from decimal import Decimal
from typing import Optional

from app.services.cart_store import CartLine, LocalCartStore
from app.services.errors import InsufficientStock, ValidationError
from app.services.pricing import DEFAULT_PRICING, PricingPolicy

logger = logging.getLogger(__name__)

# level is one of "success", "info"
Notice = namedtuple("Notice", ["level", "message"])


class CartService:
    """Cart mutations, each a read-modify-write of the whole stored cart."""

    def __init__(self, store: LocalCartStore, pricing: PricingPolicy = DEFAULT_PRICING):
        self.store = store
        self.pricing = pricing

    def add_item(self, product, quantity: int = 1) -> Notice:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        cart = self.store.read()
        existing = cart.get(product.id)
        new_quantity = (existing.quantity if existing else 0) + quantity
        if new_quantity > product.stock:
            logger.info({"event": "cart_add_rejected", "product_id": product.id, "requested": new_quantity, "stock": product.stock})
            raise InsufficientStock(product.stock)

        if existing:
            cart.put(existing.with_quantity(new_quantity))
            notice = Notice("success", f"Updated {existing.name} quantity in your cart")
        else:
            cart.put(
                CartLine(
                    product_id=product.id,
                    name=product.name,
                    unit_price=Decimal(str(product.price)),
                    quantity=quantity,
                    image_url=product.image_url,
                    available_stock=product.stock,
                )
            )
            notice = Notice("success", f"{product.name} added to cart")
        self.store.write(cart)
        return notice

    def remove_item(self, product_id: int) -> Notice:
        cart = self.store.read()
        if not cart.remove(product_id):
            return Notice("info", "Item not in cart")
        self.store.write(cart)
        return Notice("success", "Item removed from cart")

    def update_quantity(self, product_id: int, new_quantity: int) -> Optional[Notice]:
        # Quantities below 1 are ignored; removal goes through remove_item.
        if new_quantity < 1:
            return None
        cart = self.store.read()
        line = cart.get(product_id)
        if line is None:
            return None
        if new_quantity > line.available_stock:
            raise InsufficientStock(line.available_stock)
        cart.put(line.with_quantity(new_quantity))
        self.store.write(cart)
        return Notice("success", f"Updated {line.name} quantity in your cart")

    def clear_cart(self) -> Notice:
        self.store.clear()
        return Notice("info", "Cart cleared")

    def summary(self) -> dict:
        cart = self.store.read()
        totals = self.pricing.totals(cart)
        return {
            "items": [
                dict(line.to_record(), subtotal=self.pricing.display(line.line_total))
                for line in cart
            ],
            "item_count": sum(line.quantity for line in cart),
            **totals.display(),
        }
