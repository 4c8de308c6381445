"""Order submission: turn the stored cart plus the checkout form into an order.

The steps run in a fixed order and never go back:

1. reject an empty cart
2. resolve the customer by email, creating one if needed (best-effort)
3. create the order record (fatal on failure)
4. create one order line per cart line (fatal on failure; the order is then
   marked ``incomplete``)
5. decrement inventory for each line (best-effort)
6. clear the cart

A fatal failure leaves the stored cart untouched so the customer can retry.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from app.metrics import CHECKOUT_OUTCOMES
from app.services.cart_store import LocalCartStore
from app.services.catalog_service import CatalogService
from app.services.errors import EmptyCart, OrderSubmissionError, ServiceError
from app.services.pricing import DEFAULT_PRICING, OrderTotals, PricingPolicy

logger = logging.getLogger(__name__)

ORDER_STATUS_PENDING = "pending"
ORDER_STATUS_INCOMPLETE = "incomplete"
CONFIRMATION_REDIRECT = "/order-confirmation"


@dataclass(frozen=True)
class CheckoutResult:
    order_id: int
    customer_id: Optional[int]
    totals: OrderTotals
    redirect: str = CONFIRMATION_REDIRECT
    message: str = "Order placed successfully!"


def format_address(form) -> str:
    return f"{form.address}, {form.city}, {form.state.upper()} {form.zip_code}"


class CheckoutWorkflow:
    def __init__(
        self,
        store: LocalCartStore,
        catalog: CatalogService,
        pricing: PricingPolicy = DEFAULT_PRICING,
    ):
        self.store = store
        self.catalog = catalog
        self.pricing = pricing

    def submit(self, form) -> CheckoutResult:
        cart = self.store.read()
        if cart.is_empty():
            CHECKOUT_OUTCOMES.labels("empty_cart").inc()
            raise EmptyCart()

        logger.info({"event": "checkout_submitted", "lines": len(cart), "email": form.email})
        customer_id = self._resolve_customer(form)
        totals = self.pricing.totals(cart)

        try:
            order_id = self.catalog.create_order(totals.total, ORDER_STATUS_PENDING, customer_id)
        except ServiceError as e:
            logger.error("Error placing order: %s (%s)", e, e.detail)
            CHECKOUT_OUTCOMES.labels("order_failed").inc()
            raise OrderSubmissionError(_failure_message(e)) from e

        for line in cart:
            try:
                self.catalog.create_order_item(order_id, line.product_id, line.quantity, line.unit_price)
            except ServiceError as e:
                logger.error("Error inserting order item for product %s: %s (%s)", line.product_id, e, e.detail)
                self._mark_incomplete(order_id)
                CHECKOUT_OUTCOMES.labels("order_item_failed").inc()
                raise OrderSubmissionError(_failure_message(e), order_id=order_id) from e

        for line in cart:
            try:
                new_stock = self.catalog.decrement_stock(line.product_id, line.quantity)
            except ServiceError as e:
                logger.warning("Failed to update stock for product %s: %s", line.product_id, e.detail or e)
                continue
            if new_stock is None:
                logger.warning("Stock not decremented for product %s: out of stock or missing", line.product_id)

        self.store.clear()
        CHECKOUT_OUTCOMES.labels("placed").inc()
        logger.info({"event": "order_placed", "order_id": order_id, "customer_id": customer_id})
        return CheckoutResult(order_id=order_id, customer_id=customer_id, totals=totals)

    def _resolve_customer(self, form) -> Optional[int]:
        try:
            customer_id = self.catalog.find_customer_by_email(form.email)
        except ServiceError as e:
            logger.error("Error looking up customer: %s", e.detail or e)
            return None
        if customer_id is not None:
            logger.info({"event": "customer_found", "customer_id": customer_id})
            return customer_id

        try:
            customer_id = self.catalog.create_customer(
                first_name=form.first_name,
                last_name=form.last_name,
                email=form.email,
                phone=form.phone,
                address=format_address(form),
            )
        except ServiceError as e:
            logger.error("Error creating customer: %s", e.detail or e)
            return None
        logger.info({"event": "customer_created", "customer_id": customer_id})
        return customer_id

    def _mark_incomplete(self, order_id):
        try:
            self.catalog.update_order_status(order_id, ORDER_STATUS_INCOMPLETE)
        except ServiceError as e:
            logger.error("Could not mark order %s incomplete: %s", order_id, e.detail or e)


def _failure_message(error: ServiceError) -> str:
    detail = error.detail or str(error)
    return f"Failed to place order. {detail}"
