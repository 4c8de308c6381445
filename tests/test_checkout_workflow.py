from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.schemas.checkout import CheckoutRequest
from app.services.cart_store import Cart, CartLine, LocalCartStore
from app.services.catalog_service import CatalogService
from app.services.checkout import CheckoutWorkflow, format_address
from app.services.errors import EmptyCart, OrderSubmissionError, ServiceError
from app.services.storage import MemoryStorage


class FakeCatalog(CatalogService):
    def __init__(self, existing_customers=None, fail=(), fail_item_for=None, stock=None):
        self.customers = dict(existing_customers or {})
        self.fail = set(fail)
        self.fail_item_for = fail_item_for
        self.stock = dict(stock or {})
        self.orders = {}
        self.order_items = []
        self.calls = []

    def _maybe_fail(self, name):
        self.calls.append(name)
        if name in self.fail:
            raise ServiceError(f"{name} failed", detail=f"{name} upstream error")

    def find_customer_by_email(self, email):
        self._maybe_fail("find_customer")
        return self.customers.get(email)

    def create_customer(self, first_name, last_name, email, phone, address):
        self._maybe_fail("create_customer")
        customer_id = 100 + len(self.customers)
        self.customers[email] = customer_id
        self.created_customer = dict(first_name=first_name, last_name=last_name, phone=phone, address=address)
        return customer_id

    def create_order(self, total, status, customer_id):
        self._maybe_fail("create_order")
        order_id = len(self.orders) + 1
        self.orders[order_id] = SimpleNamespace(total=total, status=status, customer_id=customer_id)
        return order_id

    def create_order_item(self, order_id, product_id, quantity, price):
        self._maybe_fail("create_order_item")
        if product_id == self.fail_item_for:
            raise ServiceError("insert failed", detail="violates foreign key constraint")
        self.order_items.append((order_id, product_id, quantity, price))

    def update_order_status(self, order_id, status):
        self._maybe_fail("update_order_status")
        self.orders[order_id].status = status

    def decrement_stock(self, product_id, quantity):
        self._maybe_fail("decrement_stock")
        current = self.stock.get(product_id)
        if not current:
            return None
        self.stock[product_id] = max(0, current - quantity)
        return self.stock[product_id]


FORM = CheckoutRequest(
    first_name="Ada",
    last_name="Lovelace",
    email="ada@example.com",
    phone="555-0100",
    address="1 Main St",
    city="Springfield",
    state="ca",
    zip_code="90210",
)


def sample_cart():
    return Cart([
        CartLine(product_id=1, name="Sample Product 1", unit_price=Decimal("49.99"), quantity=1, available_stock=5),
        CartLine(product_id=2, name="Sample Product 2", unit_price=Decimal("29.99"), quantity=2, available_stock=5),
    ])


def make_store(cart=None):
    store = LocalCartStore(MemoryStorage())
    if cart is not None:
        store.write(cart)
    return store


def test_empty_cart_aborts_before_any_service_call():
    catalog = FakeCatalog()
    with pytest.raises(EmptyCart) as exc:
        CheckoutWorkflow(make_store(), catalog).submit(FORM)
    assert exc.value.redirect == "/cart"
    assert str(exc.value) == "Your cart is empty"
    assert catalog.calls == []


def test_successful_checkout_creates_records_and_clears_cart():
    store = make_store(sample_cart())
    catalog = FakeCatalog(stock={1: 5, 2: 1})

    result = CheckoutWorkflow(store, catalog).submit(FORM)

    assert result.redirect == "/order-confirmation"
    assert result.customer_id == 100
    assert catalog.created_customer["address"] == "1 Main St, Springfield, CA 90210"
    order = catalog.orders[result.order_id]
    assert order.status == "pending"
    assert order.customer_id == 100
    assert order.total == Decimal("126.957")
    assert result.totals.display()["total"] == 126.96
    assert catalog.order_items == [
        (result.order_id, 1, 1, Decimal("49.99")),
        (result.order_id, 2, 2, Decimal("29.99")),
    ]
    assert catalog.stock == {1: 4, 2: 0}
    assert store.read().is_empty()


def test_existing_customer_is_reused():
    catalog = FakeCatalog(existing_customers={"ada@example.com": 7})
    result = CheckoutWorkflow(make_store(sample_cart()), catalog).submit(FORM)
    assert result.customer_id == 7
    assert "create_customer" not in catalog.calls
    assert catalog.orders[result.order_id].customer_id == 7


def test_customer_resolution_failures_produce_anonymous_order():
    store = make_store(sample_cart())
    catalog = FakeCatalog(fail={"find_customer", "create_customer"})

    result = CheckoutWorkflow(store, catalog).submit(FORM)

    assert result.customer_id is None
    assert catalog.orders[result.order_id].customer_id is None
    assert len(catalog.order_items) == 2
    assert store.read().is_empty()


def test_customer_create_failure_is_not_fatal():
    catalog = FakeCatalog(fail={"create_customer"})
    result = CheckoutWorkflow(make_store(sample_cart()), catalog).submit(FORM)
    assert result.customer_id is None
    assert catalog.orders[result.order_id].status == "pending"


def test_order_creation_failure_keeps_cart():
    store = make_store(sample_cart())
    catalog = FakeCatalog(fail={"create_order"})

    with pytest.raises(OrderSubmissionError) as exc:
        CheckoutWorkflow(store, catalog).submit(FORM)

    assert "create_order upstream error" in str(exc.value)
    assert catalog.order_items == []
    assert store.read() == sample_cart()


def test_order_item_failure_marks_order_incomplete_and_keeps_cart():
    store = make_store(sample_cart())
    catalog = FakeCatalog(fail_item_for=2, stock={1: 5, 2: 5})

    with pytest.raises(OrderSubmissionError) as exc:
        CheckoutWorkflow(store, catalog).submit(FORM)

    assert str(exc.value) == "Failed to place order. violates foreign key constraint"
    order_id = exc.value.order_id
    assert catalog.orders[order_id].status == "incomplete"
    # the first line was already written and stays
    assert catalog.order_items == [(order_id, 1, 1, Decimal("49.99"))]
    assert "decrement_stock" not in catalog.calls
    assert catalog.stock == {1: 5, 2: 5}
    assert store.read() == sample_cart()


def test_failed_compensation_still_reports_item_failure():
    store = make_store(sample_cart())
    catalog = FakeCatalog(fail_item_for=1, fail={"update_order_status"})
    with pytest.raises(OrderSubmissionError):
        CheckoutWorkflow(store, catalog).submit(FORM)
    assert not store.read().is_empty()


def test_inventory_failures_do_not_abort_checkout():
    store = make_store(sample_cart())
    catalog = FakeCatalog(fail={"decrement_stock"})

    result = CheckoutWorkflow(store, catalog).submit(FORM)

    assert catalog.calls.count("decrement_stock") == 2
    assert result.order_id in catalog.orders
    assert store.read().is_empty()


def test_out_of_stock_products_are_skipped():
    catalog = FakeCatalog(stock={1: 0, 2: 3})
    CheckoutWorkflow(make_store(sample_cart()), catalog).submit(FORM)
    assert catalog.stock == {1: 0, 2: 1}


def test_format_address_uppercases_state():
    assert format_address(FORM) == "1 Main St, Springfield, CA 90210"
