"""Gateway to the catalog/order database.

Each write commits on its own; there is no transaction spanning several calls.
Database errors are rolled back and re-raised as ``ServiceError``.
"""

from contextlib import contextmanager
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.catalog import Category, Product, Review
from models.customer import Customer
from models.order import Order, OrderItem
from app.services.errors import ServiceError
from app.utils.db import transactional


class CatalogService:
    def find_customer_by_email(self, email: str) -> Optional[int]:
        raise NotImplementedError

    def create_customer(self, first_name, last_name, email, phone, address) -> int:
        raise NotImplementedError

    def create_order(self, total: Decimal, status: str, customer_id: Optional[int]) -> int:
        raise NotImplementedError

    def create_order_item(self, order_id: int, product_id: int, quantity: int, price: Decimal) -> None:
        raise NotImplementedError

    def update_order_status(self, order_id: int, status: str) -> None:
        raise NotImplementedError

    def decrement_stock(self, product_id: int, quantity: int) -> Optional[int]:
        raise NotImplementedError


@contextmanager
def _service_call(message):
    try:
        yield
    except SQLAlchemyError as e:
        db.session.rollback()
        raise ServiceError(message, detail=str(e)) from e


class SqlCatalogService(CatalogService):
    # ------------------- Customers -------------------
    def find_customer_by_email(self, email):
        with _service_call("Error looking up customer"):
            customer = Customer.query.filter_by(email=email).order_by(Customer.id).first()
        return customer.id if customer else None

    def create_customer(self, first_name, last_name, email, phone, address):
        customer = Customer(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            address=address,
        )
        with _service_call("Error creating customer"):
            with transactional("Failed to create customer"):
                db.session.add(customer)
        return customer.id

    # ------------------- Orders -------------------
    def create_order(self, total, status, customer_id):
        order = Order(total=float(total), status=status, customer_id=customer_id)
        with _service_call("Failed to create order"):
            with transactional("Failed to create order"):
                db.session.add(order)
        return order.id

    def create_order_item(self, order_id, product_id, quantity, price):
        with _service_call(f"Error inserting order item for product {product_id}"):
            with transactional("Failed to create order item"):
                db.session.add(
                    OrderItem(order_id=order_id, product_id=product_id, quantity=quantity, price=price)
                )

    def update_order_status(self, order_id, status):
        with _service_call(f"Failed to update order {order_id}"):
            with transactional("Failed to update order status"):
                Order.query.filter_by(id=order_id).update({"status": status})

    def get_order(self, order_id) -> Optional[Order]:
        with _service_call("Error fetching order"):
            return db.session.get(Order, order_id)

    # ------------------- Stock -------------------
    def decrement_stock(self, product_id, quantity):
        with _service_call(f"Failed to update stock for product {product_id}"):
            with transactional("Failed to decrement stock"):
                product = Product.query.filter(Product.id == product_id, Product.stock > 0).first()
                if product is None:
                    return None
                product.stock = max(0, product.stock - quantity)
                new_stock = product.stock
        return new_stock

    def get_stock(self, product_id) -> Optional[int]:
        with _service_call("Error fetching product stock"):
            row = db.session.query(Product.stock).filter(Product.id == product_id).first()
        return row[0] if row else None

    def set_stock(self, product_id, stock: int) -> None:
        with _service_call("Error updating stock"):
            with transactional("Failed to update stock"):
                Product.query.filter_by(id=product_id).update({"stock": stock})

    # ------------------- Catalog reads -------------------
    def get_product(self, product_id) -> Optional[Product]:
        with _service_call("Error fetching product"):
            return db.session.get(Product, product_id)

    def list_products(self, category_id=None, search=None) -> List[Product]:
        query = Product.query
        if category_id:
            query = query.filter_by(category_id=category_id)
        if search and search.strip():
            query = query.filter(Product.name.ilike(f"%{search.strip()}%"))
        with _service_call("Error fetching products"):
            return query.order_by(Product.id).all()

    def featured_products(self, limit=4) -> List[Product]:
        with _service_call("Error fetching featured products"):
            return Product.query.filter_by(featured=True).order_by(Product.id).limit(limit).all()

    def list_categories(self) -> List[Category]:
        with _service_call("Error fetching categories"):
            return Category.query.order_by(Category.id).all()

    def get_category(self, category_id) -> Optional[Category]:
        with _service_call("Error fetching category"):
            return db.session.get(Category, category_id)

    def product_reviews(self, product_id) -> List[Review]:
        with _service_call("Error fetching reviews"):
            return Review.query.filter_by(product_id=product_id).order_by(Review.created_at.desc()).all()


