from models import db, BIGINT
from datetime import datetime


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(255), nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "image_url": self.image_url,
        }


class Product(db.Model):
    __tablename__ = "products"
    __table_args__ = (
        db.Index("ix_products_category_featured", "category_id", "featured"),
    )

    id = db.Column(BIGINT, primary_key=True)
    category_id = db.Column(BIGINT, db.ForeignKey("categories.id"), nullable=True)

    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    stock = db.Column(db.Integer, nullable=False, default=0)
    image_url = db.Column(db.String(255), nullable=True)
    featured = db.Column(db.Boolean, default=False)
    rating = db.Column(db.Float, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    category = db.relationship("Category", backref=db.backref("products", lazy=True))

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": float(self.price),
            "stock": self.stock,
            "image_url": self.image_url,
            "category_id": self.category_id,
            "featured": bool(self.featured),
            "rating": self.rating,
        }


class Review(db.Model):
    __tablename__ = "reviews"

    id = db.Column(BIGINT, primary_key=True)
    product_id = db.Column(BIGINT, db.ForeignKey("products.id"), nullable=False)
    customer_id = db.Column(BIGINT, db.ForeignKey("customers.id"), nullable=True)
    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "customer_id": self.customer_id,
            "rating": self.rating,
            "comment": self.comment,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
