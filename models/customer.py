from models import db, BIGINT
from datetime import datetime


class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(BIGINT, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(30), nullable=True)
    address = db.Column(db.String(500), nullable=True)  # "street, city, ST zip"
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
