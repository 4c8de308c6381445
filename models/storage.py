from models import db, BIGINT
from datetime import datetime


class StoredValue(db.Model):
    """One serialized value per client namespace and key."""

    __tablename__ = "stored_value"
    __table_args__ = (
        db.UniqueConstraint("namespace", "key", name="uq_stored_value_namespace_key"),
    )

    id = db.Column(BIGINT, primary_key=True)
    namespace = db.Column(db.String(100), nullable=False)
    key = db.Column(db.String(100), nullable=False)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
