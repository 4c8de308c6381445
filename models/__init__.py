from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()

# Re-export common models for convenience
from .catalog import Category, Product, Review  # noqa: F401,E402
from .customer import Customer  # noqa: F401,E402
from .order import Order, OrderItem  # noqa: F401,E402
from .storage import StoredValue  # noqa: F401,E402
