import os
import sys
from decimal import Decimal
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from models import db
from models.catalog import Category, Product


@pytest.fixture(scope='session')
def app_instance():
    os.environ.setdefault('APP_ENV', 'testing')
    from app import create_app
    from app.config import TestingConfig
    app = create_app(TestingConfig)
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app

@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()

@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture
def make_product(app):
    """Insert a product and return its id."""

    def _make(name='Headphones', price='49.99', stock=10, featured=False, category=None, image_url=None):
        product = Product(
            name=name,
            price=Decimal(price),
            stock=stock,
            featured=featured,
            category_id=category.id if category else None,
            image_url=image_url,
        )
        db.session.add(product)
        db.session.commit()
        return product.id

    return _make


@pytest.fixture
def make_category(app):
    def _make(name='Electronics', description='Gadgets'):
        category = Category(name=name, description=description)
        db.session.add(category)
        db.session.commit()
        return category

    return _make
