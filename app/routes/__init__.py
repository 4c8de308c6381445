from .catalog import catalog_bp
from .cart import cart_bp
from .checkout import checkout_bp
from .functions import functions_bp


__all__ = [
    'catalog_bp',
    'cart_bp',
    'checkout_bp',
    'functions_bp',
]
