from app.routes import (
    catalog_bp,
    cart_bp,
    checkout_bp,
    functions_bp,
)
from app.routes.context import reset_cart_context


def register_api_v1(app):
    """Register blueprint routes under the API and function prefixes."""
    app.before_request(reset_cart_context)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(checkout_bp)
    app.register_blueprint(functions_bp)
