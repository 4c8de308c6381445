from flask import Blueprint, request, jsonify
from app.version import API_PREFIX
from app.utils import error, validate_schema
from app.schemas.cart import AddCartItemRequest, UpdateCartItemRequest
from app.services.cart import CartService
from app.services.errors import ValidationError
from .context import get_cart_store, get_catalog_service, echo_cart_session

cart_bp = Blueprint("cart", __name__, url_prefix=f"{API_PREFIX}/cart")
cart_bp.after_request(echo_cart_session)


def _cart_response(notice=None, status=200):
    payload = {"status": "success", "cart": CartService(get_cart_store()).summary()}
    if notice is not None:
        payload["notice"] = {"level": notice.level, "message": notice.message}
        payload["message"] = notice.message
    return jsonify(payload), status


@cart_bp.route("", methods=["GET"])
def view_cart():
    return _cart_response()


@cart_bp.route("/items", methods=["POST"])
@validate_schema(AddCartItemRequest)
def add_item():
    data = request.validated_data
    product = get_catalog_service().get_product(data.product_id)
    if not product:
        return error("Product not found", status=404)
    try:
        notice = CartService(get_cart_store()).add_item(product, data.quantity)
    except ValidationError as e:
        return error(str(e), status=400)
    return _cart_response(notice)


@cart_bp.route("/items/<int:product_id>", methods=["PATCH"])
@validate_schema(UpdateCartItemRequest)
def update_item(product_id):
    data = request.validated_data
    try:
        notice = CartService(get_cart_store()).update_quantity(product_id, data.quantity)
    except ValidationError as e:
        return error(str(e), status=400)
    return _cart_response(notice)


@cart_bp.route("/items/<int:product_id>", methods=["DELETE"])
def remove_item(product_id):
    notice = CartService(get_cart_store()).remove_item(product_id)
    return _cart_response(notice)


@cart_bp.route("", methods=["DELETE"])
def clear_cart():
    notice = CartService(get_cart_store()).clear_cart()
    return _cart_response(notice)
