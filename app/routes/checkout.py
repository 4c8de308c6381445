from flask import Blueprint, current_app, request, jsonify
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.utils import error, validate_schema
from app.schemas.checkout import CheckoutRequest
from app.services.checkout import CheckoutWorkflow
from app.services.errors import EmptyCart, OrderSubmissionError
from .context import get_cart_store, get_catalog_service, echo_cart_session

checkout_bp = Blueprint("checkout", __name__, url_prefix=API_PREFIX)
checkout_bp.after_request(echo_cart_session)


@checkout_bp.route("/checkout", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["CHECKOUT_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many checkout attempts, please slow down",
)
@validate_schema(CheckoutRequest)
def submit_checkout():
    workflow = CheckoutWorkflow(get_cart_store(), get_catalog_service())
    try:
        result = workflow.submit(request.validated_data)
    except EmptyCart as e:
        return error(str(e), status=400, redirect=e.redirect)
    except OrderSubmissionError as e:
        return error(str(e), status=502)
    return jsonify({
        "status": "success",
        "message": result.message,
        "order_id": result.order_id,
        "customer_id": result.customer_id,
        "totals": result.totals.display(),
        "redirect": result.redirect,
    }), 201


# ------------------- Order confirmation -------------------
@checkout_bp.route("/orders/<int:order_id>", methods=["GET"])
def get_order(order_id):
    order = get_catalog_service().get_order(order_id)
    if not order:
        return error("Order not found", status=404)
    return jsonify({"status": "success", "order": order.to_dict()}), 200
