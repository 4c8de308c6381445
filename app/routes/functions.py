"""Standalone function endpoints called directly by the storefront client.

These respond with bare ``{"error": ...}`` bodies rather than the API envelope
and always carry permissive CORS headers.
"""
import logging

from flask import Blueprint, request, jsonify
from werkzeug.exceptions import BadRequest

from app.version import FUNCTIONS_PREFIX
from app.services.errors import ServiceError
from .context import get_catalog_service

functions_bp = Blueprint("functions", __name__, url_prefix=FUNCTIONS_PREFIX)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

logger = logging.getLogger(__name__)


def _json(payload, status=200):
    return jsonify(payload), status, CORS_HEADERS


def _is_whole_number(value):
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


@functions_bp.route(
    "/decrement-stock",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    provide_automatic_options=False,
)
def decrement_stock():
    if request.method == "OPTIONS":
        return "", 200, CORS_HEADERS
    if request.method != "POST":
        return _json({"error": "Method not allowed"}, 405)

    try:
        body = request.get_json(force=True)
    except BadRequest as e:
        return _json({"error": "Internal server error", "details": e.description}, 500)
    if not isinstance(body, dict):
        body = {}

    product_id = body.get("product_id")
    quantity = body.get("quantity")
    if not product_id or not quantity:
        return _json({"error": "Product ID and quantity are required"}, 400)
    if not _is_whole_number(product_id) or not _is_whole_number(quantity):
        return _json({"error": "Product ID and quantity must be numbers"}, 400)
    product_id, quantity = int(product_id), int(quantity)

    service = get_catalog_service()
    try:
        stock = service.get_stock(product_id)
    except ServiceError as e:
        logger.error("Error fetching product stock for %s: %s", product_id, e.detail)
        return _json({"error": "Error fetching product stock", "details": e.detail}, 500)
    if stock is None:
        return _json({"error": "Product not found"}, 404)

    new_stock = max(0, stock - quantity)
    try:
        service.set_stock(product_id, new_stock)
    except ServiceError as e:
        logger.error("Error updating stock for %s: %s", product_id, e.detail)
        return _json({"error": "Error updating stock", "details": e.detail}, 500)

    logger.info({"event": "stock_decremented", "product_id": product_id, "new_stock": new_stock})
    return _json({"success": True, "newStock": new_stock})
