from flask import Blueprint, current_app, request, jsonify
from app.version import API_PREFIX
from app.utils import error
from .context import get_catalog_service

catalog_bp = Blueprint("catalog", __name__, url_prefix=API_PREFIX)


# ------------------- Categories -------------------
@catalog_bp.route("/categories", methods=["GET"])
def list_categories():
    categories = get_catalog_service().list_categories()
    return jsonify({"status": "success", "categories": [c.to_dict() for c in categories]}), 200


@catalog_bp.route("/categories/<int:category_id>", methods=["GET"])
def get_category(category_id):
    service = get_catalog_service()
    category = service.get_category(category_id)
    if not category:
        return error("Category not found", status=404)
    products = service.list_products(category_id=category_id)
    return jsonify({
        "status": "success",
        "category": category.to_dict(),
        "products": [p.to_dict() for p in products],
    }), 200


# ------------------- Products -------------------
@catalog_bp.route("/products", methods=["GET"])
def list_products():
    """List products, optionally filtered by ``category`` id and a ``q`` name search."""
    category_id = request.args.get("category", type=int)
    search = request.args.get("q", "")
    products = get_catalog_service().list_products(category_id=category_id, search=search)
    return jsonify({"status": "success", "products": [p.to_dict() for p in products]}), 200


@catalog_bp.route("/products/featured", methods=["GET"])
def featured_products():
    limit = current_app.config["FEATURED_PRODUCTS_LIMIT"]
    products = get_catalog_service().featured_products(limit=limit)
    return jsonify({"status": "success", "products": [p.to_dict() for p in products]}), 200


@catalog_bp.route("/products/<int:product_id>", methods=["GET"])
def get_product(product_id):
    service = get_catalog_service()
    product = service.get_product(product_id)
    if not product:
        return error("Product not found", status=404)
    reviews = service.product_reviews(product_id)
    data = product.to_dict()
    data["category"] = {"name": product.category.name} if product.category else None
    return jsonify({
        "status": "success",
        "product": data,
        "reviews": [r.to_dict() for r in reviews],
    }), 200
