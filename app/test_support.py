import logging

from flask import Blueprint, request
from app.utils.responses import ok

test_support_bp = Blueprint("test_support_bp", __name__)


@test_support_bp.route("/__ok", methods=["GET"])
def __ok():
    return ok({"ping": "pong"})


@test_support_bp.route("/__boom", methods=["GET"])
def __boom():
    raise RuntimeError("boom")


@test_support_bp.route("/__log", methods=["GET"])
def __log():
    logging.getLogger(__name__).info("test log line")
    return ok({"logged": True})


@test_support_bp.route("/__log_customer", methods=["POST"])
def __log_customer():
    logging.getLogger("storefront.test").info(request.get_json() or {})
    return ok({"logged": True})
