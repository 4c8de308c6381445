import uuid

from flask import current_app, g, request

from app.services.cart_store import LocalCartStore
from app.services.storage import DatabaseStorage


def get_catalog_service():
    return current_app.extensions["catalog_service"]


def reset_cart_context():
    # g outlives a request when an app context is already pushed
    g.pop("cart_session_id", None)
    g.pop("cart_store", None)


def cart_session_id() -> str:
    """Client session id from the configured header, generated on first access."""
    sid = g.get("cart_session_id")
    if sid is None:
        header = current_app.config["CART_SESSION_HEADER"]
        sid = (request.headers.get(header) or uuid.uuid4().hex)[:100]
        g.cart_session_id = sid
    return sid


def get_cart_store() -> LocalCartStore:
    store = g.get("cart_store")
    if store is None:
        store = LocalCartStore(
            DatabaseStorage(namespace=cart_session_id()),
            key=current_app.config["CART_STORAGE_KEY"],
        )
        g.cart_store = store
    return store


def echo_cart_session(resp):
    sid = g.get("cart_session_id")
    if sid:
        resp.headers[current_app.config["CART_SESSION_HEADER"]] = sid
    return resp
