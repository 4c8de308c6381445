"""Key-value storage backends for client-owned state such as the cart.

Every backend is scoped to a single namespace (one client session) and stores
plain strings, so callers own their own serialization.
"""
import logging
from typing import Dict, Optional

from models import db
from models.storage import StoredValue
from app.utils.db import transactional


class KeyValueStorage:
    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key):
        return self._data.get(key)

    def set_item(self, key, value):
        self._data[key] = value

    def remove_item(self, key):
        self._data.pop(key, None)


class DatabaseStorage(KeyValueStorage):
    """Stores each key as one ``StoredValue`` row; writes commit immediately."""

    def __init__(self, namespace: str):
        self.namespace = namespace

    def _row(self, key):
        return StoredValue.query.filter_by(namespace=self.namespace, key=key).first()

    def get_item(self, key):
        row = self._row(key)
        return row.value if row else None

    def set_item(self, key, value):
        with transactional(f"Failed to store {key!r}"):
            row = self._row(key)
            if row:
                row.value = value
            else:
                db.session.add(StoredValue(namespace=self.namespace, key=key, value=value))

    def remove_item(self, key):
        with transactional(f"Failed to remove {key!r}"):
            StoredValue.query.filter_by(namespace=self.namespace, key=key).delete()
        logging.debug("storage key %s removed for %s", key, self.namespace)
