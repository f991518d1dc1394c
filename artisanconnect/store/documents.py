from __future__ import annotations

import copy
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from .config import DEFAULT_STORE_CONFIG, VENDORS, StoreConfig
from .seed import load_vendor_seed

_collections: dict[str, dict[str, dict[str, Any]]] = {}
_seeded: bool = False
_lock = threading.RLock()


def _ensure_seeded(config: StoreConfig = DEFAULT_STORE_CONFIG) -> None:
    global _seeded
    if _seeded:
        return
    _seeded = True
    if not config.seed_on_first_use:
        return
    vendors = _collections.setdefault(VENDORS, {})
    for doc in load_vendor_seed(config.vendor_seed_csv):
        doc_id = str(doc.pop("id"))
        vendors.setdefault(doc_id, doc)


def get_collection(name: str) -> list[dict[str, Any]]:
    """Return every document in ``name``, each including its ``id``."""
    with _lock:
        _ensure_seeded()
        docs = _collections.get(name, {})
        return [{"id": doc_id, **copy.deepcopy(data)} for doc_id, data in docs.items()]


def get_document(name: str, doc_id: str) -> dict[str, Any] | None:
    with _lock:
        _ensure_seeded()
        data = _collections.get(name, {}).get(doc_id)
        if data is None:
            return None
        return {"id": doc_id, **copy.deepcopy(data)}


def set_document(
    name: str,
    doc_id: str,
    data: dict[str, Any],
    merge: bool = False,
) -> dict[str, Any]:
    """Create or replace a document; with ``merge`` update only the given fields."""
    payload = {k: copy.deepcopy(v) for k, v in data.items() if k != "id"}
    with _lock:
        _ensure_seeded()
        collection = _collections.setdefault(name, {})
        if merge and doc_id in collection:
            collection[doc_id].update(payload)
        else:
            collection[doc_id] = payload
        return {"id": doc_id, **copy.deepcopy(collection[doc_id])}


def add_document(name: str, data: dict[str, Any]) -> str:
    """Insert ``data`` under a generated id and return the id."""
    doc_id = uuid.uuid4().hex[:20]
    set_document(name, doc_id, data)
    return doc_id


def clear_store(reseed: bool = True) -> None:
    """Drop every collection. With ``reseed`` the vendor seed loads again on next access."""
    global _seeded
    with _lock:
        _collections.clear()
        _seeded = not reseed


@contextmanager
def transaction() -> Iterator[None]:
    """Hold the store lock so a read-modify-write sequence runs atomically."""
    with _lock:
        yield
