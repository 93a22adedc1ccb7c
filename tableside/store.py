"""
Project: Tableside
Description:
Document repositories standing in for a database. Every resource gets a
repository keyed by id; the in-memory flavour is the default and the SQL
flavour keeps the same documents in a `records` table.
"""

import copy
import logging
import threading
from collections import OrderedDict

from flask import current_app

from .models import Record, db

log = logging.getLogger(__name__)

COLLECTIONS = (
    "users",
    "venues",
    "categories",
    "products",
    "orders",
    "tables",
    "staff",
    "service_requests",
    "payments",
)

EXTENSION_KEY = "tableside.store"


class Repository:
    """Interface shared by the repository backends. Documents are plain dicts with an "id"."""

    def list(self):
        raise NotImplementedError

    def get(self, doc_id):
        raise NotImplementedError

    def add(self, doc):
        raise NotImplementedError

    def save(self, doc):
        raise NotImplementedError

    def delete(self, doc_id):
        raise NotImplementedError

    def clear(self):
        raise NotImplementedError

    def find(self, predicate):
        return next((d for d in self.list() if predicate(d)), None)

    def filter(self, predicate):
        return [d for d in self.list() if predicate(d)]

    def __len__(self):
        return len(self.list())


class MemoryRepository(Repository):
    def __init__(self):
        self._docs = OrderedDict()

    def list(self):
        return [copy.deepcopy(d) for d in self._docs.values()]

    def get(self, doc_id):
        doc = self._docs.get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def add(self, doc):
        if doc["id"] in self._docs:
            raise KeyError(f"duplicate id {doc['id']}")
        self._docs[doc["id"]] = copy.deepcopy(doc)
        return copy.deepcopy(doc)

    def save(self, doc):
        self._docs[doc["id"]] = copy.deepcopy(doc)
        return copy.deepcopy(doc)

    def delete(self, doc_id):
        return self._docs.pop(doc_id, None) is not None

    def clear(self):
        self._docs.clear()

    def __len__(self):
        return len(self._docs)


class SqlRepository(Repository):
    def __init__(self, kind):
        self.kind = kind

    def _row(self, doc_id):
        return db.session.get(Record, (self.kind, doc_id))

    def list(self):
        rows = Record.query.filter_by(kind=self.kind).order_by(Record.position).all()
        return [r.to_dict() for r in rows]

    def get(self, doc_id):
        row = self._row(doc_id)
        return row.to_dict() if row else None

    def add(self, doc):
        if self._row(doc["id"]) is not None:
            raise KeyError(f"duplicate id {doc['id']}")
        position = Record.query.filter_by(kind=self.kind).count()
        db.session.add(Record(kind=self.kind, id=doc["id"], position=position, payload=copy.deepcopy(doc)))
        db.session.commit()
        return copy.deepcopy(doc)

    def save(self, doc):
        row = self._row(doc["id"])
        if row is None:
            return self.add(doc)
        # reassign so the JSON column is flagged dirty
        row.payload = copy.deepcopy(doc)
        db.session.commit()
        return copy.deepcopy(doc)

    def delete(self, doc_id):
        row = self._row(doc_id)
        if row is None:
            return False
        db.session.delete(row)
        db.session.commit()
        return True

    def clear(self):
        Record.query.filter_by(kind=self.kind).delete()
        db.session.commit()

    def __len__(self):
        return Record.query.filter_by(kind=self.kind).count()


class Store:
    """All repositories of one application plus the lock guarding read-modify-write updates."""

    def __init__(self, factory):
        for name in COLLECTIONS:
            setattr(self, name, factory(name))
        self.lock = threading.RLock()

    def next_order_number(self):
        with self.lock:
            return f"ORD-{len(self.orders) + 1:03d}"

    def clear(self):
        for name in COLLECTIONS:
            getattr(self, name).clear()


def memory_store():
    return Store(lambda name: MemoryRepository())


def sql_store():
    return Store(SqlRepository)


def init_store(app):
    backend = app.config.get("STORE_BACKEND", "memory")
    if backend == "sql":
        with app.app_context():
            db.create_all()
        store = sql_store()
    elif backend == "memory":
        store = memory_store()
    else:
        raise ValueError(f"unknown STORE_BACKEND {backend!r}")
    app.extensions[EXTENSION_KEY] = store
    log.info("Using %s store", backend)
    return store


def get_store():
    return current_app.extensions[EXTENSION_KEY]
