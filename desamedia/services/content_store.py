"""
Akses ke document store (Firestore).

Semua halaman dan dashboard hanya memakai operasi di `ContentStore`:
get / add / set / update / delete / query / increment. `MemoryContentStore`
punya kontrak yang sama dan dipakai untuk development lokal dan test.
"""

import copy
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from firebase_admin import firestore
from google.api_core import exceptions as gexc
from google.cloud.firestore_v1.base_query import FieldFilter

from desamedia.errors import CollaboratorUnavailable, NotFound, QueryPreconditionFailed

logger = logging.getLogger(__name__)

ARTICLES = "articles"
USERS = "users"
CATEGORIES = "categories"


class _ServerTime:
    """Penanda: isi field dengan waktu server saat ditulis."""

    def __repr__(self):
        return "SERVER_TIME"


SERVER_TIME = _ServerTime()


class ContentStore(ABC):
    @abstractmethod
    def get(self, collection: str, doc_id: str) -> dict | None:
        raise NotImplementedError

    @abstractmethod
    def add(self, collection: str, data: dict) -> str:
        raise NotImplementedError

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: dict, merge: bool = True) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, collection: str, doc_id: str, data: dict) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def query(self, collection, where=None, order_by=None, descending=False, limit=None) -> list[tuple[str, dict]]:
        raise NotImplementedError

    @abstractmethod
    def increment(self, collection: str, doc_id: str, field: str, amount: int = 1, stamp_field: str | None = None) -> None:
        raise NotImplementedError


# =========================
# FIRESTORE
# =========================
class FirestoreContentStore(ContentStore):
    def __init__(self, client=None):
        try:
            self.client = client or firestore.client()
        except ValueError as e:
            # firebase_admin belum di-initialize_app
            raise CollaboratorUnavailable("Firestore belum diinisialisasi") from e

    def _resolve(self, data: dict) -> dict:
        return {
            k: (firestore.SERVER_TIMESTAMP if v is SERVER_TIME else v)
            for k, v in data.items()
        }

    def _call(self, fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except gexc.FailedPrecondition as e:
            raise QueryPreconditionFailed(str(e)) from e
        except gexc.NotFound as e:
            raise NotFound() from e
        except gexc.GoogleAPIError as e:
            logger.error("Firestore error: %s", e)
            raise CollaboratorUnavailable() from e

    def get(self, collection, doc_id):
        snap = self._call(self.client.collection(collection).document(doc_id).get)
        return snap.to_dict() if snap.exists else None

    def add(self, collection, data):
        _, ref = self._call(self.client.collection(collection).add, self._resolve(data))
        return ref.id

    def set(self, collection, doc_id, data, merge=True):
        ref = self.client.collection(collection).document(doc_id)
        self._call(ref.set, self._resolve(data), merge=merge)

    def update(self, collection, doc_id, data):
        ref = self.client.collection(collection).document(doc_id)
        self._call(ref.update, self._resolve(data))

    def delete(self, collection, doc_id):
        self._call(self.client.collection(collection).document(doc_id).delete)

    def query(self, collection, where=None, order_by=None, descending=False, limit=None):
        q = self.client.collection(collection)
        for field, op, value in where or []:
            q = q.where(filter=FieldFilter(field, op, value))
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            q = q.order_by(order_by, direction=direction)
        if limit:
            q = q.limit(limit)

        docs = self._call(lambda: list(q.stream()))
        return [(d.id, d.to_dict()) for d in docs]

    def increment(self, collection, doc_id, field, amount=1, stamp_field=None):
        data = {field: firestore.Increment(amount)}
        if stamp_field:
            data[stamp_field] = firestore.SERVER_TIMESTAMP
        ref = self.client.collection(collection).document(doc_id)
        self._call(ref.update, data)


# =========================
# MEMORY
# =========================
_OPERATORS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "in": lambda a, b: a in b,
    "array_contains": lambda a, b: b in (a or []),
}


class MemoryContentStore(ContentStore):
    """
    Store di memori proses.

    `missing_indexes` berisi nama collection yang query ber-filter + order_by-nya
    ditolak, seperti Firestore saat composite index belum dibuat.
    """

    def __init__(self, missing_indexes=None, clock=None):
        self._collections: dict[str, dict[str, dict]] = {}
        self._lock = threading.Lock()
        self.missing_indexes = set(missing_indexes or [])
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _docs(self, collection):
        return self._collections.setdefault(collection, {})

    def _resolve(self, data):
        now = self._clock()
        return {k: (now if v is SERVER_TIME else copy.deepcopy(v)) for k, v in data.items()}

    def get(self, collection, doc_id):
        with self._lock:
            doc = self._docs(collection).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def add(self, collection, data):
        doc_id = uuid.uuid4().hex[:20]
        with self._lock:
            self._docs(collection)[doc_id] = self._resolve(data)
        return doc_id

    def set(self, collection, doc_id, data, merge=True):
        with self._lock:
            docs = self._docs(collection)
            if merge and doc_id in docs:
                docs[doc_id].update(self._resolve(data))
            else:
                docs[doc_id] = self._resolve(data)

    def update(self, collection, doc_id, data):
        with self._lock:
            docs = self._docs(collection)
            if doc_id not in docs:
                raise NotFound()
            docs[doc_id].update(self._resolve(data))

    def delete(self, collection, doc_id):
        with self._lock:
            self._docs(collection).pop(doc_id, None)

    def query(self, collection, where=None, order_by=None, descending=False, limit=None):
        if order_by and where and collection in self.missing_indexes:
            raise QueryPreconditionFailed(f"Index untuk {collection}.{order_by} belum dibuat")

        with self._lock:
            rows = [(doc_id, copy.deepcopy(data)) for doc_id, data in self._docs(collection).items()]

        for field, op, value in where or []:
            check = _OPERATORS[op]
            rows = [(i, d) for i, d in rows if check(d.get(field), value)]

        if order_by:
            present = [(i, d) for i, d in rows if d.get(order_by) is not None]
            # Firestore tidak mengembalikan dokumen yang tidak punya field order_by
            rows = sorted(present, key=lambda row: row[1][order_by], reverse=descending)

        if limit:
            rows = rows[:limit]
        return rows

    def increment(self, collection, doc_id, field, amount=1, stamp_field=None):
        with self._lock:
            doc = self._docs(collection).get(doc_id)
            if doc is None:
                raise NotFound()
            doc[field] = (doc.get(field) or 0) + amount
            if stamp_field:
                doc[stamp_field] = self._clock()


def build_content_store(config) -> ContentStore:
    backend = config.get("CONTENT_STORE", "firestore")
    if backend == "memory":
        logger.info("Memakai MemoryContentStore")
        return MemoryContentStore()
    return FirestoreContentStore()
