import sys
from pathlib import Path

import pytest

# Ensure the `fellowpet` package is importable when running pytest from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fellowpet.vendors.firestore import Document, FirestoreError  # noqa: E402


class FakeStore:
    """In-memory stand-in for the Firestore client keyed by collection path."""

    def __init__(self, collections=None, fail=False):
        self.collections = collections or {}
        self.fail = fail
        self.calls = []

    def _record(self, *call):
        self.calls.append(call)
        if self.fail:
            raise FirestoreError("store down")

    def query(self, collection, field_path, value, limit=None, order_by=None):
        self._record("query", collection, field_path, value)
        matches = [doc for doc in self.collections.get(collection, []) if doc.data.get(field_path) == value]
        return matches[:limit] if limit is not None else matches

    def query_one(self, collection, field_path, value):
        self._record("query_one", collection, field_path, value)
        for doc in self.collections.get(collection, []):
            if doc.data.get(field_path) == value:
                return doc
        return None

    def list_all(self, collection):
        self._record("list_all", collection)
        return list(self.collections.get(collection, []))

    def get_document(self, collection, doc_id):
        self._record("get_document", collection, doc_id)
        for doc in self.collections.get(collection, []):
            if doc.id == doc_id:
                return doc
        return None

    def list_subcollection(self, collection, doc_id, subcollection):
        path = f"{collection}/{doc_id}/{subcollection}"
        self._record("list_subcollection", path)
        return list(self.collections.get(path, []))


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def doc():
    def _doc(doc_id, **data):
        return Document(id=doc_id, data=data)

    return _doc
