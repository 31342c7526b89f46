"""Client utilities for the Cloud Firestore REST API.

Only the read operations the site needs are implemented: fetching a single
document, listing a (sub)collection and running an equality query. Firestore's
typed JSON values are decoded into plain Python objects so callers never see
the wire representation.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import google.auth
import google.auth.exceptions
import google.auth.transport.requests
import requests

logger = logging.getLogger(__name__)

_BASE_URL = "https://firestore.googleapis.com/v1"
_SCOPES = ["https://www.googleapis.com/auth/datastore"]
_PAGE_SIZE = 300


class FirestoreError(RuntimeError):
    """Raised when Firestore cannot be reached or rejects a request."""


@dataclass(frozen=True)
class Document:
    id: str
    data: Dict[str, Any] = field(default_factory=dict)


def decode_value(value: Dict[str, Any]) -> Any:
    """Convert one Firestore typed value into its Python equivalent."""
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    for key in ("stringValue", "timestampValue", "referenceValue", "bytesValue"):
        if key in value:
            return value[key]
    if "geoPointValue" in value:
        # zero coordinates are omitted from the JSON encoding
        point = value["geoPointValue"] or {}
        return {
            "latitude": float(point.get("latitude", 0.0)),
            "longitude": float(point.get("longitude", 0.0)),
        }
    if "arrayValue" in value:
        return [decode_value(item) for item in (value["arrayValue"] or {}).get("values", [])]
    if "mapValue" in value:
        return decode_fields((value["mapValue"] or {}).get("fields", {}))
    logger.debug("Unsupported Firestore value type: %s", list(value.keys()))
    return None


def decode_fields(fields: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {name: decode_value(raw) for name, raw in (fields or {}).items()}


def encode_value(value: Any) -> Dict[str, Any]:
    """Convert a Python value into a Firestore typed value for query filters."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(item) for item in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": {k: encode_value(v) for k, v in value.items()}}}
    raise TypeError(f"Cannot encode {type(value).__name__} as a Firestore value")


def parse_document(raw: Dict[str, Any]) -> Document:
    name = raw.get("name", "")
    return Document(id=name.rsplit("/", 1)[-1], data=decode_fields(raw.get("fields")))


class FirestoreClient:
    """Read-only Firestore access over REST.

    Uses Application Default Credentials unless an emulator host is given,
    in which case the emulator's ``owner`` bearer token is sent instead.
    """

    def __init__(
        self,
        project_id: str,
        database: str = "(default)",
        emulator_host: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        if not project_id:
            raise FirestoreError("FIREBASE_PROJECT_ID is required for Firestore access")
        self.project_id = project_id
        self.emulator_host = emulator_host
        self.timeout = timeout
        self._session = session or requests.Session()
        self._credentials = None
        root = f"http://{emulator_host}/v1" if emulator_host else _BASE_URL
        self._documents_url = f"{root}/projects/{project_id}/databases/{database}/documents"

    def _get_access_token(self) -> str:
        try:
            if self._credentials is None:
                self._credentials, _ = google.auth.default(scopes=_SCOPES)
            if not self._credentials.valid:
                self._credentials.refresh(google.auth.transport.requests.Request())
        except google.auth.exceptions.GoogleAuthError as exc:
            raise FirestoreError(f"Unable to obtain Firestore credentials: {exc}") from exc
        return self._credentials.token

    def _headers(self) -> Dict[str, str]:
        if self.emulator_host:
            return {"Authorization": "Bearer owner"}
        return {"Authorization": f"Bearer {self._get_access_token()}"}

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        try:
            return self._session.get(url, params=params, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Firestore GET %s failed: %s", url, exc)
            raise FirestoreError(str(exc)) from exc

    def _post(self, url: str, payload: Dict[str, Any]) -> requests.Response:
        try:
            return self._session.post(url, json=payload, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Firestore POST %s failed: %s", url, exc)
            raise FirestoreError(str(exc)) from exc

    @staticmethod
    def _check(response: requests.Response, operation: str) -> None:
        if response.status_code >= 400:
            logger.error(
                "%s failed: status=%s, body=%s", operation, response.status_code, response.text[:300]
            )
            raise FirestoreError(f"{operation} returned HTTP {response.status_code}")

    def get_document(self, collection: str, doc_id: str) -> Optional[Document]:
        response = self._get(f"{self._documents_url}/{collection}/{doc_id}")
        if response.status_code == 404:
            return None
        self._check(response, "get_document")
        return parse_document(response.json())

    def list_all(self, collection: str) -> List[Document]:
        """Return every document of a collection path, following page tokens."""
        documents: List[Document] = []
        page_token = None
        while True:
            params: Dict[str, Any] = {"pageSize": _PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token
            response = self._get(f"{self._documents_url}/{collection}", params=params)
            self._check(response, "list_documents")
            payload = response.json()
            documents.extend(parse_document(raw) for raw in payload.get("documents", []))
            page_token = payload.get("nextPageToken")
            if not page_token:
                break
        logger.debug("Listed %d documents from %s", len(documents), collection)
        return documents

    def list_subcollection(self, collection: str, doc_id: str, subcollection: str) -> List[Document]:
        return self.list_all(f"{collection}/{doc_id}/{subcollection}")

    def query(
        self,
        collection: str,
        field_path: str,
        value: Any,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
    ) -> List[Document]:
        """Run an equality query against a collection path."""
        parent, _, collection_id = collection.rpartition("/")
        parent_url = f"{self._documents_url}/{parent}" if parent else self._documents_url

        structured_query: Dict[str, Any] = {
            "from": [{"collectionId": collection_id}],
            "where": {
                "fieldFilter": {
                    "field": {"fieldPath": field_path},
                    "op": "EQUAL",
                    "value": encode_value(value),
                }
            },
        }
        if order_by:
            structured_query["orderBy"] = [{"field": {"fieldPath": order_by}, "direction": "ASCENDING"}]
        if limit is not None:
            structured_query["limit"] = limit

        response = self._post(f"{parent_url}:runQuery", {"structuredQuery": structured_query})
        self._check(response, "run_query")
        # entries without a document only carry readTime
        return [parse_document(entry["document"]) for entry in response.json() if entry.get("document")]

    def query_one(self, collection: str, field_path: str, value: Any) -> Optional[Document]:
        results = self.query(collection, field_path, value, limit=1)
        return results[0] if results else None
