"""Document store access shared by the site."""

import logging
from typing import Any, List, Optional, Protocol

from fellowpet.core.config import get_settings
from fellowpet.vendors.firestore import Document, FirestoreClient

logger = logging.getLogger(__name__)

SERVICES_COLLECTION = "users-sp-boarding"
PET_INFORMATION_SUBCOLLECTION = "pet_information"
REVIEWS_PARENT = "public_review/service_providers/sps"
REVIEWS_SUBCOLLECTION = "reviews"
DISPLAY_FIELD = "display"
SLUG_FIELD = "seo_slug"

_store: Optional[FirestoreClient] = None


class DocumentStore(Protocol):
    def query_one(self, collection: str, field_path: str, value: Any) -> Optional[Document]: ...

    def query(
        self,
        collection: str,
        field_path: str,
        value: Any,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
    ) -> List[Document]: ...

    def list_all(self, collection: str) -> List[Document]: ...

    def get_document(self, collection: str, doc_id: str) -> Optional[Document]: ...

    def list_subcollection(self, collection: str, doc_id: str, subcollection: str) -> List[Document]: ...


def get_store() -> FirestoreClient:
    """Initialise and return the shared Firestore client."""
    global _store
    if _store is None:
        settings = get_settings()
        _store = FirestoreClient(
            project_id=settings.firebase_project_id,
            database=settings.firestore_database,
            emulator_host=settings.firestore_emulator_host,
        )
        logger.info(
            "Firestore client initialised for project %s%s",
            settings.firebase_project_id,
            " (emulator)" if settings.firestore_emulator_host else "",
        )
    return _store


def fetch_display_eligible(store: DocumentStore, limit: int) -> List[Document]:
    """Snapshot of service branches flagged for public display."""
    documents = store.query(SERVICES_COLLECTION, DISPLAY_FIELD, True, limit=limit)
    logger.debug("Fetched %d display-eligible services", len(documents))
    return documents
