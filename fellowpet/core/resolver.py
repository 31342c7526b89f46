"""Resolve a URL slug to the service record it names."""

import logging
from typing import Optional

from fellowpet.core.models import ServiceRecord, service_record_from_document
from fellowpet.core.slug import derive_slug, normalize_slug
from fellowpet.core.store import SERVICES_COLLECTION, SLUG_FIELD, DocumentStore
from fellowpet.vendors.firestore import FirestoreError

logger = logging.getLogger(__name__)


class LookupUnavailable(RuntimeError):
    """Raised when the store could not be queried, as opposed to a missing service."""


class SlugResolver:
    """Find a service by its ``seo_slug``, falling back to its shop name.

    Older documents were created before ``seo_slug`` existed, so a miss on
    the indexed field is followed by a scan of the whole collection comparing
    the slug each shop name would have been given. The scan is linear in the
    catalogue size.
    """

    def __init__(self, store: DocumentStore, collection: str = SERVICES_COLLECTION):
        self.store = store
        self.collection = collection

    def resolve(self, slug: str) -> Optional[ServiceRecord]:
        """Return the matching record, or None when no service has this slug."""
        clean_slug = normalize_slug(slug)
        if not clean_slug:
            logger.info("Empty slug requested")
            return None

        try:
            document = self.store.query_one(self.collection, SLUG_FIELD, clean_slug)
            if document is not None:
                logger.debug("Matched %s via %s: %s", clean_slug, SLUG_FIELD, document.id)
                return service_record_from_document(document)

            logger.debug("No %s match for %s, scanning shop names", SLUG_FIELD, clean_slug)
            candidates = self.store.list_all(self.collection)
        except FirestoreError as exc:
            raise LookupUnavailable(f"Unable to look up service {clean_slug!r}: {exc}") from exc

        for candidate in candidates:
            shop_name = candidate.data.get("shop_name") or candidate.data.get("shopName") or ""
            if derive_slug(str(shop_name)) == clean_slug:
                logger.info("Matched %s via shop name fallback: %s", clean_slug, candidate.id)
                return service_record_from_document(candidate)

        logger.info("No service found for slug %s", clean_slug)
        return None
