"""Load everything a service detail page shows."""

import logging
from typing import List, Optional

from fellowpet.core.models import RatingStats, ServiceDetail
from fellowpet.core.resolver import LookupUnavailable, SlugResolver
from fellowpet.core.store import (
    PET_INFORMATION_SUBCOLLECTION,
    REVIEWS_PARENT,
    REVIEWS_SUBCOLLECTION,
    SERVICES_COLLECTION,
    DocumentStore,
)
from fellowpet.vendors.firestore import FirestoreError

logger = logging.getLogger(__name__)

MAX_RATING = 5.0


def compute_rating_stats(ratings: List[object]) -> RatingStats:
    valid: List[float] = []
    for rating in ratings:
        if isinstance(rating, bool) or not isinstance(rating, (int, float)):
            continue
        if rating > 0:
            valid.append(float(rating))
    if not valid:
        return RatingStats()
    avg = sum(valid) / len(valid)
    return RatingStats(avg=max(0.0, min(MAX_RATING, avg)), count=len(valid))


def fetch_rating_stats(store: DocumentStore, service_id: str) -> RatingStats:
    """Average of the positive ratings in a service's public reviews."""
    reviews = store.list_subcollection(REVIEWS_PARENT, service_id, REVIEWS_SUBCOLLECTION)
    return compute_rating_stats([review.data.get("rating") for review in reviews])


def load_service_detail(store: DocumentStore, slug: str) -> Optional[ServiceDetail]:
    """Resolve a slug and attach pet information and rating stats.

    Returns None when no service matches; raises LookupUnavailable when the
    store fails at any step.
    """
    record = SlugResolver(store).resolve(slug)
    if record is None:
        return None

    try:
        pet_docs = store.list_subcollection(SERVICES_COLLECTION, record.service_id, PET_INFORMATION_SUBCOLLECTION)
        rating_stats = fetch_rating_stats(store, record.service_id)
    except FirestoreError as exc:
        raise LookupUnavailable(f"Unable to load details for {record.service_id}: {exc}") from exc

    pet_information = [{"id": doc.id, **doc.data} for doc in pet_docs]
    logger.debug(
        "Loaded %s with %d pet entries and %d ratings",
        record.service_id,
        len(pet_information),
        rating_stats.count,
    )
    return ServiceDetail(record=record, pet_information=pet_information, rating_stats=rating_stats)
