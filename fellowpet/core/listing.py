"""Nearby listing: eligible snapshot in, ranked shop cards out."""

import logging
from typing import List

from fellowpet.core.models import Location, RankedCard, service_record_from_document
from fellowpet.core.ranking import rank
from fellowpet.core.store import DocumentStore, fetch_display_eligible

logger = logging.getLogger(__name__)


def nearby_cards(store: DocumentStore, location: Location, limit: int) -> List[RankedCard]:
    documents = fetch_display_eligible(store, limit)
    records = [service_record_from_document(document) for document in documents]
    cards = rank(location, records)
    logger.info(
        "Ranked %d branches into %d cards near (%.4f, %.4f)",
        len(records),
        len(cards),
        location.latitude,
        location.longitude,
    )
    return cards
