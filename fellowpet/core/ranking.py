"""Group service branches by shop and rank shops by distance from the caller."""

import logging
from typing import Dict, Iterable, List, Tuple

from fellowpet.core.geo import UNKNOWN_DISTANCE, distance_km
from fellowpet.core.models import Location, RankedCard, ServiceRecord

logger = logging.getLogger(__name__)


def rank(caller_location: Location, records: Iterable[ServiceRecord]) -> List[RankedCard]:
    """Return one card per shop, nearest shop first.

    The nearest branch of each shop represents it; the remaining branches are
    listed by id in increasing distance. Branches without coordinates get
    UNKNOWN_DISTANCE and therefore sort after every located branch. Equal
    distances keep the input order of the records involved.
    """
    groups: Dict[str, List[Tuple[float, int, ServiceRecord]]] = {}
    for position, record in enumerate(records):
        distance = distance_km(caller_location, record.coordinates)
        if distance == UNKNOWN_DISTANCE:
            logger.debug("Service %s has no usable coordinates", record.service_id)
        groups.setdefault(record.shop_name, []).append((distance, position, record))

    representatives: List[Tuple[float, int, RankedCard]] = []
    for branches in groups.values():
        branches.sort(key=lambda item: (item[0], item[1]))
        distance, position, nearest = branches[0]
        card = RankedCard(
            record=nearest,
            distance_km=distance,
            other_branch_ids=[branch.service_id for _, _, branch in branches[1:]],
        )
        representatives.append((distance, position, card))

    representatives.sort(key=lambda item: (item[0], item[1]))
    return [card for _, _, card in representatives]
