"""Shape ranked cards into the props the listing templates and API render."""

import logging
from typing import Any, Dict, Optional

from fellowpet.core.details import fetch_rating_stats
from fellowpet.core.models import RankedCard, RatingStats, ServiceRecord
from fellowpet.core.slug import derive_slug, location_segment
from fellowpet.core.store import DocumentStore
from fellowpet.vendors.firestore import FirestoreError

logger = logging.getLogger(__name__)

COUNTRY_SEGMENT = "india"
SERVICE_TYPE_SEGMENT = "boarding"
MAX_CARD_PETS = 3


def listing_root() -> str:
    return f"/{COUNTRY_SEGMENT}/{SERVICE_TYPE_SEGMENT}"


def service_slug(record: ServiceRecord) -> str:
    """The slug links should use; derived slugs resolve through the name fallback."""
    shop_name = record.data.get("shop_name") or record.data.get("shopName") or ""
    return record.seo_slug or derive_slug(str(shop_name)) or "unknown"


def service_path(record: ServiceRecord) -> str:
    """Site-relative detail URL: /india/boarding/{state}/{district}/{area}/{slug}."""
    state = location_segment(record.state or "")
    district = record.district_slug or location_segment(record.district or "")
    area = location_segment(record.data.get("area_name") or "")
    return f"{listing_root()}/{state}/{district}/{area}/{service_slug(record)}"


def safe_rating_stats(store: DocumentStore, service_id: str) -> RatingStats:
    """Card ratings are decorative, so a failed fetch shows as unrated."""
    try:
        return fetch_rating_stats(store, service_id)
    except FirestoreError as exc:
        logger.warning("Failed to fetch ratings for %s: %s", service_id, exc)
        return RatingStats()


def to_card_props(card: RankedCard, rating_stats: Optional[RatingStats] = None) -> Dict[str, Any]:
    record = card.record
    stats = rating_stats or RatingStats()
    data = record.data
    return {
        "service_id": record.service_id,
        "shop_name": record.shop_name,
        "area_name": record.area_name,
        "shop_image": record.shop_image,
        "pets": record.pets[:MAX_CARD_PETS],
        "min_price": record.min_price,
        "distance_km": card.distance_km if card.has_distance else None,
        "other_branches": list(card.other_branch_ids),
        "run_type": data.get("runType") or "Standard",
        "is_offer_active": bool(data.get("isOfferActive")),
        "is_certified": bool(data.get("isCertified")),
        "is_admin_approved": bool(data.get("isAdminApproved")),
        "rating_avg": round(stats.avg, 1),
        "rating_count": stats.count,
        "path": service_path(record),
    }
