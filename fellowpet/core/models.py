"""Core data models shared by the directory site."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fellowpet.vendors.firestore import Document

logger = logging.getLogger(__name__)

UNKNOWN_SHOP = "Unknown Shop"
UNKNOWN_AREA = "Unknown Area"
PLACEHOLDER_IMAGE = "/assets/pet_card_placeholder.jpg"


@dataclass(frozen=True, slots=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(slots=True)
class ServiceRecord:
    """One boarding branch as stored in the services collection."""

    service_id: str
    shop_name: str
    seo_slug: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    display: bool = False
    data: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def area_name(self) -> str:
        return _strip_or_none(self.data.get("area_name")) or UNKNOWN_AREA

    @property
    def state(self) -> Optional[str]:
        return _strip_or_none(self.data.get("state"))

    @property
    def district(self) -> Optional[str]:
        return _strip_or_none(self.data.get("district"))

    @property
    def district_slug(self) -> Optional[str]:
        return _strip_or_none(self.data.get("district_slug"))

    @property
    def description(self) -> Optional[str]:
        return _strip_or_none(self.data.get("description"))

    @property
    def pets(self) -> List[str]:
        pets = self.data.get("pets") or []
        return [str(pet) for pet in pets] if isinstance(pets, list) else []

    @property
    def image_urls(self) -> List[str]:
        urls = self.data.get("image_urls") or []
        return [str(url) for url in urls] if isinstance(urls, list) else []

    @property
    def shop_image(self) -> str:
        logo = _strip_or_none(self.data.get("shop_logo"))
        if logo:
            return logo
        return self.image_urls[0] if self.image_urls else PLACEHOLDER_IMAGE

    @property
    def min_price(self) -> float:
        """Lowest advertised per-day price, 0 when the shop has none."""
        explicit = _safe_float(self.data.get("min_price"))
        if explicit is not None and explicit > 0:
            return explicit

        prices: List[float] = []
        standard_prices = self.data.get("pre_calculated_standard_prices") or {}
        if isinstance(standard_prices, dict):
            for per_size in standard_prices.values():
                if not isinstance(per_size, dict):
                    continue
                prices.extend(p for p in map(_safe_float, per_size.values()) if p is not None)
        return min(prices) if prices else 0.0


@dataclass(slots=True)
class RankedCard:
    """Nearest branch of a shop together with its sibling branches."""

    record: ServiceRecord
    distance_km: float
    other_branch_ids: List[str] = field(default_factory=list)

    @property
    def has_distance(self) -> bool:
        return math.isfinite(self.distance_km)


@dataclass(frozen=True, slots=True)
class RatingStats:
    avg: float = 0.0
    count: int = 0


@dataclass(slots=True)
class ServiceDetail:
    """A resolved service with the subcollections its detail page needs."""

    record: ServiceRecord
    pet_information: List[Dict[str, Any]] = field(default_factory=list)
    rating_stats: RatingStats = field(default_factory=RatingStats)


def service_record_from_document(document: Document) -> ServiceRecord:
    """Normalise a services document; missing optional fields never raise."""
    data = dict(document.data)
    # grouping key, kept exactly as entered
    shop_name = str(data.get("shop_name") or data.get("shopName") or UNKNOWN_SHOP)
    coordinates = parse_coordinates(data.get("shop_location"))
    if coordinates is None:
        coordinates = parse_coordinates(data.get("location_geopoint"))

    return ServiceRecord(
        service_id=document.id,
        shop_name=shop_name,
        seo_slug=_strip_or_none(data.get("seo_slug")),
        coordinates=coordinates,
        display=data.get("display") is True,
        data=data,
    )


def valid_coordinates(latitude: float, longitude: float) -> bool:
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0


def parse_coordinates(value: Any) -> Optional[Coordinates]:
    if not isinstance(value, dict):
        return None
    latitude = _safe_float(value.get("latitude"))
    longitude = _safe_float(value.get("longitude"))
    if latitude is None or longitude is None:
        return None
    if not valid_coordinates(latitude, longitude):
        logger.debug("Discarding out-of-range coordinates %s", value)
        return None
    return Coordinates(latitude=latitude, longitude=longitude)


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def _safe_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None
