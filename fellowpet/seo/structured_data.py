"""schema.org JSON-LD blocks embedded in service detail pages."""

import json
from typing import Any, Dict, List, Optional

from fellowpet.core.models import ServiceDetail
from fellowpet.core.slug import location_segment
from fellowpet.presentation.cards import listing_root, service_path, service_slug
from fellowpet.presentation.pricing import format_price
from fellowpet.seo.metadata import display_name

SCHEMA_CONTEXT = "https://schema.org"


def _compact(value: Any) -> Any:
    """Drop keys whose value is None, recursively."""
    if isinstance(value, dict):
        return {k: _compact(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_compact(v) for v in value]
    return value


def local_business(detail: ServiceDetail, base_url: str) -> Dict[str, Any]:
    record = detail.record
    data = record.data
    geo = None
    if record.coordinates is not None:
        geo = {
            "@type": "GeoCoordinates",
            "latitude": record.coordinates.latitude,
            "longitude": record.coordinates.longitude,
        }
    return _compact(
        {
            "@context": SCHEMA_CONTEXT,
            "@type": "LocalBusiness",
            "@id": f"{base_url}/{service_slug(record)}",
            "name": display_name(detail),
            "description": record.description,
            "image": data.get("shop_logo") or (record.image_urls[0] if record.image_urls else None),
            "url": f"{base_url}{service_path(record)}",
            "telephone": data.get("owner_phone"),
            "priceRange": "₹₹",
            "address": {
                "@type": "PostalAddress",
                "streetAddress": data.get("street"),
                "addressLocality": data.get("area_name"),
                "addressRegion": record.state,
                "postalCode": data.get("postal_code"),
                "addressCountry": "IN",
            },
            "geo": geo,
            "openingHoursSpecification": {
                "@type": "OpeningHoursSpecification",
                "opens": data.get("open_time"),
                "closes": data.get("close_time"),
            },
        }
    )


def _question(name: str, answer: str) -> Dict[str, Any]:
    return {"@type": "Question", "name": name, "acceptedAnswer": {"@type": "Answer", "text": answer}}


def faq_page(detail: ServiceDetail) -> Dict[str, Any]:
    record = detail.record
    data = record.data
    name = display_name(detail)
    pets = ", ".join(record.pets) or "all pets"
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            _question(
                f"What is the starting price at {name}?",
                f"The starting price at {name} is {format_price(record.min_price)} per day.",
            ),
            _question("What pets are accepted at this boarding center?", f"This service accepts {pets}."),
            _question(
                "What are the check-in and check-out timings?",
                f"Check-in starts at {data.get('open_time') or 'opening time'} "
                f"and check-out is by {data.get('close_time') or 'closing time'}.",
            ),
            _question(
                "Where is this pet boarding service located?",
                f"{name} is located at {data.get('full_address') or record.area_name}.",
            ),
        ],
    }


def breadcrumb_list(detail: ServiceDetail, base_url: str) -> Dict[str, Any]:
    record = detail.record
    root = f"{base_url}{listing_root()}"
    state_url = f"{root}/{location_segment(record.state or '')}"
    district_url = f"{state_url}/{record.district_slug or location_segment(record.district or '')}"
    area_url = f"{district_url}/{location_segment(record.data.get('area_name') or '')}"
    trail = [
        ("Home", base_url),
        ("Pet Boarding", root),
        (record.state or "State", state_url),
        (record.district or "District", district_url),
        (record.area_name, area_url),
        (display_name(detail), f"{base_url}{service_path(record)}"),
    ]
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": position, "name": name, "item": item}
            for position, (name, item) in enumerate(trail, start=1)
        ],
    }


def aggregate_rating(detail: ServiceDetail, base_url: str) -> Optional[Dict[str, Any]]:
    stats = detail.rating_stats
    if stats.avg <= 0 or stats.count <= 0:
        return None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "AggregateRating",
        "itemReviewed": {
            "@type": "LocalBusiness",
            "name": display_name(detail),
            "url": f"{base_url}{service_path(detail.record)}",
        },
        "ratingValue": round(stats.avg, 1),
        "reviewCount": stats.count,
        "bestRating": "5",
        "worstRating": "1",
    }


def structured_data_blocks(detail: ServiceDetail, base_url: str) -> List[Dict[str, Any]]:
    blocks = [local_business(detail, base_url), faq_page(detail), breadcrumb_list(detail, base_url)]
    rating = aggregate_rating(detail, base_url)
    if rating is not None:
        blocks.append(rating)
    return blocks


def to_json_ld(block: Dict[str, Any]) -> str:
    """Serialise for a <script> tag; "</" is escaped so the tag cannot close early."""
    return json.dumps(block, ensure_ascii=False).replace("</", "<\\/")
