"""Page title, description and social tags for service detail pages."""

from typing import Any, Dict

from fellowpet.core.models import UNKNOWN_SHOP, ServiceDetail
from fellowpet.presentation.cards import service_path

SITE_NAME = "MyFellowPet"
DEFAULT_DESCRIPTION = "Trusted pet service provider."
DEFAULT_OG_IMAGE = "/default-og.png"


def not_found_metadata() -> Dict[str, Any]:
    return {
        "title": f"Service Not Found | {SITE_NAME}",
        "description": "The service you're looking for does not exist.",
    }


def display_name(detail: ServiceDetail) -> str:
    name = detail.record.shop_name
    if not name.strip() or name == UNKNOWN_SHOP:
        return "Pet Service"
    return name


def build_metadata(detail: ServiceDetail, base_url: str) -> Dict[str, Any]:
    record = detail.record
    name = display_name(detail)
    description = record.description or DEFAULT_DESCRIPTION
    image = record.data.get("shop_logo") or (record.image_urls[0] if record.image_urls else DEFAULT_OG_IMAGE)
    pet = record.pets[0] if record.pets else "Pet"
    url = f"{base_url}{service_path(record)}"

    return {
        "title": f"{name} | {pet} Boarding in {record.area_name}",
        "description": description,
        "canonical_url": url,
        "open_graph": {
            "title": name,
            "description": description,
            "url": url,
            "images": [{"url": image}],
        },
        "twitter": {
            "card": "summary_large_image",
            "title": name,
            "description": description,
            "images": [image],
        },
    }
