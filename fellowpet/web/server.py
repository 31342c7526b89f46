"""HTTP entrypoint serving the directory pages (Cloud Run friendly)."""

from __future__ import annotations

import logging
import math
import os
from typing import Any, Dict, List

from flask import Flask, Response, jsonify, render_template, request

from fellowpet.core.config import get_settings
from fellowpet.core.details import load_service_detail
from fellowpet.core.listing import nearby_cards
from fellowpet.core.models import Location
from fellowpet.core.resolver import LookupUnavailable
from fellowpet.core.store import get_store
from fellowpet.presentation.cards import SERVICE_TYPE_SEGMENT, safe_rating_stats, to_card_props
from fellowpet.presentation.pricing import format_price, pricing_tables
from fellowpet.seo.metadata import build_metadata, display_name, not_found_metadata
from fellowpet.seo.sitemap import build_sitemap
from fellowpet.seo.structured_data import structured_data_blocks, to_json_ld
from fellowpet.vendors.firestore import FirestoreError

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)


class InvalidLocation(ValueError):
    """Raised when lat/lon query parameters cannot be used."""


# ---------- Helpers ----------


def caller_location(args) -> Location:
    """Location from ``lat``/``lon`` query parameters, or the configured default."""
    lat_raw = args.get("lat")
    lon_raw = args.get("lon")
    if not lat_raw and not lon_raw:
        settings = get_settings()
        return Location(settings.default_latitude, settings.default_longitude)
    if not lat_raw or not lon_raw:
        raise InvalidLocation("lat and lon must be provided together")
    try:
        latitude = float(lat_raw)
        longitude = float(lon_raw)
    except (TypeError, ValueError) as exc:
        raise InvalidLocation("lat and lon must be numeric") from exc
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InvalidLocation("lat and lon must be finite")
    if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
        raise InvalidLocation("lat must be within [-90, 90] and lon within [-180, 180]")
    return Location(latitude, longitude)


def _card_props(location: Location) -> List[Dict[str, Any]]:
    """Ranked cards with ratings; store failures surface as LookupUnavailable."""
    try:
        store = get_store()
        cards = nearby_cards(store, location, get_settings().listing_limit)
    except FirestoreError as exc:
        raise LookupUnavailable(f"Unable to load nearby services: {exc}") from exc
    return [to_card_props(card, safe_rating_stats(store, card.record.service_id)) for card in cards]


def _message(title: str, message: str, status: int) -> Any:
    return render_template("message.html", title=title, message=message), status


def _render_listing(heading: str, city: str | None = None) -> Any:
    try:
        location = caller_location(request.args)
        cards = _card_props(location)
    except InvalidLocation as exc:
        return _message("Invalid location", str(exc), 400)
    except LookupUnavailable as exc:
        logger.error("Listing unavailable: %s", exc)
        return _message("Temporarily unavailable", "Please try again in a moment.", 503)
    return render_template("listing.html", heading=heading, city=city, cards=cards)


# ---------- Routes ----------


@app.get("/")
def home() -> Any:
    return _render_listing("Trusted pet boarding near you")


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; does not touch Firestore."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "firebase_project_id": settings.firebase_project_id or None,
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.get("/services/<service>")
def service_listing(service: str) -> Any:
    if service != SERVICE_TYPE_SEGMENT:
        return _message("Boarding only", "This section is for Boarding only.", 404)
    city = (request.args.get("city") or "").strip() or None
    return _render_listing(f"Pet Boarding in {city or 'your area'}", city=city)


@app.get("/api/services/nearby")
def nearby_services() -> Any:
    try:
        location = caller_location(request.args)
        cards = _card_props(location)
    except InvalidLocation as exc:
        return jsonify({"error": str(exc)}), 400
    except LookupUnavailable as exc:
        logger.error("Nearby lookup unavailable: %s", exc)
        return jsonify({"error": "service lookup unavailable"}), 503

    return (
        jsonify(
            {
                "data": {
                    "location": {"lat": location.latitude, "lon": location.longitude},
                    "cards": cards,
                }
            }
        ),
        200,
    )


@app.get("/<country>/<service_type>/<state>/<district>/<area>/<slug>")
def service_detail(country: str, service_type: str, state: str, district: str, area: str, slug: str) -> Any:
    """Detail page; only the slug identifies the service, other segments are cosmetic."""
    try:
        detail = load_service_detail(get_store(), slug)
    except (LookupUnavailable, FirestoreError) as exc:
        logger.error("Lookup unavailable for slug=%s: %s", slug, exc)
        return _message("Temporarily unavailable", "Please try again in a moment.", 503)

    if detail is None:
        metadata = not_found_metadata()
        return _message(metadata["title"], "Service not found", 404)

    base_url = get_settings().site_base_url
    record = detail.record
    return render_template(
        "detail.html",
        name=display_name(detail),
        record=record,
        metadata=build_metadata(detail, base_url),
        json_ld=[to_json_ld(block) for block in structured_data_blocks(detail, base_url)],
        price=format_price(record.min_price),
        pricing=pricing_tables(detail.pet_information),
        rating=detail.rating_stats,
    )


@app.get("/sitemap.xml")
def sitemap() -> Any:
    try:
        body = build_sitemap(get_store(), get_settings().site_base_url)
    except FirestoreError as exc:
        logger.error("Sitemap unavailable: %s", exc)
        return Response("sitemap unavailable\n", status=503, mimetype="text/plain")
    return Response(body, mimetype="application/xml")


def main() -> None:
    """Cloud Run injects PORT; fall back to the configured port locally."""
    port = int(os.getenv("PORT") or get_settings().port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
