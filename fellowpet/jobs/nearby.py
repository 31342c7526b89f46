"""CLI job printing the ranked nearby shops for a location."""

import argparse
import json
import logging
from typing import Any, Dict, List, Optional

from fellowpet.core.config import get_settings
from fellowpet.core.listing import nearby_cards
from fellowpet.core.models import Location
from fellowpet.core.store import get_store
from fellowpet.presentation.cards import to_card_props

logger = logging.getLogger(__name__)


def run_nearby_job(*, latitude: float, longitude: float, limit: int, store=None) -> List[Dict[str, Any]]:
    if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
        raise ValueError("latitude must be within [-90, 90] and longitude within [-180, 180]")
    if limit <= 0:
        raise ValueError("limit must be positive")

    store = store or get_store()
    cards = nearby_cards(store, Location(latitude, longitude), limit)
    logger.info("Completed nearby ranking: cards=%d", len(cards))
    return [to_card_props(card) for card in cards]


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Rank display-eligible boarding shops by distance")
    parser.add_argument("--lat", dest="latitude", type=float, default=settings.default_latitude, help="Caller latitude")
    parser.add_argument("--lon", dest="longitude", type=float, default=settings.default_longitude, help="Caller longitude")
    parser.add_argument(
        "--limit",
        dest="limit",
        type=int,
        default=settings.listing_limit,
        help="Maximum number of eligible branches to fetch",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    cards = run_nearby_job(latitude=args.latitude, longitude=args.longitude, limit=args.limit)
    print(json.dumps(cards, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
