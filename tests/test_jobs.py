import argparse

import pytest

from fellowpet.core.config import Settings
from fellowpet.core.store import SERVICES_COLLECTION
from fellowpet.jobs import nearby, sitemap


@pytest.fixture
def store(make_store, doc):
    return make_store(
        {
            SERVICES_COLLECTION: [
                doc("a", shop_name="Alpha", display=True, seo_slug="alpha", shop_location={"latitude": 0.0, "longitude": 0.05}),
                doc("b", shop_name="Beta", display=True, shop_location={"latitude": 0.0, "longitude": 0.01}),
                doc("c", shop_name="Gamma", display=True),
            ]
        }
    )


def test_run_nearby_job_ranks_cards(store):
    cards = nearby.run_nearby_job(latitude=0.0, longitude=0.0, limit=10, store=store)

    assert [card["service_id"] for card in cards] == ["b", "a", "c"]
    assert cards[-1]["distance_km"] is None
    assert store.calls[0] == ("query", SERVICES_COLLECTION, "display", True)


def test_run_nearby_job_validates_input(store):
    with pytest.raises(ValueError):
        nearby.run_nearby_job(latitude=120.0, longitude=0.0, limit=10, store=store)
    with pytest.raises(ValueError):
        nearby.run_nearby_job(latitude=0.0, longitude=0.0, limit=0, store=store)


def test_nearby_build_parser_defaults(monkeypatch):
    monkeypatch.setattr(nearby, "get_settings", lambda: Settings(firebase_project_id="x", listing_limit=7))
    parser = nearby.build_parser()
    args = parser.parse_args([])

    assert isinstance(parser, argparse.ArgumentParser)
    assert (args.latitude, args.longitude) == (12.9716, 77.5946)
    assert args.limit == 7


def test_run_sitemap_job_writes_file(monkeypatch, store, tmp_path):
    monkeypatch.setattr(sitemap, "get_settings", lambda: Settings(firebase_project_id="x"))
    output = tmp_path / "sitemap.xml"

    xml = sitemap.run_sitemap_job(output=str(output), base_url="https://example.com/", store=store)

    assert output.read_text(encoding="utf-8") == xml
    assert "<loc>https://example.com/india/boarding/unknown/unknown/unknown/alpha</loc>" in xml
    assert xml.count("<url>") == 3
