import json

import pytest

from fellowpet.core.config import Settings
from fellowpet.core.store import SERVICES_COLLECTION
from fellowpet.web import server


@pytest.fixture
def services(doc):
    return [
        doc(
            "hsr-1",
            shop_name="Happy Tails",
            seo_slug="happy-tails",
            display=True,
            state="Karnataka",
            district_slug="bengaluru",
            area_name="HSR Layout",
            pets=["Dog"],
            min_price=650,
            shop_location={"latitude": 12.9116, "longitude": 77.6474},
        ),
        doc(
            "whitefield-1",
            shop_name="Happy Tails",
            display=True,
            shop_location={"latitude": 12.9698, "longitude": 77.7500},
        ),
        doc(
            "mg-1",
            shop_name="Paws & Claws",
            display=True,
            area_name="MG Road",
            shop_location={"latitude": 12.9756, "longitude": 77.6050},
        ),
        doc("hidden-1", shop_name="Hidden Kennels", display=False),
    ]


@pytest.fixture
def store(monkeypatch, make_store, services, doc):
    fake = make_store(
        {
            SERVICES_COLLECTION: services,
            f"{SERVICES_COLLECTION}/hsr-1/pet_information": [
                doc("dog", name="Dog", rates_daily={"Small": 500}, total_prices={"Small": 650})
            ],
            "public_review/service_providers/sps/hsr-1/reviews": [doc("r1", rating=5), doc("r2", rating=4)],
        }
    )
    monkeypatch.setattr(server, "get_store", lambda: fake)
    monkeypatch.setattr(server, "get_settings", lambda: Settings(firebase_project_id="test"))
    return fake


@pytest.fixture
def client(store):
    return server.app.test_client()


def test_health_endpoint(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_nearby_api_ranks_and_groups(client):
    # MG Road is closer to the default Bengaluru centre than HSR Layout
    response = client.get("/api/services/nearby")

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["location"] == {"lat": 12.9716, "lon": 77.5946}
    cards = data["cards"]
    assert [c["service_id"] for c in cards] == ["mg-1", "hsr-1"]
    assert cards[1]["other_branches"] == ["whitefield-1"]
    assert cards[1]["rating_count"] == 2
    assert cards[1]["rating_avg"] == 4.5
    assert cards[0]["path"] == "/india/boarding/unknown/unknown/mg-road/paws-and-claws"


def test_nearby_api_uses_caller_location(client):
    response = client.get("/api/services/nearby?lat=12.9698&lon=77.7500")

    cards = response.get_json()["data"]["cards"]
    assert cards[0]["service_id"] == "whitefield-1"
    assert cards[0]["other_branches"] == ["hsr-1"]


@pytest.mark.parametrize("query", ["lat=abc&lon=1", "lat=12.9", "lat=100&lon=0", "lat=nan&lon=0"])
def test_nearby_api_validates_location(client, query):
    response = client.get(f"/api/services/nearby?{query}")

    assert response.status_code == 400
    assert "error" in response.get_json()


def test_nearby_api_store_failure(client, store):
    store.fail = True

    response = client.get("/api/services/nearby")

    assert response.status_code == 503


def test_home_renders_cards_in_ranked_order(client):
    body = client.get("/").get_data(as_text=True)

    assert body.index("Paws &amp; Claws") < body.index("Happy Tails")
    assert "Hidden Kennels" not in body
    assert "+1 more branches" in body


def test_listing_only_supports_boarding(client):
    response = client.get("/services/grooming")

    assert response.status_code == 404
    assert "Boarding only" in response.get_data(as_text=True)


def test_listing_empty_state(client, store):
    store.collections[SERVICES_COLLECTION] = []

    response = client.get("/services/boarding?city=Pune")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Pet Boarding in Pune" in body
    assert "No boarding centers found in Pune" in body


def test_detail_page_renders_metadata_and_json_ld(client):
    response = client.get("/india/boarding/karnataka/bengaluru/hsr-layout/Happy-Tails")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "<title>Happy Tails | Dog Boarding in HSR Layout</title>" in body
    assert 'property="og:url" content="https://myfellowpet.com/india/boarding/karnataka/bengaluru/hsr-layout/happy-tails"' in body
    assert '"@type": "LocalBusiness"' in body
    assert '"@type": "AggregateRating"' in body
    assert "Starts from ₹650" in body
    assert "Per-Day Pricing: Dog" in body


def test_detail_page_resolves_by_shop_name_fallback(client):
    response = client.get("/india/boarding/x/y/z/paws-and-claws")

    assert response.status_code == 200
    assert "Paws &amp; Claws" in response.get_data(as_text=True)


def test_detail_page_not_found(client):
    response = client.get("/india/boarding/karnataka/bengaluru/hsr-layout/no-such-shop")

    assert response.status_code == 404
    body = response.get_data(as_text=True)
    assert "Service not found" in body
    assert "Service Not Found | MyFellowPet" in body


def test_detail_page_store_unavailable(client, store):
    store.fail = True

    response = client.get("/india/boarding/karnataka/bengaluru/hsr-layout/happy-tails")

    assert response.status_code == 503
    assert "Temporarily unavailable" in response.get_data(as_text=True)


def test_sitemap(client):
    response = client.get("/sitemap.xml")

    assert response.status_code == 200
    assert response.mimetype == "application/xml"
    body = response.get_data(as_text=True)
    assert body.count("<url>") == 4
    assert "/india/boarding/karnataka/bengaluru/hsr-layout/happy-tails" in body


def test_caller_location_defaults(store):
    location = server.caller_location({})

    assert (location.latitude, location.longitude) == (12.9716, 77.5946)


def test_json_ld_blocks_are_valid_json(client):
    body = client.get("/india/boarding/karnataka/bengaluru/hsr-layout/happy-tails").get_data(as_text=True)
    start = '<script type="application/ld+json">'
    blocks = [chunk.split("</script>")[0] for chunk in body.split(start)[1:]]

    assert len(blocks) == 4
    assert all(isinstance(json.loads(block), dict) for block in blocks)
