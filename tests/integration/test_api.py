"""Integration tests for API endpoints"""

import httpx
import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from delivery_quote.api.dependencies import get_venue_client
from delivery_quote.api.main import create_app
from delivery_quote.domain.exceptions import VenueAPIError
from delivery_quote.domain.models import DistanceTier, VenueDynamic
from delivery_quote.infrastructure.clients.venue import VenueClient
from mocks.venue_server.main import app as venue_mock_app
from tests._helpers.venues import LATITUDE_AT, VENUE_LONGITUDE, VENUE_SLUG, FakeVenueSource


def quote_body(distance: int = 600, cart_value: str = "8.00", venue_slug: str = VENUE_SLUG) -> dict:
    return {
        "venue_slug": venue_slug,
        "cart_value": cart_value,
        "user_latitude": LATITUDE_AT[distance],
        "user_longitude": VENUE_LONGITUDE,
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/quote", json=quote_body())
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "delivery_quote_total" in response.text


def test_quote_success(client: TestClient):
    """Cart 8.00 at 600m: surcharge 200, fee 359, total 1359"""
    response = client.post("/v1/quote", json=quote_body())

    assert response.status_code == 200
    data = response.json()
    assert data["deliverable"] is True
    assert data["cart_value"] == 800
    assert data["small_order_surcharge"] == 200
    assert data["delivery_fee"] == 359
    assert data["total_price"] == 1359
    assert data["distance"] == 600
    assert data["reason"] is None
    assert data["display"] == {
        "cart_value": "8.00€",
        "delivery_fee": "3.59€",
        "small_order_surcharge": "2.00€",
        "total_price": "13.59€",
        "distance": "600m",
    }


def test_quote_sets_request_id_header(client: TestClient):
    response = client.post("/v1/quote", json=quote_body(), headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    response = client.post("/v1/quote", json=quote_body())
    assert response.headers["X-Request-ID"]


def test_quote_invalid_input_lists_every_field(client: TestClient, venue_source: FakeVenueSource):
    response = client.post("/v1/quote", json={})

    assert response.status_code == 422
    fields = [item["field"] for item in response.json()["detail"]]
    assert fields == ["venue_slug", "cart_value", "user_latitude", "user_longitude"]
    assert venue_source.calls == []


def test_quote_coordinate_precision_rejected(client: TestClient):
    body = quote_body()
    body["user_latitude"] = "60.17551735961234"

    response = client.post("/v1/quote", json=body)

    assert response.status_code == 422
    assert response.json()["detail"] == [
        {
            "field": "user_latitude",
            "code": "precision",
            "message": "Coordinates cannot have more than 13 decimal places",
        }
    ]


def test_quote_beyond_max_distance(client: TestClient):
    response = client.post("/v1/quote", json=quote_body(distance=2500))

    assert response.status_code == 200
    data = response.json()
    assert data["deliverable"] is False
    assert data["reason"] == "distance_too_far"
    assert data["distance"] == 2500
    assert data["max_distance"] == 2000
    assert data["cart_value"] == 800
    assert data["delivery_fee"] == 0
    assert data["small_order_surcharge"] == 0
    assert data["total_price"] == 0


def test_quote_on_terminal_tier(client: TestClient):
    response = client.post("/v1/quote", json=quote_body(distance=2000))

    data = response.json()
    assert response.status_code == 200
    assert data["deliverable"] is False
    assert data["reason"] == "out_of_tier_range"
    assert data["distance"] == 2000
    assert data["total_price"] == 0


def test_quote_non_numeric_coordinate(client: TestClient):
    body = quote_body()
    body["user_longitude"] = "east"

    response = client.post("/v1/quote", json=body)

    assert response.status_code == 400
    assert "Invalid coordinates format" in response.json()["detail"]


def test_quote_venue_unavailable(client: TestClient, venue_source: FakeVenueSource):
    venue_source.error = VenueAPIError(
        "Failed to fetch venue static data: Venue not found",
        endpoint="venue static data",
        status_code=404,
    )

    response = client.post("/v1/quote", json=quote_body())

    assert response.status_code == 503
    assert response.json()["detail"] == "Failed to fetch venue static data: Venue not found"


def test_quote_invalid_tier_configuration(client: TestClient, venue_source: FakeVenueSource):
    venue_source.dynamic = VenueDynamic(
        slug=VENUE_SLUG,
        base_fee_cents=190,
        tiers=(DistanceTier(0, 500, 0, 0), DistanceTier(1000, 0, 0, 0)),
        order_minimum_no_surcharge_cents=1000,
    )

    response = client.post("/v1/quote", json=quote_body())

    assert response.status_code == 502
    assert "Invalid venue pricing configuration" in response.json()["detail"]


@patch("delivery_quote.infrastructure.clients.venue.VenueClient.get_venue_dynamic")
@patch("delivery_quote.infrastructure.clients.venue.VenueClient.get_venue_static")
def test_quote_with_patched_venue_client(
    mock_static: AsyncMock,
    mock_dynamic: AsyncMock,
    venue_static,
    venue_dynamic,
):
    """Default dependency wiring with the HTTP calls patched out"""
    mock_static.return_value = venue_static
    mock_dynamic.return_value = venue_dynamic

    response = TestClient(create_app()).post("/v1/quote", json=quote_body(distance=0, cart_value="10,00"))

    assert response.status_code == 200
    # 199 + 100 + 0, no surcharge at 10.00
    assert response.json()["total_price"] == 1299
    mock_static.assert_awaited_once_with(VENUE_SLUG)
    mock_dynamic.assert_awaited_once_with(VENUE_SLUG)


@pytest.fixture
def mock_server_client() -> TestClient:
    """API wired to the mock venue server through an in-process transport"""
    app = create_app()
    app.dependency_overrides[get_venue_client] = lambda: VenueClient(
        base_url="http://venue-mock",
        transport=httpx.ASGITransport(app=venue_mock_app),
    )
    return TestClient(app)


def test_quote_against_mock_venue_server(mock_server_client: TestClient):
    response = mock_server_client.post("/v1/quote", json=quote_body(distance=177, cart_value="10,00"))

    assert response.status_code == 200
    data = response.json()
    # First tier (0-500m) charges only the 190 base price
    assert data["delivery_fee"] == 190
    assert data["small_order_surcharge"] == 0
    assert data["total_price"] == 1190
    assert data["distance"] == 177


def test_unknown_venue_against_mock_venue_server(mock_server_client: TestClient):
    response = mock_server_client.post("/v1/quote", json=quote_body(venue_slug="no-such-venue"))

    assert response.status_code == 503
    detail = response.json()["detail"]
    # Both fetches fail; whichever finishes first is reported
    assert detail.startswith("Failed to fetch venue ")
    assert detail.endswith(": Venue no-such-venue not found")


def test_broken_tiers_against_mock_venue_server(mock_server_client: TestClient):
    response = mock_server_client.post("/v1/quote", json=quote_body(venue_slug="broken-tiers-venue"))

    assert response.status_code == 502
