"""Pytest fixtures for testing"""

import pytest
from typing import Tuple
from fastapi.testclient import TestClient

from delivery_quote.api.dependencies import get_venue_client
from delivery_quote.api.main import create_app
from delivery_quote.domain.models import DistanceTier, VenueDynamic, VenueStatic
from tests._helpers.venues import VENUE_LOCATION, VENUE_SLUG, FakeVenueSource


@pytest.fixture
def tiers() -> Tuple[DistanceTier, ...]:
    """Reference tier table: delivery stops at 2000m"""
    return (
        DistanceTier(min=0, max=1000, a=100, b=1),
        DistanceTier(min=1000, max=2000, a=200, b=2),
        DistanceTier(min=2000, max=0, a=0, b=0),
    )


@pytest.fixture
def venue_static() -> VenueStatic:
    return VenueStatic(slug=VENUE_SLUG, location=VENUE_LOCATION)


@pytest.fixture
def venue_dynamic(tiers) -> VenueDynamic:
    return VenueDynamic(
        slug=VENUE_SLUG,
        base_fee_cents=199,
        tiers=tiers,
        order_minimum_no_surcharge_cents=1000,
    )


@pytest.fixture
def venue_source(venue_static, venue_dynamic) -> FakeVenueSource:
    return FakeVenueSource(static=venue_static, dynamic=venue_dynamic)


@pytest.fixture
def client(venue_source: FakeVenueSource) -> TestClient:
    """Create FastAPI test client backed by the in-memory venue source"""
    app = create_app()
    app.dependency_overrides[get_venue_client] = lambda: venue_source
    return TestClient(app)
