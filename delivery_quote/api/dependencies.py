"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request

from delivery_quote.config import settings
from delivery_quote.domain.quote import QuoteService
from delivery_quote.infrastructure.clients.venue import VenueClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_venue_client() -> VenueClient:
    """Provide Venue API client instance"""
    return VenueClient()


def get_quote_service(venue_client: VenueClient = Depends(get_venue_client)) -> QuoteService:
    """Provide quote service wired to the venue client and the configured distance cap"""
    return QuoteService(venue_client, settings.max_delivery_distance_meters)
