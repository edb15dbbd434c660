"""Quote orchestration - validation, venue data, distance, fee and total"""

import asyncio
import logging
from typing import Optional, Protocol, Tuple

from delivery_quote.domain.exceptions import CoordinateFormatError, VenueAPIError
from delivery_quote.domain.geo import calculate_distance
from delivery_quote.domain.models import (
    Coordinate,
    NotDeliverable,
    QuoteFailed,
    QuoteOutcome,
    QuoteRejected,
    QuoteRejection,
    QuoteRequest,
    QuoteResult,
    QuoteSuccess,
    RejectionReason,
    VenueDynamic,
    VenueStatic,
)
from delivery_quote.domain.money import euros_to_cents
from delivery_quote.domain.pricing import (
    calculate_delivery_fee,
    max_deliverable_distance,
    small_order_surcharge,
)
from delivery_quote.domain.validation import parse_coordinate, validate_quote_input


class VenueDataSource(Protocol):
    """Supplier of the two venue records (see infrastructure.clients.venue)"""

    async def get_venue_static(self, venue_slug: str) -> VenueStatic: ...

    async def get_venue_dynamic(self, venue_slug: str) -> VenueDynamic: ...


def venue_coordinate(venue_static: VenueStatic) -> Coordinate:
    """Venue location arrives longitude-first; the distance calculator wants latitude-first"""
    longitude, latitude = venue_static.location
    return Coordinate(latitude=latitude, longitude=longitude)


def price_quote(request: QuoteRequest, max_distance_meters: Optional[int]) -> QuoteOutcome:
    """
    Price a validated request. Pure and synchronous.

    Steps:
    1. Distance in whole meters
    2. Hard cap gate (skipped when max_distance_meters is None)
    3. Tier fee lookup; NotDeliverable becomes a rejection of the same shape
    4. Small order surcharge and total

    Raises:
        InvalidTierConfigurationError: venue tier table is inconsistent
    """
    cart_value_cents = euros_to_cents(request.cart_value)
    distance = calculate_distance(request.customer, request.venue)

    if max_distance_meters is not None and distance > max_distance_meters:
        return QuoteRejected(
            QuoteRejection(
                reason=RejectionReason.DISTANCE_TOO_FAR,
                distance_meters=distance,
                max_distance_meters=max_distance_meters,
                cart_value_cents=cart_value_cents,
            )
        )

    fee = calculate_delivery_fee(distance, request.base_fee_cents, request.tiers)
    if isinstance(fee, NotDeliverable):
        return QuoteRejected(
            QuoteRejection(
                reason=RejectionReason.OUT_OF_TIER_RANGE,
                distance_meters=distance,
                max_distance_meters=max_deliverable_distance(request.tiers),
                cart_value_cents=cart_value_cents,
            )
        )

    surcharge = small_order_surcharge(cart_value_cents, request.surcharge_threshold_cents)

    return QuoteSuccess(
        QuoteResult(
            cart_value_cents=cart_value_cents,
            delivery_fee_cents=fee,
            small_order_surcharge_cents=surcharge,
            total_price_cents=cart_value_cents + surcharge + fee,
            distance_meters=distance,
        )
    )


class QuoteService:
    """Runs the full quote flow for one request at a time; holds no per-request state"""

    def __init__(self, venue_source: VenueDataSource, max_distance_meters: Optional[int]):
        self.venue_source = venue_source
        self.max_distance_meters = max_distance_meters

    async def _fetch_venue(self, slug: str) -> Tuple[VenueStatic, VenueDynamic]:
        """Fetch both venue records concurrently; a failure cancels the other fetch"""
        static_task = asyncio.ensure_future(self.venue_source.get_venue_static(slug))
        dynamic_task = asyncio.ensure_future(self.venue_source.get_venue_dynamic(slug))
        try:
            venue_static, venue_dynamic = await asyncio.gather(static_task, dynamic_task)
        finally:
            # No-op for finished tasks
            static_task.cancel()
            dynamic_task.cancel()
        return venue_static, venue_dynamic

    async def quote(
        self,
        venue_slug: str,
        cart_value: str,
        latitude: str,
        longitude: str,
    ) -> QuoteOutcome:
        """
        Validate inputs, fetch venue data and price the delivery.

        Returns:
            QuoteSuccess, QuoteRejected (invalid input or out of range) or
            QuoteFailed (venue data unavailable, coordinates not numeric)

        Raises:
            InvalidTierConfigurationError: venue tier table is inconsistent
        """
        try:
            violations = validate_quote_input(venue_slug, cart_value, latitude, longitude)
        except CoordinateFormatError as e:
            return QuoteFailed(message=str(e), error=e)

        if violations:
            return QuoteRejected(QuoteRejection(reason=RejectionReason.INVALID_INPUT, violations=violations))

        slug = venue_slug.strip()
        try:
            venue_static, venue_dynamic = await self._fetch_venue(slug)
        except VenueAPIError as e:
            logging.warning(f"Venue data unavailable: {e}", extra={"venue_slug": slug, "endpoint": e.endpoint})
            return QuoteFailed(message=str(e), error=e)

        request = QuoteRequest(
            venue_slug=slug,
            cart_value=cart_value,
            customer=parse_coordinate(latitude, longitude),
            venue=venue_coordinate(venue_static),
            base_fee_cents=venue_dynamic.base_fee_cents,
            tiers=venue_dynamic.tiers,
            surcharge_threshold_cents=venue_dynamic.order_minimum_no_surcharge_cents,
        )
        return price_quote(request, self.max_distance_meters)
