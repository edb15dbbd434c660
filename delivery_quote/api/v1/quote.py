"""POST /v1/quote - delivery price quote endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from delivery_quote.api.v1.schemas import (
    InvalidInputResponse,
    QuoteDisplay,
    QuoteRequestSchema,
    QuoteResponse,
)
from delivery_quote.api.dependencies import get_quote_service, get_request_id
from delivery_quote.domain.exceptions import InvalidTierConfigurationError, VenueAPIError
from delivery_quote.domain.models import QuoteFailed, QuoteRejected, QuoteResult, RejectionReason
from delivery_quote.domain.money import format_distance, format_euros
from delivery_quote.domain.quote import QuoteService
from delivery_quote.infrastructure.observability.metrics import record_quote, venue_fetch_failures_counter
from delivery_quote.infrastructure.observability.logging import log_quote

router = APIRouter()


def _display(result: QuoteResult) -> QuoteDisplay:
    return QuoteDisplay(
        cart_value=format_euros(result.cart_value_cents),
        delivery_fee=format_euros(result.delivery_fee_cents),
        small_order_surcharge=format_euros(result.small_order_surcharge_cents),
        total_price=format_euros(result.total_price_cents),
        distance=format_distance(result.distance_meters),
    )


def _response(result: QuoteResult, deliverable: bool, **extra) -> QuoteResponse:
    return QuoteResponse(
        deliverable=deliverable,
        cart_value=result.cart_value_cents,
        delivery_fee=result.delivery_fee_cents,
        small_order_surcharge=result.small_order_surcharge_cents,
        total_price=result.total_price_cents,
        distance=result.distance_meters,
        display=_display(result),
        **extra,
    )


@router.post(
    "/quote",
    response_model=QuoteResponse,
    responses={422: {"model": InvalidInputResponse}},
)
async def create_quote(
    request_body: QuoteRequestSchema,
    request: Request,
    quote_service: QuoteService = Depends(get_quote_service),
):
    """
    Quote delivery fee, small order surcharge and total price.

    Flow:
    1. Validate every input field (422 lists all invalid fields)
    2. Fetch venue static + dynamic data (503 when unavailable)
    3. Compute distance, gate on the maximum delivery distance
    4. Compute fee from the venue's distance tiers, surcharge and total

    Out-of-range deliveries are a normal answer: 200 with deliverable=false.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    venue_slug = request_body.venue_slug

    try:
        outcome = await quote_service.quote(
            venue_slug=venue_slug,
            cart_value=request_body.cart_value,
            latitude=request_body.user_latitude,
            longitude=request_body.user_longitude,
        )
    except InvalidTierConfigurationError as e:
        record_quote("failed", "tier_configuration")
        logging.error(f"Invalid venue pricing configuration: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail=f"Invalid venue pricing configuration: {e}")

    duration_ms = (time.time() - start_time) * 1000

    if isinstance(outcome, QuoteFailed):
        if isinstance(outcome.error, VenueAPIError):
            venue_fetch_failures_counter.labels(endpoint=outcome.error.endpoint or "unknown").inc()
            record_quote("failed", "venue_api")
            log_quote(request_id, venue_slug, "failed", duration_ms, reason="venue_api")
            raise HTTPException(status_code=503, detail=outcome.message)
        record_quote("failed", "invalid_number")
        log_quote(request_id, venue_slug, "failed", duration_ms, reason="invalid_number")
        raise HTTPException(status_code=400, detail=outcome.message)

    if isinstance(outcome, QuoteRejected):
        rejection = outcome.rejection
        record_quote("rejected", rejection.reason.value, distance_meters=rejection.distance_meters)
        log_quote(
            request_id,
            venue_slug,
            "rejected",
            duration_ms,
            reason=rejection.reason.value,
            distance_meters=rejection.distance_meters,
        )
        if rejection.reason is RejectionReason.INVALID_INPUT:
            raise HTTPException(
                status_code=422,
                detail=[
                    {"field": v.field, "code": v.code.value, "message": v.message}
                    for v in rejection.violations
                ],
            )
        return _response(
            rejection.breakdown,
            deliverable=False,
            reason=rejection.reason.value,
            max_distance=rejection.max_distance_meters,
        )

    result = outcome.result
    record_quote("success", fee_cents=result.delivery_fee_cents, distance_meters=result.distance_meters)
    log_quote(
        request_id,
        venue_slug,
        "success",
        duration_ms,
        distance_meters=result.distance_meters,
        total_price_cents=result.total_price_cents,
    )
    return _response(result, deliverable=True)
