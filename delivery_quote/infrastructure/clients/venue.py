"""Venue API HTTP client for fetching venue location and delivery pricing"""

import logging
import math
from typing import Any, Dict

import httpx

from delivery_quote.config import settings
from delivery_quote.domain.exceptions import VenueAPIError
from delivery_quote.domain.models import DistanceTier, VenueDynamic, VenueStatic

STATIC_ENDPOINT = "venue static data"
DYNAMIC_ENDPOINT = "venue dynamic data"


def _upstream_message(response: httpx.Response) -> str:
    """Prefer the API's own "message" field over the bare status line"""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"{response.status_code} {response.reason_phrase}".strip()


def _whole(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be a whole number, got {value!r}")
    return value


def _rate(value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise TypeError(f"distance rate must be a number, got {value!r}")
    return value


class VenueClient:
    """Client for the external venue API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.venue_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _get_json(self, venue_slug: str, kind: str, endpoint: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                logging.debug(f"Fetching {endpoint}", extra={"venue_slug": venue_slug})
                response = await client.get(f"{self.base_url}/{venue_slug}/{kind}")
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                raise VenueAPIError(
                    f"Failed to fetch {endpoint}: timeout after {self.timeout}s", endpoint=endpoint
                ) from e
            except httpx.HTTPStatusError as e:
                raise VenueAPIError(
                    f"Failed to fetch {endpoint}: {_upstream_message(e.response)}",
                    endpoint=endpoint,
                    status_code=e.response.status_code,
                ) from e
            except httpx.RequestError as e:
                raise VenueAPIError(f"Failed to fetch {endpoint}: {e}", endpoint=endpoint) from e
            except ValueError as e:
                raise VenueAPIError(f"Failed to fetch {endpoint}: invalid JSON response", endpoint=endpoint) from e

    async def get_venue_static(self, venue_slug: str) -> VenueStatic:
        """
        Fetch venue location.

        Raises:
            VenueAPIError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json(venue_slug, "static", STATIC_ENDPOINT)
        try:
            longitude, latitude = data["venue_raw"]["location"]["coordinates"]
            return VenueStatic(slug=venue_slug, location=(float(longitude), float(latitude)))
        except (KeyError, ValueError, TypeError) as e:
            raise VenueAPIError(
                f"Failed to fetch {STATIC_ENDPOINT}: invalid venue data ({e!r})", endpoint=STATIC_ENDPOINT
            ) from e

    async def get_venue_dynamic(self, venue_slug: str) -> VenueDynamic:
        """
        Fetch base price, distance ranges and the surcharge threshold.

        Raises:
            VenueAPIError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json(venue_slug, "dynamic", DYNAMIC_ENDPOINT)
        try:
            specs = data["venue_raw"]["delivery_specs"]
            pricing = specs["delivery_pricing"]
            return VenueDynamic(
                slug=venue_slug,
                base_fee_cents=_whole("base_price", pricing["base_price"]),
                tiers=tuple(
                    DistanceTier(
                        min=_whole("min", r["min"]),
                        max=_whole("max", r["max"]),
                        a=_whole("a", r["a"]),
                        b=_rate(r["b"]),
                    )
                    for r in pricing["distance_ranges"]
                ),
                order_minimum_no_surcharge_cents=_whole(
                    "order_minimum_no_surcharge", specs["order_minimum_no_surcharge"]
                ),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise VenueAPIError(
                f"Failed to fetch {DYNAMIC_ENDPOINT}: invalid venue data ({e!r})", endpoint=DYNAMIC_ENDPOINT
            ) from e
