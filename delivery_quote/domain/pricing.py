"""Pricing engine - delivery fee and small order surcharge"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence, Union

from delivery_quote.domain.exceptions import InvalidTierConfigurationError
from delivery_quote.domain.models import DistanceTier, NotDeliverable


def small_order_surcharge(cart_value_cents: int, minimum_no_surcharge_cents: int) -> int:
    """Difference between the venue minimum and the cart value, never negative"""
    return max(0, minimum_no_surcharge_cents - cart_value_cents)


def validate_tiers(tiers: Sequence[DistanceTier]) -> None:
    """
    Check the integrity of a venue's distance tier table.

    Raises:
        InvalidTierConfigurationError: table is empty, does not start at 0,
            or has a gap or overlap between adjacent tiers
    """
    if not tiers or tiers[0].min != 0:
        raise InvalidTierConfigurationError("Invalid distance ranges configuration")

    for current, following in zip(tiers, tiers[1:]):
        if current.max != following.min:
            raise InvalidTierConfigurationError(
                f"Distance ranges are not contiguous: {current.max}m != {following.min}m"
            )


def find_tier(distance_meters: int, tiers: Sequence[DistanceTier]) -> Optional[DistanceTier]:
    """First tier covering the distance; terminal tiers never match"""
    return next((tier for tier in tiers if tier.applies_to(distance_meters)), None)


def distance_component(tier: DistanceTier, distance_meters: int) -> int:
    """Per-distance part of the fee: b cents per 10 meters, rounded half up"""
    raw = Decimal(str(tier.b)) * distance_meters / 10
    return int(raw.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def calculate_delivery_fee(
    distance_meters: int,
    base_fee_cents: int,
    tiers: Sequence[DistanceTier],
) -> Union[int, NotDeliverable]:
    """
    Delivery fee in cents for a distance, or NotDeliverable.

    fee = base_fee + tier.a + round(tier.b * distance / 10)

    The engine knows nothing of a hard distance cap; a distance beyond the
    last real tier simply has no matching tier.

    Example:
        tiers [0-1000: a=100 b=1], base 190, 999m
        190 + 100 + round(99.9) = 390
    """
    validate_tiers(tiers)

    if distance_meters < 0:
        raise ValueError("Distance cannot be negative")

    tier = find_tier(distance_meters, tiers)
    if tier is None:
        return NotDeliverable(distance_meters=distance_meters)

    return base_fee_cents + tier.a + distance_component(tier, distance_meters)


def max_deliverable_distance(tiers: Sequence[DistanceTier]) -> int:
    """Distance at which delivery stops: start of the terminal tier, else end of the last tier"""
    last = tiers[-1]
    return last.min if last.is_terminal else last.max
