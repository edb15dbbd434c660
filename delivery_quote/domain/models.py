"""Domain models - immutable dataclasses for the quote pipeline"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees"""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class DistanceTier:
    """
    Distance band of a venue's pricing table.

    A tier applies to a distance d when min <= d < max. A tier with max == 0
    is the terminal sentinel: it never applies and marks where delivery stops.
    """

    min: int
    max: int
    a: int  # flat fee in cents
    b: Union[int, float]  # cents per 10 meters

    @property
    def is_terminal(self) -> bool:
        return self.max == 0

    def applies_to(self, distance_meters: int) -> bool:
        if self.is_terminal:
            return False
        return self.min <= distance_meters < self.max


@dataclass(frozen=True)
class VenueStatic:
    """Static venue record from the venue API"""

    slug: str
    location: Tuple[float, float]  # GeoJSON order: (longitude, latitude)


@dataclass(frozen=True)
class VenueDynamic:
    """Dynamic venue record: current delivery pricing"""

    slug: str
    base_fee_cents: int
    tiers: Tuple[DistanceTier, ...]
    order_minimum_no_surcharge_cents: int


@dataclass(frozen=True)
class QuoteRequest:
    """Everything needed to price one delivery"""

    venue_slug: str
    cart_value: str  # user-entered, e.g. "10.00" or "10,00"
    customer: Coordinate
    venue: Coordinate
    base_fee_cents: int
    tiers: Tuple[DistanceTier, ...]
    surcharge_threshold_cents: int


@dataclass(frozen=True)
class QuoteResult:
    """Priced delivery, all amounts in cents"""

    cart_value_cents: int
    delivery_fee_cents: int
    small_order_surcharge_cents: int
    total_price_cents: int
    distance_meters: int


class ViolationCode(str, Enum):
    EMPTY = "empty"
    FORMAT = "format"
    PRECISION = "precision"
    RANGE = "range"


@dataclass(frozen=True)
class FieldViolation:
    """A single input field that failed validation"""

    field: str
    code: ViolationCode
    message: str


class RejectionReason(str, Enum):
    INVALID_INPUT = "invalid_input"
    DISTANCE_TOO_FAR = "distance_too_far"
    OUT_OF_TIER_RANGE = "out_of_tier_range"


@dataclass(frozen=True)
class QuoteRejection:
    """
    Well-formed "no quote" answer.

    Distance rejections carry the computed distance and the maximum that was
    exceeded; input rejections carry every violated field.
    """

    reason: RejectionReason
    violations: Tuple[FieldViolation, ...] = ()
    distance_meters: Optional[int] = None
    max_distance_meters: Optional[int] = None
    cart_value_cents: Optional[int] = None

    @property
    def invalid_fields(self) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(v.field for v in self.violations))

    @property
    def breakdown(self) -> Optional[QuoteResult]:
        """Price breakdown for distance rejections: distance shown, charges zeroed"""
        if self.distance_meters is None:
            return None
        return QuoteResult(
            cart_value_cents=self.cart_value_cents or 0,
            delivery_fee_cents=0,
            small_order_surcharge_cents=0,
            total_price_cents=0,
            distance_meters=self.distance_meters,
        )


@dataclass(frozen=True)
class NotDeliverable:
    """Fee lookup outcome when no tier covers the distance"""

    distance_meters: int


@dataclass(frozen=True)
class QuoteSuccess:
    result: QuoteResult


@dataclass(frozen=True)
class QuoteRejected:
    rejection: QuoteRejection


@dataclass(frozen=True)
class QuoteFailed:
    """The quote could not be computed at all"""

    message: str
    error: Optional[Exception] = field(default=None, compare=False)


QuoteOutcome = Union[QuoteSuccess, QuoteRejected, QuoteFailed]
