"""Input validation for quote requests.

Each field check returns a FieldViolation (or None) instead of raising, so a
single pass can report every invalid field at once. The only exception raised
here is CoordinateFormatError, for coordinate strings that are not numbers at
all: that is a failure to compute, not a validation verdict.
"""

from decimal import Decimal, InvalidOperation
from typing import Dict, Optional, Tuple, Union

from delivery_quote.domain.exceptions import CoordinateFormatError
from delivery_quote.domain.models import Coordinate, FieldViolation, ViolationCode
from delivery_quote.domain.money import is_valid_euro_string

VENUE_SLUG = "venue_slug"
CART_VALUE = "cart_value"
USER_LATITUDE = "user_latitude"
USER_LONGITUDE = "user_longitude"
FIELD_ORDER = (VENUE_SLUG, CART_VALUE, USER_LATITUDE, USER_LONGITUDE)

MAX_COORDINATE_DECIMALS = 13

LATITUDE_LIMIT = 90
LONGITUDE_LIMIT = 180

Number = Union[Decimal, float, int, str]


def validate_venue_slug(value: str) -> Optional[FieldViolation]:
    if not value or not value.strip():
        return FieldViolation(VENUE_SLUG, ViolationCode.EMPTY, "Please enter a valid venue slug")
    return None


def validate_cart_value(value: str) -> Optional[FieldViolation]:
    if not value:
        return FieldViolation(CART_VALUE, ViolationCode.EMPTY, "Please enter a valid cart value")
    if not is_valid_euro_string(value):
        return FieldViolation(
            CART_VALUE,
            ViolationCode.FORMAT,
            "Invalid cart value format. Please enter a valid amount (e.g., 10.00)",
        )
    return None


def validate_coordinate_presence(field: str, value: str) -> Optional[FieldViolation]:
    if not value or not value.strip():
        label = "latitude" if field == USER_LATITUDE else "longitude"
        return FieldViolation(field, ViolationCode.EMPTY, f"Please enter a valid {label}")
    return None


def parse_coordinate_value(field: str, value: str) -> Decimal:
    """Parse a coordinate string exactly, keeping every digit the user typed"""
    try:
        number = Decimal(value.strip())
    except InvalidOperation as e:
        raise CoordinateFormatError(field, value) from e
    if not number.is_finite():
        raise CoordinateFormatError(field, value)
    return number


def fractional_digits(value: Number) -> int:
    """Number of significant digits after the decimal point ("60.10" has 1)"""
    if isinstance(value, float):
        value = Decimal(repr(value))
    elif not isinstance(value, Decimal):
        value = Decimal(str(value))
    exponent = value.normalize().as_tuple().exponent
    return max(0, -int(exponent))


def _as_decimal(field: str, value: Number) -> Decimal:
    if isinstance(value, str):
        return parse_coordinate_value(field, value)
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def _check_components(components: Dict[str, Decimal]) -> Tuple[FieldViolation, ...]:
    violations = [
        FieldViolation(
            field,
            ViolationCode.PRECISION,
            f"Coordinates cannot have more than {MAX_COORDINATE_DECIMALS} decimal places",
        )
        for field, value in components.items()
        if fractional_digits(value) > MAX_COORDINATE_DECIMALS
    ]
    if violations:
        return tuple(violations)

    for field, value in components.items():
        if field == USER_LATITUDE and not -LATITUDE_LIMIT <= value <= LATITUDE_LIMIT:
            violations.append(FieldViolation(field, ViolationCode.RANGE, "Invalid latitude"))
        if field == USER_LONGITUDE and not -LONGITUDE_LIMIT <= value <= LONGITUDE_LIMIT:
            violations.append(FieldViolation(field, ViolationCode.RANGE, "Invalid longitude"))
    return tuple(violations)


def validate_coordinate(latitude: Number, longitude: Number) -> Tuple[FieldViolation, ...]:
    """
    Check precision and range of a coordinate.

    Precision is checked first; range is only checked when both components
    pass the precision cap. Strings go through parse_coordinate_value.

    Raises:
        CoordinateFormatError: a string component is not a finite number
    """
    return _check_components(
        {
            USER_LATITUDE: _as_decimal(USER_LATITUDE, latitude),
            USER_LONGITUDE: _as_decimal(USER_LONGITUDE, longitude),
        }
    )


def validate_quote_input(
    venue_slug: str,
    cart_value: str,
    latitude: str,
    longitude: str,
) -> Tuple[FieldViolation, ...]:
    """
    Validate all user inputs in one pass.

    Returns every violation found (empty tuple when the input is valid).
    A coordinate that is present gets its precision and range checked even
    when the other one is missing.

    A non-numeric coordinate is a failure rather than a violation, so it is
    raised. The pass still completes first and the exception carries the
    violations found in the other fields.

    Raises:
        CoordinateFormatError: a non-empty coordinate is not a finite number
    """
    violations = [
        v
        for v in (
            validate_venue_slug(venue_slug),
            validate_cart_value(cart_value),
            validate_coordinate_presence(USER_LATITUDE, latitude),
            validate_coordinate_presence(USER_LONGITUDE, longitude),
        )
        if v is not None
    ]

    missing = {v.field for v in violations}
    components: Dict[str, Decimal] = {}
    format_error = None
    for field, value in ((USER_LATITUDE, latitude), (USER_LONGITUDE, longitude)):
        if field in missing:
            continue
        try:
            components[field] = parse_coordinate_value(field, value)
        except CoordinateFormatError as e:
            format_error = format_error or e
    violations.extend(_check_components(components))
    violations.sort(key=lambda v: FIELD_ORDER.index(v.field))

    if format_error is not None:
        format_error.violations = tuple(violations)
        raise format_error
    return tuple(violations)


def parse_coordinate(latitude: str, longitude: str) -> Coordinate:
    """Build a Coordinate from already validated strings"""
    return Coordinate(
        latitude=float(parse_coordinate_value(USER_LATITUDE, latitude)),
        longitude=float(parse_coordinate_value(USER_LONGITUDE, longitude)),
    )
