"""Conversion between user-entered euro strings and integer cents"""

import re
from decimal import Decimal, ROUND_HALF_UP

from delivery_quote.domain.exceptions import InvalidCartValueError

# Whole euros, or euros with exactly two decimals after "." or ","
EURO_AMOUNT_PATTERN = re.compile(r"[0-9]+(?:[.,][0-9]{2})?")

CENT = Decimal("0.01")


def is_valid_euro_string(value: str) -> bool:
    """Check the strict cart value format: "10", "10.00" and "10,00" pass; "10.0" does not"""
    return EURO_AMOUNT_PATTERN.fullmatch(value) is not None


def euros_to_cents(value: str) -> int:
    """
    Convert a euro string to cents.

    The only place a decimal string becomes money. Rounds half away from
    zero on the cent digit.

    Example:
        "10,50" -> 1050
    """
    if not is_valid_euro_string(value):
        raise InvalidCartValueError(f"Invalid euro amount: {value!r}")

    euros = Decimal(value.replace(",", "."))
    return int((euros / CENT).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def cents_to_euros(cents: int) -> str:
    """200 -> "2.00" """
    sign = "-" if cents < 0 else ""
    whole, fraction = divmod(abs(cents), 100)
    return f"{sign}{whole}.{fraction:02d}"


def format_euros(cents: int) -> str:
    """200 -> "2.00€" """
    return f"{cents_to_euros(cents)}€"


def format_distance(meters: int) -> str:
    """177 -> "177m" """
    return f"{meters}m"
