"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class VenueAPIError(DomainException):
    """Venue API returned an error or is unavailable"""

    def __init__(self, message: str, endpoint: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class InvalidTierConfigurationError(DomainException):
    """Venue distance tiers are empty, do not start at 0, or are not contiguous"""

    pass


class CoordinateFormatError(DomainException):
    """Coordinate input is not a number at all"""

    def __init__(self, field: str, value: str, violations: tuple = ()):
        super().__init__(f"Invalid coordinates format: {field}={value!r}")
        self.field = field
        self.value = value
        # Other field violations found in the same validation pass
        self.violations = violations


class InvalidCartValueError(DomainException):
    """Cart value string does not match the accepted money format"""

    pass
