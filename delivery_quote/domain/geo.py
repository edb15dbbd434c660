"""Great-circle distance between customer and venue"""

import math

from delivery_quote.domain.models import Coordinate

EARTH_RADIUS_METERS = 6_371_000


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity"""
    return math.floor(value + 0.5)


def haversine_meters(user: Coordinate, venue: Coordinate) -> float:
    """Unrounded haversine distance in meters"""
    user_lat = math.radians(user.latitude)
    venue_lat = math.radians(venue.latitude)
    d_lat = math.radians(venue.latitude - user.latitude)
    d_lon = math.radians(venue.longitude - user.longitude)

    a = math.sin(d_lat / 2) ** 2 + math.cos(user_lat) * math.cos(venue_lat) * math.sin(d_lon / 2) ** 2
    # Float error can push a just past 1 for antipodal points
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def calculate_distance(user: Coordinate, venue: Coordinate) -> int:
    """
    Ground distance between two coordinates in whole meters.

    Haversine on a sphere of radius 6,371 km, rounded half up. The rounded
    value is what tier lookup and fee math use downstream.
    """
    return round_half_up(haversine_meters(user, venue))
