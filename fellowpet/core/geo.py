"""Great-circle distance helpers."""

import math
from typing import Optional

from fellowpet.core.models import Coordinates, Location, valid_coordinates

EARTH_RADIUS_KM = 6371.0
DISTANCE_PRECISION = 3
UNKNOWN_DISTANCE = math.inf


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(origin: Location, coordinates: Optional[Coordinates]) -> float:
    """Distance in km rounded to metres.

    Missing or malformed coordinates on either side give UNKNOWN_DISTANCE.
    """
    if coordinates is None:
        return UNKNOWN_DISTANCE
    if not (
        valid_coordinates(origin.latitude, origin.longitude)
        and valid_coordinates(coordinates.latitude, coordinates.longitude)
    ):
        return UNKNOWN_DISTANCE
    km = haversine_km(origin.latitude, origin.longitude, coordinates.latitude, coordinates.longitude)
    if not math.isfinite(km):
        return UNKNOWN_DISTANCE
    return round(km, DISTANCE_PRECISION)
