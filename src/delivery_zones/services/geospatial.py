"""Geospatial helper functions.

Inputs are decimal degrees. Latitudes outside [-90, 90] or longitudes outside
[-180, 180] are not rejected; callers are responsible for supplying valid
coordinates, otherwise the result is defined but meaningless.
"""

from __future__ import annotations

import math

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # clamp against rounding drift above 1.0 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in kilometers between two coordinates."""

    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def destination_point(origin: Coordinate, bearing: float, distance: float) -> Coordinate:
    """Return the point reached travelling ``distance`` km from ``origin`` on ``bearing`` degrees."""

    angular = distance / EARTH_RADIUS_KM
    theta = math.radians(bearing)
    phi1 = math.radians(origin.latitude)
    lambda1 = math.radians(origin.longitude)

    phi2 = math.asin(
        math.sin(phi1) * math.cos(angular) + math.cos(phi1) * math.sin(angular) * math.cos(theta)
    )
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(angular) * math.cos(phi1),
        math.cos(angular) - math.sin(phi1) * math.sin(phi2),
    )
    longitude = (math.degrees(lambda2) + 540) % 360 - 180
    return Coordinate(latitude=math.degrees(phi2), longitude=longitude)
