"""Resolve which delivery zone contains a coordinate."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...models.domain import Coordinate, Zone
from ..geospatial import distance_km


def candidate_zones(zones: Sequence[Zone]) -> list[Zone]:
    """Active zones with a usable geofence, smallest (most specific) first.

    Zones with a missing center or a non-finite or non-positive radius are
    dropped before sorting. The sort is stable, so zones sharing a radius keep
    their store order.
    """

    usable: list[Zone] = []
    for zone in zones:
        if not zone.is_active:
            continue
        if not zone.has_valid_geofence:
            logging.warning(
                f"Skipping zone '{zone.id}' with degenerate geofence "
                f"(center={zone.center}, radius_km={zone.radius_km})"
            )
            continue
        usable.append(zone)
    return sorted(usable, key=lambda zone: zone.radius_km)


def zone_contains(zone: Zone, point: Coordinate) -> bool:
    """Return True if ``point`` lies within the zone's geofence (boundary inclusive)."""

    if not zone.has_valid_geofence:
        return False
    return distance_km(zone.center, point) <= zone.radius_km


def resolve_zone(point: Coordinate, zones: Sequence[Zone]) -> Optional[Zone]:
    """Return the smallest-radius active zone whose geofence contains ``point``.

    Distance is measured from each zone's own center. Degenerate zones never
    match. Returns ``None`` when the point is outside every active zone.
    """

    for zone in candidate_zones(zones):
        if zone_contains(zone, point):
            return zone
    return None


class ZoneResolver:
    """Resolves coordinates against zones supplied by an injected store."""

    def __init__(self, repository) -> None:
        self.repository = repository

    def resolve(self, point: Coordinate) -> Optional[Zone]:
        # one snapshot per call; the store is never re-read mid-resolution
        snapshot = tuple(self.repository.list_active_zones())
        return resolve_zone(point, snapshot)
