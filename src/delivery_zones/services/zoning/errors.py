"""Exceptions raised by the zone store and zone service."""

from __future__ import annotations


class ZoneValidationError(ValueError):
    """A zone record violates the data model and cannot be loaded."""


class ZoneNotFoundError(LookupError):
    """No zone exists with the requested id."""

    def __init__(self, zone_id: str) -> None:
        super().__init__(f"Zone '{zone_id}' not found.")
        self.zone_id = zone_id


class OutsideDeliveryAreaError(LookupError):
    """The coordinate lies outside every active zone's geofence."""

    def __init__(self, latitude: float, longitude: float) -> None:
        super().__init__(f"No active delivery zone contains ({latitude}, {longitude}).")
        self.latitude = latitude
        self.longitude = longitude
