"""Zone service: the operations exposed to the checkout and admin surfaces."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ...data.zones_repository import ZoneRepository, get_zone_repository
from ...models.domain import Coordinate, DeliverySlot, Zone
from ..outputs.formatter import format_currency
from .errors import OutsideDeliveryAreaError, ZoneNotFoundError
from .resolver import ZoneResolver
from .slots import resolve_slots


@dataclass(frozen=True, slots=True)
class MinimumOrderCheck:
    valid: bool
    min_order_amount: int
    shortfall: int
    message: str


class ZoneService:
    """Wraps an injected zone store with resolution, listing and slot lookup."""

    def __init__(self, repository: ZoneRepository) -> None:
        self.repository = repository
        self.resolver = ZoneResolver(repository)

    def check_zone(self, latitude: float, longitude: float) -> Zone:
        """Resolve the zone delivering to a coordinate.

        Raises:
            OutsideDeliveryAreaError: if no active zone contains the point.
        """
        zone = self.resolver.resolve(Coordinate(latitude, longitude))
        if zone is None:
            logging.info(f"No delivery zone for ({latitude}, {longitude})")
            raise OutsideDeliveryAreaError(latitude, longitude)
        return zone

    def list_zones(self) -> list[Zone]:
        """Active zones, smallest radius first, then by name."""
        active = [zone for zone in self.repository.list_active_zones() if zone.is_active]
        return sorted(active, key=lambda zone: (zone.radius_km, zone.name))

    def get_zone(self, zone_id: str) -> Zone:
        zone = self.repository.get_zone(zone_id)
        if zone is None:
            raise ZoneNotFoundError(zone_id)
        return zone

    def delivery_slots(self, zone_id: Optional[str] = None) -> list[DeliverySlot]:
        """Zone-specific slots when the zone defines any, otherwise the default table."""
        zone = None
        if zone_id:
            zone = self.repository.get_zone(zone_id)
            if zone is None:
                logging.info(f"Unknown zone '{zone_id}' requested for slots - using defaults")
        return resolve_slots(zone)

    def validate_minimum_order(self, zone_id: str, order_amount: int) -> MinimumOrderCheck:
        zone = self.get_zone(zone_id)
        shortfall = max(0, zone.min_order_amount - order_amount)
        if shortfall:
            message = (
                f"Minimum order for {zone.name} is {format_currency(zone.min_order_amount)}. "
                f"Add {format_currency(shortfall)} more to place this order."
            )
        else:
            message = "Order meets the minimum amount."
        return MinimumOrderCheck(
            valid=shortfall == 0,
            min_order_amount=zone.min_order_amount,
            shortfall=shortfall,
            message=message,
        )


def get_zone_service() -> ZoneService:
    return ZoneService(get_zone_repository())
