"""Route group exports."""

from . import delivery_slots, health, zones

__all__ = ["zones", "delivery_slots", "health"]
