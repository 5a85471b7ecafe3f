"""Export services."""

from .geojson import geofence_polygon, zones_to_feature_collection

__all__ = [
    "geofence_polygon",
    "zones_to_feature_collection",
]
