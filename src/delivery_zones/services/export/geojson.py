"""GeoJSON export of zone geofences."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from shapely.geometry import Polygon, mapping

from ...models.domain import Zone
from ..geospatial import destination_point


def generate_zone_color(index: int) -> str:
    """Generate distinct colors for zones."""
    colors = [
        "#02d8e0", "#e0003e", "#38e000", "#0000c1", "#e0e005",
        "#611cc7", "#e0af00", "#13aae0", "#a4d819", "#00e0bb",
    ]
    return colors[index % len(colors)]


def geofence_polygon(zone: Zone, segments: int = 64) -> Polygon:
    """Approximate the zone's circular geofence as a polygon in (lon, lat) order.

    Raises:
        ValueError: if the zone has no center or a non-positive radius.
    """
    if not zone.has_valid_geofence:
        raise ValueError(f"Zone '{zone.id}' has no valid geofence")
    if segments < 3:
        raise ValueError("Polygon must have at least 3 segments")

    ring = []
    for step in range(segments):
        point = destination_point(zone.center, 360.0 * step / segments, zone.radius_km)
        ring.append((point.longitude, point.latitude))
    return Polygon(ring)


def zones_to_feature_collection(zones: Sequence[Zone], segments: int = 64) -> Dict[str, Any]:
    """Convert zones to a GeoJSON FeatureCollection, largest radius drawn first.

    Zones without a valid geofence are left out.
    """
    features: List[Dict[str, Any]] = []
    drawable = [zone for zone in zones if zone.has_valid_geofence]
    for idx, zone in enumerate(sorted(drawable, key=lambda z: z.radius_km, reverse=True)):
        features.append(
            {
                "type": "Feature",
                "id": zone.id,
                "geometry": mapping(geofence_polygon(zone, segments)),
                "properties": {
                    "zone_name": zone.name,
                    "radius_km": zone.radius_km,
                    "delivery_charge": zone.delivery_charge,
                    "min_order_amount": zone.min_order_amount,
                    "center": [zone.center.longitude, zone.center.latitude],
                    "fillColor": generate_zone_color(idx),
                    "fillOpacity": 0.33,
                },
            }
        )
    return {"type": "FeatureCollection", "features": features}
