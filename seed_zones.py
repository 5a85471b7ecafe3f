#!/usr/bin/env python3
"""Seed the reference delivery zones into the zone file and, if configured, Supabase."""

import logging
import sys

from src.delivery_zones.config import settings
from src.delivery_zones.data.seed import reference_zones
from src.delivery_zones.data.zones_repository import SupabaseZoneRepository, zone_to_record
from src.delivery_zones.db.supabase import get_supabase_client
from src.delivery_zones.persistence.filesystem import FileStorage
from src.delivery_zones.services.export.geojson import zones_to_feature_collection
from src.delivery_zones.services.outputs.formatter import format_currency


def main() -> int:
    logging.basicConfig(level=settings.log_level.upper())
    zones = reference_zones()
    storage = FileStorage()

    storage.write_json(settings.zones_file, {"zones": [zone_to_record(zone) for zone in zones]})
    print(f"✅ Wrote {len(zones)} zones to {settings.zones_file}")

    run_dir = storage.make_run_directory(prefix="zones_geojson")
    storage.write_json(run_dir / "zones.geojson", zones_to_feature_collection(zones))
    print(f"🗺️  GeoJSON overlay written to {run_dir / 'zones.geojson'}")

    client = get_supabase_client()
    if client is not None:
        try:
            count = SupabaseZoneRepository(client).upsert_zones(zones)
            print(f"✅ Upserted {count} zones into '{settings.zones_table}'")
        except Exception as exc:
            logging.error(f"Failed to sync zones to Supabase: {exc}")
            return 1

    print(f"\n📍 Business Center: ({settings.default_center_lat}, {settings.default_center_lng})")
    for zone in zones:
        charge = "Free delivery" if zone.delivery_charge == 0 else f"{format_currency(zone.delivery_charge)} delivery"
        print(f"  {zone.name}: {zone.radius_km:g} km | {charge} | Min order {format_currency(zone.min_order_amount)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
