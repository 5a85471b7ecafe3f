#!/usr/bin/env python3
"""Helper script to check and create .env file for the zone store configuration."""

from pathlib import Path
import os

TEMPLATE = """# Supabase Configuration (optional - zones are read from DZ_ZONES_FILE otherwise)
DZ_SUPABASE_URL=https://your-project-id.supabase.co
DZ_SUPABASE_KEY=your-service-role-key-here
DZ_ZONES_TABLE=zone

# API Configuration
DZ_API_PREFIX=/api
DZ_LOG_LEVEL=INFO
# DZ_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list

# Data Paths
DZ_DATA_ROOT=./data
DZ_ZONES_FILE=./data/zones.json

# Business center used when seeding reference zones
DZ_DEFAULT_CENTER_LAT=13.0827
DZ_DEFAULT_CENTER_LNG=80.2707
"""


def _mask(value: str) -> str:
    return value[:20] + "..." + value[-10:] if len(value) > 30 else value


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Delivery Zone Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"✅ Created template .env file at: {env_file}")
        print("⚠️  Edit .env to point at your zone store, then run this again.")
        return

    print(f"✅ Found .env file at: {env_file}")
    for line in env_file.read_text(encoding="utf-8").splitlines():
        if line.startswith("DZ_SUPABASE_KEY=") and "=" in line:
            name, value = line.split("=", 1)
            print(f"{name}={_mask(value.strip())}")
        else:
            print(line)
    print()

    for name in ("DZ_SUPABASE_URL", "DZ_SUPABASE_KEY", "DZ_ZONES_FILE"):
        value = os.getenv(name)
        if value:
            print(f"✅ {name} (from environment): {_mask(value)}")
        else:
            print(f"➖ {name} not set in environment")
    print()

    try:
        from src.delivery_zones.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    if settings.supabase_url and settings.supabase_key:
        print("✅ Zone store: Supabase table", settings.zones_table)
    elif settings.zones_file.exists():
        print("✅ Zone store: JSON file", settings.zones_file)
    else:
        print("⚠️  Zone store: built-in reference zones (run seed_zones.py to write a zone file)")


if __name__ == "__main__":
    main()
