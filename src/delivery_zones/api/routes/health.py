"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and zone storage status."""
    from ...db.supabase import get_supabase_client
    from ...data.zones_repository import SupabaseZoneRepository

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set DZ_SUPABASE_URL and DZ_SUPABASE_KEY environment variables.",
            "zones_file": str(settings.zones_file),
            "zones_file_exists": settings.zones_file.exists(),
        }

    try:
        zones = SupabaseZoneRepository(supabase).list_active_zones()
        return {
            "configured": True,
            "connected": True,
            "active_zones": len(zones),
            "message": f"Database connected. Found {len(zones)} active zones in '{settings.zones_table}'.",
        }
    except ConnectionError as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
