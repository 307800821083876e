# core/supabase_client.py

from typing import Optional

from supabase import AsyncClient, Client, acreate_client, create_client
from core.config import settings
from core.logging_config import logger


DASHBOARD_TABLES = ["properties", "property_units", "tenants", "profiles"]


# ============================================================
# Per-session client (anon key; row-level security applies)
# ============================================================

async def create_session_client() -> AsyncClient:
    """
    Creates a Supabase async client using the ANON KEY.

    Each dashboard session owns one of these: its auth state is the
    signed-in user's, and PostgREST calls carry that user's JWT.
    """
    supabase_url = settings.SUPABASE_URL
    supabase_key = settings.SUPABASE_ANON_KEY

    if not supabase_url or not supabase_key:
        logger.error("Missing Supabase credentials")
        logger.error(f"   URL: {supabase_url}")
        logger.error(f"   ANON KEY: {'SET' if supabase_key else 'MISSING'}")
        raise RuntimeError("Supabase is not configured")

    return await acreate_client(supabase_url, supabase_key)


# ============================================================
# Service client (health checks only)
# ============================================================

def get_service_client() -> Optional[Client]:
    """Sync client with the SERVICE ROLE KEY, or None when unconfigured."""
    try:
        supabase_url = settings.SUPABASE_URL
        supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY

        if not supabase_url or not supabase_key:
            return None

        return create_client(supabase_url, supabase_key)

    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None


# ============================================================
# Ping Supabase for health checks
# ============================================================

def ping_supabase() -> dict:
    """
    Simple connectivity check against the dashboard tables.
    """
    try:
        client = get_service_client()
        if client is None:
            return {"service": "Supabase", "status": "not_configured"}

        results = {}

        for t in DASHBOARD_TABLES:
            try:
                res = client.table(t).select("*").limit(1).execute()
                results[t] = {
                    "status": "ok",
                    "rows_found": len(res.data or [])
                }
            except Exception as err:
                results[t] = {"status": "error", "detail": str(err)}

        return {
            "service": "Supabase",
            "status": "ok",
            "tables": results,
        }

    except Exception as e:
        logger.error(f"Supabase Ping Error: {e}", exc_info=True)
        return {"service": "Supabase", "status": "error", "detail": str(e)}
