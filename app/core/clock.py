from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Horodatage ISO-8601 UTC, format attendu par Supabase"""
    return datetime.now(timezone.utc).isoformat()
