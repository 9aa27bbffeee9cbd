"""
General helper utilities
"""
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from open_maintenance.config import get_settings


def site_now(tz_name: Optional[str] = None) -> datetime:
    """Current time at the building. Empty zone name falls back to server local time."""
    if tz_name is None:
        tz_name = get_settings().SITE_TIMEZONE
    if not tz_name:
        return datetime.now()
    return datetime.now(ZoneInfo(tz_name))


def site_today(tz_name: Optional[str] = None) -> date:
    """Calendar date that counts as "today" for the task list"""
    return site_now(tz_name).date()


def utc_now() -> datetime:
    """Timezone-aware current UTC time for stored timestamps"""
    return datetime.now(timezone.utc)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp for health responses"""
    return utc_now().isoformat()
