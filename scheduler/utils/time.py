from datetime import timedelta, timezone as dt_tz

from django.utils import timezone


def add_days(dt, days):
    return dt + timedelta(days=days)


def to_utc_iso(dt):
    if dt is None:
        return None
    return dt.astimezone(dt_tz.utc).isoformat()


def to_local_iso(dt):
    """Render an aware datetime in the configured TIME_ZONE."""
    if dt is None:
        return None
    return timezone.localtime(dt).isoformat()
