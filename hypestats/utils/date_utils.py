from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def resolve_timezone(tz_name: str) -> tzinfo:
    """Returns the `tzinfo` for the given IANA zone name. Raises `ValueError` for unknown zones."""
    if tz_name.upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f"Unknown time zone: '{tz_name}'") from ex


def start_of_day(now: datetime, tz: tzinfo) -> datetime:
    """
    Returns midnight (00:00:00.000) of `now`'s calendar date, as observed in `tz`.
    Naive `now` values are assumed to already be expressed in `tz`.
    """
    local_now = now.astimezone(tz) if now.tzinfo is not None else now.replace(tzinfo=tz)
    return local_now.replace(hour=0, minute=0, second=0, microsecond=0)


def to_js_iso_string(dt: datetime) -> str:
    """
    Formats `dt` the way a JS `Date` serializes to JSON, i.e. `2026-10-19T08:00:00.000Z`.
    Naive datetimes are treated as UTC, matching how pymongo decodes BSON dates.
    """
    utc_dt = dt.astimezone(UTC) if dt.tzinfo is not None else dt.replace(tzinfo=UTC)
    return utc_dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
