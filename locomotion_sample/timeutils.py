"""Time zone lookup and time-of-day helpers."""

from __future__ import annotations

from datetime import datetime, tzinfo

from zoneinfo import ZoneInfo


def tzinfo_from_name(tz_name: str) -> tzinfo:
    """Create tzinfo from an IANA timezone name.

    Raises:
        ValueError: If timezone name is invalid on this system.
    """

    try:
        return ZoneInfo(tz_name)
    except Exception as exc:  # ZoneInfo raises KeyError / ZoneInfoNotFoundError (platform dependent)
        raise ValueError(f"无效时区：{tz_name!r}。例如可用：Asia/Shanghai") from exc


def dt_from_epoch_ms(epoch_ms: int, tz_name: str) -> datetime:
    """Convert epoch milliseconds to a timezone-aware datetime in tz_name."""

    return datetime.fromtimestamp(epoch_ms / 1000.0, tz=tzinfo_from_name(tz_name))


def seconds_since_start_of_day(dt: datetime) -> float:
    """Real seconds elapsed since local midnight, in dt's own timezone.

    Uses absolute timestamps, so a day with a DST transition yields 23 or 25
    hours' worth of seconds by midnight. Naive datetimes are taken as system
    local time.
    """

    midnight = dt.replace(hour=0, minute=0, second=0, microsecond=0, fold=0)
    return dt.timestamp() - midnight.timestamp()


def format_hhmmss(seconds: float) -> str:
    s = int(round(max(0.0, seconds)))
    h = s // 3600
    m = (s % 3600) // 60
    sec = s % 60
    return f"{h:02d}:{m:02d}:{sec:02d}"
