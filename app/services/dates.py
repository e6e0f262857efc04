"""Calendar helpers shared by the analytics services.

Entries carry epoch-millisecond timestamps; every calendar question (which
day, which hour, which weekday) is answered in the caller-supplied timezone.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional

MS_PER_DAY = 86_400_000

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

TIME_OF_DAY_SLOTS = ("morning", "afternoon", "evening", "night")


def tz_from_offset(offset_minutes: int) -> tzinfo:
    """Build a fixed-offset timezone from a client offset in minutes."""
    if offset_minutes == 0:
        return timezone.utc
    return timezone(timedelta(minutes=offset_minutes))


def to_local(timestamp_ms: int, tz: tzinfo = timezone.utc) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz)


def local_date(timestamp_ms: int, tz: tzinfo = timezone.utc) -> date:
    return to_local(timestamp_ms, tz).date()


def midnight_ms(day: date, tz: tzinfo = timezone.utc) -> int:
    """Epoch millis of local midnight starting `day`."""
    return int(datetime.combine(day, time.min, tzinfo=tz).timestamp() * 1000)


def week_start(day: date) -> date:
    """Monday of the week containing `day`."""
    return day - timedelta(days=day.weekday())


def day_index(dt: datetime) -> int:
    """Weekday index with 0 = Sunday ... 6 = Saturday."""
    return (dt.weekday() + 1) % 7


def is_weekend(dt: datetime) -> bool:
    return dt.weekday() >= 5


def time_of_day(hour: int) -> str:
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "night"


def today_in(tz: tzinfo = timezone.utc, now: Optional[datetime] = None) -> date:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(tz).date()
