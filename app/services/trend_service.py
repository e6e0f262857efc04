import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Dict, List, Literal, Optional, Sequence, Tuple, Union

from app.models.mood import NEUTRAL_MOOD, MoodEntry
from app.models.stat import DailyAggregate, WeeklyAggregate
from app.services.dates import MS_PER_DAY, local_date, midnight_ms, week_start
from app.services.distribution_service import compute_quartiles

logger = logging.getLogger(__name__)

Granularity = Literal["day", "week"]


def _sorted_entries(entries: Sequence[MoodEntry]) -> List[MoodEntry]:
    # sorted() is stable, ties keep their input order
    return sorted(entries, key=lambda e: e.timestamp)


def _interpolate(x: int, x0: int, y0: float, x1: int, y1: float) -> float:
    if x1 == x0:
        return y0
    return y0 + (y1 - y0) * (x - x0) / (x1 - x0)


def gap_value(
    day: date,
    prev: Optional[Tuple[date, float]],
    nxt: Optional[Tuple[date, float]],
    tz: tzinfo = timezone.utc,
) -> float:
    """Estimate for an empty day from its nearest (date, average) neighbours."""
    if prev is not None and nxt is not None:
        return _interpolate(
            midnight_ms(day, tz),
            midnight_ms(prev[0], tz), prev[1],
            midnight_ms(nxt[0], tz), nxt[1],
        )
    if prev is not None:
        return prev[1]
    if nxt is not None:
        return nxt[1]
    return float(NEUTRAL_MOOD)


def build_daily_series(
    entries: Sequence[MoodEntry],
    tz: tzinfo = timezone.utc,
    max_days: Optional[int] = None,
) -> List[DailyAggregate]:
    """
    One bucket per calendar day from the earliest to the latest entry.

    Days without entries get a linear estimate between the nearest real
    neighbours (x = local-midnight millis, y = neighbour average). With a
    single neighbour its value is held; with none the neutral mood is used.
    `max_days` keeps only the last N days ending at the most recent entry;
    None or a value below 1 means no window.
    """
    ordered = _sorted_entries(entries)
    if not ordered:
        return []

    latest = local_date(ordered[-1].timestamp, tz)
    if max_days is not None and max_days >= 1:
        cutoff = latest - timedelta(days=max_days - 1)
        ordered = [e for e in ordered if local_date(e.timestamp, tz) >= cutoff]
        if not ordered:
            return []
    earliest = local_date(ordered[0].timestamp, tz)

    moods_by_day: Dict[date, List[int]] = {}
    for entry in ordered:
        moods_by_day.setdefault(local_date(entry.timestamp, tz), []).append(entry.mood)

    total_days = (latest - earliest).days + 1
    days = [earliest + timedelta(days=i) for i in range(total_days)]

    averages: List[Optional[float]] = []
    for day in days:
        values = moods_by_day.get(day)
        averages.append(sum(values) / len(values) if values else None)

    series: List[DailyAggregate] = []
    for i, day in enumerate(days):
        values = moods_by_day.get(day, [])
        if values:
            series.append(DailyAggregate(
                date=day,
                moods=values,
                avg=averages[i],
                min=min(values),
                max=max(values),
                final_value=averages[i],
                interpolated=False,
            ))
            continue

        prev_i = next((j for j in range(i - 1, -1, -1) if averages[j] is not None), None)
        next_i = next((j for j in range(i + 1, total_days) if averages[j] is not None), None)

        value = gap_value(
            day,
            (days[prev_i], averages[prev_i]) if prev_i is not None else None,
            (days[next_i], averages[next_i]) if next_i is not None else None,
            tz,
        )

        series.append(DailyAggregate(date=day, moods=[], final_value=value, interpolated=True))

    logger.debug("Built daily series: %d days from %d entries", len(series), len(ordered))
    return series


def build_weekly_series(
    entries: Sequence[MoodEntry],
    tz: tzinfo = timezone.utc,
    max_weeks: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[WeeklyAggregate]:
    """
    One bucket per Monday-aligned week that has entries, oldest first.

    Weeks without entries are left out rather than interpolated.
    `max_weeks` drops entries older than `now - 7 * max_weeks` days.
    """
    ordered = _sorted_entries(entries)
    if max_weeks is not None:
        now = now or datetime.now(timezone.utc)
        cutoff_ms = int(now.timestamp() * 1000) - max_weeks * 7 * MS_PER_DAY
        ordered = [e for e in ordered if e.timestamp >= cutoff_ms]

    moods_by_week: Dict[date, List[int]] = {}
    for entry in ordered:
        key = week_start(local_date(entry.timestamp, tz))
        moods_by_week.setdefault(key, []).append(entry.mood)

    series: List[WeeklyAggregate] = []
    for key in sorted(moods_by_week):
        values = moods_by_week[key]
        quartiles = compute_quartiles(values)
        series.append(WeeklyAggregate(
            week_start=key,
            moods=values,
            quartiles=quartiles,
            avg=sum(values) / len(values),
            final_value=quartiles.median,
        ))

    logger.debug("Built weekly series: %d weeks from %d entries", len(series), len(ordered))
    return series


def build_series(
    entries: Sequence[MoodEntry],
    granularity: Granularity,
    tz: tzinfo = timezone.utc,
    window: Optional[int] = None,
) -> Union[List[DailyAggregate], List[WeeklyAggregate]]:
    """Dispatch to the daily or weekly builder; `window` is days or weeks."""
    if granularity == "day":
        return build_daily_series(entries, tz=tz, max_days=window)
    if granularity == "week":
        return build_weekly_series(entries, tz=tz, max_weeks=window)
    raise ValueError(f"Unknown granularity: {granularity!r}")
