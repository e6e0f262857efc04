"""
Overall and per-period mood statistics.

`calculate_stats` summarises the whole log; `calculate_period_stats`
describes one day or week and compares it with the one before.
"""

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Dict, List, Literal, Optional, Sequence

from app.models.mood import NEUTRAL_MOOD, MoodEntry, get_mood_label
from app.models.stat import MoodStats, PeriodStats, TrendDirection
from app.services.dates import DAY_NAMES, day_index, local_date, to_local, week_start
from app.services.streak_service import calculate_streak

Period = Literal["day", "week", "all"]

TREND_THRESHOLD = 0.1


def _round1(value: float) -> float:
    return round(value * 10) / 10


def _distribution(entries: Sequence[MoodEntry]) -> Dict[int, int]:
    counts: Dict[int, int] = {}
    for entry in entries:
        counts[entry.mood] = counts.get(entry.mood, 0) + 1
    return dict(sorted(counts.items()))


def _most_common(distribution: Dict[int, int]) -> int:
    # lowest mood value wins a tie
    if not distribution:
        return NEUTRAL_MOOD
    return max(distribution, key=lambda mood: (distribution[mood], -mood))


def trend_direction(change: float, threshold: float = TREND_THRESHOLD) -> TrendDirection:
    """'down' is an improvement since lower moods are better."""
    if change < -threshold:
        return "down"
    if change > threshold:
        return "up"
    return "stable"


def calculate_stats(
    entries: Sequence[MoodEntry],
    now: Optional[datetime] = None,
    tz: tzinfo = timezone.utc,
) -> MoodStats:
    now = (now or datetime.now(timezone.utc)).astimezone(tz)
    today = now.date()

    if not entries:
        return MoodStats(
            total_entries=0,
            average_mood=0,
            mood_distribution={},
            most_common_mood=NEUTRAL_MOOD,
            most_common_label=get_mood_label(NEUTRAL_MOOD),
            entries_this_week=0,
            entries_this_month=0,
            streak=0,
        )

    average = sum(e.mood for e in entries) / len(entries)
    distribution = _distribution(entries)
    most_common = _most_common(distribution)

    this_week = week_start(today)
    this_month = today.replace(day=1)
    days = [local_date(e.timestamp, tz) for e in entries]

    return MoodStats(
        total_entries=len(entries),
        average_mood=_round1(average),
        mood_distribution=distribution,
        most_common_mood=most_common,
        most_common_label=get_mood_label(most_common),
        entries_this_week=sum(1 for d in days if this_week <= d <= today),
        entries_this_month=sum(1 for d in days if this_month <= d <= today),
        streak=calculate_streak(entries, today=today, tz=tz).current,
    )


def entries_in_period(
    entries: Sequence[MoodEntry],
    period: Period,
    anchor: date,
    tz: tzinfo = timezone.utc,
) -> List[MoodEntry]:
    if period == "all":
        return list(entries)

    if period == "week":
        start = week_start(anchor)
        end = start + timedelta(days=6)
    else:
        start = end = anchor

    return [e for e in entries if start <= local_date(e.timestamp, tz) <= end]


def previous_anchor(period: Period, anchor: date) -> date:
    if period == "week":
        return anchor - timedelta(weeks=1)
    return anchor - timedelta(days=1)


def calculate_period_stats(
    current: Sequence[MoodEntry],
    previous: Sequence[MoodEntry],
    tz: tzinfo = timezone.utc,
) -> PeriodStats:
    if not current:
        return PeriodStats(
            entry_count=0,
            average_mood=0,
            mood_change=0,
            trend_direction="stable",
            most_common_mood=NEUTRAL_MOOD,
        )

    average = sum(e.mood for e in current) / len(current)

    change = 0.0
    if previous:
        change = average - sum(e.mood for e in previous) / len(previous)

    by_day: Dict[int, List[int]] = {}
    for entry in current:
        by_day.setdefault(day_index(to_local(entry.timestamp, tz)), []).append(entry.mood)
    day_averages = sorted(
        ((day, sum(values) / len(values)) for day, values in by_day.items()),
        key=lambda item: item[1],
    )

    energies = [e.energy for e in current if e.energy is not None]
    energy_avg = _round1(sum(energies) / len(energies)) if energies else None

    return PeriodStats(
        entry_count=len(current),
        average_mood=_round1(average),
        mood_change=_round1(change),
        trend_direction=trend_direction(change),
        best_day=DAY_NAMES[day_averages[0][0]],
        worst_day=DAY_NAMES[day_averages[-1][0]],
        most_common_mood=_most_common(_distribution(current)),
        energy_avg=energy_avg,
    )
