"""
Mood correlation statistics.

Splits the log along five independent dimensions (emotion tag, context
tag, time of day, weekday, energy level) and reports how far each
sub-group's average mood sits from the overall average. Lower mood values
are better, so a negative delta marks a factor associated with better
moods.
"""

import logging
from datetime import timezone, tzinfo
from typing import Dict, Iterable, List, Sequence, Tuple, TypeVar

from app.models.mood import MoodEntry
from app.models.stat import CorrelationResult, CorrelationSummary, CorrelationType
from app.services.dates import DAY_NAMES, TIME_OF_DAY_SLOTS, day_index, time_of_day, to_local

logger = logging.getLogger(__name__)

K = TypeVar("K")

MIN_ENTRIES_FOR_CORRELATION = 3

TIME_OF_DAY_LABELS = {
    "morning": "Mornings",
    "afternoon": "Afternoons",
    "evening": "Evenings",
    "night": "Nights",
}

ENERGY_LABELS = {
    "low": "Low Energy (0-3)",
    "medium": "Medium Energy (4-6)",
    "high": "High Energy (7-10)",
}


def capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def energy_bucket(energy: int) -> str:
    if energy <= 3:
        return "low"
    if energy <= 6:
        return "medium"
    return "high"


def group_by_tag(entries: Iterable[MoodEntry], field: str) -> Dict[str, List[int]]:
    """Mood values per lower-cased tag; an entry counts once for each of its tags."""
    groups: Dict[str, List[int]] = {}
    for entry in entries:
        for tag in getattr(entry, field) or []:
            groups.setdefault(tag.lower(), []).append(entry.mood)
    return groups


def group_by_time_of_day(entries: Iterable[MoodEntry], tz: tzinfo) -> Dict[str, List[int]]:
    groups: Dict[str, List[int]] = {slot: [] for slot in TIME_OF_DAY_SLOTS}
    for entry in entries:
        groups[time_of_day(to_local(entry.timestamp, tz).hour)].append(entry.mood)
    return groups


def group_by_day(entries: Iterable[MoodEntry], tz: tzinfo) -> Dict[int, List[int]]:
    groups: Dict[int, List[int]] = {i: [] for i in range(7)}
    for entry in entries:
        groups[day_index(to_local(entry.timestamp, tz))].append(entry.mood)
    return groups


def group_by_energy(entries: Iterable[MoodEntry]) -> Dict[str, List[int]]:
    groups: Dict[str, List[int]] = {bucket: [] for bucket in ENERGY_LABELS}
    for entry in entries:
        if entry.energy is not None:
            groups[energy_bucket(entry.energy)].append(entry.mood)
    return groups


def _results(
    kind: CorrelationType,
    groups: Iterable[Tuple[str, List[int]]],
    overall_avg: float,
) -> List[CorrelationResult]:
    results = []
    for label, values in groups:
        if len(values) < MIN_ENTRIES_FOR_CORRELATION:
            continue
        avg = sum(values) / len(values)
        delta = avg - overall_avg
        results.append(CorrelationResult(
            type=kind,
            label=label,
            avg_mood=avg,
            delta=delta,
            count=len(values),
            is_positive=delta < 0,
        ))
    return results


def compute_correlations(
    entries: Sequence[MoodEntry],
    tz: tzinfo = timezone.utc,
) -> CorrelationSummary:
    if len(entries) < MIN_ENTRIES_FOR_CORRELATION:
        return CorrelationSummary(total_entries=len(entries))

    overall_avg = sum(e.mood for e in entries) / len(entries)

    correlations: List[CorrelationResult] = []
    correlations += _results(
        "emotion",
        ((capitalize(k), v) for k, v in group_by_tag(entries, "emotions").items()),
        overall_avg,
    )
    correlations += _results(
        "context",
        ((capitalize(k), v) for k, v in group_by_tag(entries, "context_tags").items()),
        overall_avg,
    )
    correlations += _results(
        "time_of_day",
        ((TIME_OF_DAY_LABELS[k], v) for k, v in group_by_time_of_day(entries, tz).items()),
        overall_avg,
    )
    correlations += _results(
        "day_of_week",
        ((DAY_NAMES[k], v) for k, v in group_by_day(entries, tz).items()),
        overall_avg,
    )
    correlations += _results(
        "energy",
        ((ENERGY_LABELS[k], v) for k, v in group_by_energy(entries).items()),
        overall_avg,
    )

    correlations.sort(key=lambda c: abs(c.delta), reverse=True)

    top_positive = next((c for c in correlations if c.is_positive), None)
    top_negative = next((c for c in correlations if not c.is_positive), None)

    logger.debug(
        "Computed %d correlations over %d entries (overall avg %.2f)",
        len(correlations), len(entries), overall_avg,
    )
    return CorrelationSummary(
        overall_avg=overall_avg,
        total_entries=len(entries),
        correlations=correlations,
        top_positive=top_positive,
        top_negative=top_negative,
    )


def top_correlations(summary: CorrelationSummary, n: int = 5) -> List[CorrelationResult]:
    return summary.correlations[:n]


def filter_correlations(summary: CorrelationSummary, kind: CorrelationType) -> List[CorrelationResult]:
    return [c for c in summary.correlations if c.type == kind]


def format_delta(delta: float, precision: int = 1) -> str:
    value = f"{abs(delta):.{precision}f}"
    return f"-{value}" if delta < 0 else f"+{value}"


def describe_correlation(result: CorrelationResult) -> str:
    better_or_worse = "better" if result.is_positive else "worse"
    delta = format_delta(result.delta)

    if result.type == "emotion":
        return f'When feeling "{result.label}", mood is {delta} ({better_or_worse})'
    if result.type == "context":
        return f'"{result.label}" activities: mood is {delta} ({better_or_worse})'
    if result.type == "day_of_week":
        return f"{result.label}s: mood is {delta} ({better_or_worse})"
    return f"{result.label}: mood is {delta} ({better_or_worse})"


def ranked_averages(groups: Dict[K, List[int]], min_count: int) -> List[Tuple[K, float]]:
    """(key, average) for groups with at least `min_count` values, best (lowest) first."""
    return sorted(
        ((key, sum(values) / len(values)) for key, values in groups.items() if len(values) >= min_count),
        key=lambda item: item[1],
    )
