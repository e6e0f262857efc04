import logging
from datetime import timezone, tzinfo
from typing import List, Optional, Sequence

from app.models.mood import MoodEntry
from app.models.stat import Pattern
from app.services.correlation_service import (
    capitalize,
    group_by_day,
    group_by_tag,
    group_by_time_of_day,
    ranked_averages,
)
from app.services.dates import DAY_NAMES, is_weekend, to_local

logger = logging.getLogger(__name__)

MIN_ENTRIES_FOR_PATTERNS = 7
MIN_CONFIDENCE = 0.3
DEFAULT_MAX_PATTERNS = 3


def _confidence(difference: float, normalizer: float) -> float:
    return max(0.0, min(difference / normalizer, 1.0))


def detect_time_of_day_pattern(entries: Sequence[MoodEntry], tz: tzinfo = timezone.utc) -> Optional[Pattern]:
    if len(entries) < 10:
        return None

    averages = ranked_averages(group_by_time_of_day(entries, tz), min_count=3)
    if len(averages) < 2:
        return None

    best, worst = averages[0], averages[-1]
    difference = worst[1] - best[1]
    if difference < 0.8:
        return None

    return Pattern(
        id="time_of_day",
        type="time_of_day",
        title="Time of Day",
        description=f"You tend to feel best in the {best[0]}s",
        confidence=_confidence(difference, 2),
    )


def detect_day_of_week_pattern(entries: Sequence[MoodEntry], tz: tzinfo = timezone.utc) -> Optional[Pattern]:
    # two weeks of data at minimum
    if len(entries) < 14:
        return None

    averages = ranked_averages(group_by_day(entries, tz), min_count=2)
    if len(averages) < 3:
        return None

    best, worst = averages[0], averages[-1]
    difference = worst[1] - best[1]
    if difference < 0.8:
        return None

    return Pattern(
        id="day_of_week",
        type="day_of_week",
        title="Best Day",
        description=f"{DAY_NAMES[best[0]]}s tend to be your best days",
        confidence=_confidence(difference, 2),
    )


def detect_weekend_pattern(entries: Sequence[MoodEntry], tz: tzinfo = timezone.utc) -> Optional[Pattern]:
    if len(entries) < 14:
        return None

    weekday = []
    weekend = []
    for entry in entries:
        if is_weekend(to_local(entry.timestamp, tz)):
            weekend.append(entry.mood)
        else:
            weekday.append(entry.mood)

    if len(weekday) < 5 or len(weekend) < 2:
        return None

    weekday_avg = sum(weekday) / len(weekday)
    weekend_avg = sum(weekend) / len(weekend)
    difference = abs(weekday_avg - weekend_avg)
    if difference < 0.5:
        return None

    better_on_weekends = weekend_avg < weekday_avg
    return Pattern(
        id="weekend",
        type="weekend",
        title="Weekend Effect",
        description=(
            "Your mood tends to be better on weekends"
            if better_on_weekends
            else "Your mood tends to be better on weekdays"
        ),
        confidence=_confidence(difference, 1.5),
    )


def detect_emotion_pattern(entries: Sequence[MoodEntry]) -> Optional[Pattern]:
    averages = ranked_averages(group_by_tag(entries, "emotions"), min_count=3)
    if len(averages) < 2:
        return None

    best, worst = averages[0], averages[-1]
    return Pattern(
        id="emotion_correlation",
        type="emotion",
        title="Emotion Insight",
        description=f'When feeling "{capitalize(best[0])}", your mood tends to be better',
        confidence=_confidence(worst[1] - best[1], 2),
    )


def detect_context_pattern(entries: Sequence[MoodEntry]) -> Optional[Pattern]:
    averages = ranked_averages(group_by_tag(entries, "context_tags"), min_count=3)
    if len(averages) < 2:
        return None

    best, worst = averages[0], averages[-1]
    return Pattern(
        id="context_correlation",
        type="context",
        title="Context Insight",
        description=f'"{capitalize(best[0])}" activities are associated with better moods',
        confidence=_confidence(worst[1] - best[1], 2),
    )


def detect_patterns(
    entries: Sequence[MoodEntry],
    max_patterns: int = DEFAULT_MAX_PATTERNS,
    tz: tzinfo = timezone.utc,
) -> List[Pattern]:
    """Run every detector and keep the most confident findings."""
    if len(entries) < MIN_ENTRIES_FOR_PATTERNS:
        return []

    candidates = [
        detect_time_of_day_pattern(entries, tz),
        detect_day_of_week_pattern(entries, tz),
        detect_weekend_pattern(entries, tz),
        detect_emotion_pattern(entries),
        detect_context_pattern(entries),
    ]
    patterns = [p for p in candidates if p is not None and p.confidence >= MIN_CONFIDENCE]
    patterns.sort(key=lambda p: p.confidence, reverse=True)

    logger.debug("Detected %d patterns from %d entries", len(patterns), len(entries))
    return patterns[:max_patterns]
