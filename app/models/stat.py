from datetime import date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

CorrelationType = Literal["emotion", "context", "time_of_day", "day_of_week", "energy"]
PatternType = Literal["time_of_day", "day_of_week", "weekend", "emotion", "context"]
TrendDirection = Literal["up", "down", "stable"]


class DailyAggregate(BaseModel):
    date: date
    moods: List[int] = []
    avg: Optional[float] = None
    min: Optional[int] = None
    max: Optional[int] = None
    final_value: float
    interpolated: bool = False


class Quartiles(BaseModel):
    q1: float
    median: float
    q3: float
    min: float
    max: float
    outliers: List[float] = []


class WeeklyAggregate(BaseModel):
    week_start: date
    moods: List[int]
    quartiles: Quartiles
    avg: float
    # Median rather than mean: a single extreme entry in a sparse week skews the mean
    final_value: float


class CorrelationResult(BaseModel):
    type: CorrelationType
    label: str
    avg_mood: float
    delta: float
    count: int
    is_positive: bool


class CorrelationSummary(BaseModel):
    overall_avg: float = 0
    total_entries: int = 0
    correlations: List[CorrelationResult] = []
    top_positive: Optional[CorrelationResult] = None
    top_negative: Optional[CorrelationResult] = None


class Pattern(BaseModel):
    id: str
    type: PatternType
    title: str
    description: str
    confidence: float


class Streak(BaseModel):
    current: int = 0
    longest: int = 0


class MoodStats(BaseModel):
    total_entries: int
    average_mood: float
    mood_distribution: Dict[int, int]
    most_common_mood: int
    most_common_label: str
    entries_this_week: int
    entries_this_month: int
    streak: int


class PeriodStats(BaseModel):
    entry_count: int
    average_mood: float
    mood_change: float
    trend_direction: TrendDirection
    best_day: Optional[str] = None
    worst_day: Optional[str] = None
    most_common_mood: int
    energy_avg: Optional[float] = None
