from datetime import date, tzinfo
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query

from app.config import settings
from app.db import mood_store
from app.models.mood import MoodEntry
from app.models.stat import (
    CorrelationSummary,
    DailyAggregate,
    MoodStats,
    Pattern,
    PeriodStats,
    Streak,
    WeeklyAggregate,
)
from app.routers.auth_dependency import get_current_user_id
from app.services.correlation_service import compute_correlations
from app.services.dates import today_in, tz_from_offset
from app.services.pattern_service import detect_patterns
from app.services.stats_service import (
    calculate_period_stats,
    calculate_stats,
    entries_in_period,
    previous_anchor,
)
from app.services.streak_service import calculate_streak
from app.services.trend_service import build_daily_series, build_weekly_series

router = APIRouter(
    prefix="/stats",
    tags=["Statistics"],
    dependencies=[Depends(get_current_user_id)]
)


# ==========================================
# DEPENDENCIES
# ==========================================

def get_user_entries(user_id: str = Depends(get_current_user_id)) -> List[MoodEntry]:
    # storage errors propagate to the PyMongoError handler in app.main
    return mood_store.get_all_entries(user_id)


def get_client_tz(
    timezone_offset: int = Query(0, ge=-14 * 60, le=14 * 60, description="Client UTC offset in minutes")
) -> tzinfo:
    return tz_from_offset(timezone_offset)


# ==========================================
# API ENDPOINTS
# ==========================================

@router.get("/daily", response_model=List[DailyAggregate])
async def get_daily_trend(
    max_days: Optional[int] = Query(None, ge=1, description="Days to include, ending at the latest entry"),
    entries: List[MoodEntry] = Depends(get_user_entries),
    tz: tzinfo = Depends(get_client_tz)
):
    return build_daily_series(entries, tz=tz, max_days=max_days or settings.daily_window_days)


@router.get("/weekly", response_model=List[WeeklyAggregate])
async def get_weekly_trend(
    max_weeks: Optional[int] = Query(None, ge=1, description="Weeks to include, ending now"),
    entries: List[MoodEntry] = Depends(get_user_entries),
    tz: tzinfo = Depends(get_client_tz)
):
    return build_weekly_series(entries, tz=tz, max_weeks=max_weeks or settings.weekly_window_weeks)


@router.get("/correlations", response_model=CorrelationSummary)
async def get_correlations(
    entries: List[MoodEntry] = Depends(get_user_entries),
    tz: tzinfo = Depends(get_client_tz)
):
    return compute_correlations(entries, tz=tz)


@router.get("/patterns", response_model=List[Pattern])
async def get_patterns(
    max_patterns: Optional[int] = Query(None, ge=1, le=5),
    period: Literal["day", "week", "all"] = Query("all"),
    anchor: Optional[date] = Query(None, description="Any day inside the period, defaults to today"),
    entries: List[MoodEntry] = Depends(get_user_entries),
    tz: tzinfo = Depends(get_client_tz)
):
    # a single day is too short to show a pattern
    if period == "day":
        return []
    if period == "week":
        entries = entries_in_period(entries, period, anchor or today_in(tz), tz)
    return detect_patterns(entries, max_patterns=max_patterns or settings.max_patterns, tz=tz)


@router.get("/streak", response_model=Streak)
async def get_streak(
    entries: List[MoodEntry] = Depends(get_user_entries),
    tz: tzinfo = Depends(get_client_tz)
):
    return calculate_streak(entries, tz=tz)


@router.get("/summary", response_model=MoodStats)
async def get_summary(
    entries: List[MoodEntry] = Depends(get_user_entries),
    tz: tzinfo = Depends(get_client_tz)
):
    return calculate_stats(entries, tz=tz)


@router.get("/period", response_model=PeriodStats)
async def get_period_stats(
    period: Literal["day", "week", "all"] = Query("week"),
    anchor: Optional[date] = Query(None, description="Any day inside the period, defaults to today"),
    entries: List[MoodEntry] = Depends(get_user_entries),
    tz: tzinfo = Depends(get_client_tz)
):
    anchor = anchor or today_in(tz)
    current = entries_in_period(entries, period, anchor, tz)
    previous = []
    if period != "all":
        previous = entries_in_period(entries, period, previous_anchor(period, anchor), tz)
    return calculate_period_stats(current, previous, tz=tz)
