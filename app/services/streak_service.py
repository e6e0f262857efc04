from datetime import date, timedelta, timezone, tzinfo
from typing import Optional, Sequence

from app.models.mood import MoodEntry
from app.models.stat import Streak
from app.services.dates import local_date, today_in


def calculate_streak(
    entries: Sequence[MoodEntry],
    today: Optional[date] = None,
    tz: tzinfo = timezone.utc,
) -> Streak:
    dates = sorted({local_date(e.timestamp, tz) for e in entries}, reverse=True)
    if not dates:
        return Streak(current=0, longest=0)

    # 1. Longest streak
    longest_streak = 1
    current_run = 1
    ascending = dates[::-1]
    for i in range(1, len(ascending)):
        if (ascending[i] - ascending[i - 1]).days == 1:
            current_run += 1
            longest_streak = max(longest_streak, current_run)
        else:
            current_run = 1

    # 2. Current streak, must reach today or yesterday
    today = today or today_in(tz)
    yesterday = today - timedelta(days=1)

    current_streak = 0
    if dates[0] in (today, yesterday):
        current_streak = 1
        for i in range(1, len(dates)):
            if (dates[i - 1] - dates[i]).days != 1:
                break
            current_streak += 1

    return Streak(current=current_streak, longest=longest_streak)
