# ABOUTME: Lays out candidate study-session timestamps across the historical window.
# ABOUTME: Scales weekly session counts by frequency and consistency settings.

from __future__ import annotations

import math
import random
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

import pandas as pd

SESSIONS_PER_WEEK = {"low": 2, "medium": 4, "high": 6}
# (low, high) multiplier range; None keeps the base count.
CONSISTENCY_SCALE = {"inconsistent": (0.3, 1.0), "moderate": (0.6, 1.0), "consistent": None}
WEEKS_PER_MONTH = 4.33
FIRST_SESSION_HOUR = 8
SESSION_HOURS = 12  # 8 AM to 8 PM

# Headroom kept before `now` so completions, interactions, and help
# resolutions derived from a session never land in the future.
SESSION_TAIL = timedelta(hours=2)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def history_window(time_range_months: int, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Return (start, end) of the window covered by `time_range_months` calendar months."""

    end = now or utc_now()
    start = (pd.Timestamp(end) - pd.DateOffset(months=time_range_months)).to_pydatetime()
    return start, end


def sessions_for_week(session_frequency: str, consistency_level: str, rng: random.Random) -> int:
    base = SESSIONS_PER_WEEK[session_frequency]
    scale = CONSISTENCY_SCALE[consistency_level]
    if scale is None:
        return max(1, base)
    return max(1, math.floor(base * rng.uniform(*scale)))


def generate_session_timeline(
    time_range_months: int,
    session_frequency: str,
    consistency_level: str,
    rng: random.Random,
    now: Optional[datetime] = None,
) -> List[datetime]:
    """
    Produce a sorted list of session timestamps inside the history window.

    Each week gets at least one session; each session lands on a random day of
    its week between 8 AM and 8 PM.
    """

    window_start, window_end = history_window(time_range_months, now)
    horizon = window_end - SESSION_TAIL
    total_weeks = time_range_months * WEEKS_PER_MONTH

    sessions: List[datetime] = []
    week = 0
    while week < total_weeks:
        week_start = window_start + timedelta(days=7 * week)
        if week_start > horizon:
            break
        for _ in range(sessions_for_week(session_frequency, consistency_level, rng)):
            day = week_start + timedelta(days=rng.randrange(7))
            session = day.replace(
                hour=FIRST_SESSION_HOUR + rng.randrange(SESSION_HOURS),
                minute=rng.randrange(60),
                second=0,
                microsecond=0,
            )
            sessions.append(min(max(session, window_start), horizon))
        week += 1

    sessions.sort()
    return sessions
