import logging
import re
from datetime import datetime
from typing import List, Optional

from fitflow.schemas.dashboard import Achievement, DashboardResponse, ProfileStat, StatCard
from fitflow.schemas.user_profile import UserProfile
from fitflow.services.catalog_service import recommended_for

logger = logging.getLogger(__name__)

"""
Dashboard Service
-----------------
Home and profile screen content: greeting, activity cards, profile stats and
achievements. Tracking data is not collected yet, so the numbers are the
fixed sample values shown on the screens.
"""

HOME_RECOMMENDATION_COUNT = 2

_LEADING_NUMBER = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)")
_DURATION = re.compile(r"^\s*(?:(\d+)\s*h)?\s*(?:(\d+)\s*m)?\s*$")


def greeting_for(hour: int) -> str:
    if hour < 12:
        return "Good morning"
    if hour < 18:
        return "Good afternoon"
    return "Good evening"


def parse_stat_value(value: Optional[str]) -> Optional[float]:
    """
    Numeric part of a display value: "72 bpm" -> 72.0, "5,248" -> 5248.0.
    Durations read as hours: "7h 24m" -> 7.4.
    """
    if value is None:
        return None
    text = str(value)
    duration = _DURATION.match(text)
    if duration and any(duration.groups()):
        hours, minutes = duration.groups()
        return int(hours or 0) + int(minutes or 0) / 60
    match = _LEADING_NUMBER.match(text.replace(",", ""))
    return float(match.group(1)) if match else None


def percent_change(value: Optional[str], previous: Optional[str]) -> Optional[float]:
    current = parse_stat_value(value)
    before = parse_stat_value(previous)
    if current is None or before is None or before == 0:
        return None
    return round((current - before) / before * 100, 1)


def _card(title: str, value: str, previous: str, icon: str, trend: str) -> StatCard:
    return StatCard(
        title=title,
        value=value,
        previous_value=previous,
        icon=icon,
        trend=trend,
        percent_change=percent_change(value, previous),
    )


def home_stats() -> List[StatCard]:
    return [
        _card("Heart Rate", "72 bpm", "68", "heart", "up"),
        _card("Activity", "842 cal", "790", "activity", "up"),
        _card("Steps", "5,248", "4,800", "activity", "up"),
        _card("Sleep", "7h 24m", "6h 58m", "activity", "up"),
    ]


def profile_stats() -> List[ProfileStat]:
    return [
        ProfileStat(label="Workouts", value="32"),
        ProfileStat(label="Total Minutes", value="860"),
        ProfileStat(label="Calories", value="12,480"),
        ProfileStat(label="Streak", value="8 days"),
    ]


def achievements() -> List[Achievement]:
    return [
        Achievement(id=1, title="Early Bird", description="Complete 5 workouts before 8AM", progress=80),
        Achievement(id=2, title="Power User", description="Log in for 10 consecutive days", progress=100),
        Achievement(id=3, title="Cardio Master", description="Complete 20 cardio workouts", progress=65),
    ]


def build_dashboard(profile: UserProfile, now: Optional[datetime] = None, seed: Optional[int] = None) -> DashboardResponse:
    now = now or datetime.now()
    recommended = recommended_for(profile, seed)[:HOME_RECOMMENDATION_COUNT]
    logger.info(f"[Dashboard] Built home screen for {profile.name} with {len(recommended)} recommendations")
    return DashboardResponse(
        greeting=f"{greeting_for(now.hour)}, {profile.name}",
        stats=home_stats(),
        recommended=recommended,
    )
