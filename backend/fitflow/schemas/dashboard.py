from pydantic import BaseModel
from typing import List, Literal, Optional

from fitflow.schemas.user_profile import UserProfile
from fitflow.schemas.workout import Workout


class StatCard(BaseModel):
    title: str
    value: str
    previous_value: Optional[str] = None
    icon: Literal["heart", "activity", "steps", "calories"] = "activity"
    trend: Literal["up", "down", "neutral"] = "neutral"
    change_label: str = "vs yesterday"
    percent_change: Optional[float] = None


class ProfileStat(BaseModel):
    label: str
    value: str


class Achievement(BaseModel):
    id: int
    title: str
    description: str
    progress: int


class DashboardResponse(BaseModel):
    greeting: str
    stats: List[StatCard]
    recommended: List[Workout]


class ProfileResponse(BaseModel):
    profile: UserProfile
    stats: List[ProfileStat]
    achievements: List[Achievement]
