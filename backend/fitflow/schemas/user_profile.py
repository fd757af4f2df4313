from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FitnessLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


# Tag vocabularies offered by the onboarding forms
FITNESS_GOALS = ["weight-loss", "muscle-gain", "endurance", "flexibility", "overall-fitness"]
WORKOUT_TYPES = ["hiit", "strength", "cardio", "yoga", "pilates", "calisthenics"]
EQUIPMENT_OPTIONS = [
    "no-equipment",
    "dumbbells",
    "resistance-bands",
    "kettlebells",
    "pull-up-bar",
    "bench",
    "full-gym",
]
GENDERS = ["male", "female", "other"]


def _dedupe(tags: List[str]) -> List[str]:
    """Drop repeated tags while keeping the order they were entered in."""
    seen = []
    for tag in tags:
        if tag not in seen:
            seen.append(tag)
    return seen


class UserProfile(BaseModel):
    """
    The finished onboarding profile. Frozen once committed; an
    "edit profile" cycle produces a brand new instance.
    """
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=13, le=100)
    gender: Literal["male", "female", "other"]
    weight: float = Field(..., ge=30, le=500, description="Weight in lbs")
    height: float = Field(..., ge=100, le=250, description="Height in cm")
    fitness_level: FitnessLevel = FitnessLevel.BEGINNER
    fitness_goals: List[str] = Field(default_factory=list)
    preferred_workouts: List[str] = Field(default_factory=list)
    available_equipment: List[str] = Field(default_factory=list)

    @field_validator("fitness_goals", "preferred_workouts", "available_equipment")
    @classmethod
    def unique_tags(cls, value: List[str]) -> List[str]:
        return _dedupe(value)

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "name": "Sarah",
                "age": 29,
                "gender": "female",
                "weight": 140,
                "height": 168,
                "fitness_level": "Intermediate",
                "fitness_goals": ["weight-loss", "flexibility"],
                "preferred_workouts": ["strength", "yoga"],
                "available_equipment": ["dumbbells", "bench"],
            }
        },
    )


class ProfileDraft(BaseModel):
    """Mutable profile under construction by the onboarding wizard."""
    name: str = ""
    age: int = 0
    gender: str = ""
    weight: float = 0
    height: float = 0
    fitness_level: FitnessLevel = FitnessLevel.BEGINNER
    fitness_goals: List[str] = Field(default_factory=list)
    preferred_workouts: List[str] = Field(default_factory=list)
    available_equipment: List[str] = Field(default_factory=list)


# Step payloads. Fields are deliberately loose (optional, unbounded) so the
# wizard can report every problem as a field-scoped message instead of a
# request-level schema failure.

class BasicInfoInput(BaseModel):
    name: Optional[str] = None
    age: Optional[float] = None
    gender: Optional[str] = None


class PhysicalInfoInput(BaseModel):
    weight: Optional[float] = None
    height: Optional[float] = None


class FitnessProfileInput(BaseModel):
    fitness_level: Optional[FitnessLevel] = None
    fitness_goals: List[str] = Field(default_factory=list)


class EquipmentInput(BaseModel):
    available_equipment: List[str] = Field(default_factory=list)
    preferred_workouts: List[str] = Field(default_factory=list)
