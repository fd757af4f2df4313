from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Intensity(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class WorkoutCategory(str, Enum):
    STRENGTH = "Strength"
    CARDIO = "Cardio"
    HIIT = "HIIT"
    YOGA = "Yoga"


class Exercise(BaseModel):
    name: str
    sets: int
    reps: str = Field(..., description="Rep count or a duration, e.g. '8-10' or '30 seconds'")
    rest_time: str
    description: str
    equipment: List[str] = Field(default_factory=list)
    target_muscle: str
    image_url: Optional[str] = None


class Workout(BaseModel):
    id: str
    title: str
    description: str
    duration: str
    intensity: Intensity
    category: WorkoutCategory
    exercises: List[Exercise]
    image_url: Optional[str] = None


class GenerateWorkoutsResponse(BaseModel):
    seed: Optional[int] = None
    workouts: List[Workout]


class CatalogWorkout(BaseModel):
    id: int
    title: str
    description: str
    duration: str
    intensity: Intensity
    category: str
    image_url: Optional[str] = None
