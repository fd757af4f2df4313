import logging
import random
from typing import List, Optional, Sequence, TypeVar

from fitflow.schemas.user_profile import UserProfile
from fitflow.schemas.workout import CatalogWorkout, Intensity, Workout
from fitflow.services.workout_service import generate_workouts

logger = logging.getLogger(__name__)

T = TypeVar("T")

CATEGORIES = ["All", "Strength", "Cardio", "Yoga", "Flexibility"]

CATALOG = [
    CatalogWorkout(
        id=1,
        title="HIIT Cardio Blast",
        description="A high-intensity interval training workout to boost your cardio endurance and burn calories.",
        duration="25 min",
        intensity=Intensity.HARD,
        category="Cardio",
        image_url="https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?q=80&w=3270&auto=format&fit=crop",
    ),
    CatalogWorkout(
        id=2,
        title="Full Body Strength",
        description="Build strength and muscle with this comprehensive full body routine.",
        duration="45 min",
        intensity=Intensity.MEDIUM,
        category="Strength",
        image_url="https://images.unsplash.com/photo-1581009146145-b5ef050c2e1e?q=80&w=3270&auto=format&fit=crop",
    ),
    CatalogWorkout(
        id=3,
        title="Yoga Flow",
        description="Improve flexibility, balance, and mindfulness with this calming yoga session.",
        duration="30 min",
        intensity=Intensity.EASY,
        category="Yoga",
        image_url="https://images.unsplash.com/photo-1575052814086-f385e2e2ad1b?q=80&w=3270&auto=format&fit=crop",
    ),
    CatalogWorkout(
        id=4,
        title="Core Crusher",
        description="Strengthen your core and improve posture with this targeted ab workout.",
        duration="20 min",
        intensity=Intensity.MEDIUM,
        category="Strength",
        image_url="https://images.unsplash.com/photo-1517836357463-d25dfeac3438?q=80&w=3270&auto=format&fit=crop",
    ),
    CatalogWorkout(
        id=5,
        title="Flexibility Focus",
        description="Improve range of motion and prevent injuries with this stretching routine.",
        duration="25 min",
        intensity=Intensity.EASY,
        category="Flexibility",
        image_url="https://images.unsplash.com/photo-1518611012118-696072aa579a?q=80&w=3270&auto=format&fit=crop",
    ),
    CatalogWorkout(
        id=6,
        title="Tabata Training",
        description="Maximize calorie burn in minimal time with this efficient Tabata workout.",
        duration="20 min",
        intensity=Intensity.HARD,
        category="Cardio",
        image_url="https://images.unsplash.com/photo-1599058917212-d750089bc07e?q=80&w=3269&auto=format&fit=crop",
    ),
]


def filter_catalog(category: str = "All") -> List[CatalogWorkout]:
    """Browse the static catalog. "All" returns every workout."""
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category '{category}'. Expected one of: {', '.join(CATEGORIES)}")
    if category == "All":
        return list(CATALOG)
    return [w for w in CATALOG if w.category == category]


def shuffle_recommendations(items: Sequence[T], rng: random.Random) -> List[T]:
    """Return a shuffled copy; the input order is left alone."""
    shuffled = list(items)
    rng.shuffle(shuffled)
    return shuffled


def recommended_for(profile: UserProfile, seed: Optional[int] = None) -> List[Workout]:
    """Generated workouts in a shuffled display order, both driven by one seed."""
    rng = random.Random(seed)
    workouts = generate_workouts(profile, rng=rng)
    return shuffle_recommendations(workouts, rng)
