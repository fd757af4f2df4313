import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from fitflow.schemas.user_profile import FitnessLevel, UserProfile
from fitflow.schemas.workout import Exercise, Intensity, Workout, WorkoutCategory

logger = logging.getLogger(__name__)

"""
Workout Service
---------------
Rule-based workout recommendations.
1. Maps fitness level to an intensity tier.
2. Generates one workout per preferred workout type.
3. Backfills Strength / Cardio when fewer than 3 workouts were produced.
4. Adds goal-driven HIIT / Yoga sessions.

Every tier-driven number (sets, reps, seconds, minutes) lives in the tables
below; display strings are only produced when an Exercise is built.
Randomness (HIIT move selection) comes exclusively from the `random.Random`
passed in, so a fixed seed reproduces the exact same plan.
"""

E, M, H = Intensity.EASY, Intensity.MEDIUM, Intensity.HARD

INTENSITY_BY_LEVEL: Dict[FitnessLevel, Intensity] = {
    FitnessLevel.BEGINNER: E,
    FitnessLevel.INTERMEDIATE: M,
    FitnessLevel.ADVANCED: H,
}

WORKOUT_IMAGES = {
    "strength": "https://images.unsplash.com/photo-1581009146145-b5ef050c2e1e?q=80&w=3270&auto=format&fit=crop",
    "cardio": "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?q=80&w=3270&auto=format&fit=crop",
    "yoga": "https://images.unsplash.com/photo-1575052814086-f385e2e2ad1b?q=80&w=3270&auto=format&fit=crop",
    "hiit": "https://images.unsplash.com/photo-1599058917212-d750089bc07e?q=80&w=3269&auto=format&fit=crop",
}

# --- Tier tables ---

STRENGTH_SETS = {E: 3, M: 4, H: 5}
STRENGTH_DURATION_MIN = {E: 30, M: 45, H: 60}

# (work seconds, rest seconds) per HIIT interval
HIIT_INTERVALS = {E: (30, 30), M: (40, 20), H: (50, 10)}
HIIT_EXERCISE_COUNT = {E: 5, M: 6, H: 8}

YOGA_DURATION_MIN = {E: 20, M: 30, H: 45}
CARDIO_DURATION_MIN = 30


@dataclass(frozen=True)
class StrengthTemplate:
    name: str
    description: str
    equipment: Tuple[str, ...]
    target_muscle: str
    reps: Dict[Intensity, Tuple[int, int]]
    rest_sec: int
    reps_suffix: str = ""

    def build(self, intensity: Intensity) -> Exercise:
        low, high = self.reps[intensity]
        reps = str(low) if low == high else f"{low}-{high}"
        return Exercise(
            name=self.name,
            sets=STRENGTH_SETS[intensity],
            reps=reps + self.reps_suffix,
            rest_time=_seconds(self.rest_sec),
            description=self.description,
            equipment=list(self.equipment),
            target_muscle=self.target_muscle,
        )


def _seconds(value: int) -> str:
    return f"{value} seconds"


BENCH_PRESS = StrengthTemplate(
    name="Bench Press",
    description="Lie on a bench, grip the bar slightly wider than shoulder-width, lower to chest and press back up.",
    equipment=("barbell", "bench"),
    target_muscle="chest",
    reps={E: (10, 10), M: (8, 10), H: (6, 8)},
    rest_sec=90,
)
DUMBBELL_BENCH_PRESS = StrengthTemplate(
    name="Dumbbell Bench Press",
    description="Lie on a bench with dumbbells at chest level, press up until arms are extended.",
    equipment=("dumbbells", "bench"),
    target_muscle="chest",
    reps={E: (12, 12), M: (10, 12), H: (8, 10)},
    rest_sec=90,
)
FLOOR_DUMBBELL_PRESS = StrengthTemplate(
    name="Floor Dumbbell Press",
    description="Lie on the floor with dumbbells at chest level, press up until arms are extended.",
    equipment=("dumbbells",),
    target_muscle="chest",
    reps={E: (12, 12), M: (10, 12), H: (8, 10)},
    rest_sec=90,
)
PUSH_UPS = StrengthTemplate(
    name="Push-ups",
    description="Place hands shoulder-width apart, lower body until chest nearly touches floor, push back up.",
    equipment=(),
    target_muscle="chest",
    reps={E: (8, 10), M: (12, 15), H: (15, 20)},
    rest_sec=60,
)

BARBELL_ROWS = StrengthTemplate(
    name="Barbell Rows",
    description="Bend at hips with slight knee bend, pull barbell to lower chest, lower with control.",
    equipment=("barbell",),
    target_muscle="back",
    reps={E: (10, 10), M: (8, 10), H: (6, 8)},
    rest_sec=90,
)
DUMBBELL_ROWS = StrengthTemplate(
    name="Dumbbell Rows",
    description="Place one hand and knee on bench, pull dumbbell to hip, lower with control.",
    equipment=("dumbbells",),
    target_muscle="back",
    reps={E: (12, 12), M: (10, 12), H: (8, 10)},
    rest_sec=90,
    reps_suffix=" each side",
)
INVERTED_ROWS = StrengthTemplate(
    name="Inverted Rows",
    description="Position yourself under a table or bar, pull chest toward the bar, lower with control.",
    equipment=(),
    target_muscle="back",
    reps={E: (8, 10), M: (10, 12), H: (12, 15)},
    rest_sec=60,
)

BARBELL_SQUATS = StrengthTemplate(
    name="Barbell Squats",
    description="Place barbell on upper back, squat down until thighs are parallel to floor, stand back up.",
    equipment=("barbell", "squat rack"),
    target_muscle="legs",
    reps={E: (10, 10), M: (8, 10), H: (6, 8)},
    rest_sec=120,
)
KETTLEBELL_GOBLET_SQUATS = StrengthTemplate(
    name="Kettlebell Goblet Squats",
    description="Hold kettlebell at chest level, squat down until thighs are parallel to floor, stand back up.",
    equipment=("kettlebells",),
    target_muscle="legs",
    reps={E: (12, 12), M: (10, 12), H: (8, 10)},
    rest_sec=90,
)
DUMBBELL_GOBLET_SQUATS = StrengthTemplate(
    name="Dumbbell Goblet Squats",
    description="Hold dumbbell at chest level, squat down until thighs are parallel to floor, stand back up.",
    equipment=("dumbbells",),
    target_muscle="legs",
    reps={E: (12, 12), M: (10, 12), H: (8, 10)},
    rest_sec=90,
)
BODYWEIGHT_SQUATS = StrengthTemplate(
    name="Bodyweight Squats",
    description="Stand with feet shoulder-width apart, squat down until thighs are parallel to floor, stand back up.",
    equipment=(),
    target_muscle="legs",
    reps={E: (15, 15), M: (20, 20), H: (25, 25)},
    rest_sec=60,
)

PLANK = StrengthTemplate(
    name="Plank",
    description="Support your weight on forearms and toes, keep body in straight line from head to heels.",
    equipment=(),
    target_muscle="core",
    reps={E: (30, 30), M: (45, 45), H: (60, 60)},
    rest_sec=45,
    reps_suffix=" seconds",
)


def intensity_for(fitness_level: FitnessLevel) -> Intensity:
    """Fixed, total mapping from fitness level to intensity tier."""
    return INTENSITY_BY_LEVEL[FitnessLevel(fitness_level)]


def _workout_id(slug: str, rng: random.Random) -> str:
    return f"{slug}-{rng.getrandbits(32):08x}"


# --- Strength ---

def _push_template(equipment: Sequence[str]) -> StrengthTemplate:
    if "full-gym" in equipment:
        return BENCH_PRESS
    if "dumbbells" in equipment and "bench" in equipment:
        return DUMBBELL_BENCH_PRESS
    if "dumbbells" in equipment:
        return FLOOR_DUMBBELL_PRESS
    return PUSH_UPS


def _pull_template(equipment: Sequence[str]) -> StrengthTemplate:
    if "full-gym" in equipment:
        return BARBELL_ROWS
    if "dumbbells" in equipment:
        return DUMBBELL_ROWS
    return INVERTED_ROWS


def _leg_template(equipment: Sequence[str]) -> StrengthTemplate:
    if "full-gym" in equipment:
        return BARBELL_SQUATS
    # Kettlebells take priority over dumbbells for loaded squats
    if "kettlebells" in equipment:
        return KETTLEBELL_GOBLET_SQUATS
    if "dumbbells" in equipment:
        return DUMBBELL_GOBLET_SQUATS
    return BODYWEIGHT_SQUATS


def generate_strength_workout(
    intensity: Intensity,
    equipment: Sequence[str],
    rng: Optional[random.Random] = None,
) -> Workout:
    """
    Push, pull and leg movement picked from the equipment-priority ladder
    (full gym > dumbbells + bench > dumbbells > bodyweight), plus a plank.
    """
    rng = rng or random.Random()
    # Only an explicit "no-equipment" tag switches to the bodyweight wording
    equipment_based = "no-equipment" not in equipment

    exercises = [
        _push_template(equipment).build(intensity),
        _pull_template(equipment).build(intensity),
        _leg_template(equipment).build(intensity),
        PLANK.build(intensity),
    ]

    return Workout(
        id=_workout_id("strength", rng),
        title="Full Body Strength Training" if equipment_based else "Bodyweight Strength Circuit",
        description=(
            f"A comprehensive {'equipment-based' if equipment_based else 'bodyweight'} "
            "strength workout targeting all major muscle groups."
        ),
        duration=f"{STRENGTH_DURATION_MIN[intensity]} min",
        intensity=intensity,
        category=WorkoutCategory.STRENGTH,
        exercises=exercises,
        image_url=WORKOUT_IMAGES["strength"],
    )


# --- Cardio ---

@dataclass(frozen=True)
class CardioPlan:
    title: str
    description: str
    exercise_name: str
    exercise_description: str
    rounds: int
    work_min: int
    work_verb: str = ""
    walk_min: int = 0

    def reps(self) -> str:
        if not self.walk_min:
            return f"{self.work_min} minutes"
        return f"{self.work_min} min {self.work_verb}, {self.walk_min} min walk"

    def rest_time(self) -> str:
        return "Walking periods serve as rest" if self.walk_min else "None"


CARDIO_PLANS = {
    E: CardioPlan(
        title="Walking Cardio",
        description="A low-impact walking routine to build cardio endurance without stressing your joints.",
        exercise_name="Brisk Walking",
        exercise_description="Walk at a brisk pace where you can still hold a conversation but feel slightly breathless.",
        rounds=1,
        work_min=30,
    ),
    M: CardioPlan(
        title="Jogging Intervals",
        description="Alternating between jogging and walking to build cardio endurance and burn calories.",
        exercise_name="Jog/Walk Intervals",
        exercise_description="Alternate between jogging at a moderate pace and walking for recovery.",
        rounds=8,
        work_min=3,
        work_verb="jog",
        walk_min=1,
    ),
    H: CardioPlan(
        title="Running Intervals",
        description="High-intensity running intervals to maximize calorie burn and cardiovascular fitness.",
        exercise_name="Running Intervals",
        exercise_description="Alternate between running at a challenging pace and walking for recovery.",
        rounds=10,
        work_min=2,
        work_verb="run",
        walk_min=1,
    ),
}


def generate_cardio_workout(intensity: Intensity, rng: Optional[random.Random] = None) -> Workout:
    rng = rng or random.Random()
    plan = CARDIO_PLANS[intensity]
    exercise = Exercise(
        name=plan.exercise_name,
        sets=plan.rounds,
        reps=plan.reps(),
        rest_time=plan.rest_time(),
        description=plan.exercise_description,
        equipment=[],
        target_muscle="cardiovascular system",
    )
    return Workout(
        id=_workout_id("cardio", rng),
        title=plan.title,
        description=plan.description,
        duration=f"{CARDIO_DURATION_MIN} min",
        intensity=intensity,
        category=WorkoutCategory.CARDIO,
        exercises=[exercise],
        image_url=WORKOUT_IMAGES["cardio"],
    )


# --- HIIT ---

# (name, description, target muscle) of the moves every user can do
HIIT_BODYWEIGHT_MOVES = [
    ("Jumping Jacks",
     "Start with feet together and arms at sides, jump feet out and arms up, then back to start position.",
     "full body"),
    ("Mountain Climbers",
     "In plank position, quickly alternate bringing knees toward chest.",
     "core, shoulders"),
    ("Burpees",
     "From standing, squat down, kick feet back to plank, perform a push-up, jump feet forward, and jump up with arms overhead.",
     "full body"),
    ("High Knees",
     "Jog in place, lifting knees as high as possible toward chest.",
     "core, legs"),
    ("Plank Jacks",
     "In plank position, jump feet out wide and back together like a jumping jack.",
     "core, shoulders"),
]


def _hiit_move(intensity: Intensity, name: str, description: str, target: str,
               equipment: Optional[List[str]] = None) -> Exercise:
    work, rest = HIIT_INTERVALS[intensity]
    return Exercise(
        name=name,
        sets=1,
        reps=_seconds(work),
        rest_time=_seconds(rest),
        description=description,
        equipment=equipment or [],
        target_muscle=target,
    )


def hiit_exercise_pool(intensity: Intensity, equipment: Sequence[str]) -> List[Exercise]:
    """Five bodyweight moves, plus two loaded moves when a dumbbell or kettlebell is owned."""
    pool = [_hiit_move(intensity, *move) for move in HIIT_BODYWEIGHT_MOVES]

    if "dumbbells" in equipment or "kettlebells" in equipment:
        weight = "kettlebell" if "kettlebells" in equipment else "dumbbell"
        pool.append(_hiit_move(
            intensity,
            f"{weight.capitalize()} Swings",
            f"Hold {weight} with both hands, hinge at hips and swing {weight} between legs, "
            f"then thrust hips forward to swing {weight} to chest height.",
            "posterior chain",
            [weight + "s"],
        ))
        pool.append(_hiit_move(
            intensity,
            f"{weight.capitalize()} Squat Press",
            f"Hold {weight}(s) at shoulder height, perform a squat, then press {weight}(s) overhead as you stand.",
            "legs, shoulders",
            [weight + "s"],
        ))
    return pool


def select_exercises(pool: Sequence[Exercise], count: int, rng: random.Random) -> List[Exercise]:
    """
    Pick `count` distinct moves from the pool (all of them if the pool is
    smaller). The result depends only on the pool and the rng state.
    """
    return rng.sample(list(pool), min(count, len(pool)))


def hiit_duration_minutes(exercise_count: int, intensity: Intensity) -> int:
    work, rest = HIIT_INTERVALS[intensity]
    return math.ceil(exercise_count * (work + rest) / 60)


def generate_hiit_workout(
    intensity: Intensity,
    equipment: Sequence[str],
    rng: Optional[random.Random] = None,
) -> Workout:
    rng = rng or random.Random()
    pool = hiit_exercise_pool(intensity, equipment)
    exercises = select_exercises(pool, HIIT_EXERCISE_COUNT[intensity], rng)
    minutes = hiit_duration_minutes(len(exercises), intensity)

    logger.debug(f"[Workout Service] HIIT picked {len(exercises)}/{len(pool)} moves -> {minutes} min")

    return Workout(
        id=_workout_id("hiit", rng),
        title="HIIT Cardio Blast",
        description="A high-intensity interval training workout to boost cardio endurance and maximize calorie burn.",
        duration=f"{minutes} min",
        intensity=intensity,
        category=WorkoutCategory.HIIT,
        exercises=exercises,
        image_url=WORKOUT_IMAGES["hiit"],
    )


# --- Yoga ---

# (name, sets, hold, description, target muscle)
YOGA_SEQUENCES = {
    E: ("Gentle Yoga Flow",
        "A calming sequence of basic yoga poses to improve flexibility and reduce stress.",
        [
            ("Child's Pose", 1, "1 minute",
             "Kneel on the floor, touch big toes together and sit on heels, then fold forward with arms extended or by your side.",
             "back, hips"),
            ("Cat-Cow Stretch", 1, "1 minute (alternating)",
             "On hands and knees, alternate between arching and rounding your back while breathing deeply.",
             "spine"),
            ("Downward-Facing Dog", 1, "1 minute",
             "Form an inverted V-shape with your body, hands and feet on the floor, hips high, heels reaching toward floor.",
             "full body"),
            ("Mountain Pose", 1, "30 seconds",
             "Stand tall with feet together, arms at sides, weight evenly distributed through feet.",
             "posture muscles"),
            ("Warrior I", 1, "30 seconds each side",
             "From mountain pose, step one foot back, turn it out, bend front knee, and raise arms overhead.",
             "legs, shoulders"),
        ]),
    M: ("Balanced Yoga Flow",
        "A balanced sequence of intermediate yoga poses to build strength and flexibility.",
        [
            ("Sun Salutation A", 3, "Full sequence",
             "A flowing sequence of poses: mountain pose, forward fold, half-lift, plank, low push-up, upward dog, downward dog, and back to standing.",
             "full body"),
            ("Warrior II", 1, "45 seconds each side",
             "From mountain pose, step one foot back, turn it out, bend front knee, and extend arms parallel to floor.",
             "legs, shoulders"),
            ("Triangle Pose", 1, "45 seconds each side",
             "From warrior II, straighten front leg, hinge at hip, and reach hand toward floor with opposite arm extended upward.",
             "legs, obliques"),
            ("Boat Pose", 1, "30 seconds",
             "Sit on floor, lift legs off ground with knees bent or straight, balance on sit bones with chest lifted.",
             "core"),
        ]),
    H: ("Power Yoga Flow",
        "An energetic sequence of advanced yoga poses to build strength, flexibility, and balance.",
        [
            ("Sun Salutation B", 3, "Full sequence",
             "An extended sun salutation sequence adding chair pose and warrior I poses to the flow.",
             "full body"),
            ("Crow Pose", 1, "30 seconds",
             "Place hands on floor, knees on back of arms, lean forward until feet lift off floor.",
             "arms, core"),
            ("Side Plank", 1, "30 seconds each side",
             "From plank position, rotate onto one hand and outer edge of same-side foot, extend other arm upward.",
             "core, shoulders"),
            ("Wheel Pose", 1, "30 seconds",
             "Lie on back, place hands by ears, lift hips and chest to form an arch with body.",
             "spine, chest, shoulders"),
        ]),
}


def generate_yoga_workout(intensity: Intensity, rng: Optional[random.Random] = None) -> Workout:
    rng = rng or random.Random()
    title, description, poses = YOGA_SEQUENCES[intensity]
    exercises = [
        Exercise(
            name=name,
            sets=sets,
            reps=hold,
            rest_time="None",
            description=pose_description,
            equipment=["yoga mat"],
            target_muscle=target,
        )
        for name, sets, hold, pose_description, target in poses
    ]
    return Workout(
        id=_workout_id("yoga", rng),
        title=title,
        description=description,
        duration=f"{YOGA_DURATION_MIN[intensity]} min",
        intensity=intensity,
        category=WorkoutCategory.YOGA,
        exercises=exercises,
        image_url=WORKOUT_IMAGES["yoga"],
    )


# --- Orchestrator ---

def _has_category(workouts: List[Workout], category: WorkoutCategory) -> bool:
    return any(w.category == category for w in workouts)


def generate_workouts(
    profile: UserProfile,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[Workout]:
    """
    Build the recommended workouts for a profile.

    Pass `seed` (or a ready `rng`) for a reproducible plan; with neither,
    the HIIT selection and ids come from a freshly seeded generator.
    """
    rng = rng or random.Random(seed)
    intensity = intensity_for(profile.fitness_level)
    preferred = profile.preferred_workouts
    equipment = profile.available_equipment
    goals = profile.fitness_goals

    logger.info(
        f"[Workout Service] Generating for level={profile.fitness_level.value} "
        f"intensity={intensity.value} preferred={preferred} goals={goals}"
    )

    workouts: List[Workout] = []

    # 1. One workout per preferred type
    if "strength" in preferred:
        workouts.append(generate_strength_workout(intensity, equipment, rng))
    if "cardio" in preferred:
        workouts.append(generate_cardio_workout(intensity, rng))
    if "hiit" in preferred:
        workouts.append(generate_hiit_workout(intensity, equipment, rng))
    if "yoga" in preferred or "pilates" in preferred:
        workouts.append(generate_yoga_workout(intensity, rng))

    # 2. Backfill general workouts
    if len(workouts) < 3:
        if not _has_category(workouts, WorkoutCategory.STRENGTH):
            workouts.append(generate_strength_workout(intensity, equipment, rng))
        if not _has_category(workouts, WorkoutCategory.CARDIO):
            workouts.append(generate_cardio_workout(intensity, rng))

    # 3. Goal-specific additions
    if "weight-loss" in goals and not _has_category(workouts, WorkoutCategory.HIIT):
        workouts.append(generate_hiit_workout(intensity, equipment, rng))
    if "flexibility" in goals and not _has_category(workouts, WorkoutCategory.YOGA):
        workouts.append(generate_yoga_workout(intensity, rng))

    logger.info(f"[Workout Service] Generated {len(workouts)} workouts: {[w.category.value for w in workouts]}")
    return workouts
