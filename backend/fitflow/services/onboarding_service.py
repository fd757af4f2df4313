import logging
from enum import IntEnum
from typing import Dict, List, Optional

from fitflow.schemas.user_profile import (
    BasicInfoInput,
    EquipmentInput,
    FitnessProfileInput,
    GENDERS,
    PhysicalInfoInput,
    ProfileDraft,
    UserProfile,
)

logger = logging.getLogger(__name__)

"""
Onboarding Service
------------------
The five-step profile wizard as an explicit state object.
Each submit validates its own fields, merges them into the draft and moves
forward; a failed submit leaves draft and step untouched. `commit()` on the
last step freezes the draft into a UserProfile.
"""


class OnboardingStep(IntEnum):
    WELCOME = 0
    BASIC_INFO = 1
    PHYSICAL_INFO = 2
    FITNESS_PROFILE = 3
    EQUIPMENT = 4


TOTAL_STEPS = len(OnboardingStep)


class StepValidationError(ValueError):
    """Field-scoped form errors. `errors` maps field name -> message."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


class OnboardingStateError(RuntimeError):
    """An operation was attempted from the wrong wizard step."""


def toggle_equipment(selected: List[str], item: str) -> List[str]:
    """
    Checkbox behaviour for the equipment list: "no-equipment" excludes every
    other option and vice versa.
    """
    if item == "no-equipment":
        return [] if item in selected else ["no-equipment"]

    updated = [e for e in selected if e != "no-equipment"]
    if item in updated:
        return [e for e in updated if e != item]
    return updated + [item]


def toggle_tag(selected: List[str], item: str) -> List[str]:
    if item in selected:
        return [t for t in selected if t != item]
    return selected + [item]


def validate_basic_info(data: BasicInfoInput) -> Dict[str, str]:
    errors = {}
    if not data.name or not data.name.strip():
        errors["name"] = "Name is required"
    if not data.age:
        errors["age"] = "Age is required"
    elif data.age < 13 or data.age > 100:
        errors["age"] = "Age must be between 13 and 100"
    if not data.gender:
        errors["gender"] = "Gender is required"
    elif data.gender not in GENDERS:
        errors["gender"] = "Select a valid gender"
    return errors


def validate_physical_info(data: PhysicalInfoInput) -> Dict[str, str]:
    errors = {}
    if not data.weight:
        errors["weight"] = "Weight is required"
    elif data.weight < 30 or data.weight > 500:
        errors["weight"] = "Weight must be between 30 and 500 lbs"

    if not data.height:
        errors["height"] = "Height is required"
    elif data.height < 100 or data.height > 250:
        errors["height"] = "Height must be between 100 and 250 cm"
    return errors


def validate_fitness_profile(data: FitnessProfileInput) -> Dict[str, str]:
    errors = {}
    if not data.fitness_level:
        errors["fitness_level"] = "Fitness level is required"
    if not data.fitness_goals:
        errors["fitness_goals"] = "Select at least one fitness goal"
    return errors


def validate_equipment(data: EquipmentInput) -> Dict[str, str]:
    errors = {}
    if not data.available_equipment:
        errors["available_equipment"] = "Select at least one equipment option"
    if not data.preferred_workouts:
        errors["preferred_workouts"] = "Select at least one workout type"
    return errors


class OnboardingSession:
    """
    Wizard state: draft profile, current step and completion flag.
    Passed explicitly to whoever drives the wizard.
    """

    def __init__(self, draft: Optional[ProfileDraft] = None):
        self.draft = draft or ProfileDraft()
        self.step = OnboardingStep.WELCOME
        self.completed = False
        self.profile: Optional[UserProfile] = None

    def _require_step(self, step: OnboardingStep):
        if self.step != step:
            raise OnboardingStateError(
                f"Cannot submit {step.name.lower()} while on step {self.step.name.lower()}"
            )

    def _advance(self, updates: dict):
        self.draft = self.draft.model_copy(update=updates)
        self.step = OnboardingStep(self.step + 1)
        logger.info(f"[Onboarding] Advanced to {self.step.name}")

    def start(self):
        self._require_step(OnboardingStep.WELCOME)
        self.step = OnboardingStep.BASIC_INFO

    def submit_basic_info(self, data: BasicInfoInput):
        self._require_step(OnboardingStep.BASIC_INFO)
        errors = validate_basic_info(data)
        if errors:
            raise StepValidationError(errors)
        self._advance({"name": data.name.strip(), "age": int(data.age), "gender": data.gender})

    def submit_physical_info(self, data: PhysicalInfoInput):
        self._require_step(OnboardingStep.PHYSICAL_INFO)
        errors = validate_physical_info(data)
        if errors:
            raise StepValidationError(errors)
        self._advance({"weight": data.weight, "height": data.height})

    def submit_fitness_profile(self, data: FitnessProfileInput):
        self._require_step(OnboardingStep.FITNESS_PROFILE)
        errors = validate_fitness_profile(data)
        if errors:
            raise StepValidationError(errors)
        self._advance({"fitness_level": data.fitness_level, "fitness_goals": list(data.fitness_goals)})

    def submit_equipment(self, data: EquipmentInput):
        """Last step: validates and stores the selections but stays put until commit()."""
        self._require_step(OnboardingStep.EQUIPMENT)
        errors = validate_equipment(data)
        if errors:
            raise StepValidationError(errors)
        self.draft = self.draft.model_copy(update={
            "available_equipment": list(data.available_equipment),
            "preferred_workouts": list(data.preferred_workouts),
        })

    def back(self):
        if self.step > OnboardingStep.WELCOME:
            self.step = OnboardingStep(self.step - 1)

    def commit(self) -> UserProfile:
        self._require_step(OnboardingStep.EQUIPMENT)
        errors = validate_equipment(EquipmentInput(
            available_equipment=self.draft.available_equipment,
            preferred_workouts=self.draft.preferred_workouts,
        ))
        if errors:
            raise StepValidationError(errors)

        self.profile = UserProfile(**self.draft.model_dump())
        self.completed = True
        logger.info(f"[Onboarding] Profile committed for {self.profile.name}")
        return self.profile

    def complete(self, data: EquipmentInput) -> UserProfile:
        """Submit the equipment step and commit in one go (the form's "Complete" button)."""
        self.submit_equipment(data)
        return self.commit()

    def restart(self):
        """Edit profile: reopen the wizard pre-filled with the current profile."""
        if self.profile is not None:
            self.draft = ProfileDraft(**self.profile.model_dump())
        self.completed = False
        self.step = OnboardingStep.WELCOME
