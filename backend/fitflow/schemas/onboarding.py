from pydantic import BaseModel
from typing import Dict

from fitflow.schemas.user_profile import ProfileDraft


class OnboardingState(BaseModel):
    step: int
    step_name: str
    total_steps: int
    completed: bool
    draft: ProfileDraft


class StepErrorResponse(BaseModel):
    errors: Dict[str, str]
