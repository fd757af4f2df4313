from typing import Optional

from fitflow.schemas.user_profile import UserProfile
from fitflow.services.nutrition_service import NutritionScanner
from fitflow.services.onboarding_service import OnboardingSession


class AppSession:
    """
    Everything the app remembers, held in memory for the lifetime of the
    process: the onboarding wizard (and the profile it produced) and the
    nutrition scanner with its meal history.
    """

    def __init__(self):
        self.onboarding = OnboardingSession()
        self.scanner = NutritionScanner()

    @property
    def profile(self) -> Optional[UserProfile]:
        return self.onboarding.profile if self.onboarding.completed else None


_session = AppSession()


def get_session() -> AppSession:
    return _session


def reset_session() -> AppSession:
    global _session
    _session = AppSession()
    return _session
