from fastapi import APIRouter, Depends, HTTPException, status

from fitflow.schemas.dashboard import ProfileResponse
from fitflow.api.onboarding import onboarding_state
from fitflow.schemas.onboarding import OnboardingState
from fitflow.services.dashboard_service import achievements, profile_stats
from fitflow.session import AppSession, get_session

router = APIRouter(prefix="/profile", tags=["Profile"])


# GET - Committed profile with stats tab and achievements
@router.get("/me", response_model=ProfileResponse)
def read_my_profile(session: AppSession = Depends(get_session)):
    if session.profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found. Please complete onboarding first."
        )
    return ProfileResponse(
        profile=session.profile,
        stats=profile_stats(),
        achievements=achievements(),
    )


# POST - Edit profile (re-enter the onboarding flow)
@router.post("/edit", response_model=OnboardingState)
def edit_my_profile(session: AppSession = Depends(get_session)):
    session.onboarding.restart()
    return onboarding_state(session.onboarding)
