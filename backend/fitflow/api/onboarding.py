from fastapi import APIRouter, Depends, HTTPException, status

from fitflow.schemas.onboarding import OnboardingState
from fitflow.schemas.user_profile import (
    BasicInfoInput,
    EquipmentInput,
    FitnessProfileInput,
    PhysicalInfoInput,
    UserProfile,
)
from fitflow.services.onboarding_service import (
    TOTAL_STEPS,
    OnboardingSession,
    OnboardingStateError,
    StepValidationError,
)
from fitflow.session import AppSession, get_session

router = APIRouter(
    prefix="/onboarding",
    tags=["Onboarding"]
)


def onboarding_state(wizard: OnboardingSession) -> OnboardingState:
    return OnboardingState(
        step=int(wizard.step),
        step_name=wizard.step.name.lower(),
        total_steps=TOTAL_STEPS,
        completed=wizard.completed,
        draft=wizard.draft,
    )


def _run_step(wizard: OnboardingSession, action, data) -> OnboardingState:
    try:
        action(data)
    except StepValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"errors": e.errors}
        )
    except OnboardingStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return onboarding_state(wizard)


@router.get("", response_model=OnboardingState)
def get_onboarding_state(session: AppSession = Depends(get_session)):
    return onboarding_state(session.onboarding)


@router.post("/start", response_model=OnboardingState)
def start_onboarding(session: AppSession = Depends(get_session)):
    wizard = session.onboarding
    return _run_step(wizard, lambda _: wizard.start(), None)


@router.post("/basic-info", response_model=OnboardingState)
def submit_basic_info(data: BasicInfoInput, session: AppSession = Depends(get_session)):
    return _run_step(session.onboarding, session.onboarding.submit_basic_info, data)


@router.post("/physical-info", response_model=OnboardingState)
def submit_physical_info(data: PhysicalInfoInput, session: AppSession = Depends(get_session)):
    return _run_step(session.onboarding, session.onboarding.submit_physical_info, data)


@router.post("/fitness-profile", response_model=OnboardingState)
def submit_fitness_profile(data: FitnessProfileInput, session: AppSession = Depends(get_session)):
    return _run_step(session.onboarding, session.onboarding.submit_fitness_profile, data)


@router.post("/equipment", response_model=OnboardingState)
def submit_equipment(data: EquipmentInput, session: AppSession = Depends(get_session)):
    return _run_step(session.onboarding, session.onboarding.submit_equipment, data)


@router.post("/back", response_model=OnboardingState)
def go_back(session: AppSession = Depends(get_session)):
    session.onboarding.back()
    return onboarding_state(session.onboarding)


@router.post("/commit", response_model=UserProfile)
def commit_profile(session: AppSession = Depends(get_session)):
    """
    Finalize the wizard. The returned profile replaces any previous one.
    """
    try:
        return session.onboarding.commit()
    except StepValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"errors": e.errors}
        )
    except OnboardingStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
