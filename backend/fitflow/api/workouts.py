from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from fitflow.schemas.user_profile import UserProfile
from fitflow.schemas.workout import CatalogWorkout, GenerateWorkoutsResponse, Workout
from fitflow.services.catalog_service import filter_catalog, recommended_for
from fitflow.services.workout_service import generate_workouts
from fitflow.session import AppSession, get_session

router = APIRouter(
    prefix="/workouts",
    tags=["Workouts"]
)


@router.post("/generate", response_model=GenerateWorkoutsResponse)
def generate_workouts_endpoint(
    profile: UserProfile,
    seed: Optional[int] = Query(None, description="Fix the random selection for a reproducible plan"),
):
    """
    Generate workouts for an arbitrary profile. Nothing is stored.
    """
    return GenerateWorkoutsResponse(seed=seed, workouts=generate_workouts(profile, seed=seed))


@router.get("/recommended", response_model=List[Workout])
def get_recommended_workouts(
    seed: Optional[int] = Query(None),
    session: AppSession = Depends(get_session),
):
    if session.profile is None:
        raise HTTPException(status_code=404, detail="Profile not found. Please complete onboarding first.")
    return recommended_for(session.profile, seed)


@router.get("/catalog", response_model=List[CatalogWorkout])
def browse_catalog(category: str = Query("All")):
    try:
        return filter_catalog(category)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
