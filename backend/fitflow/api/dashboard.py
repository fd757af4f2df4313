from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from fitflow.schemas.dashboard import DashboardResponse
from fitflow.services.dashboard_service import build_dashboard
from fitflow.session import AppSession, get_session

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    seed: Optional[int] = Query(None),
    session: AppSession = Depends(get_session),
):
    """Home screen: greeting, today's stats and two recommended workouts."""
    if session.profile is None:
        raise HTTPException(status_code=404, detail="Profile not found. Please complete onboarding first.")
    return build_dashboard(session.profile, seed=seed)
