import asyncio

from fastapi import APIRouter, Depends, HTTPException, status

from fitflow.schemas.nutrition import (
    AnalyzeImageRequest,
    MealHistoryEntry,
    MealHistoryResponse,
    NutritionResult,
)
from fitflow.services.nutrition_service import AnalysisFailedError
from fitflow.session import AppSession, get_session

router = APIRouter(
    prefix="/nutrition",
    tags=["Nutrition"]
)


@router.post("/analyze", response_model=NutritionResult)
async def analyze_food_photo(
    request: AnalyzeImageRequest,
    session: AppSession = Depends(get_session),
):
    """
    Analyze an uploaded food photo. The camera path produces the same bytes,
    so uploads are the only entry point over HTTP.
    """
    scanner = session.scanner
    image = None
    try:
        image = scanner.upload(request.image)
        return await scanner.analyze()
    except asyncio.CancelledError:
        # Image cleared or replaced mid-analysis; anything else is a real cancellation
        if image is None or scanner.selected_image is image:
            raise
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Analysis cancelled")
    except AnalysisFailedError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
            headers={"Retry-After": "1"},
        )
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))


@router.post("/save", response_model=MealHistoryEntry, status_code=status.HTTP_201_CREATED)
def save_to_meal_history(
    result: NutritionResult,
    session: AppSession = Depends(get_session),
):
    return session.scanner.save(result)


@router.delete("/image", status_code=status.HTTP_204_NO_CONTENT)
def clear_selected_image(session: AppSession = Depends(get_session)):
    session.scanner.clear()


@router.get("/history", response_model=MealHistoryResponse)
def get_meal_history(session: AppSession = Depends(get_session)):
    return MealHistoryResponse(meals=session.scanner.history)
