from pydantic import BaseModel, Field
from typing import List
from datetime import datetime


class NutritionResult(BaseModel):
    food_name: str
    calories: int
    protein: float = Field(..., description="grams")
    carbs: float = Field(..., description="grams")
    fat: float = Field(..., description="grams")
    serving_size: str


# REQUESTS
class AnalyzeImageRequest(BaseModel):
    image: str = Field(..., description="data: URL or bare base64 of the food photo")


# RESPONSES
class MealHistoryEntry(BaseModel):
    result: NutritionResult
    saved_at: datetime


class MealHistoryResponse(BaseModel):
    meals: List[MealHistoryEntry]
