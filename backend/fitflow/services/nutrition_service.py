import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from fitflow import config
from fitflow.services.capture_service import CaptureDevice, capture_image, decode_image_upload
from fitflow.schemas.nutrition import MealHistoryEntry, NutritionResult

logger = logging.getLogger(__name__)

"""
Nutrition Service
-----------------
Food photo analysis behind a pluggable `FoodAnalyzer` interface.
The bundled `MockFoodAnalyzer` is a stand-in for a vision API: it hashes the
image bytes into one of four canned results after a simulated delay.
`NutritionScanner` holds the scanner screen state (selected image, in-flight
analysis, last result, meal history).
"""

MOCK_RESULTS = [
    NutritionResult(
        food_name="Grilled Chicken Salad",
        calories=320,
        protein=28,
        carbs=12,
        fat=18,
        serving_size="1 bowl (250g)",
    ),
    NutritionResult(
        food_name="Salmon with Quinoa",
        calories=480,
        protein=34,
        carbs=38,
        fat=20,
        serving_size="1 plate (300g)",
    ),
    NutritionResult(
        food_name="Avocado Toast",
        calories=290,
        protein=8,
        carbs=30,
        fat=16,
        serving_size="2 slices (180g)",
    ),
    NutritionResult(
        food_name="Greek Yogurt Parfait",
        calories=240,
        protein=15,
        carbs=32,
        fat=6,
        serving_size="1 cup (220g)",
    ),
]


class AnalysisFailedError(RuntimeError):
    """The analyzer could not produce a result. Safe to retry."""


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def image_hash(data: bytes) -> int:
    """Rolling hash over the image bytes: h = h * 31 + byte, kept in signed 32-bit range."""
    h = 0
    for byte in data:
        h = _to_int32((h << 5) - h + byte)
    return h


def pick_mock_result(data: bytes) -> NutritionResult:
    return MOCK_RESULTS[abs(image_hash(data)) % len(MOCK_RESULTS)]


class FoodAnalyzer(ABC):
    @abstractmethod
    async def analyze(self, image: bytes) -> NutritionResult:
        ...


class MockFoodAnalyzer(FoodAnalyzer):
    def __init__(self, delay_seconds: Optional[float] = None):
        self.delay_seconds = config.ANALYZER_DELAY_SECONDS if delay_seconds is None else delay_seconds

    async def analyze(self, image: bytes) -> NutritionResult:
        if not image:
            raise ValueError("No image selected for analysis")

        logger.info(f"[Nutrition Service] Analyzing image ({len(image)} bytes)")
        # Cancelling the caller's task interrupts this sleep; nothing to undo
        await asyncio.sleep(self.delay_seconds)

        # Hashing is CPU bound; keep it off the event loop
        result = await asyncio.to_thread(pick_mock_result, image)
        logger.info(f"[Nutrition Service] Recognized: {result.food_name} ({result.calories} kcal)")
        return result


async def analyze_food(analyzer: FoodAnalyzer, image: bytes) -> NutritionResult:
    """
    Run the analyzer, normalizing collaborator failures to AnalysisFailedError.
    Validation errors and cancellation propagate untouched.
    """
    try:
        return await analyzer.analyze(image)
    except (ValueError, asyncio.CancelledError):
        raise
    except Exception as e:
        logger.error(f"[Nutrition Service] Analysis failed: {e}")
        raise AnalysisFailedError("Could not analyze the food photo. Please try again.") from e


class NutritionScanner:
    """
    Scanner state for a single session: one selected image, at most one
    analysis in flight, and the in-memory meal history.
    """

    def __init__(self, analyzer: Optional[FoodAnalyzer] = None):
        self.analyzer = analyzer or MockFoodAnalyzer()
        self.selected_image: Optional[bytes] = None
        self.result: Optional[NutritionResult] = None
        self.history: List[MealHistoryEntry] = []
        self._task: Optional[asyncio.Task] = None

    @property
    def is_analyzing(self) -> bool:
        return self._task is not None and not self._task.done()

    def select_image(self, image: bytes):
        if not image:
            raise ValueError("Image is empty")
        self.clear()
        self.selected_image = image

    def capture_from(self, device: CaptureDevice) -> bytes:
        """Take a photo with the camera. Raises DeviceUnavailableError so the caller can offer upload instead."""
        image = capture_image(device)
        self.select_image(image)
        return image

    def upload(self, payload: str) -> bytes:
        image = decode_image_upload(payload)
        self.select_image(image)
        return image

    def clear(self):
        """Drop the image and any result; abandons an in-flight analysis."""
        if self.is_analyzing:
            logger.info("[Nutrition Service] Image cleared, cancelling analysis")
            self._task.cancel()
        self._task = None
        self.selected_image = None
        self.result = None

    async def analyze(self) -> NutritionResult:
        if not self.selected_image:
            raise ValueError("No image selected for analysis")

        image = self.selected_image
        self.result = None
        task = asyncio.ensure_future(analyze_food(self.analyzer, image))
        self._task = task
        try:
            result = await task
        finally:
            if self._task is task:
                self._task = None

        # A newer image may have been selected while we were waiting
        if self.selected_image is image:
            self.result = result
        return result

    def save(self, result: Optional[NutritionResult] = None) -> MealHistoryEntry:
        result = result or self.result
        if result is None:
            raise ValueError("No nutrition result to save")

        entry = MealHistoryEntry(result=result, saved_at=datetime.now(timezone.utc))
        self.history.append(entry)
        logger.info(f"[Nutrition Service] Saved {result.food_name} to meal history")
        self.clear()
        return entry
