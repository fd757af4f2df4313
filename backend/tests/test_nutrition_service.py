import asyncio
import base64
import threading
import unittest
from unittest.mock import patch

from fitflow.schemas.nutrition import NutritionResult
from fitflow.services.capture_service import CaptureDevice, DeviceUnavailableError
from fitflow.services.nutrition_service import (
    MOCK_RESULTS,
    AnalysisFailedError,
    FoodAnalyzer,
    MockFoodAnalyzer,
    NutritionScanner,
    analyze_food,
    image_hash,
    pick_mock_result,
)


def reference_hash(data: bytes) -> int:
    h = 0
    for byte in data:
        h = (h * 31 + byte) % 2 ** 32
    return h - 2 ** 32 if h >= 2 ** 31 else h


class BrokenAnalyzer(FoodAnalyzer):
    async def analyze(self, image: bytes) -> NutritionResult:
        raise ConnectionError("vision service unreachable")


class DeadCamera(CaptureDevice):
    def open(self):
        raise PermissionError("access denied")

    def read_frame(self) -> bytes:
        raise AssertionError("never opened")

    def close(self):
        pass


class StaticCamera(CaptureDevice):
    def __init__(self, frame: bytes):
        self.frame = frame
        self.closed = False

    def open(self):
        pass

    def read_frame(self) -> bytes:
        return self.frame

    def close(self):
        self.closed = True


class TestImageHash(unittest.TestCase):

    def test_small_inputs(self):
        self.assertEqual(image_hash(b""), 0)
        self.assertEqual(image_hash(b"a"), 97)
        self.assertEqual(image_hash(b"ab"), 97 * 31 + 98)

    def test_wraps_to_signed_32_bit(self):
        data = bytes(range(256)) * 8
        h = image_hash(data)
        self.assertEqual(h, reference_hash(data))
        self.assertTrue(-2 ** 31 <= h < 2 ** 31)

    def test_result_index_is_abs_hash_mod_4(self):
        for data in (b"a", b"ab", b"food photo", bytes(range(200))):
            self.assertIs(pick_mock_result(data), MOCK_RESULTS[abs(image_hash(data)) % 4])

    def test_four_fixed_results(self):
        self.assertEqual(len(MOCK_RESULTS), 4)
        self.assertEqual(MOCK_RESULTS[0].food_name, "Grilled Chicken Salad")
        self.assertEqual(pick_mock_result(b"a").food_name, "Salmon with Quinoa")


class TestMockFoodAnalyzer(unittest.IsolatedAsyncioTestCase):

    async def test_analyze_is_deterministic(self):
        analyzer = MockFoodAnalyzer(delay_seconds=0)
        first = await analyzer.analyze(b"same bytes")
        second = await analyzer.analyze(b"same bytes")
        self.assertEqual(first, second)

    async def test_hash_runs_off_the_event_loop(self):
        loop_thread = threading.get_ident()
        seen = []

        def recording_pick(data):
            seen.append(threading.get_ident())
            return MOCK_RESULTS[0]

        with patch("fitflow.services.nutrition_service.pick_mock_result", side_effect=recording_pick):
            result = await MockFoodAnalyzer(delay_seconds=0).analyze(b"photo")
        self.assertEqual(result, MOCK_RESULTS[0])
        self.assertEqual(len(seen), 1)
        self.assertNotEqual(seen[0], loop_thread)

    async def test_empty_image_rejected(self):
        with self.assertRaises(ValueError):
            await MockFoodAnalyzer(delay_seconds=0).analyze(b"")

    async def test_collaborator_failure_is_wrapped(self):
        with self.assertRaises(AnalysisFailedError):
            await analyze_food(BrokenAnalyzer(), b"photo")

    async def test_cancel_during_delay(self):
        task = asyncio.ensure_future(MockFoodAnalyzer(delay_seconds=10).analyze(b"photo"))
        await asyncio.sleep(0)
        task.cancel()
        with self.assertRaises(asyncio.CancelledError):
            await task


class TestNutritionScanner(unittest.IsolatedAsyncioTestCase):

    async def test_analyze_selected_image(self):
        scanner = NutritionScanner(MockFoodAnalyzer(delay_seconds=0))
        scanner.select_image(b"ab")
        result = await scanner.analyze()
        self.assertEqual(result.food_name, "Salmon with Quinoa")
        self.assertEqual(scanner.result, result)
        self.assertFalse(scanner.is_analyzing)

    async def test_analyze_without_image(self):
        scanner = NutritionScanner(MockFoodAnalyzer(delay_seconds=0))
        with self.assertRaises(ValueError):
            await scanner.analyze()

    async def test_clear_abandons_in_flight_analysis(self):
        scanner = NutritionScanner(MockFoodAnalyzer(delay_seconds=10))
        scanner.select_image(b"photo")
        pending = asyncio.ensure_future(scanner.analyze())
        await asyncio.sleep(0)
        self.assertTrue(scanner.is_analyzing)

        scanner.clear()
        with self.assertRaises(asyncio.CancelledError):
            await pending
        self.assertIsNone(scanner.result)
        self.assertIsNone(scanner.selected_image)
        self.assertFalse(scanner.is_analyzing)

    async def test_failure_leaves_no_partial_result(self):
        scanner = NutritionScanner(BrokenAnalyzer())
        scanner.select_image(b"photo")
        with self.assertRaises(AnalysisFailedError):
            await scanner.analyze()
        self.assertIsNone(scanner.result)
        # Image stays selected so the user can retry
        self.assertEqual(scanner.selected_image, b"photo")

    async def test_save_appends_history_and_clears(self):
        scanner = NutritionScanner(MockFoodAnalyzer(delay_seconds=0))
        scanner.select_image(b"a")
        await scanner.analyze()
        entry = scanner.save()
        self.assertEqual(entry.result.food_name, "Salmon with Quinoa")
        self.assertEqual(len(scanner.history), 1)
        self.assertIsNone(scanner.selected_image)
        self.assertIsNone(scanner.result)

    def test_save_without_result(self):
        with self.assertRaises(ValueError):
            NutritionScanner(MockFoodAnalyzer(delay_seconds=0)).save()

    def test_camera_failure_falls_back_to_upload(self):
        scanner = NutritionScanner(MockFoodAnalyzer(delay_seconds=0))
        with self.assertRaises(DeviceUnavailableError):
            scanner.capture_from(DeadCamera())
        self.assertIsNone(scanner.selected_image)

        image = scanner.upload("data:image/jpeg;base64," + base64.b64encode(b"plate").decode())
        self.assertEqual(image, b"plate")
        self.assertEqual(scanner.selected_image, b"plate")

    def test_camera_capture_selects_frame(self):
        scanner = NutritionScanner(MockFoodAnalyzer(delay_seconds=0))
        camera = StaticCamera(b"\xff\xd8frame")
        scanner.capture_from(camera)
        self.assertEqual(scanner.selected_image, b"\xff\xd8frame")
        self.assertTrue(camera.closed)


if __name__ == '__main__':
    unittest.main()
