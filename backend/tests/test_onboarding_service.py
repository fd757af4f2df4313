import unittest

from pydantic import ValidationError

from fitflow.schemas.user_profile import (
    BasicInfoInput,
    EquipmentInput,
    FitnessLevel,
    FitnessProfileInput,
    PhysicalInfoInput,
    UserProfile,
)
from fitflow.services.onboarding_service import (
    OnboardingSession,
    OnboardingStateError,
    OnboardingStep,
    StepValidationError,
    toggle_equipment,
    toggle_tag,
    validate_basic_info,
    validate_physical_info,
)


def walk_to_equipment(session: OnboardingSession):
    session.start()
    session.submit_basic_info(BasicInfoInput(name="Sarah", age=29, gender="female"))
    session.submit_physical_info(PhysicalInfoInput(weight=140, height=168))
    session.submit_fitness_profile(FitnessProfileInput(fitness_level="Advanced", fitness_goals=["endurance"]))


class TestStepValidation(unittest.TestCase):

    def test_basic_info_messages(self):
        self.assertEqual(
            validate_basic_info(BasicInfoInput()),
            {"name": "Name is required", "age": "Age is required", "gender": "Gender is required"},
        )
        self.assertEqual(
            validate_basic_info(BasicInfoInput(name="Al", age=12, gender="male")),
            {"age": "Age must be between 13 and 100"},
        )
        self.assertEqual(validate_basic_info(BasicInfoInput(name="Al", age=13, gender="male")), {})
        self.assertEqual(validate_basic_info(BasicInfoInput(name="Al", age=100, gender="other")), {})
        self.assertIn("age", validate_basic_info(BasicInfoInput(name="Al", age=101, gender="male")))

    def test_physical_info_ranges(self):
        self.assertEqual(
            validate_physical_info(PhysicalInfoInput(weight=29, height=251)),
            {
                "weight": "Weight must be between 30 and 500 lbs",
                "height": "Height must be between 100 and 250 cm",
            },
        )
        self.assertEqual(validate_physical_info(PhysicalInfoInput(weight=30, height=100)), {})
        self.assertEqual(validate_physical_info(PhysicalInfoInput(weight=500, height=250)), {})
        self.assertEqual(
            validate_physical_info(PhysicalInfoInput()),
            {"weight": "Weight is required", "height": "Height is required"},
        )


class TestOnboardingSession(unittest.TestCase):

    def test_full_flow_commits_profile(self):
        session = OnboardingSession()
        walk_to_equipment(session)
        self.assertEqual(session.step, OnboardingStep.EQUIPMENT)

        profile = session.complete(EquipmentInput(
            available_equipment=["dumbbells"],
            preferred_workouts=["strength", "hiit"],
        ))
        self.assertTrue(session.completed)
        self.assertEqual(profile.name, "Sarah")
        self.assertEqual(profile.fitness_level, FitnessLevel.ADVANCED)
        self.assertEqual(profile.preferred_workouts, ["strength", "hiit"])

    def test_failed_step_keeps_state(self):
        session = OnboardingSession()
        session.start()
        with self.assertRaises(StepValidationError) as ctx:
            session.submit_basic_info(BasicInfoInput(name="", age=200, gender="male"))
        self.assertEqual(
            ctx.exception.errors,
            {"name": "Name is required", "age": "Age must be between 13 and 100"},
        )
        self.assertEqual(session.step, OnboardingStep.BASIC_INFO)
        self.assertEqual(session.draft.name, "")

    def test_fitness_profile_requires_goal(self):
        session = OnboardingSession()
        session.start()
        session.submit_basic_info(BasicInfoInput(name="Sam", age=40, gender="other"))
        session.submit_physical_info(PhysicalInfoInput(weight=180, height=180))
        with self.assertRaises(StepValidationError) as ctx:
            session.submit_fitness_profile(FitnessProfileInput(fitness_level="Beginner"))
        self.assertEqual(ctx.exception.errors, {"fitness_goals": "Select at least one fitness goal"})

    def test_equipment_requires_selections(self):
        session = OnboardingSession()
        walk_to_equipment(session)
        with self.assertRaises(StepValidationError) as ctx:
            session.submit_equipment(EquipmentInput())
        self.assertEqual(set(ctx.exception.errors), {"available_equipment", "preferred_workouts"})

    def test_commit_before_last_step(self):
        session = OnboardingSession()
        session.start()
        with self.assertRaises(OnboardingStateError):
            session.commit()
        self.assertFalse(session.completed)

    def test_out_of_order_submit(self):
        session = OnboardingSession()
        with self.assertRaises(OnboardingStateError):
            session.submit_physical_info(PhysicalInfoInput(weight=140, height=168))

    def test_back_keeps_draft(self):
        session = OnboardingSession()
        walk_to_equipment(session)
        session.back()
        self.assertEqual(session.step, OnboardingStep.FITNESS_PROFILE)
        self.assertEqual(session.draft.weight, 140)

        for _ in range(10):
            session.back()
        self.assertEqual(session.step, OnboardingStep.WELCOME)

    def test_restart_replaces_profile(self):
        session = OnboardingSession()
        walk_to_equipment(session)
        first = session.complete(EquipmentInput(available_equipment=["bench"], preferred_workouts=["yoga"]))

        session.restart()
        self.assertFalse(session.completed)
        self.assertEqual(session.step, OnboardingStep.WELCOME)
        self.assertEqual(session.draft.name, "Sarah")

        session.start()
        session.submit_basic_info(BasicInfoInput(name="Sarah J", age=30, gender="female"))
        session.submit_physical_info(PhysicalInfoInput(weight=138, height=168))
        session.submit_fitness_profile(FitnessProfileInput(fitness_level="Beginner", fitness_goals=["flexibility"]))
        second = session.complete(EquipmentInput(available_equipment=["no-equipment"], preferred_workouts=["cardio"]))

        self.assertIsNot(first, second)
        self.assertEqual(session.profile.name, "Sarah J")
        self.assertEqual(first.name, "Sarah")


class TestToggles(unittest.TestCase):

    def test_no_equipment_is_exclusive(self):
        self.assertEqual(toggle_equipment(["dumbbells", "bench"], "no-equipment"), ["no-equipment"])
        self.assertEqual(toggle_equipment(["no-equipment"], "no-equipment"), [])
        self.assertEqual(toggle_equipment(["no-equipment"], "dumbbells"), ["dumbbells"])
        self.assertEqual(toggle_equipment(["dumbbells", "bench"], "bench"), ["dumbbells"])

    def test_toggle_tag(self):
        self.assertEqual(toggle_tag(["yoga"], "hiit"), ["yoga", "hiit"])
        self.assertEqual(toggle_tag(["yoga", "hiit"], "yoga"), ["hiit"])


class TestUserProfileModel(unittest.TestCase):

    def profile(self, **overrides):
        fields = dict(name="Sarah", age=29, gender="female", weight=140, height=168)
        fields.update(overrides)
        return UserProfile(**fields)

    def test_blank_name_rejected(self):
        for name in ("", "   ", "\t\n"):
            with self.assertRaises(ValidationError, msg=repr(name)):
                self.profile(name=name)

    def test_name_is_trimmed(self):
        self.assertEqual(self.profile(name="  Sarah ").name, "Sarah")


if __name__ == '__main__':
    unittest.main()
