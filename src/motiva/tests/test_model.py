"""
Unit tests for data models.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from ..model import (
    Block,
    BlockCategory,
    BlockType,
    DayKind,
    DayPlan,
    ExerciseSet,
    LoggedSet,
    SubWorkout,
    WeekPlan,
    WorkoutData,
    WorkoutLog,
)


class TestSubWorkout:
    """Test SubWorkout validation"""

    def test_focus_is_lower_cased(self):
        assert SubWorkout(title="Legs", focus=" Strength ").focus == "strength"

    def test_blank_focus(self):
        assert SubWorkout(title="Legs", focus="").focus is None
        assert SubWorkout(title="Legs", focus=3).focus is None

    def test_missing_title(self):
        assert SubWorkout.model_validate({"title": None}).title == ""

    def test_malformed_instructions(self):
        """Anything that is not a list is marked as missing"""
        assert SubWorkout(instructions="Squats 3 sets").instructions is None
        assert SubWorkout.model_validate({}).instructions is None

    def test_instruction_items_are_text(self):
        assert SubWorkout(instructions=["Squats", 5, None]).instructions == ["Squats", "5"]


class TestDayAndWeekPlans:
    """Test DayPlan and WeekPlan validation"""

    def test_null_lists(self):
        day = DayPlan.model_validate({"weekday": "Mon", "workouts": None, "detailed_workouts": None})

        assert day.workouts == []
        assert day.detailed_workouts == []

    def test_kind(self):
        assert DayPlan(weekday="Mon", kind="Bonus").kind == DayKind.bonus
        assert DayPlan(weekday="Mon", kind="rest").kind is None

    def test_nested_plan_is_unwrapped(self):
        plan = WeekPlan.model_validate({
            "week_start_date": "2026-10-19",
            "plan": {"plan": {"notes": "Hi", "days": [{"weekday": "Mon"}]}},
        })

        assert plan.week_start_date == date(2026, 10, 19)
        assert plan.plan.notes == "Hi"
        assert plan.plan.days[0].weekday == "Mon"


class TestBlocks:
    """Test Block and WorkoutData models"""

    def test_set_number_starts_at_one(self):
        with pytest.raises(ValidationError):
            ExerciseSet(set_number=0)

    def test_camel_case_dump(self):
        block = Block(
            id="block-0",
            type=BlockType.endurance_session,
            category=BlockCategory.cardio,
            name="Cardio",
            duration_seconds=1800,
            sets=[ExerciseSet(set_number=1)],
        )
        workout = WorkoutData(day_plan=DayPlan(weekday="Tue"), blocks=[block])

        dumped = workout.model_dump(mode="json", by_alias=True)

        assert dumped["planId"] == "temp"
        assert dumped["isPureEnduranceDay"] is False
        assert dumped["blocks"][0]["durationSeconds"] == 1800
        assert dumped["blocks"][0]["isCompleted"] is False
        assert dumped["blocks"][0]["sets"][0]["setNumber"] == 1
        assert dumped["blocks"][0]["sets"][0]["isBodyweight"] is True

    def test_populate_by_alias(self):
        exercise_set = ExerciseSet.model_validate({"setNumber": 2, "isBodyweight": False, "weight": "40"})

        assert exercise_set.set_number == 2
        assert exercise_set.is_bodyweight is False


class TestLogs:
    """Test WorkoutLog models"""

    def test_numeric_weight_and_reps(self):
        logged = LoggedSet(set=1, weight=62.5, reps=8)

        assert logged.weight == "62.5"
        assert logged.reps == "8"

    def test_details_default(self):
        log = WorkoutLog.model_validate({"workout_date": "2026-10-19", "details": None})

        assert log.details == []
        assert log.status == "completed"
