"""
Pytest fixtures for plan parsing tests.
"""

from datetime import date
from typing import Dict, List

import pytest

from ..model import DayPlan, WeekPlan


@pytest.fixture
def strength_day() -> DayPlan:
    """Strength day with embedded warm-up and cool-down lines"""
    return DayPlan.model_validate({
        "weekday": "Mon",
        "kind": "main",
        "workouts": ["Lower body strength"],
        "detailed_workouts": [
            {
                "title": "Lower Body Strength",
                "focus": "strength",
                "duration_min": 45,
                "instructions": [
                    "5 min brisk walk warm-up",
                    "Squats: 3 sets of 8 reps",
                    "Romanian Deadlift: 3 sets of 10 reps 40 kg",
                    "Keep your back flat",
                    "5 min cool down walk",
                ],
            }
        ],
    })


@pytest.fixture
def cardio_day() -> DayPlan:
    return DayPlan.model_validate({
        "weekday": "Tue",
        "workouts": ["Zone 2 run"],
        "detailed_workouts": [
            {"title": "Cardio", "focus": "cardio", "instructions": ["Running: 30 min steady state"]}
        ],
    })


@pytest.fixture
def mobility_day() -> DayPlan:
    return DayPlan.model_validate({
        "weekday": "Wed",
        "workouts": ["Mobility"],
        "detailed_workouts": [
            {
                "title": "Evening Mobility",
                "focus": "mobility",
                "instructions": [
                    "1. Cat-Cow: 10 slow reps",
                    "2. World's Greatest Stretch",
                    "Hip",
                ],
            }
        ],
    })


@pytest.fixture
def completed_logs() -> List[Dict]:
    """Completed logs, newest first, as read from storage"""
    return [
        {
            "workout_date": "2026-10-12",
            "status": "completed",
            "details": [
                {"name": "Warm Up", "type": "warmup", "completed": True},
                {
                    "name": "Squats",
                    "type": "exercise",
                    "sets": [
                        {"set": 1, "weight": "60", "reps": "8", "is_bodyweight": False, "completed": True},
                        {"set": 2, "weight": "62.5", "reps": "8", "is_bodyweight": False, "completed": True},
                        {"set": 3, "weight": "65", "reps": "8", "is_bodyweight": False, "completed": False},
                    ],
                },
            ],
        },
        {
            "workout_date": "2026-10-05",
            "status": "completed",
            "details": [
                {
                    "name": "Squats",
                    "type": "exercise",
                    "sets": [
                        {"set": 1, "weight": "55", "reps": "8", "is_bodyweight": False, "completed": True},
                    ],
                },
                {
                    "name": "Romanian Deadlift",
                    "type": "exercise",
                    "sets": [
                        {"set": 1, "weight": "35", "reps": "10", "is_bodyweight": False, "completed": True},
                    ],
                },
            ],
        },
    ]


@pytest.fixture
def week_plans(strength_day, cardio_day) -> List[WeekPlan]:
    """Two stored weeks; 2026-10-19 is a Monday"""
    return [
        WeekPlan(
            id="week-1",
            week_start_date=date(2026, 10, 12),
            plan={"notes": "Old week", "days": [{"weekday": "Mon", "workouts": ["Old Monday"]}]},
        ),
        WeekPlan(
            id="week-2",
            week_start_date=date(2026, 10, 19),
            plan={"notes": "This week", "days": [strength_day.model_dump(), cardio_day.model_dump()]},
        ),
    ]
