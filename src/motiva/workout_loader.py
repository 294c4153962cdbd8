"""
Opening a day: locate its plan, parse it into blocks, carry weights forward.
"""

from datetime import date
from typing import Iterable, Optional, Sequence, Union

from .config import settings
from .history import apply_history
from .model import WeekPlan, WorkoutData, WorkoutLog
from .schedule import find_day_plan
from .store import WorkoutStore
from .workout_parser import WorkoutPlanParser


def load_workout(week_plans: Sequence[WeekPlan], workout_date: date,
                 history_logs: Iterable[Union[WorkoutLog, dict]] = (),
                 parser: Optional[WorkoutPlanParser] = None) -> WorkoutData:
    """
    Build the session blocks for ``workout_date``.

    Raises DayPlanUnavailableError when no stored plan covers the date.
    """
    day_plan = find_day_plan(week_plans, workout_date)
    workout = (parser or WorkoutPlanParser()).parse(day_plan)
    return apply_history(workout, history_logs)


def open_workout(store: WorkoutStore, user_id: str, workout_date: date) -> WorkoutData:
    week_plans = store.get_week_plans(user_id)
    history_logs = store.get_recent_logs(user_id, settings.HISTORY_LOG_LIMIT)
    return load_workout(week_plans, workout_date, history_logs)
