"""
Week and weekday arithmetic for stored plans.
"""

from datetime import date, timedelta
from typing import List, Optional, Sequence

from .errors import DayPlanUnavailableError
from .model import DayKind, DayPlan, WeekPlan

DOW_ORDER = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
DEFAULT_WEEK_START = "Mon"
DAYS_PER_WEEK = 7


def normalize_weekday(label: Optional[str]) -> Optional[str]:
    """'monday', 'MON', 'Mon.' -> 'Mon'; unknown labels -> None"""
    if not label:
        return None
    base = label.strip()[:3].lower()
    for code in DOW_ORDER:
        if code.lower() == base:
            return code
    return None


def _index(code: Optional[str]) -> int:
    return DOW_ORDER.index(normalize_weekday(code) or DEFAULT_WEEK_START)


def weekday_code(day: date) -> str:
    return DOW_ORDER[day.weekday()]


def to_iso(day: date) -> str:
    return day.isoformat()


def start_of_week(day: date, week_start: str = DEFAULT_WEEK_START) -> date:
    """Most recent date on or before ``day`` that falls on ``week_start``"""
    diff = (day.weekday() - _index(week_start)) % DAYS_PER_WEEK
    return day - timedelta(days=diff)


def date_for_weekday(week_start_date: date, week_start: str, target: str) -> date:
    offset = (_index(target) - _index(week_start)) % DAYS_PER_WEEK
    return week_start_date + timedelta(days=offset)


def next_week_start(today: date, week_start: str = DEFAULT_WEEK_START) -> date:
    """The next ``week_start`` strictly after today"""
    days_until = _index(week_start) - today.weekday()
    if days_until <= 0:
        days_until += DAYS_PER_WEEK
    return today + timedelta(days=days_until)


def order_days(days: Sequence[DayPlan], week_start: str = DEFAULT_WEEK_START) -> List[DayPlan]:
    """Sort days by their offset from the week start; unknown weekdays sort as Monday"""
    start = _index(week_start)
    return sorted(days, key=lambda d: (_index(d.weekday) - start) % DAYS_PER_WEEK)


def infer_kind(day: DayPlan) -> DayKind:
    if day.kind:
        return day.kind
    if not day.workouts:
        return DayKind.recovery
    return DayKind.main


def find_week_plan(week_plans: Sequence[WeekPlan], workout_date: date) -> Optional[WeekPlan]:
    """
    The plan whose week contains ``workout_date``.

    Falls back to the newest plan when no week window matches.
    """
    if not week_plans:
        return None

    newest_first = sorted(
        week_plans,
        key=lambda p: (p.week_start_date is not None, p.week_start_date or date.min),
        reverse=True,
    )
    for plan in newest_first:
        if plan.week_start_date is None:
            continue
        end = plan.week_start_date + timedelta(days=DAYS_PER_WEEK)
        if plan.week_start_date <= workout_date < end:
            return plan
    return newest_first[0]


def find_day_plan(week_plans: Sequence[WeekPlan], workout_date: date) -> DayPlan:
    plan = find_week_plan(week_plans, workout_date)
    if plan is None:
        raise DayPlanUnavailableError(f"No week plans available for {to_iso(workout_date)}")

    code = weekday_code(workout_date).lower()
    for day in plan.plan.days:
        if day.weekday.lower().startswith(code):
            return day

    raise DayPlanUnavailableError(f"Day plan unavailable for {to_iso(workout_date)} ({weekday_code(workout_date)})")
