"""
Data models for plan parsing and workout logging.
"""
from datetime import date
from enum import StrEnum, auto
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class BlockType(StrEnum):
    warmup = auto()
    cooldown = auto()
    endurance_session = auto()
    exercise = auto()
    general_block = auto()


class BlockCategory(StrEnum):
    strength = auto()
    mobility = auto()
    cardio = auto()


class EnduranceMode(StrEnum):
    run = auto()
    bike = auto()
    swim = auto()
    general = auto()


class DayKind(StrEnum):
    main = auto()
    bonus = auto()
    recovery = auto()


class SubWorkout(BaseModel):
    """One named section of a day's plan (e.g. "Upper Body Strength")"""
    title: str = ""
    focus: Optional[str] = None
    duration_min: Optional[float] = None
    instructions: Optional[List[str]] = None
    notes: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("focus", mode="before")
    @classmethod
    def _lower_focus(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip().lower()

    @field_validator("instructions", mode="before")
    @classmethod
    def _instructions_or_none(cls, value: Any) -> Optional[List[str]]:
        # Anything other than a list is treated as malformed and skipped later
        if not isinstance(value, list):
            return None
        return [str(line) for line in value if line is not None]


class DayPlan(BaseModel):
    id: Optional[str] = None
    weekday: str
    workouts: List[str] = Field(default_factory=list)
    kind: Optional[DayKind] = None
    detailed_workouts: List[SubWorkout] = Field(default_factory=list)

    @field_validator("workouts", "detailed_workouts", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("kind", mode="before")
    @classmethod
    def _known_kind(cls, value: Any) -> Any:
        if isinstance(value, str) and value.lower() in DayKind.__members__:
            return value.lower()
        return None


class PlanDocument(BaseModel):
    """A generated week: coach notes plus one DayPlan per weekday"""
    notes: str = ""
    days: List[DayPlan] = Field(default_factory=list)


class WeekPlan(BaseModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    week_start_date: Optional[date] = None
    plan: PlanDocument

    @field_validator("plan", mode="before")
    @classmethod
    def _unwrap_nested_plan(cls, value: Any) -> Any:
        # Older rows stored the generator response as {"plan": {...}}
        if isinstance(value, dict) and isinstance(value.get("plan"), dict):
            return value["plan"]
        return value


class ExerciseSet(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    set_number: int = Field(ge=1)
    weight: str = ""
    reps: str = ""
    is_bodyweight: bool = True
    completed: bool = False


class Block(BaseModel):
    """One trackable unit of a workout session"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    type: BlockType
    category: BlockCategory
    name: str
    subtitle: Optional[str] = None
    instructions: List[str] = Field(default_factory=list)
    sets: List[ExerciseSet] = Field(default_factory=list)
    is_completed: bool = False
    duration_seconds: Optional[int] = None
    mode: Optional[EnduranceMode] = None


class WorkoutData(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    plan_id: str = "temp"
    day_plan: DayPlan
    general_notes: str = ""
    blocks: List[Block] = Field(default_factory=list)
    is_pure_endurance_day: bool = False


class LoggedSet(BaseModel):
    set: Optional[int] = None
    weight: str = ""
    reps: str = ""
    is_bodyweight: bool = False
    completed: bool = False

    @field_validator("weight", "reps", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)


class LoggedBlock(BaseModel):
    """Flattened block as persisted after a session.

    ``completed`` is only set for non-exercise blocks and ``sets`` only for
    exercise blocks.
    """
    name: str
    type: str
    completed: Optional[bool] = None
    sets: Optional[List[LoggedSet]] = None


class WorkoutLog(BaseModel):
    user_id: Optional[str] = None
    workout_date: date
    status: str = "completed"
    details: List[LoggedBlock] = Field(default_factory=list)

    @field_validator("details", mode="before")
    @classmethod
    def _details_list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []
