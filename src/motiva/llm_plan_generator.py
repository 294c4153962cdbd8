"""
LLM-based weekly plan generator.

This module uses LiteLLM to ask a language model for a week of workouts as
structured JSON.
"""

import json
import logging
import re
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

from litellm import completion
from pydantic import ValidationError

from .config import settings
from .errors import PlanGenerationError
from .history import coerce_logs
from .model import DayKind, DayPlan, PlanDocument, WorkoutLog
from .schedule import DEFAULT_WEEK_START, DOW_ORDER, infer_kind, normalize_weekday, order_days

logger = logging.getLogger(__name__)

JSON_OBJECT_PATTERN = re.compile(r'\{[\s\S]*\}')

NO_HISTORY_TEXT = "No previous workout history available - Start with baseline weights."
NO_LIFTS_TEXT = "No lifts recorded yet."


def format_recent_history(logs: Iterable[Union[WorkoutLog, dict]]) -> str:
    """
    Summarize the last completed set per exercise for the prompt.

    Logs are expected newest first; the newest entry per exercise wins.
    """
    logs = coerce_logs(logs)
    if not logs:
        return NO_HISTORY_TEXT

    exercise_history: Dict[str, str] = {}
    for log in logs:
        for block in log.details:
            if block.type != "exercise" or not block.sets:
                continue
            completed_sets = [s for s in block.sets if s.completed]
            if not completed_sets or block.name in exercise_history:
                continue
            last_set = completed_sets[-1]
            weight_text = "Bodyweight" if last_set.is_bodyweight else f"{last_set.weight}kg"
            exercise_history[block.name] = f"[{log.workout_date.isoformat()}]: {weight_text} x {last_set.reps} reps"

    lines = [f"- {name}: {perf}" for name, perf in exercise_history.items()]
    return "\n".join(lines) or NO_LIFTS_TEXT


class LLMPlanGenerator:
    """Generates weekly plans through a primary model with one backup"""

    def __init__(self, model: Optional[str] = None, backup_model: Optional[str] = None,
                 timeout: Optional[int] = None):
        self.model = model or settings.MODEL_NAME
        self.backup_model = backup_model or settings.BACKUP_MODEL_NAME
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS
        logger.info("Using LiteLLM model: %s (backup: %s)", self.model, self.backup_model)

    def build_context(self, profile: Optional[Dict[str, Any]], planning: Optional[Dict[str, Any]] = None,
                      change_reason: Optional[str] = None, week_start_date: Optional[date] = None,
                      training_week: int = 1, today: Optional[date] = None) -> Dict[str, Any]:
        """Assemble the user and scheduling context sent with the prompt"""
        profile = profile or {}
        planning = planning or {}
        today = today or date.today()

        default_days = _weekday_codes(profile.get("default_days_available"))
        planning_days = _weekday_codes(planning.get("days_available"))
        target_days = planning_days or default_days

        is_future_week = week_start_date is not None and week_start_date > today
        current_day = "Start of Week"
        effective_days = target_days
        if not is_future_week:
            current_index = today.weekday()
            current_day = DOW_ORDER[current_index]
            effective_days = [d for d in target_days if DOW_ORDER.index(d) >= current_index]

        return {
            "user_profile": {
                "name": profile.get("full_name") or "Friend",
                "goal": profile.get("goal") or "General Fitness",
                "level": profile.get("level") or "beginner",
                "current_training_week": training_week,
                "fixed_activities": profile.get("fixed_activities") or [],
                "ongoing_health_constraints_and_experience": profile.get("training_constraints"),
                "facilities": profile.get("facilities") or [],
            },
            "scheduling_context": {
                "current_day": current_day,
                "valid_days_for_workouts": effective_days,
                "is_future_plan": is_future_week,
                "is_adjustment": bool(change_reason),
            },
            "user_request": {
                "notes": planning.get("notes") or "",
                "adjustment_request": change_reason or "",
            },
        }

    def generate_plan(self, context: Dict[str, Any],
                      history_logs: Iterable[Union[WorkoutLog, dict]] = (),
                      week_start: str = DEFAULT_WEEK_START) -> PlanDocument:
        """Generate a week plan, trying the backup model once if the primary fails"""
        performance_history = format_recent_history(list(history_logs)[:settings.PROMPT_HISTORY_LIMIT])
        system_prompt = self._create_system_prompt(context, performance_history)
        user_prompt = f"CONTEXT:\n{json.dumps(context, indent=2)}\n\nTASK:\nGenerate the plan as strict JSON."

        try:
            content = self._call_model(self.model, system_prompt, user_prompt)
        except Exception as primary_error:
            logger.warning("Primary model %s failed (%s), trying %s", self.model, primary_error, self.backup_model)
            try:
                content = self._call_model(self.backup_model, system_prompt, user_prompt)
            except Exception as backup_error:
                raise PlanGenerationError("Connection Failed", "Could not connect to AI service.") from backup_error

        return self._parse_plan(content, week_start)

    def _call_model(self, model: str, system_prompt: str, user_prompt: str) -> Optional[str]:
        response = completion(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=0.6,
            timeout=self.timeout,
        )
        return response.choices[0].message.content

    def _parse_plan(self, content: Optional[str], week_start: str = DEFAULT_WEEK_START) -> PlanDocument:
        if not content:
            raise PlanGenerationError("Empty Response", "AI returned no content.")

        json_match = JSON_OBJECT_PATTERN.search(content)
        if json_match:
            content = json_match.group(0)

        try:
            parsed = json.loads(content)
        except ValueError as e:
            raise PlanGenerationError("Format Error", "AI returned invalid JSON.") from e
        if not isinstance(parsed, dict):
            raise PlanGenerationError("Format Error", "AI returned invalid JSON.")

        try:
            days = self._normalize_days(parsed.get("days"), week_start)
            return PlanDocument(notes=parsed.get("notes") or "", days=days)
        except ValidationError as e:
            raise PlanGenerationError("Format Error", f"AI returned an unexpected plan shape: {e}") from e

    def _normalize_days(self, days: Any, week_start: str = DEFAULT_WEEK_START) -> List[DayPlan]:
        """One DayPlan per weekday in week order; missing days become rest days"""
        days_by_code: Dict[str, Dict[str, Any]] = {}
        if isinstance(days, list):
            for day in days:
                if not isinstance(day, dict):
                    continue
                code = normalize_weekday(day.get("weekday"))
                if code and code not in days_by_code:
                    days_by_code[code] = day

        week = []
        for code in DOW_ORDER:
            if code not in days_by_code:
                week.append(DayPlan(weekday=code, kind=DayKind.recovery))
                continue
            day = DayPlan.model_validate(days_by_code[code])
            week.append(day.model_copy(update={"kind": infer_kind(day)}))
        return order_days(week, week_start)

    def _create_system_prompt(self, context: Dict[str, Any], performance_history: str) -> str:
        """Create the coaching prompt for a week plan"""
        user = context.get("user_profile", {})
        scheduling = context.get("scheduling_context", {})

        prompt = f"""
You are "Motiva", an expert AI fitness coach focused on functional fitness, longevity and progressive overload.

**Core philosophy:**
1. Consistency beats intensity. In weeks 1-4 build habits and form before volume.
2. A good week mixes strength (2-3x), mostly Zone 2 cardio and 1-2 mobility sessions.
   With few available days prioritize Strength > Zone 2 Cardio > Mobility.
3. Use 'current_training_week': weeks 1-4 foundation, 5-8 accumulation, 9+ intensification.

**Goal alignment:** balance the plan across all of the user's goals.

**Partial week:** if 'is_future_plan' is false, do not schedule workouts before 'current_day'.

**Cycling equipment:** without a bicycle in 'facilities' but with a gym, prescribe "Stationary Bike".

**HIIT:** only for 'Advanced' users or when 'current_training_week' > 8. Default to Zone 2.

**User:**
- Name: {user.get("name", "Athlete")}
- Goal: {user.get("goal", "General Fitness")}
- Level: {user.get("level", "beginner")}
- Current Week: {user.get("current_training_week", 1)}
- Recent Performance:
{performance_history}

**Hard constraints:**
1. Only schedule main workouts on: {json.dumps(scheduling.get("valid_days_for_workouts", []))}.
2. Schedule fixed activities exactly on their days: {json.dumps(user.get("fixed_activities", []))}.
3. If "adjustment_request" is set, adapt the plan to it and keep the rest balanced.

**Writing instructions:**
1. Strength: apply progressive overload from Recent Performance. Be specific: "Squats: 3 sets of 8-12 reps".
2. Cardio: always split into segments, e.g. "5 min brisk walk warm-up",
   "Running: 4 x 5 mins Zone 2, 1 min walk", "5 min cool down walk".
3. Mobility: list specific movements, one per line.

**Output:** return ONLY valid JSON:
{{
  "notes": "Short, encouraging message about this week's goal.",
  "days": [
    {{
      "weekday": "Mon",
      "kind": "main" | "bonus" | "recovery",
      "workouts": ["Short summary"],
      "detailed_workouts": [
        {{
          "title": "Upper Body Strength",
          "focus": "strength" | "cardio" | "mobility" | "mixed" | "recovery",
          "duration_min": 45,
          "instructions": ["Warm up: 5 mins dynamic", "Squats: 3 sets of 8 reps", "Cool down: 5 mins walk"],
          "notes": "Specific cue"
        }}
      ]
    }}
  ]
}}
"""
        return prompt.strip()


def _weekday_codes(labels: Any) -> List[str]:
    if not isinstance(labels, list):
        return []
    codes = [normalize_weekday(label) if isinstance(label, str) else None for label in labels]
    return [c for c in codes if c]
