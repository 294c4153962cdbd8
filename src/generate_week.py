#!/usr/bin/env python3
"""
Generate a week plan for a user profile and store it.

Uses the LLM plan generator and the configured store (Supabase when
SUPABASE_URL and SUPABASE_KEY are set, else JSON files under MOTIVA_DATA_DIR).
"""

import argparse
import json
from datetime import date

from motiva.config import settings
from motiva.errors import PlanGenerationError
from motiva.llm_plan_generator import LLMPlanGenerator
from motiva.model import WeekPlan
from motiva.schedule import date_for_weekday, next_week_start, normalize_weekday, start_of_week
from motiva.store import default_store


def main():
    parser = argparse.ArgumentParser(description="Generate and store a weekly training plan.")
    parser.add_argument("profile", help="JSON file with the user profile (must include 'id')")
    parser.add_argument("--next-week", action="store_true", help="Plan the upcoming week instead of this one")
    parser.add_argument("--week-start", default="Mon", help="First day of the user's week")
    parser.add_argument("--training-week", type=int, default=1)
    parser.add_argument("--notes", default="", help="Extra planning notes for this week")
    parser.add_argument("--change-reason", help="Why an existing plan is being adjusted")
    args = parser.parse_args()

    with open(args.profile, 'r') as f:
        profile = json.load(f)
    user_id = str(profile["id"])

    today = date.today()
    if args.next_week:
        week_start_date = next_week_start(today, args.week_start)
    else:
        week_start_date = start_of_week(today, args.week_start)

    store = default_store()
    generator = LLMPlanGenerator()
    context = generator.build_context(
        profile,
        planning={"notes": args.notes},
        change_reason=args.change_reason,
        week_start_date=week_start_date,
        training_week=args.training_week,
        today=today,
    )

    print(f"Generating plan for week of {week_start_date.isoformat()}...")
    try:
        history = store.get_recent_logs(user_id, settings.PROMPT_HISTORY_LIMIT)
        plan = generator.generate_plan(context, history, week_start=args.week_start)
    except PlanGenerationError as e:
        print(f"✗ {e}")
        raise SystemExit(1)

    store.save_week_plan(user_id, WeekPlan(week_start_date=week_start_date, plan=plan))
    print(f"✓ Saved plan with {sum(1 for d in plan.days if d.workouts)} training days")
    for day in plan.days:
        day_date = date_for_weekday(week_start_date, args.week_start, day.weekday)
        summary = ", ".join(day.workouts) or "Rest"
        print(f"  {normalize_weekday(day.weekday)} {day_date.isoformat()} [{day.kind}] {summary}")
    if plan.notes:
        print(f"\nCoach notes: {plan.notes}")


if __name__ == "__main__":
    main()
