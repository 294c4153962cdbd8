#!/usr/bin/env python3
"""
CLI tool for turning a stored week plan into session blocks.

Reads week plans (and optionally completed logs) from JSON files, parses the
day that falls on the given date and writes the blocks as JSON.
"""

import argparse
import json
from datetime import date
from pathlib import Path

from motiva.errors import DayPlanUnavailableError
from motiva.model import WeekPlan
from motiva.workout_loader import load_workout


def load_json(path: str):
    with open(path, 'r') as f:
        return json.load(f)


def main():
    parser = argparse.ArgumentParser(description="Parse a day of a week plan into trackable blocks.")
    parser.add_argument("plans", help="JSON file with a week plan or a list of week plans")
    parser.add_argument("date", help="Workout date (YYYY-MM-DD)")
    parser.add_argument("--logs", help="JSON file with completed workout logs, newest first")
    parser.add_argument("--output", help="Where to write the blocks (default: stdout)")
    args = parser.parse_args()

    raw_plans = load_json(args.plans)
    if isinstance(raw_plans, dict):
        raw_plans = [raw_plans]
    week_plans = [WeekPlan.model_validate(p) for p in raw_plans]
    history_logs = load_json(args.logs) if args.logs else []

    try:
        workout = load_workout(week_plans, date.fromisoformat(args.date), history_logs)
    except DayPlanUnavailableError as e:
        print(f"✗ {e}")
        raise SystemExit(1)

    output = json.dumps(workout.model_dump(mode="json", by_alias=True), indent=2)
    if args.output:
        Path(args.output).write_text(output)
        print(f"✓ Wrote {len(workout.blocks)} blocks to {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
