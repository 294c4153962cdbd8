"""
Unit tests for carrying weights forward from workout logs.
"""

from ..history import apply_history, build_weight_history, coerce_logs, merge_history
from ..model import Block, BlockCategory, BlockType, DayPlan, ExerciseSet, WorkoutData


def exercise(name, weight="", sets=3, category=BlockCategory.strength, block_id="block-0") -> Block:
    return Block(
        id=block_id,
        type=BlockType.exercise,
        category=category,
        name=name,
        sets=[
            ExerciseSet(set_number=i + 1, weight=weight, reps="8", is_bodyweight=not weight)
            for i in range(sets)
        ],
    )


def log(workout_date, *blocks, status="completed") -> dict:
    return {"workout_date": workout_date, "status": status, "details": list(blocks)}


def squat_entry(*weights, completed=True) -> dict:
    return {
        "name": "Squat",
        "type": "exercise",
        "sets": [
            {"set": i + 1, "weight": w, "reps": "8", "completed": completed}
            for i, w in enumerate(weights)
        ],
    }


class TestBuildWeightHistory:
    """Test the name to weight map"""

    def test_last_completed_set_counts(self, completed_logs):
        """The incomplete 65 kg set does not count"""
        history = build_weight_history(coerce_logs(completed_logs))

        assert history["Squats"] == "62.5"

    def test_newest_log_wins(self, completed_logs):
        history = build_weight_history(coerce_logs(completed_logs))

        assert history == {"Squats": "62.5", "Romanian Deadlift": "35"}

    def test_blank_weight_falls_back_to_older_log(self):
        logs = coerce_logs([
            log("2026-10-12", squat_entry("")),
            log("2026-10-05", squat_entry("50")),
        ])

        assert build_weight_history(logs) == {"Squat": "50"}

    def test_only_exercise_blocks(self):
        logs = coerce_logs([
            log("2026-10-12", {"name": "Squat", "type": "warmup", "completed": True}),
        ])

        assert build_weight_history(logs) == {}

    def test_no_completed_sets(self):
        logs = coerce_logs([log("2026-10-12", squat_entry("60", completed=False))])

        assert build_weight_history(logs) == {}

    def test_unfinished_logs_are_ignored(self):
        logs = coerce_logs([
            log("2026-10-12", squat_entry("70"), status="in_progress"),
            log("2026-10-05", squat_entry("60")),
        ])

        assert build_weight_history(logs) == {"Squat": "60"}

    def test_log_limit(self):
        """Only the most recent logs are consulted"""
        logs = coerce_logs(
            [log(f"2026-10-{day:02d}", {"name": "Plank", "type": "exercise", "sets": []})
             for day in range(20, 15, -1)]
            + [log("2026-10-01", squat_entry("40"))]
        )

        assert build_weight_history(logs) == {}
        assert build_weight_history(logs, limit=6) == {"Squat": "40"}

    def test_limit_counts_completed_logs_only(self):
        """Unfinished logs do not use up the log limit"""
        logs = coerce_logs(
            [log(f"2026-10-{day:02d}", squat_entry("80"), status="in_progress")
             for day in range(20, 14, -1)]
            + [log("2026-10-01", squat_entry("40"))]
        )

        assert build_weight_history(logs) == {"Squat": "40"}

    def test_numeric_weights_are_text(self):
        logs = coerce_logs([log("2026-10-12", squat_entry(60))])

        assert build_weight_history(logs) == {"Squat": "60"}


class TestMergeHistory:
    """Test weight fills on parsed blocks"""

    def test_fills_blank_weights(self):
        """'Squat' with history 60 gets 60 on every set and stops being bodyweight"""
        merged = merge_history([exercise("Squat")], {"Squat": "60"})

        assert all(s.weight == "60" for s in merged[0].sets)
        assert not any(s.is_bodyweight for s in merged[0].sets)

    def test_existing_weight_is_kept(self):
        merged = merge_history([exercise("Squat", weight="80")], {"Squat": "60"})

        assert all(s.weight == "80" for s in merged[0].sets)

    def test_partial_blank_sets(self):
        block = exercise("Squat")
        block.sets[0].weight = "70"
        block.sets[0].is_bodyweight = False

        merged = merge_history([block], {"Squat": "60"})

        assert [s.weight for s in merged[0].sets] == ["70", "60", "60"]

    def test_exact_name_match_only(self):
        merged = merge_history([exercise("Back Squat"), exercise("squat")], {"Squat": "60"})

        assert all(s.weight == "" for b in merged for s in b.sets)

    def test_mobility_blocks_untouched(self):
        block = exercise("Cat-Cow", category=BlockCategory.mobility, sets=1)

        merged = merge_history([block], {"Cat-Cow": "10"})

        assert merged[0].sets[0].weight == ""

    def test_non_exercise_blocks_untouched(self):
        warmup = Block(id="block-0", type=BlockType.warmup, category=BlockCategory.cardio, name="Squat")

        assert merge_history([warmup], {"Squat": "60"}) == [warmup]

    def test_inputs_are_not_modified(self):
        block = exercise("Squat")

        merge_history([block], {"Squat": "60"})

        assert all(s.weight == "" for s in block.sets)

    def test_merge_is_idempotent(self):
        history = {"Squat": "60"}
        once = merge_history([exercise("Squat"), exercise("Row", block_id="block-1")], history)
        twice = merge_history(once, history)

        assert [b.model_dump() for b in once] == [b.model_dump() for b in twice]


class TestApplyHistory:
    """Test history applied to a whole session"""

    def test_apply_returns_new_workout(self, completed_logs):
        workout = WorkoutData(day_plan=DayPlan(weekday="Mon"), blocks=[exercise("Squats")])

        updated = apply_history(workout, completed_logs)

        assert updated.blocks[0].sets[0].weight == "62.5"
        assert workout.blocks[0].sets[0].weight == ""

    def test_no_history_returns_same_workout(self):
        workout = WorkoutData(day_plan=DayPlan(weekday="Mon"), blocks=[exercise("Squats")])

        assert apply_history(workout, []) is workout
