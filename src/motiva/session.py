"""
Session state changes and the log written when a session finishes.
"""

from datetime import date
from typing import Any, Dict, Optional, Sequence

from .model import Block, BlockType, LoggedBlock, LoggedSet, WorkoutData, WorkoutLog

EDITABLE_SET_FIELDS = ("weight", "reps", "is_bodyweight", "completed")


def update_set(workout: WorkoutData, block_index: int, set_index: int, field: str, value: Any) -> WorkoutData:
    """
    Return a copy of ``workout`` with one set field changed.

    Switching a set to bodyweight clears its weight. Non-exercise blocks have
    no sets and are returned unchanged.
    """
    if field not in EDITABLE_SET_FIELDS:
        raise ValueError(f"Unknown set field: {field}")

    block = workout.blocks[block_index]
    if block.type != BlockType.exercise:
        return workout

    target = block.sets[set_index]
    if field == "is_bodyweight":
        is_bodyweight = value is True
        changes: Dict[str, Any] = {
            "is_bodyweight": is_bodyweight,
            "weight": "" if is_bodyweight else target.weight,
        }
    else:
        changes = {field: value}

    sets = list(block.sets)
    sets[set_index] = target.model_copy(update=changes)
    return _replace_block(workout, block_index, block.model_copy(update={"sets": sets}))


def toggle_block_completion(workout: WorkoutData, block_index: int) -> WorkoutData:
    block = workout.blocks[block_index]
    return _replace_block(workout, block_index, block.model_copy(update={"is_completed": not block.is_completed}))


def mark_block_complete(workout: WorkoutData, block_id: str) -> WorkoutData:
    blocks = [b.model_copy(update={"is_completed": True}) if b.id == block_id else b for b in workout.blocks]
    return workout.model_copy(update={"blocks": blocks})


def completion_percentage(blocks: Sequence[Block]) -> int:
    """Done share of all trackables; each exercise set or other block is one trackable"""
    total = 0
    done = 0
    for block in blocks:
        if block.type == BlockType.exercise:
            total += len(block.sets)
            done += sum(1 for s in block.sets if s.completed)
        else:
            total += 1
            done += 1 if block.is_completed else 0

    if total == 0:
        return 0
    return int(done * 100 / total + 0.5)


def build_workout_log(user_id: Optional[str], workout_date: date, blocks: Sequence[Block]) -> WorkoutLog:
    details = []
    for block in blocks:
        if block.type == BlockType.exercise:
            details.append(LoggedBlock(
                name=block.name,
                type=block.type.value,
                sets=[
                    LoggedSet(
                        set=s.set_number,
                        weight=s.weight,
                        reps=s.reps,
                        is_bodyweight=s.is_bodyweight,
                        completed=s.completed,
                    )
                    for s in block.sets
                ],
            ))
        else:
            details.append(LoggedBlock(name=block.name, type=block.type.value, completed=block.is_completed))

    return WorkoutLog(user_id=user_id, workout_date=workout_date, status="completed", details=details)


def log_to_record(log: WorkoutLog) -> Dict[str, Any]:
    """Storage payload; absent ``completed``/``sets`` keys are left out"""
    return log.model_dump(mode="json", exclude_none=True)


def _replace_block(workout: WorkoutData, block_index: int, block: Block) -> WorkoutData:
    blocks = list(workout.blocks)
    blocks[block_index] = block
    return workout.model_copy(update={"blocks": blocks})
