"""
Progressive-overload carry-forward from completed workout logs.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .config import settings
from .model import Block, BlockCategory, BlockType, WorkoutData, WorkoutLog

logger = logging.getLogger(__name__)

COMPLETED_STATUS = "completed"


def coerce_logs(logs: Iterable[Union[WorkoutLog, dict]]) -> List[WorkoutLog]:
    return [log if isinstance(log, WorkoutLog) else WorkoutLog.model_validate(log) for log in logs]


def build_weight_history(logs: Sequence[WorkoutLog], limit: Optional[int] = None) -> Dict[str, str]:
    """
    Map exercise name to the most recently used weight.

    Logs are expected newest first, so the first log that mentions a name
    wins. Within a log only the last completed set of an exercise counts.
    """
    limit = settings.HISTORY_LOG_LIMIT if limit is None else limit
    history: Dict[str, str] = {}

    completed = [log for log in logs if log.status == COMPLETED_STATUS]
    for log in completed[:limit]:
        for block in log.details:
            if block.type != BlockType.exercise or not block.sets:
                continue
            completed_sets = [s for s in block.sets if s.completed]
            if not completed_sets:
                continue
            last_set = completed_sets[-1]
            if block.name not in history and last_set.weight:
                history[block.name] = last_set.weight

    return history


def merge_history(blocks: Sequence[Block], history: Dict[str, str]) -> List[Block]:
    """
    Fill blank weights on strength exercises from history.

    Names must match exactly. Sets that already carry a weight are left
    alone, and the input blocks are not modified.
    """
    merged = []
    for block in blocks:
        previous_weight = history.get(block.name)
        if (block.type != BlockType.exercise or block.category != BlockCategory.strength
                or not previous_weight):
            merged.append(block)
            continue

        sets = [
            s if s.weight else s.model_copy(update={"weight": previous_weight, "is_bodyweight": False})
            for s in block.sets
        ]
        merged.append(block.model_copy(update={"sets": sets}))
    return merged


def apply_history(workout: WorkoutData, logs: Iterable[Union[WorkoutLog, dict]],
                  limit: Optional[int] = None) -> WorkoutData:
    history = build_weight_history(coerce_logs(logs), limit=limit)
    if not history:
        return workout
    logger.debug("Carrying forward weights for %d exercises", len(history))
    return workout.model_copy(update={"blocks": merge_history(workout.blocks, history)})
