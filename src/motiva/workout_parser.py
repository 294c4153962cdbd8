"""
Workout plan parser.

This module contains the parser that turns a generated DayPlan into the
ordered list of trackable blocks shown during a session.
"""

import logging
from itertools import count
from typing import Iterator, List, Optional

from .classifier import (
    SubWorkoutRole,
    classify_segment,
    classify_sub_workout,
    combined_text,
    endurance_mode,
    focus_of,
    is_pure_endurance_day,
    MOBILITY_FOCUS,
)
from .line_parser import (
    build_sets,
    clean_name,
    mobility_drill_sets,
    parse_duration_seconds,
    parse_mobility_drill,
    parse_set_line,
)
from .model import (
    Block,
    BlockCategory,
    BlockType,
    DayPlan,
    EnduranceMode,
    SubWorkout,
    WorkoutData,
)

logger = logging.getLogger(__name__)

DEFAULT_SEGMENT_SECONDS = 300
FALLBACK_TITLE = "Workout"
FALLBACK_FOCUS = "mixed"


class WorkoutPlanParser:
    """Turns a DayPlan into blocks, one parse run per call"""

    def parse(self, day_plan: DayPlan) -> WorkoutData:
        """Parse every sub-workout of a day, in order"""
        block_ids = count()
        sub_workouts = self._sub_workouts(day_plan)

        blocks: List[Block] = []
        for sub in sub_workouts:
            if sub.instructions is None:
                logger.warning("Skipping sub-workout %r: instructions missing or malformed", sub.title)
                continue
            if not sub.instructions:
                continue
            blocks.extend(self._parse_sub_workout(sub, block_ids))

        return WorkoutData(
            plan_id=day_plan.id or "temp",
            day_plan=day_plan,
            general_notes="",
            blocks=blocks,
            is_pure_endurance_day=is_pure_endurance_day(sub_workouts),
        )

    def _sub_workouts(self, day_plan: DayPlan) -> List[SubWorkout]:
        if day_plan.detailed_workouts:
            return list(day_plan.detailed_workouts)
        if day_plan.workouts:
            return [SubWorkout(title=FALLBACK_TITLE, instructions=day_plan.workouts, focus=FALLBACK_FOCUS)]
        return []

    def _parse_sub_workout(self, sub: SubWorkout, block_ids: Iterator[int]) -> List[Block]:
        role = classify_sub_workout(sub)

        if role in (SubWorkoutRole.warmup, SubWorkoutRole.cooldown):
            return [self._header_block(sub, role, block_ids)]
        if role == SubWorkoutRole.endurance:
            return [self._endurance_block(sub, block_ids)]
        return self._parse_lines(sub, block_ids, mobility=role == SubWorkoutRole.mobility)

    def _header_block(self, sub: SubWorkout, role: SubWorkoutRole, block_ids: Iterator[int]) -> Block:
        is_warmup = role == SubWorkoutRole.warmup
        return Block(
            id=_next_id(block_ids),
            type=BlockType.warmup if is_warmup else BlockType.cooldown,
            category=BlockCategory.cardio,
            name="Warm Up" if is_warmup else "Cool Down",
            subtitle="\n".join(sub.instructions),
            instructions=list(sub.instructions),
            duration_seconds=parse_duration_seconds(combined_text(sub)) or DEFAULT_SEGMENT_SECONDS,
            mode=endurance_mode(sub),
        )

    def _endurance_block(self, sub: SubWorkout, block_ids: Iterator[int]) -> Block:
        return Block(
            id=_next_id(block_ids),
            type=BlockType.endurance_session,
            category=BlockCategory.cardio,
            name=clean_name(sub.title),
            subtitle="\n".join(sub.instructions),
            instructions=list(sub.instructions),
            duration_seconds=parse_duration_seconds(combined_text(sub)),
            mode=endurance_mode(sub),
        )

    def _parse_lines(self, sub: SubWorkout, block_ids: Iterator[int], mobility: bool) -> List[Block]:
        """
        Fold the instruction lines into blocks.

        The open exercise collects the freeform lines that follow it. Freeform
        lines seen while nothing is open wait for the next block; any left at
        the end trail the last block, or become one general block.
        """
        category = BlockCategory.mobility if focus_of(sub) == MOBILITY_FOCUS else BlockCategory.strength
        blocks: List[Block] = []
        current: Optional[Block] = None
        pending: List[str] = []

        for line in sub.instructions:
            segment_type = classify_segment(line)
            if segment_type is not None:
                blocks.append(self._segment_block(line, segment_type, pending, block_ids))
                current, pending = None, []
                continue

            parsed = parse_set_line(line)
            if parsed is not None:
                current = Block(
                    id=_next_id(block_ids),
                    type=BlockType.exercise,
                    category=category,
                    name=parsed.name,
                    subtitle=line,
                    instructions=pending,
                    sets=build_sets(parsed),
                )
                blocks.append(current)
                pending = []
                continue

            drill_name = parse_mobility_drill(line) if mobility else None
            if drill_name is not None:
                current = Block(
                    id=_next_id(block_ids),
                    type=BlockType.exercise,
                    category=BlockCategory.mobility,
                    name=drill_name,
                    subtitle=line,
                    instructions=pending,
                    sets=mobility_drill_sets(),
                )
                blocks.append(current)
                pending = []
                continue

            if current is not None:
                current.instructions.append(line)
            else:
                pending.append(line)

        if pending:
            if blocks:
                blocks[-1].instructions.extend(pending)
            else:
                blocks.append(Block(
                    id=_next_id(block_ids),
                    type=BlockType.general_block,
                    category=BlockCategory.strength,
                    name=clean_name(sub.title),
                    subtitle="\n".join(pending),
                    instructions=pending,
                ))

        return blocks

    def _segment_block(self, line: str, segment_type: BlockType, pending: List[str],
                       block_ids: Iterator[int]) -> Block:
        if segment_type == BlockType.warmup:
            name = "Warm Up"
        elif segment_type == BlockType.cooldown:
            name = "Cool Down"
        else:
            name = line.split(':')[0].strip() or "Cardio"

        return Block(
            id=_next_id(block_ids),
            type=segment_type,
            category=BlockCategory.cardio,
            name=name,
            subtitle=line,
            instructions=[*pending, line],
            duration_seconds=parse_duration_seconds(line) or DEFAULT_SEGMENT_SECONDS,
            mode=EnduranceMode.general,
        )


def _next_id(block_ids: Iterator[int]) -> str:
    return f"block-{next(block_ids)}"


def parse_day_plan(day_plan: DayPlan) -> WorkoutData:
    return WorkoutPlanParser().parse(day_plan)
