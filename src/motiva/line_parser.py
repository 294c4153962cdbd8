"""
Extraction of names, set counts, reps, weights and durations from single
instruction lines.
"""

import re
from typing import List, Optional

from pydantic import BaseModel

from .model import ExerciseSet


# "Squats: 3 sets of 8 reps", "Bench Press 4x10", "Burpees - 5 rounds"
STANDARD_SET_PATTERN = re.compile(r'^(.+?)(?::|-)?\s+(\d+)\s*(?:sets|x|rounds)', re.IGNORECASE)
# "3 sets of Goblet Squats 12 reps"
REVERSED_SET_PATTERN = re.compile(r'^(\d+)\s*sets\s+(?:of\s+)?(.*)', re.IGNORECASE)

REPS_PATTERN = re.compile(r'(\d+(?:-\d+)?)\s*reps', re.IGNORECASE)
# Unit is matched but not kept
WEIGHT_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*(?:kg|lbs)', re.IGNORECASE)
SET_TIME_PATTERN = re.compile(r'(\d+)\s*(?:sec|min)', re.IGNORECASE)

MINUTES_PATTERN = re.compile(r'(\d+)\s*(?:min|mins|minute|minutes)\b', re.IGNORECASE)
SECONDS_PATTERN = re.compile(r'(\d+)\s*(?:sec|secs|second|seconds|s)\b', re.IGNORECASE)
LEADING_TIME_PATTERN = re.compile(
    r'^(\d+)\s*(?:min|mins|minute|minutes|sec|secs|second|seconds)', re.IGNORECASE
)

NUMBERED_ITEM_PATTERN = re.compile(r'^\d+\.')
NUMBERED_PREFIX_PATTERN = re.compile(r'^\d+\.\s*')
LEADING_OF_PATTERN = re.compile(r'^\s*of\s+', re.IGNORECASE)

MOBILITY_MIN_LENGTH = 3


class ParsedSetLine(BaseModel):
    """A strength line broken into its trackable parts"""
    name: str
    sets_count: int
    reps: str = ""
    weight: str = ""

    @property
    def is_bodyweight(self) -> bool:
        return not self.weight


def clean_name(text: str) -> str:
    """Strip a single trailing ':' or '-' and surrounding whitespace"""
    text = text.strip()
    if text.endswith((':', '-')):
        text = text[:-1]
    return text.strip()


def parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_duration_seconds(text: str) -> Optional[int]:
    """First minute token wins (converted to seconds), then the first second token"""
    minutes = MINUTES_PATTERN.search(text)
    if minutes:
        value = parse_int(minutes.group(1))
        if value is not None:
            return value * 60

    seconds = SECONDS_PATTERN.search(text)
    if seconds:
        return parse_int(seconds.group(1))

    return None


def starts_with_time(line: str) -> bool:
    return LEADING_TIME_PATTERN.match(line.strip()) is not None


def parse_set_line(line: str) -> Optional[ParsedSetLine]:
    """
    Parse a strength line into name, set count, reps and weight.

    Accepts "<Name> <N> sets|x|rounds ..." and "<N> sets of <Name> ...".
    Returns None when the line is not a set-count line or the count is not a
    positive integer.
    """
    standard = STANDARD_SET_PATTERN.match(line)
    if standard:
        name = standard.group(1)
        count_text = standard.group(2)
        details = line
    else:
        reversed_match = REVERSED_SET_PATTERN.match(line)
        if not reversed_match:
            return None
        count_text = reversed_match.group(1)
        details = reversed_match.group(2)
        name = REPS_PATTERN.sub('', details, count=1)
        name = WEIGHT_PATTERN.sub('', name, count=1)
        name = LEADING_OF_PATTERN.sub('', name)

    sets_count = parse_int(count_text)
    if sets_count is None or sets_count < 1:
        return None

    reps_match = REPS_PATTERN.search(details)
    weight_match = WEIGHT_PATTERN.search(details)
    time_match = SET_TIME_PATTERN.search(details)

    if reps_match:
        reps = reps_match.group(1)
    elif time_match:
        reps = time_match.group(0)
    else:
        reps = ""

    return ParsedSetLine(
        name=clean_name(name) or clean_name(line),
        sets_count=sets_count,
        reps=reps,
        weight=weight_match.group(1) if weight_match else "",
    )


def build_sets(parsed: ParsedSetLine) -> List[ExerciseSet]:
    """One set per counted set, each seeded with the same reps and weight"""
    return [
        ExerciseSet(
            set_number=i + 1,
            weight=parsed.weight,
            reps=parsed.reps,
            is_bodyweight=parsed.is_bodyweight,
        )
        for i in range(parsed.sets_count)
    ]


def parse_mobility_drill(line: str) -> Optional[str]:
    """
    Drill name for a line inside a mobility routine.

    Any numbered item or any line longer than three characters counts as a
    drill, so ordinary sentences are picked up as drills too.
    """
    if not (NUMBERED_ITEM_PATTERN.match(line) or len(line.strip()) > MOBILITY_MIN_LENGTH):
        return None
    without_number = NUMBERED_PREFIX_PATTERN.sub('', line)
    return without_number.split(':')[0].strip()


def mobility_drill_sets() -> List[ExerciseSet]:
    return [ExerciseSet(set_number=1, weight="", reps="1", is_bodyweight=True)]
