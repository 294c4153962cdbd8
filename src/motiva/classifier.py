"""
Semantic roles for sub-workouts and individual instruction lines.

Keywords are plain case-insensitive substrings, so stems such as "cycl" and
"bik" cover "Cycling", "Bicycle" and "biking".
"""

from enum import StrEnum, auto
from typing import Iterable, Optional, Sequence

from .line_parser import starts_with_time
from .model import BlockType, EnduranceMode, SubWorkout


ENDURANCE_KEYWORDS = (
    "run", "jog", "treadmill", "cycl", "bik", "rid", "swim", "pool",
    "freestyle", "cardio", "elliptical", "rowing",
)
# Keywords that turn a "<N> min ..." line into a cardio segment
SEGMENT_KEYWORDS = ("cardio", "treadmill", "run", "walk", "jog", "cycle", "rowing")
STRENGTH_MARKERS = ("sets of", " x ")

WARMUP_PHRASES = ("warm-up", "warm up")
COOLDOWN_PHRASES = ("cool-down", "cool down")

# Checked in order, first hit wins
MODE_KEYWORDS = (
    (EnduranceMode.swim, ("swim", "pool", "freestyle")),
    (EnduranceMode.bike, ("cycl", "bik", "rid")),
    (EnduranceMode.run, ("run", "jog", "treadmill")),
)

CARDIO_FOCUSES = frozenset({"cardio", "endurance"})
STRENGTH_FOCUSES = frozenset({"strength", "mixed", "hypertrophy", "resistance"})
DEFAULT_FOCUS = "strength"
MOBILITY_FOCUS = "mobility"


class SubWorkoutRole(StrEnum):
    warmup = auto()
    cooldown = auto()
    endurance = auto()
    mobility = auto()
    strength = auto()


def contains_keyword(text: str, keywords: Sequence[str]) -> bool:
    text = text.lower()
    return any(keyword in text for keyword in keywords)


def focus_of(sub: SubWorkout) -> str:
    return sub.focus or DEFAULT_FOCUS


def combined_text(sub: SubWorkout) -> str:
    """Title and instructions as one lower-cased string"""
    return f"{sub.title} {' '.join(sub.instructions or [])}".lower()


def has_strength_marker(text: str) -> bool:
    text = text.lower()
    return any(marker in text for marker in STRENGTH_MARKERS)


def is_endurance(sub: SubWorkout) -> bool:
    text = combined_text(sub)
    if has_strength_marker(text):
        return False
    return focus_of(sub) in CARDIO_FOCUSES or contains_keyword(text, ENDURANCE_KEYWORDS)


def endurance_mode(sub: SubWorkout) -> EnduranceMode:
    """Mode from the title, falling back to the whole text"""
    for text in (sub.title, combined_text(sub)):
        for mode, keywords in MODE_KEYWORDS:
            if contains_keyword(text, keywords):
                return mode
    return EnduranceMode.general


def classify_sub_workout(sub: SubWorkout) -> SubWorkoutRole:
    title = sub.title.lower()
    mobility_focus = focus_of(sub) == MOBILITY_FOCUS

    if not mobility_focus and ("warm" in title or "mobility" in title):
        return SubWorkoutRole.warmup
    if not mobility_focus and ("cool" in title or "stretch" in title):
        return SubWorkoutRole.cooldown
    if is_endurance(sub):
        return SubWorkoutRole.endurance
    if mobility_focus:
        return SubWorkoutRole.mobility
    return SubWorkoutRole.strength


def classify_segment(line: str) -> Optional[BlockType]:
    """
    Block type for an embedded warmup, cooldown or cardio segment line.

    Returns None for lines that belong to the exercise flow.
    """
    lowered = line.lower()
    if any(phrase in lowered for phrase in WARMUP_PHRASES):
        return BlockType.warmup
    if any(phrase in lowered for phrase in COOLDOWN_PHRASES):
        return BlockType.cooldown
    if starts_with_time(line) and contains_keyword(lowered, SEGMENT_KEYWORDS):
        return BlockType.general_block
    return None


def is_pure_endurance_day(sub_workouts: Iterable[SubWorkout]) -> bool:
    focuses = [focus_of(sub) for sub in sub_workouts]
    has_cardio = any(focus in CARDIO_FOCUSES for focus in focuses)
    has_strength = any(focus in STRENGTH_FOCUSES for focus in focuses)
    return has_cardio and not has_strength
