"""
Geometric predicates over hand landmarks.

All coordinates are normalized to [0..1] with the origin at the top-left of
the image, so a smaller y means higher on screen.
"""
import math
from typing import Callable, NamedTuple, Optional

from .types import (
    Hand, Landmark,
    INDEX_BASE, INDEX_TIP, MIDDLE_BASE, MIDDLE_TIP,
    RING_BASE, RING_TIP, PINKY_BASE, PINKY_TIP,
)


# (tip, base) index pairs for the four non-thumb fingers
FINGERS = (
    (INDEX_TIP, INDEX_BASE),
    (MIDDLE_TIP, MIDDLE_BASE),
    (RING_TIP, RING_BASE),
    (PINKY_TIP, PINKY_BASE),
)

# predicate(tip, base, wrist) -> bool
ExtensionTest = Callable[[Landmark, Landmark, Landmark], bool]


class FingerStates(NamedTuple):
    """Extension flags for the four non-thumb fingers."""
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    @property
    def count(self) -> int:
        return sum(self)


def distance(a: Landmark, b: Landmark) -> float:
    """Planar Euclidean distance between two landmarks (z ignored)."""
    return math.hypot(a.x - b.x, a.y - b.y)


def is_extended_vertical(tip: Landmark, base: Landmark, wrist: Optional[Landmark] = None,
                         margin: float = 0.0, min_wrist_gap: Optional[float] = None) -> bool:
    """
    Check if a finger points up.

    Args:
        tip: Finger tip landmark
        base: Finger base (MCP) landmark
        wrist: Wrist landmark, required when ``min_wrist_gap`` is set
        margin: How far above the base the tip must be
        min_wrist_gap: If set, the tip must also be this far from the wrist
            vertically, which rejects a finger folded down near the wrist

    Returns:
        True if the finger counts as extended
    """
    if not tip.y < base.y - margin:
        return False
    if min_wrist_gap is not None:
        if wrist is None:
            raise ValueError("wrist is required when min_wrist_gap is set")
        return abs(tip.y - wrist.y) > min_wrist_gap
    return True


def is_extended_forward(tip: Landmark, base: Landmark, wrist: Landmark,
                        margin: float = 0.05) -> bool:
    """Check if a finger points sideways, away from the wrist (hand held horizontally)."""
    return abs(tip.x - wrist.x) > abs(base.x - wrist.x) + margin


def thumb_offset(hand: Hand) -> float:
    """Horizontal distance between thumb tip and wrist."""
    return abs(hand.thumb_tip.x - hand.wrist.x)


def finger_states(hand: Hand, test: ExtensionTest) -> FingerStates:
    """Apply an extension test to each non-thumb finger."""
    wrist = hand.wrist
    return FingerStates(*(test(hand[tip], hand[base], wrist) for tip, base in FINGERS))


def all_fingers_up(hand: Hand) -> bool:
    """True if every non-thumb tip is above its base (no margin)."""
    return all(hand[tip].y < hand[base].y for tip, base in FINGERS)
