"""
Synthetic hand landmarks and a fake clock for tests.
"""
from typing import List, Tuple

Point = Tuple[float, float, float]

# horizontal offset of each finger base from the wrist (index, middle, ring, pinky)
BASE_DX = (-0.06, -0.02, 0.02, 0.06)
BASE_DY = -0.2
TIP_UP_DY = -0.45
TIP_CURLED_DY = -0.15


def _lerp(a: Point, b: Point, t: float) -> Point:
    return tuple(a[i] + (b[i] - a[i]) * t for i in range(3))


def make_hand(index: bool = False, middle: bool = False, ring: bool = False, pinky: bool = False,
              thumb_out: bool = False, wrist: Tuple[float, float] = (0.5, 0.8)) -> List[Point]:
    """
    Build 21 landmarks for an upright hand.

    Extended fingers point straight up; curled fingers end just below their base.
    """
    wx, wy = wrist
    pts: List[Point] = [(0.0, 0.0, 0.0)] * 21
    pts[0] = (wx, wy, 0.0)

    thumb_tip = (wx - 0.2, wy - 0.15, 0.0) if thumb_out else (wx - 0.03, wy - 0.15, 0.0)
    for i, t in zip(range(1, 5), (0.25, 0.5, 0.75, 1.0)):
        pts[i] = _lerp(pts[0], thumb_tip, t)

    for n, extended in enumerate((index, middle, ring, pinky)):
        base_idx = 5 + 4 * n
        base = (wx + BASE_DX[n], wy + BASE_DY, 0.0)
        tip = (base[0], wy + (TIP_UP_DY if extended else TIP_CURLED_DY), 0.0)
        pts[base_idx] = base
        pts[base_idx + 1] = _lerp(base, tip, 0.33)
        pts[base_idx + 2] = _lerp(base, tip, 0.66)
        pts[base_idx + 3] = tip

    return pts


def make_sideways_hand(tips: List[Tuple[float, float]], thumb_tip: Tuple[float, float],
                       wrist: Tuple[float, float] = (0.3, 0.5)) -> List[Point]:
    """
    Build 21 landmarks for a hand held horizontally, fingers pointing right.

    Args:
        tips: (x, y) of the index, middle, ring and pinky tips
        thumb_tip: (x, y) of the thumb tip
        wrist: (x, y) of the wrist
    """
    wx, wy = wrist
    pts: List[Point] = [(0.0, 0.0, 0.0)] * 21
    pts[0] = (wx, wy, 0.0)
    thumb = (thumb_tip[0], thumb_tip[1], 0.0)
    for i, t in zip(range(1, 5), (0.25, 0.5, 0.75, 1.0)):
        pts[i] = _lerp(pts[0], thumb, t)

    base_ys = (wy - 0.06, wy - 0.02, wy + 0.02, wy + 0.06)
    for n, (tx, ty) in enumerate(tips):
        base_idx = 5 + 4 * n
        base = (wx + 0.15, base_ys[n], 0.0)
        tip = (tx, ty, 0.0)
        pts[base_idx] = base
        pts[base_idx + 1] = _lerp(base, tip, 0.33)
        pts[base_idx + 2] = _lerp(base, tip, 0.66)
        pts[base_idx + 3] = tip

    return pts


RABBIT = make_hand(index=True, middle=True)
ELEPHANT = make_hand(thumb_out=True)
BUTTERFLY = make_hand(index=True, middle=True, ring=True, pinky=True)
DOG = make_hand(index=True)
FIST = make_hand()


class FakeClock:
    """Manually advanced time source (seconds)."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> float:
        self.now += ms / 1000.0
        return self.now
