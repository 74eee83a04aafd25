"""
Type definitions for the animal gesture recognition system.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

from .exceptions import MalformedFrameError


LANDMARK_COUNT = 21

# Landmark indices used by the predicates
WRIST = 0
THUMB_TIP = 4
INDEX_BASE, INDEX_TIP = 5, 8
MIDDLE_BASE, MIDDLE_TIP = 9, 12
RING_BASE, RING_TIP = 13, 16
PINKY_BASE, PINKY_TIP = 17, 20

Handedness = Literal["Left", "Right"]
DEFAULT_HANDEDNESS: Handedness = "Right"


class GestureLabel(str, Enum):
    """Gesture vocabulary. "No gesture" is represented by ``None``."""
    RABBIT = "rabbit"
    ELEPHANT = "elephant"
    BUTTERFLY = "butterfly"
    DOG = "dog"


class ScreenId(str, Enum):
    """Screens the navigation controller can be on."""
    HOME = "1a"
    HINT = "1b"
    RABBIT = "2a"
    ELEPHANT = "2b"
    BUTTERFLY = "2c"
    DOG = "2d"
    RABBIT_DONE = "3a"
    ELEPHANT_DONE = "3b"
    BUTTERFLY_DONE = "3c"
    DOG_DONE = "3d"


INTERMEDIATE_SCREENS = {
    GestureLabel.RABBIT: ScreenId.RABBIT,
    GestureLabel.ELEPHANT: ScreenId.ELEPHANT,
    GestureLabel.BUTTERFLY: ScreenId.BUTTERFLY,
    GestureLabel.DOG: ScreenId.DOG,
}

TERMINAL_SCREENS = {
    GestureLabel.RABBIT: ScreenId.RABBIT_DONE,
    GestureLabel.ELEPHANT: ScreenId.ELEPHANT_DONE,
    GestureLabel.BUTTERFLY: ScreenId.BUTTERFLY_DONE,
    GestureLabel.DOG: ScreenId.DOG_DONE,
}


@dataclass(frozen=True)
class Landmark:
    """A single hand joint in normalized image coordinates (y grows downward)."""
    x: float
    y: float
    z: float = 0.0


PointLike = Union[Landmark, Sequence[float]]


def _to_landmark(point: PointLike) -> Landmark:
    if isinstance(point, Landmark):
        lm = point
    else:
        try:
            if len(point) not in (2, 3):
                raise MalformedFrameError(f"Landmark must have 2 or 3 coordinates, got {len(point)}")
            lm = Landmark(*(float(v) for v in point))
        except (TypeError, ValueError) as e:
            raise MalformedFrameError(f"Corrupt landmark {point!r}: {e}") from e
    try:
        finite = all(math.isfinite(v) for v in (lm.x, lm.y, lm.z))
    except TypeError as e:
        raise MalformedFrameError(f"Corrupt landmark {lm}: {e}") from e
    if not finite:
        raise MalformedFrameError(f"Non-finite landmark coordinates: {lm}")
    return lm


@dataclass(frozen=True)
class Hand:
    """Full 21-point skeleton for one detected hand in one frame."""
    landmarks: Tuple[Landmark, ...]
    handedness: Handedness = DEFAULT_HANDEDNESS

    def __post_init__(self):
        if len(self.landmarks) != LANDMARK_COUNT:
            raise MalformedFrameError(
                f"Hand must have {LANDMARK_COUNT} landmarks, got {len(self.landmarks)}"
            )

    @classmethod
    def from_points(cls, points: Sequence[PointLike],
                    handedness: Optional[str] = None) -> "Hand":
        """
        Build a hand from raw tracker output.

        Args:
            points: 21 landmarks as ``Landmark`` objects or (x, y[, z]) sequences
            handedness: "Left" / "Right"; anything else falls back to "Right"

        Raises:
            MalformedFrameError: wrong landmark count or non-finite coordinates
        """
        try:
            count = 0 if points is None else len(points)
        except TypeError as e:
            raise MalformedFrameError(f"Hand is not a landmark sequence: {points!r}") from e
        if count != LANDMARK_COUNT:
            raise MalformedFrameError(f"Hand must have {LANDMARK_COUNT} landmarks, got {count}")
        if handedness not in ("Left", "Right"):
            handedness = DEFAULT_HANDEDNESS
        return cls(landmarks=tuple(_to_landmark(p) for p in points), handedness=handedness)

    def __getitem__(self, idx: int) -> Landmark:
        return self.landmarks[idx]

    @property
    def wrist(self) -> Landmark:
        return self.landmarks[WRIST]

    @property
    def thumb_tip(self) -> Landmark:
        return self.landmarks[THUMB_TIP]


@dataclass(frozen=True)
class FrameObservation:
    """Zero, one or two hands detected in the current frame."""
    hands: Tuple[Hand, ...] = field(default_factory=tuple)

    MAX_HANDS = 2

    @classmethod
    def from_landmarks(cls, hands: Optional[Sequence[Sequence[PointLike]]],
                       handedness: Optional[Sequence[str]] = None) -> "FrameObservation":
        """
        Build an observation from raw per-hand landmark lists.

        Handedness labels are only used when there is exactly one per hand.
        Hands beyond the first two are ignored.

        Raises:
            MalformedFrameError: if any hand is malformed
        """
        if not hands:
            return cls()
        hands = list(hands)[:cls.MAX_HANDS]
        labels: Sequence[Optional[str]]
        if handedness is not None and len(handedness) == len(hands):
            labels = list(handedness)
        else:
            labels = [None] * len(hands)
        return cls(hands=tuple(Hand.from_points(h, lbl) for h, lbl in zip(hands, labels)))

    def __len__(self) -> int:
        return len(self.hands)


@dataclass
class GestureSession:
    """Label currently being held and when it was first seen."""
    active_label: Optional[GestureLabel] = None
    start_timestamp: Optional[float] = None

    def clear(self) -> None:
        self.active_label = None
        self.start_timestamp = None


@dataclass(frozen=True)
class TentativeGesture:
    """A gesture label that just started being reported."""
    label: GestureLabel
    timestamp: float


@dataclass(frozen=True)
class ConfirmedGesture:
    """A gesture label held for at least the hold duration."""
    label: GestureLabel
    timestamp: float
    held_ms: float


GestureEvent = Union[TentativeGesture, ConfirmedGesture]


@dataclass(frozen=True)
class ScreenChange:
    """Notification that the current screen changed."""
    previous: ScreenId
    current: ScreenId
    reason: str


@runtime_checkable
class ScreenListenerProto(Protocol):
    """Abstract protocol for consumers of screen transitions and gesture events."""

    def on_screen_change(self, change: ScreenChange) -> None:
        """Called after every accepted screen transition."""
        ...

    def on_gesture_event(self, event: GestureEvent) -> None:
        """Called for every tentative or confirmed gesture event."""
        ...


@runtime_checkable
class FrameSourceProto(Protocol):
    """Abstract protocol for anything that delivers video frames."""

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...

    def read(self):
        """Return the next frame, or None when no frame is available."""
        ...
