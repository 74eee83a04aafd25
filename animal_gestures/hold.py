"""
Hold-to-confirm state machine that turns per-frame labels into gesture events.
"""
import logging
import time
from typing import Callable, Optional

from .types import ConfirmedGesture, GestureEvent, GestureLabel, GestureSession, TentativeGesture


logger = logging.getLogger(__name__)

HOLD_DURATION_MS = 2000


class HoldConfirmation:
    """
    Tracks how long the same label has been reported continuously.

    Features:
    - Tentative event as soon as a new label appears
    - Confirmed event once the label has been held for the hold duration
    - Any change of label (including to None) restarts the timer
    - No timers of its own: re-evaluated on every frame with its arrival time
    """

    def __init__(self, hold_duration_ms: int = HOLD_DURATION_MS,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the state machine.

        Args:
            hold_duration_ms: How long a label must be held to be confirmed
            clock: Time source returning seconds
        """
        self.hold_duration_ms = hold_duration_ms
        self.clock = clock
        self.session = GestureSession()

    @property
    def state(self) -> str:
        return "idle" if self.session.active_label is None else "holding"

    def elapsed_ms(self, now: Optional[float] = None) -> float:
        """Milliseconds the active label has been held (0 when idle)."""
        if self.session.start_timestamp is None:
            return 0.0
        now = self.clock() if now is None else now
        return (now - self.session.start_timestamp) * 1000

    def reset(self) -> None:
        """Drop any in-progress hold."""
        if self.session.active_label is not None:
            logger.debug("Hold reset (was %s)", self.session.active_label.value)
        self.session.clear()

    def update(self, label: Optional[GestureLabel], now: Optional[float] = None) -> Optional[GestureEvent]:
        """
        Feed the label observed in the current frame.

        Args:
            label: Frame label, or None when nothing was recognised
            now: Frame arrival time in seconds (defaults to the clock)

        Returns:
            TentativeGesture, ConfirmedGesture or None
        """
        now = self.clock() if now is None else now
        session = self.session

        if label != session.active_label:
            session.clear()
            if label is None:
                return None
            session.active_label = label
            session.start_timestamp = now
            logger.debug("Tentative gesture: %s", label.value)
            return TentativeGesture(label=label, timestamp=now)

        if label is None:
            return None

        held_ms = self.elapsed_ms(now)
        if held_ms < self.hold_duration_ms:
            return None

        session.clear()
        logger.info("✅ Gesture confirmed: %s (held %.0f ms)", label.value, held_ms)
        return ConfirmedGesture(label=label, timestamp=now, held_ms=held_ms)
