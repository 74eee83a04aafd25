"""
Screen listeners that record or log transitions instead of rendering them.
"""
import logging
from typing import List

from .types import ConfirmedGesture, GestureEvent, ScreenChange, ScreenId


logger = logging.getLogger(__name__)


class LoggingListener:
    """Listener that logs screen changes and gesture events."""

    def on_screen_change(self, change: ScreenChange) -> None:
        logger.info("[screen] %s -> %s", change.previous.value, change.current.value)

    def on_gesture_event(self, event: GestureEvent) -> None:
        kind = "confirmed" if isinstance(event, ConfirmedGesture) else "tentative"
        logger.info("[gesture] %s %s", kind, event.label.value)


class RecordingListener:
    """Listener that keeps every notification, for tests and demos."""

    def __init__(self):
        """Initialize the recording listener."""
        self.changes: List[ScreenChange] = []
        self.events: List[GestureEvent] = []

    def on_screen_change(self, change: ScreenChange) -> None:
        self.changes.append(change)

    def on_gesture_event(self, event: GestureEvent) -> None:
        self.events.append(event)

    @property
    def screens(self) -> List[ScreenId]:
        """Screens visited, in order."""
        return [c.current for c in self.changes]

    def reset(self) -> None:
        """Forget everything recorded so far."""
        self.changes.clear()
        self.events.clear()
