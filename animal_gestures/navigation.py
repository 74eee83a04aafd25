"""
Screen navigation state machine driven by hint signals and gesture events.
"""
import logging
from typing import List, Optional

from .types import (
    ConfirmedGesture, GestureEvent, GestureLabel, ScreenChange, ScreenId,
    ScreenListenerProto, TentativeGesture, INTERMEDIATE_SCREENS, TERMINAL_SCREENS,
)


logger = logging.getLogger(__name__)


class ScreenNavigator:
    """
    Owns the current screen and applies the transition rules.

    Gesture events are only acted on from the hint screen (1b). A tentative
    gesture there opens the matching intermediate screen and remembers the
    label; the confirmation of that same label then moves on to the terminal
    screen. Everything else arriving off 1b is discarded, which is how
    gestures are paused outside the interactive screen.
    """

    def __init__(self, initial: ScreenId = ScreenId.HOME):
        self._screen = ScreenId(initial)
        self._pending: Optional[GestureLabel] = None
        self._listeners: List[ScreenListenerProto] = []

    @property
    def screen(self) -> ScreenId:
        return self._screen

    @property
    def pending(self) -> Optional[GestureLabel]:
        """Label whose confirmation the current intermediate screen is waiting for."""
        return self._pending

    def subscribe(self, listener: ScreenListenerProto) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ScreenListenerProto) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def toggle_hint(self) -> ScreenId:
        """Hint button: 1a opens the hint screen, anything else goes home."""
        target = ScreenId.HINT if self._screen == ScreenId.HOME else ScreenId.HOME
        self.go_to(target, reason="hint toggle")
        return self._screen

    def show_hint(self) -> ScreenId:
        """Hint icon: always return to the hint screen."""
        self.go_to(ScreenId.HINT, reason="hint icon")
        return self._screen

    def on_gesture(self, event: GestureEvent) -> bool:
        """
        Apply a gesture event.

        Returns:
            True if the screen changed
        """
        for listener in list(self._listeners):
            try:
                listener.on_gesture_event(event)
            except Exception:
                logger.exception("Listener %r failed on gesture event", listener)

        if isinstance(event, TentativeGesture):
            # pending stays set: only its own confirmation may leave this screen
            if self._screen != ScreenId.HINT:
                logger.debug("Ignoring tentative %s on screen %s", event.label.value, self._screen.value)
                return False
            self.go_to(INTERMEDIATE_SCREENS[event.label], reason=f"tentative {event.label.value}")
            self._pending = event.label
            return True

        if isinstance(event, ConfirmedGesture):
            if self._screen == ScreenId.HINT or (
                    self._pending == event.label
                    and self._screen == INTERMEDIATE_SCREENS[event.label]):
                self.go_to(TERMINAL_SCREENS[event.label], reason=f"confirmed {event.label.value}")
                return True
            logger.debug("Ignoring confirmed %s on screen %s", event.label.value, self._screen.value)
            return False

        raise TypeError(f"Unknown gesture event: {event!r}")

    def go_to(self, screen: ScreenId, reason: str = "explicit") -> None:
        """Move to a screen and notify listeners. Clears any pending confirmation."""
        screen = ScreenId(screen)
        self._pending = None
        if screen == self._screen:
            return
        change = ScreenChange(previous=self._screen, current=screen, reason=reason)
        self._screen = screen
        logger.info("🖥️  Screen %s -> %s (%s)", change.previous.value, change.current.value, reason)
        for listener in list(self._listeners):
            try:
                listener.on_screen_change(change)
            except Exception:
                logger.exception("Listener %r failed on screen change", listener)
