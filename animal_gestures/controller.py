"""
Frame-processing entry point tying classification, hold confirmation and
screen navigation together.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .classifier import FrameDispatcher, RuleSet, get_rule_set
from .config import Cfg
from .exceptions import MalformedFrameError
from .hold import HoldConfirmation
from .navigation import ScreenNavigator
from .types import FrameObservation, GestureEvent, GestureLabel, GestureSession, ScreenId


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    """Outcome of processing one frame."""
    label: Optional[GestureLabel]
    event: Optional[GestureEvent]
    screen: ScreenId
    dropped: bool = False


class GestureController:
    """
    Owns the gesture session and the current screen.

    Single-threaded: frames and hint signals must be delivered from the same
    loop, one at a time.
    """

    def __init__(self, cfg: Optional[Cfg] = None, rule_set: Optional[RuleSet] = None,
                 clock: Callable[[], float] = time.monotonic,
                 navigator: Optional[ScreenNavigator] = None):
        """
        Initialize the controller.

        Args:
            cfg: Configuration; defaults are used when None
            rule_set: Single-hand rule set; built from cfg.classifier when None
            clock: Time source returning seconds
            navigator: Screen navigator; a fresh one starting on 1a when None
        """
        self.cfg = cfg or Cfg()
        if rule_set is None:
            variant = self.cfg.classifier.variant
            rule_set = get_rule_set(variant, self.cfg.classifier.thresholds_for(variant))
        self.dispatcher = FrameDispatcher(rule_set, self.cfg.classifier.two_hand_wrist_distance)
        self.hold = HoldConfirmation(self.cfg.hold.duration_ms, clock=clock)
        self.navigator = navigator or ScreenNavigator()
        self.clock = clock
        self._active = True
        logger.info("Gesture controller ready (rule set: %s, hold: %d ms)",
                    rule_set.name, self.cfg.hold.duration_ms)

    @property
    def active(self) -> bool:
        return self._active

    @property
    def screen(self) -> ScreenId:
        return self.navigator.screen

    @property
    def session(self) -> GestureSession:
        return self.hold.session

    def process_frame(self, hands: Optional[Sequence], handedness: Optional[Sequence[str]] = None,
                      now: Optional[float] = None) -> FrameResult:
        """
        Process the raw tracker output for one frame.

        Args:
            hands: 0-2 hands, each 21 (x, y[, z]) points; None means no hands
            handedness: Optional "Left"/"Right" labels parallel to hands
            now: Frame arrival time in seconds (defaults to the clock)

        Returns:
            FrameResult; malformed frames are dropped without touching state
        """
        if not self._active:
            return FrameResult(label=None, event=None, screen=self.screen, dropped=True)
        try:
            observation = FrameObservation.from_landmarks(hands, handedness)
        except MalformedFrameError as e:
            logger.warning("Dropping malformed frame: %s", e)
            return FrameResult(label=None, event=None, screen=self.screen, dropped=True)
        return self.process_observation(observation, now)

    def process_observation(self, observation: FrameObservation,
                            now: Optional[float] = None) -> FrameResult:
        """Classify an observation and advance the hold and screen state."""
        if not self._active:
            return FrameResult(label=None, event=None, screen=self.screen, dropped=True)

        now = self.clock() if now is None else now
        label = self.dispatcher.dispatch(observation)
        event = self.hold.update(label, now)
        if event is not None:
            self.navigator.on_gesture(event)
        return FrameResult(label=label, event=event, screen=self.screen)

    def hint_clicked(self) -> ScreenId:
        """Main hint button. Entering the hint screen starts with a fresh session."""
        screen = self.navigator.toggle_hint()
        if screen == ScreenId.HINT:
            self.hold.reset()
        return screen

    def hint_icon_clicked(self) -> ScreenId:
        """Secondary hint icons: back to the hint screen with a fresh session."""
        self.hold.reset()
        return self.navigator.show_hint()

    def pause(self) -> None:
        """Stop classifying frames (e.g. window hidden)."""
        if self._active:
            logger.info("⏸️  Gesture processing paused")
        self._active = False
        self.hold.reset()

    def resume(self) -> None:
        """Resume classifying; starts fresh from the next delivered frame."""
        if not self._active:
            logger.info("▶️  Gesture processing resumed")
        self._active = True
        self.hold.reset()
