"""
Gesture classification: single-hand rule sets, the two-hand butterfly and the
per-frame dispatcher that picks one label out of everything visible.
"""
import logging
from typing import Callable, Dict, List, Optional, Tuple, Type

from .exceptions import ConfigError
from .geometry import (
    FingerStates, all_fingers_up, distance, finger_states,
    is_extended_forward, is_extended_vertical, thumb_offset,
)
from .types import FrameObservation, GestureLabel, Hand, INDEX_TIP, MIDDLE_TIP, PINKY_TIP


logger = logging.getLogger(__name__)

DEFAULT_PAIR_WRIST_DISTANCE = 0.3


class RuleSet:
    """
    Ordered list of single-hand gesture rules.

    Rules are evaluated in order and the first match wins, so more specific
    shapes (two fingers) are checked before broader ones (open palm).
    Subclasses declare ``name``, ``DEFAULT_THRESHOLDS`` and ``rules()``.
    """

    name = ""
    DEFAULT_THRESHOLDS: Dict[str, float] = {}

    def __init__(self, thresholds: Optional[Dict[str, float]] = None):
        unknown = set(thresholds or {}) - set(self.DEFAULT_THRESHOLDS)
        if unknown:
            raise ConfigError(f"Unknown thresholds for rule set '{self.name}': {sorted(unknown)}")
        self.thresholds = {**self.DEFAULT_THRESHOLDS, **(thresholds or {})}

    def rules(self) -> List[Tuple[GestureLabel, Callable[[Hand, FingerStates], bool]]]:
        raise NotImplementedError

    def fingers(self, hand: Hand) -> FingerStates:
        raise NotImplementedError

    def classify(self, hand: Hand) -> Optional[GestureLabel]:
        """
        Classify one hand.

        Args:
            hand: Hand with 21 landmarks

        Returns:
            The first matching gesture label, or None
        """
        fingers = self.fingers(hand)
        for label, rule in self.rules():
            if rule(hand, fingers):
                return label
        return None

    @staticmethod
    def is_rabbit(hand: Hand, f: FingerStates) -> bool:
        # peace sign
        return f.index and f.middle and not f.ring and not f.pinky

    @staticmethod
    def is_index_only(hand: Hand, f: FingerStates) -> bool:
        return f.index and not (f.middle or f.ring or f.pinky)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.thresholds})"


class ClassicRuleSet(RuleSet):
    """
    Single-hand rules: fingers must point up and away from the wrist.

    Rabbit = peace sign, Elephant = fist with thumb out, Butterfly = open
    palm, Dog = index pointing.
    """

    name = "classic"
    DEFAULT_THRESHOLDS = {
        "thumb_offset": 0.15,
        "wrist_gap": 0.1,
    }

    def fingers(self, hand: Hand) -> FingerStates:
        gap = self.thresholds["wrist_gap"]
        return finger_states(
            hand, lambda tip, base, wrist: is_extended_vertical(tip, base, wrist, min_wrist_gap=gap)
        )

    def rules(self):
        return [
            (GestureLabel.RABBIT, self.is_rabbit),
            (GestureLabel.ELEPHANT, self.is_elephant),
            (GestureLabel.BUTTERFLY, self.is_butterfly),
            (GestureLabel.DOG, self.is_index_only),
        ]

    def is_elephant(self, hand: Hand, f: FingerStates) -> bool:
        return thumb_offset(hand) > self.thresholds["thumb_offset"] and f.count == 0

    @staticmethod
    def is_butterfly(hand: Hand, f: FingerStates) -> bool:
        return f.count == 4


class TwoHandRuleSet(RuleSet):
    """
    Rules for a camera that also sees hands held sideways.

    A finger counts as extended when it points up or forward. Butterfly is
    not recognised from one hand here; it needs both hands (see classify_pair).
    """

    name = "two_hand"
    DEFAULT_THRESHOLDS = {
        "vertical_margin": 0.02,
        "forward_margin": 0.05,
        "thumb_offset": 0.15,
        "loose_thumb_offset": 0.1,
        "level_tolerance": 0.12,
        "tip_closeness": 0.08,
    }

    def _points_up(self, tip, base, wrist) -> bool:
        return is_extended_vertical(tip, base, margin=self.thresholds["vertical_margin"])

    def fingers(self, hand: Hand) -> FingerStates:
        margin = self.thresholds["forward_margin"]
        return finger_states(
            hand,
            lambda tip, base, wrist: (self._points_up(tip, base, wrist)
                                      or is_extended_forward(tip, base, wrist, margin=margin)),
        )

    def rules(self):
        return [
            (GestureLabel.RABBIT, self.is_rabbit),
            (GestureLabel.ELEPHANT, self.is_elephant),
            (GestureLabel.DOG, self.is_dog),
        ]

    def is_elephant(self, hand: Hand, f: FingerStates) -> bool:
        offset = thumb_offset(hand)
        if offset > self.thresholds["thumb_offset"] and f.count == 0:
            return True
        # trunk: hand held level with the thumb hanging off the side
        level = abs(hand[INDEX_TIP].y - hand[PINKY_TIP].y) < self.thresholds["level_tolerance"]
        return (level and f.count >= 1
                and offset > self.thresholds["loose_thumb_offset"]
                and not self.is_rabbit(hand, f))

    def is_dog(self, hand: Hand, f: FingerStates) -> bool:
        if self.is_index_only(hand, f):
            return True
        # snout: index and middle held together, thumb out as the ear
        up = finger_states(hand, self._points_up)
        return (thumb_offset(hand) > self.thresholds["loose_thumb_offset"]
                and distance(hand[INDEX_TIP], hand[MIDDLE_TIP]) < self.thresholds["tip_closeness"]
                and not up.index and not up.middle)


RULE_SETS: Dict[str, Type[RuleSet]] = {
    ClassicRuleSet.name: ClassicRuleSet,
    TwoHandRuleSet.name: TwoHandRuleSet,
}


def get_rule_set(name: str, thresholds: Optional[Dict[str, float]] = None) -> RuleSet:
    """
    Instantiate a rule set by name.

    Raises:
        ConfigError: if no rule set has that name
    """
    try:
        cls = RULE_SETS[name]
    except KeyError:
        raise ConfigError(f"Unknown classifier variant '{name}', expected one of {sorted(RULE_SETS)}")
    return cls(thresholds)


def classify_pair(first: Hand, second: Hand,
                  max_wrist_distance: float = DEFAULT_PAIR_WRIST_DISTANCE) -> Optional[GestureLabel]:
    """
    Classify two hands seen in the same frame.

    Both open palms with the wrists close together form the butterfly wings.
    """
    if not (all_fingers_up(first) and all_fingers_up(second)):
        return None
    if distance(first.wrist, second.wrist) < max_wrist_distance:
        return GestureLabel.BUTTERFLY
    return None


class FrameDispatcher:
    """Produces at most one gesture label per frame."""

    def __init__(self, rule_set: RuleSet, pair_wrist_distance: float = DEFAULT_PAIR_WRIST_DISTANCE):
        self.rule_set = rule_set
        self.pair_wrist_distance = pair_wrist_distance

    def dispatch(self, observation: FrameObservation) -> Optional[GestureLabel]:
        """
        Pick the gesture label for a frame.

        Two-hand gestures take priority; otherwise the first hand decides.
        """
        if len(observation) == 0:
            return None
        if len(observation) >= 2:
            label = classify_pair(observation.hands[0], observation.hands[1], self.pair_wrist_distance)
            if label is not None:
                logger.debug("Two-hand gesture: %s", label.value)
                return label
        label = self.rule_set.classify(observation.hands[0])
        logger.debug("Single-hand gesture (%s): %s", self.rule_set.name, label.value if label else None)
        return label
