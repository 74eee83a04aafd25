"""
Test cases for gesture classification with synthetic hand landmarks.
"""
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from animal_gestures.classifier import (
    ClassicRuleSet, FrameDispatcher, TwoHandRuleSet, RULE_SETS, classify_pair, get_rule_set,
)
from animal_gestures.exceptions import ConfigError
from animal_gestures.types import FrameObservation, GestureLabel, Hand
from tests.helpers import BUTTERFLY, DOG, ELEPHANT, FIST, RABBIT, make_hand, make_sideways_hand


def hand(points):
    return Hand.from_points(points)


class TestClassicRuleSet(unittest.TestCase):
    """Test the single-hand rule set."""

    def setUp(self):
        self.rules = ClassicRuleSet()

    def test_basic_gestures(self):
        self.assertEqual(self.rules.classify(hand(RABBIT)), GestureLabel.RABBIT)
        self.assertEqual(self.rules.classify(hand(ELEPHANT)), GestureLabel.ELEPHANT)
        self.assertEqual(self.rules.classify(hand(BUTTERFLY)), GestureLabel.BUTTERFLY)
        self.assertEqual(self.rules.classify(hand(DOG)), GestureLabel.DOG)

    def test_no_gesture(self):
        self.assertIsNone(self.rules.classify(hand(FIST)))
        self.assertIsNone(self.rules.classify(hand(make_hand(middle=True))))
        self.assertIsNone(self.rules.classify(hand(make_hand(index=True, middle=True, ring=True))))

    def test_rabbit_regardless_of_thumb_and_position(self):
        """Index + middle up with ring + pinky down is always a rabbit."""
        for thumb_out in (False, True):
            for wrist in ((0.5, 0.8), (0.3, 0.9), (0.7, 0.7)):
                with self.subTest(thumb_out=thumb_out, wrist=wrist):
                    points = make_hand(index=True, middle=True, thumb_out=thumb_out, wrist=wrist)
                    self.assertEqual(self.rules.classify(hand(points)), GestureLabel.RABBIT)

    def test_open_palm_is_butterfly_never_rabbit(self):
        for thumb_out in (False, True):
            with self.subTest(thumb_out=thumb_out):
                points = make_hand(index=True, middle=True, ring=True, pinky=True, thumb_out=thumb_out)
                self.assertEqual(self.rules.classify(hand(points)), GestureLabel.BUTTERFLY)

    def test_elephant_needs_thumb_out(self):
        self.assertIsNone(self.rules.classify(hand(make_hand(thumb_out=False))))

    def test_pointing_with_thumb_out_is_dog(self):
        """Dog only looks at the four fingers."""
        self.assertEqual(self.rules.classify(hand(make_hand(index=True, thumb_out=True))), GestureLabel.DOG)

    def test_threshold_override(self):
        rules = ClassicRuleSet({"thumb_offset": 0.25})
        self.assertIsNone(rules.classify(hand(ELEPHANT)))

    def test_sideways_hand_is_ignored(self):
        points = make_sideways_hand(
            tips=[(0.7, 0.46), (0.7, 0.49), (0.7, 0.51), (0.7, 0.54)], thumb_tip=(0.42, 0.65))
        self.assertIsNone(self.rules.classify(hand(points)))


class TestTwoHandRuleSet(unittest.TestCase):
    """Test the rule set that recognises butterfly from two hands only."""

    def setUp(self):
        self.rules = TwoHandRuleSet()

    def test_upright_gestures(self):
        self.assertEqual(self.rules.classify(hand(RABBIT)), GestureLabel.RABBIT)
        self.assertEqual(self.rules.classify(hand(ELEPHANT)), GestureLabel.ELEPHANT)
        self.assertEqual(self.rules.classify(hand(DOG)), GestureLabel.DOG)

    def test_no_single_hand_butterfly(self):
        self.assertIsNone(self.rules.classify(hand(BUTTERFLY)))

    def test_level_hand_with_thumb_hanging_is_elephant(self):
        points = make_sideways_hand(
            tips=[(0.7, 0.46), (0.7, 0.49), (0.7, 0.51), (0.7, 0.54)], thumb_tip=(0.42, 0.65))
        self.assertEqual(self.rules.classify(hand(points)), GestureLabel.ELEPHANT)

    def test_snout_with_thumb_ear_is_dog(self):
        points = make_sideways_hand(
            tips=[(0.7, 0.45), (0.7, 0.5), (0.68, 0.55), (0.4, 0.65)], thumb_tip=(0.1, 0.4))
        self.assertEqual(self.rules.classify(hand(points)), GestureLabel.DOG)

    def test_snout_accepts_loose_thumb(self):
        # thumb 0.12 from the wrist: past the loose offset, short of the strict one
        points = make_sideways_hand(
            tips=[(0.7, 0.45), (0.7, 0.5), (0.68, 0.55), (0.4, 0.65)], thumb_tip=(0.18, 0.4))
        self.assertEqual(self.rules.classify(hand(points)), GestureLabel.DOG)

    def test_snout_without_thumb_ear(self):
        points = make_sideways_hand(
            tips=[(0.7, 0.45), (0.7, 0.5), (0.68, 0.55), (0.4, 0.65)], thumb_tip=(0.22, 0.4))
        self.assertIsNone(self.rules.classify(hand(points)))

    def test_sideways_peace_sign_is_rabbit_not_elephant(self):
        points = make_sideways_hand(
            tips=[(0.7, 0.46), (0.7, 0.49), (0.4, 0.55), (0.4, 0.6)], thumb_tip=(0.42, 0.65))
        self.assertEqual(self.rules.classify(hand(points)), GestureLabel.RABBIT)


class TestRuleSetRegistry(unittest.TestCase):
    """Test rule set lookup."""

    def test_known_names(self):
        self.assertEqual(set(RULE_SETS), {"classic", "two_hand"})
        self.assertIsInstance(get_rule_set("classic"), ClassicRuleSet)
        self.assertIsInstance(get_rule_set("two_hand"), TwoHandRuleSet)

    def test_unknown_name(self):
        with self.assertRaises(ConfigError):
            get_rule_set("octopus")

    def test_unknown_threshold(self):
        with self.assertRaises(ConfigError):
            get_rule_set("classic", {"tip_closeness": 0.1})

    def test_thresholds_not_shared(self):
        classic = get_rule_set("classic", {"thumb_offset": 0.2})
        two_hand = get_rule_set("two_hand")
        self.assertEqual(classic.thresholds["thumb_offset"], 0.2)
        self.assertEqual(two_hand.thresholds["thumb_offset"], 0.15)
        self.assertEqual(ClassicRuleSet.DEFAULT_THRESHOLDS["thumb_offset"], 0.15)


class TestClassifyPair(unittest.TestCase):
    """Test the two-hand butterfly."""

    def test_open_palms_close_together(self):
        left = hand(make_hand(True, True, True, True, wrist=(0.4, 0.8)))
        right = hand(make_hand(True, True, True, True, wrist=(0.6, 0.8)))
        self.assertEqual(classify_pair(left, right), GestureLabel.BUTTERFLY)

    def test_open_palms_far_apart(self):
        left = hand(make_hand(True, True, True, True, wrist=(0.15, 0.8)))
        right = hand(make_hand(True, True, True, True, wrist=(0.85, 0.8)))
        self.assertIsNone(classify_pair(left, right))

    def test_one_hand_not_open(self):
        left = hand(make_hand(True, True, True, True, wrist=(0.4, 0.8)))
        right = hand(make_hand(True, True, wrist=(0.6, 0.8)))
        self.assertIsNone(classify_pair(left, right))


class TestFrameDispatcher(unittest.TestCase):
    """Test per-frame label selection."""

    def setUp(self):
        self.classic = FrameDispatcher(ClassicRuleSet())
        self.two_hand = FrameDispatcher(TwoHandRuleSet())

    def test_no_hands(self):
        self.assertIsNone(self.classic.dispatch(FrameObservation()))

    def test_single_hand(self):
        obs = FrameObservation.from_landmarks([DOG])
        self.assertEqual(self.classic.dispatch(obs), GestureLabel.DOG)

    def test_two_hand_butterfly_takes_priority(self):
        """The pair wins even when the first hand alone would be something else."""
        first = make_hand(True, True, True, True, thumb_out=True, wrist=(0.4, 0.8))
        second = make_hand(True, True, True, True, wrist=(0.6, 0.8))
        obs = FrameObservation.from_landmarks([first, second])
        self.assertEqual(self.classic.dispatch(obs), GestureLabel.BUTTERFLY)
        self.assertEqual(self.two_hand.dispatch(obs), GestureLabel.BUTTERFLY)
        # on its own the first hand is an elephant for the two-hand rules
        self.assertEqual(self.two_hand.dispatch(FrameObservation.from_landmarks([first])),
                         GestureLabel.ELEPHANT)

    def test_falls_back_to_first_hand(self):
        obs = FrameObservation.from_landmarks([make_hand(True, True, wrist=(0.3, 0.8)),
                                               make_hand(True, wrist=(0.7, 0.8))])
        self.assertEqual(self.classic.dispatch(obs), GestureLabel.RABBIT)

    def test_open_palms_apart(self):
        obs = FrameObservation.from_landmarks([make_hand(True, True, True, True, wrist=(0.15, 0.8)),
                                               make_hand(True, True, True, True, wrist=(0.85, 0.8))])
        self.assertEqual(self.classic.dispatch(obs), GestureLabel.BUTTERFLY)
        self.assertIsNone(self.two_hand.dispatch(obs))


if __name__ == '__main__':
    unittest.main()
