"""
Hand landmark detection using MediaPipe.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import List, Optional, Tuple

from .config import MediaPipeConfig


RawHand = List[Tuple[float, float, float]]


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 2, model_complexity: int = 1,
                 min_detection_conf: float = 0.5, min_tracking_conf: float = 0.5):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            model_complexity: MediaPipe model complexity (0 or 1)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    @classmethod
    def from_config(cls, cfg: MediaPipeConfig) -> "HandsTracker":
        return cls(
            max_num_hands=cfg.max_num_hands,
            model_complexity=cfg.model_complexity,
            min_detection_conf=cfg.min_detection_confidence,
            min_tracking_conf=cfg.min_tracking_confidence,
        )

    def process(self, frame_bgr: np.ndarray) -> Tuple[List[RawHand], Optional[List[str]]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            (hands, handedness): each hand is 21 (x, y, z) tuples in [0..1] range;
            handedness is a parallel list of "Left"/"Right" or None if unavailable
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)
        return hands_from_results(results)

    def close(self) -> None:
        self.hands.close()


def hands_from_results(results) -> Tuple[List[RawHand], Optional[List[str]]]:
    """Convert a MediaPipe Hands result object into plain tuples."""
    if not results.multi_hand_landmarks:
        return [], None

    hands = [
        [(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]
        for hand_landmarks in results.multi_hand_landmarks
    ]

    handedness = None
    if results.multi_handedness:
        handedness = [h.classification[0].label for h in results.multi_handedness]

    return hands, handedness
