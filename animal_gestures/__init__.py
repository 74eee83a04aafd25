"""
Animal Gesture Recognition

Classifies hand landmarks into animal gestures (rabbit, elephant, butterfly,
dog), confirms a gesture once it has been held, and drives screen navigation.
"""

__version__ = "0.1.0"

from .types import (
    Landmark, Hand, FrameObservation, GestureLabel, ScreenId, GestureSession,
    TentativeGesture, ConfirmedGesture, ScreenChange, ScreenListenerProto,
)
from .exceptions import GestureError, MalformedFrameError, FrameSourceUnavailableError, ConfigError
from .config import load_config, Cfg
from .classifier import ClassicRuleSet, TwoHandRuleSet, FrameDispatcher, classify_pair, get_rule_set
from .hold import HoldConfirmation, HOLD_DURATION_MS
from .navigation import ScreenNavigator
from .controller import GestureController, FrameResult
from .listeners import LoggingListener, RecordingListener

__all__ = [
    "Landmark",
    "Hand",
    "FrameObservation",
    "GestureLabel",
    "ScreenId",
    "GestureSession",
    "TentativeGesture",
    "ConfirmedGesture",
    "ScreenChange",
    "ScreenListenerProto",
    "GestureError",
    "MalformedFrameError",
    "FrameSourceUnavailableError",
    "ConfigError",
    "load_config",
    "Cfg",
    "ClassicRuleSet",
    "TwoHandRuleSet",
    "FrameDispatcher",
    "classify_pair",
    "get_rule_set",
    "HoldConfirmation",
    "HOLD_DURATION_MS",
    "ScreenNavigator",
    "GestureController",
    "FrameResult",
    "LoggingListener",
    "RecordingListener",
]
