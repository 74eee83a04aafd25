"""
Custom exceptions for the animal gesture system.
"""


class GestureError(Exception):
    """Base exception for gesture-related errors."""
    pass


class MalformedFrameError(GestureError):
    """Raised when a frame carries a hand with bad landmark data."""
    pass


class FrameSourceUnavailableError(GestureError):
    """Raised when the frame source (camera) cannot be started."""
    pass


class ConfigError(GestureError, ValueError):
    """Raised when configuration is missing or invalid."""
    pass
