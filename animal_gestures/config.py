"""
Configuration management for the animal gesture system.
"""
import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, field

from .exceptions import ConfigError


CONFIG_ENV_VAR = "ANIMAL_GESTURES_CONFIG"
LOG_LEVEL_ENV_VAR = "ANIMAL_GESTURES_LOG_LEVEL"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30
    mirror: bool = True

    def __post_init__(self):
        if self.index < 0:
            raise ConfigError("camera.index must be >= 0")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError("camera.width and camera.height must be positive")
        if self.fps <= 0:
            raise ConfigError("camera.fps must be positive")


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int = 2
    model_complexity: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    def __post_init__(self):
        if not 1 <= self.max_num_hands <= 2:
            raise ConfigError("mediapipe.max_num_hands must be 1 or 2")
        for name in ("min_detection_confidence", "min_tracking_confidence"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ConfigError(f"mediapipe.{name} must be in [0, 1]")


@dataclass
class ClassifierConfig:
    """Gesture rule-set selection and per-variant threshold overrides."""
    variant: str = "classic"
    two_hand_wrist_distance: float = 0.3
    thresholds: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def __post_init__(self):
        if not self.variant:
            raise ConfigError("classifier.variant must be set")
        if self.two_hand_wrist_distance <= 0:
            raise ConfigError("classifier.two_hand_wrist_distance must be positive")

    def thresholds_for(self, variant: str) -> Dict[str, float]:
        """Threshold overrides for one rule set (empty when none configured)."""
        return dict(self.thresholds.get(variant) or {})


@dataclass
class HoldConfig:
    """Hold-to-confirm settings."""
    duration_ms: int = 2000

    def __post_init__(self):
        if self.duration_ms <= 0:
            raise ConfigError("hold.duration_ms must be positive")


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_status: bool = True
    window_name: str = "Animal Gestures"


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"

    def __post_init__(self):
        self.level = str(self.level).upper()
        if self.level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigError(f"Unknown logging.level: {self.level}")


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    hold: HoldConfig = field(default_factory=HoldConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_config_path() -> Path:
    """Path of the config file used when none is given explicitly."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    project_root = Path(__file__).parent.parent
    return project_root / "config.default.yaml"


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses $ANIMAL_GESTURES_CONFIG
            or config.default.yaml in the project root

    Returns:
        Configuration object with all settings

    Raises:
        FileNotFoundError: if the config file does not exist
        ConfigError: if the file contents are invalid
    """
    config_path = Path(path) if path is not None else default_config_path()
    if not config_path.exists():
        if path is None and CONFIG_ENV_VAR not in os.environ:
            # installed without the project root: built-in defaults
            return Cfg()
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    cfg = config_from_dict(data or {})
    env_level = os.environ.get(LOG_LEVEL_ENV_VAR)
    if env_level:
        cfg.logging = LoggingConfig(level=env_level)
    return cfg


def config_from_dict(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object. Missing sections use defaults."""
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping")
    try:
        return Cfg(
            camera=CameraConfig(**_section(data, 'camera')),
            mediapipe=MediaPipeConfig(**_section(data, 'mediapipe')),
            classifier=ClassifierConfig(**_section(data, 'classifier')),
            hold=HoldConfig(**_section(data, 'hold')),
            display=DisplayConfig(**_section(data, 'display')),
            logging=LoggingConfig(**_section(data, 'logging')),
        )
    except TypeError as e:
        # unknown keys in a section
        raise ConfigError(f"Invalid config: {e}") from e


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping")
    return section
