"""
Configuration settings for the gesture listener.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when the configuration file cannot be used."""


class GestureConfig:
    """Configuration constants for gesture recognition."""

    # Timing configurations (in milliseconds)
    MULTITOUCH_SYNC_THRESHOLD = 100

    # Direction classification, ~tan(22.5)
    OBLIQUE_RATIO = 0.414

    # Swipe gestures report unaccelerated deltas in 1000 dpi units
    SWIPE_X_THRESHOLD = 1000
    SWIPE_Y_THRESHOLD = 500

    # Pinch
    DEFAULT_SCALE = 1.0

    # Defaults for the user settings
    DEFAULT_SWIPE_THRESHOLD = 0.5
    DEFAULT_PINCH_THRESHOLD = 0.25
    DEFAULT_ROTATE_THRESHOLD = 20.0
    LONGSWIPE_SCREEN_PERCENT_DEFAULT = 70.0

    INTERACT_TYPES = ('GESTURE', 'TOUCH', 'BOTH')

    CONFIG_DIR_NAME = 'gesture-listener'
    CONFIG_FILE_NAME = 'config.yml'


@dataclass
class Settings:
    """User tunable settings, read from the ``settings`` section."""
    gesture_swipe_threshold: float = GestureConfig.DEFAULT_SWIPE_THRESHOLD
    gesture_swipe_one_shot: bool = True
    gesture_swipe_trigger_on_release: bool = True
    touch_longswipe_screen_percentage: float = GestureConfig.LONGSWIPE_SCREEN_PERCENT_DEFAULT
    pinch_threshold: float = GestureConfig.DEFAULT_PINCH_THRESHOLD
    rotate_threshold: float = GestureConfig.DEFAULT_ROTATE_THRESHOLD
    interact_type: str = ''


@dataclass
class Config:
    """Everything read from the configuration file."""
    settings: Settings = field(default_factory=Settings)
    swipe_commands: List[Dict[str, Any]] = field(default_factory=list)
    pinch_commands: List[Dict[str, Any]] = field(default_factory=list)
    switch_commands: Dict[str, str] = field(default_factory=dict)
    path: Optional[Path] = None


def find_config_file() -> Optional[Path]:
    """Locate the config file under the XDG config home."""
    base = os.environ.get('XDG_CONFIG_HOME', '')
    if base:
        config_home = Path(base)
    else:
        home = os.environ.get('HOME', '')
        if not home:
            try:
                home = str(Path.home())
            except RuntimeError:
                logger.debug("Config path not generated: no home directory")
                return None
        config_home = Path(home) / '.config'

    path = config_home / GestureConfig.CONFIG_DIR_NAME / GestureConfig.CONFIG_FILE_NAME
    logger.debug(f"Config path generated: '{path}'")
    return path


def _section(data: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    """Walk nested mappings, returning an empty dict for missing keys."""
    node: Any = data
    for key in keys:
        if not isinstance(node, dict):
            raise ConfigError(f"'{'.'.join(keys)}' must be a mapping")
        node = node.get(key) or {}
    if not isinstance(node, dict):
        raise ConfigError(f"'{'.'.join(keys)}' must be a mapping")
    return node


def _table_array(data: Dict[str, Any], *keys: str) -> List[Dict[str, Any]]:
    """Read a list of command tables such as ``swipe.commands``."""
    parent = _section(data, *keys[:-1])
    tables = parent.get(keys[-1]) or []
    if not isinstance(tables, list) or not all(isinstance(t, dict) for t in tables):
        raise ConfigError(f"'{'.'.join(keys)}' must be a list of mappings")
    return tables


def _read_settings(data: Dict[str, Any]) -> Settings:
    settings = Settings()
    try:
        swipe = _section(data, 'settings', 'gesture_swipe')
        settings.gesture_swipe_threshold = float(
            swipe.get('threshold', settings.gesture_swipe_threshold))
        settings.gesture_swipe_one_shot = bool(
            swipe.get('one_shot', settings.gesture_swipe_one_shot))
        settings.gesture_swipe_trigger_on_release = bool(
            swipe.get('trigger_on_release', settings.gesture_swipe_trigger_on_release))

        touch = _section(data, 'settings', 'touch_swipe')
        settings.touch_longswipe_screen_percentage = float(
            touch.get('longswipe_screen_percentage', settings.touch_longswipe_screen_percentage))

        settings.pinch_threshold = float(
            _section(data, 'settings', 'pinch').get('threshold', settings.pinch_threshold))
        settings.rotate_threshold = float(
            _section(data, 'settings', 'rotate').get('threshold', settings.rotate_threshold))
    except ConfigError:
        raise
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid setting value: {e}") from e

    interact = str(_section(data, 'settings', 'interact').get('type') or '').upper()
    if interact and interact not in GestureConfig.INTERACT_TYPES:
        raise ConfigError(
            f"settings.interact.type must be one of {GestureConfig.INTERACT_TYPES}, got '{interact}'")
    settings.interact_type = interact
    return settings


def parse_config(data: Optional[Dict[str, Any]]) -> Config:
    """Build a Config from already parsed YAML data."""
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError("Top level of the config file must be a mapping")

    switch = _section(data, 'switch', 'commands')
    return Config(
        settings=_read_settings(data),
        swipe_commands=_table_array(data, 'swipe', 'commands'),
        pinch_commands=_table_array(data, 'pinch', 'commands'),
        switch_commands={k: str(v or '') for k, v in switch.items()},
    )


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load the configuration file.

    A missing file is not an error: the defaults are returned and no
    commands are bound.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    if path is None:
        path = find_config_file()
    if path is None or not Path(path).exists():
        logger.info(f"No config file found at {path}, using defaults")
        return Config(path=path)

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read {path}: {e}") from e

    config = parse_config(data)
    config.path = Path(path)
    logger.debug(f"Config loaded from {path}")
    return config
