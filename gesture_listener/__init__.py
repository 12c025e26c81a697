"""
Gesture Listener Package
Turns touchpad and touchscreen gestures into shell commands.
"""

from .config.settings import Config, ConfigError, GestureConfig, Settings, load_config
from .config.commands import (
    CommandMap,
    CommandResolver,
    DispatchResult,
    GestureFamily,
    PinchAction,
)
from .core.events import EventType, InputEvent, SwitchState, SwitchType
from .core.dispatcher import GestureDispatcher

__version__ = "1.0.0"
__all__ = [
    "Config",
    "ConfigError",
    "GestureConfig",
    "Settings",
    "load_config",
    "CommandMap",
    "CommandResolver",
    "DispatchResult",
    "GestureFamily",
    "PinchAction",
    "EventType",
    "InputEvent",
    "SwitchState",
    "SwitchType",
    "GestureDispatcher",
]
