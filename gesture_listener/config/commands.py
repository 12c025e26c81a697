"""
Command bindings and the resolver that runs them.

The engine reports every trigger as ``(fingers, family, code)``. The
resolver looks up the bound shell command, runs it and tells the engine
whether anything was bound, which is what drives the one-shot to
continuous escalation of pinch gestures.
"""

import logging
import subprocess
from enum import Enum, IntEnum
from typing import Callable, Dict, Optional, Tuple

from .settings import Config, ConfigError
from ..core.events import SwitchState
from ..gestures.direction import Direction, SWIPE_DIRECTIONS
from ..utils.logger import GestureLogger

logger = logging.getLogger(__name__)


class GestureFamily(Enum):
    GESTURE = 'GESTURE'
    TOUCH = 'TOUCH'
    ONESHOT = 'ONESHOT'
    CONTINUOUS = 'CONTINUOUS'

    @property
    def is_swipe(self) -> bool:
        return self in (GestureFamily.GESTURE, GestureFamily.TOUCH)


class PinchAction(IntEnum):
    """Pinch and rotate codes."""
    PINCH_IN = 1
    PINCH_OUT = 2
    ROTATE_LEFT = 3
    ROTATE_RIGHT = 4

    @property
    def key(self) -> str:
        """Name used for the action in the config file."""
        return {
            PinchAction.PINCH_IN: 'in',
            PinchAction.PINCH_OUT: 'out',
            PinchAction.ROTATE_LEFT: 'rotate_left',
            PinchAction.ROTATE_RIGHT: 'rotate_right',
        }[self]


class DispatchResult(Enum):
    DISPATCHED = 'dispatched'
    NO_COMMAND_BOUND = 'no_command_bound'


CommandKey = Tuple[int, GestureFamily, int]


def gesture_name(family: GestureFamily, code: int) -> str:
    """Human readable name of a code within its family."""
    if family.is_swipe:
        return Direction(code).key
    return PinchAction(code).key


class CommandMap:
    """Commands keyed by finger count, gesture family and code."""

    def __init__(self):
        self._commands: Dict[CommandKey, str] = {}
        self.switch_commands: Dict[SwitchState, str] = {}

    @staticmethod
    def _validate(fingers: int, family: GestureFamily, code: int):
        if fingers < 1:
            raise ValueError(f"Finger count must be positive, got {fingers}")
        if family.is_swipe:
            if code not in [d.value for d in SWIPE_DIRECTIONS]:
                raise ValueError(f"Invalid swipe direction {code} for {family.value}")
        elif code not in [a.value for a in PinchAction]:
            raise ValueError(f"Invalid pinch action {code} for {family.value}")

    def bind(self, fingers: int, family: GestureFamily, code: int, command: str):
        """Bind a command; an empty command removes the binding."""
        self._validate(fingers, family, code)
        key = (fingers, family, int(code))
        if command:
            self._commands[key] = command
        else:
            self._commands.pop(key, None)

    def get(self, fingers: int, family: GestureFamily, code: int) -> str:
        """Return the bound command, or an empty string."""
        self._validate(fingers, family, code)
        return self._commands.get((fingers, family, int(code)), '')

    def __len__(self):
        return len(self._commands)

    @classmethod
    def from_config(cls, config: Config) -> 'CommandMap':
        """
        Build the map from the ``swipe``, ``pinch`` and ``switch`` sections.

        Raises:
            ConfigError: If a table names an unknown type or finger count
        """
        command_map = cls()

        for table in config.swipe_commands:
            fingers, family = cls._table_key(table, 3, GestureFamily.GESTURE)
            if not family.is_swipe:
                raise ConfigError(f"swipe.commands type must be GESTURE or TOUCH, got {family.value}")
            for direction in SWIPE_DIRECTIONS:
                command_map.bind(fingers, family, direction, str(table.get(direction.key) or ''))

        for table in config.pinch_commands:
            fingers, family = cls._table_key(table, 2, GestureFamily.ONESHOT)
            if family.is_swipe:
                raise ConfigError(f"pinch.commands type must be ONESHOT or CONTINUOUS, got {family.value}")
            for action in PinchAction:
                command_map.bind(fingers, family, action, str(table.get(action.key) or ''))

        for state in SwitchState:
            command_map.switch_commands[state] = config.switch_commands.get(state.name.lower(), '')

        logger.debug(f"Loaded {len(command_map)} gesture commands")
        return command_map

    @staticmethod
    def _table_key(table: dict, default_fingers: int,
                   default_family: GestureFamily) -> Tuple[int, GestureFamily]:
        try:
            fingers = int(table.get('fingers', default_fingers))
            family = GestureFamily(str(table.get('type', default_family.value)).upper())
        except ValueError as e:
            raise ConfigError(f"Invalid command table {table}: {e}") from e
        if fingers < 1:
            raise ConfigError(f"Invalid finger count {fingers} in command table")
        return fingers, family


def run_command(command: str):
    """Run a shell command, logging failures."""
    logger.info(f"Executing '{command}'")
    try:
        result = subprocess.run(command, shell=True)
    except OSError as e:
        logger.error(f"Could not execute '{command}': {e}")
        return
    if result.returncode != 0:
        logger.warning(f"'{command}' -> Non-zero exit code: {result.returncode}")


class CommandResolver:
    """Resolves gesture triggers to commands and runs them."""

    def __init__(self, command_map: CommandMap,
                 runner: Callable[[str], None] = run_command,
                 gesture_logger: Optional[GestureLogger] = None):
        self.command_map = command_map
        self.runner = runner
        self.gesture_logger = gesture_logger

    def resolve_and_run(self, fingers: int, family: GestureFamily, code: int) -> DispatchResult:
        """Run the command bound to a trigger, if any."""
        try:
            command = self.command_map.get(fingers, family, code)
        except ValueError as e:
            logger.debug(f"Unresolvable gesture: {e}")
            return DispatchResult.NO_COMMAND_BOUND

        name = gesture_name(family, code)
        logger.debug(f"fingers: {fingers}, type: {family.value}, gesture: {name}")
        if self.gesture_logger:
            self.gesture_logger.log_gesture(fingers, family.value, name, command)

        if not command:
            return DispatchResult.NO_COMMAND_BOUND
        self.runner(command)
        return DispatchResult.DISPATCHED

    def run_switch_command(self, state: SwitchState) -> DispatchResult:
        """Run the command bound to a tablet mode switch position."""
        command = self.command_map.switch_commands.get(state, '')
        if self.gesture_logger:
            self.gesture_logger.log_switch(state.name.lower(), command)
        if not command:
            return DispatchResult.NO_COMMAND_BOUND
        self.runner(command)
        return DispatchResult.DISPATCHED
