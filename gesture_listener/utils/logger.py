"""
Console logging for fired gestures.
"""

import datetime
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class GestureLogger:
    """Prints fired gestures and optionally mirrors them to a debug file."""

    ICONS = {
        'GESTURE': '👋',
        'TOUCH': '👆',
        'ONESHOT': '🔍',
        'CONTINUOUS': '🔁',
        'SWITCH': '💻',
    }

    def __init__(self, debug_file: Optional[str] = None):
        self.debug_file = None
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'a')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not open debug file: {e}")

    def log_gesture(self, fingers: int, family: str, gesture: str, command: str):
        """Log a resolved gesture and the command bound to it."""
        timestamp = datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]
        icon = self.ICONS.get(family, '•')
        bound = f"-> '{command}'" if command else "(no command bound)"

        print(f"[{timestamp}] {icon} {family} {gesture.upper()}: {fingers} finger(s) {bound}")

        self._write(f"[{timestamp}] fingers={fingers} family={family} gesture={gesture} command={command!r}\n")

    def log_switch(self, state: str, command: str):
        """Log a tablet mode switch toggle."""
        timestamp = datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]
        print(f"[{timestamp}] {self.ICONS['SWITCH']} SWITCH: {state.upper()} "
              f"{repr(command) if command else '(no command bound)'}")
        self._write(f"[{timestamp}] switch={state} command={command!r}\n")

    def _write(self, line: str):
        if not self.debug_file:
            return
        try:
            self.debug_file.write(line)
            self.debug_file.flush()
        except OSError as e:
            logger.warning(f"Could not write debug file: {e}")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None
