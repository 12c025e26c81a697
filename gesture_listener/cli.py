"""
Command line entry point.
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from . import __version__
from .config.commands import CommandMap, CommandResolver
from .config.settings import ConfigError, load_config
from .utils.logger import GestureLogger

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="gesture-listener",
    help="👋 Run commands on touchpad and touchscreen gestures.",
    add_completion=False,
)


@app.command()
def main(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to the YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Prints verbose output during runtime"),
    debug_log: Optional[Path] = typer.Option(None, "--debug-log", help="Also append fired gestures to this file"),
):
    """
    Listen for gestures and run the bound commands.

    Runs in the foreground; start it from a systemd user unit or your
    session autostart to keep it running in the background.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        loaded = load_config(config)
        command_map = CommandMap.from_config(loaded)
    except ConfigError as e:
        logger.error(f"Could not load configuration: {e}")
        raise typer.Exit(code=1)

    from .core.listener import GestureListener

    gesture_logger = GestureLogger(str(debug_log) if debug_log else None)
    resolver = CommandResolver(command_map, gesture_logger=gesture_logger)
    listener = GestureListener(loaded.settings, resolver)

    if not listener.start():
        gesture_logger.close()
        raise typer.Exit(code=1)

    logger.info(f"Running gesture-listener v{__version__}")
    try:
        listener.run()
    except KeyboardInterrupt:
        print("\n👋 Stopping...")
    finally:
        listener.stop()
        gesture_logger.close()


if __name__ == "__main__":
    app()
