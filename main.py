#!/usr/bin/env python3
"""
Gesture Listener - Main Entry Point
Runs commands on touchpad and touchscreen gestures.
"""

from gesture_listener.cli import app

if __name__ == "__main__":
    app()
