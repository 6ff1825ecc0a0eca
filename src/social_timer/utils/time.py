# src/social_timer/utils/time.py
"""Time utilities shared by the server and the watcher client."""

import time


def current_epoch() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())
