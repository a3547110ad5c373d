"""Utility functions for the application."""

import time
import uuid


def now_ms():
    """Return the current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def generate_id():
    """Generate a short opaque identifier for players, matches and messages."""
    return uuid.uuid4().hex[:9]
