"""
Shared utility functions for TranscriptPro.

Provides timestamp conversion, display formatting and the listener list
used by the player and sync components to fan out notifications.
"""

import logging
import re
from typing import Any, Callable, List

from .exceptions import ParseError

logger = logging.getLogger(__name__)

# Hours are optional in WebVTT and may have more than two digits
_TIMESTAMP_PATTERN = re.compile(r'^(?:(\d+):)?(\d{2}):(\d{2})\.(\d{3})$')


def timestamp_to_seconds(timestamp: str) -> float:
    """
    Convert HH:MM:SS.mmm (or MM:SS.mmm) format to seconds.

    Args:
        timestamp: Timestamp string

    Returns:
        Time in seconds as float

    Raises:
        ParseError: If the timestamp is malformed

    Example:
        >>> timestamp_to_seconds("00:01:30.500")
        90.5
    """
    match = _TIMESTAMP_PATTERN.match(timestamp.strip())
    if not match:
        raise ParseError(f"Malformed timestamp: {timestamp!r}")

    hours, minutes, seconds, millis = match.groups()
    hours = int(hours) if hours is not None else 0
    minutes = int(minutes)
    seconds = int(seconds)
    if minutes >= 60 or seconds >= 60:
        raise ParseError(f"Timestamp field out of range: {timestamp!r}")

    return hours * 3600 + minutes * 60 + seconds + int(millis) / 1000


def seconds_to_timestamp(seconds: float) -> str:
    """
    Convert seconds to HH:MM:SS.mmm format.

    Example:
        >>> seconds_to_timestamp(90.5)
        '00:01:30.500'
    """
    total_millis = int(round(max(0.0, seconds) * 1000))
    hours, remainder = divmod(total_millis, 3600000)
    minutes, remainder = divmod(remainder, 60000)
    secs, millis = divmod(remainder, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def format_time(seconds: float) -> str:
    """
    Format seconds as M:SS for the playback time display.

    Example:
        >>> format_time(75.9)
        '1:15'
    """
    seconds = max(0.0, seconds)
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins}:{secs:02d}"


class Listeners:
    """
    Ordered list of callbacks notified together.

    A callback that raises is logged and skipped so that one faulty
    subscriber cannot starve the others.
    """

    def __init__(self, name: str):
        self.name = name
        self._callbacks: List[Callable[..., Any]] = []

    def add(self, callback: Callable[..., Any]) -> None:
        if not callable(callback):
            raise TypeError(f"{self.name} listener must be callable")
        self._callbacks.append(callback)

    def emit(self, *args: Any) -> None:
        # Copy so callbacks may register further listeners while we iterate
        for callback in list(self._callbacks):
            try:
                callback(*args)
            except Exception:
                logger.exception(f"Error in {self.name} listener {callback!r}")

    def clear(self) -> None:
        self._callbacks.clear()

    def __len__(self) -> int:
        return len(self._callbacks)
