"""
Exceptions for TranscriptPro.

All errors raised by the package derive from TranscriptProError. Player
errors are also delivered as values through the Player Adapter's error
channel instead of being raised.
"""

from enum import Enum
from typing import List, Optional


class TranscriptProError(Exception):
    """Base class for all TranscriptPro errors."""
    pass


class ParseError(TranscriptProError, ValueError):
    """Raised when caption text contains a malformed timestamp."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class IndexOutOfRange(TranscriptProError, IndexError):
    """Raised when seeking to an entry index outside the loaded transcript."""

    def __init__(self, index: int, size: int):
        super().__init__(f"Entry index {index} out of range for {size} entries")
        self.index = index
        self.size = size


class PlayerErrorReason(Enum):
    """Closed set of reasons an embedded player can fail for."""
    NOT_FOUND = "not_found"
    EMBEDDING_DISALLOWED = "embedding_disallowed"
    PLAYBACK_ENGINE_ERROR = "playback_engine_error"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


class PlayerError(TranscriptProError):
    """Structured error reported by the embedded player."""

    def __init__(self, reason: PlayerErrorReason, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(reason={self.reason.value!r}, code={self.code!r}, message={self.message!r})"


class PlayerUnavailable(PlayerError):
    """The embedded player never became ready within the retry budget."""

    def __init__(self, video_id: str, attempts: int):
        super().__init__(
            PlayerErrorReason.UNAVAILABLE,
            f"Player not ready after {attempts} attempts to load {video_id}",
        )
        self.video_id = video_id
        self.attempts = attempts


class InvalidVideoUrl(TranscriptProError, ValueError):
    """Raised when a YouTube URL or video ID cannot be recognised."""
    pass


class CaptionExtractionError(TranscriptProError):
    """Raised when captions cannot be fetched from the caption source."""
    pass


class CaptionsNotFound(CaptionExtractionError):
    """Raised when a video has no captions in the requested language."""

    def __init__(self, video_id: str, language: str, available: Optional[List[str]] = None):
        super().__init__(f"No '{language}' captions found for video {video_id}")
        self.video_id = video_id
        self.language = language
        self.available = available or []


class VideoUnavailable(TranscriptProError):
    """Raised when video metadata cannot be retrieved."""
    pass


class ApiError(TranscriptProError):
    """Raised when the persistence API returns an error or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TranscriptNotFound(ApiError):
    """Raised when no stored transcript exists for a video."""
    pass
