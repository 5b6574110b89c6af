"""
TranscriptPro - Study YouTube videos with a synchronized transcript

Loads a YouTube video's captions, turns them into sentences and keeps the
current sentence in sync with an embedded video player.

Features:
- Normalize WebVTT captions into timed entries
- Fetch captions and video details from YouTube (yt-dlp)
- Wrap an embeddable player behind a ready-aware adapter with polling
- Synchronize the highlighted transcript entry with playback
- Record completion statistics when a video ends

Example usage:
    >>> from transcriptpro import PlayerAdapter, SimulatedPlayer, SyncEngine, ManualScheduler, parse
    >>>
    >>> scheduler = ManualScheduler()
    >>> adapter = PlayerAdapter(SimulatedPlayer.factory(scheduler, {"dQw4w9WgXcQ": 30.0}), scheduler)
    >>> engine = SyncEngine(adapter, parse(vtt_text))
    >>> engine.on_selection_changed(lambda index: print("now at", index))
    >>> adapter.load("dQw4w9WgXcQ")
    >>> scheduler.advance(5.0)
"""

import logging

__version__ = "0.1.0"
__author__ = "TranscriptPro Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core utility functions
from .utils import timestamp_to_seconds, seconds_to_timestamp, format_time, Listeners

# Errors
from .exceptions import (
    TranscriptProError,
    ParseError,
    IndexOutOfRange,
    PlayerError,
    PlayerErrorReason,
    PlayerUnavailable,
    InvalidVideoUrl,
    CaptionExtractionError,
    CaptionsNotFound,
    VideoUnavailable,
    ApiError,
    TranscriptNotFound,
)

# Data models
from .models import (
    CaptionEntry,
    PlaybackState,
    SyncState,
    SyncCursor,
    PlaybackProgress,
    VideoDetails,
    VocabularyItem,
    SessionProgress,
    PlayerConfig,
    ApiConfig,
)

# Captions
from .captions import parse, parse_file, SentenceProcessor, PunctuationSentenceProcessor, merge_into_sentences

# Timing
from .scheduling import Scheduler, AsyncioScheduler, ManualScheduler, TimerHandle

# Player and synchronization
from .player import EmbeddedPlayer, PlayerEvents, PlayerAdapter, SimulatedPlayer, player_error_from_code
from .sync import SyncEngine, find_entry_index
from .progress import ProgressRecorder

# Collaborators
from .youtube import YouTubeClient, is_youtube_url, extract_youtube_id, resolve_video_id
from .api import ApiClient

# Session
from .session import StudySession

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Utilities
    "timestamp_to_seconds",
    "seconds_to_timestamp",
    "format_time",
    "Listeners",

    # Errors
    "TranscriptProError",
    "ParseError",
    "IndexOutOfRange",
    "PlayerError",
    "PlayerErrorReason",
    "PlayerUnavailable",
    "InvalidVideoUrl",
    "CaptionExtractionError",
    "CaptionsNotFound",
    "VideoUnavailable",
    "ApiError",
    "TranscriptNotFound",

    # Models
    "CaptionEntry",
    "PlaybackState",
    "SyncState",
    "SyncCursor",
    "PlaybackProgress",
    "VideoDetails",
    "VocabularyItem",
    "SessionProgress",
    "PlayerConfig",
    "ApiConfig",

    # Captions
    "parse",
    "parse_file",
    "SentenceProcessor",
    "PunctuationSentenceProcessor",
    "merge_into_sentences",

    # Timing
    "Scheduler",
    "AsyncioScheduler",
    "ManualScheduler",
    "TimerHandle",

    # Player and synchronization
    "EmbeddedPlayer",
    "PlayerEvents",
    "PlayerAdapter",
    "SimulatedPlayer",
    "player_error_from_code",
    "SyncEngine",
    "find_entry_index",
    "ProgressRecorder",

    # Collaborators
    "YouTubeClient",
    "is_youtube_url",
    "extract_youtube_id",
    "resolve_video_id",
    "ApiClient",

    # Session
    "StudySession",
]
