"""
Data models for TranscriptPro.

Defines the core data structures and configuration objects used throughout
the package.
"""

import os
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Dict, Any, Optional


@dataclass(frozen=True)
class CaptionEntry:
    """One timestamped caption or transcript sentence, in seconds."""
    start: float
    end: float
    text: str = ""

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"Entry start must be >= 0, got {self.start}")
        if self.end <= self.start:
            raise ValueError(f"Entry end ({self.end}) must be after start ({self.start})")

    @property
    def duration(self) -> float:
        return self.end - self.start

    def contains(self, time: float) -> bool:
        """Whether playback time falls inside [start, start + duration)."""
        return self.start <= time < self.start + self.duration

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "duration": self.duration,
            "text": self.text,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CaptionEntry":
        """Build an entry from a dict carrying either 'end' or 'duration'."""
        start = float(data["start"])
        if data.get("end") is not None:
            end = float(data["end"])
        else:
            end = start + float(data["duration"])
        return cls(start=start, end=end, text=data.get("text", "") or "")


class PlaybackState(IntEnum):
    """Discrete player state, valued with the embedded player's state codes."""
    UNSTARTED = -1
    ENDED = 0
    PLAYING = 1
    PAUSED = 2
    BUFFERING = 3
    CUED = 5

    @classmethod
    def from_code(cls, code: int) -> "PlaybackState":
        try:
            return cls(code)
        except ValueError:
            raise ValueError(f"Unknown player state code: {code}") from None


class SyncState(Enum):
    IDLE = "idle"
    SYNCING = "syncing"


@dataclass
class SyncCursor:
    """Sync Engine state: which entry is highlighted and whether syncing runs."""
    current_index: Optional[int] = None
    is_syncing: bool = False


@dataclass
class PlaybackProgress:
    """Time/progress display update delivered to the UI layer."""
    current_time: float
    duration: float

    @property
    def percent(self) -> float:
        if self.duration <= 0:
            return 0.0
        return min(100.0, max(0.0, self.current_time / self.duration * 100))


@dataclass
class VideoDetails:
    """Video metadata retrieved from the caption/metadata source."""
    video_id: str
    title: str = ""
    description: str = ""
    duration: Optional[float] = None
    thumbnail: Optional[str] = None
    channel_name: Optional[str] = None
    channel_id: Optional[str] = None
    channel_url: Optional[str] = None
    view_count: Optional[int] = None
    upload_date: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "videoId": self.video_id,
            "title": self.title,
            "description": self.description,
            "duration": self.duration,
            "thumbnail": self.thumbnail,
            "channel": {
                "name": self.channel_name,
                "id": self.channel_id,
                "url": self.channel_url,
            },
            "viewCount": self.view_count,
            "uploadDate": self.upload_date,
            "categories": self.categories,
            "tags": self.tags,
        }


@dataclass
class VocabularyItem:
    """A saved word or phrase and the videos it was saved from."""
    text: str
    type: str = "word"  # "word" or "phrase"
    video_ids: List[str] = field(default_factory=list)

    def seen_in(self, video_id: str) -> bool:
        return video_id in self.video_ids


@dataclass
class SessionProgress:
    """Completion statistics recorded when a video ends."""
    video_id: str
    completed: bool = True
    completion_percentage: int = 100
    time_spent: float = 0.0
    words_saved: int = 0
    phrases_saved: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "videoId": self.video_id,
            "completed": self.completed,
            "completionPercentage": self.completion_percentage,
            "timeSpent": self.time_spent,
            "wordsSaved": self.words_saved,
            "phrasesSaved": self.phrases_saved,
        }


@dataclass
class PlayerConfig:
    """Timing configuration for the Player Adapter."""
    poll_interval: float = 0.1       # seconds between time samples
    load_retry_delay: float = 0.1    # seconds between deferred load attempts
    load_max_attempts: int = 100     # deferred load attempts before giving up

    def __post_init__(self):
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if self.load_retry_delay <= 0:
            raise ValueError("load_retry_delay must be positive")
        if self.load_max_attempts < 1:
            raise ValueError("load_max_attempts must be at least 1")


@dataclass
class ApiConfig:
    """Connection settings for the TranscriptPro REST API."""
    base_url: str = "http://localhost:5000/api"
    token: Optional[str] = None
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "ApiConfig":
        """Read TRANSCRIPTPRO_API_URL, TRANSCRIPTPRO_API_TOKEN and TRANSCRIPTPRO_API_TIMEOUT."""
        defaults = cls()
        return cls(
            base_url=os.getenv("TRANSCRIPTPRO_API_URL", defaults.base_url),
            token=os.getenv("TRANSCRIPTPRO_API_TOKEN") or None,
            timeout=float(os.getenv("TRANSCRIPTPRO_API_TIMEOUT", defaults.timeout)),
        )
