"""
Embedded player interface.

Defines the capability set the Player Adapter needs from an embeddable
video player (an IFrame-style player: method calls in, three event
callbacks out) and the callbacks bundle handed to it on construction.
"""

from dataclasses import dataclass
from typing import Callable


@dataclass
class PlayerEvents:
    """Callbacks an embedded player invokes. Supplied at construction."""
    on_ready: Callable[[], None]
    on_state_change: Callable[[int], None]
    on_error: Callable[[int], None]


class EmbeddedPlayer:
    """Base interface for embedded video players."""

    def load_video_by_id(self, video_id: str, start_seconds: float = 0.0) -> None:
        raise NotImplementedError

    def play_video(self) -> None:
        raise NotImplementedError

    def pause_video(self) -> None:
        raise NotImplementedError

    def seek_to(self, seconds: float, allow_seek_ahead: bool) -> None:
        raise NotImplementedError

    def get_current_time(self) -> float:
        raise NotImplementedError

    def get_duration(self) -> float:
        raise NotImplementedError

    def get_player_state(self) -> int:
        raise NotImplementedError

    def destroy(self) -> None:
        raise NotImplementedError


PlayerFactory = Callable[[PlayerEvents], EmbeddedPlayer]
