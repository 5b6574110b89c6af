"""
Headless embedded player.

SimulatedPlayer behaves like an IFrame-style player whose playback clock is
driven by a Scheduler. It lets the adapter, sync engine and session run
without a browser, e.g. in examples and tests.
"""

import logging
from typing import Callable, Dict, Optional

from ..models import PlaybackState
from ..scheduling import Scheduler, TimerHandle
from .base import EmbeddedPlayer, PlayerEvents

logger = logging.getLogger(__name__)

VIDEO_NOT_FOUND = 100


class SimulatedPlayer(EmbeddedPlayer):
    """
    Embedded player simulation.

    Args:
        events: Callbacks to notify
        scheduler: Clock and timer source
        catalogue: Known video IDs mapped to their duration in seconds
        ready_delay: Seconds until the ready event fires, or None to never
            become ready
    """

    def __init__(
        self,
        events: PlayerEvents,
        scheduler: Scheduler,
        catalogue: Dict[str, float],
        ready_delay: Optional[float] = 0.0,
    ):
        self.events = events
        self.scheduler = scheduler
        self.catalogue = dict(catalogue)
        self.video_id: Optional[str] = None
        self.destroyed = False

        self._state = PlaybackState.UNSTARTED
        self._position = 0.0
        self._anchor = 0.0
        self._end_timer: Optional[TimerHandle] = None
        self._ready_timer: Optional[TimerHandle] = None

        if ready_delay is not None:
            self._ready_timer = scheduler.call_later(ready_delay, self._fire_ready)

    @classmethod
    def factory(
        cls,
        scheduler: Scheduler,
        catalogue: Dict[str, float],
        ready_delay: Optional[float] = 0.0,
    ) -> Callable[[PlayerEvents], "SimulatedPlayer"]:
        """Build a player factory suitable for PlayerAdapter."""
        return lambda events: cls(events, scheduler, catalogue, ready_delay=ready_delay)

    def _fire_ready(self) -> None:
        self._ready_timer = None
        if not self.destroyed:
            self.events.on_ready()

    def _set_state(self, state: PlaybackState) -> None:
        self._state = state
        self.events.on_state_change(int(state))

    def _schedule_end(self) -> None:
        self._cancel_end()
        remaining = max(0.0, self.get_duration() - self._position)
        self._end_timer = self.scheduler.call_later(remaining, self._finish)

    def _cancel_end(self) -> None:
        if self._end_timer is not None:
            self._end_timer.cancel()
            self._end_timer = None

    def _finish(self) -> None:
        self._end_timer = None
        self._position = self.get_duration()
        self._set_state(PlaybackState.ENDED)

    def _start(self) -> None:
        self._anchor = self.scheduler.time()
        self._set_state(PlaybackState.PLAYING)
        self._schedule_end()

    def load_video_by_id(self, video_id: str, start_seconds: float = 0.0) -> None:
        self._cancel_end()
        if video_id not in self.catalogue:
            self.video_id = None
            self._state = PlaybackState.UNSTARTED
            self.scheduler.call_later(0, lambda: self.events.on_error(VIDEO_NOT_FOUND))
            return
        self.video_id = video_id
        self._position = min(max(0.0, start_seconds), self.catalogue[video_id])
        self._start()

    def play_video(self) -> None:
        if self.video_id is None or self._state is PlaybackState.PLAYING:
            return
        if self._state is PlaybackState.ENDED:
            self._position = 0.0
        self._start()

    def pause_video(self) -> None:
        if self._state not in (PlaybackState.PLAYING, PlaybackState.BUFFERING):
            return
        self._position = self.get_current_time()
        self._cancel_end()
        self._set_state(PlaybackState.PAUSED)

    def seek_to(self, seconds: float, allow_seek_ahead: bool) -> None:
        if self.video_id is None:
            return
        self._position = min(max(0.0, seconds), self.get_duration())
        if self._state is PlaybackState.PLAYING:
            self._anchor = self.scheduler.time()
            self._schedule_end()

    def buffer(self) -> None:
        """Stall playback as if the network could not keep up."""
        if self._state is PlaybackState.PLAYING:
            self._position = self.get_current_time()
            self._cancel_end()
            self._set_state(PlaybackState.BUFFERING)

    def resume(self) -> None:
        """Recover from buffer()."""
        if self._state is PlaybackState.BUFFERING:
            self._start()

    def fail(self, code: int) -> None:
        """Report an embedded player error code."""
        self.events.on_error(code)

    def get_current_time(self) -> float:
        if self._state is PlaybackState.PLAYING:
            elapsed = self.scheduler.time() - self._anchor
            return min(self.get_duration(), self._position + elapsed)
        return self._position

    def get_duration(self) -> float:
        if self.video_id is None:
            return 0.0
        return self.catalogue[self.video_id]

    def get_player_state(self) -> int:
        return int(self._state)

    def destroy(self) -> None:
        self.destroyed = True
        self._cancel_end()
        if self._ready_timer is not None:
            self._ready_timer.cancel()
            self._ready_timer = None
        logger.debug("Simulated player destroyed")
