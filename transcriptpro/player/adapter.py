"""
Player Adapter.

Single point of contact with the embedded video player. Translates raw
state and error codes into PlaybackState and PlayerError values, samples
the playback clock while playing, and fans notifications out to listeners.
"""

import logging
from typing import Callable, Optional

from ..exceptions import PlayerError, PlayerErrorReason, PlayerUnavailable
from ..models import PlaybackState, PlayerConfig
from ..scheduling import AsyncioScheduler, Scheduler, TimerHandle
from ..utils import Listeners, format_time
from .base import EmbeddedPlayer, PlayerEvents, PlayerFactory

logger = logging.getLogger(__name__)

# Embedded player error code -> (reason, message)
_ERROR_CODES = {
    2: (PlayerErrorReason.NOT_FOUND, "Invalid video ID"),
    5: (PlayerErrorReason.PLAYBACK_ENGINE_ERROR, "HTML5 player error"),
    100: (PlayerErrorReason.NOT_FOUND, "Video not found or private"),
    101: (PlayerErrorReason.EMBEDDING_DISALLOWED, "Embedding not allowed by video owner"),
    150: (PlayerErrorReason.EMBEDDING_DISALLOWED, "Embedding not allowed by video owner"),
}


def player_error_from_code(code: int) -> PlayerError:
    """
    Map an embedded player error code to a structured PlayerError.

    Example:
        >>> player_error_from_code(101).reason
        <PlayerErrorReason.EMBEDDING_DISALLOWED: 'embedding_disallowed'>
    """
    reason, message = _ERROR_CODES.get(code, (PlayerErrorReason.UNKNOWN, "Unknown error"))
    return PlayerError(reason, message, code=code)


class PlayerAdapter:
    """
    Wrapper around an embedded video player.

    Operations issued before the player is ready are no-ops, except load()
    which is retried until the player becomes ready or the retry budget in
    PlayerConfig runs out. Player errors are delivered to on_error
    listeners, never raised.

    Args:
        player_factory: Callable building the embedded player from the
            PlayerEvents callbacks it must invoke
        scheduler: Timer source for polling and load retries. Defaults to an
            AsyncioScheduler bound to the running loop, so without one the
            adapter must be built inside a running event loop when the
            player schedules timers on construction
        config: Polling and retry timing
    """

    def __init__(
        self,
        player_factory: PlayerFactory,
        scheduler: Optional[Scheduler] = None,
        config: Optional[PlayerConfig] = None,
    ):
        self.config = config or PlayerConfig()
        self.scheduler = scheduler or AsyncioScheduler()
        self.current_video_id: Optional[str] = None

        self._ready = False
        self._destroyed = False
        self._poll_timer: Optional[TimerHandle] = None
        self._pending_load: Optional[TimerHandle] = None

        self._ready_listeners = Listeners("ready")
        self._time_listeners = Listeners("time update")
        self._state_listeners = Listeners("state change")
        self._error_listeners = Listeners("error")
        self._destroy_listeners = Listeners("destroy")

        self._player: Optional[EmbeddedPlayer] = None
        self._player = player_factory(PlayerEvents(
            on_ready=self._handle_ready,
            on_state_change=self._handle_state_change,
            on_error=self._handle_error,
        ))

    @property
    def is_ready(self) -> bool:
        return self._ready and not self._destroyed

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    # Listener registration

    def on_ready(self, callback: Callable[[], None]) -> None:
        self._ready_listeners.add(callback)

    def on_time_update(self, callback: Callable[[float], None]) -> None:
        self._time_listeners.add(callback)

    def on_state_change(self, callback: Callable[[PlaybackState], None]) -> None:
        self._state_listeners.add(callback)

    def on_error(self, callback: Callable[[PlayerError], None]) -> None:
        self._error_listeners.add(callback)

    def on_destroy(self, callback: Callable[[], None]) -> None:
        """Register a callback run synchronously when destroy() is called."""
        self._destroy_listeners.add(callback)

    # Embedded player events

    def _handle_ready(self) -> None:
        if self._destroyed or self._ready:
            return
        self._ready = True
        logger.info("Embedded player ready")
        self._poll_timer = self.scheduler.call_every(self.config.poll_interval, self._poll)
        self._ready_listeners.emit()

    def _handle_state_change(self, code: int) -> None:
        if self._destroyed:
            return
        try:
            state = PlaybackState.from_code(code)
        except ValueError:
            logger.warning(f"Ignoring unknown player state code: {code}")
            return
        logger.info(f"Player state: {state.name.lower()}")
        self._state_listeners.emit(state)

    def _handle_error(self, code: int) -> None:
        if self._destroyed:
            return
        error = player_error_from_code(code)
        logger.error(f"Player error {code}: {error.message}")
        self._error_listeners.emit(error)

    def _poll(self) -> None:
        if not self.is_ready:
            return
        if self.state() is PlaybackState.PLAYING:
            self._time_listeners.emit(self.current_time())

    # Commands

    def load(self, video_id: str, start_seconds: float = 0.0) -> None:
        """
        Load a video, deferring until the player is ready.

        A newer load() replaces a deferred one. When the player does not
        become ready within load_max_attempts tries, a PlayerUnavailable
        error is sent to the error listeners.
        """
        if self._destroyed:
            logger.warning(f"Ignoring load of {video_id}: player destroyed")
            return
        if self._pending_load is not None:
            self._pending_load.cancel()
            self._pending_load = None
        self._attempt_load(video_id, start_seconds, 1)

    def _attempt_load(self, video_id: str, start_seconds: float, attempt: int) -> None:
        self._pending_load = None
        if self._destroyed:
            return

        if self.is_ready:
            self.current_video_id = video_id
            self._player.load_video_by_id(video_id, start_seconds)
            logger.info(f"Loading video: {video_id} at {format_time(start_seconds)}")
            return

        if attempt >= self.config.load_max_attempts:
            error = PlayerUnavailable(video_id, attempt)
            logger.error(str(error))
            self._error_listeners.emit(error)
            return

        logger.debug(f"Player not ready yet, deferring load of {video_id} (attempt {attempt})")
        self._pending_load = self.scheduler.call_later(
            self.config.load_retry_delay,
            lambda: self._attempt_load(video_id, start_seconds, attempt + 1),
        )

    def play(self) -> None:
        if self.is_ready:
            self._player.play_video()

    def pause(self) -> None:
        if self.is_ready:
            self._player.pause_video()

    def seek(self, time_seconds: float) -> None:
        if self.is_ready:
            self._player.seek_to(time_seconds, True)
            logger.info(f"Seeking to: {format_time(time_seconds)}")

    # Queries

    def current_time(self) -> float:
        return self._player.get_current_time() if self.is_ready else 0.0

    def duration(self) -> float:
        return self._player.get_duration() if self.is_ready else 0.0

    def state(self) -> PlaybackState:
        if not self.is_ready:
            return PlaybackState.UNSTARTED
        code = self._player.get_player_state()
        try:
            return PlaybackState.from_code(code)
        except ValueError:
            logger.debug(f"Unknown player state code {code}, reporting unstarted")
            return PlaybackState.UNSTARTED

    def destroy(self) -> None:
        """Stop polling, release the player and drop all listeners. Idempotent."""
        if self._destroyed:
            return
        self._destroyed = True

        if self._poll_timer is not None:
            self._poll_timer.cancel()
            self._poll_timer = None
        if self._pending_load is not None:
            self._pending_load.cancel()
            self._pending_load = None

        self._destroy_listeners.emit()

        player, self._player = self._player, None
        if player is not None:
            try:
                player.destroy()
            except Exception:
                logger.exception("Error while destroying embedded player")

        for listeners in (
            self._ready_listeners,
            self._time_listeners,
            self._state_listeners,
            self._error_listeners,
            self._destroy_listeners,
        ):
            listeners.clear()

        logger.info("Player destroyed")
