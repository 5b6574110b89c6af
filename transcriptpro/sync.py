"""
Transcript synchronization engine.

Maps the Player Adapter's playback clock onto the loaded transcript entries
and tells the UI layer which entry is current. The engine is Idle until the
player reports Playing, then Syncing until it reports Paused or Ended, or
the adapter is destroyed. Time samples that arrive outside Syncing are
ignored, so a stale sample delivered after a pause is harmless.

Buffering does not stop syncing: the highlight stays where it is while the
player stalls and resumes with the next time sample.
"""

import logging
from typing import Callable, List, Optional, Sequence

from .exceptions import IndexOutOfRange, PlayerError
from .models import CaptionEntry, PlaybackProgress, PlaybackState, SyncCursor, SyncState
from .player.adapter import PlayerAdapter
from .utils import Listeners

logger = logging.getLogger(__name__)


def find_entry_index(entries: Sequence[CaptionEntry], time: float) -> Optional[int]:
    """
    Return the index of the entry containing time, or None.

    Entries are start-ordered. When ranges overlap, the earliest-start
    match wins.

    Example:
        >>> entries = [CaptionEntry(0, 5, "a"), CaptionEntry(5, 10, "b")]
        >>> find_entry_index(entries, 7)
        1
    """
    for index, entry in enumerate(entries):
        if entry.start > time:
            break
        if entry.contains(time):
            return index
    return None


class SyncEngine:
    """
    Reactive coordinator between the Player Adapter and the transcript view.

    Args:
        adapter: Player Adapter providing time samples and state changes
        entries: Initial start-ordered transcript entries
    """

    def __init__(self, adapter: PlayerAdapter, entries: Sequence[CaptionEntry] = ()):
        self.adapter = adapter
        self.cursor = SyncCursor()
        self._entries: List[CaptionEntry] = list(entries)

        self._selection_listeners = Listeners("selection changed")
        self._progress_listeners = Listeners("progress")
        self._buffering_listeners = Listeners("buffering")
        self._error_listeners = Listeners("sync error")

        adapter.on_time_update(self._handle_time_update)
        adapter.on_state_change(self._handle_state_change)
        adapter.on_error(self._handle_error)
        adapter.on_destroy(self._handle_destroy)

    @property
    def entries(self) -> List[CaptionEntry]:
        return list(self._entries)

    @property
    def state(self) -> SyncState:
        return SyncState.SYNCING if self.cursor.is_syncing else SyncState.IDLE

    @property
    def is_syncing(self) -> bool:
        return self.cursor.is_syncing

    @property
    def current_index(self) -> Optional[int]:
        return self.cursor.current_index

    # UI-facing notifications

    def on_selection_changed(self, callback: Callable[[Optional[int]], None]) -> None:
        self._selection_listeners.add(callback)

    def on_progress(self, callback: Callable[[PlaybackProgress], None]) -> None:
        self._progress_listeners.add(callback)

    def on_buffering(self, callback: Callable[[], None]) -> None:
        self._buffering_listeners.add(callback)

    def on_error(self, callback: Callable[[PlayerError], None]) -> None:
        self._error_listeners.add(callback)

    # Transcript

    def load_entries(self, entries: Sequence[CaptionEntry]) -> None:
        """Replace the transcript and reset the cursor in one step."""
        self._entries = list(entries)
        previous = self.cursor.current_index
        self.cursor.current_index = None
        logger.info(f"Loaded {len(self._entries)} transcript entries")
        if previous is not None:
            self._selection_listeners.emit(None)

    def resolve_current_entry(self, time: float) -> Optional[int]:
        """
        Update the cursor for a playback time and return the current index.

        In a gap between entries the last resolved index is kept.
        """
        index = find_entry_index(self._entries, time)
        if index is not None and index != self.cursor.current_index:
            self.cursor.current_index = index
            self._selection_listeners.emit(index)
        return self.cursor.current_index

    def seek_to_entry(self, index: int) -> None:
        """
        Jump playback to an entry and select it without waiting for a sample.

        Raises:
            IndexOutOfRange: If index is not a valid entry index
        """
        if not 0 <= index < len(self._entries):
            raise IndexOutOfRange(index, len(self._entries))
        self.adapter.seek(self._entries[index].start)
        self.cursor.current_index = index
        self._selection_listeners.emit(index)

    # Sync control

    def start(self) -> None:
        if self.cursor.is_syncing or self.adapter.is_destroyed:
            return
        logger.info("Starting transcript sync")
        self.cursor.is_syncing = True

    def stop(self) -> None:
        if not self.cursor.is_syncing:
            return
        logger.info("Stopping transcript sync")
        self.cursor.is_syncing = False

    # Adapter notifications

    def _handle_time_update(self, current_time: float) -> None:
        if not self.cursor.is_syncing:
            return
        self._progress_listeners.emit(PlaybackProgress(current_time, self.adapter.duration()))
        self.resolve_current_entry(current_time)

    def _handle_state_change(self, state: PlaybackState) -> None:
        if state is PlaybackState.PLAYING:
            self.start()
        elif state in (PlaybackState.PAUSED, PlaybackState.ENDED):
            self.stop()
        elif state is PlaybackState.BUFFERING:
            logger.debug("Video buffering")
            self._buffering_listeners.emit()

    def _handle_error(self, error: PlayerError) -> None:
        self._error_listeners.emit(error)

    def _handle_destroy(self) -> None:
        self.stop()
