"""
Session progress recording.

Listens for the Ended state and hands completion statistics for the active
video to a persistence callable. Persistence is fire-and-forget: failures
are logged and not retried here.
"""

import logging
from typing import Callable, Iterable, Optional

from .models import PlaybackState, SessionProgress, VocabularyItem
from .player.adapter import PlayerAdapter

logger = logging.getLogger(__name__)


def count_saved(vocabulary: Iterable[VocabularyItem], video_id: str, item_type: str) -> int:
    """Count vocabulary items of a type saved from a video."""
    return sum(1 for item in vocabulary if item.type == item_type and item.seen_in(video_id))


class ProgressRecorder:
    """
    Records completion statistics when playback ends.

    Args:
        adapter: Player Adapter to watch
        persist: Called with a SessionProgress on completion
        vocabulary: Returns the current vocabulary collection
        video_id: Returns the active video ID, or None without a session
    """

    def __init__(
        self,
        adapter: PlayerAdapter,
        persist: Callable[[SessionProgress], None],
        vocabulary: Callable[[], Iterable[VocabularyItem]],
        video_id: Callable[[], Optional[str]],
    ):
        self.adapter = adapter
        self.persist = persist
        self.vocabulary = vocabulary
        self.video_id = video_id
        self.last_recorded: Optional[SessionProgress] = None
        adapter.on_state_change(self._handle_state_change)

    def _handle_state_change(self, state: PlaybackState) -> None:
        if state is PlaybackState.ENDED:
            self.record_completion()

    def build_progress(self, video_id: str) -> SessionProgress:
        items = list(self.vocabulary())
        return SessionProgress(
            video_id=video_id,
            completed=True,
            completion_percentage=100,
            time_spent=self.adapter.duration(),
            words_saved=count_saved(items, video_id, "word"),
            phrases_saved=count_saved(items, video_id, "phrase"),
        )

    def record_completion(self) -> Optional[SessionProgress]:
        """Build and persist completion statistics for the active video."""
        video_id = self.video_id()
        if not video_id:
            logger.debug("Video ended without an active session, nothing to record")
            return None

        progress = self.build_progress(video_id)
        try:
            self.persist(progress)
        except Exception as e:
            logger.error(f"Failed to save completion stats for {video_id}: {e}", exc_info=True)
            return None

        self.last_recorded = progress
        logger.info(
            f"Completion stats saved for {video_id}: "
            f"{progress.words_saved} words, {progress.phrases_saved} phrases"
        )
        return progress
