"""
Video study session.

Ties the pieces together for one loaded video: resolves the video, obtains
its transcript (stored, or captions run through the sentence processor),
hands the entries to the Sync Engine and records progress when playback
ends.
"""

import logging
from typing import Any, Dict, List, Optional

from .captions.sentences import PunctuationSentenceProcessor, SentenceProcessor
from .exceptions import TranscriptNotFound
from .models import CaptionEntry, SessionProgress, VideoDetails, VocabularyItem
from .player.adapter import PlayerAdapter
from .progress import ProgressRecorder
from .sync import SyncEngine
from .youtube.client import WATCH_URL, resolve_video_id

logger = logging.getLogger(__name__)


def _to_entries(video_id: str, sentences: List[Dict[str, Any]]) -> List[CaptionEntry]:
    entries = []
    for position, sentence in enumerate(sentences):
        try:
            entries.append(CaptionEntry.from_dict(sentence))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping invalid sentence {position} of video {video_id}: {e}")
    return entries


class StudySession:
    """
    One learner's session around the embedded player.

    Args:
        adapter: Player Adapter owning the embedded player
        caption_source: Object with fetch_captions(video_id, language) and
            get_video_details(video_id), e.g. YouTubeClient
        store: Optional persistence with get_transcript, save_transcript and
            save_progress, e.g. ApiClient
        processor: Caption to sentence transform
        language: Caption language to request
    """

    def __init__(
        self,
        adapter: PlayerAdapter,
        caption_source: Any,
        store: Optional[Any] = None,
        processor: Optional[SentenceProcessor] = None,
        language: str = "en",
    ):
        self.adapter = adapter
        self.caption_source = caption_source
        self.store = store
        self.processor = processor or PunctuationSentenceProcessor()
        self.language = language

        self.video_id: Optional[str] = None
        self.details: Optional[VideoDetails] = None
        self.transcript: Optional[Dict[str, Any]] = None
        self.vocabulary: List[VocabularyItem] = []

        self.engine = SyncEngine(adapter)
        self.recorder = ProgressRecorder(
            adapter,
            persist=self._persist_progress,
            vocabulary=lambda: self.vocabulary,
            video_id=lambda: self.video_id,
        )

    @property
    def entries(self) -> List[CaptionEntry]:
        return self.engine.entries

    def load_video(self, url_or_id: str, start_seconds: float = 0.0) -> List[CaptionEntry]:
        """
        Load a video and its transcript.

        Details and transcript are fetched before anything is replaced, so
        a failure leaves the previously loaded video and transcript intact.

        Returns:
            The transcript entries now loaded into the Sync Engine

        Raises:
            InvalidVideoUrl, VideoUnavailable, CaptionExtractionError,
            ParseError, ApiError: Propagated from the collaborators
        """
        video_id = resolve_video_id(url_or_id)
        logger.info(f"Loading video {video_id}")

        details = self.caption_source.get_video_details(video_id)
        transcript = self._load_or_create_transcript(video_id, details)
        entries = _to_entries(video_id, transcript.get("processedSentences") or [])

        self.video_id = video_id
        self.details = details
        self.transcript = transcript
        self.engine.load_entries(entries)
        self.adapter.load(video_id, start_seconds)

        logger.info(f"Video {video_id} loaded with {len(entries)} sentences")
        return entries

    def _load_or_create_transcript(self, video_id: str, details: VideoDetails) -> Dict[str, Any]:
        if self.store is not None:
            try:
                return self.store.get_transcript(video_id)
            except TranscriptNotFound:
                logger.info(f"No stored transcript for {video_id}, creating one")
        return self._create_transcript(video_id, details)

    def _create_transcript(self, video_id: str, details: VideoDetails) -> Dict[str, Any]:
        captions = self.caption_source.fetch_captions(video_id, self.language)
        sentences = self.processor.process(captions)

        payload = {
            "videoId": video_id,
            "videoUrl": WATCH_URL.format(video_id=video_id),
            "title": details.title,
            "duration": details.duration,
            "thumbnail": details.thumbnail,
            "channel": details.to_dict()["channel"],
            "originalTranscript": [c.to_dict() for c in captions],
            "processedSentences": [s.to_dict() for s in sentences],
        }
        if self.store is None:
            return payload

        saved = self.store.save_transcript(payload)
        return saved if saved.get("processedSentences") is not None else payload

    def seek_to_entry(self, index: int) -> None:
        self.engine.seek_to_entry(index)

    def add_vocabulary(self, text: str, item_type: str = "word") -> VocabularyItem:
        """Save a word or phrase from the current video."""
        if item_type not in ("word", "phrase"):
            raise ValueError(f"Vocabulary type must be 'word' or 'phrase', got {item_type!r}")
        for item in self.vocabulary:
            if item.text == text and item.type == item_type:
                if self.video_id and not item.seen_in(self.video_id):
                    item.video_ids.append(self.video_id)
                return item
        item = VocabularyItem(text, item_type, [self.video_id] if self.video_id else [])
        self.vocabulary.append(item)
        return item

    def _persist_progress(self, progress: SessionProgress) -> None:
        if self.store is None:
            logger.debug(f"No store configured, progress for {progress.video_id} not persisted")
            return
        self.store.save_progress(progress)

    def destroy(self) -> None:
        """Tear down the player and forget the loaded video. Idempotent."""
        self.adapter.destroy()
        self.engine.load_entries([])
        self.video_id = None
        self.details = None
        self.transcript = None
