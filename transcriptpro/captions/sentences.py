"""
Caption to sentence transform.

The enrichment step turns raw caption entries into "processed sentences".
Any object with a process(captions) method can do this (typically an AI
service); merge_into_sentences is the built-in deterministic transform.
"""

import logging
from typing import List, Sequence

from ..models import CaptionEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_SENTENCE_DURATION = 15.0
_SENTENCE_ENDINGS = ('.', '!', '?', '…')


class SentenceProcessor:
    """Interface for caption enrichment: captions in, sentences out."""

    def process(self, captions: Sequence[CaptionEntry]) -> List[CaptionEntry]:
        raise NotImplementedError


def merge_into_sentences(
    captions: Sequence[CaptionEntry],
    max_duration: float = DEFAULT_MAX_SENTENCE_DURATION,
) -> List[CaptionEntry]:
    """
    Join consecutive captions into sentence-sized entries.

    A sentence closes when its text ends with sentence punctuation or when
    adding the next caption would make it longer than max_duration seconds.

    Args:
        captions: Start-ordered caption entries
        max_duration: Maximum sentence duration in seconds

    Returns:
        Start-ordered sentence entries spanning first to last caption
    """
    sentences: List[CaptionEntry] = []
    group: List[CaptionEntry] = []

    def flush() -> None:
        if group:
            text = ' '.join(c.text for c in group if c.text).strip()
            sentences.append(CaptionEntry(group[0].start, group[-1].end, text))
            group.clear()

    for caption in captions:
        if group and caption.end - group[0].start > max_duration:
            flush()
        group.append(caption)
        if caption.text.rstrip().endswith(_SENTENCE_ENDINGS):
            flush()
    flush()

    logger.debug(f"Merged {len(captions)} captions into {len(sentences)} sentences")
    return sentences


class PunctuationSentenceProcessor(SentenceProcessor):
    """SentenceProcessor backed by merge_into_sentences."""

    def __init__(self, max_duration: float = DEFAULT_MAX_SENTENCE_DURATION):
        self.max_duration = max_duration

    def process(self, captions: Sequence[CaptionEntry]) -> List[CaptionEntry]:
        return merge_into_sentences(captions, max_duration=self.max_duration)
