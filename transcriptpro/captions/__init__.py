"""
Captions package.

Provides the caption normalizer (timed text to CaptionEntry list) and the
caption to sentence transform used before a transcript is studied.
"""

from .parser import parse, parse_file
from .sentences import (
    SentenceProcessor,
    PunctuationSentenceProcessor,
    merge_into_sentences,
)

__all__ = [
    "parse",
    "parse_file",
    "SentenceProcessor",
    "PunctuationSentenceProcessor",
    "merge_into_sentences",
]
