"""
Caption normalizer.

Parses line-oriented timed text (WebVTT as produced by YouTube and yt-dlp)
into an ordered list of CaptionEntry objects. Entries keep the order of the
timestamp markers in the source; nothing is re-sorted.
"""

import logging
import re
from typing import List, Optional, Tuple

from ..exceptions import ParseError
from ..models import CaptionEntry
from ..utils import timestamp_to_seconds

logger = logging.getLogger(__name__)

MARKER = '-->'

# Single header lines skipped wherever they appear
_HEADER_PREFIXES = ('WEBVTT', 'Kind:', 'Language:')
# Blocks skipped up to the next blank line
_BLOCK_PREFIXES = ('NOTE', 'STYLE', 'REGION')

# Inline karaoke timing and styling tags, e.g. <00:00:01.200><c> word</c>
_TAG_PATTERN = re.compile(r'<[^>]*>')
_SPACE_PATTERN = re.compile(r'\s+')


class _PendingEntry:

    def __init__(self, start: float, end: float, line_number: int):
        self.start = start
        self.end = end
        self.line_number = line_number
        self.lines: List[str] = []


def _parse_marker(line: str, line_number: int) -> Tuple[float, float]:
    """
    Parse a "start --> end [settings]" marker line into seconds.

    Raises:
        ParseError: If either timestamp is malformed
    """
    left, _, right = line.partition(MARKER)
    right_fields = right.split()
    if not left.strip() or not right_fields:
        raise ParseError(f"Incomplete timestamp marker: {line!r}", line_number)

    try:
        start = timestamp_to_seconds(left.strip())
        end = timestamp_to_seconds(right_fields[0])
    except ParseError as e:
        raise ParseError(str(e), line_number) from e
    return start, end


def _clean_text(line: str) -> str:
    return _SPACE_PATTERN.sub(' ', _TAG_PATTERN.sub('', line)).strip()


def _is_marker(line: str) -> bool:
    return MARKER in line


def parse(raw_text: Optional[str], collapse_rolling: bool = False) -> List[CaptionEntry]:
    """
    Parse timed-text content into caption entries.

    A marker line starts a new entry and closes the previous one, which is
    kept only if it collected text. Text lines of an entry are joined with
    single spaces.

    Args:
        raw_text: Subtitle file content
        collapse_rolling: Drop text lines repeating the previous entry's last
            line, as in YouTube auto-generated captions where every cue
            re-displays the line before it

    Returns:
        List of CaptionEntry in marker order. Empty for empty input or input
        without any marker.

    Raises:
        ParseError: If a marker line contains a malformed timestamp

    Example:
        >>> parse("WEBVTT\\n\\n00:00:01.000 --> 00:00:03.000\\nHello world")
        [CaptionEntry(start=1.0, end=3.0, text='Hello world')]
    """
    if not raw_text or not raw_text.strip():
        return []

    lines = raw_text.splitlines()
    entries: List[CaptionEntry] = []
    current: Optional[_PendingEntry] = None
    previous_line: Optional[str] = None
    previous_blank = True
    in_block = False

    def close(pending: Optional[_PendingEntry]) -> None:
        nonlocal previous_line
        if pending is None or not pending.lines:
            return
        if pending.end <= pending.start:
            logger.warning(
                f"Dropping zero-length caption at line {pending.line_number} "
                f"({pending.start:.3f}s --> {pending.end:.3f}s)"
            )
            return
        entries.append(CaptionEntry(pending.start, pending.end, ' '.join(pending.lines)))
        previous_line = pending.lines[-1]

    for index, line in enumerate(lines):
        stripped = line.strip()
        after_blank = previous_blank
        previous_blank = not stripped

        if not stripped:
            in_block = False
            continue

        if _is_marker(stripped):
            in_block = False
            close(current)
            start, end = _parse_marker(stripped, index + 1)
            current = _PendingEntry(start, end, index + 1)
            continue

        if in_block:
            continue
        if stripped.startswith(_BLOCK_PREFIXES):
            in_block = True
            continue
        if stripped.startswith(_HEADER_PREFIXES):
            continue

        # Cue identifier: starts a block and sits directly above its marker
        if after_blank and index + 1 < len(lines) and _is_marker(lines[index + 1]):
            continue

        if current is None:
            continue

        text = _clean_text(stripped)
        if not text:
            continue
        if collapse_rolling and not current.lines and text == previous_line:
            continue
        current.lines.append(text)

    close(current)

    logger.debug(f"Parsed {len(entries)} caption entries from {len(lines)} lines")
    return entries


def parse_file(path: str, encoding: str = 'utf-8', collapse_rolling: bool = False) -> List[CaptionEntry]:
    """
    Read and parse a subtitle file.

    A missing or unreadable file yields an empty list (logged as a warning).
    A readable file with a malformed timestamp still raises ParseError.

    Args:
        path: Path to the subtitle file
        encoding: File encoding
        collapse_rolling: See parse()

    Returns:
        List of CaptionEntry
    """
    try:
        with open(path, 'r', encoding=encoding) as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read caption file {path}: {e}")
        return []

    return parse(content, collapse_rolling=collapse_rolling)
