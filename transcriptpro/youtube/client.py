"""
YouTube client for TranscriptPro.

Caption source and metadata collaborator built on yt-dlp: downloads a
video's subtitles as WebVTT, normalizes them into caption entries, lists the
available caption languages and retrieves video details.
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

import yt_dlp

from ..captions.parser import parse_file
from ..exceptions import CaptionExtractionError, CaptionsNotFound, InvalidVideoUrl, VideoUnavailable
from ..models import CaptionEntry, VideoDetails

logger = logging.getLogger(__name__)

_YOUTUBE_URL_PATTERN = re.compile(
    r'^(?:https?://)?(?:www\.|m\.)?'
    r'(?:youtube\.com/(?:watch\?(?:[^#\s]*&)?v=|embed/|shorts/|live/)|youtu\.be/)'
    r'([A-Za-z0-9_-]{11})'
)
_VIDEO_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]{11}$')

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


def is_youtube_url(url: str) -> bool:
    """
    Check if the provided URL is a valid YouTube video URL.

    Example:
        >>> is_youtube_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        True
        >>> is_youtube_url("https://example.com/video")
        False
    """
    return bool(_YOUTUBE_URL_PATTERN.match(url.strip()))


def extract_youtube_id(url: str) -> Optional[str]:
    """
    Extract the video ID from a YouTube URL or a bare 11-character ID.

    Example:
        >>> extract_youtube_id("https://youtu.be/dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
    """
    value = url.strip()
    if _VIDEO_ID_PATTERN.match(value):
        return value
    match = _YOUTUBE_URL_PATTERN.match(value)
    return match.group(1) if match else None


def resolve_video_id(url_or_id: str) -> str:
    """
    Like extract_youtube_id, but raising for unrecognised input.

    Raises:
        InvalidVideoUrl: If no video ID can be extracted
    """
    video_id = extract_youtube_id(url_or_id or "")
    if not video_id:
        raise InvalidVideoUrl(f"Invalid YouTube URL: {url_or_id!r}")
    return video_id


def _vtt_languages(tracks: Dict[str, List[Dict[str, Any]]]) -> List[str]:
    return [lang for lang, formats in tracks.items() if any(f.get('ext') == 'vtt' for f in formats)]


class YouTubeClient:
    """
    Client for YouTube captions and video metadata.

    Args:
        cookies_path: Optional path to cookies file for authentication
    """

    def __init__(self, cookies_path: Optional[str] = None):
        self.cookies_path = cookies_path

    def _get_ydl_opts(self, **overrides) -> Dict:
        """
        Get default yt-dlp options with optional overrides.
        """
        opts = {
            'quiet': True,
            'no_warnings': True,
            'skip_download': True,
        }

        if self.cookies_path:
            opts['cookiefile'] = self.cookies_path

        opts.update(overrides)
        return opts

    def _extract_info(self, video_id: str, download: bool = False, **overrides) -> Dict[str, Any]:
        with yt_dlp.YoutubeDL(self._get_ydl_opts(**overrides)) as ydl:
            return ydl.extract_info(WATCH_URL.format(video_id=video_id), download=download) or {}

    def fetch_captions(self, url_or_id: str, language: str = "en") -> List[CaptionEntry]:
        """
        Download and normalize a video's captions.

        Manual subtitles are preferred over automatic captions. Temporary
        subtitle files are removed before returning.

        Args:
            url_or_id: YouTube URL or video ID
            language: Caption language code

        Returns:
            Start-ordered caption entries

        Raises:
            InvalidVideoUrl: If url_or_id is not a YouTube video
            CaptionsNotFound: If no captions exist in the language
            CaptionExtractionError: If yt-dlp fails
            ParseError: If the downloaded captions are malformed
        """
        video_id = resolve_video_id(url_or_id)
        logger.info(f"Extracting '{language}' captions for video: {video_id}")

        with tempfile.TemporaryDirectory(prefix="transcriptpro-") as temp_dir:
            try:
                info = self._extract_info(
                    video_id,
                    download=True,
                    writesubtitles=True,
                    writeautomaticsub=True,
                    subtitlesformat='vtt',
                    subtitleslangs=[language],
                    outtmpl=os.path.join(temp_dir, f'{video_id}.%(ext)s'),
                )
            except yt_dlp.utils.DownloadError as e:
                logger.error(f"yt-dlp failed to extract captions for {video_id}: {e}")
                raise CaptionExtractionError(f"Failed to extract captions from YouTube: {e}") from e

            preferred = Path(temp_dir) / f"{video_id}.{language}.vtt"
            vtt_files = [preferred] if preferred.exists() else sorted(Path(temp_dir).glob(f"{video_id}.*.vtt"))
            if not vtt_files:
                available = sorted(set(
                    _vtt_languages(info.get('subtitles') or {})
                    + _vtt_languages(info.get('automatic_captions') or {})
                ))
                logger.warning(f"No '{language}' captions for {video_id}; available: {available}")
                raise CaptionsNotFound(video_id, language, available)

            automatic = language not in (info.get('subtitles') or {})
            captions = parse_file(str(vtt_files[0]), collapse_rolling=automatic)

        logger.info(f"Extracted {len(captions)} caption entries for {video_id}")
        return captions

    def list_caption_languages(self, url_or_id: str) -> List[str]:
        """
        List caption languages available in VTT format.

        Returns an empty list if the video cannot be inspected.
        """
        video_id = resolve_video_id(url_or_id)
        try:
            info = self._extract_info(video_id, writesubtitles=True, writeautomaticsub=True)
        except yt_dlp.utils.DownloadError as e:
            logger.warning(f"Could not list captions for {video_id}: {e}")
            return []

        languages = _vtt_languages(info.get('subtitles') or {})
        languages += [lang for lang in _vtt_languages(info.get('automatic_captions') or {}) if lang not in languages]
        return languages

    def get_video_details(self, url_or_id: str) -> VideoDetails:
        """
        Retrieve video metadata.

        Raises:
            InvalidVideoUrl: If url_or_id is not a YouTube video
            VideoUnavailable: If the video is not found or inaccessible
        """
        video_id = resolve_video_id(url_or_id)
        try:
            info = self._extract_info(video_id)
        except yt_dlp.utils.DownloadError as e:
            logger.error(f"Failed to fetch details for {video_id}: {e}")
            raise VideoUnavailable(f"Video not found or inaccessible: {video_id}") from e

        return VideoDetails(
            video_id=info.get('id') or video_id,
            title=info.get('title') or '',
            description=info.get('description') or '',
            duration=info.get('duration'),
            thumbnail=info.get('thumbnail'),
            channel_name=info.get('channel') or info.get('uploader'),
            channel_id=info.get('channel_id'),
            channel_url=info.get('channel_url'),
            view_count=info.get('view_count'),
            upload_date=info.get('upload_date'),
            categories=list(info.get('categories') or []),
            tags=list(info.get('tags') or []),
        )
