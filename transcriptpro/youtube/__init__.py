"""
YouTube module for TranscriptPro.

Provides caption extraction and video metadata retrieval.
"""

from .client import (
    YouTubeClient,
    is_youtube_url,
    extract_youtube_id,
    resolve_video_id,
)

__all__ = [
    'YouTubeClient',
    'is_youtube_url',
    'extract_youtube_id',
    'resolve_video_id',
]
