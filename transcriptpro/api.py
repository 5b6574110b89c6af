"""
REST client for the TranscriptPro backend.

Persistence collaborator for transcripts and learning progress. The backend
itself (routes, storage, e-mail) lives elsewhere; this module only speaks
its JSON API.
"""

import logging
from typing import Any, Dict, Optional

import requests

from .exceptions import ApiError, TranscriptNotFound
from .models import ApiConfig, SessionProgress

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Client for the TranscriptPro REST API.

    Args:
        config: Base URL, bearer token and timeout
        session: Optional requests session to reuse
    """

    def __init__(self, config: Optional[ApiConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or ApiConfig()
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if self.config.token:
            self.session.headers.update({"Authorization": f"Bearer {self.config.token}"})

    def _url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = self._url(path)
        try:
            response = self.session.request(method, url, timeout=self.config.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(f"Could not reach TranscriptPro API: {e}") from e

        if response.status_code == 404:
            raise TranscriptNotFound(f"Not found: {path}", status_code=404)
        if not response.ok:
            message = response.text
            try:
                message = response.json().get("error", message)
            except ValueError:
                pass
            logger.error(f"{method} {url} returned {response.status_code}: {message}")
            raise ApiError(f"API error {response.status_code}: {message}", status_code=response.status_code)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON from {url}") from e

    def get_transcript(self, video_id: str) -> Dict[str, Any]:
        """
        Fetch the stored transcript for a video.

        Raises:
            TranscriptNotFound: If no transcript has been saved yet
            ApiError: On any other failure
        """
        return self._request("GET", f"transcripts/{video_id}")

    def save_transcript(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new transcript and return the saved document."""
        logger.info(f"Saving transcript for {payload.get('videoId')}")
        return self._request("POST", "transcripts", json=payload)

    def save_progress(self, progress: SessionProgress) -> Dict[str, Any]:
        """Store completion statistics for a video."""
        return self._request("POST", "progress", json=progress.to_dict())
