import json

import pytest
import requests

from transcriptpro import ApiClient, ApiConfig, ApiError, SessionProgress, TranscriptNotFound


class FakeResponse:

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.ok = status_code < 400
        self.content = json.dumps(body).encode() if body is not None else b""
        self.text = self.content.decode()
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("No JSON")
        return self._body


class FakeSession:

    def __init__(self, response=None, error=None):
        self.headers = {}
        self.requests = []
        self.response = response or FakeResponse()
        self.error = error

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response


def make_client(**session_kwargs):
    session = FakeSession(**session_kwargs)
    config = ApiConfig(base_url="https://api.example.com/api/", token="secret", timeout=5.0)
    return ApiClient(config, session=session), session


def test_auth_header_is_set():
    _, session = make_client()
    assert session.headers["Authorization"] == "Bearer secret"


def test_get_transcript():
    body = {"videoId": "vid1", "processedSentences": []}
    client, session = make_client(response=FakeResponse(200, body))

    assert client.get_transcript("vid1") == body
    method, url, kwargs = session.requests[0]
    assert (method, url) == ("GET", "https://api.example.com/api/transcripts/vid1")
    assert kwargs["timeout"] == 5.0


def test_get_transcript_not_found():
    client, _ = make_client(response=FakeResponse(404, {"error": "Transcript not found"}))
    with pytest.raises(TranscriptNotFound) as excinfo:
        client.get_transcript("vid1")
    assert excinfo.value.status_code == 404


def test_save_progress_posts_payload():
    client, session = make_client(response=FakeResponse(201, {"ok": True}))

    client.save_progress(SessionProgress("vid1", time_spent=12.0, words_saved=2))

    method, url, kwargs = session.requests[0]
    assert (method, url) == ("POST", "https://api.example.com/api/progress")
    assert kwargs["json"]["videoId"] == "vid1"
    assert kwargs["json"]["wordsSaved"] == 2


def test_save_transcript_empty_body():
    client, _ = make_client(response=FakeResponse(204))
    assert client.save_transcript({"videoId": "vid1"}) == {}


def test_server_error_raises_api_error():
    client, _ = make_client(response=FakeResponse(500, {"error": "Database unavailable"}))
    with pytest.raises(ApiError) as excinfo:
        client.save_transcript({"videoId": "vid1"})
    assert excinfo.value.status_code == 500
    assert "Database unavailable" in str(excinfo.value)


def test_connection_error_raises_api_error():
    client, _ = make_client(error=requests.ConnectionError("refused"))
    with pytest.raises(ApiError):
        client.get_transcript("vid1")


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("TRANSCRIPTPRO_API_URL", "https://prod.example.com/api")
    monkeypatch.setenv("TRANSCRIPTPRO_API_TOKEN", "t0k3n")
    monkeypatch.setenv("TRANSCRIPTPRO_API_TIMEOUT", "12.5")

    config = ApiConfig.from_env()

    assert config.base_url == "https://prod.example.com/api"
    assert config.token == "t0k3n"
    assert config.timeout == 12.5


def test_config_from_env_defaults(monkeypatch):
    for name in ("TRANSCRIPTPRO_API_URL", "TRANSCRIPTPRO_API_TOKEN", "TRANSCRIPTPRO_API_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    config = ApiConfig.from_env()
    assert config == ApiConfig()
