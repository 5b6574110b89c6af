import os

import pytest
import yt_dlp

from transcriptpro import CaptionEntry, CaptionExtractionError, CaptionsNotFound, InvalidVideoUrl, VideoUnavailable
from transcriptpro.youtube.client import YouTubeClient, extract_youtube_id, is_youtube_url, resolve_video_id

VIDEO_ID = "dQw4w9WgXcQ"

VTT = """WEBVTT
Kind: captions
Language: en

00:00:01.000 --> 00:00:03.000
Never gonna give you up

00:00:03.000 --> 00:00:05.500
Never gonna let you down
"""


class FakeYoutubeDL:
    """Stands in for yt_dlp.YoutubeDL, writing subtitle files like the real one."""

    instances = []
    info = {}
    write = {}
    error = None

    def __init__(self, opts):
        self.opts = opts
        FakeYoutubeDL.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def extract_info(self, url, download=False):
        self.url = url
        if FakeYoutubeDL.error:
            raise yt_dlp.utils.DownloadError(FakeYoutubeDL.error)
        if download:
            for lang, content in FakeYoutubeDL.write.items():
                path = self.opts["outtmpl"].replace("%(ext)s", f"{lang}.vtt")
                with open(path, "w", encoding="utf-8") as f:
                    f.write(content)
        return FakeYoutubeDL.info


@pytest.fixture
def fake_ydl(monkeypatch):
    FakeYoutubeDL.instances = []
    FakeYoutubeDL.info = {}
    FakeYoutubeDL.write = {}
    FakeYoutubeDL.error = None
    monkeypatch.setattr(yt_dlp, "YoutubeDL", FakeYoutubeDL)
    return FakeYoutubeDL


@pytest.mark.parametrize("url", [
    f"https://www.youtube.com/watch?v={VIDEO_ID}",
    f"https://youtube.com/watch?feature=share&v={VIDEO_ID}",
    f"youtube.com/watch?v={VIDEO_ID}&t=42s",
    f"https://youtu.be/{VIDEO_ID}",
    f"https://www.youtube.com/embed/{VIDEO_ID}",
    f"https://m.youtube.com/shorts/{VIDEO_ID}",
    VIDEO_ID,
])
def test_extract_youtube_id(url):
    assert extract_youtube_id(url) == VIDEO_ID


def test_is_youtube_url():
    assert is_youtube_url(f"https://www.youtube.com/watch?v={VIDEO_ID}")
    assert not is_youtube_url("https://example.com/video")
    assert not is_youtube_url(VIDEO_ID)


def test_resolve_video_id_rejects_garbage():
    with pytest.raises(InvalidVideoUrl):
        resolve_video_id("https://example.com/watch?v=nope")
    with pytest.raises(InvalidVideoUrl):
        resolve_video_id("")


def test_fetch_captions(fake_ydl):
    fake_ydl.info = {"subtitles": {"en": [{"ext": "vtt"}]}}
    fake_ydl.write = {"en": VTT}

    captions = YouTubeClient().fetch_captions(f"https://youtu.be/{VIDEO_ID}")

    assert captions == [
        CaptionEntry(1.0, 3.0, "Never gonna give you up"),
        CaptionEntry(3.0, 5.5, "Never gonna let you down"),
    ]
    opts = fake_ydl.instances[0].opts
    assert opts["skip_download"] is True
    assert opts["subtitleslangs"] == ["en"]
    assert opts["subtitlesformat"] == "vtt"
    # Temporary subtitle files are cleaned up
    assert not os.path.exists(os.path.dirname(opts["outtmpl"]))


def test_fetch_captions_uses_cookies(fake_ydl):
    fake_ydl.write = {"en": VTT}
    YouTubeClient(cookies_path="cookies.txt").fetch_captions(VIDEO_ID)
    assert fake_ydl.instances[0].opts["cookiefile"] == "cookies.txt"


def test_fetch_captions_not_found_lists_available(fake_ydl):
    fake_ydl.info = {
        "subtitles": {},
        "automatic_captions": {"de": [{"ext": "vtt"}], "fr": [{"ext": "json3"}]},
    }

    with pytest.raises(CaptionsNotFound) as excinfo:
        YouTubeClient().fetch_captions(VIDEO_ID, language="en")

    assert excinfo.value.available == ["de"]
    assert excinfo.value.video_id == VIDEO_ID


def test_fetch_captions_download_error(fake_ydl):
    fake_ydl.error = "Video unavailable"
    with pytest.raises(CaptionExtractionError):
        YouTubeClient().fetch_captions(VIDEO_ID)


def test_list_caption_languages(fake_ydl):
    fake_ydl.info = {
        "subtitles": {"en": [{"ext": "vtt"}]},
        "automatic_captions": {"en": [{"ext": "vtt"}], "es": [{"ext": "vtt"}], "ja": [{"ext": "srv3"}]},
    }
    assert YouTubeClient().list_caption_languages(VIDEO_ID) == ["en", "es"]


def test_list_caption_languages_on_error(fake_ydl):
    fake_ydl.error = "boom"
    assert YouTubeClient().list_caption_languages(VIDEO_ID) == []


def test_get_video_details(fake_ydl):
    fake_ydl.info = {
        "id": VIDEO_ID,
        "title": "Never Gonna Give You Up",
        "description": "Official video",
        "duration": 213,
        "thumbnail": "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
        "channel": "Rick Astley",
        "channel_id": "UCuAXFkgsw1L7xaCfnd5JJOw",
        "channel_url": "https://www.youtube.com/channel/UCuAXFkgsw1L7xaCfnd5JJOw",
        "view_count": 1000,
        "upload_date": "20091025",
        "categories": ["Music"],
        "tags": ["rick astley"],
    }

    details = YouTubeClient().get_video_details(VIDEO_ID)

    assert details.title == "Never Gonna Give You Up"
    assert details.duration == 213
    assert details.channel_name == "Rick Astley"
    assert details.to_dict()["channel"]["id"] == "UCuAXFkgsw1L7xaCfnd5JJOw"
    assert fake_ydl.instances[0].url == f"https://www.youtube.com/watch?v={VIDEO_ID}"


def test_get_video_details_unavailable(fake_ydl):
    fake_ydl.error = "Private video"
    with pytest.raises(VideoUnavailable):
        YouTubeClient().get_video_details(VIDEO_ID)
