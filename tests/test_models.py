import pytest

from transcriptpro import CaptionEntry, PlaybackProgress, PlaybackState, PlayerConfig


def test_caption_entry_duration_and_contains():
    entry = CaptionEntry(5.0, 10.0, "b")
    assert entry.duration == 5.0
    assert entry.contains(5.0)
    assert entry.contains(9.99)
    assert not entry.contains(10.0)
    assert not entry.contains(4.99)


@pytest.mark.parametrize("start, end", [(-1.0, 2.0), (3.0, 3.0), (4.0, 2.0)])
def test_caption_entry_rejects_invalid_ranges(start, end):
    with pytest.raises(ValueError):
        CaptionEntry(start, end, "x")


def test_caption_entry_is_immutable():
    entry = CaptionEntry(0.0, 1.0, "x")
    with pytest.raises(AttributeError):
        entry.text = "y"


def test_caption_entry_from_dict():
    assert CaptionEntry.from_dict({"start": 1, "end": 2, "text": "a"}) == CaptionEntry(1.0, 2.0, "a")
    assert CaptionEntry.from_dict({"start": 1, "duration": 2.5}) == CaptionEntry(1.0, 3.5, "")


def test_playback_state_from_code():
    assert PlaybackState.from_code(1) is PlaybackState.PLAYING
    assert PlaybackState.from_code(5) is PlaybackState.CUED
    with pytest.raises(ValueError):
        PlaybackState.from_code(4)


def test_playback_progress_percent():
    assert PlaybackProgress(30.0, 120.0).percent == 25.0
    assert PlaybackProgress(3.0, 0.0).percent == 0.0


def test_player_config_validation():
    with pytest.raises(ValueError):
        PlayerConfig(poll_interval=0)
    with pytest.raises(ValueError):
        PlayerConfig(load_max_attempts=0)
