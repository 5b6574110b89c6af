import pytest

from transcriptpro import ManualScheduler, PlayerAdapter, PlayerConfig, CaptionEntry
from transcriptpro.player import EmbeddedPlayer


class FakePlayer(EmbeddedPlayer):
    """Embedded player double whose clock and state are set by the test."""

    def __init__(self, events):
        self.events = events
        self.calls = []
        self.state = -1
        self.time = 0.0
        self.duration = 0.0
        self.destroy_count = 0

    def load_video_by_id(self, video_id, start_seconds=0.0):
        self.calls.append(("load", video_id, start_seconds))

    def play_video(self):
        self.calls.append(("play",))

    def pause_video(self):
        self.calls.append(("pause",))

    def seek_to(self, seconds, allow_seek_ahead):
        self.calls.append(("seek", seconds, allow_seek_ahead))

    def get_current_time(self):
        return self.time

    def get_duration(self):
        return self.duration

    def get_player_state(self):
        return self.state

    def destroy(self):
        self.destroy_count += 1

    def set_state(self, code):
        self.state = code
        self.events.on_state_change(code)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_adapter(scheduler):
    """Build a PlayerAdapter around a FakePlayer, ready unless told otherwise."""
    def make(ready=True, **config):
        players = []

        def factory(events):
            players.append(FakePlayer(events))
            return players[-1]

        adapter = PlayerAdapter(factory, scheduler, PlayerConfig(**config))
        player = players[0]
        if ready:
            player.events.on_ready()
        return adapter, player
    return make


@pytest.fixture
def entries():
    return [
        CaptionEntry(0.0, 5.0, "a"),
        CaptionEntry(5.0, 10.0, "b"),
        CaptionEntry(12.0, 15.0, "c"),
    ]
