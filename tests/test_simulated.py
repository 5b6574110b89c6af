import pytest

from transcriptpro import (
    ManualScheduler,
    PlaybackState,
    PlayerAdapter,
    PlayerErrorReason,
    SimulatedPlayer,
    SyncEngine,
)

VIDEO_ID = "abcdefghijk"


@pytest.fixture
def setup():
    scheduler = ManualScheduler()
    players = []

    def factory(events):
        players.append(SimulatedPlayer(events, scheduler, {VIDEO_ID: 10.0}))
        return players[-1]

    adapter = PlayerAdapter(factory, scheduler)
    scheduler.advance(0.0)
    return scheduler, adapter, players[0]


def test_buffering_freezes_clock_and_keeps_syncing(setup, entries):
    scheduler, adapter, player = setup
    engine = SyncEngine(adapter, entries)
    buffering = []
    engine.on_buffering(lambda: buffering.append(adapter.current_time()))

    adapter.load(VIDEO_ID)
    scheduler.advance(3.0)
    player.buffer()
    scheduler.advance(5.0)

    assert buffering == [pytest.approx(3.0)]
    assert adapter.state() is PlaybackState.BUFFERING
    assert adapter.current_time() == pytest.approx(3.0)
    assert engine.is_syncing
    assert engine.current_index == 0

    player.resume()
    scheduler.advance(3.0)
    assert engine.current_index == 1


def test_pause_and_play_resume_position(setup):
    scheduler, adapter, _ = setup
    adapter.load(VIDEO_ID, 2.0)
    scheduler.advance(1.0)
    adapter.pause()
    scheduler.advance(4.0)
    assert adapter.current_time() == pytest.approx(3.0)

    adapter.play()
    scheduler.advance(1.0)
    assert adapter.current_time() == pytest.approx(4.0)


def test_unknown_video_reports_not_found(setup):
    scheduler, adapter, _ = setup
    errors = []
    adapter.on_error(errors.append)

    adapter.load("zzzzzzzzzzz")
    scheduler.advance(0.0)

    assert [e.reason for e in errors] == [PlayerErrorReason.NOT_FOUND]
    assert adapter.duration() == 0.0


def test_injected_failure_is_mapped(setup):
    _, adapter, player = setup
    errors = []
    adapter.on_error(errors.append)

    player.fail(101)

    assert errors[0].reason is PlayerErrorReason.EMBEDDING_DISALLOWED


def test_play_after_end_restarts(setup):
    scheduler, adapter, _ = setup
    states = []
    adapter.on_state_change(states.append)

    adapter.load(VIDEO_ID, 9.0)
    scheduler.advance(2.0)
    assert states[-1] is PlaybackState.ENDED

    adapter.play()
    assert adapter.current_time() == 0.0
    assert states[-1] is PlaybackState.PLAYING


def test_never_ready_player_gives_up():
    scheduler = ManualScheduler()
    adapter = PlayerAdapter(SimulatedPlayer.factory(scheduler, {VIDEO_ID: 10.0}, ready_delay=None), scheduler)
    errors = []
    adapter.on_error(errors.append)

    adapter.load(VIDEO_ID)
    scheduler.advance(20.0)

    assert len(errors) == 1
    assert errors[0].reason is PlayerErrorReason.UNAVAILABLE
