"""
Transcript sync example.

Runs the Player Adapter and Sync Engine against a simulated player on an
asyncio event loop and prints the highlighted sentence as playback moves.
"""

import asyncio
import logging

from transcriptpro import (
    AsyncioScheduler,
    CaptionEntry,
    PlaybackState,
    PlayerAdapter,
    SimulatedPlayer,
    SyncEngine,
    format_time,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

SENTENCES = [
    CaptionEntry(0.0, 1.5, "Welcome to today's lesson."),
    CaptionEntry(1.5, 3.0, "We will practise phrasal verbs."),
    CaptionEntry(3.5, 5.0, "Let's look at 'break the ice'."),
]

async def main():
    scheduler = AsyncioScheduler()
    adapter = PlayerAdapter(SimulatedPlayer.factory(scheduler, {"eSPJsnYY6_4": 5.5}, ready_delay=0.3), scheduler)
    engine = SyncEngine(adapter, SENTENCES)
    finished = asyncio.Event()

    engine.on_selection_changed(lambda index: print(f">> {SENTENCES[index].text}" if index is not None else ">> (none)"))
    adapter.on_state_change(lambda state: finished.set() if state is PlaybackState.ENDED else None)
    adapter.on_error(lambda error: print(f"Player error: {error.message}"))

    # Deferred until the simulated player reports ready
    adapter.load("eSPJsnYY6_4")

    await asyncio.sleep(2.0)
    print(f"Jumping back to the first sentence at {format_time(adapter.current_time())}")
    engine.seek_to_entry(0)

    await finished.wait()
    adapter.destroy()

if __name__ == "__main__":
    asyncio.run(main())
