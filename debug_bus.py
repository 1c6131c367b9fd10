"""Play a short scripted session headless and print every bus event it produces."""
import sys, os
ROOT = os.path.dirname(__file__); SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path: sys.path.insert(0, SRC)
import random

from chain_reaction.events.bus import (EventBus, EVENT_TICK, EVENT_CELL_CLICK, EVENT_CELL_CYCLED,
                                       EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE, EVENT_BOARD_CHANGED,
                                       EVENT_SCORE_CHANGED, EVENT_HIGH_SCORE_CHANGED, EVENT_ROUND_STARTED,
                                       EVENT_CELL_CLICK_REJECTED)
from chain_reaction.events.trace import EventTrace
from chain_reaction.world import create_world
from chain_reaction.systems.board import BoardSystem
from chain_reaction.systems.playback import CascadePlaybackSystem
from chain_reaction.systems.session_system import SessionSystem

seed = int(sys.argv[1]) if len(sys.argv) > 1 else 7
bus = EventBus(); world = create_world(bus, rng=random.Random(seed))
SessionSystem(world, bus)
board = BoardSystem(world, bus)
CascadePlaybackSystem(world, bus)
EventTrace(sink=print).attach(bus, [EVENT_ROUND_STARTED, EVENT_CELL_CYCLED, EVENT_CASCADE_STEP, EVENT_BOARD_CHANGED,
                                    EVENT_CASCADE_COMPLETE, EVENT_SCORE_CHANGED, EVENT_HIGH_SCORE_CHANGED,
                                    EVENT_CELL_CLICK_REJECTED])

clicker = random.Random(seed + 1)
for _ in range(10):
    bus.emit(EVENT_CELL_CLICK, index=clicker.randrange(len(board.board.cells)))
    for _ in range(60):
        bus.emit(EVENT_TICK, dt=1/60)
