"""Game state resource describing the active round phase."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """Round phases that decide whether clicks and the timer are live."""
    READY = auto()    # board shown, timer not started yet
    RUNNING = auto()
    TIME_UP = auto()


@dataclass
class GameState:
    """Singleton component storing the current round phase."""
    mode: GameMode = GameMode.READY
