from __future__ import annotations

from typing import Iterable, List, Sequence

from chain_reaction.constants import COLOR_POOL
from chain_reaction.events.bus import EVENT_TICK, EventBus

P = list(COLOR_POOL)


class ScriptedRandom:
    """Random source whose choices are scripted in advance.

    Every ``choice`` call consumes the next scripted color; running out means the code
    under test drew more colors than the scenario expects.
    """

    def __init__(self, choices: Iterable[str]):
        self._choices: List[str] = list(choices)
        self.calls = 0

    @property
    def remaining(self) -> int:
        return len(self._choices)

    def choice(self, seq: Sequence[str]) -> str:
        if not self._choices:
            raise AssertionError("ScriptedRandom exhausted")
        value = self._choices.pop(0)
        assert value in seq, f"Scripted color {value!r} not offered"
        self.calls += 1
        return value


def base_grid(side: int = 6, palette: Sequence[str] = P) -> List[str]:
    """Grid with no runs at all: horizontal neighbours differ by one palette step, vertical by two."""
    return [palette[(2 * row + col) % len(palette)] for row in range(side) for col in range(side)]


def row0_triple_grid() -> List[str]:
    """Row 0 is [A, A, A, B, C, D]; the rest of the board has no run."""
    grid = base_grid()
    grid[0:6] = [P[0], P[0], P[0], P[1], P[2], P[3]]
    return grid


def drive_ticks(bus: EventBus, count: int = 30, dt: float = 0.02) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)
