from esper import World

from chain_reaction.components.board import Board
from chain_reaction.components.cascade_playback import CascadePlayback
from chain_reaction.constants import COMBO_RESOLVE_DELAY, FILL_DELAY
from chain_reaction.events.bus import (
    EVENT_BOARD_CHANGED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_RESOLVED,
    EVENT_CASCADE_STEP,
    EVENT_PLAYBACK_SKIP_REQUESTED,
    EVENT_RESTART_REQUESTED,
    EVENT_TICK,
    EventBus,
)
from chain_reaction.systems.grid_ops import get_board
from chain_reaction.utils.session import get_highlight, get_or_create_session


class CascadePlaybackSystem:
    """Plays back the steps of a resolved cascade against the board over time.

    Each step first flashes its cleared cells for ``resolve_delay`` seconds, then adopts
    the step's grid_after and waits ``fill_delay`` before the next step. The result is
    fully computed up front, so skipping only jumps the board to the final grid.
    """
    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        resolve_delay: float = COMBO_RESOLVE_DELAY,
        fill_delay: float = FILL_DELAY,
    ):
        self.world = world
        self.event_bus = event_bus
        self.resolve_delay = resolve_delay
        self.fill_delay = fill_delay
        self.playback_entity: int | None = None
        self.event_bus.subscribe(EVENT_CASCADE_RESOLVED, self.on_cascade_resolved)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_PLAYBACK_SKIP_REQUESTED, self.on_skip_requested)
        self.event_bus.subscribe(EVENT_RESTART_REQUESTED, self.on_restart)

    def _active(self) -> CascadePlayback | None:
        if self.playback_entity is None:
            return None
        try:
            return self.world.component_for_entity(self.playback_entity, CascadePlayback)
        except KeyError:
            return None

    @property
    def active(self) -> bool:
        return self._active() is not None

    def on_cascade_resolved(self, sender, **kwargs):
        result = kwargs.get('result')
        if result is None:
            return
        # A new result supersedes anything still playing; the board already holds the new grid.
        if self._active() is not None:
            self._clear()
        if not result.steps:
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, combos=0, total_score=0, skipped=False)
            return
        self.playback_entity = self.world.create_entity(CascadePlayback(result=result))
        get_or_create_session(self.world).animating = True
        self._begin_step(self._active())

    def _begin_step(self, playback: CascadePlayback) -> None:
        step = playback.result.steps[playback.step_index]
        playback.phase = 'highlight'
        playback.elapsed = 0.0
        highlight = get_highlight(self.world)
        highlight.indices = tuple(step.indices)
        highlight.combo_level = step.combo_level
        self.event_bus.emit(
            EVENT_CASCADE_STEP,
            combo_level=step.combo_level,
            indices=tuple(step.indices),
            score=step.score,
        )

    def _adopt(self, cells, reason: str, indices) -> None:
        board: Board = get_board(self.world)
        board.cells = list(cells)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason=reason, indices=list(indices))

    def on_tick(self, sender, **kwargs):
        playback = self._active()
        if playback is None:
            return
        playback.elapsed += kwargs.get('dt', 1/60)
        # A long tick may cover several phases.
        while playback is not None:
            step = playback.result.steps[playback.step_index]
            if playback.phase == 'highlight':
                if playback.elapsed < self.resolve_delay:
                    return
                playback.elapsed -= self.resolve_delay
                self._adopt(step.grid_after, 'refill', step.indices)
                get_highlight(self.world).indices = ()
                playback.phase = 'fill'
            else:
                if playback.elapsed < self.fill_delay:
                    return
                playback.elapsed -= self.fill_delay
                playback.step_index += 1
                if playback.step_index >= len(playback.result.steps):
                    self._finish(skipped=False)
                    playback = None
                else:
                    leftover = playback.elapsed
                    self._begin_step(playback)
                    playback.elapsed = leftover

    def skip(self) -> None:
        """Abandon the remaining steps and show the final grid immediately."""
        if self._active() is None:
            return
        self._finish(skipped=True)

    def on_skip_requested(self, sender, **kwargs):
        self.skip()

    def _finish(self, *, skipped: bool) -> None:
        playback = self._active()
        if playback is None:
            return
        result = playback.result
        if skipped:
            self._adopt(result.final_grid, 'skip', [i for step in result.steps for i in step.indices])
        self._clear()
        self.event_bus.emit(
            EVENT_CASCADE_COMPLETE,
            combos=result.combos,
            total_score=result.total_score,
            skipped=skipped,
        )

    def _clear(self) -> None:
        if self.playback_entity is not None:
            try:
                self.world.delete_entity(self.playback_entity, immediate=True)
            except KeyError:
                pass
        self.playback_entity = None
        highlight = get_highlight(self.world)
        highlight.indices = ()
        highlight.combo_level = 0
        get_or_create_session(self.world).animating = False

    def on_restart(self, sender, **kwargs):
        # The board has already been replaced; drop the playback without adopting its grid.
        self._clear()
