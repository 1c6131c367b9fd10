from typing import List, Optional, Sequence

from esper import World
from chain_reaction.events.bus import (EventBus, EVENT_CELL_CLICK, EVENT_CELL_CLICK_REJECTED, EVENT_CELL_CYCLED,
                                       EVENT_CASCADE_RESOLVED, EVENT_RESTART_REQUESTED, EVENT_BOARD_CHANGED,
                                       EVENT_ROUND_STARTED)
from chain_reaction.components.board import Board
from chain_reaction.components.game_state import GameMode
from chain_reaction.constants import GRID_SIZE, MIN_MATCH, BASE_POINTS, COMBO_CAP
from chain_reaction.systems.cascade import ResolutionResult, mutate_cell, resolve_cascade
from chain_reaction.systems.grid_ops import create_grid, get_palette, world_rng
from chain_reaction.utils.game_state import get_game_mode, set_game_mode
from chain_reaction.utils.session import get_or_create_session


class BoardSystem:
    """Owns the authoritative grid and turns cell clicks into resolved cascades.

    A click cycles one cell and resolves the cascade immediately; the mutated grid is
    stored on the board and the full result is broadcast for playback and scoring.
    The board only reaches the result grids through CascadePlaybackSystem, which must be
    wired alongside it.
    """
    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        side: int = GRID_SIZE,
        *,
        min_match: int = MIN_MATCH,
        base_points: int = BASE_POINTS,
        combo_cap: int = COMBO_CAP,
    ):
        self.world = world
        self.event_bus = event_bus
        self.min_match = min_match
        self.base_points = base_points
        self.combo_cap = combo_cap
        self.last_result: Optional[ResolutionResult] = None
        self.board_entity = self.world.create_entity()
        self.world.add_component(self.board_entity, Board(side=side, cells=self._fresh_grid(side)))
        self.event_bus.subscribe(EVENT_CELL_CLICK, self.on_cell_click)
        self.event_bus.subscribe(EVENT_RESTART_REQUESTED, self.on_restart)

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    def _fresh_grid(self, side: int) -> List[str]:
        return create_grid(side, get_palette(self.world).colors, world_rng(self.world))

    def set_cells(self, cells: Sequence[str]) -> None:
        board = self.board
        if len(cells) != board.side * board.side:
            raise ValueError(f"Expected {board.side * board.side} cells, got {len(cells)}")
        board.cells = list(cells)

    def on_cell_click(self, sender, **kwargs):
        index = kwargs.get('index')
        if index is None:
            return
        mode = get_game_mode(self.world)
        if mode == GameMode.TIME_UP:
            return
        session = get_or_create_session(self.world)
        if session.animating:
            return
        board = self.board
        if not isinstance(index, int) or not 0 <= index < len(board.cells):
            self.event_bus.emit(EVENT_CELL_CLICK_REJECTED, index=index, reason='out_of_range')
            return
        if mode != GameMode.RUNNING:
            set_game_mode(self.world, self.event_bus, GameMode.RUNNING)
            self.event_bus.emit(EVENT_ROUND_STARTED, time_left=session.time_left)

        palette = get_palette(self.world).colors
        rng = world_rng(self.world)
        previous = board.cells[index]
        mutated = mutate_cell(board.cells, index, palette=palette, rng=rng)
        result = resolve_cascade(
            mutated,
            palette=palette,
            rng=rng,
            min_match=self.min_match,
            base_points=self.base_points,
            combo_cap=self.combo_cap,
        )
        board.cells = mutated
        self.last_result = result
        self.event_bus.emit(EVENT_CELL_CYCLED, index=index, previous=previous, color=mutated[index])
        self.event_bus.emit(EVENT_CASCADE_RESOLVED, result=result, index=index)

    def on_restart(self, sender, **kwargs):
        board = self.board
        board.cells = self._fresh_grid(board.side)
        self.last_result = None
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='restart', indices=list(range(len(board.cells))))
