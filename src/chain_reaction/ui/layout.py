from dataclasses import dataclass

from chain_reaction.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    GRID_SIZE,
    HUD_HEIGHT,
)
from chain_reaction.systems.grid_ops import cell_index, cell_position


@dataclass(frozen=True, slots=True)
class BoardGeometry:
    tile_size: int
    start_x: float
    start_y: float
    side: int

    @property
    def width(self) -> float:
        return self.tile_size * self.side

    def cell_center(self, index: int) -> tuple[float, float]:
        """Window coordinates of a cell's center; row 0 is drawn at the top."""
        row, col = cell_position(index, self.side)
        x = self.start_x + col * self.tile_size + self.tile_size / 2
        y = self.start_y + (self.side - 1 - row) * self.tile_size + self.tile_size / 2
        return x, y


def compute_board_geometry(window_width: int, window_height: int, side: int = GRID_SIZE) -> BoardGeometry:
    """Return board geometry so that input mapping and rendering agree.

    The board is centered horizontally and sized so it stays within the configured
    fraction of the window, below the HUD strip.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / side, max_board_h / side))
    if tile_size < 20:
        tile_size = 20  # safety minimum
    total_width = side * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return BoardGeometry(tile_size=tile_size, start_x=start_x, start_y=start_y, side=side)


def cell_at_point(x: float, y: float, geometry: BoardGeometry) -> int | None:
    """Map window coordinates to a cell index, or None when outside the board."""
    rel_x = x - geometry.start_x
    rel_y = y - geometry.start_y
    if rel_x < 0 or rel_y < 0:
        return None
    col = int(rel_x // geometry.tile_size)
    row_from_bottom = int(rel_y // geometry.tile_size)
    if col >= geometry.side or row_from_bottom >= geometry.side:
        return None
    row = geometry.side - 1 - row_from_bottom
    return cell_index(row, col, geometry.side)
