from __future__ import annotations

import math
import random
from typing import List, Sequence, Tuple

from esper import World

from chain_reaction.components.board import Board
from chain_reaction.components.palette import Palette

Color = str
Grid = List[Color]


def new_random_color(palette: Sequence[Color], rng: random.Random) -> Color:
    """Return a color drawn uniformly from palette."""
    return rng.choice(list(palette))


def create_grid(side: int, palette: Sequence[Color], rng: random.Random) -> Grid:
    """Return a side*side grid with every cell drawn independently."""
    if not isinstance(side, int) or side <= 0:
        raise ValueError(f"Grid side must be a positive integer, got {side!r}")
    return [new_random_color(palette, rng) for _ in range(side * side)]


def cycle_color(color: Color, palette: Sequence[Color], rng: random.Random) -> Color:
    """Advance color to the next palette entry, wrapping around.

    A color outside the palette is replaced by a fresh random color instead of failing.
    """
    colors = list(palette)
    try:
        index = colors.index(color)
    except ValueError:
        return new_random_color(colors, rng)
    return colors[(index + 1) % len(colors)]


def grid_side(grid: Sequence[Color]) -> int:
    """Return the side of a square grid, rejecting lengths that are not perfect squares."""
    length = len(grid)
    side = math.isqrt(length)
    if length == 0 or side * side != length:
        raise ValueError(f"Grid length {length} is not a positive perfect square")
    return side


def cell_index(row: int, col: int, side: int) -> int:
    if not (0 <= row < side and 0 <= col < side):
        raise IndexError(f"Cell ({row}, {col}) outside {side}x{side} grid")
    return row * side + col


def cell_position(index: int, side: int) -> Tuple[int, int]:
    if not 0 <= index < side * side:
        raise IndexError(f"Cell index {index} outside {side}x{side} grid")
    return divmod(index, side)


# ---------------------------------------------------------------------------
# World lookups
# ---------------------------------------------------------------------------

def get_palette(world: World) -> Palette:
    for _, palette in world.get_component(Palette):
        return palette
    raise RuntimeError("Palette definition not found")


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def world_rng(world: World) -> random.Random:
    candidate = getattr(world, "random", None)
    if candidate is None:
        candidate = random.Random()
        setattr(world, "random", candidate)
    return candidate
