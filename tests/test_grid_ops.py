import random

import pytest

from chain_reaction.constants import COLOR_POOL
from chain_reaction.systems.grid_ops import (
    cell_index,
    cell_position,
    create_grid,
    cycle_color,
    grid_side,
    new_random_color,
)
from tests.helpers import ScriptedRandom


def test_new_random_color_draws_from_palette():
    rng = random.Random(3)
    colors = {new_random_color(COLOR_POOL, rng) for _ in range(200)}
    assert colors <= set(COLOR_POOL)
    # Uniform draws over 200 samples should hit every one of six colors.
    assert colors == set(COLOR_POOL)


def test_create_grid_has_side_squared_palette_cells():
    grid = create_grid(6, COLOR_POOL, random.Random(11))
    assert len(grid) == 36
    assert all(color in COLOR_POOL for color in grid)


def test_create_grid_uses_one_draw_per_cell():
    rng = ScriptedRandom([COLOR_POOL[i % 6] for i in range(9)])
    grid = create_grid(3, COLOR_POOL, rng)
    assert rng.calls == 9
    assert grid == [COLOR_POOL[i % 6] for i in range(9)]


@pytest.mark.parametrize("side", [0, -2, 2.5])
def test_create_grid_rejects_non_positive_side(side):
    with pytest.raises(ValueError):
        create_grid(side, COLOR_POOL, random.Random())


def test_cycle_color_advances_and_wraps():
    rng = ScriptedRandom([])
    assert cycle_color(COLOR_POOL[0], COLOR_POOL, rng) == COLOR_POOL[1]
    assert cycle_color(COLOR_POOL[-1], COLOR_POOL, rng) == COLOR_POOL[0]
    assert rng.calls == 0


def test_cycle_color_unknown_color_falls_back_to_random():
    rng = ScriptedRandom([COLOR_POOL[2]])
    assert cycle_color("#000000", COLOR_POOL, rng) == COLOR_POOL[2]
    assert rng.calls == 1


def test_grid_side_and_index_helpers():
    assert grid_side([COLOR_POOL[0]] * 36) == 6
    with pytest.raises(ValueError):
        grid_side([COLOR_POOL[0]] * 35)
    with pytest.raises(ValueError):
        grid_side([])
    assert cell_index(2, 3, 6) == 15
    assert cell_position(15, 6) == (2, 3)
    with pytest.raises(IndexError):
        cell_index(6, 0, 6)
    with pytest.raises(IndexError):
        cell_position(36, 6)
