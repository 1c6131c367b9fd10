import random

import pytest

from chain_reaction.systems.cascade import apply_mutation_and_resolve, mutate_cell
from tests.helpers import P, ScriptedRandom, base_grid, row0_triple_grid


def test_mutation_outside_run_resolves_existing_triple():
    grid = row0_triple_grid()
    rng = ScriptedRandom([P[4], P[5], P[4]])
    result = apply_mutation_and_resolve(grid, 21, rng=rng)
    assert result.combos == 1
    assert result.steps[0].indices == (0, 1, 2)
    assert result.steps[0].score == 270
    assert result.total_score == 270
    assert result.total_cleared == 3
    assert result.final_grid[21] == P[4]
    assert grid[21] == P[3]


def test_mutation_completing_a_run():
    grid = base_grid()
    # Row 0 becomes [P0, P0, P0, ...] once index 1 cycles from P5 to P0.
    grid[1] = P[5]
    grid[2] = P[0]
    rng = ScriptedRandom([P[4], P[5], P[4]])
    result = apply_mutation_and_resolve(grid, 1, rng=rng)
    assert result.combos == 1
    assert result.steps[0].indices == (0, 1, 2)


def test_mutation_without_match_returns_mutated_grid():
    grid = base_grid()
    result = apply_mutation_and_resolve(grid, 35, rng=ScriptedRandom([]))
    assert result.steps == ()
    expected = list(grid)
    expected[35] = P[(P.index(grid[35]) + 1) % len(P)]
    assert list(result.final_grid) == expected


def test_mutate_cell_unknown_color_draws_random():
    grid = base_grid()
    grid[14] = "#000000"
    mutated = mutate_cell(grid, 14, rng=ScriptedRandom([P[1]]))
    assert mutated[14] == P[1]
    assert grid[14] == "#000000"


@pytest.mark.parametrize("index", [-1, 36, 100])
def test_out_of_range_index_rejected(index):
    with pytest.raises(IndexError):
        apply_mutation_and_resolve(base_grid(), index, rng=random.Random())
