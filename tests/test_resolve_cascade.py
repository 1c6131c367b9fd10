import random

import pytest

from chain_reaction.constants import BASE_POINTS, COMBO_CAP
from chain_reaction.systems.cascade import find_matches, resolve_cascade
from tests.helpers import P, ScriptedRandom, base_grid, row0_triple_grid


def test_no_match_returns_empty_result_and_same_grid():
    grid = base_grid()
    rng = ScriptedRandom([])
    result = resolve_cascade(grid, rng=rng)
    assert result.steps == ()
    assert result.total_score == 0
    assert result.combos == 0
    assert result.total_cleared == 0
    assert result.final_grid == tuple(grid)
    assert isinstance(result.final_grid, tuple)
    assert rng.calls == 0


def test_single_step_row_triple():
    grid = row0_triple_grid()
    rng = ScriptedRandom([P[4], P[5], P[4]])
    result = resolve_cascade(grid, rng=rng)
    assert result.combos == 1
    assert len(result.steps) == 1
    step = result.steps[0]
    assert set(step.indices) == {0, 1, 2}
    assert step.score == 3 * 90 * 1 == 270
    assert step.combo_level == 1
    assert result.total_score == 270
    assert result.total_cleared == 3
    assert list(result.final_grid[0:6]) == [P[4], P[5], P[4], P[1], P[2], P[3]]
    assert result.final_grid == step.grid_after
    assert rng.remaining == 0


def test_refill_creating_new_run_chains_with_doubled_multiplier():
    grid = row0_triple_grid()
    # Step 1 refill lines indices 1..3 up; step 2 refill settles the board.
    rng = ScriptedRandom([P[4], P[1], P[1], P[5], P[0], P[5]])
    result = resolve_cascade(grid, rng=rng)
    assert result.combos == 2
    first, second = result.steps
    assert first.indices == (0, 1, 2)
    assert second.indices == (1, 2, 3)
    assert second.combo_level == 2
    assert second.score == 3 * 90 * 2 == 540
    assert result.total_score == first.score + second.score == 810
    assert result.total_cleared == 6
    assert find_matches(result.final_grid) == set()


def test_input_grid_is_not_mutated():
    grid = row0_triple_grid()
    snapshot = list(grid)
    resolve_cascade(grid, rng=ScriptedRandom([P[4], P[5], P[4]]))
    assert grid == snapshot


def test_score_law_and_levels_hold_for_random_boards():
    rng = random.Random(2024)
    for _ in range(40):
        grid = [rng.choice(P) for _ in range(36)]
        result = resolve_cascade(grid, rng=rng)
        assert len(result.steps) == result.combos <= COMBO_CAP
        assert [step.combo_level for step in result.steps] == list(range(1, result.combos + 1))
        for step in result.steps:
            assert step.score == step.cleared * BASE_POINTS * step.combo_level
            assert len(step.indices) == len(set(step.indices))
            assert len(step.grid_after) == len(grid)
        assert result.total_score == sum(step.score for step in result.steps)
        assert result.total_cleared == sum(step.cleared for step in result.steps)
        assert len(result.final_grid) == len(grid)


def test_same_seed_reproduces_cascade():
    seeded = random.Random(5)
    grid = [seeded.choice(P) for _ in range(36)]
    grid[0:3] = [P[2]] * 3
    first = resolve_cascade(grid, rng=random.Random(99))
    second = resolve_cascade(grid, rng=random.Random(99))
    assert first == second
    assert first.combos >= 1


def test_cap_stops_endless_cascade():
    grid = ["#111111"] * 36
    result = resolve_cascade(grid, palette=["#111111"], rng=random.Random(1))
    assert result.combos == COMBO_CAP == 15
    assert len(result.steps) == 15
    assert result.total_cleared == 36 * 15
    assert result.total_score == 36 * 90 * sum(range(1, 16))


def test_custom_cap_and_points():
    grid = ["#111111"] * 9
    result = resolve_cascade(grid, palette=["#111111"], rng=random.Random(1), combo_cap=3, base_points=10)
    assert result.combos == 3
    assert [step.score for step in result.steps] == [90, 180, 270]


def test_overlapping_runs_clear_and_score_once():
    grid = base_grid()
    for index in (0, 1, 2, 6, 12):
        grid[index] = P[5]
    result = resolve_cascade(grid, rng=random.Random(8), combo_cap=1)
    step = result.steps[0]
    assert sorted(step.indices) == [0, 1, 2, 6, 12]
    assert step.cleared == 5
    assert step.score == 5 * 90


def test_malformed_grid_length_rejected():
    with pytest.raises(ValueError):
        resolve_cascade([P[0]] * 35, rng=random.Random())
