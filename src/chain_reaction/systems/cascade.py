from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Sequence, Set, Tuple

from chain_reaction.constants import BASE_POINTS, COLOR_POOL, COMBO_CAP, MIN_MATCH
from chain_reaction.systems.grid_ops import Color, cycle_color, grid_side, new_random_color


@dataclass(frozen=True, slots=True)
class ResolutionStep:
    """One detect-clear-refill iteration of a cascade."""

    indices: Tuple[int, ...]
    grid_after: Tuple[Color, ...]
    score: int
    combo_level: int

    @property
    def cleared(self) -> int:
        return len(self.indices)


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome of resolving a grid until no run remains or the combo cap is reached.

    Grids in a result are immutable tuples; compare against ``tuple(grid)`` for a list grid.
    """

    steps: Tuple[ResolutionStep, ...]
    total_score: int
    combos: int
    total_cleared: int
    final_grid: Tuple[Color, ...]


def _collect_runs(colors: Sequence[Color], positions: Sequence[int], min_match: int, matches: Set[int]) -> None:
    """Add the positions of every maximal run of length >= min_match in one line."""
    run_start = 0
    for offset in range(1, len(colors) + 1):
        if offset < len(colors) and colors[offset] == colors[run_start]:
            continue
        if offset - run_start >= min_match:
            matches.update(positions[run_start:offset])
        run_start = offset


def find_matches(grid: Sequence[Color], side: int | None = None, *, min_match: int = MIN_MATCH) -> Set[int]:
    """Detect every cell in a horizontal or vertical run of length >= min_match.

    Rows are scanned left to right and columns top to bottom; a cell that belongs to
    both a row run and a column run appears once.
    """
    if side is None:
        side = grid_side(grid)
    elif side <= 0 or side * side != len(grid):
        raise ValueError(f"Grid length {len(grid)} does not match side {side}")
    matches: Set[int] = set()
    for row in range(side):
        positions = [row * side + col for col in range(side)]
        _collect_runs([grid[i] for i in positions], positions, min_match, matches)
    for col in range(side):
        positions = [row * side + col for row in range(side)]
        _collect_runs([grid[i] for i in positions], positions, min_match, matches)
    return matches


def resolve_cascade(
    grid: Sequence[Color],
    *,
    palette: Sequence[Color] = COLOR_POOL,
    rng: random.Random | None = None,
    min_match: int = MIN_MATCH,
    base_points: int = BASE_POINTS,
    combo_cap: int = COMBO_CAP,
) -> ResolutionResult:
    """Repeatedly clear matched runs and refill them until the grid settles.

    Each iteration scores ``cleared * base_points * combo_level``. Refill draws are taken
    in ascending index order, so a seeded rng reproduces the whole cascade. The input
    grid is never modified.
    """
    side = grid_side(grid)
    if rng is None:
        rng = random.Random()
    working: Tuple[Color, ...] = tuple(grid)
    steps: List[ResolutionStep] = []
    combos = 0
    total_score = 0
    total_cleared = 0

    while combos < combo_cap:
        matches = find_matches(working, side, min_match=min_match)
        if not matches:
            break
        combos += 1
        indices = tuple(sorted(matches))
        step_score = len(indices) * base_points * combos
        total_score += step_score
        total_cleared += len(indices)

        refilled = list(working)
        for index in indices:
            refilled[index] = new_random_color(palette, rng)
        grid_after = tuple(refilled)

        steps.append(
            ResolutionStep(
                indices=indices,
                grid_after=grid_after,
                score=step_score,
                combo_level=combos,
            )
        )
        working = grid_after

    return ResolutionResult(
        steps=tuple(steps),
        total_score=total_score,
        combos=combos,
        total_cleared=total_cleared,
        final_grid=working,
    )


def mutate_cell(
    grid: Sequence[Color],
    index: int,
    *,
    palette: Sequence[Color] = COLOR_POOL,
    rng: random.Random | None = None,
) -> List[Color]:
    """Return a copy of grid with the color at index cycled to the next palette entry."""
    side = grid_side(grid)
    if not isinstance(index, int) or not 0 <= index < side * side:
        raise IndexError(f"Cell index {index!r} outside {side}x{side} grid")
    if rng is None:
        rng = random.Random()
    mutated = list(grid)
    mutated[index] = cycle_color(mutated[index], palette, rng)
    return mutated


def apply_mutation_and_resolve(
    grid: Sequence[Color],
    index: int,
    *,
    palette: Sequence[Color] = COLOR_POOL,
    rng: random.Random | None = None,
    min_match: int = MIN_MATCH,
    base_points: int = BASE_POINTS,
    combo_cap: int = COMBO_CAP,
) -> ResolutionResult:
    """Cycle the color at index, then resolve the resulting cascade."""
    if rng is None:
        rng = random.Random()
    mutated = mutate_cell(grid, index, palette=palette, rng=rng)
    return resolve_cascade(
        mutated,
        palette=palette,
        rng=rng,
        min_match=min_match,
        base_points=base_points,
        combo_cap=combo_cap,
    )
