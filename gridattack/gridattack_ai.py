"""Grid attack targeting: random hunt, neighbour targeting, and line inference."""

from __future__ import annotations

import random
from collections import defaultdict
from typing import Mapping, Sequence

from framework.difficulty import Difficulty

from .gridattack_moves import Attack
from .gridattack_state import CELL_COUNT, GRID_SIZE, GridAttackObservation, ShotResult, cell_index


def orthogonal_neighbors(index: int) -> list[int]:
    row, col = divmod(index, GRID_SIZE)
    neighbors = []
    if row > 0:
        neighbors.append(cell_index(row - 1, col))
    if row < GRID_SIZE - 1:
        neighbors.append(cell_index(row + 1, col))
    if col > 0:
        neighbors.append(cell_index(row, col - 1))
    if col < GRID_SIZE - 1:
        neighbors.append(cell_index(row, col + 1))
    return neighbors


def target_neighbors(shots: Mapping[int, ShotResult], hits: Sequence[int]) -> list[int]:
    return sorted({neighbor for cell in hits for neighbor in orthogonal_neighbors(cell) if neighbor not in shots})


def focus_targets(shots: Mapping[int, ShotResult], hits: Sequence[int]) -> list[int]:
    """Cells extending a line of two or more aligned hits."""
    rows: dict[int, list[int]] = defaultdict(list)
    cols: dict[int, list[int]] = defaultdict(list)
    for cell in hits:
        row, col = divmod(cell, GRID_SIZE)
        rows[row].append(col)
        cols[col].append(row)

    focused: set[int] = set()
    for row, hit_cols in rows.items():
        if len(hit_cols) < 2:
            continue
        for col in (min(hit_cols) - 1, max(hit_cols) + 1):
            if 0 <= col < GRID_SIZE and cell_index(row, col) not in shots:
                focused.add(cell_index(row, col))
    for col, hit_rows in cols.items():
        if len(hit_rows) < 2:
            continue
        for row in (min(hit_rows) - 1, max(hit_rows) + 1):
            if 0 <= row < GRID_SIZE and cell_index(row, col) not in shots:
                focused.add(cell_index(row, col))
    return sorted(focused)


def pick_target(
    shots: Mapping[int, ShotResult],
    sunk: frozenset[int],
    difficulty: Difficulty,
    rng: random.Random,
) -> int | None:
    available = [cell for cell in range(CELL_COUNT) if cell not in shots]
    if not available:
        return None
    if difficulty is Difficulty.EASY:
        return rng.choice(available)

    active_hits = [cell for cell in range(CELL_COUNT) if shots.get(cell) is ShotResult.HIT and cell not in sunk]
    neighbors = target_neighbors(shots, active_hits)
    if difficulty is Difficulty.NORMAL:
        return rng.choice(neighbors) if neighbors else rng.choice(available)

    focus = focus_targets(shots, active_hits)
    if focus:
        return rng.choice(focus)
    if neighbors:
        return max(neighbors, key=lambda cell: sum(1 for n in orthogonal_neighbors(cell) if n not in shots))

    center = (GRID_SIZE - 1) / 2.0
    parity = [cell for cell in available if sum(divmod(cell, GRID_SIZE)) % 2 == 0]
    hunt = parity or available
    return min(hunt, key=lambda cell: abs(cell // GRID_SIZE - center) + abs(cell % GRID_SIZE - center))


def choose_move(
    observation: GridAttackObservation,
    legal_moves: Sequence[Attack],
    difficulty: Difficulty,
    rng: random.Random,
) -> Attack | None:
    if not legal_moves:
        return None
    cell = pick_target(observation.shots_fired, observation.enemy_sunk_cells, difficulty, rng)
    return Attack(cell) if cell is not None else None
