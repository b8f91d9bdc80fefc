"""Fleets, shots, and immutable state for grid attack."""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum

from framework.observation import Observation
from framework.state import State

GRID_SIZE = 6
CELL_COUNT = GRID_SIZE * GRID_SIZE
SHIP_SIZES: tuple[int, ...] = (3, 2, 2)
PLACEMENT_ATTEMPTS = 80
ROW_LABELS = "ABCDEF"


class Seat(str, Enum):
    PLAYER = "PLAYER"
    CPU = "CPU"

    @property
    def other(self) -> "Seat":
        return Seat.CPU if self is Seat.PLAYER else Seat.PLAYER


class ShotResult(str, Enum):
    HIT = "HIT"
    MISS = "MISS"


@dataclass(frozen=True)
class Ship:
    id: str
    size: int
    cells: tuple[int, ...]
    hits: int = 0

    @property
    def is_sunk(self) -> bool:
        return self.hits >= self.size


Fleet = tuple[Ship, ...]


def cell_index(row: int, col: int) -> int:
    return row * GRID_SIZE + col


def format_cell(index: int) -> str:
    return f"{ROW_LABELS[index // GRID_SIZE]}{index % GRID_SIZE + 1}"


def ship_cells(size: int, row: int, col: int, horizontal: bool) -> tuple[int, ...]:
    return tuple(
        cell_index(row + (0 if horizontal else offset), col + (offset if horizontal else 0))
        for offset in range(size)
    )


def random_fleet(rng: random.Random) -> Fleet:
    """Place every ship without overlap, restarting when one cannot be placed."""
    while True:
        occupied: set[int] = set()
        ships: list[Ship] = []
        for number, size in enumerate(SHIP_SIZES, start=1):
            for _ in range(PLACEMENT_ATTEMPTS):
                horizontal = rng.random() < 0.5
                max_row = GRID_SIZE - 1 if horizontal else GRID_SIZE - size
                max_col = GRID_SIZE - size if horizontal else GRID_SIZE - 1
                cells = ship_cells(size, rng.randint(0, max_row), rng.randint(0, max_col), horizontal)
                if occupied.intersection(cells):
                    continue
                occupied.update(cells)
                ships.append(Ship(id=f"ship-{number}", size=size, cells=cells))
                break
            else:
                break
        if len(ships) == len(SHIP_SIZES):
            return tuple(ships)


def fleet_cells(fleet: Fleet) -> frozenset[int]:
    return frozenset(cell for ship in fleet for cell in ship.cells)


def sunk_cells(fleet: Fleet) -> frozenset[int]:
    return frozenset(cell for ship in fleet if ship.is_sunk for cell in ship.cells)


@dataclass(frozen=True)
class AttackOutcome:
    fleet: Fleet
    shots: dict[int, ShotResult]
    result: ShotResult
    sunk_ship_size: int | None
    all_sunk: bool


def apply_attack(fleet: Fleet, shots: dict[int, ShotResult], target: int) -> AttackOutcome:
    hit_index = next((index for index, ship in enumerate(fleet) if target in ship.cells), None)
    result = ShotResult.HIT if hit_index is not None else ShotResult.MISS
    next_shots = {**shots, target: result}
    if hit_index is None:
        return AttackOutcome(fleet, next_shots, result, None, False)
    ships = list(fleet)
    ships[hit_index] = replace(ships[hit_index], hits=ships[hit_index].hits + 1)
    updated = ships[hit_index]
    return AttackOutcome(
        fleet=tuple(ships),
        shots=next_shots,
        result=result,
        sunk_ship_size=updated.size if updated.is_sunk else None,
        all_sunk=all(ship.is_sunk for ship in ships),
    )


@dataclass(frozen=True)
class GridAttackState(State):
    seed: int
    fleets: dict[Seat, Fleet]
    # Shots fired BY each seat at the other seat's grid.
    shots: dict[Seat, dict[int, ShotResult]] = field(default_factory=lambda: {seat: {} for seat in Seat})
    turn: Seat = Seat.PLAYER
    winner: Seat | None = None
    last_event: str = "Target enemy waters to start the battle."
    turn_count: int = 0


@dataclass(frozen=True)
class GridAttackObservation(Observation):
    """Own fleet in full; of the enemy only shot results and sunk ship cells."""

    seat: Seat
    own_fleet: Fleet
    shots_fired: dict[int, ShotResult]
    shots_received: dict[int, ShotResult]
    enemy_sunk_cells: frozenset[int]
