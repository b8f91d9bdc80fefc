"""Beam slots, weight pools, and immutable round state for the balance puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from framework.observation import Observation
from framework.state import State

SLOT_POSITIONS: tuple[int, ...] = (-4, -3, -2, -1, 1, 2, 3, 4)
INITIAL_WEIGHTS: tuple[int, ...] = (1, 2, 3, 4)
SAFE_TORQUE_LIMIT = 14


class Player(str, Enum):
    A = "A"
    B = "B"

    @property
    def other(self) -> "Player":
        return Player.B if self is Player.A else Player.A


@dataclass(frozen=True)
class PlacedWeight:
    slot: int
    weight: int
    player: Player


@dataclass(frozen=True)
class Tip:
    """The loser pushed torque past the limit."""

    winner: Player
    loser: Player
    final_torque: int


@dataclass(frozen=True)
class Stable:
    """Every slot filled without tipping."""

    final_torque: int


RoundResult = Tip | Stable


def compute_torque(placements: Iterable[PlacedWeight]) -> int:
    return sum(placed.slot * placed.weight for placed in placements)


def slot_label(slot: int) -> str:
    return f"{'L' if slot < 0 else 'R'}{abs(slot)}"


def format_torque(torque: int) -> str:
    return f"+{torque}" if torque > 0 else str(torque)


def initial_pools() -> dict[Player, tuple[int, ...]]:
    return {player: INITIAL_WEIGHTS for player in Player}


@dataclass(frozen=True)
class BalanceState(State):
    seed: int
    starting_player: Player = Player.A
    current: Player = Player.A
    placements: tuple[PlacedWeight, ...] = ()
    weight_pool: dict[Player, tuple[int, ...]] = field(default_factory=initial_pools)
    result: RoundResult | None = None

    @property
    def torque(self) -> int:
        return compute_torque(self.placements)

    @property
    def occupied_slots(self) -> frozenset[int]:
        return frozenset(placed.slot for placed in self.placements)


@dataclass(frozen=True)
class BalanceObservation(Observation):
    player: Player
    placements: tuple[PlacedWeight, ...]
    own_weights: tuple[int, ...]
    opponent_weights: tuple[int, ...]
