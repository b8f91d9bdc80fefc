"""Edge/box geometry and immutable state for dots and boxes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from framework.observation import Observation
from framework.state import State

DOTS_PER_SIDE = 5
BOXES_PER_SIDE = DOTS_PER_SIDE - 1


class Player(str, Enum):
    A = "A"
    B = "B"

    @property
    def other(self) -> "Player":
        return Player.B if self is Player.A else Player.A


class Orientation(str, Enum):
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


def horizontal_edge_id(row: int, col: int) -> str:
    return f"h-{row}-{col}"


def vertical_edge_id(row: int, col: int) -> str:
    return f"v-{row}-{col}"


def box_id(row: int, col: int) -> str:
    return f"b-{row}-{col}"


@dataclass(frozen=True)
class Edge:
    id: str
    orientation: Orientation
    row: int
    column: int
    adjacent_boxes: tuple[str, ...]


@dataclass(frozen=True)
class Box:
    id: str
    row: int
    column: int
    edge_ids: tuple[str, ...]


def _build_edges() -> tuple[Edge, ...]:
    edges = []
    for row in range(DOTS_PER_SIDE):
        for col in range(BOXES_PER_SIDE):
            adjacent = []
            if row > 0:
                adjacent.append(box_id(row - 1, col))
            if row < BOXES_PER_SIDE:
                adjacent.append(box_id(row, col))
            edges.append(Edge(horizontal_edge_id(row, col), Orientation.HORIZONTAL, row, col, tuple(adjacent)))
    for row in range(BOXES_PER_SIDE):
        for col in range(DOTS_PER_SIDE):
            adjacent = []
            if col > 0:
                adjacent.append(box_id(row, col - 1))
            if col < BOXES_PER_SIDE:
                adjacent.append(box_id(row, col))
            edges.append(Edge(vertical_edge_id(row, col), Orientation.VERTICAL, row, col, tuple(adjacent)))
    return tuple(edges)


def _build_boxes() -> tuple[Box, ...]:
    return tuple(
        Box(
            id=box_id(row, col),
            row=row,
            column=col,
            edge_ids=(
                horizontal_edge_id(row, col),
                horizontal_edge_id(row + 1, col),
                vertical_edge_id(row, col),
                vertical_edge_id(row, col + 1),
            ),
        )
        for row in range(BOXES_PER_SIDE)
        for col in range(BOXES_PER_SIDE)
    )


EDGES: tuple[Edge, ...] = _build_edges()
BOXES: tuple[Box, ...] = _build_boxes()
EDGES_BY_ID: dict[str, Edge] = {edge.id: edge for edge in EDGES}
BOXES_BY_ID: dict[str, Box] = {box.id: box for box in BOXES}


@dataclass(frozen=True)
class DotsAndBoxesState(State):
    seed: int
    drawn_edges: dict[str, Player] = field(default_factory=dict)
    claimed_boxes: dict[str, Player] = field(default_factory=dict)
    current: Player = Player.A
    last_edge_id: str | None = None
    last_claimed_box_ids: tuple[str, ...] = ()

    @property
    def edges_remaining(self) -> int:
        return len(EDGES) - len(self.drawn_edges)

    def score(self, player: Player) -> int:
        return sum(1 for owner in self.claimed_boxes.values() if owner is player)


@dataclass(frozen=True)
class DotsAndBoxesObservation(Observation):
    player: Player
    drawn_edges: dict[str, Player]
    claimed_boxes: dict[str, Player]
    current: Player
