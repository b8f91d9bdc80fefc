"""Snake on a 16x16 grid with queued steering and uniform food spawns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from framework.arcade import ArcadeEngine

GRID_SIZE = 16
STEP_MS = 140


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def opposite(self) -> "Direction":
        return {"UP": Direction.DOWN, "DOWN": Direction.UP, "LEFT": Direction.RIGHT, "RIGHT": Direction.LEFT}[self.value]

    @property
    def vector(self) -> tuple[int, int]:
        return {"UP": (0, -1), "DOWN": (0, 1), "LEFT": (-1, 0), "RIGHT": (1, 0)}[self.value]


@dataclass(frozen=True)
class Point:
    x: int
    y: int


INITIAL_SNAKE = (Point(7, 8), Point(6, 8), Point(5, 8))
INITIAL_DIRECTION = Direction.RIGHT


class SnakeEngine(ArcadeEngine):
    """
    Single-player snake.

    `tick(delta_ms)` accumulates time and advances one cell per `STEP_MS`;
    `step()` advances exactly one cell. Difficulty does not change the rules.
    """

    game_name = "snake"
    actions = ("queue_direction", "tick", "step")

    def _new_session(self) -> None:
        self.snake: tuple[Point, ...] = INITIAL_SNAKE
        self.direction = INITIAL_DIRECTION
        self.queued_direction = INITIAL_DIRECTION
        self.game_over = False
        self.score = 0
        self._elapsed_ms = 0
        self.food = self._spawn_food(self.snake)

    @property
    def is_victory(self) -> bool:
        return len(self.snake) == GRID_SIZE * GRID_SIZE

    @property
    def is_over(self) -> bool:
        return self.game_over or self.is_victory

    @property
    def controls_locked(self) -> bool:
        return self.is_over

    def status_text(self) -> str:
        if self.game_over:
            return "Game over!"
        if self.is_victory:
            return "You win!"
        return "Swipe or use buttons to move."

    def queue_direction(self, direction: Direction | str) -> bool:
        """Queue the next heading; reversing onto the body is ignored."""
        heading = Direction(str(getattr(direction, "value", direction)).upper())
        if self.controls_locked:
            return False
        if heading in (self.queued_direction.opposite, self.direction.opposite):
            self._reject({"direction": heading}, "Cannot reverse onto the body.")
            return False
        self.queued_direction = heading
        return True

    def tick(self, delta_ms: int = STEP_MS) -> bool:
        """Advance by elapsed time; returns whether at least one step ran."""
        if self.is_over:
            return False
        self._elapsed_ms += delta_ms
        moved = False
        while self._elapsed_ms >= STEP_MS and not self.is_over:
            self._elapsed_ms -= STEP_MS
            moved = self.step() or moved
        return moved

    def step(self) -> bool:
        if self.is_over:
            return False
        dx, dy = self.queued_direction.vector
        head = self.snake[0]
        next_head = Point(head.x + dx, head.y + dy)

        hit_wall = not (0 <= next_head.x < GRID_SIZE and 0 <= next_head.y < GRID_SIZE)
        will_eat = next_head == self.food
        # The tail moves away this step unless the snake grows.
        body = self.snake if will_eat else self.snake[:-1]
        if hit_wall or next_head in body:
            self.game_over = True
            self._record("step", {"head": next_head, "collision": True})
            return True

        next_snake = (next_head,) + (self.snake if will_eat else self.snake[:-1])
        if will_eat:
            self.food = self._spawn_food(next_snake)
        self.direction = self.queued_direction
        self.snake = next_snake
        self.score = len(next_snake) - len(INITIAL_SNAKE)
        self._record("step", {"head": next_head, "ate": will_eat})
        return True

    def _spawn_food(self, snake: tuple[Point, ...]) -> Point:
        occupied = set(snake)
        free = [Point(x, y) for y in range(GRID_SIZE) for x in range(GRID_SIZE) if Point(x, y) not in occupied]
        if not free:
            return snake[0]
        return self.rng.choice(free)

    def snapshot(self) -> dict[str, Any]:
        return {
            "snake": [(point.x, point.y) for point in self.snake],
            "food": (self.food.x, self.food.y),
            "direction": self.direction.value,
            "queued_direction": self.queued_direction.value,
            "score": self.score,
            "game_over": self.game_over,
            "victory": self.is_victory,
        }
