"""Sort-or-splode: drag drifting items into the matching bin before they expire."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping

from framework.arcade import ArcadeEngine
from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.serialize import to_serializable

MAX_LIVES = 3
LEVEL_UP_THRESHOLD = 10
MAX_ITEMS_ON_SCREEN = 5
BASE_DRIFT_SPEED = 0.00008
SPEED_INCREMENT = 0.000012
SPAWN_INTERVAL_BASE_MS = 2200
SPAWN_INTERVAL_MIN_MS = 800
ITEM_LIFETIME_BASE_MS = 12000
ITEM_LIFETIME_MIN_MS = 5000
EXPLOSION_MS = 600
BOUNDS = (-0.15, 1.15)

TIMING_FACTOR = {Difficulty.EASY: 1.4, Difficulty.NORMAL: 1.0, Difficulty.HARD: 0.7}
SPEED_FACTOR = {Difficulty.EASY: 0.65, Difficulty.NORMAL: 1.0, Difficulty.HARD: 1.45}
BIN_COUNT = {Difficulty.EASY: 2, Difficulty.NORMAL: 3, Difficulty.HARD: 4}


class RoundType(str, Enum):
    COLOR = "COLOR"
    SHAPE = "SHAPE"
    NUMBER = "NUMBER"


class ItemShape(str, Enum):
    CIRCLE = "CIRCLE"
    SQUARE = "SQUARE"
    TRIANGLE = "TRIANGLE"
    DIAMOND = "DIAMOND"


COLOR_ITEMS = (
    ("Red", "#EF4444", ItemShape.CIRCLE),
    ("Blue", "#3B82F6", ItemShape.SQUARE),
    ("Green", "#22C55E", ItemShape.TRIANGLE),
    ("Yellow", "#EAB308", ItemShape.DIAMOND),
)
SHAPE_ITEMS = (
    ("Circle", "#8B5CF6", ItemShape.CIRCLE),
    ("Square", "#F97316", ItemShape.SQUARE),
    ("Triangle", "#06B6D4", ItemShape.TRIANGLE),
    ("Diamond", "#EC4899", ItemShape.DIAMOND),
)
NUMBER_CATEGORIES = ("Odd", "Even")
ROUND_CYCLE = {
    Difficulty.EASY: (RoundType.COLOR, RoundType.NUMBER),
    Difficulty.NORMAL: (RoundType.COLOR, RoundType.SHAPE, RoundType.NUMBER),
    Difficulty.HARD: (RoundType.COLOR, RoundType.SHAPE, RoundType.NUMBER),
}


@dataclass(frozen=True)
class FallingItem:
    id: int
    category: str
    shape: ItemShape
    color: str
    label: str
    x: float
    y: float
    velocity_x: float
    velocity_y: float
    entry_angle: float
    spawn_time: int


@dataclass(frozen=True)
class Bin:
    label: str
    category: str
    index: int


@dataclass(frozen=True)
class Explosion:
    id: int
    x: float
    y: float
    progress: float = 0.0
    is_correct: bool = False
    points_text: str = ""


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class SortOrSplodeEngine(ArcadeEngine):
    """Positions are fractions of the play area; items spawn just outside an edge and drift inward."""

    game_name = "sorter"
    actions = ("tick", "sort_item", "update_item_position", "release_item", "spawn_item")

    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        self.dragged_item_id: int | None = None
        super().__init__(difficulty, seed=seed, config=config)

    def _new_session(self) -> None:
        self.score = 0
        self.combo = 0
        self.lives = MAX_LIVES
        self.level = 1
        self.game_over = False
        self.items: list[FallingItem] = []
        self.explosions: list[Explosion] = []
        self.bins: list[Bin] = []
        self.dragged_item_id = None
        self._next_id = 0
        self._correct_count = 0
        self._round_index = 0
        self._game_time_ms = 0
        # The first item appears on the first tick.
        self._since_spawn_ms = self.spawn_interval_ms
        self._setup_round()

    # -- derived -------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.game_over

    @property
    def bin_count(self) -> int:
        return BIN_COUNT[self.difficulty]

    @property
    def drift_speed(self) -> float:
        return (BASE_DRIFT_SPEED + (self.level - 1) * SPEED_INCREMENT) * SPEED_FACTOR[self.difficulty]

    @property
    def item_lifetime_ms(self) -> int:
        base = max(ITEM_LIFETIME_BASE_MS - (self.level - 1) * 400, ITEM_LIFETIME_MIN_MS)
        return int(base * TIMING_FACTOR[self.difficulty])

    @property
    def spawn_interval_ms(self) -> int:
        base = max(SPAWN_INTERVAL_BASE_MS - (self.level - 1) * 120, SPAWN_INTERVAL_MIN_MS)
        return int(base * TIMING_FACTOR[self.difficulty])

    def status_text(self) -> str:
        return "Game Over" if self.game_over else f"Level {self.level}"

    # -- actions -------------------------------------------------------

    def tick(self, delta_ms: int) -> bool:
        """Advance explosions and item drift, expire stale items, then maybe spawn one."""
        if self.game_over:
            return False
        self._game_time_ms += delta_ms
        speed = self.drift_speed

        self.explosions = [
            replace(explosion, progress=explosion.progress + delta_ms / EXPLOSION_MS)
            for explosion in self.explosions
            if explosion.progress + delta_ms / EXPLOSION_MS < 1.0
        ]

        survivors: list[FallingItem] = []
        expired: list[FallingItem] = []
        low, high = BOUNDS
        for item in self.items:
            if item.id == self.dragged_item_id:
                survivors.append(item)
                continue
            x = item.x + item.velocity_x * speed * delta_ms
            y = item.y + item.velocity_y * speed * delta_ms
            age = self._game_time_ms - item.spawn_time
            if not (low <= x <= high and low <= y <= high) or age > self.item_lifetime_ms:
                expired.append(item)
            else:
                survivors.append(replace(item, x=x, y=y))
        self.items = survivors
        for item in expired:
            self._lose_life(_clamp(item.x, 0.0, 1.0), _clamp(item.y, 0.0, 1.0))

        self._since_spawn_ms += delta_ms
        if self._since_spawn_ms >= self.spawn_interval_ms and len(self.items) < MAX_ITEMS_ON_SCREEN and not self.game_over:
            self.spawn_item()
            self._since_spawn_ms = 0
        if expired:
            self._record("tick", {"expired": [item.id for item in expired], "lives": self.lives})
        return True

    def update_item_position(self, item_id: int, delta_x: float, delta_y: float) -> bool:
        """Move a dragged item; dragging restarts its lifetime."""
        if self.game_over:
            return False
        for index, item in enumerate(self.items):
            if item.id == item_id:
                self.items[index] = replace(
                    item,
                    x=_clamp(item.x + delta_x, -0.1, 1.1),
                    y=_clamp(item.y + delta_y, -0.1, 1.1),
                    spawn_time=self._game_time_ms,
                )
                self.dragged_item_id = item_id
                return True
        return False

    def release_item(self) -> bool:
        """Let go of the held item so it drifts and ages again."""
        if self.game_over or self.dragged_item_id is None:
            return False
        self.dragged_item_id = None
        return True

    def sort_item(self, item_id: int, bin_index: int) -> bool:
        """Drop an item into a bin; returns whether the sort was correct."""
        if self.game_over:
            return False
        item = next((candidate for candidate in self.items if candidate.id == item_id), None)
        if item is None or not 0 <= bin_index < len(self.bins):
            self._reject({"item_id": item_id, "bin_index": bin_index}, "No such item or bin.")
            return False
        self.items = [candidate for candidate in self.items if candidate.id != item_id]
        if self.dragged_item_id == item_id:
            self.dragged_item_id = None

        correct = item.category == self.bins[bin_index].category
        if correct:
            self.combo += 1
            points = 10 * self.combo
            self.score += points
            self._correct_count += 1
            self._add_explosion(item.x, item.y, is_correct=True, text=f"+{points}")
            self._check_level_up()
        else:
            self._lose_life(item.x, item.y)
        self._record("sort_item", {"item_id": item_id, "bin_index": bin_index, "correct": correct, "score": self.score})
        return correct

    def spawn_item(self) -> bool:
        if self.game_over:
            return False
        category = self.rng.choice(self._categories())
        self.items.append(self._create_item(category))
        return True

    # -- internals -----------------------------------------------------

    @property
    def current_round_type(self) -> RoundType:
        cycle = ROUND_CYCLE[self.difficulty]
        return cycle[self._round_index % len(cycle)]

    def _categories(self) -> list[str]:
        round_type = self.current_round_type
        if round_type is RoundType.COLOR:
            names = [name for name, _, _ in COLOR_ITEMS]
        elif round_type is RoundType.SHAPE:
            names = [name for name, _, _ in SHAPE_ITEMS]
        else:
            names = list(NUMBER_CATEGORIES)
        return names[: self.bin_count]

    def _setup_round(self) -> None:
        self.bins = [Bin(label=category, category=category, index=i) for i, category in enumerate(self._categories())]

    def _create_item(self, category: str) -> FallingItem:
        item_id = self._next_id
        self._next_id += 1
        x, y, vx, vy, angle = self._edge_spawn()
        round_type = self.current_round_type
        if round_type is RoundType.COLOR:
            color = next(hex_code for name, hex_code, _ in COLOR_ITEMS if name == category)
            shape = self.rng.choice(list(ItemShape))
            label = category[0]
        elif round_type is RoundType.SHAPE:
            shape = next(item_shape for name, _, item_shape in SHAPE_ITEMS if name == category)
            color = self.rng.choice([hex_code for _, hex_code, _ in COLOR_ITEMS])
            label = category[0]
        else:
            odd = category == "Odd"
            value = self.rng.randrange(0, 50) * 2 + 1 if odd else self.rng.randrange(1, 50) * 2
            color = "#F59E0B" if odd else "#14B8A6"
            shape = ItemShape.DIAMOND if odd else ItemShape.CIRCLE
            label = str(value)
        return FallingItem(item_id, category, shape, color, label, x, y, vx, vy, angle, self._game_time_ms)

    def _edge_spawn(self) -> tuple[float, float, float, float, float]:
        """Pick one of eight entry points and aim at the central play area with a little jitter."""
        rng = self.rng
        target_x = 0.2 + rng.random() * 0.6
        target_y = 0.15 + rng.random() * 0.45
        edge = rng.randrange(8)
        if edge == 0:
            sx, sy = -0.08, 0.1 + rng.random() * 0.6
        elif edge == 1:
            sx, sy = 1.08, 0.1 + rng.random() * 0.6
        elif edge in (2, 3):
            sx, sy = 0.1 + rng.random() * 0.8, -0.08
        elif edge == 4:
            sx, sy = -0.08, -0.08
        elif edge == 5:
            sx, sy = 1.08, -0.08
        elif edge == 6:
            sx, sy = -0.08, 0.7
        else:
            sx, sy = 1.08, 0.7
        dx, dy = target_x - sx, target_y - sy
        angle = math.atan2(dy, dx)
        magnitude = max(math.hypot(dx, dy), 0.1)
        vx = dx / magnitude + (rng.random() - 0.5) * 0.3
        vy = dy / magnitude + (rng.random() - 0.5) * 0.3
        return sx, sy, vx, vy, angle

    def _check_level_up(self) -> None:
        if self._correct_count >= self.level * LEVEL_UP_THRESHOLD:
            self.level += 1
            if self.level % 2 == 1:
                self._round_index += 1
                self._setup_round()

    def _lose_life(self, x: float, y: float) -> None:
        self.combo = 0
        self.lives -= 1
        self._add_explosion(x, y, is_correct=False, text="💥")
        if self.lives <= 0:
            self.lives = 0
            self.game_over = True

    def _add_explosion(self, x: float, y: float, *, is_correct: bool, text: str) -> None:
        self.explosions.append(Explosion(self._next_id, x, y, is_correct=is_correct, points_text=text))
        self._next_id += 1

    def snapshot(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "combo": self.combo,
            "lives": self.lives,
            "level": self.level,
            "game_over": self.game_over,
            "round_type": self.current_round_type.value,
            "bins": to_serializable(self.bins),
            "items": to_serializable(self.items),
            "explosions": to_serializable(self.explosions),
        }
