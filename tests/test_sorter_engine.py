"""Spawning, sorting, lives, and level tests for sort-or-splode."""

from __future__ import annotations

import pytest

from framework.difficulty import Difficulty
from sorter.sorter_engine import MAX_LIVES, RoundType, SortOrSplodeEngine


def _bin_for(engine: SortOrSplodeEngine, category: str, *, matching: bool = True) -> int:
    return next(slot.index for slot in engine.bins if (slot.category == category) is matching)


def _sort_new_item(engine: SortOrSplodeEngine, *, correct: bool = True) -> bool:
    engine.spawn_item()
    item = engine.items[-1]
    return engine.sort_item(item.id, _bin_for(engine, item.category, matching=correct))


@pytest.mark.parametrize(("difficulty", "bins"), [(Difficulty.EASY, 2), (Difficulty.NORMAL, 3), (Difficulty.HARD, 4)])
def test_bin_count_follows_difficulty(difficulty: Difficulty, bins: int) -> None:
    engine = SortOrSplodeEngine(difficulty, seed=1)
    assert len(engine.bins) == bins
    assert engine.current_round_type is RoundType.COLOR


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_first_tick_spawns_an_item(difficulty: Difficulty) -> None:
    engine = SortOrSplodeEngine(difficulty, seed=1)
    assert engine.items == []
    assert engine.tick(16)
    assert len(engine.items) == 1
    assert engine.items[0].category in {slot.category for slot in engine.bins}


def test_correct_sorts_build_a_combo() -> None:
    engine = SortOrSplodeEngine(seed=1)
    assert _sort_new_item(engine)
    assert _sort_new_item(engine)
    assert engine.combo == 2
    assert engine.score == 10 + 20
    assert engine.items == []


def test_wrong_bin_costs_a_life_and_the_combo() -> None:
    engine = SortOrSplodeEngine(seed=1)
    _sort_new_item(engine)
    assert _sort_new_item(engine, correct=False) is False
    assert engine.lives == MAX_LIVES - 1
    assert engine.combo == 0


def test_unknown_item_or_bin_is_rejected() -> None:
    engine = SortOrSplodeEngine(seed=1)
    engine.spawn_item()
    assert engine.sort_item(999, 0) is False
    assert engine.sort_item(engine.items[0].id, 99) is False
    assert engine.lives == MAX_LIVES
    assert len(engine.items) == 1


def test_stale_items_expire_unless_dragged() -> None:
    engine = SortOrSplodeEngine(seed=1)
    engine.spawn_item()
    engine.spawn_item()
    held = engine.items[0]
    assert engine.perform("update_item_position", {"item_id": held.id, "delta_x": 0.0, "delta_y": 0.0})
    assert engine.dragged_item_id == held.id
    engine.tick(20000)
    assert engine.lives == MAX_LIVES - 1
    assert held.id in {item.id for item in engine.items}


def test_released_item_ages_again() -> None:
    engine = SortOrSplodeEngine(seed=1)
    engine.spawn_item()
    held = engine.items[0]
    assert engine.update_item_position(held.id, 0.0, 0.0)
    assert engine.release_item()
    assert engine.dragged_item_id is None
    assert engine.release_item() is False
    engine.tick(20000)
    assert held.id not in {item.id for item in engine.items}
    assert engine.lives == MAX_LIVES - 1


def test_sorting_the_held_item_drops_the_drag() -> None:
    engine = SortOrSplodeEngine(seed=1)
    engine.spawn_item()
    held = engine.items[0]
    engine.update_item_position(held.id, 0.0, 0.0)
    engine.sort_item(held.id, 0)
    assert engine.dragged_item_id is None


def test_dragging_clamps_position() -> None:
    engine = SortOrSplodeEngine(seed=1)
    engine.spawn_item()
    item_id = engine.items[0].id
    assert engine.update_item_position(item_id, 5.0, -5.0)
    assert (engine.items[0].x, engine.items[0].y) == (1.1, -0.1)
    assert engine.update_item_position(999, 0.1, 0.1) is False


def test_levels_rise_and_rotate_round_types() -> None:
    engine = SortOrSplodeEngine(Difficulty.NORMAL, seed=1)
    speed = engine.drift_speed
    for _ in range(10):
        _sort_new_item(engine)
    assert engine.level == 2
    assert engine.current_round_type is RoundType.COLOR
    assert engine.drift_speed > speed
    for _ in range(10):
        _sort_new_item(engine)
    assert engine.level == 3
    assert engine.current_round_type is RoundType.SHAPE
    assert [slot.category for slot in engine.bins] == ["Circle", "Square", "Triangle"]


def test_three_mistakes_end_the_session() -> None:
    engine = SortOrSplodeEngine(seed=1)
    for _ in range(MAX_LIVES):
        _sort_new_item(engine, correct=False)
    assert engine.is_over
    assert engine.status_text() == "Game Over"
    assert engine.tick(16) is False
    assert engine.spawn_item() is False
    assert engine.update_item_position(0, 0.1, 0.1) is False
    assert engine.dragged_item_id is None
    assert engine.snapshot()["lives"] == 0
