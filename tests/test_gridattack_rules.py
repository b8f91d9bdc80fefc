"""Rule and targeting tests for grid attack."""

from __future__ import annotations

import random

import pytest

from framework.difficulty import Difficulty
from gridattack.gridattack_ai import focus_targets, pick_target, target_neighbors
from gridattack.gridattack_engine import GridAttackEngine
from gridattack.gridattack_game import GridAttackGame
from gridattack.gridattack_moves import Attack
from gridattack.gridattack_state import (
    CELL_COUNT,
    SHIP_SIZES,
    GridAttackState,
    Seat,
    Ship,
    ShotResult,
    apply_attack,
    cell_index,
    fleet_cells,
    format_cell,
    random_fleet,
)


def _fixed_state() -> GridAttackState:
    player = (Ship("ship-1", 3, (0, 1, 2)), Ship("ship-2", 2, (6, 12)), Ship("ship-3", 2, (30, 31)))
    cpu = (Ship("ship-1", 3, (3, 4, 5)), Ship("ship-2", 2, (20, 26)), Ship("ship-3", 2, (34, 35)))
    return GridAttackState(seed=0, fleets={Seat.PLAYER: player, Seat.CPU: cpu})


@pytest.mark.parametrize("seed", range(5))
def test_random_fleet_places_every_ship_without_overlap(seed: int) -> None:
    fleet = random_fleet(random.Random(seed))
    assert [ship.size for ship in fleet] == list(SHIP_SIZES)
    assert len(fleet_cells(fleet)) == sum(SHIP_SIZES)


def test_hit_and_sink_are_reported() -> None:
    fleet = (Ship("ship-1", 2, (0, 1)),)
    first = apply_attack(fleet, {}, 0)
    assert first.result is ShotResult.HIT
    assert first.sunk_ship_size is None
    second = apply_attack(first.fleet, first.shots, 1)
    assert second.sunk_ship_size == 2
    assert second.all_sunk


def test_turns_alternate_and_repeat_shots_are_illegal() -> None:
    game = GridAttackGame()
    state = game.apply_move(_fixed_state(), "PLAYER", Attack(3))
    assert state.shots[Seat.PLAYER] == {3: ShotResult.HIT}
    assert state.last_event == "Direct hit at A4."
    assert game.current_player(state) == "CPU"
    state = game.apply_move(state, "CPU", Attack(10))
    with pytest.raises(ValueError):
        game.apply_move(state, "PLAYER", Attack(3))


def test_sinking_the_last_ship_wins() -> None:
    game = GridAttackGame()
    state = _fixed_state()
    cpu_misses = iter(cell for cell in range(CELL_COUNT) if cell not in fleet_cells(state.fleets[Seat.PLAYER]))
    for target in (3, 4, 5, 20, 26, 34, 35):
        state = game.apply_move(state, "PLAYER", Attack(target))
        if not game.is_terminal(state):
            state = game.apply_move(state, "CPU", Attack(next(cpu_misses)))
    assert game.outcome(state).winner == "PLAYER"
    assert game.status_text(state).startswith("Victory!")


def test_observation_hides_unsunk_enemy_ships() -> None:
    game = GridAttackGame()
    observation = game.observation(_fixed_state(), "PLAYER")
    assert observation.enemy_sunk_cells == frozenset()
    assert fleet_cells(observation.own_fleet) == frozenset({0, 1, 2, 6, 12, 30, 31})


def test_targeting_follows_hits() -> None:
    shots = {cell_index(2, 2): ShotResult.HIT, cell_index(2, 3): ShotResult.HIT}
    hits = list(shots)
    assert cell_index(1, 2) in target_neighbors(shots, hits)
    assert focus_targets(shots, hits) == [cell_index(2, 1), cell_index(2, 4)]
    assert pick_target(shots, frozenset(), Difficulty.HARD, random.Random(0)) in {cell_index(2, 1), cell_index(2, 4)}


def test_hard_hunt_opens_near_the_centre() -> None:
    target = pick_target({}, frozenset(), Difficulty.HARD, random.Random(0))
    assert target == cell_index(2, 2)


def test_format_cell_uses_row_letters() -> None:
    assert format_cell(0) == "A1"
    assert format_cell(CELL_COUNT - 1) == "F6"


def test_engine_blocks_player_fire_on_cpu_turn() -> None:
    engine = GridAttackEngine(Difficulty.NORMAL, seed=12)
    assert engine.attack_enemy(0)
    assert not engine.can_target_enemy
    assert engine.attack_enemy(1) is False
    assert engine.execute_cpu_turn()
    assert engine.can_target_enemy
    assert engine.attack_enemy(0) is False
    assert engine.hits(Seat.CPU) + engine.misses(Seat.CPU) == 1
