"""Combination scoring and turn-flow tests for cul de chouette."""

from __future__ import annotations

import pytest

from culdechouette.culdechouette_combos import ComboType, evaluate_combo
from culdechouette.culdechouette_engine import SUITE_PENALTY, WINNING_SCORE, CulDeChouetteEngine, Phase
from framework.difficulty import Difficulty


def _loaded(engine: CulDeChouetteEngine, monkeypatch: pytest.MonkeyPatch, *values: int) -> None:
    rolls = iter(values)
    monkeypatch.setattr(engine, "_roll_die", lambda: next(rolls))


@pytest.mark.parametrize(
    ("dice", "combo_type", "points"),
    [
        ((3, 3, 3), ComboType.CUL_DE_CHOUETTE, 70),
        ((4, 2, 2), ComboType.CHOUETTE_VELUTE, 32),
        ((1, 1, 2), ComboType.CHOUETTE_VELUTE, 8),
        ((2, 1, 3), ComboType.VELUTE, 18),
        ((3, 2, 4), ComboType.SUITE, 0),
        ((5, 2, 5), ComboType.CHOUETTE, 25),
        ((1, 3, 6), ComboType.NEANT, 0),
    ],
)
def test_combo_priority_and_points(dice: tuple[int, int, int], combo_type: ComboType, points: int) -> None:
    combo = evaluate_combo(dice)
    assert combo.type is combo_type
    assert combo.points == points


def test_ai_count_follows_difficulty() -> None:
    assert len(CulDeChouetteEngine(Difficulty.EASY, seed=1).players) == 2
    assert len(CulDeChouetteEngine(Difficulty.HARD, seed=1).players) == 4


def test_human_rolls_chouettes_then_cul_and_scores(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = CulDeChouetteEngine(seed=1)
    _loaded(engine, monkeypatch, 4, 4, 4)
    assert engine.roll_cul() is False
    assert engine.roll_chouettes()
    assert engine.dice == [4, 4, 0]
    assert engine.roll_cul()
    assert engine.phase is Phase.SHOWING_CUL
    assert engine.players[0].score == 80
    assert engine.status_text() == "Cul de Chouette de 4!"


def test_turn_passes_to_ai_players_in_order(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = CulDeChouetteEngine(Difficulty.NORMAL, seed=1)
    _loaded(engine, monkeypatch, 1, 3, 6, 5, 5, 2)
    engine.roll_chouettes()
    engine.roll_cul()
    assert engine.advance_phase()
    assert engine.phase is Phase.SHOWING_RESULT
    assert engine.advance_phase()
    assert engine.phase is Phase.AI_TURN
    assert engine.status_text() == "AI 1 is rolling."
    assert engine.process_ai_turn() == 25
    assert engine.players[1].score == 25
    assert engine.roll_chouettes() is False


def test_fast_reaction_wins_a_suite(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = CulDeChouetteEngine(Difficulty.NORMAL, seed=1)
    _loaded(engine, monkeypatch, 2, 3, 4)
    engine.roll_chouettes()
    engine.roll_cul()
    assert engine.phase is Phase.REACTION_CHALLENGE
    assert engine.react_to_challenge(elapsed_ms=50)
    assert engine.reaction_winner_index == 0
    assert engine.players[0].score == 0
    assert sum(player.score for player in engine.players[1:]) == -SUITE_PENALTY


def test_slow_reaction_loses_a_suite(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = CulDeChouetteEngine(Difficulty.NORMAL, seed=1)
    _loaded(engine, monkeypatch, 2, 3, 4)
    engine.roll_chouettes()
    engine.roll_cul()
    engine.react_to_challenge(elapsed_ms=5000)
    assert engine.players[0].score == -SUITE_PENALTY
    assert engine.combo_text.endswith(f"You lose {SUITE_PENALTY} pts!")


def test_reaction_time_comes_from_the_injected_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    now = [10.0]
    engine = CulDeChouetteEngine(Difficulty.NORMAL, seed=1, clock=lambda: now[0])
    _loaded(engine, monkeypatch, 2, 2, 4)
    engine.roll_chouettes()
    engine.roll_cul()
    now[0] = 10.25
    engine.react_to_challenge()
    assert engine.reaction_time_ms == 250
    assert engine.players[0].score == 32
    assert engine.combo_text.endswith("You grab it!")


def test_reaching_the_target_ends_the_game(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = CulDeChouetteEngine(seed=1)
    engine.players[0].score = WINNING_SCORE - 10
    _loaded(engine, monkeypatch, 6, 6, 6)
    engine.roll_chouettes()
    engine.roll_cul()
    engine.advance_phase()
    engine.advance_phase()
    assert engine.is_over
    assert engine.winner_index == 0
    assert engine.status_text().startswith("You wins with")
    assert engine.perform("roll_chouettes") is False
