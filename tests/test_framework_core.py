"""Registry, serialization, and event-log tests for the shared framework."""

from __future__ import annotations

import random

import pytest

from framework.arcade import ArcadeEngine
from framework.cards import Card, Suit, card_from_dict, remove_cards, shuffled_deck, standard_deck
from framework.difficulty import Difficulty
from framework.engine import GameEngine
from framework.errors import IllegalMoveError
from framework.events import EventType, MatchEvent, read_jsonl, write_jsonl
from framework.registry import GAMES, get_entry, turn_based_names
from framework.result import MatchResult, TerminationReason
from framework.serialize import digest, json_dumps, stable_seed, to_serializable
from tictactoe.tictactoe_moves import Place


@pytest.mark.parametrize("name", sorted(GAMES))
def test_every_title_builds_a_fresh_engine(name: str) -> None:
    engine = get_entry(name).create_engine(Difficulty.EASY, seed=21)
    assert isinstance(engine, (GameEngine, ArcadeEngine))
    assert engine.difficulty is Difficulty.EASY
    assert not engine.is_over
    assert isinstance(engine.status_text(), str)
    assert engine.events[0].event_type is EventType.MATCH_START


@pytest.mark.parametrize("name", turn_based_names())
def test_same_seed_builds_the_same_opening_position(name: str) -> None:
    first = get_entry(name).create_engine("NORMAL", seed=8)
    second = get_entry(name).create_engine("NORMAL", seed=8)
    assert digest(to_serializable(first.state)) == digest(to_serializable(second.state))


_ARCADE_OPENING = {
    "snake": ("step", {}),
    "wordballoon": ("guess_letter", {"letter": "e"}),
    "culdechouette": ("roll_chouettes", {}),
    "sorter": ("tick", {"delta_ms": 3000}),
}


def _view(engine) -> str:
    if isinstance(engine, ArcadeEngine):
        return digest(to_serializable(engine.snapshot()))
    return digest(to_serializable(engine.state))


def _play_something(engine) -> None:
    if isinstance(engine, ArcadeEngine):
        action, params = _ARCADE_OPENING[engine.game_name]
        engine.perform(action, params)
    elif engine.is_ai_turn():
        assert engine.perform_ai_move()
    else:
        assert engine.play(engine.legal_moves()[0])


@pytest.mark.parametrize("name", sorted(GAMES))
def test_reset_after_play_matches_an_untouched_reset(name: str) -> None:
    played = get_entry(name).create_engine("NORMAL", seed=13)
    untouched = get_entry(name).create_engine("NORMAL", seed=13)
    _play_something(played)
    played.reset()
    untouched.reset()
    assert played.seed == untouched.seed
    assert _view(played) == _view(untouched)
    assert not played.is_over
    assert played.events[-1].event_type is EventType.RESET


@pytest.mark.parametrize("name", sorted(GAMES))
def test_set_difficulty_restarts_with_the_new_tier(name: str) -> None:
    engine = get_entry(name).create_engine("EASY", seed=13)
    fresh = get_entry(name).create_engine("HARD", seed=13)
    _play_something(engine)
    engine.set_difficulty("hard")
    fresh.reset()
    assert engine.difficulty is Difficulty.HARD
    assert _view(engine) == _view(fresh)
    assert engine.events[-1].event_type is EventType.RESET


def test_registry_lookup() -> None:
    assert len(GAMES) == 16
    assert len(turn_based_names()) == 12
    assert get_entry(" Chess ").title == "Chess"
    with pytest.raises(KeyError):
        get_entry("pinball")
    with pytest.raises(ValueError):
        get_entry("snake").game_factory()


def test_difficulty_parse() -> None:
    assert Difficulty.parse("hard") is Difficulty.HARD
    assert Difficulty.parse(None, Difficulty.EASY) is Difficulty.EASY
    with pytest.raises(ValueError):
        Difficulty.parse("expert")
    with pytest.raises(ValueError):
        Difficulty.parse(None)


def test_serialization_is_deterministic() -> None:
    assert json_dumps({"b": 1, "a": (Suit.HEARTS, frozenset({2, 1}))}) == '{"a":["HEARTS",[1,2]],"b":1}'
    assert digest({"x": 1, "y": 2}) == digest({"y": 2, "x": 1})
    assert stable_seed(1, "game", "O") == stable_seed(1, "game", "O")
    assert stable_seed(1, "game", "O") != stable_seed(1, "game", "X")
    assert to_serializable(Place(index=3)) == {"index": 3}
    with pytest.raises(TypeError):
        to_serializable(object())


def test_deck_helpers() -> None:
    assert len(set(standard_deck())) == 52
    assert max(card.rank for card in standard_deck(ace_high=True)) == 14
    assert shuffled_deck(random.Random(4)) == shuffled_deck(random.Random(4))
    assert card_from_dict({"rank": 12, "suit": "hearts"}) == Card(12, Suit.HEARTS)
    hand = (Card(2, Suit.CLUBS), Card(2, Suit.CLUBS), Card(5, Suit.SPADES))
    assert remove_cards(hand, [Card(2, Suit.CLUBS)]) == (Card(2, Suit.CLUBS), Card(5, Suit.SPADES))
    assert Card(14, Suit.SPADES).label == "A♠"
    with pytest.raises(ValueError):
        Card(15, Suit.SPADES)


def test_events_survive_a_jsonl_round_trip(tmp_path) -> None:
    events = [
        MatchEvent.create(EventType.MATCH_START, "g-1", 0, {"seed": 1}),
        MatchEvent.create(EventType.TURN, "g-1", 1, {"move": Place(index=4).to_dict()}),
    ]
    path = tmp_path / "logs" / "g-1.jsonl"
    write_jsonl(path, events)
    assert read_jsonl(path) == events


def test_match_result_round_trip_and_error_payloads() -> None:
    result = MatchResult.for_state(game_name="tictactoe", seed=3, winner="X", scores={"X": 1, "O": 0}, turns=5)
    assert result.termination_reason is TerminationReason.NORMAL_WIN
    assert MatchResult.from_dict(result.to_dict()) == result
    assert MatchResult.for_state(game_name="tictactoe", seed=3, winner=None).termination_reason is TerminationReason.DRAW

    error = IllegalMoveError("O", Place(index=4), "Cell is occupied.")
    assert error.to_dict() == {
        "type": "IllegalMoveError",
        "message": "Illegal move by O: Cell is occupied.",
        "player_id": "O",
        "move": {"index": 4, "type": "Place"},
        "reason": "Cell is occupied.",
    }
