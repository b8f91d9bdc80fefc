"""Catalogue of every title: rules class, opponent policy, and engine facade, imported lazily."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from typing import Any, Callable

from .difficulty import DEFAULT_DIFFICULTY, Difficulty


def _load(path: str) -> Any:
    module_name, _, attribute = path.partition(":")
    return getattr(import_module(module_name), attribute)


@dataclass(frozen=True)
class GameEntry:
    """
    One registered title.

    Turn-based titles name a `Game` class and a policy so the runner can play
    them AI-vs-AI; arcade titles only have an engine.
    """

    name: str
    title: str
    engine_path: str
    game_path: str | None = None
    policy_path: str | None = None

    @property
    def turn_based(self) -> bool:
        return self.game_path is not None

    def game_factory(self) -> Callable[[], Any]:
        if self.game_path is None:
            raise ValueError(f"{self.name} has no turn-based rules object.")
        return _load(self.game_path)

    def policy(self) -> Callable[..., Any]:
        if self.policy_path is None:
            raise ValueError(f"{self.name} has no opponent policy.")
        return _load(self.policy_path)

    def create_engine(self, difficulty: Difficulty | str = DEFAULT_DIFFICULTY, seed: int | None = None) -> Any:
        return _load(self.engine_path)(difficulty, seed=seed)


def _turn_based(name: str, title: str, package: str, prefix: str, engine: str, game: str) -> GameEntry:
    return GameEntry(
        name=name,
        title=title,
        engine_path=f"{package}.{prefix}_engine:{engine}",
        game_path=f"{package}.{prefix}_game:{game}",
        policy_path=f"{package}.{prefix}_ai:choose_move",
    )


GAMES: dict[str, GameEntry] = {
    entry.name: entry
    for entry in (
        _turn_based("tictactoe", "Tic-tac-toe", "tictactoe", "tictactoe", "TicTacToeEngine", "TicTacToeGame"),
        _turn_based("connectfour", "Connect four", "connectfour", "connectfour", "ConnectFourEngine", "ConnectFourGame"),
        _turn_based("checkers", "Checkers", "checkers", "checkers", "CheckersEngine", "CheckersGame"),
        _turn_based("chess", "Chess", "chess_engine", "chess", "ChessEngine", "ChessGame"),
        _turn_based("takeover", "Takeover", "takeover", "takeover", "TakeoverEngine", "TakeoverGame"),
        _turn_based("dotsandboxes", "Dots and boxes", "dotsandboxes", "dotsandboxes", "DotsAndBoxesEngine", "DotsAndBoxesGame"),
        _turn_based("rummy", "Gin rummy", "rummy", "rummy", "RummyEngine", "RummyGame"),
        _turn_based("holdem", "Texas hold'em", "holdem", "holdem", "HoldemEngine", "HoldemGame"),
        _turn_based("president", "President", "president", "president", "PresidentEngine", "PresidentGame"),
        _turn_based("blackjack", "Blackjack", "blackjack", "blackjack", "BlackjackEngine", "BlackjackGame"),
        _turn_based("balance", "Balance", "balance", "balance", "BalanceEngine", "BalanceGame"),
        _turn_based("gridattack", "Grid attack", "gridattack", "gridattack", "GridAttackEngine", "GridAttackGame"),
        GameEntry("snake", "Snake", "snake.snake_engine:SnakeEngine"),
        GameEntry("wordballoon", "Word balloon", "wordballoon.wordballoon_engine:WordBalloonEngine"),
        GameEntry("culdechouette", "Cul de chouette", "culdechouette.culdechouette_engine:CulDeChouetteEngine"),
        GameEntry("sorter", "Sort or splode", "sorter.sorter_engine:SortOrSplodeEngine"),
    )
}


def get_entry(name: str) -> GameEntry:
    """Look up a title; unknown names raise KeyError."""
    try:
        return GAMES[name.strip().lower()]
    except KeyError as exc:
        raise KeyError(f"Unknown game: {name!r}. Expected one of {sorted(GAMES)}.") from exc


def turn_based_names() -> list[str]:
    return [name for name, entry in GAMES.items() if entry.turn_based]
