"""In-memory arcade sessions: one engine facade per session, stepped by HTTP calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from uuid import uuid4

from framework.arcade import ArcadeEngine
from framework.arena import parse_agent_spec
from framework.difficulty import Difficulty
from framework.engine import GameEngine
from framework.registry import GAMES, GameEntry, get_entry
from framework.runner import MatchRunner, RunnerConfig
from framework.serialize import to_serializable


def list_games() -> list[dict[str, Any]]:
    """Catalogue entries for the title picker."""
    return [
        {"name": entry.name, "title": entry.title, "turn_based": entry.turn_based}
        for entry in GAMES.values()
    ]


def _serialize_moves(moves: Any) -> list[dict[str, Any]]:
    return [move.to_dict() if hasattr(move, "to_dict") else to_serializable(move) for move in moves]


@dataclass
class MatchSession:
    """
    One live session.

    Turn-based titles wrap a `GameEngine`; the server plays AI seats after
    every accepted human move so a view is always at a human decision point.
    Arcade titles wrap an `ArcadeEngine` and are driven by named actions.
    """

    session_id: str
    entry: GameEntry
    engine: GameEngine[Any, Any] | ArcadeEngine

    @classmethod
    def create(cls, *, game: str, difficulty: str, seed: int | None) -> "MatchSession":
        entry = get_entry(game)
        engine = entry.create_engine(Difficulty.parse(difficulty), seed=seed)
        session = cls(session_id=f"session-{uuid4().hex[:10]}", entry=entry, engine=engine)
        session.advance_until_human_turn()
        return session

    @property
    def is_turn_based(self) -> bool:
        return isinstance(self.engine, GameEngine)

    def human_seat(self) -> str | None:
        """First seat not driven by the AI, or the seat to move when every seat is AI."""
        if not isinstance(self.engine, GameEngine):
            return None
        seats = self.engine.game.player_ids(self.engine.state)
        for seat in seats:
            if seat not in self.engine.ai_players:
                return seat
        return self.engine.current_player or seats[0]

    def advance_until_human_turn(self) -> int:
        if isinstance(self.engine, GameEngine):
            return self.engine.run_ai_turns()
        return 0

    def submit_move(self, *, player_id: str | None, move_payload: Mapping[str, Any]) -> dict[str, Any]:
        """Apply a human move for a turn-based title; a rejected move leaves the state unchanged."""
        if not isinstance(self.engine, GameEngine):
            raise ValueError(f"{self.entry.name} takes actions, not moves.")
        seat = player_id or self.engine.current_player
        if seat is not None and seat in self.engine.ai_players:
            raise PermissionError(f"{seat} is controlled by the AI.")
        move = self.engine.game.parse_move(move_payload)
        accepted = self.engine.play(move, seat)
        if accepted:
            self.advance_until_human_turn()
        return self.view(accepted=accepted)

    def perform_action(self, *, action: str, params: Mapping[str, Any]) -> dict[str, Any]:
        if not isinstance(self.engine, ArcadeEngine):
            raise ValueError(f"{self.entry.name} takes moves, not actions.")
        try:
            accepted = self.engine.perform(action, params)
        except TypeError as exc:
            raise ValueError(f"Bad parameters for {action!r}: {exc}") from exc
        return self.view(accepted=accepted)

    def set_difficulty(self, difficulty: str) -> dict[str, Any]:
        self.engine.set_difficulty(Difficulty.parse(difficulty))
        self.advance_until_human_turn()
        return self.view()

    def reset(self) -> dict[str, Any]:
        self.engine.reset()
        self.advance_until_human_turn()
        return self.view()

    def view(self, *, accepted: bool | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "session_id": self.session_id,
            "game": self.entry.name,
            "title": self.entry.title,
            "difficulty": self.engine.difficulty.value,
            "seed": self.engine.seed,
            "is_over": self.engine.is_over,
            "status": self.engine.status_text(),
        }
        if accepted is not None:
            payload["accepted"] = accepted
        if isinstance(self.engine, ArcadeEngine):
            payload["actions"] = list(self.engine.actions)
            payload["snapshot"] = to_serializable(self.engine.snapshot())
            return payload

        seat = self.human_seat()
        result = self.engine.outcome()
        payload.update(
            {
                "player_id": seat,
                "current_player": self.engine.current_player,
                "winner": self.engine.winner,
                "board": self.engine.render(seat),
                "observation": to_serializable(self.engine.observation(seat)) if seat is not None else None,
                "legal_moves": _serialize_moves(self.engine.legal_moves(seat)) if seat == self.engine.current_player else [],
                "result": result.to_dict() if result is not None else None,
            }
        )
        return payload

    def events(self) -> list[dict[str, Any]]:
        return [event.to_dict() for event in self.engine.events]


class SessionStore:
    """In-memory session dictionary keyed by session ID."""

    def __init__(self) -> None:
        self._sessions: dict[str, MatchSession] = {}

    def create_session(self, *, game: str, difficulty: str, seed: int | None) -> MatchSession:
        session = MatchSession.create(game=game, difficulty=difficulty, seed=seed)
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> MatchSession:
        if session_id not in self._sessions:
            raise KeyError(session_id)
        return self._sessions[session_id]

    def all_events(self, session_id: str) -> list[dict[str, Any]]:
        return self.get(session_id).events()


def simulate_match(*, game: str, seed: int, agents: str, difficulty: str, max_turns: int) -> dict[str, Any]:
    """Play one seeded AI-vs-AI match and return its result with the event log."""
    entry = get_entry(game)
    if not entry.turn_based:
        raise ValueError(f"{entry.name} has no AI-vs-AI mode.")
    game_impl = entry.game_factory()()
    player_ids = list(game_impl.player_ids(game_impl.new_game(seed=seed, config={})))
    default = Difficulty.parse(difficulty).value
    seat_agents = parse_agent_spec(agents, player_ids, entry.policy(), default)
    run = MatchRunner(RunnerConfig(max_turns=max_turns)).run_match(game=game_impl, agents=seat_agents, seed=seed)
    return {"result": run.result.to_dict(), "events": [event.to_dict() for event in run.events]}
