"""Stateful engine facade that a UI shell drives one action at a time."""

from __future__ import annotations

import random
from typing import Any, Generic, Iterable, Mapping, Sequence

from .agents.policy_agent import Policy, PolicyAgent
from .difficulty import DEFAULT_DIFFICULTY, Difficulty
from .events import EventType, MatchEvent
from .game import Game, MoveT, PlayerId, StateT
from .result import MatchResult
from .serialize import stable_seed, to_serializable


class GameEngine(Generic[StateT, MoveT]):
    """
    Owns one live state of a pure `Game` and exposes the UI action surface.

    Every action validates turn, phase, and target first and is a silent no-op
    (returns False, state unchanged) when the validation fails. Rejections are
    still recorded in `events` so a replay shows what the UI attempted.
    """

    def __init__(
        self,
        game: Game[StateT, MoveT, Any],
        *,
        policy: Policy | None = None,
        ai_players: Iterable[PlayerId] = (),
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        self.game = game
        self.policy = policy
        self.ai_players = frozenset(ai_players)
        self.config = dict(config or {})
        self.events: list[MatchEvent] = []
        self._difficulty = Difficulty.parse(difficulty)
        self._base_seed = seed if seed is not None else random.SystemRandom().randrange(1, 2**31)
        self._round = 0
        self._turn = 0
        self._agents: dict[PlayerId, PolicyAgent] = {}
        self._state: StateT
        self.reset()

    @property
    def game_id(self) -> str:
        return f"{self.game.game_name}-{self._base_seed}-{self._round}"

    @property
    def state(self) -> StateT:
        """Current immutable state snapshot."""
        return self._state

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def seed(self) -> int:
        """Seed of the current round (changes on every reset)."""
        return stable_seed(self._base_seed, self._round)

    def reset(self) -> None:
        """Start a fresh round with a new shuffle and the documented starting seat."""
        self._round += 1
        self._turn = 0
        match_config = dict(self.config)
        match_config["difficulty"] = self._difficulty.value
        self._state = self.game.new_game(seed=self.seed, config=match_config)
        self._agents = {}
        if self.policy is not None:
            for player_id in self.ai_players:
                agent = PolicyAgent(f"policy-{player_id.lower()}", self.policy, self._difficulty)
                agent.reset(self.game_id, player_id, self.game.role_for_player(self._state, player_id), self.seed, match_config)
                self._agents[player_id] = agent
        self._emit(
            EventType.RESET if self._round > 1 else EventType.MATCH_START,
            {
                "seed": self.seed,
                "difficulty": self._difficulty.value,
                "ai_players": sorted(self.ai_players),
                "current_player": self.current_player,
            },
        )

    def set_difficulty(self, difficulty: Difficulty | str) -> None:
        """Change the AI tier; always resets the round."""
        self._difficulty = Difficulty.parse(difficulty)
        self.reset()

    @property
    def current_player(self) -> PlayerId | None:
        if self.is_over:
            return None
        return self.game.current_player(self._state)

    @property
    def is_over(self) -> bool:
        return self.game.is_terminal(self._state)

    @property
    def winner(self) -> str | None:
        if not self.is_over:
            return None
        return self.game.outcome(self._state).winner

    def outcome(self) -> MatchResult | None:
        return self.game.outcome(self._state) if self.is_over else None

    def legal_moves(self, player_id: PlayerId | None = None) -> Sequence[MoveT]:
        """Legal moves for a seat (default: the seat to move), recomputed on demand."""
        if self.is_over:
            return []
        seat = player_id or self.game.current_player(self._state)
        return list(self.game.legal_moves(self._state, seat))

    def status_text(self) -> str:
        text = self.game.status_text(self._state)
        if self.is_ai_turn():
            return f"{text} (AI is thinking)"
        return text

    def is_ai_turn(self) -> bool:
        return not self.is_over and self.game.current_player(self._state) in self._agents

    def play(self, move: MoveT | None, player_id: PlayerId | None = None) -> bool:
        """Apply a human move; out-of-turn, AI-seat, and illegal moves are ignored."""
        if move is None or self.is_over:
            return False
        seat = player_id or self.game.current_player(self._state)
        if seat in self._agents:
            self._reject(seat, move, "Seat is controlled by the AI.")
            return False
        return self._apply(seat, move)

    def perform_ai_move(self) -> bool:
        """Let the AI seat to move act once; returns False when it is not the AI's turn."""
        if not self.is_ai_turn():
            return False
        seat = self.game.current_player(self._state)
        agent = self._agents[seat]
        move = agent.act(self.game.observation(self._state, seat), self.legal_moves(seat))
        if move is None:
            self._emit(EventType.PASS, {"player_id": seat})
            return False
        return self._apply(seat, move)

    def run_ai_turns(self, limit: int = 1000) -> int:
        """Play AI turns until a human seat is to move or the game ends."""
        played = 0
        while played < limit and self.perform_ai_move():
            played += 1
        return played

    def observation(self, player_id: PlayerId) -> Any:
        return self.game.observation(self._state, player_id)

    def render(self, player_id: PlayerId | None = None) -> str:
        return self.game.render(self._state, player_id)

    def _apply(self, seat: PlayerId, move: MoveT) -> bool:
        legal, reason = self.game.is_legal(self._state, seat, move)
        if not legal:
            self._reject(seat, move, reason)
            return False
        self._state = self.game.apply_move(self._state, seat, move)
        self._turn += 1
        self._emit(
            EventType.TURN,
            {
                "player_id": seat,
                "move": to_serializable(move),
                "ai": seat in self._agents,
                "state_digest": self._state.state_digest() if hasattr(self._state, "state_digest") else None,
            },
        )
        if self.is_over:
            self._emit(EventType.TERMINAL, {"result": self.game.outcome(self._state).to_dict()})
        return True

    def _reject(self, seat: PlayerId, move: Any, reason: str | None) -> None:
        self._emit(EventType.REJECTED_ACTION, {"player_id": seat, "move": to_serializable(move), "reason": reason})

    def _emit(self, event_type: EventType, payload: dict[str, Any]) -> None:
        self.events.append(MatchEvent.create(event_type=event_type, game_id=self.game_id, turn=self._turn, payload=payload))
