"""Core rules interface shared by every turn-based arcade game."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, Sequence, TypeVar

from .move import Move
from .observation import Observation
from .result import MatchResult

PlayerId = str
StateT = TypeVar("StateT")
MoveT = TypeVar("MoveT", bound=Move)
ObservationT = TypeVar("ObservationT", bound=Observation)
LegalMovesSpec = Sequence[MoveT]


class Game(ABC, Generic[StateT, MoveT, ObservationT]):
    """Pure rules module: every method takes a state and never mutates it."""

    game_name: str = "game"
    default_config: dict[str, Any] = {}

    def resolve_config(self, config: Mapping[str, Any] | None) -> dict[str, Any]:
        """Merge a per-match config over the game's defaults."""
        merged = dict(self.default_config)
        merged.update(config or {})
        return merged

    @abstractmethod
    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> StateT:
        """Create the documented initial state for a seeded match."""

    @abstractmethod
    def player_ids(self, state: StateT) -> Sequence[PlayerId]:
        """Return all seats in turn order."""

    def role_for_player(self, state: StateT, player_id: PlayerId) -> str | None:
        """Return a role label for a seat (side colour, dealer, ...)."""
        return player_id

    @abstractmethod
    def current_player(self, state: StateT) -> PlayerId:
        """Return the seat whose turn it is."""

    @abstractmethod
    def legal_moves(self, state: StateT, player_id: PlayerId) -> LegalMovesSpec:
        """Return every legal move for a seat (empty when it is not their turn)."""

    def is_legal(self, state: StateT, player_id: PlayerId, move: MoveT) -> tuple[bool, str | None]:
        """Return whether a move is legal and an optional reason when illegal."""
        if self.is_terminal(state):
            return False, "Game is already over."
        if player_id != self.current_player(state):
            return False, f"It is not {player_id}'s turn."
        if move not in self.legal_moves(state, player_id):
            return False, f"{move!r} is not a legal move."
        return True, None

    @abstractmethod
    def apply_move(self, state: StateT, player_id: PlayerId, move: MoveT) -> StateT:
        """Apply a legal move and return the next state; raises ValueError when illegal."""

    @abstractmethod
    def is_terminal(self, state: StateT) -> bool:
        """Return whether the state is terminal."""

    @abstractmethod
    def outcome(self, state: StateT) -> MatchResult:
        """Return a structured match result for a terminal state."""

    @abstractmethod
    def observation(self, state: StateT, player_id: PlayerId) -> ObservationT:
        """Return a seat-specific view (hidden cards stay hidden)."""

    @abstractmethod
    def render(self, state: StateT, player_id: PlayerId | None = None) -> str:
        """Render the state as text for debugging and replay tooling."""

    def status_text(self, state: StateT) -> str:
        """Human-readable status line derived from the state."""
        if self.is_terminal(state):
            winner = self.outcome(state).winner
            return f"Game over. {winner} wins." if winner else "Game over. It's a draw."
        return f"{self.current_player(state)} to move."

    def parse_move(self, data: Mapping[str, Any]) -> MoveT:
        """Parse a move payload produced by external agents or the HTTP API."""
        raise NotImplementedError(f"{self.__class__.__name__} does not implement parse_move().")

    def forfeit_winner(self, state: StateT, offending_player_id: PlayerId, reason: str) -> str | None:
        """Return the winner for runner-enforced forfeits; two-seat games award the other seat."""
        seats = list(self.player_ids(state))
        if len(seats) == 2 and offending_player_id in seats:
            return seats[1] if seats[0] == offending_player_id else seats[0]
        return None
