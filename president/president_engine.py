"""President engine facade: the human is "You", three AI seats play the rest."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from framework.cards import Card
from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .president_ai import choose_move
from .president_game import PresidentGame
from .president_moves import NextRound, Pass, PlayCards, PresidentMove
from .president_state import SEATS, Phase, PresidentState, Title

HUMAN = SEATS[0]


class PresidentEngine(GameEngine[PresidentState, PresidentMove]):
    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        self.selected_indices: set[int] = set()
        # An interactive session keeps dealing rounds until reset.
        super().__init__(
            PresidentGame(),
            policy=choose_move,
            ai_players=SEATS[1:],
            difficulty=difficulty,
            seed=seed,
            config={"rounds": 0, **(config or {})},
        )

    def reset(self) -> None:
        self.selected_indices = set()
        super().reset()

    @property
    def hand(self) -> tuple[Card, ...]:
        return self.state.hands[HUMAN]

    @property
    def pile(self) -> tuple[Card, ...]:
        return self.state.pile

    @property
    def titles(self) -> dict[str, Title]:
        return dict(self.state.titles)

    @property
    def is_revolution(self) -> bool:
        return self.state.revolution

    @property
    def round_over(self) -> bool:
        return self.state.phase is Phase.ROUND_END

    @property
    def playable_indices(self) -> set[int]:
        """Hand positions that belong to at least one legal play for the human."""
        if self.current_player != HUMAN or self.round_over:
            return set()
        playable = {card for move in self.legal_moves(HUMAN) if isinstance(move, PlayCards) for card in move.cards}
        return {index for index, card in enumerate(self.hand) if card in playable}

    def select_card(self, index: int) -> bool:
        if index not in self.playable_indices:
            return False
        self.selected_indices ^= {index}
        return True

    def play_cards(self, indices: Sequence[int]) -> bool:
        if not indices or any(not 0 <= index < len(self.hand) for index in indices):
            return False
        played = self.play(PlayCards(tuple(self.hand[index] for index in sorted(set(indices)))), HUMAN)
        if played:
            self.selected_indices = set()
        return played

    def play_selected(self) -> bool:
        return self.play_cards(sorted(self.selected_indices))

    def pass_turn(self) -> bool:
        played = self.play(Pass(), HUMAN)
        if played:
            self.selected_indices = set()
        return played

    def new_round(self) -> bool:
        return self.play(NextRound(), HUMAN)

    def trigger_ai_move(self) -> bool:
        return self.perform_ai_move()
