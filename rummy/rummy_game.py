"""Gin rummy rules: draw, discard, knock, and score rounds to 100."""

from __future__ import annotations

import random
from typing import Any, Mapping, Sequence

from framework.cards import Card, shuffled_deck
from framework.game import Game
from framework.result import MatchResult
from framework.serialize import stable_seed

from .rummy_melds import compute_layoffs, deadwood_points, find_optimal_melds, hand_deadwood, sort_hand
from .rummy_moves import Discard, DrawDiscard, DrawStock, Knock, NextRound, Pass, RummyMove, move_from_dict
from .rummy_state import (
    GIN_BONUS,
    HAND_SIZE,
    KNOCK_THRESHOLD,
    SEATS,
    UNDERCUT_BONUS,
    WINNING_SCORE,
    KnockReveal,
    Phase,
    RummyObservation,
    RummyState,
    other_seat,
)

STOCK_EXHAUSTED = "Stock exhausted. Round is a draw."


def deal_round(seed: int, round_number: int) -> tuple[dict[str, tuple[Card, ...]], tuple[Card, ...], tuple[Card, ...]]:
    """Deal alternately, ten cards each, then flip one card to start the discard pile."""
    deck = shuffled_deck(random.Random(stable_seed(seed, "round", round_number)))
    hands: dict[str, list[Card]] = {seat: [] for seat in SEATS}
    for _ in range(HAND_SIZE):
        for seat in SEATS:
            hands[seat].append(deck.pop(0))
    discard = (deck.pop(0),)
    return {seat: sort_hand(cards) for seat, cards in hands.items()}, tuple(deck), discard


def can_knock(hand: Sequence[Card]) -> bool:
    return len(hand) == HAND_SIZE and hand_deadwood(hand) <= KNOCK_THRESHOLD


class RummyGame(Game[RummyState, RummyMove, RummyObservation]):
    """Two-seat gin rummy; YOU draws first every round."""

    game_name = "rummy"

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> RummyState:
        hands, stock, discard = deal_round(seed, 1)
        return RummyState(seed=seed, round_number=1, hands=hands, stock=stock, discard_pile=discard)

    def player_ids(self, state: RummyState) -> Sequence[str]:
        return SEATS

    def current_player(self, state: RummyState) -> str:
        return state.current

    def legal_moves(self, state: RummyState, player_id: str) -> list[RummyMove]:
        if player_id != state.current:
            return []
        phase = state.phase
        if phase is Phase.ROUND_OVER:
            return [NextRound()]
        if phase is Phase.DRAW:
            moves: list[RummyMove] = []
            if state.stock:
                moves.append(DrawStock())
            if state.discard_pile:
                moves.append(DrawDiscard())
            return moves
        if phase is Phase.DISCARD:
            return [Discard(card) for card in state.hands[player_id]]
        if phase is Phase.KNOCK_DECISION:
            return [Knock(), Pass()]
        return []

    def apply_move(self, state: RummyState, player_id: str, move: RummyMove) -> RummyState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")
        turn = state.turn_count + 1

        if isinstance(move, NextRound):
            hands, stock, discard = deal_round(state.seed, state.round_number + 1)
            return RummyState(
                seed=state.seed,
                round_number=state.round_number + 1,
                hands=hands,
                stock=stock,
                discard_pile=discard,
                scores=dict(state.scores),
                turn_count=turn,
            )

        hand = state.hands[player_id]
        if isinstance(move, DrawStock):
            return state.evolve(
                hands={**state.hands, player_id: sort_hand(hand + state.stock[:1])},
                stock=state.stock[1:],
                phase=Phase.DISCARD,
                turn_count=turn,
            )
        if isinstance(move, DrawDiscard):
            top = state.discard_pile[-1]
            return state.evolve(
                hands={**state.hands, player_id: sort_hand(hand + (top,))},
                discard_pile=state.discard_pile[:-1],
                picked_from_discard={**state.picked_from_discard, player_id: state.picked_from_discard[player_id] + (top,)},
                phase=Phase.DISCARD,
                turn_count=turn,
            )
        if isinstance(move, Discard):
            remaining = list(hand)
            remaining.remove(move.card)
            next_state = state.evolve(
                hands={**state.hands, player_id: tuple(remaining)},
                discard_pile=state.discard_pile + (move.card,),
                discarded={**state.discarded, player_id: state.discarded[player_id] + (move.card,)},
                turn_count=turn,
            )
            if can_knock(remaining):
                return next_state.evolve(phase=Phase.KNOCK_DECISION)
            return self._end_turn(next_state, player_id)
        if isinstance(move, Pass):
            return self._end_turn(state.evolve(turn_count=turn), player_id)
        return self._resolve_knock(state.evolve(turn_count=turn), player_id)

    def _end_turn(self, state: RummyState, player_id: str) -> RummyState:
        if not state.stock:
            return state.evolve(phase=Phase.ROUND_OVER, current=SEATS[0], round_message=STOCK_EXHAUSTED)
        return state.evolve(phase=Phase.DRAW, current=other_seat(player_id))

    def _resolve_knock(self, state: RummyState, knocker: str) -> RummyState:
        defender = other_seat(knocker)
        knocker_melds, knocker_deadwood = find_optimal_melds(state.hands[knocker])
        knocker_points = deadwood_points(knocker_deadwood)
        gin = knocker_points == 0

        defender_melds, defender_raw = find_optimal_melds(state.hands[defender])
        defender_deadwood = defender_raw if gin else compute_layoffs(defender_raw, knocker_melds)
        defender_points = deadwood_points(defender_deadwood)

        undercut = False
        if gin:
            scorer, points = knocker, GIN_BONUS + defender_points
            message = f"GIN! {knocker} scores {points} points."
        elif defender_points <= knocker_points:
            undercut = True
            scorer, points = defender, UNDERCUT_BONUS + (knocker_points - defender_points)
            message = f"UNDERCUT! {defender} scores {points} points."
        else:
            scorer, points = knocker, defender_points - knocker_points
            message = f"{knocker} knocked and scores {points} points."

        scores = dict(state.scores)
        scores[scorer] += points
        reveal = KnockReveal(
            knocker=knocker,
            gin=gin,
            undercut=undercut,
            points=points,
            scorer=scorer,
            knocker_melds=tuple(knocker_melds),
            knocker_deadwood=tuple(knocker_deadwood),
            defender_melds=tuple(defender_melds),
            defender_deadwood=tuple(defender_deadwood),
        )
        next_state = state.evolve(scores=scores, reveal=reveal, current=SEATS[0])
        if any(score >= WINNING_SCORE for score in scores.values()):
            winner = self._leader(scores)
            return next_state.evolve(phase=Phase.GAME_OVER, round_message=f"{message} {winner} won the game!")
        return next_state.evolve(phase=Phase.ROUND_OVER, round_message=message)

    @staticmethod
    def _leader(scores: Mapping[str, int]) -> str:
        return SEATS[0] if scores[SEATS[0]] >= scores[SEATS[1]] else SEATS[1]

    def is_terminal(self, state: RummyState) -> bool:
        return state.phase is Phase.GAME_OVER

    def outcome(self, state: RummyState) -> MatchResult:
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=self._leader(state.scores),
            scores={seat: float(score) for seat, score in state.scores.items()},
            turns=state.turn_count,
            details=state.round_message,
            state_digest=state.state_digest(),
        )

    def observation(self, state: RummyState, player_id: str) -> RummyObservation:
        opponent = other_seat(player_id)
        return RummyObservation(
            player_id=player_id,
            hand=state.hands[player_id],
            opponent_card_count=len(state.hands[opponent]),
            stock_count=len(state.stock),
            discard_top=state.discard_top,
            phase=state.phase,
            scores=dict(state.scores),
            picked_by_opponent=state.picked_from_discard[opponent],
            own_discards=state.discarded[player_id],
            reveal=state.reveal,
        )

    def render(self, state: RummyState, player_id: str | None = None) -> str:
        seats = [player_id] if player_id else list(SEATS)
        lines = [f"round {state.round_number} phase {state.phase.value} current {state.current}"]
        for seat in seats:
            lines.append(f"{seat}: {' '.join(card.label for card in state.hands[seat])}")
        top = state.discard_top.label if state.discard_top else "-"
        lines.append(f"stock {len(state.stock)} discard {top} scores {state.scores}")
        return "\n".join(lines)

    def status_text(self, state: RummyState) -> str:
        if state.phase in (Phase.ROUND_OVER, Phase.GAME_OVER):
            return state.round_message
        return f"{state.current}: {state.phase.value.replace('_', ' ').lower()}."

    def parse_move(self, data: Mapping[str, Any]) -> RummyMove:
        return move_from_dict(data)
