"""President rules: climbing plays, passes, revolutions, titles and card exchange."""

from __future__ import annotations

import random
from itertools import combinations
from typing import Any, Mapping, Sequence

from framework.cards import Card, remove_cards, shuffled_deck
from framework.game import Game
from framework.result import MatchResult
from framework.serialize import stable_seed

from .president_moves import NextRound, Pass, PlayCards, PresidentMove, move_from_dict
from .president_state import (
    SEATS,
    THREE_OF_CLUBS,
    TITLE_BY_ORDER,
    TITLE_POINTS,
    Phase,
    PresidentObservation,
    PresidentState,
    Title,
    beats,
    effective_value,
    sort_hand,
)


def deal(seed: int, round_number: int) -> dict[str, tuple[Card, ...]]:
    """Deal the whole deck round-robin: thirteen cards per seat."""
    deck = shuffled_deck(random.Random(stable_seed(seed, "round", round_number)), ace_high=True)
    hands: dict[str, list[Card]] = {seat: [] for seat in SEATS}
    for index, card in enumerate(deck):
        hands[SEATS[index % len(SEATS)]].append(card)
    return {seat: sort_hand(cards) for seat, cards in hands.items()}


def exchange_cards(hands: Mapping[str, tuple[Card, ...]], titles: Mapping[str, Title]) -> dict[str, tuple[Card, ...]]:
    """Scum hands its two best cards up, President its two worst down; VP and Neutral swap one."""
    by_title = {title: seat for seat, title in titles.items()}
    result = {seat: tuple(cards) for seat, cards in hands.items()}
    pairs = ((Title.SCUM, Title.PRESIDENT, 2), (Title.NEUTRAL, Title.VICE_PRESIDENT, 1))
    for giver_title, receiver_title, count in pairs:
        giver, receiver = by_title.get(giver_title), by_title.get(receiver_title)
        if giver is None or receiver is None:
            continue
        best = tuple(sorted(result[giver], key=lambda card: effective_value(card.rank, False), reverse=True)[:count])
        worst = tuple(sorted(result[receiver], key=lambda card: effective_value(card.rank, False))[:count])
        result[giver] = sort_hand(remove_cards(result[giver], best) + worst)
        result[receiver] = sort_hand(remove_cards(result[receiver], worst) + best)
    return result


def three_of_clubs_holder(hands: Mapping[str, Sequence[Card]]) -> str:
    for seat in SEATS:
        if THREE_OF_CLUBS in hands[seat]:
            return seat
    return SEATS[0]


def valid_plays(hand: Sequence[Card], pile: Sequence[Card], revolution: bool) -> list[tuple[Card, ...]]:
    """Every single-rank combination from `hand` that may go on `pile`."""
    groups: dict[int, list[Card]] = {}
    for card in hand:
        groups.setdefault(card.rank, []).append(card)
    plays: list[tuple[Card, ...]] = []
    for rank, group in groups.items():
        if pile and not beats(rank, pile[0].rank, revolution):
            continue
        group = sorted(group, key=lambda card: card.suit.value)
        sizes = range(1, len(group) + 1) if not pile else (len(pile),)
        for size in sizes:
            plays.extend(combinations(group, size))
    return plays


def _canonical(cards: Sequence[Card]) -> tuple[Card, ...]:
    return tuple(sorted(cards, key=lambda card: (card.rank, card.suit.value)))


class PresidentGame(Game[PresidentState, PresidentMove, PresidentObservation]):
    """Four seats. `rounds` in the config bounds the match (0 plays on indefinitely)."""

    game_name = "president"
    default_config = {"rounds": 1}

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> PresidentState:
        resolved = self.resolve_config(config)
        hands = deal(seed, 1)
        return PresidentState(
            seed=seed,
            hands=hands,
            current=three_of_clubs_holder(hands),
            round_limit=int(resolved["rounds"]),
        )

    def player_ids(self, state: PresidentState) -> Sequence[str]:
        return SEATS

    def current_player(self, state: PresidentState) -> str:
        return state.current

    def legal_moves(self, state: PresidentState, player_id: str) -> list[PresidentMove]:
        if self.is_terminal(state) or player_id != state.current:
            return []
        if state.phase is Phase.ROUND_END:
            return [NextRound()]
        moves: list[PresidentMove] = [
            PlayCards(cards) for cards in valid_plays(state.hands[player_id], state.pile, state.revolution)
        ]
        if state.pile:
            moves.append(Pass())
        return moves

    def is_legal(self, state: PresidentState, player_id: str, move: PresidentMove) -> tuple[bool, str | None]:
        if isinstance(move, PlayCards):
            move = PlayCards(_canonical(move.cards))
        return super().is_legal(state, player_id, move)

    def apply_move(self, state: PresidentState, player_id: str, move: PresidentMove) -> PresidentState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")
        turn = state.turn_count + 1
        if isinstance(move, NextRound):
            return self._next_round(state.evolve(turn_count=turn))
        if isinstance(move, Pass):
            return self._pass(state.evolve(turn_count=turn), player_id)

        cards = _canonical(move.cards)
        revolution = not state.revolution if len(cards) == 4 else state.revolution
        hands = {seat: sort_hand(hand, revolution) for seat, hand in state.hands.items()}
        hands[player_id] = sort_hand(remove_cards(state.hands[player_id], cards), revolution)
        finished = state.finished + (player_id,) if not hands[player_id] else state.finished
        next_state = state.evolve(
            hands=hands,
            pile=cards,
            pass_count=0,
            last_played_by=player_id,
            revolution=revolution,
            finished=finished,
            last_action=f"{player_id} played {', '.join(card.label for card in cards)}",
            turn_count=turn,
        )
        if len(finished) >= len(SEATS) - 1:
            return self._finish_round(next_state)
        return next_state.evolve(current=self._next_unfinished(next_state, player_id))

    def _pass(self, state: PresidentState, player_id: str) -> PresidentState:
        passes = state.pass_count + 1
        state = state.evolve(pass_count=passes, last_action=f"{player_id} passed")
        if passes >= len(state.active_seats) - 1 and state.last_played_by is not None:
            leader = state.last_played_by
            state = state.evolve(pile=(), pass_count=0)
            if leader in state.finished:
                leader = self._next_unfinished(state, leader)
            return state.evolve(current=leader)
        return state.evolve(current=self._next_unfinished(state, player_id))

    @staticmethod
    def _next_unfinished(state: PresidentState, seat: str) -> str:
        start = SEATS.index(seat)
        for offset in range(1, len(SEATS) + 1):
            candidate = SEATS[(start + offset) % len(SEATS)]
            if candidate not in state.finished:
                return candidate
        return seat

    def _finish_round(self, state: PresidentState) -> PresidentState:
        order = state.finished + tuple(seat for seat in SEATS if seat not in state.finished)
        titles = {seat: TITLE_BY_ORDER[order.index(seat)] for seat in SEATS}
        points = {seat: state.points[seat] + TITLE_POINTS[titles[seat]] for seat in SEATS}
        return state.evolve(
            finished=order,
            titles=titles,
            points=points,
            phase=Phase.ROUND_END,
            pile=(),
            pass_count=0,
            current=SEATS[0],
            last_action=f"Round {state.round_number} complete!",
        )

    def _next_round(self, state: PresidentState) -> PresidentState:
        round_number = state.round_number + 1
        hands = exchange_cards(deal(state.seed, round_number), state.titles)
        return state.evolve(
            hands=hands,
            current=three_of_clubs_holder(hands),
            round_number=round_number,
            pile=(),
            pass_count=0,
            last_played_by=None,
            revolution=False,
            finished=(),
            phase=Phase.PLAYING,
            last_action="",
        )

    def is_terminal(self, state: PresidentState) -> bool:
        return state.phase is Phase.ROUND_END and 0 < state.round_limit <= state.round_number

    def outcome(self, state: PresidentState) -> MatchResult:
        best = max(state.points.values())
        leaders = [seat for seat in SEATS if state.points[seat] == best]
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=leaders[0] if len(leaders) == 1 else None,
            scores={seat: float(points) for seat, points in state.points.items()},
            turns=state.turn_count,
            details=state.last_action,
            state_digest=state.state_digest(),
        )

    def observation(self, state: PresidentState, player_id: str) -> PresidentObservation:
        return PresidentObservation(
            player_id=player_id,
            hand=state.hands[player_id],
            hand_sizes={seat: len(hand) for seat, hand in state.hands.items()},
            pile=state.pile,
            revolution=state.revolution,
            finished=state.finished,
            titles=dict(state.titles),
            phase=state.phase,
        )

    def render(self, state: PresidentState, player_id: str | None = None) -> str:
        pile = " ".join(card.label for card in state.pile) or "-"
        lines = [f"round {state.round_number} pile {pile} revolution {state.revolution} current {state.current}"]
        for seat in SEATS:
            hand = state.hands[seat]
            shown = " ".join(card.label for card in hand) if player_id in (None, seat) else f"{len(hand)} cards"
            title = state.titles[seat].display
            lines.append(f"{seat}{f' ({title})' if title else ''}: {shown}")
        return "\n".join(lines)

    def status_text(self, state: PresidentState) -> str:
        if state.phase is Phase.ROUND_END:
            president = next(seat for seat, title in state.titles.items() if title is Title.PRESIDENT)
            return f"{state.last_action} {president} is President."
        prefix = f"{state.last_action}. " if state.last_action else ""
        revolution = " Revolution!" if state.revolution else ""
        return f"{prefix}{state.current} to play.{revolution}"

    def parse_move(self, data: Mapping[str, Any]) -> PresidentMove:
        return move_from_dict(data)
