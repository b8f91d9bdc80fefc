"""Texas hold'em rules for four seats: blinds, four betting streets, showdown."""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Any, Mapping, Sequence

from framework.cards import shuffled_deck
from framework.game import Game
from framework.result import MatchResult
from framework.serialize import stable_seed

from .holdem_hands import evaluate_best_hand
from .holdem_moves import AllIn, Call, Check, Fold, HoldemMove, NextHand, RaiseTo, move_from_dict
from .holdem_state import (
    BIG_BLIND,
    SEAT_NAMES,
    SMALL_BLIND,
    HoldemObservation,
    HoldemState,
    Phase,
    PublicSeat,
    Seat,
    ShowdownEntry,
)

_COMMUNITY_DEAL = {Phase.PREFLOP: (Phase.FLOP, 3), Phase.FLOP: (Phase.TURN, 1), Phase.TURN: (Phase.RIVER, 1)}


def _replace_seat(seats: tuple[Seat, ...], index: int, seat: Seat) -> tuple[Seat, ...]:
    return seats[:index] + (seat,) + seats[index + 1 :]


def next_funded(seats: Sequence[Seat], start: int) -> int:
    """Next seat after `start` still in the hand with chips behind."""
    count = len(seats)
    for offset in range(1, count + 1):
        index = (start + offset) % count
        if not seats[index].folded and seats[index].chips > 0:
            return index
    return start


def next_to_act(seats: Sequence[Seat], start: int) -> int | None:
    count = len(seats)
    for offset in range(1, count + 1):
        index = (start + offset) % count
        if seats[index].can_act:
            return index
    return None


def min_raise_to(state: HoldemState) -> int:
    return state.current_bet + BIG_BLIND


class HoldemGame(Game[HoldemState, HoldemMove, HoldemObservation]):
    """
    No-limit hold'em, one pot, no side pots.

    Busted seats sit out folded. The match ends once a single seat holds chips.
    Between hands the first funded seat in table order deals the next hand.
    """

    game_name = "holdem"

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> HoldemState:
        table = HoldemState(seed=seed, seats=tuple(Seat(name=name) for name in SEAT_NAMES))
        return self._start_hand(table)

    def player_ids(self, state: HoldemState) -> Sequence[str]:
        return SEAT_NAMES

    def current_player(self, state: HoldemState) -> str:
        if state.hand_over:
            return state.seats[state.funded_seats[0]].name
        return state.seats[state.active_index].name

    def legal_moves(self, state: HoldemState, player_id: str) -> list[HoldemMove]:
        if self.is_terminal(state) or player_id != self.current_player(state):
            return []
        if state.hand_over:
            return [NextHand()]
        seat = state.seats[state.active_index]
        to_call = state.current_bet - seat.bet
        moves: list[HoldemMove] = [Fold()]
        moves.append(Check() if to_call <= 0 else Call())
        # Representative raise sizes; any amount in range is accepted by is_legal.
        ceiling = seat.bet + seat.chips
        for amount in (min_raise_to(state), state.current_bet + 2 * BIG_BLIND, state.current_bet + state.pot):
            if amount < ceiling and RaiseTo(amount) not in moves:
                moves.append(RaiseTo(amount))
        moves.append(AllIn())
        return moves

    def is_legal(self, state: HoldemState, player_id: str, move: HoldemMove) -> tuple[bool, str | None]:
        if isinstance(move, RaiseTo) and not self.is_terminal(state) and player_id == self.current_player(state):
            if state.hand_over:
                return False, "The hand is over."
            seat = state.seats[state.active_index]
            if move.amount < min_raise_to(state):
                return False, f"Raise must be to at least {min_raise_to(state)}."
            if move.amount - seat.bet >= seat.chips:
                return False, "Raise exceeds the stack; go all in instead."
            return True, None
        return super().is_legal(state, player_id, move)

    def apply_move(self, state: HoldemState, player_id: str, move: HoldemMove) -> HoldemState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")
        if isinstance(move, NextHand):
            return self._start_hand(state.evolve(action_count=state.action_count + 1))

        index = state.active_index
        seat = state.seats[index]
        to_call = state.current_bet - seat.bet
        current_bet = state.current_bet
        acted = state.acted | {index}
        pot = state.pot

        if isinstance(move, Fold):
            seat = replace(seat, folded=True)
            message = f"{seat.name} folds."
        elif isinstance(move, Check):
            message = f"{seat.name} checks."
        elif isinstance(move, Call):
            paid = min(to_call, seat.chips)
            seat = self._pay(seat, paid)
            pot += paid
            message = f"{seat.name} calls {paid}."
        elif isinstance(move, RaiseTo):
            paid = move.amount - seat.bet
            seat = self._pay(seat, paid)
            pot += paid
            current_bet = move.amount
            acted = frozenset({index})
            message = f"{seat.name} raises to {move.amount}."
        else:
            paid = seat.chips
            seat = self._pay(seat, paid)
            pot += paid
            if seat.bet > current_bet:
                current_bet = seat.bet
                acted = frozenset({index})
            message = f"{seat.name} goes all in for {paid}."

        next_state = state.evolve(
            seats=_replace_seat(state.seats, index, seat),
            pot=pot,
            current_bet=current_bet,
            acted=acted,
            message=message,
            action_count=state.action_count + 1,
        )
        return self._after_action(next_state, index)

    @staticmethod
    def _pay(seat: Seat, amount: int) -> Seat:
        chips = seat.chips - amount
        return replace(seat, chips=chips, bet=seat.bet + amount, all_in=chips == 0)

    def _start_hand(self, state: HoldemState) -> HoldemState:
        seats = tuple(
            Seat(seat.name, seat.chips, (), folded=seat.chips <= 0) for seat in state.seats
        )
        dealer = next_funded(seats, state.dealer_index)
        hand_number = state.hand_number + 1
        deck = shuffled_deck(random.Random(stable_seed(state.seed, "hand", hand_number)), ace_high=True)

        holes: list[list] = [[] for _ in seats]
        for _ in range(2):
            for index, seat in enumerate(seats):
                if not seat.folded:
                    holes[index].append(deck.pop(0))
        seats = tuple(
            Seat(seat.name, seat.chips, tuple(holes[index]), seat.folded) for index, seat in enumerate(seats)
        )

        pot = 0
        small = next_funded(seats, dealer)
        big = next_funded(seats, small)
        for index, blind in ((small, SMALL_BLIND), (big, BIG_BLIND)):
            paid = min(blind, seats[index].chips)
            seats = _replace_seat(seats, index, self._pay(seats[index], paid))
            pot += paid

        hand = state.evolve(
            seats=seats,
            hand_number=hand_number,
            deck=tuple(deck),
            community=(),
            pot=pot,
            current_bet=max(seat.bet for seat in seats),
            phase=Phase.PREFLOP,
            dealer_index=dealer,
            acted=frozenset(),
            message=f"Hand {hand_number}: {seats[dealer].name} deals.",
            showdown=(),
        )
        first = next_to_act(seats, big)
        if first is None:
            return self._advance_phase(hand)
        hand = hand.evolve(active_index=first)
        if self._round_complete(hand):
            return self._advance_phase(hand)
        return hand

    @staticmethod
    def _round_complete(state: HoldemState) -> bool:
        can_act = [index for index, seat in enumerate(state.seats) if seat.can_act]
        if not can_act:
            return True
        matched = all(state.seats[index].bet == state.current_bet for index in can_act)
        if len(can_act) == 1 and matched:
            return True
        return matched and all(index in state.acted for index in can_act)

    def _after_action(self, state: HoldemState, actor: int) -> HoldemState:
        live = [index for index, seat in enumerate(state.seats) if not seat.folded]
        if len(live) == 1:
            return self._award(state, live, Phase.HAND_OVER, f"{state.seats[live[0]].name} wins the pot of {state.pot}!")
        if self._round_complete(state):
            return self._advance_phase(state)
        following = next_to_act(state.seats, actor)
        return state.evolve(active_index=following if following is not None else actor)

    def _advance_phase(self, state: HoldemState) -> HoldemState:
        while state.phase in _COMMUNITY_DEAL:
            phase, count = _COMMUNITY_DEAL[state.phase]
            seats = tuple(replace(seat, bet=0) for seat in state.seats)
            state = state.evolve(
                seats=seats,
                phase=phase,
                community=state.community + state.deck[:count],
                deck=state.deck[count:],
                current_bet=0,
                acted=frozenset(),
            )
            can_act = [index for index, seat in enumerate(seats) if seat.can_act]
            if len(can_act) > 1:
                first = next_to_act(seats, state.dealer_index)
                return state.evolve(active_index=first if first is not None else state.active_index)
        return self._showdown(state)

    def _showdown(self, state: HoldemState) -> HoldemState:
        entries = tuple(
            ShowdownEntry(seat.name, seat.hole, evaluate_best_hand(seat.hole + state.community))
            for seat in state.seats
            if not seat.folded
        )
        best = max(entry.evaluation for entry in entries)
        winners = [state.seat_index(entry.name) for entry in entries if entry.evaluation == best]
        names = " and ".join(state.seats[index].name for index in winners)
        verb = "split" if len(winners) > 1 else "wins"
        message = f"{names} {verb} the pot of {state.pot} with {best.category.display}!"
        return self._award(state.evolve(showdown=entries), winners, Phase.SHOWDOWN, message)

    @staticmethod
    def _award(state: HoldemState, winners: Sequence[int], phase: Phase, message: str) -> HoldemState:
        share, remainder = divmod(state.pot, len(winners))
        seats = list(state.seats)
        for position, index in enumerate(winners):
            seat = seats[index]
            bonus = share + (remainder if position == 0 else 0)
            seats[index] = replace(seat, chips=seat.chips + bonus)
        return state.evolve(seats=tuple(seats), pot=0, phase=phase, message=message)

    def is_terminal(self, state: HoldemState) -> bool:
        return state.hand_over and len(state.funded_seats) <= 1

    def outcome(self, state: HoldemState) -> MatchResult:
        funded = state.funded_seats
        winner = state.seats[funded[0]].name if len(funded) == 1 else None
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=winner,
            scores={seat.name: float(seat.chips) for seat in state.seats},
            turns=state.action_count,
            details=state.message,
            state_digest=state.state_digest(),
        )

    def observation(self, state: HoldemState, player_id: str) -> HoldemObservation:
        index = state.seat_index(player_id)
        return HoldemObservation(
            player_id=player_id,
            seat_index=index,
            hole=state.seats[index].hole,
            community=state.community,
            seats=tuple(PublicSeat(s.name, s.chips, s.folded, s.bet, s.all_in) for s in state.seats),
            pot=state.pot,
            current_bet=state.current_bet,
            phase=state.phase,
            dealer_index=state.dealer_index,
            showdown=state.showdown,
        )

    def render(self, state: HoldemState, player_id: str | None = None) -> str:
        board = " ".join(card.label for card in state.community) or "-"
        lines = [f"hand {state.hand_number} {state.phase.value} pot {state.pot} bet {state.current_bet} board {board}"]
        for index, seat in enumerate(state.seats):
            visible = player_id is None or player_id == seat.name or state.phase is Phase.SHOWDOWN
            hole = " ".join(card.label for card in seat.hole) if visible else "?? ??"
            marks = ("D" if index == state.dealer_index else "") + ("*" if index == state.active_index else "")
            flags = " folded" if seat.folded else (" all-in" if seat.all_in else "")
            lines.append(f"{marks:2} {seat.name}: {seat.chips} chips bet {seat.bet} [{hole}]{flags}")
        return "\n".join(lines)

    def status_text(self, state: HoldemState) -> str:
        if self.is_terminal(state):
            return f"Game over! {self.outcome(state).winner} has all the chips."
        if state.hand_over:
            return state.message
        seat = state.seats[state.active_index]
        to_call = state.current_bet - seat.bet
        prompt = f"{seat.name} to act" + (f" ({to_call} to call)" if to_call > 0 else "")
        return f"{state.phase.value.title()}: {prompt}."

    def parse_move(self, data: Mapping[str, Any]) -> HoldemMove:
        return move_from_dict(data)

