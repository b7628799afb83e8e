"""Blackjack round engine.

The engine is a pure transition function: ``reduce(state, action)`` returns
the next immutable ``RoundState``. An action that is illegal in the current
state (wrong phase, unmet rule, insufficient bankroll) is rejected by
returning the very same state object, so callers detect rejection with
``next_state is state``. The ``can_*`` predicates let callers check before
offering an action.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Any, Callable, Mapping, Sequence

from blackjack_core.cards import Card, draw_card, fresh_shoe, next_seed
from blackjack_core.counting import update_running_count
from blackjack_core.hand import HandValue, evaluate_cards, is_pair
from blackjack_core.rules import (
    Outcome,
    Rules,
    insurance_payout,
    payout_for_outcome,
    should_shuffle,
    to_money,
)
from blackjack_core.game import actions as act
from blackjack_core.game.phases import is_allowed, is_valid_transition
from blackjack_core.game.state import (
    ZERO,
    DealTarget,
    Hand,
    HandResult,
    HandStatus,
    InsuranceResult,
    Phase,
    RoundResult,
    RoundState,
    Seat,
)

logger = logging.getLogger(__name__)

MAX_SEATS = 7
DEFAULT_BANKROLL = Decimal("1000")
DEFAULT_SEED = 1


def create_initial_state(
    bankroll: Decimal | float | int = DEFAULT_BANKROLL,
    seats: int = 1,
    rules: Rules | Mapping[str, Any] | None = None,
    seed: int = DEFAULT_SEED,
    shoe: Sequence[Card] | None = None,
) -> RoundState:
    """
    Build the state a session starts from.

    Args:
        bankroll: Starting bankroll of every seat
        seats: Number of seats to open (1-7)
        rules: A Rules instance or a mapping of overrides to the defaults
        seed: Seed for the first shuffle
        shoe: Pre-set shoe order (index 0 dealt first); skips shuffling

    Returns:
        A RoundState in the BETTING phase

    Raises:
        ValueError: If the seat count, bankroll or a rule option is invalid
    """
    if not 1 <= seats <= MAX_SEATS:
        raise ValueError(f"seats must be between 1 and {MAX_SEATS}")
    money = to_money(bankroll)
    if money < 0:
        raise ValueError("bankroll cannot be negative")

    if rules is None:
        table_rules = Rules()
    elif isinstance(rules, Rules):
        table_rules = rules
    else:
        table_rules = Rules.from_overrides(dict(rules))

    cards = tuple(shoe) if shoe is not None else fresh_shoe(table_rules.decks, seed)

    return RoundState(
        rules=table_rules,
        shoe=cards,
        seats=tuple(Seat(seat_index=i, bankroll=money) for i in range(seats)),
        seed=seed,
    )


# --- drawing ---------------------------------------------------------------


def _draw(state: RoundState) -> tuple[Card, RoundState]:
    card, shoe = draw_card(state.shoe)
    return card, replace(
        state,
        shoe=shoe,
        running_count=update_running_count(state.running_count, card),
    )


def _resolve_status(hand: Hand) -> Hand:
    """Apply the automatic status changes after a card lands on an ACTIVE hand."""
    if not hand.is_active:
        return hand
    value = hand.value
    if value.is_bust:
        return replace(hand, status=HandStatus.BUST)
    if value.is_blackjack and not hand.is_split_child:
        return replace(hand, status=HandStatus.BLACKJACK)
    if value.total == 21:
        return replace(hand, status=HandStatus.STOOD)
    return hand


def _deal_to_seat(state: RoundState, seat_index: int, hand_index: int) -> RoundState:
    card, state = _draw(state)
    seat = state.seats[seat_index]
    hand = _resolve_status(seat.hands[hand_index].with_card(card))
    return state.replace_seat(seat.replace_hand(hand_index, hand))


def _deal_to_dealer(state: RoundState) -> RoundState:
    card, state = _draw(state)
    return replace(state, dealer_hand=state.dealer_hand.with_card(card))


def _rebuild_shoe(state: RoundState, seed: int) -> RoundState:
    """Replace shoe and discard with a freshly shuffled full shoe."""
    return replace(
        state,
        shoe=fresh_shoe(state.rules.decks, seed),
        discard=(),
        running_count=0,
        seed=seed,
        shuffle_count=state.shuffle_count + 1,
    )


# --- player turn sequencing -------------------------------------------------


def _dealer_value(state: RoundState) -> HandValue:
    return evaluate_cards(state.dealer_hand.cards)


def _find_next_active(state: RoundState, start_seat: int) -> tuple[int, int] | None:
    """Visit participants in round order from ``start_seat``, wrapping around."""
    order = state.round_seat_order
    if not order:
        return None
    start = order.index(start_seat) if start_seat in order else 0
    for seat_index in order[start:] + order[:start]:
        hand_index = state.seats[seat_index].first_active_hand_index()
        if hand_index is not None:
            return seat_index, hand_index
    return None


def _point_at(state: RoundState, seat_index: int, hand_index: int) -> RoundState:
    seat = replace(state.seats[seat_index], active_hand_index=hand_index)
    return replace(state.replace_seat(seat), active_seat_index=seat_index)


def _dealer_must_play(state: RoundState) -> bool:
    """Dealer play only matters while some hand still stands on a total."""
    return any(
        hand.status is HandStatus.STOOD
        for seat in state.participants
        for hand in seat.hands
    )


def _finish_player_turns(state: RoundState) -> RoundState:
    if _dealer_must_play(state):
        logger.debug("All hands played, dealer to act")
        return replace(state, phase=Phase.DEALER_TURN)
    # Every hand is bust, surrendered or a natural: dealer play is skipped
    return _settle_round(state)


def _start_player_turn(state: RoundState) -> RoundState:
    first_seat = state.round_seat_order[0] if state.round_seat_order else 0
    target = _find_next_active(state, first_seat)
    if target is None:
        return _finish_player_turns(replace(state, phase=Phase.PLAYER_TURN))
    return replace(_point_at(state, *target), phase=Phase.PLAYER_TURN)


def _advance(state: RoundState) -> RoundState:
    """Move the active pointer after a player action."""
    seat = state.seats[state.active_seat_index]
    hand_index = seat.first_active_hand_index()
    if hand_index is not None:
        return _point_at(state, seat.seat_index, hand_index)

    target = _find_next_active(state, seat.seat_index)
    if target is not None:
        return _point_at(state, *target)

    return _finish_player_turns(state)


# --- dealing ----------------------------------------------------------------


def _build_deal_queue(order: Sequence[int]) -> tuple[DealTarget, ...]:
    one_pass = tuple(DealTarget.seat(i) for i in order) + (DealTarget.dealer(),)
    return one_pass * 2


def _finish_initial_deal(state: RoundState) -> RoundState:
    dealer = state.dealer_hand
    upcard = dealer.cards[0] if dealer.cards else None

    if upcard is not None and upcard.is_ace and state.rules.allow_insurance:
        offered = set(state.round_seat_order)
        seats = tuple(
            replace(seat, insurance_offered=seat.seat_index in offered, insurance_bet=ZERO)
            for seat in state.seats
        )
        logger.debug("Dealer shows an ace, offering insurance to seats %s", sorted(offered))
        return replace(
            state,
            seats=seats,
            active_seat_index=state.round_seat_order[0],
            phase=Phase.INSURANCE,
        )

    if _dealer_value(state).is_blackjack:
        logger.debug("Dealer blackjack, settling at once")
        return _settle_round(state)

    return _start_player_turn(state)


def _apply_deal_step(state: RoundState) -> RoundState:
    if not state.deal_queue:
        return state
    target, rest = state.deal_queue[0], state.deal_queue[1:]
    state = replace(state, deal_queue=rest)

    if target.is_dealer:
        state = _deal_to_dealer(state)
    else:
        state = _deal_to_seat(state, target.seat_index, 0)

    if not state.deal_queue:
        return _finish_initial_deal(state)
    return state


# --- settlement -------------------------------------------------------------


def _hand_outcome(hand: Hand, dealer: HandValue) -> Outcome:
    player = hand.value
    if hand.status is HandStatus.SURRENDERED:
        return Outcome.SURRENDER
    if player.is_bust:
        return Outcome.LOSE
    if hand.is_natural and not dealer.is_blackjack:
        return Outcome.BLACKJACK
    if dealer.is_blackjack and not hand.is_natural:
        return Outcome.LOSE
    if dealer.is_bust:
        return Outcome.WIN
    if player.total > dealer.total:
        return Outcome.WIN
    if player.total < dealer.total:
        return Outcome.LOSE
    return Outcome.PUSH


def _clear_round(seat: Seat, bankroll: Decimal) -> Seat:
    return replace(
        seat,
        bankroll=bankroll,
        hands=(),
        active_hand_index=0,
        ready=False,
        insurance_bet=ZERO,
        insurance_offered=False,
    )


def _back_to_betting(state: RoundState, seats: tuple[Seat, ...], **changes: Any) -> RoundState:
    """Sweep table cards into the discard tray and reset round pointers."""
    return replace(
        state,
        seats=seats,
        discard=state.discard + state.table_cards,
        dealer_hand=Hand(),
        phase=Phase.BETTING,
        active_seat_index=0,
        round_seat_order=(),
        deal_queue=(),
        **changes,
    )


def _settle_round(state: RoundState) -> RoundState:
    dealer = _dealer_value(state)
    bj_payout = to_money(state.rules.blackjack_payout)
    hand_results: list[HandResult] = []
    insurance_results: list[InsuranceResult] = []
    seats: list[Seat] = []

    for seat in state.seats:
        credit = ZERO
        for index, hand in enumerate(seat.hands):
            if not hand.cards:
                continue
            outcome = _hand_outcome(hand, dealer)
            payout = payout_for_outcome(outcome, hand.bet, bj_payout)
            credit += payout
            hand_results.append(
                HandResult(
                    seat_index=seat.seat_index,
                    hand_index=index,
                    outcome=outcome,
                    payout=payout,
                    bet=hand.bet,
                    player_total=hand.value.total,
                    dealer_total=dealer.total,
                    cards=hand.cards,
                )
            )

        if seat.insurance_bet > 0:
            paid = insurance_payout(seat.insurance_bet, dealer.is_blackjack)
            credit += paid
            insurance_results.append(
                InsuranceResult(seat_index=seat.seat_index, bet=seat.insurance_bet, payout=paid)
            )

        seats.append(_clear_round(seat, seat.bankroll + credit))

    result = RoundResult(
        hands=tuple(hand_results),
        dealer_total=dealer.total,
        dealer_bust=dealer.is_bust,
        dealer_blackjack=dealer.is_blackjack,
        insurance=tuple(insurance_results),
        dealer_cards=state.dealer_hand.cards,
    )
    logger.info(
        "Round %d settled: dealer %s, %d hand(s)",
        state.round_id,
        dealer,
        len(hand_results),
    )
    return _back_to_betting(state, tuple(seats), last_result=result)


def _dealer_should_hit(dealer: HandValue, stands_on_soft_17: bool) -> bool:
    if dealer.is_bust:
        return False
    if dealer.total < 17:
        return True
    if dealer.total == 17 and dealer.is_soft and not stands_on_soft_17:
        return True
    return False


# --- legality gates ---------------------------------------------------------


def _active(state: RoundState) -> tuple[Seat, Hand] | None:
    """Return the acting seat and hand when a player decision is pending."""
    if state.phase is not Phase.PLAYER_TURN:
        return None
    seat = state.active_seat
    if seat is None:
        return None
    hand = seat.active_hand
    if hand is None or not hand.is_active:
        return None
    return seat, hand


def _split_allowed(rules: Rules, seat: Seat, hand: Hand) -> bool:
    if not rules.allow_split:
        return False
    if not is_pair(hand.cards):
        return False
    if len(seat.hands) >= rules.max_hands:
        return False
    if seat.bankroll < hand.bet:
        return False
    if hand.split_from_ace and not rules.allow_resplit_aces:
        return False
    return True


def _double_allowed(rules: Rules, seat: Seat, hand: Hand) -> bool:
    if not rules.allow_double:
        return False
    if hand.is_split_child and not rules.allow_double_after_split:
        return False
    if len(hand.cards) != 2:
        return False
    if seat.bankroll < hand.bet:
        return False
    return rules.allows_double_on(hand.value.total)


def _surrender_allowed(rules: Rules, hand: Hand) -> bool:
    return rules.allow_surrender and len(hand.cards) == 2


def can_hit(state: RoundState) -> bool:
    """Check if the active hand may take a card."""
    return _active(state) is not None


def can_stand(state: RoundState) -> bool:
    """Check if the active hand may stand."""
    return _active(state) is not None


def can_double(state: RoundState) -> bool:
    """Check if the active hand may double down."""
    active = _active(state)
    return active is not None and _double_allowed(state.rules, *active)


def can_split(state: RoundState) -> bool:
    """Check if the active hand may be split."""
    active = _active(state)
    return active is not None and _split_allowed(state.rules, *active)


def can_surrender(state: RoundState) -> bool:
    """Check if the active hand may surrender."""
    active = _active(state)
    return active is not None and _surrender_allowed(state.rules, active[1])


def can_take_insurance(state: RoundState) -> bool:
    """Check if the seat being asked can place a positive insurance bet."""
    if state.phase is not Phase.INSURANCE or not state.rules.allow_insurance:
        return False
    seat = state.active_seat
    if seat is None or not seat.insurance_offered or not seat.hands:
        return False
    return min(seat.hands[0].bet / 2, seat.bankroll) > 0


def can_decline_insurance(state: RoundState) -> bool:
    seat = state.active_seat
    return state.phase is Phase.INSURANCE and seat is not None and seat.insurance_offered


def can_deal(state: RoundState) -> bool:
    """Check if at least one seat is ready with an affordable bet."""
    return state.phase is Phase.BETTING and any(
        seat.ready and seat.can_ready for seat in state.seats
    )


def can_reshuffle(state: RoundState) -> bool:
    return state.phase is Phase.BETTING


# --- action handlers --------------------------------------------------------


def _add_seat(state: RoundState, action: act.AddSeat) -> RoundState:
    if len(state.seats) >= MAX_SEATS:
        return state
    if action.bankroll is not None:
        bankroll = to_money(action.bankroll)
    elif state.seats:
        bankroll = state.seats[0].bankroll
    else:
        bankroll = DEFAULT_BANKROLL
    if bankroll < 0:
        return state
    seat = Seat(seat_index=len(state.seats), bankroll=bankroll)
    return replace(state, seats=state.seats + (seat,))


def _seat_or_none(state: RoundState, seat_index: int) -> Seat | None:
    if 0 <= seat_index < len(state.seats):
        return state.seats[seat_index]
    return None


def _set_bet(state: RoundState, action: act.SetBet) -> RoundState:
    seat = _seat_or_none(state, action.seat_index)
    if seat is None:
        return state
    amount = max(ZERO, to_money(action.amount))
    return state.replace_seat(replace(seat, pending_bet=amount, ready=False))


def _toggle_ready(state: RoundState, action: act.ToggleReady) -> RoundState:
    seat = _seat_or_none(state, action.seat_index)
    if seat is None:
        return state
    return state.replace_seat(replace(seat, ready=action.ready and seat.can_ready))


def _place_bet(state: RoundState, action: act.PlaceBet) -> RoundState:
    seat = _seat_or_none(state, 0)
    if seat is None:
        return state
    seat = replace(seat, pending_bet=max(ZERO, to_money(action.amount)))
    return state.replace_seat(replace(seat, ready=seat.can_ready))


def _begin_deal(state: RoundState, action: act.Action) -> RoundState:
    order = tuple(seat.seat_index for seat in state.seats if seat.ready and seat.can_ready)
    if not order:
        return state

    if should_shuffle(state.shoe, state.discard, state.rules):
        seed = next_seed(state.seed)
        logger.info("Cut card reached, reshuffling shoe with seed %d", seed)
        state = _rebuild_shoe(state, seed)

    seats = []
    for seat in state.seats:
        if seat.seat_index not in order:
            attempted = seat.pending_bet > 0 or seat.ready
            seats.append(
                replace(
                    seat,
                    skipped_round=attempted,
                    ready=False,
                    hands=(),
                    insurance_bet=ZERO,
                    insurance_offered=False,
                )
            )
            continue
        bet = seat.pending_bet
        seats.append(
            replace(
                seat,
                bankroll=seat.bankroll - bet,
                pending_bet=ZERO,
                ready=False,
                hands=(Hand(bet=bet),),
                active_hand_index=0,
                insurance_bet=ZERO,
                insurance_offered=False,
                skipped_round=False,
            )
        )

    round_id = state.round_id + 1 if state.rounds_dealt else state.round_id
    logger.debug("Round %d dealing to seats %s", round_id, list(order))
    return replace(
        state,
        phase=Phase.DEALING,
        seats=tuple(seats),
        dealer_hand=Hand(),
        active_seat_index=order[0],
        deal_queue=_build_deal_queue(order),
        round_seat_order=order,
        last_result=None,
        round_id=round_id,
        rounds_dealt=state.rounds_dealt + 1,
    )


def _deal(state: RoundState, action: act.Deal) -> RoundState:
    next_state = _begin_deal(state, action)
    while next_state.phase is Phase.DEALING:
        next_state = _apply_deal_step(next_state)
    return next_state


def _deal_step(state: RoundState, action: act.DealStep) -> RoundState:
    return _apply_deal_step(state)


def _hit(state: RoundState, action: act.Hit) -> RoundState:
    active = _active(state)
    if active is None:
        return state
    seat, _ = active
    state = _deal_to_seat(state, seat.seat_index, seat.active_hand_index)
    if state.active_hand is not None and state.active_hand.is_active:
        return state
    return _advance(state)


def _finish_hand(state: RoundState, seat: Seat, hand: Hand) -> RoundState:
    return _advance(state.replace_seat(seat.replace_hand(seat.active_hand_index, hand)))


def _stand(state: RoundState, action: act.Stand) -> RoundState:
    active = _active(state)
    if active is None:
        return state
    seat, hand = active
    return _finish_hand(state, seat, replace(hand, status=HandStatus.STOOD))


def _double(state: RoundState, action: act.Double) -> RoundState:
    active = _active(state)
    if active is None or not _double_allowed(state.rules, *active):
        return state
    seat, hand = active
    doubled = replace(hand, bet=hand.bet * 2, is_doubled=True)
    seat = replace(seat, bankroll=seat.bankroll - hand.bet).replace_hand(
        seat.active_hand_index, doubled
    )
    state = _deal_to_seat(state.replace_seat(seat), seat.seat_index, seat.active_hand_index)

    seat = state.seats[seat.seat_index]
    hand = seat.hands[seat.active_hand_index]
    if hand.is_active:
        hand = replace(hand, status=HandStatus.STOOD)
    return _finish_hand(state, seat, hand)


def _split(state: RoundState, action: act.Split) -> RoundState:
    active = _active(state)
    if active is None or not _split_allowed(state.rules, *active):
        return state
    seat, hand = active
    index = seat.active_hand_index
    first, second = hand.cards
    from_ace = hand.split_from_ace or first.is_ace
    children = tuple(
        Hand(cards=(card,), bet=hand.bet, is_split_child=True, split_from_ace=from_ace)
        for card in (first, second)
    )
    seat = replace(
        seat,
        bankroll=seat.bankroll - hand.bet,
        hands=seat.hands[:index] + children + seat.hands[index + 1 :],
    )
    state = state.replace_seat(seat)
    state = _deal_to_seat(state, seat.seat_index, index)
    state = _deal_to_seat(state, seat.seat_index, index + 1)

    if from_ace and not state.rules.allow_hit_split_aces:
        seat = state.seats[seat.seat_index]
        for child_index in (index, index + 1):
            child = seat.hands[child_index]
            if child.is_active:
                seat = seat.replace_hand(child_index, replace(child, status=HandStatus.STOOD))
        state = state.replace_seat(seat)

    return _advance(state)


def _surrender(state: RoundState, action: act.Surrender) -> RoundState:
    active = _active(state)
    if active is None or not _surrender_allowed(state.rules, active[1]):
        return state
    seat, hand = active
    return _finish_hand(state, seat, replace(hand, status=HandStatus.SURRENDERED))


def _next_insurance_seat(state: RoundState, current: int) -> int | None:
    order = state.round_seat_order
    start = order.index(current) + 1 if current in order else 0
    for seat_index in order[start:] + order[:start]:
        if state.seats[seat_index].insurance_offered:
            return seat_index
    return None


def _after_insurance_decision(state: RoundState, seat_index: int) -> RoundState:
    next_seat = _next_insurance_seat(state, seat_index)
    if next_seat is not None:
        return replace(state, active_seat_index=next_seat)
    if _dealer_value(state).is_blackjack:
        logger.debug("Dealer has blackjack under the ace")
        return _settle_round(state)
    return _start_player_turn(state)


def _take_insurance(state: RoundState, action: act.TakeInsurance) -> RoundState:
    if not can_take_insurance(state):
        return state
    seat = state.active_seat
    amount = min(to_money(action.amount), seat.hands[0].bet / 2, seat.bankroll)
    if amount <= 0:
        return state
    seat = replace(
        seat,
        bankroll=seat.bankroll - amount,
        insurance_bet=amount,
        insurance_offered=False,
    )
    return _after_insurance_decision(state.replace_seat(seat), seat.seat_index)


def _decline_insurance(state: RoundState, action: act.DeclineInsurance) -> RoundState:
    if not can_decline_insurance(state):
        return state
    seat = replace(state.active_seat, insurance_bet=ZERO, insurance_offered=False)
    return _after_insurance_decision(state.replace_seat(seat), seat.seat_index)


def _dealer_play(state: RoundState, action: act.DealerPlay) -> RoundState:
    while _dealer_should_hit(_dealer_value(state), state.rules.dealer_stands_on_soft_17):
        state = _deal_to_dealer(state)
    return _settle_round(state)


def _dealer_tick(state: RoundState, action: act.DealerTick) -> RoundState:
    if _dealer_should_hit(_dealer_value(state), state.rules.dealer_stands_on_soft_17):
        return _deal_to_dealer(state)
    return _settle_round(state)


def _end_round(state: RoundState, action: act.EndRound) -> RoundState:
    """Void the round: stakes still on the table go back to their seats."""
    seats = tuple(
        replace(_clear_round(seat, seat.bankroll + seat.wagered), skipped_round=False)
        for seat in state.seats
    )
    logger.info("Round %d voided", state.round_id)
    return _back_to_betting(state, seats)


def _reshuffle(state: RoundState, action: act.Reshuffle) -> RoundState:
    seats = tuple(
        replace(
            _clear_round(seat, seat.bankroll),
            pending_bet=ZERO,
            skipped_round=False,
        )
        for seat in state.seats
    )
    state = _back_to_betting(state, seats, last_result=None)
    logger.info("Shoe reshuffled with seed %d", action.seed)
    return _rebuild_shoe(state, action.seed)


def _set_rules(state: RoundState, action: act.SetRules) -> RoundState:
    try:
        rules = state.rules.with_overrides(**action.overrides)
    except (TypeError, ValueError) as exc:
        logger.warning("Rejected rule change %r: %s", dict(action.overrides), exc)
        return state
    if rules.decks != state.rules.decks:
        return _rebuild_shoe(replace(state, rules=rules), state.seed)
    return replace(state, rules=rules)


_Handler = Callable[[RoundState, Any], RoundState]

_HANDLERS: Mapping[type, _Handler] = {
    act.AddSeat: _add_seat,
    act.SetBet: _set_bet,
    act.ToggleReady: _toggle_ready,
    act.PlaceBet: _place_bet,
    act.Deal: _deal,
    act.BeginDeal: _begin_deal,
    act.DealStep: _deal_step,
    act.Hit: _hit,
    act.Stand: _stand,
    act.Double: _double,
    act.Split: _split,
    act.Surrender: _surrender,
    act.TakeInsurance: _take_insurance,
    act.DeclineInsurance: _decline_insurance,
    act.DealerPlay: _dealer_play,
    act.DealerTick: _dealer_tick,
    act.EndRound: _end_round,
    act.Reshuffle: _reshuffle,
    act.SetRules: _set_rules,
}


def reduce(state: RoundState, action: act.Action) -> RoundState:
    """
    Apply one action to a state.

    Args:
        state: Current round state
        action: One action from ``blackjack_core.game.actions``

    Returns:
        The next state, or ``state`` itself when the action is rejected

    Raises:
        TypeError: If ``action`` is not one of the engine's action types
        EmptyShoeError: If a draw is attempted on an empty shoe
        RuntimeError: If a handler leaves the phase graph
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown action: {action!r}")

    if not is_allowed(state.phase, action.type):
        logger.debug("Rejected %s during %s", action.type.value, state.phase.name)
        return state

    next_state = handler(state, action)
    if next_state is not state:
        if not is_valid_transition(action.type, state.phase, next_state.phase):
            raise RuntimeError(
                f"{action.type.value} moved {state.phase.name} to {next_state.phase.name}"
            )
    return next_state
