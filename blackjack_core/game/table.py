"""Stateful table shell around the pure round engine."""

import logging
import secrets
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Sequence

from blackjack_core.cards import Card, fresh_shoe
from blackjack_core.counting import hilo_value
from blackjack_core.game import actions as act
from blackjack_core.game import engine
from blackjack_core.game.events import EventEmitter, EventType, GameEvent
from blackjack_core.game.state import Phase, RoundState
from blackjack_core.rules import Rules

logger = logging.getLogger(__name__)


def random_seed() -> int:
    """A fresh 32-bit shuffle seed from the OS entropy pool."""
    return secrets.randbits(32)


class BlackjackTable:
    """
    A blackjack table session.

    Holds the current RoundState, feeds every action through
    ``engine.reduce`` and reports what changed as GameEvents. The table keeps
    an action log so a session can be replayed exactly from its seed.
    """

    def __init__(
        self,
        bankroll: Decimal | float | int = engine.DEFAULT_BANKROLL,
        seats: int = 1,
        rules: Rules | Mapping[str, Any] | None = None,
        seed: int | None = None,
        shoe: Sequence[Card] | None = None,
    ) -> None:
        """
        Initialize a new table.

        Args:
            bankroll: Starting bankroll of every seat
            seats: Number of seats to open
            rules: Table rules or overrides of the defaults
            seed: Shuffle seed; a random one is drawn when omitted
            shoe: Pre-set shoe order for scripted sessions
        """
        if seed is None:
            seed = random_seed()
        self._init_args: dict[str, Any] = {
            "bankroll": bankroll,
            "seats": seats,
            "rules": rules,
            "seed": seed,
            "shoe": tuple(shoe) if shoe is not None else None,
        }
        self._state = engine.create_initial_state(**self._init_args)
        self._actions: list[act.Action] = []
        self.events = EventEmitter()
        logger.debug("Table created with seed %d and %d seat(s)", seed, seats)

    @classmethod
    def replay(cls, actions: Iterable[act.Action], **init_args: Any) -> "BlackjackTable":
        """Rebuild a table by re-applying a recorded action log."""
        table = cls(**init_args)
        for action in actions:
            table.dispatch(action)
        return table

    @property
    def state(self) -> RoundState:
        """Current snapshot; never mutate it, dispatch actions instead."""
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def init_args(self) -> dict[str, Any]:
        return dict(self._init_args)

    @property
    def action_log(self) -> list[act.Action]:
        return list(self._actions)

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to table events."""
        self.events.subscribe(handler, event_type)

    def dispatch(self, action: act.Action) -> bool:
        """
        Apply an action to the table.

        Returns:
            True if the engine accepted the action
        """
        previous = self._state
        current = engine.reduce(previous, action)
        if current is previous:
            self.events.emit_new(
                EventType.ACTION_REJECTED,
                action=action.type.value,
                phase=previous.phase.name,
            )
            return False

        self._state = current
        self._actions.append(action)
        self._emit_transition(previous, current, action)
        return True

    def _emit_transition(
        self, previous: RoundState, current: RoundState, action: act.Action
    ) -> None:
        if current.shuffle_count != previous.shuffle_count:
            self.events.emit_new(
                EventType.SHOE_SHUFFLED,
                seed=current.seed,
                cards=len(current.shoe) + len(current.discard) + len(current.table_cards),
            )
            # Cards drawn after the reshuffle came off the front of the new shoe
            drawn = _drawn_cards(fresh_shoe(current.rules.decks, current.seed), current.shoe)
        else:
            drawn = _drawn_cards(previous.shoe, current.shoe)

        if current.rounds_dealt != previous.rounds_dealt:
            self.events.emit_new(
                EventType.ROUND_STARTED,
                round_id=current.round_id,
                seats=list(current.round_seat_order),
            )

        running = current.running_count - sum(hilo_value(card) for card in drawn)
        for card in drawn:
            running += hilo_value(card)
            self.events.emit_new(EventType.CARD_DEALT, card=str(card), running_count=running)

        if len(current.seats) > len(previous.seats):
            self.events.emit_new(EventType.SEAT_ADDED, seat_index=len(current.seats) - 1)

        if current.rules != previous.rules:
            self.events.emit_new(EventType.RULES_CHANGED, action=action.type.value)

        if current.phase is not previous.phase:
            self.events.emit_new(
                EventType.PHASE_CHANGED,
                source=previous.phase.name,
                dest=current.phase.name,
            )
            if current.phase is Phase.INSURANCE:
                self.events.emit_new(
                    EventType.INSURANCE_OFFERED,
                    seats=[s.seat_index for s in current.seats if s.insurance_offered],
                )

        if current.last_result is not None and current.last_result is not previous.last_result:
            result = current.last_result
            self.events.emit_new(
                EventType.ROUND_ENDED,
                round_id=current.round_id,
                dealer_total=result.dealer_total,
                outcomes=[r.outcome.value for r in result.hands],
                bankrolls=[str(s.bankroll) for s in current.seats],
            )

    # Convenience wrappers, one per engine action

    def add_seat(self, bankroll: Decimal | None = None) -> bool:
        return self.dispatch(act.AddSeat(bankroll=bankroll))

    def set_bet(self, seat_index: int, amount: Decimal | int) -> bool:
        return self.dispatch(act.SetBet(seat_index=seat_index, amount=Decimal(str(amount))))

    def toggle_ready(self, seat_index: int, ready: bool = True) -> bool:
        return self.dispatch(act.ToggleReady(seat_index=seat_index, ready=ready))

    def place_bet(self, amount: Decimal | int) -> bool:
        return self.dispatch(act.PlaceBet(amount=Decimal(str(amount))))

    def deal(self) -> bool:
        return self.dispatch(act.Deal())

    def begin_deal(self) -> bool:
        return self.dispatch(act.BeginDeal())

    def deal_step(self) -> bool:
        return self.dispatch(act.DealStep())

    def hit(self) -> bool:
        return self.dispatch(act.Hit())

    def stand(self) -> bool:
        return self.dispatch(act.Stand())

    def double_down(self) -> bool:
        return self.dispatch(act.Double())

    def split(self) -> bool:
        return self.dispatch(act.Split())

    def surrender(self) -> bool:
        return self.dispatch(act.Surrender())

    def take_insurance(self, amount: Decimal | int) -> bool:
        return self.dispatch(act.TakeInsurance(amount=Decimal(str(amount))))

    def decline_insurance(self) -> bool:
        return self.dispatch(act.DeclineInsurance())

    def dealer_play(self) -> bool:
        return self.dispatch(act.DealerPlay())

    def dealer_tick(self) -> bool:
        return self.dispatch(act.DealerTick())

    def end_round(self) -> bool:
        return self.dispatch(act.EndRound())

    def reshuffle(self, seed: int | None = None) -> bool:
        """Reshuffle the full shoe; draws a random seed when none is given."""
        return self.dispatch(act.Reshuffle(seed=random_seed() if seed is None else seed))

    def set_rules(self, **overrides: Any) -> bool:
        return self.dispatch(act.SetRules(overrides=overrides))

    def capabilities(self) -> dict[str, bool]:
        """Which actions the engine would accept right now."""
        state = self._state
        return {
            "deal": engine.can_deal(state),
            "hit": engine.can_hit(state),
            "stand": engine.can_stand(state),
            "double": engine.can_double(state),
            "split": engine.can_split(state),
            "surrender": engine.can_surrender(state),
            "take_insurance": engine.can_take_insurance(state),
            "decline_insurance": engine.can_decline_insurance(state),
            "dealer_play": state.phase is Phase.DEALER_TURN,
            "reshuffle": engine.can_reshuffle(state),
        }


def _drawn_cards(before: tuple[Card, ...], after: tuple[Card, ...]) -> tuple[Card, ...]:
    """Cards removed from the front of ``before`` to leave ``after``."""
    count = len(before) - len(after)
    if count <= 0:
        return ()
    return before[:count]
