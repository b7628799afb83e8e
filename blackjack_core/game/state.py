"""Immutable round state for the blackjack engine.

Every value here is a frozen dataclass holding tuples, so a transition
builds new objects with ``dataclasses.replace`` and never mutates a snapshot
a consumer may still be reading.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum, auto
from typing import Iterator

from blackjack_core.cards import Card
from blackjack_core.hand import HandValue, evaluate_cards
from blackjack_core.rules import Outcome, Rules


class Phase(Enum):
    """
    Round phases.

    Flow: BETTING → DEALING → [INSURANCE] → PLAYER_TURN → DEALER_TURN → BETTING
    """

    BETTING = auto()
    DEALING = auto()
    INSURANCE = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class HandStatus(Enum):
    """Hand status; anything but ACTIVE is final for the round."""

    ACTIVE = auto()
    STOOD = auto()
    BUST = auto()
    BLACKJACK = auto()
    SURRENDERED = auto()

    @property
    def is_terminal(self) -> bool:
        return self is not HandStatus.ACTIVE


ZERO = Decimal("0")


@dataclass(frozen=True)
class Hand:
    """A player or dealer hand."""

    cards: tuple[Card, ...] = ()
    bet: Decimal = ZERO
    status: HandStatus = HandStatus.ACTIVE
    is_doubled: bool = False
    is_split_child: bool = False
    split_from_ace: bool = False

    @property
    def value(self) -> HandValue:
        """Evaluate the hand's cards."""
        return evaluate_cards(self.cards)

    @property
    def is_active(self) -> bool:
        return self.status is HandStatus.ACTIVE

    @property
    def is_natural(self) -> bool:
        """A two-card 21 that was not produced by a split."""
        return self.value.is_blackjack and not self.is_split_child

    def with_card(self, card: Card) -> "Hand":
        """Return a copy holding one more card."""
        return replace(self, cards=self.cards + (card,))

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        return f"{cards_str} ({self.value})"


@dataclass(frozen=True)
class Seat:
    """A betting position at the table."""

    seat_index: int
    bankroll: Decimal
    pending_bet: Decimal = ZERO
    ready: bool = False
    hands: tuple[Hand, ...] = ()
    active_hand_index: int = 0
    insurance_bet: Decimal = ZERO
    insurance_offered: bool = False
    skipped_round: bool = False

    @property
    def active_hand(self) -> Hand | None:
        """Get the hand the active pointer references."""
        if 0 <= self.active_hand_index < len(self.hands):
            return self.hands[self.active_hand_index]
        return None

    def first_active_hand_index(self) -> int | None:
        """Return the index of the first ACTIVE hand, if any."""
        for index, hand in enumerate(self.hands):
            if hand.is_active:
                return index
        return None

    def replace_hand(self, index: int, hand: Hand) -> "Seat":
        """Return a copy with one hand swapped out."""
        hands = self.hands[:index] + (hand,) + self.hands[index + 1 :]
        return replace(self, hands=hands)

    @property
    def can_ready(self) -> bool:
        """Check if the pending bet is positive and affordable."""
        return ZERO < self.pending_bet <= self.bankroll

    @property
    def wagered(self) -> Decimal:
        """Total stake currently on the table for this seat."""
        return sum((hand.bet for hand in self.hands), ZERO) + self.insurance_bet


@dataclass(frozen=True, slots=True)
class DealTarget:
    """One entry of the initial deal queue: a seat's first hand or the dealer."""

    seat_index: int | None = None

    @classmethod
    def dealer(cls) -> "DealTarget":
        return cls(None)

    @classmethod
    def seat(cls, seat_index: int) -> "DealTarget":
        return cls(seat_index)

    @property
    def is_dealer(self) -> bool:
        return self.seat_index is None


@dataclass(frozen=True)
class HandResult:
    """Settlement record for one hand."""

    seat_index: int
    hand_index: int
    outcome: Outcome
    payout: Decimal
    bet: Decimal
    player_total: int
    dealer_total: int
    cards: tuple[Card, ...] = ()

    @property
    def net(self) -> Decimal:
        """Profit (or loss when negative) on the hand."""
        return self.payout - self.bet


@dataclass(frozen=True)
class InsuranceResult:
    """Settlement record for one seat's insurance side bet."""

    seat_index: int
    bet: Decimal
    payout: Decimal


@dataclass(frozen=True)
class RoundResult:
    """Everything decided at settlement."""

    hands: tuple[HandResult, ...]
    dealer_total: int
    dealer_bust: bool
    dealer_blackjack: bool
    insurance: tuple[InsuranceResult, ...] = ()
    dealer_cards: tuple[Card, ...] = ()

    def for_seat(self, seat_index: int) -> tuple[HandResult, ...]:
        """Return the hand results of one seat."""
        return tuple(r for r in self.hands if r.seat_index == seat_index)

    def insurance_for_seat(self, seat_index: int) -> InsuranceResult | None:
        for record in self.insurance:
            if record.seat_index == seat_index:
                return record
        return None

    def seat_payout(self, seat_index: int) -> Decimal:
        """Total credited to a seat, insurance included."""
        total = sum((r.payout for r in self.for_seat(seat_index)), ZERO)
        insurance = self.insurance_for_seat(seat_index)
        if insurance is not None:
            total += insurance.payout
        return total


@dataclass(frozen=True)
class RoundState:
    """
    Complete table snapshot.

    Attributes:
        phase: Current phase of the round
        shoe: Undealt cards; index 0 is the next card drawn
        discard: Cards played since the last shuffle
        seats: Every seat at the table, indexed by ``seat_index``
        active_seat_index: Seat acting during INSURANCE and PLAYER_TURN
        dealer_hand: Dealer cards; the first one is the up-card
        deal_queue: Remaining targets of the initial two-pass deal
        round_seat_order: Seats taking part in the current round
        running_count: Hi-Lo count of every card drawn since the shuffle
        rules: Table rules
        round_id: Identifier of the current or most recent round
        last_result: Settlement of the most recent round
        seed: Seed of the current shoe order
        shuffle_count: Number of times the shoe has been rebuilt
        rounds_dealt: Number of rounds that have begun dealing
    """

    rules: Rules
    shoe: tuple[Card, ...]
    seats: tuple[Seat, ...]
    seed: int
    phase: Phase = Phase.BETTING
    discard: tuple[Card, ...] = ()
    active_seat_index: int = 0
    dealer_hand: Hand = field(default_factory=Hand)
    deal_queue: tuple[DealTarget, ...] = ()
    round_seat_order: tuple[int, ...] = ()
    running_count: int = 0
    round_id: int = 1
    last_result: RoundResult | None = None
    shuffle_count: int = 0
    rounds_dealt: int = 0

    def replace_seat(self, seat: Seat) -> "RoundState":
        """Return a copy with ``seat`` stored at its own index."""
        index = seat.seat_index
        seats = self.seats[:index] + (seat,) + self.seats[index + 1 :]
        return replace(self, seats=seats)

    @property
    def active_seat(self) -> Seat | None:
        if 0 <= self.active_seat_index < len(self.seats):
            return self.seats[self.active_seat_index]
        return None

    @property
    def active_hand(self) -> Hand | None:
        seat = self.active_seat
        return seat.active_hand if seat is not None else None

    @property
    def participants(self) -> tuple[Seat, ...]:
        """Seats taking part in the current round, in round order."""
        return tuple(self.seats[index] for index in self.round_seat_order)

    @property
    def table_cards(self) -> tuple[Card, ...]:
        """Every card currently in a player or dealer hand."""
        cards: list[Card] = []
        for seat in self.seats:
            for hand in seat.hands:
                cards.extend(hand.cards)
        cards.extend(self.dealer_hand.cards)
        return tuple(cards)

    @property
    def card_count(self) -> int:
        """Cards across shoe, discard and table; constant for a given shoe."""
        return len(self.shoe) + len(self.discard) + len(self.table_cards)
