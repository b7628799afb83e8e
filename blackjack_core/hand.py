"""Hand evaluation for blackjack."""

from dataclasses import dataclass
from typing import Sequence

from blackjack_core.cards import Card


@dataclass(frozen=True, slots=True)
class HandValue:
    """Evaluated total of a sequence of cards."""

    total: int
    is_soft: bool
    is_blackjack: bool
    is_bust: bool

    def __str__(self) -> str:
        if self.is_blackjack:
            return "BLACKJACK"
        if self.is_bust:
            return f"BUST ({self.total})"
        if self.is_soft:
            return f"soft {self.total}"
        return str(self.total)


def evaluate_cards(cards: Sequence[Card]) -> HandValue:
    """
    Calculate the best value of a hand.

    Every ace starts at 11; while the total is over 21 and an ace is still
    counted high, it drops to 1. The hand is soft when an ace is still worth
    11 afterwards.
    """
    total = 0
    soft_aces = 0

    for card in cards:
        if card.is_ace:
            soft_aces += 1
        total += card.value

    # Reduce aces from 11 to 1 as needed
    while total > 21 and soft_aces > 0:
        total -= 10
        soft_aces -= 1

    return HandValue(
        total=total,
        is_soft=soft_aces > 0,
        is_blackjack=len(cards) == 2 and total == 21,
        is_bust=total > 21,
    )


def is_pair(cards: Sequence[Card]) -> bool:
    """Check if the cards are exactly two of the same rank."""
    return len(cards) == 2 and cards[0].rank == cards[1].rank
