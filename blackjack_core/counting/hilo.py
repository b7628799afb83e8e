"""Hi-Lo card counting system."""

from typing import Iterable, Mapping

from blackjack_core.cards import Card, Rank
from blackjack_core.counting.base import CountingSystem


HILO_TAGS: Mapping[Rank, int] = {
    Rank.TWO: 1,
    Rank.THREE: 1,
    Rank.FOUR: 1,
    Rank.FIVE: 1,
    Rank.SIX: 1,
    Rank.SEVEN: 0,
    Rank.EIGHT: 0,
    Rank.NINE: 0,
    Rank.TEN: -1,
    Rank.JACK: -1,
    Rank.QUEEN: -1,
    Rank.KING: -1,
    Rank.ACE: -1,
}


def hilo_value(card: Card) -> int:
    """Return the Hi-Lo tag of a single card."""
    return HILO_TAGS[card.rank]


def update_running_count(running_count: int, card: Card) -> int:
    """Add one drawn card to a running count."""
    return running_count + hilo_value(card)


def update_running_count_for_cards(running_count: int, cards: Iterable[Card]) -> int:
    """Add several drawn cards to a running count."""
    for card in cards:
        running_count = update_running_count(running_count, card)
    return running_count


class HiLoSystem(CountingSystem):
    """
    Hi-Lo counting system.

    The most popular and widely taught counting system.

    Tag values:
        2-6: +1 (low cards)
        7-9: 0  (neutral)
        10-A: -1 (high cards)

    Full deck sum: 0 (balanced)
    """

    @property
    def name(self) -> str:
        return "Hi-Lo"

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return HILO_TAGS

    @property
    def is_balanced(self) -> bool:
        return True
