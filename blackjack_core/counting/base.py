"""Abstract base class for card counting systems."""

from abc import ABC, abstractmethod
from typing import Iterable, Mapping

from blackjack_core.cards import Card, Rank


def true_count(running_count: float, decks_remaining: float) -> float:
    """
    Convert a running count to a true count.

    Args:
        running_count: Current running count
        decks_remaining: Number of decks left in the shoe

    Returns:
        The running count per remaining deck, or 0.0 for an exhausted shoe
    """
    if decks_remaining <= 0:
        return 0.0
    return running_count / decks_remaining


class CountingSystem(ABC):
    """
    Abstract base class for card counting systems.

    A system instance is a trainer-side tally, fed the same cards the engine
    draws. The engine itself keeps its running count inside the round state.
    """

    def __init__(self) -> None:
        """Initialize the counting system."""
        self._running_count: int = 0
        self._cards_seen: int = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the counting system."""
        ...

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, int]:
        """Return the tag value mapping for this system."""
        ...

    @property
    @abstractmethod
    def is_balanced(self) -> bool:
        """
        Return whether this is a balanced counting system.

        A balanced system sums to 0 over a complete deck.
        """
        ...

    @property
    def full_deck_sum(self) -> int:
        """Calculate the sum of tag values for a full 52-card deck."""
        # Each rank appears 4 times in a deck (once per suit)
        return sum(self.tag_values[rank] * 4 for rank in Rank)

    def count_card(self, card: Card) -> int:
        """
        Count a single card and update the running count.

        Returns:
            The tag value of the card
        """
        tag_value = self.tag_values[card.rank]
        self._running_count += tag_value
        self._cards_seen += 1
        return tag_value

    def count_cards(self, cards: Iterable[Card]) -> int:
        """Count multiple cards and return their combined tag value."""
        return sum(self.count_card(card) for card in cards)

    @property
    def running_count(self) -> int:
        """Return the current running count."""
        return self._running_count

    def true_count(self, decks_remaining: float) -> float:
        """Calculate the true count for the given decks remaining."""
        return true_count(self._running_count, decks_remaining)

    @property
    def cards_seen(self) -> int:
        """Return the number of cards seen."""
        return self._cards_seen

    def reset(self) -> None:
        """Reset the count to zero."""
        self._running_count = 0
        self._cards_seen = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(running_count={self._running_count})"
