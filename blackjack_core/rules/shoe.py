"""Shoe penetration rule."""

from typing import Sequence

from blackjack_core.cards import CARDS_PER_DECK, Card
from blackjack_core.rules.table import Rules


def total_cards(rules: Rules) -> int:
    """Return the number of cards in a full shoe."""
    return rules.decks * CARDS_PER_DECK


def penetration_used(shoe: Sequence[Card], rules: Rules) -> float:
    """Return the fraction of the full shoe already drawn."""
    total = total_cards(rules)
    return (total - len(shoe)) / total


def should_shuffle(shoe: Sequence[Card], discard: Sequence[Card], rules: Rules) -> bool:
    """
    Check if the cut card has been reached.

    Only the undealt shoe matters: cards still on the table count as drawn
    just like those already in the discard tray.
    """
    return penetration_used(shoe, rules) >= rules.penetration
