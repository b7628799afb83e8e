"""Blackjack round engine and counting core - UI-agnostic."""

from blackjack_core.cards import Card, EmptyShoeError, Rank, Suit
from blackjack_core.hand import HandValue, evaluate_cards
from blackjack_core.rules import Outcome, Rules

__all__ = [
    "Card",
    "EmptyShoeError",
    "Rank",
    "Suit",
    "HandValue",
    "evaluate_cards",
    "Outcome",
    "Rules",
]
