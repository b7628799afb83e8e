"""Pytest fixtures for blackjack shoe trainer tests."""

import pytest
from decimal import Decimal

from blackjack_core.cards import Card, parse_cards
from blackjack_core.counting import HiLoSystem
from blackjack_core.game import actions as act
from blackjack_core.game.engine import create_initial_state, reduce


def card(code: str) -> Card:
    """Build a card from a code; a bare rank gets spades."""
    if code[-1] in "SHDC♠♥♦♣":
        return Card.from_string(code)
    return Card.from_string(code + "S")


def scripted_state(ranks: str, bankroll: int = 100, seats: int = 1, **rules):
    """
    A single-deck table whose shoe starts with the given ranks.

    Penetration is set to 1 so the short scripted shoe is never reshuffled
    by the cut card.
    """
    options = {"decks": 1, "penetration": 1.0}
    options.update(rules)
    return create_initial_state(
        bankroll=bankroll,
        seats=seats,
        rules=options,
        shoe=tuple(card(code) for code in ranks.split()),
    )


def run(state, *actions):
    """Apply actions in order, returning the final state."""
    for action in actions:
        state = reduce(state, action)
    return state


def bet_and_deal(state, amount: int = 10, seat_index: int = 0):
    return run(
        state,
        act.SetBet(seat_index, Decimal(amount)),
        act.ToggleReady(seat_index, True),
        act.Deal(),
    )


@pytest.fixture
def scripted():
    """Factory for single-deck tables with a scripted shoe."""
    return scripted_state


@pytest.fixture
def apply():
    """Apply a sequence of actions to a state."""
    return run


@pytest.fixture
def deal_round():
    """Bet on a seat, mark it ready and deal."""
    return bet_and_deal


@pytest.fixture
def default_state():
    """A freshly shuffled six-deck table with seed 42."""
    return create_initial_state(bankroll=1000, seed=42)


@pytest.fixture
def blackjack_cards():
    """A natural blackjack (A-K)."""
    return parse_cards("AS KH")


@pytest.fixture
def soft_17_cards():
    """A soft 17 (A-6)."""
    return parse_cards("AS 6H")


@pytest.fixture
def hard_16_cards():
    """A hard 16 (10-6)."""
    return parse_cards("10S 6H")


@pytest.fixture
def hilo():
    """Hi-Lo counting system."""
    return HiLoSystem()

