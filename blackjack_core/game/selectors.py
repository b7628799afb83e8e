"""Read-only views over a RoundState for renderers and trainers."""

from blackjack_core.cards import CARDS_PER_DECK, Card
from blackjack_core.counting import true_count as _true_count
from blackjack_core.game.state import Hand, RoundState, Seat
from blackjack_core.rules import penetration_used


def select_active_seat(state: RoundState) -> Seat | None:
    return state.active_seat


def select_active_hand(state: RoundState) -> Hand | None:
    return state.active_hand


def select_dealer_upcard(state: RoundState) -> Card | None:
    """The dealer's first card, the only one shown before dealer play."""
    cards = state.dealer_hand.cards
    return cards[0] if cards else None


def select_decks_remaining(state: RoundState) -> float:
    """Undealt decks left in the shoe."""
    return len(state.shoe) / CARDS_PER_DECK


def select_true_count(state: RoundState) -> float:
    """Running count divided by decks remaining."""
    return _true_count(state.running_count, select_decks_remaining(state))


def select_penetration(state: RoundState) -> float:
    """Fraction of the shoe drawn since the last shuffle."""
    return penetration_used(state.shoe, state.rules)


def select_cards_seen(state: RoundState) -> tuple[Card, ...]:
    """Every card drawn since the shuffle: the discard tray plus the table."""
    return state.discard + state.table_cards
