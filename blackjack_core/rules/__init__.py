"""Table rules, payouts and the shoe penetration rule."""

from blackjack_core.rules.payout import Outcome, insurance_payout, payout_for_outcome, to_money
from blackjack_core.rules.shoe import penetration_used, should_shuffle, total_cards
from blackjack_core.rules.table import Rules

__all__ = [
    "Outcome",
    "Rules",
    "insurance_payout",
    "payout_for_outcome",
    "penetration_used",
    "should_shuffle",
    "to_money",
    "total_cards",
]
