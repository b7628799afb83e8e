"""Payout arithmetic for settled hands."""

from decimal import Decimal
from enum import Enum


class Outcome(Enum):
    """Result of a settled hand."""

    WIN = "WIN"
    LOSE = "LOSE"
    PUSH = "PUSH"
    BLACKJACK = "BLACKJACK"
    SURRENDER = "SURRENDER"


def to_money(amount: Decimal | float | int | str) -> Decimal:
    """Convert an amount to Decimal without binary float artifacts."""
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def payout_for_outcome(
    outcome: Outcome,
    bet: Decimal | float | int,
    blackjack_payout: Decimal | float,
) -> Decimal:
    """
    Return the amount credited back for a settled hand.

    The amount includes the returned stake: a WIN of 10 credits 20, a
    3:2 BLACKJACK of 10 credits 25 and a LOSE credits nothing.

    Args:
        outcome: How the hand finished
        bet: The hand's total wager (doubled hands pass the doubled amount)
        blackjack_payout: Profit multiplier for a natural (1.5 for 3:2)

    Returns:
        The credit for the hand
    """
    stake = to_money(bet)
    if outcome is Outcome.BLACKJACK:
        return stake * (1 + to_money(blackjack_payout))
    if outcome is Outcome.WIN:
        return stake * 2
    if outcome is Outcome.PUSH:
        return stake
    if outcome is Outcome.SURRENDER:
        return stake / 2
    return Decimal("0")


def insurance_payout(insurance_bet: Decimal, dealer_blackjack: bool) -> Decimal:
    """Insurance pays 2:1, so a winning bet credits three times its size."""
    if dealer_blackjack and insurance_bet > 0:
        return insurance_bet * 3
    return Decimal("0")
