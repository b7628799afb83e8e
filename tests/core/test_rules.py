"""Tests for table rules, payouts and the penetration rule."""

import pytest
from decimal import Decimal

from blackjack_core.cards import build_shoe
from blackjack_core.rules import (
    Outcome,
    Rules,
    insurance_payout,
    payout_for_outcome,
    penetration_used,
    should_shuffle,
    total_cards,
)


class TestRules:
    """Tests for Rules construction and validation."""

    def test_defaults(self):
        rules = Rules()
        assert rules.decks == 6
        assert rules.penetration == 0.75
        assert rules.dealer_stands_on_soft_17 is True
        assert rules.blackjack_payout == 1.5
        assert rules.max_hands == 4
        assert rules.double_allowed_totals is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"decks": 0},
            {"decks": 9},
            {"penetration": 0},
            {"penetration": 1.5},
            {"blackjack_payout": 0.5},
            {"max_hands": 0},
            {"decks": 1.5},
            {"decks": True},
            {"max_hands": 2.0},
        ],
    )
    def test_invalid_values_raise(self, overrides):
        with pytest.raises(ValueError):
            Rules(**overrides)

    def test_unknown_override_raises(self):
        with pytest.raises(ValueError, match="Unknown rule options"):
            Rules.from_overrides({"dealer_peeks": True})

    def test_with_overrides(self):
        rules = Rules().with_overrides(decks=2, allow_surrender=False)
        assert rules.decks == 2
        assert rules.allow_surrender is False
        assert rules.penetration == 0.75

    def test_frozen(self):
        rules = Rules()
        with pytest.raises(Exception):  # dataclasses.FrozenInstanceError
            rules.decks = 8

    def test_double_totals_coerced(self):
        rules = Rules(double_allowed_totals=[10, 11])
        assert rules.double_allowed_totals == frozenset({10, 11})
        assert rules.allows_double_on(10)
        assert not rules.allows_double_on(9)
        assert Rules().allows_double_on(5)

    def test_option_names(self):
        names = Rules.option_names()
        assert "decks" in names
        assert "allow_insurance" in names


class TestPayout:
    """Tests for settlement arithmetic."""

    @pytest.mark.parametrize(
        "outcome, expected",
        [
            (Outcome.BLACKJACK, Decimal("25")),
            (Outcome.WIN, Decimal("20")),
            (Outcome.PUSH, Decimal("10")),
            (Outcome.SURRENDER, Decimal("5")),
            (Outcome.LOSE, Decimal("0")),
        ],
    )
    def test_payout_includes_stake(self, outcome, expected):
        assert payout_for_outcome(outcome, Decimal("10"), 1.5) == expected

    def test_six_to_five_blackjack(self):
        assert payout_for_outcome(Outcome.BLACKJACK, Decimal("10"), 1.2) == Decimal("22")

    def test_insurance_pays_two_to_one(self):
        assert insurance_payout(Decimal("5"), True) == Decimal("15")
        assert insurance_payout(Decimal("5"), False) == Decimal("0")
        assert insurance_payout(Decimal("0"), True) == Decimal("0")


class TestPenetration:
    """Tests for the cut-card rule."""

    def test_total_cards(self):
        assert total_cards(Rules(decks=2)) == 104

    def test_full_shoe_has_no_penetration(self):
        rules = Rules(decks=1)
        shoe = build_shoe(1)
        assert penetration_used(shoe, rules) == 0.0
        assert not should_shuffle(shoe, (), rules)

    def test_shuffle_at_cut_card(self):
        rules = Rules(decks=1, penetration=0.75)
        shoe = build_shoe(1)
        assert not should_shuffle(shoe[38:], shoe[:38], rules)
        assert should_shuffle(shoe[39:], shoe[:39], rules)

    def test_full_penetration_only_at_empty_shoe(self):
        rules = Rules(decks=1, penetration=1.0)
        shoe = build_shoe(1)
        assert not should_shuffle(shoe[51:], shoe[:51], rules)
        assert should_shuffle((), shoe, rules)
