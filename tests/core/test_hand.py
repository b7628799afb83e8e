"""Tests for hand evaluation."""

import pytest

from blackjack_core.cards import parse_cards
from blackjack_core.hand import evaluate_cards, is_pair


class TestEvaluateCards:
    """Tests for evaluate_cards."""

    def test_empty_hand(self):
        value = evaluate_cards(())
        assert value.total == 0
        assert not value.is_soft
        assert not value.is_blackjack
        assert not value.is_bust

    def test_blackjack(self, blackjack_cards):
        """A-K is a two-card 21."""
        value = evaluate_cards(blackjack_cards)
        assert value.total == 21
        assert value.is_blackjack
        assert value.is_soft

    def test_soft_17(self, soft_17_cards):
        value = evaluate_cards(soft_17_cards)
        assert value.total == 17
        assert value.is_soft

    def test_hard_16(self, hard_16_cards):
        value = evaluate_cards(hard_16_cards)
        assert value.total == 16
        assert not value.is_soft

    def test_three_card_21_is_not_blackjack(self):
        value = evaluate_cards(parse_cards("7S 7H 7D"))
        assert value.total == 21
        assert not value.is_blackjack

    @pytest.mark.parametrize(
        "codes, total, soft",
        [
            ("AS AH", 12, True),
            ("AS AH 9D", 21, True),
            ("AS 6H KD", 17, False),
            ("AS AH AD AC", 14, True),
            ("AS AH AD AC 7S", 21, True),
            ("AS AH AD AC 8S", 12, False),
        ],
    )
    def test_ace_reduction(self, codes, total, soft):
        """Aces drop from 11 to 1 one at a time while the hand is over 21."""
        value = evaluate_cards(parse_cards(codes))
        assert value.total == total
        assert value.is_soft is soft

    def test_bust(self):
        value = evaluate_cards(parse_cards("10S 6H KC"))
        assert value.total == 26
        assert value.is_bust
        assert not value.is_soft

    def test_str(self, blackjack_cards, soft_17_cards):
        assert str(evaluate_cards(blackjack_cards)) == "BLACKJACK"
        assert str(evaluate_cards(soft_17_cards)) == "soft 17"
        assert str(evaluate_cards(parse_cards("10S 6H KC"))) == "BUST (26)"


def test_is_pair():
    assert is_pair(parse_cards("8S 8H"))
    assert not is_pair(parse_cards("KS QH"))
    assert not is_pair(parse_cards("8S 8H 8D"))
