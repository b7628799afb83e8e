"""Tests for the phase graph."""

import pytest

from blackjack_core.game.actions import ActionType
from blackjack_core.game.phases import allowed_actions, is_allowed, is_valid_transition
from blackjack_core.game.state import Phase


class TestAllowedActions:
    """Which actions each phase accepts."""

    def test_betting(self):
        allowed = allowed_actions(Phase.BETTING)
        for action in (
            ActionType.ADD_SEAT,
            ActionType.SET_BET,
            ActionType.TOGGLE_READY,
            ActionType.PLACE_BET,
            ActionType.DEAL,
            ActionType.BEGIN_DEAL,
            ActionType.RESHUFFLE,
            ActionType.SET_RULES,
        ):
            assert action in allowed
        assert ActionType.HIT not in allowed

    def test_player_turn(self):
        allowed = allowed_actions(Phase.PLAYER_TURN)
        assert allowed == {
            ActionType.HIT,
            ActionType.STAND,
            ActionType.DOUBLE,
            ActionType.SPLIT,
            ActionType.SURRENDER,
            ActionType.END_ROUND,
        }

    def test_insurance(self):
        assert is_allowed(Phase.INSURANCE, ActionType.TAKE_INSURANCE)
        assert is_allowed(Phase.INSURANCE, ActionType.DECLINE_INSURANCE)
        assert not is_allowed(Phase.INSURANCE, ActionType.HIT)

    def test_dealing(self):
        assert allowed_actions(Phase.DEALING) == {ActionType.DEAL_STEP, ActionType.END_ROUND}

    @pytest.mark.parametrize("phase", list(Phase))
    def test_end_round_always_allowed(self, phase):
        assert is_allowed(phase, ActionType.END_ROUND)


class TestTransitions:
    """Edges of the phase graph."""

    @pytest.mark.parametrize(
        "action, source, dest",
        [
            (ActionType.DEAL, Phase.BETTING, Phase.PLAYER_TURN),
            (ActionType.DEAL, Phase.BETTING, Phase.INSURANCE),
            (ActionType.DEAL, Phase.BETTING, Phase.BETTING),
            (ActionType.BEGIN_DEAL, Phase.BETTING, Phase.DEALING),
            (ActionType.DEAL_STEP, Phase.DEALING, Phase.DEALING),
            (ActionType.STAND, Phase.PLAYER_TURN, Phase.DEALER_TURN),
            (ActionType.DEALER_TICK, Phase.DEALER_TURN, Phase.DEALER_TURN),
            (ActionType.END_ROUND, Phase.DEALER_TURN, Phase.BETTING),
        ],
    )
    def test_valid(self, action, source, dest):
        assert is_valid_transition(action, source, dest)

    @pytest.mark.parametrize(
        "action, source, dest",
        [
            (ActionType.DEAL, Phase.BETTING, Phase.DEALER_TURN),
            (ActionType.BEGIN_DEAL, Phase.BETTING, Phase.PLAYER_TURN),
            (ActionType.DEALER_PLAY, Phase.DEALER_TURN, Phase.DEALER_TURN),
            (ActionType.HIT, Phase.BETTING, Phase.PLAYER_TURN),
            (ActionType.END_ROUND, Phase.PLAYER_TURN, Phase.PLAYER_TURN),
        ],
    )
    def test_invalid(self, action, source, dest):
        assert not is_valid_transition(action, source, dest)
