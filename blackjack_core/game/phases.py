"""Phase graph of a round.

The graph is declared once as a ``transitions`` machine: every action tag is
a trigger, and a trigger's sources are the phases in which the action may be
taken. The engine consults it to reject actions arriving in the wrong phase
and to check that each transition it produces is an edge of the graph.
"""

from transitions import Machine

from blackjack_core.game.actions import ActionType
from blackjack_core.game.state import Phase

BETTING = Phase.BETTING.name
DEALING = Phase.DEALING.name
INSURANCE = Phase.INSURANCE.name
PLAYER_TURN = Phase.PLAYER_TURN.name
DEALER_TURN = Phase.DEALER_TURN.name

STATES = [phase.name for phase in Phase]


def _edges(action: ActionType, sources: list[str], dests: list[str]) -> list[dict[str, str]]:
    return [
        {"trigger": action.value, "source": source, "dest": dest}
        for source in sources
        for dest in dests
    ]


# Phases a finished initial deal can lead to
_AFTER_DEAL = [INSURANCE, PLAYER_TURN, BETTING]

TRANSITIONS = [
    *_edges(ActionType.ADD_SEAT, [BETTING], [BETTING]),
    *_edges(ActionType.SET_BET, [BETTING], [BETTING]),
    *_edges(ActionType.TOGGLE_READY, [BETTING], [BETTING]),
    *_edges(ActionType.PLACE_BET, [BETTING], [BETTING]),
    *_edges(ActionType.RESHUFFLE, [BETTING], [BETTING]),
    *_edges(ActionType.SET_RULES, [BETTING], [BETTING]),
    *_edges(ActionType.BEGIN_DEAL, [BETTING], [DEALING]),
    *_edges(ActionType.DEAL, [BETTING], _AFTER_DEAL),
    *_edges(ActionType.DEAL_STEP, [DEALING], [DEALING, *_AFTER_DEAL]),
    *_edges(ActionType.TAKE_INSURANCE, [INSURANCE], [INSURANCE, PLAYER_TURN, BETTING]),
    *_edges(ActionType.DECLINE_INSURANCE, [INSURANCE], [INSURANCE, PLAYER_TURN, BETTING]),
    *_edges(ActionType.HIT, [PLAYER_TURN], [PLAYER_TURN, DEALER_TURN, BETTING]),
    *_edges(ActionType.STAND, [PLAYER_TURN], [PLAYER_TURN, DEALER_TURN, BETTING]),
    *_edges(ActionType.DOUBLE, [PLAYER_TURN], [PLAYER_TURN, DEALER_TURN, BETTING]),
    *_edges(ActionType.SPLIT, [PLAYER_TURN], [PLAYER_TURN, DEALER_TURN, BETTING]),
    *_edges(ActionType.SURRENDER, [PLAYER_TURN], [PLAYER_TURN, DEALER_TURN, BETTING]),
    *_edges(ActionType.DEALER_PLAY, [DEALER_TURN], [BETTING]),
    *_edges(ActionType.DEALER_TICK, [DEALER_TURN], [DEALER_TURN, BETTING]),
    *_edges(ActionType.END_ROUND, STATES, [BETTING]),
]

PHASE_MACHINE = Machine(
    model=None,
    states=STATES,
    transitions=TRANSITIONS,
    initial=BETTING,
    auto_transitions=False,
)

_ALLOWED: dict[Phase, frozenset[ActionType]] = {
    phase: frozenset(ActionType(trigger) for trigger in PHASE_MACHINE.get_triggers(phase.name))
    for phase in Phase
}


def allowed_actions(phase: Phase) -> frozenset[ActionType]:
    """Return the action tags that may be taken in ``phase``."""
    return _ALLOWED[phase]


def is_allowed(phase: Phase, action: ActionType) -> bool:
    """Check if an action may be taken in ``phase``."""
    return action in _ALLOWED[phase]


def is_valid_transition(action: ActionType, source: Phase, dest: Phase) -> bool:
    """
    Check if ``action`` may move a round from ``source`` to ``dest``.

    Args:
        action: The action that produced the transition
        source: Phase before the action
        dest: Phase after the action

    Returns:
        True if the edge exists in the phase graph
    """
    return bool(
        PHASE_MACHINE.get_transitions(
            trigger=action.value, source=source.name, dest=dest.name
        )
    )
