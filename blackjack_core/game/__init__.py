"""Round engine, state and table shell."""

from blackjack_core.game.engine import create_initial_state, reduce
from blackjack_core.game.events import EventType, GameEvent
from blackjack_core.game.state import Hand, HandStatus, Phase, RoundResult, RoundState, Seat
from blackjack_core.game.table import BlackjackTable

__all__ = [
    "create_initial_state",
    "reduce",
    "EventType",
    "GameEvent",
    "Hand",
    "HandStatus",
    "Phase",
    "RoundResult",
    "RoundState",
    "Seat",
    "BlackjackTable",
]
