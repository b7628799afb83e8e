"""The closed set of actions accepted by the round engine."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Mapping, Union


class ActionType(Enum):
    """Action tags; the values double as trigger names of the phase graph."""

    ADD_SEAT = "ADD_SEAT"
    SET_BET = "SET_BET"
    TOGGLE_READY = "TOGGLE_READY"
    PLACE_BET = "PLACE_BET"
    DEAL = "DEAL"
    BEGIN_DEAL = "BEGIN_DEAL"
    DEAL_STEP = "DEAL_STEP"
    HIT = "HIT"
    STAND = "STAND"
    DOUBLE = "DOUBLE"
    SPLIT = "SPLIT"
    SURRENDER = "SURRENDER"
    TAKE_INSURANCE = "TAKE_INSURANCE"
    DECLINE_INSURANCE = "DECLINE_INSURANCE"
    DEALER_PLAY = "DEALER_PLAY"
    DEALER_TICK = "DEALER_TICK"
    END_ROUND = "END_ROUND"
    RESHUFFLE = "RESHUFFLE"
    SET_RULES = "SET_RULES"


@dataclass(frozen=True)
class AddSeat:
    """Open another seat; it starts with ``bankroll`` or seat 0's bankroll."""

    type: ClassVar[ActionType] = ActionType.ADD_SEAT
    bankroll: Decimal | None = None


@dataclass(frozen=True)
class SetBet:
    type: ClassVar[ActionType] = ActionType.SET_BET
    seat_index: int
    amount: Decimal


@dataclass(frozen=True)
class ToggleReady:
    type: ClassVar[ActionType] = ActionType.TOGGLE_READY
    seat_index: int
    ready: bool = True


@dataclass(frozen=True)
class PlaceBet:
    """Single-seat shortcut: set seat 0's bet and mark it ready."""

    type: ClassVar[ActionType] = ActionType.PLACE_BET
    amount: Decimal


@dataclass(frozen=True)
class Deal:
    """Begin the deal and drain the whole deal queue in one transition."""

    type: ClassVar[ActionType] = ActionType.DEAL


@dataclass(frozen=True)
class BeginDeal:
    type: ClassVar[ActionType] = ActionType.BEGIN_DEAL


@dataclass(frozen=True)
class DealStep:
    """Deal the next card of the deal queue."""

    type: ClassVar[ActionType] = ActionType.DEAL_STEP


@dataclass(frozen=True)
class Hit:
    type: ClassVar[ActionType] = ActionType.HIT


@dataclass(frozen=True)
class Stand:
    type: ClassVar[ActionType] = ActionType.STAND


@dataclass(frozen=True)
class Double:
    type: ClassVar[ActionType] = ActionType.DOUBLE


@dataclass(frozen=True)
class Split:
    type: ClassVar[ActionType] = ActionType.SPLIT


@dataclass(frozen=True)
class Surrender:
    type: ClassVar[ActionType] = ActionType.SURRENDER


@dataclass(frozen=True)
class TakeInsurance:
    type: ClassVar[ActionType] = ActionType.TAKE_INSURANCE
    amount: Decimal


@dataclass(frozen=True)
class DeclineInsurance:
    type: ClassVar[ActionType] = ActionType.DECLINE_INSURANCE


@dataclass(frozen=True)
class DealerPlay:
    """Play the dealer hand out completely and settle."""

    type: ClassVar[ActionType] = ActionType.DEALER_PLAY


@dataclass(frozen=True)
class DealerTick:
    """Draw one dealer card, or settle once the dealer stands."""

    type: ClassVar[ActionType] = ActionType.DEALER_TICK


@dataclass(frozen=True)
class EndRound:
    """Void the round in progress and return to betting."""

    type: ClassVar[ActionType] = ActionType.END_ROUND


@dataclass(frozen=True)
class Reshuffle:
    type: ClassVar[ActionType] = ActionType.RESHUFFLE
    seed: int


@dataclass(frozen=True)
class SetRules:
    type: ClassVar[ActionType] = ActionType.SET_RULES
    overrides: Mapping[str, Any] = field(default_factory=dict)


Action = Union[
    AddSeat,
    SetBet,
    ToggleReady,
    PlaceBet,
    Deal,
    BeginDeal,
    DealStep,
    Hit,
    Stand,
    Double,
    Split,
    Surrender,
    TakeInsurance,
    DeclineInsurance,
    DealerPlay,
    DealerTick,
    EndRound,
    Reshuffle,
    SetRules,
]

ACTION_CLASSES: Mapping[ActionType, type] = {
    cls.type: cls
    for cls in (
        AddSeat,
        SetBet,
        ToggleReady,
        PlaceBet,
        Deal,
        BeginDeal,
        DealStep,
        Hit,
        Stand,
        Double,
        Split,
        Surrender,
        TakeInsurance,
        DeclineInsurance,
        DealerPlay,
        DealerTick,
        EndRound,
        Reshuffle,
        SetRules,
    )
}
