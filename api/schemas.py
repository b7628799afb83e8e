"""Pydantic schemas for API requests and responses."""

from abc import abstractmethod
from decimal import Decimal
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from blackjack_core.game import actions as act
from blackjack_core.game.engine import MAX_SEATS


# Table setup
class NewTableRequest(BaseModel):
    """Options for a new table; omitted fields use the configured defaults."""

    bankroll: Decimal | None = Field(default=None, ge=0)
    seats: int | None = Field(default=None, ge=1, le=MAX_SEATS)
    seed: int | None = None
    rules: dict[str, Any] = Field(default_factory=dict)


class NewTableResponse(BaseModel):
    session_id: str
    seed: int


# Actions, discriminated on the action tag
class _ActionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    @abstractmethod
    def to_action(self) -> act.Action:
        """Convert the request into an engine action."""


class AddSeatRequest(_ActionModel):
    type: Literal["ADD_SEAT"]
    bankroll: Decimal | None = Field(default=None, ge=0)

    def to_action(self) -> act.Action:
        return act.AddSeat(bankroll=self.bankroll)


class SetBetRequest(_ActionModel):
    type: Literal["SET_BET"]
    seat_index: int = Field(..., ge=0)
    amount: Decimal = Field(..., ge=0, description="Bet amount")

    def to_action(self) -> act.Action:
        return act.SetBet(seat_index=self.seat_index, amount=self.amount)


class ToggleReadyRequest(_ActionModel):
    type: Literal["TOGGLE_READY"]
    seat_index: int = Field(..., ge=0)
    ready: bool = True

    def to_action(self) -> act.Action:
        return act.ToggleReady(seat_index=self.seat_index, ready=self.ready)


class PlaceBetRequest(_ActionModel):
    type: Literal["PLACE_BET"]
    amount: Decimal = Field(..., gt=0, description="Bet amount")

    def to_action(self) -> act.Action:
        return act.PlaceBet(amount=self.amount)


class TakeInsuranceRequest(_ActionModel):
    type: Literal["TAKE_INSURANCE"]
    amount: Decimal = Field(..., gt=0)

    def to_action(self) -> act.Action:
        return act.TakeInsurance(amount=self.amount)


class ReshuffleRequest(_ActionModel):
    type: Literal["RESHUFFLE"]
    seed: int

    def to_action(self) -> act.Action:
        return act.Reshuffle(seed=self.seed)


class SetRulesRequest(_ActionModel):
    type: Literal["SET_RULES"]
    overrides: dict[str, Any]

    def to_action(self) -> act.Action:
        return act.SetRules(overrides=self.overrides)


class SimpleActionRequest(_ActionModel):
    """Actions that carry nothing but their tag."""

    type: Literal[
        "DEAL",
        "BEGIN_DEAL",
        "DEAL_STEP",
        "HIT",
        "STAND",
        "DOUBLE",
        "SPLIT",
        "SURRENDER",
        "DECLINE_INSURANCE",
        "DEALER_PLAY",
        "DEALER_TICK",
        "END_ROUND",
    ]

    def to_action(self) -> act.Action:
        return act.ACTION_CLASSES[act.ActionType(self.type)]()


ActionRequest = Annotated[
    Union[
        AddSeatRequest,
        SetBetRequest,
        ToggleReadyRequest,
        PlaceBetRequest,
        TakeInsuranceRequest,
        ReshuffleRequest,
        SetRulesRequest,
        SimpleActionRequest,
    ],
    Field(discriminator="type"),
]


# Snapshots
class CardResponse(BaseModel):
    """Card representation."""

    rank: str
    suit: str
    value: int


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    total: int
    is_soft: bool
    is_blackjack: bool
    is_bust: bool
    bet: float
    status: str
    is_doubled: bool = False
    is_split_child: bool = False


class DealerResponse(BaseModel):
    """Dealer cards; only the up-card is shown until the hand is revealed."""

    cards: list[CardResponse]
    hole_card_hidden: bool
    total: int | None


class SeatResponse(BaseModel):
    seat_index: int
    bankroll: float
    pending_bet: float
    ready: bool
    hands: list[HandResponse]
    active_hand_index: int
    insurance_bet: float
    insurance_offered: bool
    skipped_round: bool


class HandResultResponse(BaseModel):
    seat_index: int
    hand_index: int
    outcome: Literal["WIN", "LOSE", "PUSH", "BLACKJACK", "SURRENDER"]
    bet: float
    payout: float
    player_total: int
    dealer_total: int


class RoundResultResponse(BaseModel):
    """Settlement of the most recent round."""

    hands: list[HandResultResponse]
    dealer_total: int
    dealer_bust: bool
    dealer_blackjack: bool
    insurance_payouts: dict[int, float]


class CountResponse(BaseModel):
    """Counting-trainer view of the shoe."""

    running_count: int
    true_count: float
    decks_remaining: float
    penetration: float
    cards_remaining: int
    cards_discarded: int


class TableStateResponse(BaseModel):
    """Current table snapshot."""

    phase: str
    round_id: int
    active_seat_index: int
    seats: list[SeatResponse]
    dealer: DealerResponse
    count: CountResponse
    rules: dict[str, Any]
    last_result: RoundResultResponse | None
    capabilities: dict[str, bool]


class ActionResponse(BaseModel):
    """Result of dispatching one action."""

    accepted: bool
    state: TableStateResponse
