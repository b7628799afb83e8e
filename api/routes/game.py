"""Game API endpoints."""

import logging
from dataclasses import asdict
from typing import Annotated, Any

from fastapi import APIRouter, HTTPException, Header

from api.schemas import (
    ActionRequest,
    ActionResponse,
    CardResponse,
    CountResponse,
    DealerResponse,
    HandResponse,
    HandResultResponse,
    NewTableRequest,
    NewTableResponse,
    RoundResultResponse,
    SeatResponse,
    TableStateResponse,
)
from api.session import get_registry
from blackjack_core.cards import Card
from blackjack_core.game import BlackjackTable, Hand, Phase, RoundResult, RoundState, Seat
from blackjack_core.game import selectors
from blackjack_core.rules import Rules
from config import config

logger = logging.getLogger(__name__)

router = APIRouter()

SessionHeader = Annotated[str, Header(alias="X-Session-ID")]

# Phases in which the dealer's hole card is face up
_REVEALED_PHASES = (Phase.BETTING, Phase.DEALER_TURN)


def _card_response(card: Card) -> CardResponse:
    return CardResponse(rank=str(card.rank), suit=str(card.suit), value=card.value)


def _hand_response(hand: Hand) -> HandResponse:
    """Convert a Hand to HandResponse."""
    value = hand.value
    return HandResponse(
        cards=[_card_response(c) for c in hand.cards],
        total=value.total,
        is_soft=value.is_soft,
        is_blackjack=value.is_blackjack,
        is_bust=value.is_bust,
        bet=float(hand.bet),
        status=hand.status.name,
        is_doubled=hand.is_doubled,
        is_split_child=hand.is_split_child,
    )


def _seat_response(seat: Seat) -> SeatResponse:
    return SeatResponse(
        seat_index=seat.seat_index,
        bankroll=float(seat.bankroll),
        pending_bet=float(seat.pending_bet),
        ready=seat.ready,
        hands=[_hand_response(h) for h in seat.hands],
        active_hand_index=seat.active_hand_index,
        insurance_bet=float(seat.insurance_bet),
        insurance_offered=seat.insurance_offered,
        skipped_round=seat.skipped_round,
    )


def _dealer_response(state: RoundState) -> DealerResponse:
    cards = state.dealer_hand.cards
    hidden = state.phase not in _REVEALED_PHASES and len(cards) > 1
    shown = cards[:1] if hidden else cards
    return DealerResponse(
        cards=[_card_response(c) for c in shown],
        hole_card_hidden=hidden,
        total=None if hidden or not cards else state.dealer_hand.value.total,
    )


def _result_response(result: RoundResult) -> RoundResultResponse:
    return RoundResultResponse(
        hands=[
            HandResultResponse(
                seat_index=r.seat_index,
                hand_index=r.hand_index,
                outcome=r.outcome.value,
                bet=float(r.bet),
                payout=float(r.payout),
                player_total=r.player_total,
                dealer_total=r.dealer_total,
            )
            for r in result.hands
        ],
        dealer_total=result.dealer_total,
        dealer_bust=result.dealer_bust,
        dealer_blackjack=result.dealer_blackjack,
        insurance_payouts={i.seat_index: float(i.payout) for i in result.insurance},
    )


def _rules_dict(rules: Rules) -> dict[str, Any]:
    data = asdict(rules)
    if rules.double_allowed_totals is not None:
        data["double_allowed_totals"] = sorted(rules.double_allowed_totals)
    return data


def _state_response(table: BlackjackTable) -> TableStateResponse:
    """Convert a table snapshot to response."""
    state = table.state
    return TableStateResponse(
        phase=state.phase.name,
        round_id=state.round_id,
        active_seat_index=state.active_seat_index,
        seats=[_seat_response(s) for s in state.seats],
        dealer=_dealer_response(state),
        count=CountResponse(
            running_count=state.running_count,
            true_count=round(selectors.select_true_count(state), 2),
            decks_remaining=round(selectors.select_decks_remaining(state), 2),
            penetration=round(selectors.select_penetration(state), 4),
            cards_remaining=len(state.shoe),
            cards_discarded=len(state.discard),
        ),
        rules=_rules_dict(state.rules),
        last_result=_result_response(state.last_result) if state.last_result else None,
        capabilities=table.capabilities(),
    )


def _build_table(request: NewTableRequest) -> BlackjackTable:
    game = config.game
    try:
        rules = game.rules().with_overrides(**request.rules)
        return BlackjackTable(
            bankroll=request.bankroll if request.bankroll is not None else game.bankroll,
            seats=request.seats or game.seats,
            rules=rules,
            seed=request.seed,
        )
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _get_table(session_id: str) -> BlackjackTable:
    table = get_registry().get(session_id)
    if table is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return table


@router.post("/new")
async def new_game(
    request: NewTableRequest | None = None,
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> NewTableResponse:
    """Open a table, or reset the one behind an existing session."""
    table = _build_table(request or NewTableRequest())
    registry = get_registry()
    if session_id is None or not registry.replace(session_id, table):
        session_id = registry.create(table)
    return NewTableResponse(session_id=session_id, seed=table.state.seed)


@router.get("/state")
async def get_state(session_id: SessionHeader) -> TableStateResponse:
    """Get current table state."""
    return _state_response(_get_table(session_id))


@router.post("/action")
async def dispatch_action(
    request: ActionRequest,
    session_id: SessionHeader,
) -> ActionResponse:
    """Dispatch one action; a rejected action leaves the table unchanged."""
    table = _get_table(session_id)
    accepted = table.dispatch(request.to_action())
    if not accepted:
        logger.debug("Action %s rejected in %s", request.type, table.phase.name)
    return ActionResponse(accepted=accepted, state=_state_response(table))


@router.get("/capabilities")
async def get_capabilities(session_id: SessionHeader) -> dict[str, bool]:
    """Which actions the table would accept right now."""
    return _get_table(session_id).capabilities()
