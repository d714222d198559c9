"""Table API endpoints for the single in-process table."""

import threading
from enum import Enum
from typing import Any, Callable

from fastapi import APIRouter, HTTPException

from api.schemas import (
    ActionRequest,
    ActionsResponse,
    AutoBetRequest,
    BetRequest,
    CardResponse,
    CountResponse,
    DealerResponse,
    EventResponse,
    FeedbackResponse,
    HandResponse,
    HandResultResponse,
    InsuranceRequest,
    SummaryResponse,
    TableResponse,
)
from api.seed import HttpSeedSource
from config import config
from core.cards import Card
from core.hand import Hand, hand_total
from core.game import EventRecorder, GameEvent, RoundStateMachine, RoundSummary
from core.game.pacing import NoPacer, Pacer, SleepPacer
from core.seeding import SeedSource
from core.strategy.basic import Feedback

router = APIRouter()


class Table:
    """A round driver plus the buffer of events not yet sent to the client."""

    def __init__(self, machine: RoundStateMachine, recorder: EventRecorder) -> None:
        self.machine = machine
        self.recorder = recorder
        self.lock = threading.Lock()


_table: Table | None = None
_table_lock = threading.Lock()


def create_table(seed_source: SeedSource | None = None, pacer: Pacer | None = None) -> Table:
    """Build a table from the application configuration."""
    if seed_source is None and config.seed.enabled:
        seed_source = HttpSeedSource(
            url=config.seed.url,  # type: ignore[arg-type]
            token=config.seed.token,
            timeout=config.seed.timeout,
        )
    if pacer is None:
        speed = config.game.pacing_speed
        pacer = SleepPacer(speed) if speed > 0 else NoPacer()

    recorder = EventRecorder()
    machine = RoundStateMachine(
        rules=config.game.rules,
        balance=config.game.starting_balance,
        seed_source=seed_source,
        presenter=recorder,
        pacer=pacer,
        auto_bet_amount=config.game.auto_bet_amount,
    )
    return Table(machine, recorder)


def get_table() -> Table:
    """Get the table, creating it on first use."""
    global _table
    with _table_lock:
        if _table is None:
            _table = create_table()
        return _table


def set_table(table: Table | None) -> None:
    """Replace the table (None means build a fresh one on next use)."""
    global _table
    with _table_lock:
        _table = table


def _card_to_response(card: Card) -> CardResponse:
    if card.face_down:
        return CardResponse(code="??", rank=None, suit=None, value=None, face_down=True)
    return CardResponse(code=str(card), rank=str(card.rank), suit=str(card.suit), value=card.value)


def _hand_to_response(hand: Hand) -> HandResponse:
    total, is_soft, is_bust = hand.total
    return HandResponse(
        cards=[_card_to_response(c) for c in hand.cards],
        total=total,
        is_soft=is_soft,
        is_blackjack=hand.is_blackjack,
        is_busted=is_bust,
        bet=hand.bet,
        doubled=hand.doubled,
        surrendered=hand.surrendered,
        done=hand.done,
        label=str(hand),
    )


def _summary_to_response(summary: RoundSummary) -> SummaryResponse:
    return SummaryResponse(
        hands=[
            HandResultResponse(
                index=r.index,
                outcome=r.outcome.value,
                bet=r.bet,
                returned=r.returned,
                net=r.net,
                label=r.label,
            )
            for r in summary.hands
        ],
        dealer_cards=[str(c) for c in summary.dealer_cards],
        dealer_total=summary.dealer_total,
        dealer_blackjack=summary.dealer_blackjack,
        insurance_bet=summary.insurance_bet,
        insurance_returned=summary.insurance_returned,
        message=summary.message,
        category=summary.category.value,
        net=summary.net,
        balance=summary.balance,
    )


def _feedback_to_response(feedback: Feedback) -> FeedbackResponse:
    return FeedbackResponse(
        correct=feedback.correct,
        chosen=feedback.chosen.name.lower(),
        recommended=feedback.recommended.name.lower(),
        message=feedback.message,
    )


def _json_safe(value: Any) -> Any:
    """Flatten event payload values (enums, summaries) into JSON types."""
    if isinstance(value, RoundSummary):
        return _summary_to_response(value).model_dump()
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value


def _event_to_response(event: GameEvent) -> EventResponse:
    return EventResponse(type=event.event_type.name, data=_json_safe(event.data))


def _table_response(table: Table) -> TableResponse:
    """Snapshot the table and hand over the events buffered since last time."""
    machine = table.machine
    state = machine.round
    shoe = machine.shoe
    dealer = state.dealer_cards
    summary = machine.last_summary
    feedback = machine.last_feedback

    return TableResponse(
        phase=machine.phase.name,
        balance=machine.balance,
        bet=state.total_wagered if state.hands else state.bet,
        insurance_bet=state.insurance_bet,
        auto_bet=machine.auto_bet,
        active_hand_index=state.active_hand_idx,
        hands=[_hand_to_response(h) for h in state.hands],
        dealer=DealerResponse(
            cards=[_card_to_response(c) for c in dealer],
            visible_total=hand_total(dealer).total,
            hole_revealed=bool(dealer) and not any(c.face_down for c in dealer),
        ),
        count=CountResponse(
            running_count=shoe.running_count,
            true_count=shoe.true_count(),
            cards_remaining=shoe.cards_remaining,
            decks_remaining=shoe.decks_remaining,
            fill_ratio=shoe.fill_ratio,
            seeded=shoe.seed is not None,
        ),
        actions=ActionsResponse.model_validate(machine.available_actions()),
        last_summary=_summary_to_response(summary) if summary else None,
        last_feedback=_feedback_to_response(feedback) if feedback else None,
        events=[_event_to_response(e) for e in table.recorder.drain()],
    )


def _run(operation: Callable[[RoundStateMachine], bool], name: str) -> TableResponse:
    """Apply an operation to the table, 409 if the driver refuses it."""
    table = get_table()
    with table.lock:
        if not operation(table.machine):
            raise HTTPException(
                status_code=409,
                detail=f"Cannot {name} during {table.machine.phase.name}",
            )
        return _table_response(table)


@router.get("")
def get_table_state() -> TableResponse:
    """Get the current table snapshot."""
    table = get_table()
    with table.lock:
        return _table_response(table)


@router.post("/bet")
def add_bet(request: BetRequest) -> TableResponse:
    """Add chips to the pending bet."""
    return _run(lambda m: m.add_bet(request.amount), "bet")


@router.post("/bet/clear")
def clear_bet() -> TableResponse:
    """Take the pending bet back."""
    return _run(lambda m: m.clear_bet(), "clear bet")


@router.post("/deal")
def deal() -> TableResponse:
    """Commit the bet and deal a round."""
    return _run(lambda m: m.deal(), "deal")


@router.post("/action")
def player_action(request: ActionRequest) -> TableResponse:
    """Execute a player action."""
    actions: dict[str, Callable[[RoundStateMachine], bool]] = {
        "hit": lambda m: m.hit(),
        "stand": lambda m: m.stand(),
        "double": lambda m: m.double_down(),
        "split": lambda m: m.split(),
        "surrender": lambda m: m.surrender(),
    }
    return _run(actions[request.action], request.action)


@router.post("/insurance")
def insurance(request: InsuranceRequest) -> TableResponse:
    """Take or decline insurance."""
    if request.accept:
        return _run(lambda m: m.take_insurance(), "take insurance")
    return _run(lambda m: m.decline_insurance(), "decline insurance")


@router.post("/shuffle")
def shuffle() -> TableResponse:
    """Start a fresh shoe between rounds."""
    return _run(lambda m: m.force_shuffle(), "shuffle")


@router.post("/auto-bet")
def auto_bet(request: AutoBetRequest) -> TableResponse:
    """Turn automatic minimum bets on or off."""
    table = get_table()
    with table.lock:
        table.machine.set_auto_bet(request.enabled)
        return _table_response(table)
