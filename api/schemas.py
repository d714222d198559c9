"""Pydantic schemas for API requests and responses."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# Table requests
class BetRequest(BaseModel):
    """Chips to add to the pending bet."""

    amount: int = Field(..., ge=1, description="Bet amount")


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand", "double", "split", "surrender"]


class InsuranceRequest(BaseModel):
    """Answer to the insurance offer."""

    accept: bool


class AutoBetRequest(BaseModel):
    """Toggle automatic minimum bets."""

    enabled: bool


# Table responses
class CardResponse(BaseModel):
    """Card representation. Face-down cards carry no rank or suit."""

    model_config = ConfigDict(from_attributes=True)

    code: str
    rank: str | None
    suit: str | None
    value: int | None
    face_down: bool = False


class HandResponse(BaseModel):
    """Player hand representation."""

    cards: list[CardResponse]
    total: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool
    bet: int
    doubled: bool
    surrendered: bool
    done: bool
    label: str


class DealerResponse(BaseModel):
    """Dealer cards and the total the player is allowed to see."""

    cards: list[CardResponse]
    visible_total: int
    hole_revealed: bool


class CountResponse(BaseModel):
    """Shoe and count status."""

    running_count: int
    true_count: float
    cards_remaining: int
    decks_remaining: float
    fill_ratio: float
    seeded: bool


class ActionsResponse(BaseModel):
    """Which controls are live."""

    model_config = ConfigDict(from_attributes=True)

    deal: bool
    hit: bool
    stand: bool
    double: bool
    split: bool
    surrender: bool
    insurance: bool
    no_insurance: bool


class HandResultResponse(BaseModel):
    """Settlement of one hand."""

    index: int
    outcome: Literal["blackjack", "win", "push", "lose", "bust", "surrender"]
    bet: int
    returned: int
    net: int
    label: str


class SummaryResponse(BaseModel):
    """Result of the last resolved round."""

    hands: list[HandResultResponse]
    dealer_cards: list[str]
    dealer_total: int
    dealer_blackjack: bool
    insurance_bet: int
    insurance_returned: int
    message: str
    category: str
    net: int
    balance: int


class FeedbackResponse(BaseModel):
    """Verdict on the last decision."""

    correct: bool
    chosen: str
    recommended: str
    message: str


class EventResponse(BaseModel):
    """One game event, flattened for JSON."""

    type: str
    data: dict[str, Any]


class TableResponse(BaseModel):
    """Full table snapshot."""

    phase: str
    balance: int
    bet: int
    insurance_bet: int
    auto_bet: bool
    active_hand_index: int
    hands: list[HandResponse]
    dealer: DealerResponse
    count: CountResponse
    actions: ActionsResponse
    last_summary: SummaryResponse | None
    last_feedback: FeedbackResponse | None
    events: list[EventResponse]


# Strategy responses
class AdviceResponse(BaseModel):
    """Basic strategy play for the active hand."""

    action: Literal["hit", "stand", "double", "split", "surrender"]
    table_type: Literal["hard", "soft", "pairs"]
    row_key: str
    dealer_upcard: str


class ChartRowResponse(BaseModel):
    """One chart row: actions left to right for upcards 2..A."""

    key: str
    actions: list[Literal["H", "S", "D", "P", "R"]]


class ChartResponse(BaseModel):
    """The three basic strategy charts."""

    upcards: list[str]
    hard: list[ChartRowResponse]
    soft: list[ChartRowResponse]
    pairs: list[ChartRowResponse]
