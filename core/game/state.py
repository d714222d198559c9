"""Round phases and round state."""

from dataclasses import dataclass, field
from enum import Enum, auto

from core.cards import Card
from core.hand import Hand
from core.game.events import MessageCategory


class Phase(Enum):
    """
    Round driver phases.

    Flow: IDLE → DEALING → (INSURANCE) → PLAYER_TURN → DEALER_TURN → RESOLVING → IDLE
    """

    # Between rounds, taking bets
    IDLE = auto()

    # Initial four cards going out
    DEALING = auto()

    # Dealer shows an Ace
    INSURANCE = auto()

    # Player actions
    PLAYER_TURN = auto()

    # Dealer plays
    DEALER_TURN = auto()

    # Paying out
    RESOLVING = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class RoundInvariantError(RuntimeError):
    """The round state broke a rule that correct play can never break."""


@dataclass
class RoundState:
    """Everything the round driver mutates. One writer: the driver."""

    hands: list[Hand] = field(default_factory=list)
    active_hand_idx: int = 0
    dealer_cards: list[Card] = field(default_factory=list)
    bet: int = 0
    insurance_bet: int = 0
    balance: int = 1000
    split_count: int = 0

    @property
    def active_hand(self) -> Hand | None:
        """Get the hand being played."""
        if 0 <= self.active_hand_idx < len(self.hands):
            return self.hands[self.active_hand_idx]
        return None

    @property
    def total_wagered(self) -> int:
        """Sum of the bets riding on all hands."""
        return sum(hand.bet for hand in self.hands)

    def reset(self) -> None:
        """Clear everything but the balance for a new round."""
        self.hands = []
        self.active_hand_idx = 0
        self.dealer_cards = []
        self.bet = 0
        self.insurance_bet = 0
        self.split_count = 0


class Outcome(Enum):
    """How a single hand settled."""

    BLACKJACK = "blackjack"
    WIN = "win"
    PUSH = "push"
    LOSE = "lose"
    BUST = "bust"
    SURRENDER = "surrender"


@dataclass(frozen=True)
class HandResult:
    """Settlement of one hand."""

    index: int
    outcome: Outcome
    bet: int
    returned: int  # credited back to the balance
    label: str

    @property
    def net(self) -> int:
        """Gain (positive) or loss (negative) on this hand."""
        return self.returned - self.bet


@dataclass(frozen=True)
class RoundSummary:
    """What the last resolved round came to."""

    hands: tuple[HandResult, ...]
    dealer_cards: tuple[Card, ...]
    dealer_total: int
    dealer_blackjack: bool
    insurance_bet: int
    insurance_returned: int
    message: str
    category: MessageCategory
    balance: int

    @property
    def net(self) -> int:
        """Net result of the round including insurance."""
        insurance_net = self.insurance_returned - self.insurance_bet
        return sum(hand.net for hand in self.hands) + insurance_net


@dataclass(frozen=True)
class AvailableActions:
    """Which controls are live right now."""

    deal: bool = False
    hit: bool = False
    stand: bool = False
    double: bool = False
    split: bool = False
    surrender: bool = False
    insurance: bool = False
    no_insurance: bool = False
