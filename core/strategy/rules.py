"""Blackjack table rules."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class RuleSet:
    """
    Rules of the table the round driver enforces.

    The defaults are the game the strategy chart is built for: six decks,
    dealer stands on soft 17, double after split, late surrender, 3:2
    blackjack, up to three splits and no re-splitting of Aces.
    """

    # Shoe
    num_decks: int = 6
    reshuffle_threshold: float = 0.25  # reshuffle when less than this fraction remains

    # Dealer draws while below this total; soft 17 stands
    dealer_stands_on: int = 17

    # Payouts
    blackjack_payout: float = 1.5  # profit multiple, floored to whole units
    insurance_payout: int = 2  # winnings per unit staked; the stake comes back too

    # Doubling and splitting
    double_after_split: bool = True  # DAS
    max_splits: int = 3  # four hands at most; split Aces never re-split

    # Surrender
    surrender: Literal["none", "late"] = "late"

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1 or self.num_decks > 8:
            raise ValueError("num_decks must be between 1 and 8")
        if not 0.0 < self.reshuffle_threshold < 1.0:
            raise ValueError("reshuffle_threshold must be in (0, 1)")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if self.max_splits < 0:
            raise ValueError("max_splits cannot be negative")
        if not 12 <= self.dealer_stands_on <= 21:
            raise ValueError("dealer_stands_on must be between 12 and 21")

    @property
    def surrender_allowed(self) -> bool:
        """Check if late surrender is offered."""
        return self.surrender == "late"

    @property
    def max_hands(self) -> int:
        """Most hands a player can hold after splitting."""
        return self.max_splits + 1

    @classmethod
    def no_surrender(cls) -> "RuleSet":
        """The default table without surrender."""
        return cls(surrender="none")
