"""Abstract base class for card counting systems."""

from abc import ABC, abstractmethod
from typing import Mapping

from core.cards import Card, Rank


class CountingSystem(ABC):
    """
    Running count over the cards the player has been able to see.

    Callers decide when a card becomes visible; the system only folds in
    whatever it is handed.
    """

    def __init__(self) -> None:
        """Initialize the counting system."""
        self._running_count: int = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the counting system."""
        ...

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, int]:
        """Map each Rank to its count value."""
        ...

    @property
    def full_deck_sum(self) -> int:
        """Sum of tag values over one 52-card deck (0 for a balanced system)."""
        return sum(self.tag_values[rank] * 4 for rank in Rank)

    @property
    def is_balanced(self) -> bool:
        """Return whether a complete deck counts to zero."""
        return self.full_deck_sum == 0

    def tag(self, card: Card) -> int:
        """Return the tag value of a card without counting it."""
        return self.tag_values[card.rank]

    def count_card(self, card: Card) -> int:
        """
        Count a single card and update the running count.

        Args:
            card: The card to count

        Returns:
            The tag value of the card
        """
        tag_value = self.tag(card)
        self._running_count += tag_value
        return tag_value

    @property
    def running_count(self) -> int:
        """Return the current running count."""
        return self._running_count

    def true_count(self, decks_remaining: float) -> float:
        """
        Calculate the true count.

        Args:
            decks_remaining: Number of decks remaining in the shoe

        Returns:
            The running count divided by decks remaining, or 0.0 when no
            cards remain
        """
        if decks_remaining <= 0:
            return 0.0
        return self._running_count / decks_remaining

    def reset(self) -> None:
        """Reset the count to zero."""
        self._running_count = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(running_count={self._running_count})"
