"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, NamedTuple

from core.cards import Card


class HandTotal(NamedTuple):
    """Best total of a set of cards."""

    total: int
    is_soft: bool
    is_bust: bool


def hand_total(cards: Iterable[Card], include_hidden: bool = False) -> HandTotal:
    """
    Calculate the best total for a set of cards.

    Aces start at 11 and are reduced to 1 one at a time while the total is
    over 21. The hand is soft when an Ace is still counted as 11.
    Face-down cards are skipped unless ``include_hidden`` is set.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.face_down and not include_hidden:
            continue
        total += card.value
        if card.is_ace:
            aces += 1

    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return HandTotal(total, aces > 0, total > 21)


def visible_cards(cards: Iterable[Card]) -> list[Card]:
    """Return the face-up cards only."""
    return [card for card in cards if not card.face_down]


def is_natural(cards: Iterable[Card], include_hidden: bool = False) -> bool:
    """Check for an Ace plus a ten-value card as exactly two cards."""
    counted = list(cards) if include_hidden else visible_cards(cards)
    if len(counted) != 2:
        return False
    values = sorted(card.value for card in counted)
    return values == [10, 11]


@dataclass
class Hand:
    """A player hand with its wager and lifecycle flags."""

    cards: list[Card] = field(default_factory=list)
    bet: int = 0
    doubled: bool = False
    is_ace_split: bool = False
    from_split: bool = False
    surrendered: bool = False
    done: bool = False

    @property
    def total(self) -> HandTotal:
        """Best total of the visible cards."""
        return hand_total(self.cards)

    @property
    def value(self) -> int:
        """Return the best hand value."""
        return self.total.total

    @property
    def is_soft(self) -> bool:
        """Check if an Ace is still counted as 11."""
        return self.total.is_soft

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.total.is_bust

    @property
    def is_blackjack(self) -> bool:
        """A natural on the original, unsplit hand."""
        return not self.from_split and is_natural(self.cards)

    @property
    def is_pair(self) -> bool:
        """Two cards of the same blackjack value (K,Q counts as a pair)."""
        return len(self.cards) == 2 and self.cards[0].value == self.cards[1].value

    @property
    def is_alive(self) -> bool:
        """Still in contention against the dealer."""
        return not self.surrendered and not self.is_busted

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.surrendered:
            return f"{cards_str} (Surrender)"
        if self.is_blackjack:
            return f"{cards_str} (BJ)"
        if self.is_busted:
            return f"{cards_str} ({self.value} BUST)"
        value_str = f"({self.value})"
        if self.doubled:
            value_str = f"({self.value} ×2)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, bet={self.bet}, value={self.value})"
