"""Card representations - rank and suit are fixed, only the face can turn up."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class Suit(Enum):
    """Card suits, in shoe build order."""

    SPADES = auto()
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.SPADES: "♠",
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks with blackjack values."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value < 10:
            return str(self.value)
        return {
            Rank.TEN: "T",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        """Check if this rank has a value of 10."""
        return self.blackjack_value == 10


_RANK_CODES = {
    "2": Rank.TWO,
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "T": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
    "A": Rank.ACE,
}

_SUIT_CODES = {
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
}


@dataclass(slots=True, unsafe_hash=True)
class Card:
    """
    A playing card as it sits on the table.

    Rank and suit cannot change once the card exists. The face_down flag
    can only go from True to False, through ``turn_up``.
    """

    rank: Rank
    suit: Suit
    face_down: bool = field(default=False, compare=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "face_down":
            if value and _is_set(self, name) and not self.face_down:
                raise AttributeError("a face-up card cannot be turned back down")
        elif _is_set(self, name):
            raise AttributeError(f"cannot assign to field '{name}'")
        object.__setattr__(self, name, value)

    def __str__(self) -> str:
        if self.face_down:
            return "??"
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        flag = ", face_down=True" if self.face_down else ""
        return f"Card({self.rank.name}, {self.suit.name}{flag})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @property
    def is_ten_value(self) -> bool:
        """Check if this card has a value of 10."""
        return self.rank.is_ten_value

    def turn_up(self) -> bool:
        """Turn a face-down card face up. Returns False if it already was."""
        if not self.face_down:
            return False
        self.face_down = False
        return True

    @classmethod
    def from_string(cls, s: str, face_down: bool = False) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Th', '10d'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANK_CODES:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_CODES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_CODES[rank_str], _SUIT_CODES[suit_str], face_down)


def _is_set(card: Card, name: str) -> bool:
    """Check whether a slot has been assigned yet."""
    try:
        object.__getattribute__(card, name)
    except AttributeError:
        return False
    return True


def build_decks(num_decks: int) -> list[Card]:
    """
    Build an unshuffled stack of ``num_decks`` standard 52-card decks.

    Order is deck by deck, suit by suit (spades, hearts, diamonds, clubs),
    ranks two through ace.
    """
    if num_decks < 1:
        raise ValueError("Shoe must have at least 1 deck")
    return [
        Card(rank, suit)
        for _ in range(num_decks)
        for suit in Suit
        for rank in Rank
    ]


def cards_from_string(s: str) -> list[Card]:
    """Parse a whitespace separated list of cards, e.g. 'AS KH 8D'."""
    return [Card.from_string(token) for token in s.split()]
