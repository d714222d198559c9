"""Core blackjack engine - 100% UI-agnostic."""

from core.cards import Card, Rank, Suit
from core.hand import Hand, HandTotal, hand_total
from core.shoe import ShoeManager
from core.seeding import Seed, SeedSource, SeedSourceError, StaticSeedSource

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "Hand",
    "HandTotal",
    "hand_total",
    "ShoeManager",
    "Seed",
    "SeedSource",
    "SeedSourceError",
    "StaticSeedSource",
]
