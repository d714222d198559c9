"""Multi-deck shoe with seeded shuffles and a running Hi-Lo count."""

import logging
from math import floor
from random import Random
from typing import Iterator, Protocol

from core.cards import Card, build_decks
from core.counting import CountingSystem, HiLoSystem
from core.rng import Sfc32
from core.seeding import SeedSource, SeedSourceError

logger = logging.getLogger(__name__)


class UniformSource(Protocol):
    """Anything producing floats in [0, 1)."""

    def random(self) -> float: ...


def fisher_yates(cards: list[Card], rng: UniformSource) -> None:
    """Shuffle in place, walking down from the top of the list."""
    for i in range(len(cards) - 1, 0, -1):
        j = floor(rng.random() * (i + 1))
        cards[i], cards[j] = cards[j], cards[i]


class ShoeManager:
    """
    Owns the shoe and the count of everything the player has seen.

    Cards are dealt from the end of the internal list. Face-down cards are
    left out of the count until they are revealed.
    """

    def __init__(
        self,
        num_decks: int = 6,
        reshuffle_threshold: float = 0.25,
        rng: Random | None = None,
        counter: CountingSystem | None = None,
    ) -> None:
        """
        Initialize an empty shoe.

        Args:
            num_decks: Number of decks in the shoe
            reshuffle_threshold: Fraction of the shoe below which a reshuffle
                is due
            rng: Generator used when no seed material is available
            counter: Counting system (Hi-Lo by default)
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")
        if not 0.0 < reshuffle_threshold < 1.0:
            raise ValueError("reshuffle_threshold must be in (0, 1)")

        self._num_decks = num_decks
        self._reshuffle_threshold = reshuffle_threshold
        self._fallback_rng = rng or Random()
        self._counter = counter or HiLoSystem()
        self._cards: list[Card] = []
        self._seed: str | None = None

    def build_and_shuffle(self, seed_material: str | None = None) -> list[Card]:
        """
        Replace the shoe with freshly shuffled decks and reset the count.

        Args:
            seed_material: Hex string whose first 32 characters seed the
                shuffle. Without it the fallback generator is used.

        Raises:
            ValueError: if seed_material is not valid hex seed material
        """
        rng: UniformSource
        if seed_material is not None:
            rng = Sfc32.from_hex(seed_material)
        else:
            rng = self._fallback_rng

        cards = build_decks(self._num_decks)
        fisher_yates(cards, rng)

        self._cards = cards
        self._seed = seed_material
        self._counter.reset()
        return list(self._cards)

    def reshuffle(self, seed_source: SeedSource | None = None) -> bool:
        """
        Shuffle a new shoe, seeded from ``seed_source`` when possible.

        A seed that cannot be fetched or parsed is logged and replaced by the
        fallback generator; this never raises.

        Returns:
            True if the shuffle was seeded
        """
        if seed_source is not None:
            try:
                seed = seed_source.get_seed()
                self.build_and_shuffle(seed.seed)
            except (SeedSourceError, ValueError) as exc:
                logger.warning("Seed unavailable, shuffling unseeded: %s", exc)
            else:
                logger.info("Shoe shuffled with seed %s… (age %s ms)", seed.seed[:16], seed.age_ms)
                return True

        self.build_and_shuffle()
        logger.info("Shoe shuffled without seed")
        return False

    def needs_reshuffle(self) -> bool:
        """Check if the shoe is empty or below the threshold fraction."""
        if not self._cards:
            return True
        return len(self._cards) < self.total_cards * self._reshuffle_threshold

    def deal(self, face_down: bool = False) -> Card | None:
        """
        Take the top card of the shoe.

        Face-up cards are counted at once, face-down cards when revealed.

        Returns:
            The card, or None if the shoe is empty
        """
        if not self._cards:
            logger.error("Deal requested from an empty shoe")
            return None
        top = self._cards.pop()
        card = Card(top.rank, top.suit, face_down)
        if not face_down:
            self._counter.count_card(card)
        return card

    def reveal(self, card: Card) -> bool:
        """
        Turn a face-down card up and count it.

        Returns:
            False if the card was already face up (nothing happens)
        """
        if not card.turn_up():
            return False
        self._counter.count_card(card)
        return True

    def true_count(self) -> float:
        """Running count per deck remaining (0.0 for an empty shoe)."""
        return self._counter.true_count(self.decks_remaining)

    @property
    def running_count(self) -> int:
        """Return the running count."""
        return self._counter.running_count

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def total_cards(self) -> int:
        """Return the total number of cards in a full shoe."""
        return self._num_decks * 52

    @property
    def num_decks(self) -> int:
        """Return the number of decks in the shoe."""
        return self._num_decks

    @property
    def decks_remaining(self) -> float:
        """Return the estimated number of decks remaining."""
        return len(self._cards) / 52

    @property
    def fill_ratio(self) -> float:
        """Fraction of the shoe still to be dealt."""
        return len(self._cards) / self.total_cards

    @property
    def seed(self) -> str | None:
        """Seed material of the current shoe, if it was seeded."""
        return self._seed

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
