"""Tests for the shoe, its shuffles and its count."""

from random import Random

import pytest
from hypothesis import given, settings

from core.cards import Card, Rank, Suit, build_decks
from core.rng import Sfc32
from core.seeding import Seed, SeedSource, SeedSourceError, StaticSeedSource
from core.shoe import ShoeManager, fisher_yates

from conftest import SEED, seed_strategy


class FailingSeedSource(SeedSource):
    def __init__(self):
        self.calls = 0

    def get_seed(self) -> Seed:
        self.calls += 1
        raise SeedSourceError("service down")


class TestSfc32:
    """Tests for the seeded generator."""

    def test_known_sequence_from_zero_state(self):
        rng = Sfc32(0, 0, 0, 0)
        assert [rng.next_uint32() for _ in range(4)] == [0, 1, 2, 12]

    def test_from_hex_splits_words(self):
        rng = Sfc32.from_hex("00000001000000020000000300000004")
        assert rng.state == (1, 2, 3, 4)

    def test_from_hex_ignores_extra_characters(self):
        a = Sfc32.from_hex(SEED)
        b = Sfc32.from_hex(SEED + "ffff")
        assert [a.random() for _ in range(10)] == [b.random() for _ in range(10)]

    @pytest.mark.parametrize("seed", ["", "abc", "z" * 32, "0123456789abcdef0123456789abcde"])
    def test_from_hex_rejects_bad_seed(self, seed):
        with pytest.raises(ValueError):
            Sfc32.from_hex(seed)

    def test_random_range(self):
        rng = Sfc32.from_hex(SEED)
        for _ in range(1000):
            assert 0.0 <= rng.random() < 1.0


class TestFisherYates:
    def test_is_a_permutation(self):
        cards = build_decks(2)
        shuffled = list(cards)
        fisher_yates(shuffled, Random(7))
        assert sorted(shuffled, key=repr) == sorted(cards, key=repr)
        assert shuffled != cards


class TestShoeManager:
    """Tests for ShoeManager."""

    def test_empty_until_shuffled(self):
        shoe = ShoeManager()
        assert shoe.cards_remaining == 0
        assert shoe.needs_reshuffle()

    def test_build_and_shuffle(self, shoe):
        assert shoe.cards_remaining == 312
        assert shoe.total_cards == 312
        assert shoe.decks_remaining == 6.0
        assert shoe.fill_ratio == 1.0
        assert shoe.running_count == 0
        assert not shoe.needs_reshuffle()

    def test_same_seed_same_order(self):
        first = ShoeManager().build_and_shuffle(SEED)
        second = ShoeManager().build_and_shuffle(SEED)
        assert first == second
        assert first != build_decks(6)

    @settings(max_examples=20, deadline=None)
    @given(seed_strategy)
    def test_any_seed_is_reproducible(self, seed):
        assert ShoeManager(num_decks=1).build_and_shuffle(seed) == ShoeManager(
            num_decks=1
        ).build_and_shuffle(seed)

    def test_different_seeds_differ(self):
        first = ShoeManager().build_and_shuffle(SEED)
        second = ShoeManager().build_and_shuffle("f" * 32)
        assert first != second

    def test_bad_seed_leaves_shoe_alone(self, shoe):
        before = list(shoe)
        with pytest.raises(ValueError):
            shoe.build_and_shuffle("not hex")
        assert list(shoe) == before

    def test_deal_from_the_end(self, shoe):
        top = list(shoe)[-1]
        card = shoe.deal()
        assert card == top
        assert shoe.cards_remaining == 311

    def test_face_up_cards_are_counted(self, shoe):
        shoe._cards = [Card(Rank.KING, Suit.SPADES), Card(Rank.FIVE, Suit.SPADES)]
        shoe.deal()
        assert shoe.running_count == 1
        shoe.deal()
        assert shoe.running_count == 0

    def test_face_down_counted_on_reveal(self, shoe):
        shoe._cards = [Card(Rank.FIVE, Suit.SPADES)]
        card = shoe.deal(face_down=True)
        assert card.face_down
        assert shoe.running_count == 0

        assert shoe.reveal(card)
        assert shoe.running_count == 1
        # A second reveal changes nothing
        assert not shoe.reveal(card)
        assert shoe.running_count == 1

    def test_full_shoe_counts_to_zero(self, shoe):
        while shoe.deal() is not None:
            pass
        assert shoe.running_count == 0

    def test_empty_shoe(self, shoe):
        shoe._cards = [Card(Rank.TWO, Suit.SPADES)]
        shoe.deal()
        assert shoe.deal() is None
        assert shoe.running_count == 1
        assert shoe.true_count() == 0.0

    def test_true_count_uses_decks_remaining(self, shoe):
        shoe._cards = shoe._cards[:104]
        for _ in range(4):
            shoe._counter.count_card(Card(Rank.TWO, Suit.SPADES))
        assert shoe.true_count() == 2.0

    def test_needs_reshuffle_threshold(self, shoe):
        shoe._cards = shoe._cards[:78]
        assert not shoe.needs_reshuffle()
        shoe._cards = shoe._cards[:77]
        assert shoe.needs_reshuffle()

    def test_empty_shoe_always_needs_reshuffle(self):
        shoe = ShoeManager(num_decks=1, reshuffle_threshold=0.001, rng=Random(1))
        assert shoe.needs_reshuffle()
        shoe.build_and_shuffle()
        shoe._cards = shoe._cards[:1]
        assert not shoe.needs_reshuffle()
        shoe.deal()
        assert shoe.needs_reshuffle()

    def test_reshuffle_with_seed(self, shoe):
        assert shoe.reshuffle(StaticSeedSource(SEED))
        assert shoe.seed == SEED
        assert list(shoe) == ShoeManager().build_and_shuffle(SEED)

    def test_reshuffle_falls_back_on_seed_error(self, shoe):
        source = FailingSeedSource()
        assert not shoe.reshuffle(source)
        assert source.calls == 1
        assert shoe.cards_remaining == 312
        assert shoe.seed is None

    def test_reshuffle_falls_back_on_bad_seed(self, shoe):
        assert not shoe.reshuffle(StaticSeedSource("xyz"))
        assert shoe.cards_remaining == 312

    def test_reshuffle_resets_count(self, shoe):
        shoe.deal()
        shoe.deal()
        shoe.reshuffle()
        assert shoe.running_count == 0
        assert shoe.cards_remaining == 312

    def test_invalid_construction(self):
        with pytest.raises(ValueError):
            ShoeManager(num_decks=0)
        with pytest.raises(ValueError):
            ShoeManager(reshuffle_threshold=1.5)
        with pytest.raises(ValueError):
            ShoeManager(reshuffle_threshold=0.0)
