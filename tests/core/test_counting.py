"""Tests for card counting systems."""

from core.cards import Card, Rank, Suit, build_decks


class TestHiLo:
    """Tests for Hi-Lo counting system."""

    def test_full_deck_sums_to_zero(self, hilo):
        """Verify Hi-Lo is balanced (full deck = 0)."""
        assert hilo.full_deck_sum == 0
        assert hilo.is_balanced

    def test_count_full_shoe(self, hilo):
        """Counting a complete six-deck shoe ends at zero."""
        for card in build_decks(6):
            hilo.count_card(card)
        assert hilo.running_count == 0

    def test_low_cards_positive(self, hilo):
        """Test low cards (2-6) are +1."""
        for rank in [Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX]:
            assert hilo.tag(Card(rank, Suit.SPADES)) == 1

    def test_neutral_cards_zero(self, hilo):
        """Test neutral cards (7-9) are 0."""
        for rank in [Rank.SEVEN, Rank.EIGHT, Rank.NINE]:
            assert hilo.tag(Card(rank, Suit.SPADES)) == 0

    def test_high_cards_negative(self, hilo):
        """Test high cards (10-A) are -1."""
        for rank in [Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE]:
            assert hilo.tag(Card(rank, Suit.SPADES)) == -1

    def test_running_count(self, hilo):
        hilo.count_card(Card(Rank.TWO, Suit.SPADES))
        hilo.count_card(Card(Rank.FIVE, Suit.HEARTS))
        hilo.count_card(Card(Rank.KING, Suit.CLUBS))
        assert hilo.running_count == 1

    def test_true_count(self, hilo):
        for _ in range(6):
            hilo.count_card(Card(Rank.FOUR, Suit.SPADES))
        assert hilo.true_count(decks_remaining=3.0) == 2.0

    def test_true_count_with_no_decks_left(self, hilo):
        hilo.count_card(Card(Rank.FOUR, Suit.SPADES))
        assert hilo.true_count(decks_remaining=0) == 0.0

    def test_reset(self, hilo):
        hilo.count_card(Card(Rank.TWO, Suit.SPADES))
        hilo.reset()
        assert hilo.running_count == 0

    def test_name(self, hilo):
        assert hilo.name == "Hi-Lo"
