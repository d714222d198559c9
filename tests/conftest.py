"""Pytest fixtures for blackjack trainer tests."""

from random import Random

import pytest
from hypothesis import strategies as st

from core.cards import Card, Rank, Suit, cards_from_string
from core.counting import HiLoSystem
from core.game import EventRecorder, RoundStateMachine
from core.hand import Hand
from core.shoe import ShoeManager
from core.strategy import RuleSet

SEED = "0123456789abcdef0123456789abcdef"

# Neutral filler kept under stacked cards so no reshuffle is due
FILLER = 120


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    s = ShoeManager(num_decks=6, rng=rng)
    s.build_and_shuffle()
    return s


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand(cards=cards_from_string("AS KH"))


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand(cards=cards_from_string("AS 6H"))


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand(cards=cards_from_string("TS 6H"))


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return Hand(cards=cards_from_string("8S 8H"))


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand(cards=cards_from_string("TS 6H KC"))


@pytest.fixture
def hilo():
    """Hi-Lo counting system."""
    return HiLoSystem()


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def recorder():
    """Event sink that keeps everything it hears."""
    return EventRecorder()


@pytest.fixture
def machine(rng, recorder):
    """A table in IDLE with a shuffled shoe and $1000."""
    return RoundStateMachine(balance=1000, rng=rng, presenter=recorder)


def stack_shoe(machine: RoundStateMachine, cards: str) -> None:
    """
    Put known cards on top of the shoe, in the order they will be dealt.

    The opening deal goes player, dealer up, player, dealer hole.
    """
    top = cards_from_string(cards)
    filler = [Card(Rank.SEVEN, Suit.CLUBS)] * FILLER
    machine.shoe._cards = filler + list(reversed(top))
    machine.shoe._counter.reset()


@pytest.fixture
def stacked(machine):
    """Returns a function that stacks the machine's shoe."""

    def _stack(cards: str) -> RoundStateMachine:
        stack_shoe(machine, cards)
        return machine

    return _stack


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=2, max_cards=5):
    """Generate a random hand."""
    cards = draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))
    return Hand(cards=cards)


seed_strategy = st.text(alphabet="0123456789abcdef", min_size=32, max_size=64)
