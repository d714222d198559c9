"""Hi-Lo card counting system."""

from typing import Mapping

from core.cards import Rank
from core.counting.base import CountingSystem

_LOW = frozenset({Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX})
_NEUTRAL = frozenset({Rank.SEVEN, Rank.EIGHT, Rank.NINE})


def _hilo_tag(rank: Rank) -> int:
    if rank in _LOW:
        return 1
    if rank in _NEUTRAL:
        return 0
    return -1


class HiLoSystem(CountingSystem):
    """
    Hi-Lo: 2-6 count +1, 7-9 count 0, tens and Aces count -1.

    Balanced, so a full shoe dealt out always ends at zero.
    """

    _TAG_VALUES: Mapping[Rank, int] = {rank: _hilo_tag(rank) for rank in Rank}

    @property
    def name(self) -> str:
        return "Hi-Lo"

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES
