"""Seed sources for shoe shuffles."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class SeedSourceError(Exception):
    """A seed could not be obtained (network failure, bad payload, ...)."""


@dataclass(frozen=True)
class Seed:
    """Seed material handed to a shuffle."""

    seed: str
    age_ms: float = 0.0


class SeedSource(ABC):
    """Provider of 128-bit hex seed material, consulted once per reshuffle."""

    @abstractmethod
    def get_seed(self) -> Seed:
        """
        Fetch fresh seed material.

        Raises:
            SeedSourceError: if no seed is available
        """
        ...


class StaticSeedSource(SeedSource):
    """Always hands out the same seed. Useful for replays and tests."""

    def __init__(self, seed: str) -> None:
        self._seed = seed

    def get_seed(self) -> Seed:
        return Seed(seed=self._seed)
