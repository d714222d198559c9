"""Card counting systems."""

from core.counting.base import CountingSystem
from core.counting.hilo import HiLoSystem

__all__ = [
    "CountingSystem",
    "HiLoSystem",
]
