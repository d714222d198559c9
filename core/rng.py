"""Seeded pseudo-random generator for reproducible shuffles."""

import re

_MASK = 0xFFFFFFFF
_HEX_SEED = re.compile(r"^[0-9a-fA-F]{32}")


class Sfc32:
    """
    Small Fast Counting generator (sfc32), 4 x 32-bit words of state.

    ``random()`` returns floats in [0, 1) with 32 bits of resolution, so a
    given seed always produces the same sequence on every platform.
    """

    def __init__(self, a: int, b: int, c: int, d: int) -> None:
        self._a = a & _MASK
        self._b = b & _MASK
        self._c = c & _MASK
        self._d = d & _MASK

    @classmethod
    def from_hex(cls, seed: str) -> "Sfc32":
        """
        Build a generator from 128 bits of hex seed material.

        Only the first 32 hex characters are used, split into four words
        in order. Raises ValueError for anything shorter or non-hex.
        """
        seed = seed.strip()
        if not _HEX_SEED.match(seed):
            raise ValueError(f"Seed must start with 32 hex characters, got {seed!r}")
        words = [int(seed[i:i + 8], 16) for i in range(0, 32, 8)]
        return cls(*words)

    def next_uint32(self) -> int:
        """Advance the state and return the next 32-bit output."""
        a, b, c, d = self._a, self._b, self._c, self._d
        t = (a + b + d) & _MASK
        self._d = (d + 1) & _MASK
        self._a = b ^ (b >> 9)
        self._b = (c + (c << 3)) & _MASK
        c = ((c << 21) | (c >> 11)) & _MASK
        self._c = (c + t) & _MASK
        return t

    def random(self) -> float:
        """Return the next float in [0, 1)."""
        return self.next_uint32() / 4294967296

    @property
    def state(self) -> tuple[int, int, int, int]:
        """Return the current state words."""
        return (self._a, self._b, self._c, self._d)
