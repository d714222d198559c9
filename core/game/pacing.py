"""Cosmetic pauses between deal steps."""

import time
from typing import Protocol


class Pacer(Protocol):
    """Decides how long the driver lingers between visible steps."""

    def pause(self, seconds: float) -> None: ...


class NoPacer:
    """Skips every pause. Outcomes never depend on pacing."""

    def pause(self, seconds: float) -> None:
        return None


class SleepPacer:
    """Blocks for each pause, scaled by ``speed`` (2.0 plays twice as fast)."""

    def __init__(self, speed: float = 1.0) -> None:
        if speed <= 0:
            raise ValueError("speed must be positive")
        self._speed = speed

    def pause(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds / self._speed)


class RecordingPacer:
    """Remembers the pauses it was asked for instead of sleeping."""

    def __init__(self) -> None:
        self.pauses: list[float] = []

    def pause(self, seconds: float) -> None:
        self.pauses.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.pauses)
