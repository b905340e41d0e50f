"""
Pacing strategies for the coordinator loop.

Pacing only rate-limits how fast cycles run. Correctness never depends on
it, so tests use NoPacing.
"""

import asyncio
from abc import ABC, abstractmethod


class PacingStrategy(ABC):
    """Decides how long to wait between two coordinator cycles."""

    @abstractmethod
    async def wait(self, cycle: int) -> None:
        """Called after `cycle` completes, when another cycle will follow."""


class NoPacing(PacingStrategy):
    async def wait(self, cycle: int) -> None:
        return None


class FixedIntervalPacing(PacingStrategy):
    """Sleep a fixed number of seconds between cycles."""

    def __init__(self, interval_seconds: float):
        if interval_seconds < 0:
            raise ValueError(f"interval_seconds must be >= 0, got {interval_seconds}")
        self.interval_seconds = interval_seconds

    async def wait(self, cycle: int) -> None:
        if self.interval_seconds > 0:
            await asyncio.sleep(self.interval_seconds)


def pacing_for_interval(interval_seconds: float) -> PacingStrategy:
    return FixedIntervalPacing(interval_seconds) if interval_seconds > 0 else NoPacing()
