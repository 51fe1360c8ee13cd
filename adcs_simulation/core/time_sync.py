"""
Simulation Time Manager
=======================

Simulated clock and its synchronization with the wall clock the
control code runs against. All times are integer milliseconds.
"""

import logging
import math
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


class ManualClock:
    """Wall-clock stand-in that only moves when told to."""

    def __init__(self, start_ms: int = 0):
        self.now_ms = int(start_ms)

    def advance(self, ms: int) -> int:
        self.now_ms += int(ms)
        return self.now_ms

    def __call__(self) -> int:
        return self.now_ms


class SimulationClock:
    """
    Simulated time.

    Starts at 0 and only ever advances in whole steps of
    ``timestep_ms``.
    """

    def __init__(self, timestep_ms: int):
        """
        Initialize simulation clock.

        Args:
            timestep_ms: Step size in milliseconds
        """
        if timestep_ms <= 0:
            raise ValueError(f"timestep_ms must be positive, got {timestep_ms}")
        self.timestep_ms = int(timestep_ms)
        self.simulation_time = 0
        self.step_count = 0

    @property
    def timestep_seconds(self) -> float:
        return self.timestep_ms / 1000.0

    def steps_for(self, duration_ms: int) -> int:
        """Number of whole steps needed to cover ``duration_ms``."""
        if duration_ms <= 0:
            return 0
        return math.ceil(duration_ms / self.timestep_ms)

    def step(self) -> int:
        """
        Advance time by one step.

        Returns:
            Current simulation time [ms]
        """
        self.simulation_time += self.timestep_ms
        self.step_count += 1
        return self.simulation_time

    def __repr__(self) -> str:
        return f"SimulationClock(t={self.simulation_time}ms, dt={self.timestep_ms}ms)"


class TimeSynchronizer:
    """
    Converts wall-clock time spent by the control code into simulated time.

    The first call measures from the instant the synchronizer was created.
    Requested time accumulates into ``target_time`` so that elapsed time
    adds up across calls even though the clock advances in whole steps.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        """
        Initialize synchronizer.

        Args:
            clock: Zero-argument callable returning wall-clock milliseconds
        """
        self.clock = clock or wall_clock_ms
        self.last_called = int(self.clock())
        self.target_time = 0

    def time_passed(self) -> int:
        """
        Wall-clock milliseconds since the previous call.

        Negative values (clock skew) are reported and clamped to zero.
        """
        now = int(self.clock())
        elapsed = now - self.last_called
        self.last_called = now
        if elapsed < 0:
            logger.warning("Wall clock moved backwards by %d ms, treating elapsed time as zero", -elapsed)
            return 0
        return elapsed

    def request(self, sleep_ms: int = 0) -> int:
        """
        Account for elapsed wall time plus an optional sleep.

        Fractional sleeps are rounded up to the next whole millisecond.

        Args:
            sleep_ms: Additional time the control code intends to idle [ms]

        Returns:
            Simulated time the world should be advanced to [ms]
        """
        if sleep_ms < 0:
            logger.warning("Negative sleep duration %s ms ignored", sleep_ms)
            sleep_ms = 0
        self.target_time += self.time_passed() + math.ceil(sleep_ms)
        return self.target_time
