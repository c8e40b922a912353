"""
scheduler.py — Restartable periodic timers.

Each TickScheduler owns one pygame timer that posts `event_type` into the
pygame event queue, so timer ticks arrive interleaved with key presses and
remote completions and the controller handles them one at a time.
"""

import logging

import pygame

from .config import MIN_TIMER_MS

logger = logging.getLogger(__name__)


class TickScheduler:

    def __init__(self, event_type: int):
        self.event_type = event_type
        self.interval: float = 0.0
        self.running: bool = False

    @staticmethod
    def to_millis(interval: float) -> int:
        """pygame timers take whole milliseconds; never hand it 0 (which disables)."""
        return max(MIN_TIMER_MS, int(interval))

    def start(self, interval: float) -> None:
        self.interval = interval
        pygame.time.set_timer(self.event_type, self.to_millis(interval))
        self.running = True

    def stop(self) -> None:
        pygame.time.set_timer(self.event_type, 0)
        self.running = False

    def restart(self, interval: float) -> None:
        """Stop the current timer before replacing it with a new interval."""
        self.stop()
        self.start(interval)
        logger.debug("Timer %d restarted at %.2f ms", self.event_type, interval)
