from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Literal, Optional

from .models import COUNTDOWN_DURATION, TimerState, TimerStatus


logger = logging.getLogger(__name__)

TimerEvent = Literal["tick", "started", "expired"]


@dataclass
class PhaseTimer:
    """Tick-driven countdown and main timer for one phase instance.

    idle -> countdown -> running -> expired. Every arm() or cancel() bumps
    the generation; ticks carrying an older generation are ignored, so a
    tick scheduled for a discarded instance can never expire the new one.
    """
    countdown_duration: int = COUNTDOWN_DURATION
    status: TimerStatus = 'idle'
    remaining: int = 0
    duration: int = 0
    generation: int = 0

    @property
    def token(self) -> int:
        return self.generation

    @property
    def is_active(self) -> bool:
        return self.status in ('countdown', 'running')

    @property
    def in_countdown(self) -> bool:
        return self.status == 'countdown'

    @property
    def expired(self) -> bool:
        return self.status == 'expired'

    def arm(self, duration: int) -> int:
        """Start a new instance in countdown; returns its token."""
        self.generation += 1
        self.status = 'countdown'
        self.remaining = self.countdown_duration
        self.duration = duration
        logger.debug("Timer armed gen=%d countdown=%ds main=%ds", self.generation, self.remaining, duration)
        return self.generation

    def cancel(self) -> None:
        """Stop the current instance; pending ticks become stale."""
        self.generation += 1
        self.status = 'idle'
        self.remaining = 0
        self.duration = 0

    def stop(self) -> None:
        """Freeze the current instance without expiring it (answer given early)."""
        self.generation += 1
        if self.is_active:
            self.status = 'idle'

    def tick(self, token: int) -> Optional[TimerEvent]:
        """Advance by one second.

        Returns the transition that happened, or None if the tick was stale
        or the timer is not active.
        """
        if token != self.generation:
            logger.debug("Stale tick gen=%d (current %d) ignored", token, self.generation)
            return None
        if not self.is_active:
            return None

        self.remaining -= 1
        if self.remaining > 0:
            return 'tick'

        if self.status == 'countdown':
            self.status = 'running'
            self.remaining = self.duration
            return 'started'

        self.status = 'expired'
        self.remaining = 0
        return 'expired'

    def snapshot(self) -> TimerState:
        return TimerState(
            status=self.status,
            remaining=max(0, self.remaining),
            duration=self.duration,
            generation=self.generation,
        )
