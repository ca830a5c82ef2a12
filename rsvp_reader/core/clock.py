"""WPM-derived tick interval and a suspend/resume-aware countdown.

WHY: Playback advances one word every 60/wpm seconds. Pausing must keep
the unspent part of the current word's interval so resuming does not
skip or repeat time, and tests must exercise all of this without
sleeping on a real clock.

HOW: interval_for() is the single duration formula. PlaybackClock keeps
an absolute deadline on an injectable monotonic time source. Suspending
stores the remaining time; resuming re-arms a deadline from it. The
control loop asks remaining() for its wait timeout and calls
consume_tick() when is_due() reports the deadline has passed.

RULES:
- interval_for(wpm) == 60 / wpm seconds; wpm < 1 raises ValueError
- set_wpm() affects subsequent ticks only; an in-flight countdown keeps
  its deadline
- remaining() is None when the clock is not armed, else >= 0
- suspend() on a disarmed clock and resume() on a running one are no-ops
"""

from __future__ import annotations

import time
from typing import Callable, Optional


def interval_for(wpm: int) -> float:
    """Seconds each word stays on screen at the given rate."""
    if wpm < 1:
        raise ValueError("wpm must be >= 1, got {}".format(wpm))
    return 60.0 / wpm


class PlaybackClock:
    """Countdown to the next word tick.

    Three conditions: stopped (no deadline, nothing suspended), running
    (deadline set), suspended (remaining time held, no deadline).
    """

    def __init__(self, wpm: int, now: Callable[[], float] = time.monotonic) -> None:
        self._now = now
        self._interval = interval_for(wpm)
        self._deadline: Optional[float] = None
        self._suspended: Optional[float] = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._deadline is not None

    @property
    def suspended(self) -> bool:
        return self._suspended is not None

    def set_wpm(self, wpm: int) -> None:
        self._interval = interval_for(wpm)

    def start(self) -> None:
        """Begin a full interval countdown from now."""
        self._suspended = None
        self._deadline = self._now() + self._interval

    reset = start

    def stop(self) -> None:
        """Disarm the clock and forget any suspended remainder."""
        self._deadline = None
        self._suspended = None

    def suspend(self) -> None:
        if self._deadline is None:
            return
        self._suspended = max(0.0, self._deadline - self._now())
        self._deadline = None

    def resume(self) -> None:
        """Continue a suspended countdown, or start fresh if none is held."""
        if self._deadline is not None:
            return
        if self._suspended is None:
            self.start()
            return
        self._deadline = self._now() + self._suspended
        self._suspended = None

    def remaining(self) -> Optional[float]:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._now())

    def is_due(self) -> bool:
        return self._deadline is not None and self._now() >= self._deadline

    def consume_tick(self) -> None:
        """Acknowledge a due tick and arm the next full interval."""
        self._deadline = self._now() + self._interval
