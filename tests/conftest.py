"""Shared test fixtures for the rsvp_reader test suite.

WHY: Playback depends on wall-clock time, a keyboard, and a terminal.
Tests need deterministic stand-ins for all three so the control loop can
be driven tick by tick without sleeping or opening a tty.

HOW: FakeClock is a manually advanced time source for PlaybackClock.
ScriptedKeySource replays a list of keys; a None entry means "the wait
timed out", and advances the fake clock by the requested timeout so the
next clock tick becomes due. RecordingDisplay stores every payload.

RULES:
- No test sleeps or touches /dev/tty
- ScriptedKeySource returns Key.EOF once its script is exhausted
- The "quick brown fox" document is the reference end-to-end sample
"""

from typing import List, Optional, Sequence

import pytest

from rsvp_reader.core.clock import PlaybackClock
from rsvp_reader.core.presentation import RenderPayload
from rsvp_reader.terminal.base import DisplaySink, Key, KeySource

QUICK_BROWN_FOX = "The quick brown fox"


class FakeClock:
    """Monotonic time source advanced by hand."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedKeySource(KeySource):
    """Replays keys; None entries simulate a timed-out wait."""

    def __init__(self, script: Sequence[Optional[Key]], clock: Optional[FakeClock] = None) -> None:
        self.script = list(script)
        self.clock = clock
        self.timeouts: List[Optional[float]] = []
        self.opened = False
        self.closed = False

    def open(self) -> None:
        self.opened = True

    def close(self) -> None:
        self.closed = True

    def read_key(self, timeout: Optional[float] = None) -> Optional[Key]:
        self.timeouts.append(timeout)
        if not self.script:
            return Key.EOF
        key = self.script.pop(0)
        if key is None:
            if timeout is None:
                raise AssertionError("scripted timeout while the loop was blocking")
            if self.clock is not None:
                # Land just past the deadline so float rounding cannot
                # leave the tick one ulp short of due.
                self.clock.advance(timeout + 1e-9)
        return key


class RecordingDisplay(DisplaySink):
    """Keeps every payload it is asked to show."""

    def __init__(self) -> None:
        self.frames: List[RenderPayload] = []
        self.opened = False
        self.closed = False

    def open(self) -> None:
        self.opened = True

    def close(self) -> None:
        self.closed = True

    def show(self, payload: RenderPayload) -> None:
        self.frames.append(payload)

    @property
    def last(self) -> RenderPayload:
        return self.frames[-1]


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def playback_clock(fake_clock):
    """PlaybackClock at 600 wpm (0.1 s per word) on the fake time source."""
    return PlaybackClock(600, now=fake_clock)


@pytest.fixture
def recording_display():
    return RecordingDisplay()


@pytest.fixture
def quick_brown_fox_tokens():
    return ["The", "quick", "brown", "fox"]
