"""Reader state and its pure transitions.

WHY: Playback is a small state machine (Paused, Playing, Finished) over
a word index and a rate. Keeping every transition a pure function of
ReaderState makes the rules easy to test exhaustively and leaves the
control loop as the single owner of the live value.

HOW: ReaderState is a frozen dataclass; each operation returns a new
instance via dataclasses.replace(). Finished is not a stored flag; it
is current_index == token_count.

RULES:
- 0 <= current_index <= token_count after every transition
- current_index == token_count (Finished) implies playing is False
- wpm >= 1 always; decreases below 1 clamp to 1
- Out-of-range requests saturate, they never wrap or raise
- toggle_play from Finished is a no-op; restart() is required first
- retreat from Finished lands Paused on the last word
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybackConfig:
    """Startup settings for a session.

    RULES:
    - wpm below 1 is clamped to 1 by initial_state()
    - start_index is clamped into [0, token_count) by initial_state()
    """

    wpm: int = 500
    start_index: int = 0


@dataclass(frozen=True)
class ReaderState:
    """Snapshot of playback: position, play/pause, rate, document length."""

    current_index: int
    playing: bool
    wpm: int
    token_count: int


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def initial_state(token_count: int, config: PlaybackConfig) -> ReaderState:
    """Build the starting state for a document of token_count words.

    Sessions always start Paused. An empty document starts Finished.
    """
    wpm = max(1, config.wpm)
    if wpm != config.wpm:
        logger.debug("Clamped wpm %d to %d", config.wpm, wpm)

    if token_count == 0:
        index = 0
    else:
        index = _clamp(config.start_index, 0, token_count - 1)
    if index != config.start_index:
        logger.debug("Clamped start index %d to %d", config.start_index, index)

    return ReaderState(
        current_index=index,
        playing=False,
        wpm=wpm,
        token_count=token_count,
    )


def is_finished(state: ReaderState) -> bool:
    return state.current_index >= state.token_count


def toggle_play(state: ReaderState) -> ReaderState:
    if is_finished(state):
        return state
    return replace(state, playing=not state.playing)


def advance(state: ReaderState) -> ReaderState:
    """Step forward one word; reaching the end stops playback."""
    if is_finished(state):
        return state
    index = state.current_index + 1
    if index >= state.token_count:
        return replace(state, current_index=state.token_count, playing=False)
    return replace(state, current_index=index)


def retreat(state: ReaderState) -> ReaderState:
    """Step back one word. Leaving Finished never resumes autoplay."""
    if state.current_index == 0:
        return state
    if is_finished(state):
        return replace(state, current_index=state.token_count - 1, playing=False)
    return replace(state, current_index=state.current_index - 1)


def restart(state: ReaderState) -> ReaderState:
    return replace(state, current_index=0)


def seek(state: ReaderState, index: int) -> ReaderState:
    """Jump to index, saturated into [0, token_count]."""
    index = _clamp(index, 0, state.token_count)
    if index == state.token_count:
        return replace(state, current_index=index, playing=False)
    return replace(state, current_index=index)


def set_wpm(state: ReaderState, delta: int) -> ReaderState:
    return replace(state, wpm=max(1, state.wpm + delta))
