"""Project ReaderState into the values a display needs.

WHY: Displays need the current word, which character to highlight,
progress, and time left. Computing these inside the state machine would
tangle formatting concerns with transitions; computing them inside the
display would make them untestable without a terminal.

HOW: render() is a pure function of (state, tokens) that returns a
frozen RenderPayload. format_duration() and status_line() turn a payload
into the human-readable status text used by the terminal display.

RULES:
- displayed_word is None once current_index == token_count
- fixation_offset = len(word) // 2, None when no word is displayed
- completion_fraction = current_index / token_count, 1.0 for an empty
  document
- estimated_seconds_remaining = (token_count - current_index) * 60/wpm,
  0 when finished
- Nothing here mutates state or touches the terminal
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from rsvp_reader.core.clock import interval_for
from rsvp_reader.core.state import ReaderState


@dataclass(frozen=True)
class RenderPayload:
    """Everything a display sink needs to draw one frame.

    Attributes:
        displayed_word: The token at the current index, or None when finished.
        fixation_offset: Index into displayed_word of the highlighted character.
        completion_fraction: Progress through the document in [0, 1].
        estimated_seconds_remaining: Time to finish at the current rate.
        playing: Whether autoplay is running.
        current_index: Position in the token sequence (for the status line).
        token_count: Total tokens in the document (for the status line).
        wpm: Current reading rate (for the status line).
    """

    displayed_word: Optional[str]
    fixation_offset: Optional[int]
    completion_fraction: float
    estimated_seconds_remaining: float
    playing: bool
    current_index: int = 0
    token_count: int = 0
    wpm: int = 0


def render(state: ReaderState, tokens: Sequence[str]) -> RenderPayload:
    """Derive the render payload for the current state."""
    token_count = len(tokens)
    index = state.current_index

    word: Optional[str] = None
    offset: Optional[int] = None
    if index < token_count:
        word = tokens[index]
        offset = len(word) // 2

    if token_count > 0:
        fraction = index / token_count
    else:
        fraction = 1.0

    remaining = max(0, token_count - index) * interval_for(state.wpm)

    return RenderPayload(
        displayed_word=word,
        fixation_offset=offset,
        completion_fraction=fraction,
        estimated_seconds_remaining=remaining,
        playing=state.playing,
        current_index=index,
        token_count=token_count,
        wpm=state.wpm,
    )


def format_duration(seconds: float) -> str:
    """Format seconds as ``MM:SS.mmm`` (minutes are not wrapped at 60)."""
    total_ms = int(round(max(0.0, seconds) * 1000))
    minutes, rest_ms = divmod(total_ms, 60_000)
    secs, millis = divmod(rest_ms, 1000)
    return "{:02d}:{:02d}.{:03d}".format(minutes, secs, millis)


def status_line(payload: RenderPayload) -> str:
    """One-line playback summary shown under the word.

    Example: ``PAUSED | Word 3/10 | WPM: 500 | Percent: 20% | Remaining: 00:00.960``
    """
    if payload.displayed_word is None:
        mode = "FINISHED"
        position = payload.token_count
    else:
        mode = "PLAYING" if payload.playing else "PAUSED"
        position = payload.current_index + 1

    return "{} | Word {}/{} | WPM: {} | Percent: {:.0f}% | Remaining: {}".format(
        mode,
        position,
        payload.token_count,
        payload.wpm,
        payload.completion_fraction * 100,
        format_duration(payload.estimated_seconds_remaining),
    )
