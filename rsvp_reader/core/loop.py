"""Single-threaded control loop: key symbols and clock ticks in, frames out.

WHY: Something has to own the live ReaderState, wait for whichever comes
first (a key press or the next word tick), apply the matching transition,
and ask the display to redraw. Keeping that in one synchronous loop means
there is exactly one writer of state and no locking anywhere.

HOW: The loop's only wait point is KeySource.read_key(timeout). While
Playing, the timeout is the clock's remaining countdown; while Paused or
Finished the loop blocks until a key arrives. A None result means the
timeout elapsed, so the clock is checked for a due tick. Keys dispatch
through one Key → handler mapping.

RULES:
- QUIT and EOF end the loop; run() returns the final ReaderState
- A tick only advances while Playing; reaching Finished disarms the clock
- Pausing suspends the countdown; resuming continues its remainder
- Manual next/prev and restart give the new word a full interval
  when Playing
- WPM changes apply to the next tick, not the one in flight
- Every handled key or tick ends with exactly one redraw
- Display and key source are always closed, even on error
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Sequence, Tuple

from rsvp_reader.config import WPM_STEP
from rsvp_reader.core import state as transitions
from rsvp_reader.core.clock import PlaybackClock
from rsvp_reader.core.presentation import render
from rsvp_reader.core.state import PlaybackConfig, ReaderState, initial_state, is_finished
from rsvp_reader.terminal.base import DisplaySink, Key, KeySource

logger = logging.getLogger(__name__)

_STOP_KEYS = frozenset({Key.QUIT, Key.EOF})


class ControlLoop:
    """Drive one reading session over a fixed token sequence.

    Args:
        tokens: The document's words, bound once for the session.
        config: Starting rate and index (clamped on construction).
        display: Sink that receives a RenderPayload after each change.
        keys: Source of Key symbols.
        clock: Countdown to use; defaults to a real monotonic PlaybackClock.
        wpm_step: Rate change applied per increase/decrease key.
    """

    def __init__(
        self,
        tokens: Sequence[str],
        config: PlaybackConfig,
        display: DisplaySink,
        keys: KeySource,
        clock: Optional[PlaybackClock] = None,
        wpm_step: int = WPM_STEP,
    ) -> None:
        self.tokens: Tuple[str, ...] = tuple(tokens)
        self.state: ReaderState = initial_state(len(self.tokens), config)
        self.display = display
        self.keys = keys
        self.clock = clock if clock is not None else PlaybackClock(self.state.wpm)
        self.clock.set_wpm(self.state.wpm)
        self.wpm_step = wpm_step

        self._handlers: Dict[Key, Callable[[], None]] = {
            Key.TOGGLE_PLAY: self._toggle_play,
            Key.INCREASE_WPM: self._faster,
            Key.DECREASE_WPM: self._slower,
            Key.PREV_WORD: self._prev_word,
            Key.NEXT_WORD: self._next_word,
            Key.RESTART: self._restart,
            Key.TOGGLE_ZEN: self.display.toggle_zen,
            Key.RESIZE: lambda: None,
        }

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> ReaderState:
        """Run until quit or end of input and return the final state."""
        logger.info(
            "Starting session: %d words at %d wpm from index %d",
            len(self.tokens), self.state.wpm, self.state.current_index,
        )
        self.display.open()
        try:
            self.keys.open()
            try:
                self._loop()
            finally:
                self.keys.close()
        finally:
            self.display.close()
        logger.info("Session ended at index %d/%d", self.state.current_index, self.state.token_count)
        return self.state

    def _loop(self) -> None:
        self.redraw()
        while True:
            if self.clock.is_due():
                self.tick()
                continue

            key = self.keys.read_key(self.clock.remaining())
            if key is None:
                continue
            if key in _STOP_KEYS:
                logger.debug("Stopping on %s", key.name)
                return
            self.dispatch(key)

    def dispatch(self, key: Key) -> None:
        """Apply the transition bound to key and redraw."""
        handler = self._handlers.get(key)
        if handler is None:
            logger.debug("Ignoring unbound key %s", key)
            return
        handler()
        self.redraw()

    def tick(self) -> None:
        """Handle one elapsed word interval."""
        if not self.state.playing:
            self.clock.stop()
            return
        self.clock.consume_tick()
        self._apply(transitions.advance(self.state))
        self.redraw()

    def redraw(self) -> None:
        self.display.show(render(self.state, self.tokens))

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _apply(self, new_state: ReaderState) -> None:
        was_finished = is_finished(self.state)
        self.state = new_state
        if is_finished(new_state):
            self.clock.stop()
            if not was_finished:
                logger.info("Reached end of document (%d words)", new_state.token_count)

    def _toggle_play(self) -> None:
        was_playing = self.state.playing
        self._apply(transitions.toggle_play(self.state))
        if self.state.playing and not was_playing:
            self.clock.resume()
        elif was_playing and not self.state.playing:
            self.clock.suspend()

    def _next_word(self) -> None:
        self._apply(transitions.advance(self.state))
        self._restart_countdown()

    def _prev_word(self) -> None:
        self._apply(transitions.retreat(self.state))
        self._restart_countdown()

    def _restart(self) -> None:
        self._apply(transitions.restart(self.state))
        self._restart_countdown()

    def _restart_countdown(self) -> None:
        if self.state.playing:
            self.clock.reset()
        else:
            # A stale suspended remainder belongs to a word no longer shown.
            self.clock.stop()

    def _faster(self) -> None:
        self._change_wpm(self.wpm_step)

    def _slower(self) -> None:
        self._change_wpm(-self.wpm_step)

    def _change_wpm(self, delta: int) -> None:
        self.state = transitions.set_wpm(self.state, delta)
        self.clock.set_wpm(self.state.wpm)
        logger.debug("WPM now %d", self.state.wpm)
