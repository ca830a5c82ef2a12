"""Rich-based terminal display for render payloads.

WHY: The engine only produces data (RenderPayload). Something has to
centre the word, colour its fixation character, and lay out the status
and controls lines, and keep that logic testable without a real tty.

HOW: build_frame() is a pure function turning a payload into a list of
rich Text lines sized to the terminal height. TerminalDisplay switches
to the alternate screen on open(), prints a fresh frame on every show(),
and restores the screen and cursor on close().

RULES:
- The word sits on the middle row, centred; the fixation character is
  red, the rest of the word white
- Status line (yellow) sits three rows from the bottom, the controls
  legend two rows from the bottom
- Zen mode hides the status and controls lines, nothing else
- A frame never fills the final row, so printing it cannot scroll
"""

from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.text import Text

from rsvp_reader.config import CONTROLS_LEGEND
from rsvp_reader.core.presentation import RenderPayload, status_line
from rsvp_reader.terminal.base import DisplaySink

WORD_STYLE = "bold white"
FIXATION_STYLE = "bold red"
STATUS_STYLE = "yellow"
KEY_STYLE = "cyan"
ACTION_STYLE = "bright_black"


def word_text(payload: RenderPayload) -> Text:
    """The displayed word with its fixation character highlighted."""
    text = Text(justify="center", no_wrap=True)
    word = payload.displayed_word
    if not word:
        return text
    for i, char in enumerate(word):
        text.append(char, style=FIXATION_STYLE if i == payload.fixation_offset else WORD_STYLE)
    return text


def controls_text() -> Text:
    text = Text(justify="center", no_wrap=True)
    for i, (key, action) in enumerate(CONTROLS_LEGEND):
        if i > 0:
            text.append("  ")
        text.append(key, style=KEY_STYLE)
        text.append(" {}".format(action), style=ACTION_STYLE)
    return text


def build_frame(payload: RenderPayload, zen: bool, height: int) -> List[Text]:
    """Lay out one full-screen frame as a list of lines.

    Args:
        payload: Data to draw.
        zen: Suppress the status and controls lines.
        height: Terminal height in rows.

    Returns:
        height - 1 Text lines (the last row is left empty).
    """
    rows = max(1, height - 1)
    lines = [Text() for _ in range(rows)]

    lines[min(height // 2, rows - 1)] = word_text(payload)

    if not zen and rows >= 4:
        lines[rows - 2] = Text(status_line(payload), style=STATUS_STYLE, justify="center", no_wrap=True)
        lines[rows - 1] = controls_text()
    return lines


class TerminalDisplay(DisplaySink):
    """DisplaySink that draws full-screen frames with rich."""

    def __init__(self, console: Optional[Console] = None, zen: bool = False) -> None:
        self.console = console if console is not None else Console(highlight=False)
        self.zen = zen
        self._opened = False

    def open(self) -> None:
        if self.console.is_terminal:
            self.console.set_alt_screen(True)
            self.console.show_cursor(False)
        self._opened = True

    def close(self) -> None:
        if not self._opened:
            return
        if self.console.is_terminal:
            self.console.show_cursor(True)
            self.console.set_alt_screen(False)
        self._opened = False

    def show(self, payload: RenderPayload) -> None:
        frame = build_frame(payload, self.zen, self.console.height)
        self.console.clear()
        for line in frame:
            self.console.print(line, overflow="crop", soft_wrap=False)
