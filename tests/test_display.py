"""Tests for the rich-based terminal display.

WHY: The display decides where the word sits, which character is red,
and what zen mode hides. These layout rules are easy to break silently.

HOW: build_frame() is checked line by line using rich Text spans.
TerminalDisplay is pointed at a non-terminal Console writing to a
StringIO so the printed frame can be inspected.
"""

import io

from rich.console import Console

from rsvp_reader.core.presentation import render
from rsvp_reader.core.state import ReaderState
from rsvp_reader.terminal.display import (
    FIXATION_STYLE,
    WORD_STYLE,
    TerminalDisplay,
    build_frame,
    controls_text,
    word_text,
)

TOKENS = ["The", "quick", "brown", "fox"]


def _payload(index=1, playing=False):
    state = ReaderState(current_index=index, playing=playing, wpm=600, token_count=len(TOKENS))
    return render(state, TOKENS)


def _styles(text):
    """Map each character index to the style applied to it."""
    styles = {}
    for span in text.spans:
        for i in range(span.start, span.end):
            styles[i] = str(span.style)
    return styles


class TestWordText:

    def test_fixation_character_is_red(self):
        text = word_text(_payload(1))
        assert text.plain == "quick"
        styles = _styles(text)
        assert styles[2] == FIXATION_STYLE
        assert all(styles[i] == WORD_STYLE for i in (0, 1, 3, 4))

    def test_finished_is_blank(self):
        assert word_text(_payload(4)).plain == ""


class TestBuildFrame:

    def test_layout(self):
        frame = build_frame(_payload(1), zen=False, height=24)
        assert len(frame) == 23
        assert frame[12].plain == "quick"
        assert frame[21].plain.startswith("PAUSED | Word 2/4")
        assert frame[22].plain == controls_text().plain
        assert all(line.plain == "" for i, line in enumerate(frame) if i not in (12, 21, 22))

    def test_zen_hides_status_and_controls(self):
        frame = build_frame(_payload(1), zen=True, height=24)
        non_blank = [line.plain for line in frame if line.plain]
        assert non_blank == ["quick"]

    def test_tiny_terminal(self):
        frame = build_frame(_payload(0), zen=False, height=2)
        assert [line.plain for line in frame] == ["The"]

    def test_controls_legend(self):
        legend = controls_text().plain
        assert "[Space] Play/Pause" in legend
        assert "[q] Quit" in legend


class TestTerminalDisplay:

    def _console(self):
        return Console(file=io.StringIO(), width=100, height=12, force_terminal=False,
                       color_system=None)

    def test_show_prints_word_and_status(self):
        console = self._console()
        display = TerminalDisplay(console=console)
        display.open()
        display.show(_payload(2, playing=True))
        display.close()
        output = console.file.getvalue()
        assert "brown" in output
        assert "PLAYING" in output

    def test_zen_toggle(self):
        console = self._console()
        display = TerminalDisplay(console=console, zen=False)
        display.toggle_zen()
        display.show(_payload(2))
        output = console.file.getvalue()
        assert "brown" in output
        assert "PAUSED" not in output

    def test_close_without_open_is_safe(self):
        TerminalDisplay(console=self._console()).close()
