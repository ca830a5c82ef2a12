"""Core playback engine: tokenizer, clock, state machine, presentation, loop.

WHY: The core package contains the heart of the reader, everything with
real timing or state logic. It is consumed by the CLI and exercised by
the tests without any terminal attached.

HOW: tokenizer.py builds the token sequence, clock.py turns WPM into
tick deadlines, state.py holds pure ReaderState transitions,
presentation.py projects state into render payloads, loop.py drives it
all from key symbols and clock ticks.

RULES:
- Nothing in this package draws to or reads from a terminal
- State transitions are pure; only the control loop holds mutable state
"""
