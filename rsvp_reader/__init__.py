"""RSVP Reader: rapid serial visual presentation in the terminal.

WHY: Reading one word at a time, in place, removes eye travel and lets
the reader set the pace explicitly (words per minute). This package
turns any body of text into a controllable RSVP session.

HOW: Three-stage pipeline: acquire (text sources), tokenize (core),
play (control loop driving a pure state machine and a rich-based
terminal display). Each stage is independently testable.

RULES:
- The core engine (tokenizer, clock, state, presentation) never touches
  the terminal
- The token sequence is built once per session and never re-tokenized
- Terminal I/O lives in rsvp_reader.terminal behind small ABCs
"""

__version__ = "0.1.0"
