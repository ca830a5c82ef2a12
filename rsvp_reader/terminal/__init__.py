"""Terminal collaborators: key capture and rich-based display.

WHY: Playback logic lives in rsvp_reader.core and is terminal-agnostic.
This package holds the only code that talks to a real terminal.

HOW: base.py defines the DisplaySink/KeySource interfaces and the Key
symbols, keys.py reads the controlling tty, display.py draws with rich.

RULES:
- Importing this package has no side effects on the terminal
- Only open()/close() change terminal modes; close() always restores them
"""
