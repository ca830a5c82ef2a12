"""Abstract display sink, key source, and the key symbols they exchange.

WHY: The control loop must drive playback without knowing anything about
terminals. Rendering and keyboard capture are collaborators: the loop
hands a RenderPayload to a sink and pulls discrete symbols from a source.
These small interfaces let tests substitute recording/scripted fakes.

HOW: DisplaySink and KeySource are ABCs, mirroring the formatter base
class pattern. Key is an Enum of every symbol the loop understands.

RULES:
- read_key(timeout) returns None when the timeout elapses with no input
- read_key returns Key.EOF once the underlying input stream is exhausted
- Sinks receive data only; layout, colour and zen handling are theirs
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from rsvp_reader.core.presentation import RenderPayload


class Key(enum.Enum):
    """Discrete input symbols consumed by the control loop."""

    TOGGLE_PLAY = "toggle-play"
    INCREASE_WPM = "increase-wpm"
    DECREASE_WPM = "decrease-wpm"
    PREV_WORD = "prev-word"
    NEXT_WORD = "next-word"
    RESTART = "restart"
    TOGGLE_ZEN = "toggle-zen"
    QUIT = "quit"
    RESIZE = "resize"
    EOF = "eof"


class DisplaySink(ABC):
    """Receives render payloads each time playback state changes.

    To add a new display:
    1. Subclass DisplaySink
    2. Implement show()
    3. Override open()/close() if the display needs setup or teardown
    """

    zen: bool = False

    def open(self) -> None:
        """Prepare the output device (alternate screen, hidden cursor, ...)."""

    def close(self) -> None:
        """Restore the output device. Must be safe to call more than once."""

    def toggle_zen(self) -> None:
        """Flip display of the auxiliary status line and controls legend."""
        self.zen = not self.zen

    @abstractmethod
    def show(self, payload: RenderPayload) -> None:
        """Draw one frame for the given payload."""


class KeySource(ABC):
    """Yields key symbols, blocking up to a timeout."""

    def open(self) -> None:
        """Acquire the input device."""

    def close(self) -> None:
        """Release the input device. Must be safe to call more than once."""

    @abstractmethod
    def read_key(self, timeout: Optional[float] = None) -> Optional[Key]:
        """Wait for the next symbol.

        Args:
            timeout: Seconds to wait, or None to block until input arrives.

        Returns:
            The next Key, None if the timeout elapsed, or Key.EOF when the
            input stream has ended.
        """
