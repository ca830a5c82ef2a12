"""Configuration constants, key bindings, logging setup, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Default reading speed, the WPM step size, and the
keyboard map are plain data structures, not buried in the control
loop, so they can be changed without touching playback logic.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values and dicts. configure_logging() wires the root
logger once the CLI knows where log output may safely go.

RULES:
- DEFAULT_WPM and WPM_STEP can be overridden via RSVP_DEFAULT_WPM and
  RSVP_WPM_STEP; invalid or non-positive values fall back to the defaults
- KEY_BINDINGS maps raw key strings (as decoded by the key source) to Key
  symbols; arrow keys use the names "up", "down", "left", "right"
- Logging goes to RSVP_LOG_FILE when set. Without it, records are
  dropped while the display owns the screen (stderr would corrupt it)
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from rsvp_reader.terminal.base import Key

# Load .env from the project root (where the script is run from)
load_dotenv()

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, or return the default."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.debug("Ignoring non-integer %s=%r", name, raw)
        return default
    if value < 1:
        logger.debug("Ignoring non-positive %s=%r", name, raw)
        return default
    return value


# ---------------------------------------------------------------------------
# Playback defaults
# ---------------------------------------------------------------------------

DEFAULT_WPM = _env_int("RSVP_DEFAULT_WPM", 500)
"""Reading speed used when --wpm is not given."""

WPM_STEP = _env_int("RSVP_WPM_STEP", 50)
"""How much one press of +/- changes the reading speed."""

DEFAULT_START_INDEX = 0

# ---------------------------------------------------------------------------
# Keyboard map
# ---------------------------------------------------------------------------

KEY_BINDINGS: dict[str, Key] = {
    " ": Key.TOGGLE_PLAY,
    "+": Key.INCREASE_WPM,
    "=": Key.INCREASE_WPM,
    "-": Key.DECREASE_WPM,
    "h": Key.PREV_WORD,
    "left": Key.PREV_WORD,
    "up": Key.PREV_WORD,
    "l": Key.NEXT_WORD,
    "right": Key.NEXT_WORD,
    "down": Key.NEXT_WORD,
    "r": Key.RESTART,
    "z": Key.TOGGLE_ZEN,
    "q": Key.QUIT,
    "esc": Key.QUIT,
}

CONTROLS_LEGEND: list[tuple[str, str]] = [
    ("[Space]", "Play/Pause"),
    ("[+/-]", "WPM"),
    ("[↑/←]", "Prev"),
    ("[↓/→]", "Next"),
    ("[r]", "Restart"),
    ("[z]", "Zen"),
    ("[q]", "Quit"),
]
"""Key/action pairs shown under the status line (hidden in zen mode)."""

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("RSVP_LOG_LEVEL", "WARNING").upper()
LOG_FILE = os.getenv("RSVP_LOG_FILE", "").strip() or None
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(log_file: str | None = None, level: str | None = None) -> None:
    """Configure the root logger for a reading session.

    WHY: The terminal display owns stdout/stderr while a session runs, so
    log records cannot go to the console without tearing the frame.

    HOW: With a log file, records are appended there using the standard
    format. Without one, a NullHandler swallows them.

    RULES:
    - Explicit arguments win over RSVP_LOG_FILE / RSVP_LOG_LEVEL
    - Unknown level names fall back to WARNING
    """
    log_file = log_file or LOG_FILE
    level_name = (level or LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=numeric_level,
            format=LOG_FORMAT,
        )
    else:
        logging.basicConfig(level=numeric_level, handlers=[logging.NullHandler()])
