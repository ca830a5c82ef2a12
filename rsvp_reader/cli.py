"""Command-line interface for the RSVP reader.

WHY: Users need a single command that takes text from an argument, a
file, or a pipe and plays it back word by word. The CLI wires the text
source, tokenizer, terminal collaborators and control loop together and
owns the process exit code.

HOW: Uses argparse for --wpm, --text, --file, --start and --zen. Reads
the document through rsvp_reader.sources, tokenizes it once, then runs a
ControlLoop with a TerminalDisplay and TerminalKeySource. Errors and
status go to stderr; the terminal is restored before anything is printed.

RULES:
- --text and --file are mutually exclusive; with neither, piped stdin is read
- --wpm defaults to RSVP_DEFAULT_WPM (500); values below 1 are clamped
- --start is clamped into the document by the engine
- Exit codes: 0 = success (including a document with no words),
  1 = unreadable source or no terminal, 130 = interrupted
- Status messages go to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from rsvp_reader import __version__
from rsvp_reader.config import DEFAULT_START_INDEX, DEFAULT_WPM, WPM_STEP, configure_logging
from rsvp_reader.core.loop import ControlLoop
from rsvp_reader.core.state import PlaybackConfig, ReaderState
from rsvp_reader.core.tokenizer import tokenize
from rsvp_reader.sources import TextSourceError, read_text
from rsvp_reader.terminal.base import DisplaySink, KeySource
from rsvp_reader.terminal.display import TerminalDisplay
from rsvp_reader.terminal.keys import TerminalKeySource

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def _resume_hint(state: ReaderState) -> str:
    """Where playback stopped, phrased as the --start value to resume from.

    --start takes a 0-based word index, which equals the number of words
    already read, so the hint states both as the same number.
    """
    if state.current_index >= state.token_count:
        return "Reached the end."
    return "Resume with --start {} ({} of {} words read).".format(
        state.current_index, state.current_index, state.token_count,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without opening a terminal.
    """
    parser = argparse.ArgumentParser(
        prog="rsvp_reader",
        description="Read text one word at a time in the terminal (RSVP). "
                    "Text comes from --text, --file, or standard input.",
    )

    parser.add_argument(
        "-w", "--wpm",
        type=int,
        default=DEFAULT_WPM,
        help="Reading speed in words per minute (default: %(default)s).",
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-t", "--text",
        default=None,
        help="Literal text to read.",
    )
    source.add_argument(
        "-f", "--file",
        metavar="FILE",
        default=None,
        help="Path to a UTF-8 text file to read.",
    )

    parser.add_argument(
        "-s", "--start",
        type=int,
        default=DEFAULT_START_INDEX,
        help="Word index to start from (default: %(default)s).",
    )

    parser.add_argument(
        "--zen",
        action="store_true",
        help="Start with the status line and controls hidden.",
    )

    parser.add_argument(
        "--log-file",
        default=None,
        help="Append debug/info logs to this file (default: $RSVP_LOG_FILE).",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def run(
    args: argparse.Namespace,
    display: Optional[DisplaySink] = None,
    keys: Optional[KeySource] = None,
) -> int:
    """Acquire text, build the session, and play it. Returns an exit code.

    Args:
        args: Parsed command-line arguments.
        display: Display sink to use; defaults to a TerminalDisplay.
        keys: Key source to use; defaults to a TerminalKeySource.
    """
    try:
        text = read_text(text=args.text, file=args.file)
    except TextSourceError as e:
        _status("Error: {}".format(e))
        return 1

    tokens = tokenize(text)
    if not tokens:
        logger.info("No words found in input; session starts finished")

    config = PlaybackConfig(wpm=args.wpm, start_index=args.start)
    if display is None:
        display = TerminalDisplay(zen=args.zen)
    elif args.zen:
        display.zen = True
    if keys is None:
        keys = TerminalKeySource()

    loop = ControlLoop(tokens, config, display, keys, wpm_step=WPM_STEP)
    try:
        final = loop.run()
    except KeyboardInterrupt:
        _status("Interrupted. {}".format(_resume_hint(loop.state)))
        return 130
    except OSError as e:
        logger.exception("Terminal I/O failed")
        _status("Error: {}".format(e))
        return 1

    if final.current_index < final.token_count:
        _status("Stopped. {}".format(_resume_hint(final)))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(log_file=args.log_file)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
