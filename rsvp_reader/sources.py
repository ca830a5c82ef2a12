"""Acquire the document text from exactly one source.

WHY: The reader accepts text as a literal argument, from a file, or piped
on standard input. The engine only ever sees one string, so source
selection and read failures are handled here, at the boundary.

HOW: read_text() checks the sources in priority order and returns the
first one selected. Standard input is only consumed when it is not an
interactive terminal, so launching the reader with no source and no
pipe yields an empty document instead of blocking.

RULES:
- Priority: literal text, then file, then piped stdin, else ""
- Files are decoded as UTF-8
- An unreadable file raises TextSourceError naming the path
- This module never tokenizes; it only returns the raw string
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

logger = logging.getLogger(__name__)


class TextSourceError(ValueError):
    """The selected text source could not be read."""


def read_file(path: str | Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        TextSourceError: The file is missing, unreadable, or not UTF-8.
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TextSourceError("Failed to read file: {} ({})".format(path, exc)) from exc


def read_stream(stream: TextIO) -> str:
    """Read everything from a text stream until end of stream."""
    try:
        return stream.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise TextSourceError("Failed to read standard input ({})".format(exc)) from exc


def read_text(
    text: Optional[str] = None,
    file: Optional[str | Path] = None,
    stdin: Optional[TextIO] = None,
) -> str:
    """Return the document from the highest-priority selected source.

    Args:
        text: Literal document text.
        file: Path to a UTF-8 text file.
        stdin: Stream to read when neither text nor file is given;
               defaults to sys.stdin.

    Returns:
        The full document, possibly empty.
    """
    if text is not None:
        logger.debug("Reading document from literal argument (%d chars)", len(text))
        return text

    if file is not None:
        logger.debug("Reading document from file %s", file)
        return read_file(file)

    stream = stdin if stdin is not None else sys.stdin
    if stream is None or stream.isatty():
        logger.debug("No text source selected; using empty document")
        return ""

    logger.debug("Reading document from standard input")
    return read_stream(stream)
