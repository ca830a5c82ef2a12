"""Package entry point for ``python -m rsvp_reader``.

WHY: Users run the reader as ``python -m rsvp_reader -f book.txt`` or
pipe text in with ``cat notes.md | python -m rsvp_reader``. Python's
``-m`` flag looks for ``__main__.py`` inside the package and executes it.

HOW: Delegates straight to the CLI's main().
"""

import sys

from rsvp_reader.cli import main

if __name__ == "__main__":
    sys.exit(main())
