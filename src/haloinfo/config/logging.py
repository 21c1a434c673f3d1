"""Logging setup for the command line."""

from __future__ import annotations

import logging

# Libraries that log every request at INFO.
CHATTY_LOGGERS = ("httpx", "httpcore", "hishel")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger with a terse CLI format.

    HTTP library loggers are held at WARNING unless ``level`` is DEBUG, so a
    normal lookup prints only the reconciliation steps. ``force=True`` replaces
    handlers installed earlier, e.g. by a test run.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
