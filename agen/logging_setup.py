from __future__ import annotations

import logging
import sys


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep agen logs, drop third-party chatter below ERROR.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "agen" or record.name.startswith("agen."):
            return True
        return record.levelno >= logging.ERROR


class _AgenStreamHandler(logging.StreamHandler):
    """Marker type: the only handler setup_logging installs or removes."""


def setup_logging(*, verbose: bool = False) -> None:
    """
    Configure stderr logging for the CLI.

    Call this ONCE, from the CLI callback. Library modules only create
    module-level loggers and never configure handlers themselves.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Replace our own handler only; foreign handlers stay attached.
    for h in list(root.handlers):
        if isinstance(h, _AgenStreamHandler):
            root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="agen: %(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = _AgenStreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)
