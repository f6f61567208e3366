"""
Logging configuration — set up once by the CLI entry point.

Wizard output meant for the operator goes through the Terminal. Logging
is diagnostics only: stderr, plus an optional file.

Levels are resolved in precedence order:
    CLI flag  >  BOSH_BOOTSTRAP_LOG_LEVEL env var  >  WARNING (default)

Secrets registered with ``redact()`` are masked by the filter installed
on each handler, so the BOSH password never reaches a log in plaintext.
A fresh ``setup_logging`` call starts with no secrets.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

MASK = "******"

_FORMATS = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


class RedactingFilter(logging.Filter):
    """Replace registered secrets in the rendered message."""

    def __init__(self) -> None:
        super().__init__()
        self.secrets: set[str] = set()

    def add(self, secret: str) -> None:
        self.secrets.add(secret)

    def filter(self, record: logging.LogRecord) -> bool:
        if self.secrets:
            message = record.getMessage()
            for secret in self.secrets:
                message = message.replace(secret, MASK)
            record.msg, record.args = message, None
        return True


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for a wizard run.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file path; parent directories are created.
        log_file_level: Level for the file, defaulting to ``level``.
    """
    console_level = _parse_level(level)
    fmt, datefmt = _FORMATS.get(console_level, ("%(message)s", None))

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level or level)
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    redacting = RedactingFilter()
    for handler in root.handlers:
        handler.addFilter(redacting)
    root.setLevel(root_level)


def redact(secret: str | None, logger: logging.Logger | None = None) -> None:
    """Mask ``secret`` in everything the handlers of ``logger`` emit.

    Defaults to the root logger configured by ``setup_logging``.
    """
    if not secret:
        return
    for handler in (logger or logging.getLogger()).handlers:
        for f in handler.filters:
            if isinstance(f, RedactingFilter):
                f.add(secret)


def _parse_level(level: str | None) -> int:
    """Level name to its numeric value; unknown names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
