"""Logging setup for upload runs."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
REDACTED = "***REDACTED***"


class SecretRedactionFilter(logging.Filter):
    """Logging filter that replaces a raw secret with ``***REDACTED***``."""

    def __init__(self, secret: str) -> None:
        super().__init__()
        self._secret = secret

    def _redact(self, value: object) -> object:
        if self._secret and self._secret in str(value):
            return str(value).replace(self._secret, REDACTED)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        if self._secret and self._secret in str(record.msg):
            record.msg = str(record.msg).replace(self._secret, REDACTED)
        if record.args:
            args = record.args
            if isinstance(args, tuple):
                record.args = tuple(self._redact(a) for a in args)
            elif isinstance(args, dict):
                record.args = {k: self._redact(v) for k, v in args.items()}
        return True


def create_file_handler(
    log_file: Path,
    secret: str = "",
    level: int = logging.DEBUG,
) -> logging.FileHandler:
    """Create a handler writing the run log to *log_file*."""
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(str(log_file), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    if secret:
        handler.addFilter(SecretRedactionFilter(secret))

    return handler


def setup_logging(
    verbose: bool = False,
    secret: str = "",
    log_file: Path | None = None,
    console: Console | None = None,
) -> None:
    """Configure logging with RichHandler, plus an optional log file."""
    level = logging.DEBUG if verbose else logging.INFO

    rich_handler = RichHandler(console=console or Console(stderr=True), rich_tracebacks=True)
    if secret:
        rich_handler.addFilter(SecretRedactionFilter(secret))
    handlers: list[logging.Handler] = [rich_handler]

    if log_file is not None:
        handlers.append(create_file_handler(log_file, secret))

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )

    # httpx logs every request at INFO; keep it for --verbose only
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
