"""Logging utilities tailored for crossword layout generation."""

from __future__ import annotations

import logging
from typing import Optional

from tqdm import tqdm


class TqdmLoggingHandler(logging.StreamHandler):
    """Stream handler that writes through ``tqdm`` so progress bars stay intact."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream)
            self.flush()
        except Exception:  # pragma: no cover - mirrors logging.Handler behaviour
            self.handleError(record)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with a sensible formatter.

    The restart loop may run thousands of attempts under a progress bar, so
    records are routed through :class:`TqdmLoggingHandler`. Callers can
    reconfigure before invoking :class:`CrosswordGenerator`.
    """

    handler = TqdmLoggingHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "crossgrid")
