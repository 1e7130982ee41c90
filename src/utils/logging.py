from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import structlog


def _renderer(fmt: str) -> Any:
    if fmt == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def setup_logging(
    *,
    level: str | None = None,
    log_file: str | None = None,
    fmt: str | None = None,
) -> None:
    """
    Structured logging
    - JSON to console (LOG_FORMAT=console for key=value lines, used by the CLI)
    - JSON lines to file when LOG_FILE is set
    """
    lvl = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    file_path = log_file or os.getenv("LOG_FILE")
    render_as = (fmt or os.getenv("LOG_FORMAT", "json")).lower()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_path))

    root = logging.getLogger()
    root.setLevel(lvl)
    root.handlers.clear()
    for h in handlers:
        # structlog renders the full line; stdlib only passes it through.
        h.setLevel(lvl)
        h.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(h)

    # Request lines from httpx would drown the fetch events.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    processors: list[Any] = [
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
    ]
    if render_as != "console":
        # ConsoleRenderer formats exceptions itself.
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(render_as))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, lvl, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(**kwargs: Any):
    return structlog.get_logger().bind(**kwargs)
