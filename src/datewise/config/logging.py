"""structlog configuration for datewise.

Two output modes, both on stderr so stdout stays clean for results:
- Human (default): console renderer, coloured when stderr is a TTY
- JSON (--log-json): structured JSON lines

Every event carries the site zone it was computed against and, under
``--now``, the pinned clock instant.  Event timestamps are UTC, and
datetime values are rendered as canonical Instants.
"""

from __future__ import annotations

import logging
import sys
from datetime import date, datetime
from typing import Any

import structlog

from datewise.domain.instants import format_instant


def _canonical_instants(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Render datetime values the way results print them."""
    for key, value in event_dict.items():
        if isinstance(value, datetime):
            event_dict[key] = format_instant(value)
        elif isinstance(value, date):
            event_dict[key] = value.isoformat()
    return event_dict


def _clock_context(zone: str | None, now: str | None) -> structlog.types.Processor:
    def add_clock(
        logger: Any, method_name: str, event_dict: structlog.types.EventDict
    ) -> structlog.types.EventDict:
        if zone is not None:
            event_dict.setdefault("site_zone", zone)
        if now is not None:
            event_dict.setdefault("fixed_now", now)
        return event_dict

    return add_clock


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    zone: str | None = None,
    now: str | None = None,
) -> None:
    """Configure structlog processors and route stdlib logging through them.

    Args:
        verbose: Enable DEBUG output for the ``datewise`` logger.
        log_json: Use the JSON renderer instead of the console renderer.
        zone: Site timezone stamped on every event.
        now: Fixed clock instant (``--now``), stamped when set.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=True),
        _clock_context(zone, now),
        _canonical_instants,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("datewise").setLevel(level)
