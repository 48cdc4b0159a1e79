"""Structured logging configuration using structlog.

Call ``configure_logging()`` once at process startup (the CLI does this).
All modules can then use either the stdlib logging API or structlog directly:

Stdlib usage::

    import logging
    logger = logging.getLogger(__name__)
    logger.info("message", extra={"key": "value"})

Structlog usage (richer context binding)::

    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("message", key="value", timestamp="20050101000000")

The harvest orchestrator binds ``target_url`` with
:func:`bind_run_context` so that it is merged into every record emitted while
a run is in progress.
"""

from __future__ import annotations

import logging
import logging.config
import sys

import structlog

# ---------------------------------------------------------------------------
# Run context helpers
# ---------------------------------------------------------------------------


def bind_run_context(target_url: str) -> None:
    """Bind the run's target URL into structlog's context variables."""
    structlog.contextvars.bind_contextvars(target_url=target_url)


def clear_run_context() -> None:
    """Remove the keys bound by :func:`bind_run_context`."""
    structlog.contextvars.unbind_contextvars("target_url")


# ---------------------------------------------------------------------------
# Public configuration entry-point
# ---------------------------------------------------------------------------


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog with JSON output for production.

    When ``log_level`` is not ``"DEBUG"``, outputs newline-delimited JSON.
    At ``"DEBUG"``, uses structlog's ``ConsoleRenderer`` for human-readable
    coloured output.

    Standard fields added to every log record:

    - ``timestamp``: ISO 8601 string.
    - ``level``: Log level name (``"info"``, ``"warning"``, etc.).
    - ``logger``: Module name that emitted the record.
    - ``target_url``: Page being harvested (omitted outside a run).
    - ``event``: The log message string.

    Calling this function more than once is safe: the root handlers are
    replaced and structlog's configuration is overwritten.

    Args:
        log_level: Logging verbosity string.  One of ``"DEBUG"``, ``"INFO"``,
            ``"WARNING"``, ``"ERROR"``, ``"CRITICAL"``.  Case-insensitive.
    """
    level_upper = log_level.upper()
    numeric_level = getattr(logging, level_upper, logging.INFO)
    is_development = level_upper == "DEBUG"

    # ------------------------------------------------------------------
    # Shared pre-chain processors (run before the final renderer)
    # ------------------------------------------------------------------
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if is_development:
        final_renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer(
            colors=True,
        )
    else:
        final_renderer = structlog.processors.JSONRenderer()

    # ------------------------------------------------------------------
    # Route stdlib ``logging.getLogger(__name__)`` records through
    # structlog's ProcessorFormatter.
    # ------------------------------------------------------------------
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            final_renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    # Silence noisy libraries unless we are in DEBUG mode.
    if not is_development:
        for noisy_logger in ("httpx", "httpcore", "asyncio"):
            logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
