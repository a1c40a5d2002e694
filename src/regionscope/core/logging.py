"""Structured logging for region parsing and outline synthesis.

Events go through structlog into stdlib handlers, one per configured output.
Each output picks its own renderer (JSON lines or console) and level.

While a document is bound with ``bind_document_id`` every event carries its
``document_id``, so interleaved reparses and syntheses of several documents
stay distinguishable in a shared log file.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from regionscope.config.models import LoggingConfig, LogOutputConfig

_document_id: ContextVar[str | None] = ContextVar("document_id", default=None)

# First file output of the active configuration
_log_file_path: Path | None = None

_LEVELS = logging.getLevelNamesMapping()


def get_document_id() -> str | None:
    return _document_id.get()


def bind_document_id(document_id: str | None) -> None:
    """Attach ``document_id`` to every event logged from this context."""
    _document_id.set(document_id)


def clear_document_id() -> None:
    _document_id.set(None)


def get_log_file_path() -> Path | None:
    return _log_file_path


def _inject_document_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    document_id = get_document_id()
    if document_id:
        event_dict.setdefault("document_id", document_id)
    return event_dict


def _level_number(name: str | None, fallback: int) -> int:
    if name is None:
        return fallback
    return _LEVELS.get(name.upper(), fallback)


def _stream_for(destination: str) -> logging.Handler:
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def _renderer_for(output: LogOutputConfig) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    interactive = output.destination in ("stderr", "stdout") and sys.stderr.isatty()
    return structlog.dev.ConsoleRenderer(colors=interactive, pad_event_to=0, pad_level=False)


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Configure structlog and the root stdlib logger.

    Args:
        config: Full logging configuration. When given, ``json_format`` and
            ``level`` are ignored.
        json_format: Render the single stderr output as JSON lines.
        level: Root level for the single stderr output.
    """
    global _log_file_path
    from regionscope.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level.upper(),  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )
    root_level = _level_number(config.level, logging.INFO)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        _inject_document_id,  # type: ignore[list-item]
    ]
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for stale in list(root.handlers):
        root.removeHandler(stale)
        stale.close()
    root.setLevel(root_level)

    _log_file_path = None
    for output in config.outputs:
        handler = _stream_for(output.destination)
        handler.setLevel(_level_number(output.level, root_level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_renderer_for(output), foreign_pre_chain=pre_chain
            )
        )
        root.addHandler(handler)
        if _log_file_path is None and output.destination not in ("stderr", "stdout"):
            _log_file_path = Path(output.destination)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
