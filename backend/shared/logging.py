"""Logging setup for the scorekeeper command line.

structlog events are routed through stdlib logging to stderr, leaving stdout
to command output. Passing a log directory adds a timestamped
``scorekeeper_*.log`` file next to the stderr handler.

Environment variables:
- LOG_FORMAT: "console" (default) or "json".
- LOG_LEVEL: "debug", "info", "warning" (default), "error" or "critical".
"""

import logging
import os
import sys
from collections.abc import MutableMapping
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any

import structlog

LOG_FILE_PREFIX = "scorekeeper"

_LOG_FORMATS = ("console", "json")
_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def _plain(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


def _serialize_values(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Render game enums and exact scores as plain JSON-safe values."""
    return {key: _plain(value) for key, value in event_dict.items()}


def _is_test() -> bool:
    return "pytest" in sys.modules


def _env_choice(name: str, default: str, allowed: tuple[str, ...]) -> str:
    value = os.environ.get(name, "").strip().lower() or default
    if value not in allowed:
        raise ValueError(f"Invalid {name}={value!r}. Must be one of {', '.join(allowed)}.")
    return value


def _formatter(*, json_mode: bool, colors: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer = structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer(colors=colors)
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )


def setup_logging(log_dir: Path | str | None = None) -> Path | None:
    """Configure structlog for one CLI run.

    Returns the log file path when ``log_dir`` is given, None otherwise.
    No file is created while running under pytest.
    """
    json_mode = _env_choice("LOG_FORMAT", "console", _LOG_FORMATS) == "json"
    level = getattr(logging, _env_choice("LOG_LEVEL", "warning", _LOG_LEVELS).upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _serialize_values,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(_formatter(json_mode=json_mode, colors=sys.stderr.isatty()))
    root_logger.addHandler(stderr_handler)

    if log_dir is None or _is_test():
        return None

    dir_path = Path(log_dir).expanduser()
    dir_path.mkdir(parents=True, exist_ok=True)
    file_path = dir_path / f"{LOG_FILE_PREFIX}_{datetime.now(tz=UTC):%Y-%m-%d_%H-%M-%S}.log"
    file_handler = logging.FileHandler(file_path)
    file_handler.setFormatter(_formatter(json_mode=json_mode, colors=False))
    root_logger.addHandler(file_handler)
    return file_path
