# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge for the metarules CLI.

Library modules only call ``logging.getLogger(__name__)``; this module decides
where those records go. Leaf module, no metarules imports.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

import structlog

DEFAULT_LEVEL = os.environ.get("METARULES_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
DEFAULT_JSON = os.environ.get("METARULES_LOG_FORMAT", "").strip().lower() == "json"
PACKAGE_LOGGER = "metarules"


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def configure(
    *,
    json_output: bool = DEFAULT_JSON,
    level: str = DEFAULT_LEVEL,
    stream: TextIO | None = None,
    package_level: str | None = None,
) -> None:
    """Route stdlib and structlog records through one structlog formatter.

    Args:
        json_output: emit JSON lines instead of the human-readable console format.
        level: root logger level name; unknown names fall back to WARNING.
        stream: destination, stderr by default so stdout stays clean for results.
        package_level: level for the ``metarules`` logger tree only, so debug output
            from the engine does not drag in parser or third-party noise.
            ``None`` leaves it inheriting from the root.
    """
    shared = _shared_processors()
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=shared,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    package = logging.getLogger(PACKAGE_LOGGER)
    if package_level is None:
        package.setLevel(logging.NOTSET)
    else:
        package.setLevel(getattr(logging, package_level.upper(), logging.WARNING))
