# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Metadata orchestrator: run every field of a rule table against one document.

Fields are independent and evaluated in table declaration order, so the
output record keeps that order. Absent fields are present as ``None``.
"""

from __future__ import annotations

import logging

import structlog

from .document import Document, Location, parse_html
from .engine import build_evaluator
from .fields import METADATA_RULE_SETS
from .rules import Context, MetadataRecord, RuleSetTable

logger = logging.getLogger(__name__)


def _location_href(location: Location | str | None) -> str:
    if location is None:
        return ""
    if isinstance(location, str):
        return location
    return location.href or ""


def extract_metadata(
    document: Document,
    location: Location | str | None,
    rule_sets: RuleSetTable | None = None,
) -> MetadataRecord:
    """Extract one record from ``document``.

    Args:
        document: anything exposing ``select(selector)`` (see metarules.document).
        location: object with an ``href``, or the absolute URL itself; ``None``
            extracts without a base URL (relative URLs stay relative).
        rule_sets: field table; defaults to METADATA_RULE_SETS.

    Returns:
        Mapping of field name to ``str``, ``list[str]`` or ``None``.
    """
    context = Context(url=_location_href(location))
    table = METADATA_RULE_SETS if rule_sets is None else rule_sets

    metadata: MetadataRecord = {}
    # Engine and collaborator log records carry the url and field being resolved.
    with structlog.contextvars.bound_contextvars(url=context.url):
        for name, rule_set in table.items():
            with structlog.contextvars.bound_contextvars(field=name):
                metadata[name] = build_evaluator(rule_set)(document, context)

        found = sum(1 for v in metadata.values() if v is not None)
        logger.debug("Extracted %d/%d metadata fields for %s", found, len(metadata), context.url or "<no url>")
    return metadata


def extract_metadata_from_html(
    html: str | bytes,
    url: str | None = None,
    rule_sets: RuleSetTable | None = None,
) -> MetadataRecord:
    """Parse ``html`` and extract metadata in one call."""
    return extract_metadata(parse_html(html), url, rule_sets)
