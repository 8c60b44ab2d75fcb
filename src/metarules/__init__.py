# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""metarules: declarative, rule-based HTML metadata extraction.

Each metadata field (title, description, icon, ...) is a table of CSS
selector rules scored by declaration order, with optional scorers, a default
and post-processors. ``extract_metadata`` runs a whole table against a
document and returns a plain dict.
"""

from __future__ import annotations

from .document import Document, Element, Location, SoupDocument, SoupElement, parse_html
from .engine import build_evaluator, evaluate_field
from .errors import MetaRulesError, ResourceExhaustionError, RuleConfigError, SelectorError
from .fields import METADATA_RULE_SETS, score_icon_size
from .metadata import extract_metadata, extract_metadata_from_html
from .rules import (
    Context,
    FieldRuleSet,
    FieldValue,
    MetadataRecord,
    Processor,
    RuleEntry,
    RuleSetTable,
    ValueKind,
    attr,
    freeze_table,
    list_processor,
    scalar_processor,
    splitting_processor,
    text,
    with_overrides,
)
from .urls import derive_provider_name, make_url_absolute

__version__ = "0.1.0"

__all__ = [
    "METADATA_RULE_SETS",
    "Context",
    "Document",
    "Element",
    "FieldRuleSet",
    "FieldValue",
    "Location",
    "MetaRulesError",
    "MetadataRecord",
    "Processor",
    "ResourceExhaustionError",
    "RuleConfigError",
    "RuleEntry",
    "RuleSetTable",
    "SelectorError",
    "SoupDocument",
    "SoupElement",
    "ValueKind",
    "attr",
    "build_evaluator",
    "derive_provider_name",
    "evaluate_field",
    "extract_metadata",
    "extract_metadata_from_html",
    "freeze_table",
    "list_processor",
    "make_url_absolute",
    "parse_html",
    "scalar_processor",
    "score_icon_size",
    "splitting_processor",
    "text",
    "with_overrides",
]
