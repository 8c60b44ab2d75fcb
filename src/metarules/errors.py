# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""metarules exception hierarchy.

Everything raised on purpose by this package derives from MetaRulesError.
Extractor and processor failures are not wrapped: they surface as whatever
the offending callable raised.
"""

from __future__ import annotations


class MetaRulesError(Exception):
    """Base exception for all metarules errors."""


class RuleConfigError(MetaRulesError):
    """A rule table or field rule set is malformed."""


class SelectorError(RuleConfigError):
    """A rule selector could not be compiled by the document collaborator."""

    def __init__(self, message: str, *, selector: str = "") -> None:
        super().__init__(message)
        self.selector = selector


class ResourceExhaustionError(MetaRulesError):
    """Document exceeds resource limits (HTML size)."""
