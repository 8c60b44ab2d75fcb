# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Rule engine: resolve one field of a document from its FieldRuleSet.

Scoring: rule ``i`` of ``n`` gives each matching element a base score of
``n - i``; scorers then run left to right, each either returning a new score
or ``None`` to keep the current one. The first candidate with the strictly
highest score wins, so ties resolve to declaration order, then document order.

A candidate whose extractor yields nothing (``None`` or blank) never becomes
the incumbent and does not raise the bar for later candidates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .document import Document, Element
from .rules import Context, FieldRuleSet, FieldValue

logger = logging.getLogger(__name__)

Evaluator = Callable[[Document, Context], FieldValue | None]


def _score(rule_set: FieldRuleSet, element: Element, base: int) -> int:
    score = base
    for scorer in rule_set.scorers:
        new_score = scorer(element, score)
        if new_score is not None:
            score = new_score
    return score


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def evaluate_field(rule_set: FieldRuleSet, document: Document, context: Context) -> FieldValue | None:
    """Select, default and post-process the value of one field.

    Returns ``None`` when no rule produced a value and there is no usable default.
    Selector errors from ``document.select`` and exceptions from extractors,
    scorers or processors propagate to the caller.
    """
    rule_count = len(rule_set.rules)
    max_score = 0
    max_value: str | None = None
    winner: str | None = None

    for index, (selector, extractor) in enumerate(rule_set.rules):
        elements = document.select(selector)
        if not elements:
            continue
        base = rule_count - index
        for element in elements:
            score = _score(rule_set, element, base)
            if score <= max_score:
                continue
            value = extractor(element)
            if _is_blank(value):
                continue
            max_score = score
            max_value = value
            winner = selector

    if max_value is None and rule_set.default_value is not None:
        max_value = rule_set.default_value(context)
        if not _is_blank(max_value):
            logger.debug("No rule matched, using default value %r", max_value)

    if _is_blank(max_value):
        return None

    if winner is not None:
        logger.debug("Selected %r via %r (score=%d)", max_value, winner, max_score)

    result: FieldValue = max_value
    for processor in rule_set.processors:
        result = processor(result, context)

    if isinstance(result, str):
        result = result.strip()
    # Processors may empty a value ("-US" -> ""); report that as absent.
    if not result:
        return None
    return result


def build_evaluator(rule_set: FieldRuleSet) -> Evaluator:
    """Bind ``rule_set`` into a reusable ``(document, context) -> value`` callable."""

    def _evaluate(document: Document, context: Context) -> FieldValue | None:
        return evaluate_field(rule_set, document, context)

    return _evaluate
