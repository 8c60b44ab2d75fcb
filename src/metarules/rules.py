# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Declarative rule model: what a field looks for, how it scores, how it is cleaned.

A field is a flat bundle of callables (no class hierarchy). Rule order is the
priority: the first rule scores ``len(rules)``, the last scores 1. Scorers may
override that per element, a default covers the no-match case, and processors
transform the winning value.

Processors declare the shape they accept and produce (``ValueKind``) so a
list-producing step can never be chained into a scalar-expecting one; the
chain is checked when the FieldRuleSet is built.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable, Iterable, Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import NamedTuple, TypeAlias

from .document import Element
from .errors import RuleConfigError

FieldValue: TypeAlias = str | list[str]
MetadataRecord: TypeAlias = dict[str, FieldValue | None]

Extractor: TypeAlias = Callable[[Element], str | None]
Scorer: TypeAlias = Callable[[Element, int], int | None]

_ASCII_WS_RE = re.compile(r"[ \t\n\f\r]+")


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class Context:
    """Per-extraction data handed to defaults and processors."""

    url: str = ""


DefaultValue: TypeAlias = Callable[[Context], str]


class ValueKind(StrEnum):
    SCALAR = "scalar"
    LIST = "list"


class RuleEntry(NamedTuple):
    selector: str
    extractor: Extractor


@dataclasses.dataclass(frozen=True, slots=True)
class Processor:
    """A value transform with an explicit input and output shape."""

    func: Callable[[FieldValue, Context], FieldValue]
    accepts: ValueKind = ValueKind.SCALAR
    produces: ValueKind = ValueKind.SCALAR

    def __call__(self, value: FieldValue, context: Context) -> FieldValue:
        return self.func(value, context)


def scalar_processor(func: Callable[[str, Context], str]) -> Processor:
    """str -> str transform."""
    return Processor(func, ValueKind.SCALAR, ValueKind.SCALAR)


def splitting_processor(func: Callable[[str, Context], list[str]]) -> Processor:
    """str -> list[str] transform."""
    return Processor(func, ValueKind.SCALAR, ValueKind.LIST)


def list_processor(func: Callable[[list[str], Context], list[str]]) -> Processor:
    """list[str] -> list[str] transform."""
    return Processor(func, ValueKind.LIST, ValueKind.LIST)


def attr(name: str) -> Extractor:
    """Extractor reading attribute ``name``."""

    def _extract(element: Element) -> str | None:
        return element.get_attribute(name)

    _extract.__name__ = f"attr_{name}"
    return _extract


def text(*, collapse_whitespace: bool = False) -> Extractor:
    """Extractor reading the element's text content.

    With ``collapse_whitespace`` runs of ASCII whitespace become one space, the
    way a browser reads ``<title>`` text.
    """

    def _extract(element: Element) -> str | None:
        value = element.get_text()
        if collapse_whitespace:
            value = _ASCII_WS_RE.sub(" ", value).strip()
        return value

    return _extract


def _as_processor(p: Processor | Callable) -> Processor:
    if isinstance(p, Processor):
        return p
    if callable(p):
        # Bare callables are taken to be str -> str.
        return scalar_processor(p)
    raise RuleConfigError(f"Processor must be callable, got {type(p).__name__}")


@dataclasses.dataclass(frozen=True, slots=True)
class FieldRuleSet:
    """Everything the engine needs to resolve one field."""

    rules: tuple[RuleEntry, ...]
    scorers: tuple[Scorer, ...] = ()
    default_value: DefaultValue | None = None
    processors: tuple[Processor, ...] = ()

    def __post_init__(self) -> None:
        try:
            rules = tuple(RuleEntry(*r) for r in self.rules)
        except TypeError as e:
            raise RuleConfigError(f"Rules must be (selector, extractor) pairs: {e}") from e
        for selector, extractor in rules:
            if not isinstance(selector, str) or not selector.strip():
                raise RuleConfigError(f"Rule selector must be a non-empty string, got {selector!r}")
            if not callable(extractor):
                raise RuleConfigError(f"Extractor for {selector!r} is not callable")
        for scorer in self.scorers:
            if not callable(scorer):
                raise RuleConfigError(f"Scorer {scorer!r} is not callable")
        if self.default_value is not None and not callable(self.default_value):
            raise RuleConfigError("default_value must be callable")
        processors = tuple(_as_processor(p) for p in self.processors)

        kind = ValueKind.SCALAR
        for p in processors:
            if p.accepts is not kind:
                raise RuleConfigError(
                    f"Processor {getattr(p.func, '__name__', p.func)!r} accepts {p.accepts} "
                    f"but the chain produces {kind} at that point"
                )
            kind = p.produces

        object.__setattr__(self, "rules", rules)
        object.__setattr__(self, "scorers", tuple(self.scorers))
        object.__setattr__(self, "processors", processors)

    @property
    def output_kind(self) -> ValueKind:
        return self.processors[-1].produces if self.processors else ValueKind.SCALAR


RuleSetTable: TypeAlias = Mapping[str, FieldRuleSet]


def freeze_table(fields: Mapping[str, FieldRuleSet] | Iterable[tuple[str, FieldRuleSet]]) -> RuleSetTable:
    """Read-only copy of a field table, preserving declaration order."""
    table = dict(fields)
    for key, rule_set in table.items():
        if not isinstance(key, str) or not key:
            raise RuleConfigError(f"Field name must be a non-empty string, got {key!r}")
        if not isinstance(rule_set, FieldRuleSet):
            raise RuleConfigError(f"Field {key!r} must map to a FieldRuleSet, got {type(rule_set).__name__}")
    return MappingProxyType(table)


def with_overrides(table: RuleSetTable, **fields: FieldRuleSet | None) -> RuleSetTable:
    """New table with ``fields`` replaced or appended; ``None`` removes a field.

    Existing keys keep their position, new keys are appended in argument order.
    """
    merged = dict(table)
    for name, rule_set in fields.items():
        if rule_set is None:
            merged.pop(name, None)
        else:
            merged[name] = rule_set
    return freeze_table(merged)
