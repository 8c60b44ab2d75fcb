# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Document collaborator: the query surface the rule engine runs against.

The engine only needs three capabilities, declared here as protocols:
``Document.select``, ``Element.get_attribute`` and ``Element.get_text``.
``SoupDocument`` binds them to BeautifulSoup (soupsieve CSS matching, which
understands the ``[attr="v" i]`` flag) on top of the lxml parser.

Attribute values are compared case-sensitively unless the selector carries
`` i``; soupsieve only folds case for ``type``. Browsers also fold ``rel``, so
``link[rel="canonical"]`` does not match ``rel="Canonical"`` here. Rule
tables that need that add the flag explicitly, as ``link[rel="icon" i]`` does.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

import soupsieve
from bs4 import BeautifulSoup, Tag

from .errors import ResourceExhaustionError, SelectorError

logger = logging.getLogger(__name__)

MAX_HTML_SIZE_BYTES = int(os.environ.get("METARULES_MAX_HTML_BYTES", 5 * 1024 * 1024))


@runtime_checkable
class Element(Protocol):
    def get_attribute(self, name: str) -> str | None: ...

    def get_text(self) -> str: ...


@runtime_checkable
class Document(Protocol):
    def select(self, selector: str) -> Sequence[Element]:
        """All elements matching ``selector``, in source order."""
        ...


@runtime_checkable
class Location(Protocol):
    @property
    def href(self) -> str: ...


class SoupElement:
    """Read-only view over a bs4 Tag."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def get_attribute(self, name: str) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return None
        # Parsers configured with multi-valued attributes hand back lists.
        if isinstance(value, list):
            return " ".join(value)
        return value

    def get_text(self) -> str:
        return self._tag.get_text()

    @property
    def tag_name(self) -> str:
        return self._tag.name

    def __repr__(self) -> str:
        return f"SoupElement(<{self._tag.name}>)"


class SoupDocument:
    """Document backed by a BeautifulSoup tree."""

    __slots__ = ("_soup",)

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    def select(self, selector: str) -> list[SoupElement]:
        try:
            tags = self._soup.select(selector)
        except soupsieve.SelectorSyntaxError as e:
            raise SelectorError(f"Invalid selector {selector!r}: {e}", selector=selector) from e
        return [SoupElement(tag) for tag in tags]

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup


def _check_html_size(html: str | bytes) -> None:
    size = len(html) if isinstance(html, bytes) else len(html.encode("utf-8"))
    if size > MAX_HTML_SIZE_BYTES:
        raise ResourceExhaustionError(f"HTML size {size:,} bytes exceeds {MAX_HTML_SIZE_BYTES:,} byte limit.")


def parse_html(html: str | bytes) -> SoupDocument:
    """Parse possibly malformed HTML into a SoupDocument.

    Empty input yields an empty document rather than an error, so every field
    falls through to its default.

    Raises:
        ResourceExhaustionError: input larger than MAX_HTML_SIZE_BYTES.
    """
    _check_html_size(html)
    soup = BeautifulSoup(html, "lxml", multi_valued_attributes=None)
    logger.debug("Parsed HTML document (%d bytes)", len(html))
    return SoupDocument(soup)
