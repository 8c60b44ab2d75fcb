# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Built-in field rule sets.

Open Graph first, then Twitter Card, then legacy meta tags and link relations.
Pure data: every behaviour here is a small callable consumed by the engine.
"""

from __future__ import annotations

import re

from .document import Element
from .rules import (
    Context,
    FieldRuleSet,
    RuleEntry,
    attr,
    freeze_table,
    scalar_processor,
    splitting_processor,
    text,
)
from .urls import derive_provider_name, host_of, make_url_absolute

_SIZE_RE = re.compile(r"\d+")

DEFAULT_ICON = "favicon.ico"

_content = attr("content")
_href = attr("href")


def score_icon_size(element: Element, score: int) -> int | None:
    """Declared icon size overrides rule priority.

    ``<link rel="icon" sizes="32x32">`` scores 32, so the largest declared icon
    wins; elements without a numeric ``sizes`` keep their score.
    """
    sizes = element.get_attribute("sizes")
    if not sizes:
        return None
    match = _SIZE_RE.search(sizes)
    return int(match.group()) if match else None


def _absolute(value: str, context: Context) -> str:
    return make_url_absolute(context.url, value)


def _split_keywords(value: str, context: Context) -> list[str]:
    return [kw for kw in (part.strip() for part in value.split(",")) if kw]


def _primary_language(value: str, context: Context) -> str:
    return value.strip().split("-")[0]


def _default_icon(context: Context) -> str:
    return DEFAULT_ICON


def _default_url(context: Context) -> str:
    return context.url


def _default_provider(context: Context) -> str:
    return derive_provider_name(host_of(context.url))


absolute_url = scalar_processor(_absolute)
split_keywords = splitting_processor(_split_keywords)
primary_language = scalar_processor(_primary_language)


DESCRIPTION = FieldRuleSet(
    rules=(
        RuleEntry('meta[property="og:description"]', _content),
        RuleEntry('meta[name="description" i]', _content),
    ),
)

ICON = FieldRuleSet(
    rules=(
        RuleEntry('link[rel="apple-touch-icon"]', _href),
        RuleEntry('link[rel="apple-touch-icon-precomposed"]', _href),
        RuleEntry('link[rel="icon" i]', _href),
        RuleEntry('link[rel="fluid-icon"]', _href),
        RuleEntry('link[rel="shortcut icon"]', _href),
        RuleEntry('link[rel="Shortcut Icon"]', _href),
        RuleEntry('link[rel="mask-icon"]', _href),
    ),
    scorers=(score_icon_size,),
    default_value=_default_icon,
    processors=(absolute_url,),
)

IMAGE = FieldRuleSet(
    rules=(
        RuleEntry('meta[property="og:image:secure_url"]', _content),
        RuleEntry('meta[property="og:image:url"]', _content),
        RuleEntry('meta[property="og:image"]', _content),
        RuleEntry('meta[name="twitter:image"]', _content),
        RuleEntry('meta[property="twitter:image"]', _content),
        RuleEntry('meta[name="thumbnail"]', _content),
    ),
    processors=(absolute_url,),
)

KEYWORDS = FieldRuleSet(
    rules=(RuleEntry('meta[name="keywords" i]', _content),),
    processors=(split_keywords,),
)

TITLE = FieldRuleSet(
    rules=(
        RuleEntry('meta[property="og:title"]', _content),
        RuleEntry('meta[name="twitter:title"]', _content),
        RuleEntry('meta[property="twitter:title"]', _content),
        RuleEntry('meta[name="hdl"]', _content),
        RuleEntry("title", text(collapse_whitespace=True)),
    ),
)

LANGUAGE = FieldRuleSet(
    rules=(
        RuleEntry("html[lang]", attr("lang")),
        RuleEntry('meta[name="language" i]', _content),
    ),
    processors=(primary_language,),
)

TYPE = FieldRuleSet(
    rules=(RuleEntry('meta[property="og:type"]', _content),),
)

URL = FieldRuleSet(
    rules=(
        RuleEntry("a.amp-canurl", _href),
        RuleEntry('link[rel="canonical"]', _href),
        RuleEntry('meta[property="og:url"]', _content),
    ),
    default_value=_default_url,
    processors=(absolute_url,),
)

PROVIDER = FieldRuleSet(
    rules=(RuleEntry('meta[property="og:site_name"]', _content),),
    default_value=_default_provider,
)

METADATA_RULE_SETS = freeze_table(
    {
        "description": DESCRIPTION,
        "icon": ICON,
        "image": IMAGE,
        "keywords": KEYWORDS,
        "title": TITLE,
        "language": LANGUAGE,
        "type": TYPE,
        "url": URL,
        "provider": PROVIDER,
    }
)
