# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""URL helpers shared by the built-in field rule sets."""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlsplit

_WWW_LABEL_RE = re.compile(r"^www[a-zA-Z0-9]*\.")


def make_url_absolute(base: str, relative: str) -> str:
    """Resolve ``relative`` against ``base``; absolute inputs pass through."""
    return urljoin(base, relative.strip())


def host_of(url: str) -> str:
    """Lowercased host name of ``url`` (no port, no userinfo), or ""."""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def derive_provider_name(host: str) -> str:
    """Human-readable site name from a host name.

    >>> derive_provider_name("www.example.co.uk")
    'example'
    >>> derive_provider_name("blog.example.com")
    'blog example'
    """
    name = _WWW_LABEL_RE.sub("", host, count=1)
    name = name.replace(".co.", ".", 1)
    return " ".join(name.split(".")[:-1])
