# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""metarules CLI: extract metadata from a saved HTML file.

Usage:
    metarules extract page.html --url https://example.com/post
    curl -s https://example.com | metarules extract - --url https://example.com --format text
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .errors import MetaRulesError
from .fields import METADATA_RULE_SETS
from .logging_config import DEFAULT_JSON, configure
from .metadata import extract_metadata_from_html
from .rules import MetadataRecord

logger = logging.getLogger(__name__)


def _read_html(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def _format_text(record: MetadataRecord) -> str:
    width = max((len(k) for k in record), default=0)
    lines = []
    for name, value in record.items():
        if value is None:
            shown = "-"
        elif isinstance(value, list):
            shown = ", ".join(value)
        else:
            shown = value
        lines.append(f"{name.ljust(width)}  {shown}")
    return "\n".join(lines)


def cmd_extract(args: argparse.Namespace) -> None:
    """Extract metadata and print it to stdout."""
    table = METADATA_RULE_SETS
    if args.fields:
        unknown = [f for f in args.fields if f not in METADATA_RULE_SETS]
        if unknown:
            raise MetaRulesError(f"Unknown field(s): {', '.join(unknown)}. Known: {', '.join(METADATA_RULE_SETS)}")
        table = {name: METADATA_RULE_SETS[name] for name in args.fields}

    html = _read_html(args.source)
    logger.info("Extracting %d field(s) from %s", len(table), args.source)
    record = extract_metadata_from_html(html, args.url, table)

    if args.format == "text":
        print(_format_text(record))
    else:
        print(json.dumps(record, ensure_ascii=False, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rule-based HTML metadata extraction",
        prog="metarules",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument("--json-logs", action="store_true", default=DEFAULT_JSON, help="Log as JSON lines")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_extract = subparsers.add_parser(
        "extract",
        help="Extract metadata from an HTML file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  %(prog)s page.html --url https://example.com/a        JSON to stdout
  %(prog)s - --url https://example.com --format text    read HTML from stdin
  %(prog)s page.html --field title --field icon         selected fields only""",
    )
    p_extract.add_argument("source", metavar="FILE", help="HTML file, or '-' for stdin")
    p_extract.add_argument("--url", type=str, metavar="URL", help="Absolute URL the document was fetched from")
    p_extract.add_argument(
        "--field",
        dest="fields",
        action="append",
        metavar="NAME",
        help=f"Only extract this field (repeatable). Known: {', '.join(METADATA_RULE_SETS)}",
    )
    p_extract.add_argument("--format", type=str, choices=["json", "text"], default="json", help="Output format")
    p_extract.set_defaults(func=cmd_extract)
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure(json_output=args.json_logs, package_level="DEBUG")
    else:
        configure(json_output=args.json_logs)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
    except (MetaRulesError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
