"""Command line interface for the Tribuna highlighting pipeline."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from tribuna.highlighting import (
    AnnotatedText,
    build_segments,
    find_sentence_containing,
    normalize_article_text,
)
from tribuna.services.highlighting import HighlightingConfig, build_highlighting_container
from tribuna.settings import get_log_level

_CATEGORY_STYLES = {
    "bill_identifier": "bold magenta",
    "formal_legislation": "bold blue",
    "government_agency": "bold green",
    "congressional_committee": "bold cyan",
    "political_institution": "bold yellow",
    "entitlement_program": "bold red",
    "movement": "bold bright_magenta",
    "policy_phrase": "italic blue",
    "other": "bold white",
}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tribuna - political term highlighting")
    subparsers = parser.add_subparsers(dest="command", required=True)

    normalize = subparsers.add_parser(
        "normalize", help="Cleans markup, scripts and entities from article text"
    )
    normalize.add_argument(
        "path", nargs="?", type=Path, help="Input file. Reads stdin when omitted."
    )

    highlight = subparsers.add_parser(
        "highlight", help="Detects political entities in article text"
    )
    highlight.add_argument(
        "path", nargs="?", type=Path, help="Input file. Reads stdin when omitted."
    )
    highlight.add_argument(
        "--json", action="store_true", help="Print the spans as JSON instead of a table"
    )
    highlight.add_argument(
        "--threshold", type=float, default=None, help="Minimum relevance score (default 7)"
    )
    highlight.add_argument(
        "--local-only",
        action="store_true",
        help="Skip the remote language model even when a credential is configured",
    )
    highlight.add_argument(
        "--paragraphs",
        action="store_true",
        help="Split the input on blank lines and annotate each paragraph",
    )
    highlight.add_argument(
        "--max-spans",
        type=int,
        default=None,
        help="Keep at most N spans per text (default 15, 0 for no limit)",
    )

    # Log level per subcommand (TRIBUNA_LOG_LEVEL is the fallback)
    for sp in (normalize, highlight):
        sp.add_argument(
            "--log-level",
            default=None,
            help="Log level: DEBUG, INFO, WARNING, ERROR (default INFO)",
        )

    return parser.parse_args(argv)


def _read_input(path: Path | None) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _render_annotated(console: Console, annotated: AnnotatedText) -> None:
    rendered = Text()
    for segment in build_segments(annotated.text, annotated.spans):
        if segment.span is None:
            rendered.append(segment.text)
        else:
            style = _CATEGORY_STYLES.get(segment.span.category.value, "bold")
            rendered.append(segment.text, style=f"{style} underline")
    console.print(rendered)

    if not annotated.spans:
        console.print("[yellow]No political terms found.[/yellow]")
        return

    table = Table(show_lines=False)
    table.add_column("Phrase")
    table.add_column("Term")
    table.add_column("Category")
    table.add_column("Score", justify="right")
    table.add_column("Context", overflow="fold")
    for span in annotated.spans:
        score = f"{span.relevance_score:.1f}" if span.relevance_score is not None else "-"
        table.add_row(
            span.matched_text,
            span.canonical_term,
            span.category.value,
            score,
            find_sentence_containing(annotated.text, span.start, span.end),
        )
    console.print(table)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    console = Console()
    level_name = getattr(args, "log_level", None) or get_log_level()
    handler = RichHandler(console=console, markup=True, rich_tracebacks=True)
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    logger = logging.getLogger("tribuna.cli")

    try:
        raw = _read_input(args.path)
    except OSError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        return 1

    if args.command == "normalize":
        console.print(normalize_article_text(raw), markup=False, highlight=False)
        return 0

    config = HighlightingConfig.from_env()
    if args.threshold is not None:
        config.threshold = args.threshold
    if args.max_spans is not None:
        config.max_spans = args.max_spans
    if args.local_only:
        config.remote_enabled = False
    container = build_highlighting_container(config)
    service = container.service

    if args.paragraphs:
        annotated = service.annotate_article(raw)
    else:
        annotated = [service.annotate(raw)]
    logger.debug(
        "Annotated %s block(s), %s span(s)",
        len(annotated),
        sum(len(item.spans) for item in annotated),
    )

    if args.json:
        payload = [
            {"text": item.text, "spans": [span.to_payload() for span in item.spans]}
            for item in annotated
        ]
        console.print_json(json.dumps(payload if args.paragraphs else payload[0]))
        return 0

    for item in annotated:
        _render_annotated(console, item)
    return 0


if __name__ == "__main__":
    sys.exit(main())
