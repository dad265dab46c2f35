"""CLI entry point for the linkify engine.

Usage:
    python -m src.linkify.main article.md
    python -m src.linkify.main article.md --keywords "AI, ETF" --destination https://x.test
    cat article.md | python -m src.linkify.main --rules-file config/smartlinks.yaml
    python -m src.linkify.main article.md --max-per-keyword 1 --output linked.md

Without flags the keyword configuration comes from config/settings.yaml
and the SMARTLINK_URL / SMARTLINK_KEYWORDS environment variables.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..common.config import settings
from ..common.logging import resolve_level
from .engine import KeywordLinker
from .keywords import (
    FileKeywordSource,
    KeywordConfig,
    SettingsKeywordSource,
)

logging.basicConfig(
    level=resolve_level(settings.log_level),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Smartlink keyword linkifier")
    parser.add_argument(
        "input",
        nargs="?",
        type=str,
        help="Markdown file to linkify (default: stdin)",
    )
    parser.add_argument(
        "--keywords",
        type=str,
        help="Comma-separated keywords (e.g., 'AI, crypto, ETF')",
    )
    parser.add_argument(
        "--destination",
        type=str,
        help="Destination URL shared by all keywords",
    )
    parser.add_argument(
        "--max-per-keyword",
        type=int,
        help="Link at most N occurrences of each keyword (default: all)",
    )
    parser.add_argument(
        "--rules-file",
        type=str,
        help="JSON/YAML file with smartlink settings and per-keyword rules",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output Markdown file path (default: stdout)",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> KeywordConfig:
    """Merge configured settings with CLI overrides."""
    if args.rules_file:
        config = FileKeywordSource(Path(args.rules_file)).get_config()
    else:
        config = SettingsKeywordSource().get_config()

    if args.keywords is not None:
        config.raw_keywords = args.keywords
    if args.destination is not None:
        config.destination = args.destination
    if args.max_per_keyword is not None:
        config.max_links_per_keyword = args.max_per_keyword
    return config


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.max_per_keyword is not None and args.max_per_keyword < 1:
        parser.error("--max-per-keyword must be at least 1")

    try:
        config = resolve_config(args)
        if args.input:
            body = Path(args.input).read_text(encoding="utf-8")
        else:
            body = sys.stdin.read()
    except (OSError, ValueError) as e:
        logger.error("Failed to load input: %s", e)
        return 1

    if config.is_empty:
        logger.warning("No keywords or destination configured, output unchanged")

    linker = KeywordLinker(config.to_rules(), config.max_links_per_keyword)
    matches = linker.find_matches(body)
    result = linker.apply(body)

    logger.info(
        "Inserted %d link(s) for %d keyword rule(s)",
        len(matches),
        len(linker.rules),
    )

    if args.output:
        try:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(result, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write output: %s", e)
            return 1
        logger.info("Saved to %s", args.output)
    else:
        sys.stdout.write(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
