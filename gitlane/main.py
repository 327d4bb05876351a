#!/usr/bin/env python3
"""
gitlane - print the commit graph layout of a git repository
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from gitlane.config.settings import Settings
from gitlane.git_backend.commit_types import parse_commit_message
from gitlane.git_backend.repository import GitRepository
from gitlane.graph.layout import GraphLayout
from gitlane.history.model import CommitHistory


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="gitlane",
        description="gitlane - commit graph layout for git repositories",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Repository path (default: discover from the current directory)",
    )
    parser.add_argument(
        "-n",
        "--max-count",
        type=int,
        default=200,
        help="Number of commits to lay out",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Commits fetched per page (default: from settings)",
    )
    parser.add_argument("--json", action="store_true", help="Print the layout as JSON")
    parser.add_argument("--config", type=Path, default=None, help="Settings file to use")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def format_rows(layout: GraphLayout) -> list[str]:
    """One line per commit: row, column, color, short hash, refs and subject"""
    lines = []
    for node in layout.nodes:
        subject = node.commit.message if node.commit else ""
        parsed = parse_commit_message(subject)
        if parsed.is_conventional:
            subject = f"[{parsed.type}] {parsed.description}"
        refs = f" ({', '.join(node.refs)})" if node.refs else ""
        lines.append(f"{node.y:>5} {node.x:>3} {node.color} {node.hash[:7]}{refs} {subject}")
    return lines


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings(args.config)

    level = logging.DEBUG if args.verbose else settings.get_log_level()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        repo = GitRepository(args.path)
    except ValueError as e:
        print(f"gitlane: {e}", file=sys.stderr)
        return 1

    page_size = args.page_size or settings.get_page_size()
    history = CommitHistory(
        page_size=max(1, page_size),
        options=settings.get_layout_options(),
    )
    history.open_repository(repo, repo.path)
    layout = history.load_until(repo, max(0, args.max_count))

    if args.json:
        print(json.dumps(layout.to_dict(), indent=2))
    else:
        for line in format_rows(layout):
            print(line)
        for ref in layout.unresolved_refs:
            print(f"# {ref.ref_name}: {ref.status.value}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
