"""
Conventional commit parsing for the history view
"""

import re
from dataclasses import dataclass
from enum import Enum


class CommitType(Enum):
    """Conventional commit types with a dedicated badge color"""

    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    TEST = "test"
    CHORE = "chore"
    BUILD = "build"
    CI = "ci"
    PERF = "perf"
    REVERT = "revert"


TYPE_COLORS = {
    CommitType.FEAT: "teal",
    CommitType.FIX: "red",
    CommitType.DOCS: "blue",
    CommitType.STYLE: "violet",
    CommitType.REFACTOR: "orange",
    CommitType.TEST: "cyan",
    CommitType.CHORE: "gray",
    CommitType.BUILD: "indigo",
    CommitType.CI: "grape",
    CommitType.PERF: "yellow",
    CommitType.REVERT: "pink",
}

DEFAULT_TYPE_COLOR = "gray"

# type(scope): description
CONVENTIONAL_RE = re.compile(r"^([a-zA-Z]+)(\([^)]+\))?:\s*(.+)")


@dataclass(frozen=True)
class ConventionalCommit:
    """Parsed commit subject line"""

    type: str
    description: str
    scope: str | None = None
    is_conventional: bool = False


def parse_commit_message(message: str) -> ConventionalCommit:
    """
    Parse a conventional commit subject.

    Messages that don't follow `type(scope): description` come back with an
    empty type and the whole message as description.
    """
    match = CONVENTIONAL_RE.match(message)
    if not match:
        return ConventionalCommit(type="", description=message)

    scope = match.group(2)[1:-1] if match.group(2) else None
    return ConventionalCommit(
        type=match.group(1),
        description=match.group(3),
        scope=scope,
        is_conventional=True,
    )


def get_type_color(commit_type: str) -> str:
    """Get the badge color for a commit type (case-insensitive)"""
    try:
        return TYPE_COLORS[CommitType(commit_type.lower())]
    except ValueError:
        return DEFAULT_TYPE_COLOR
