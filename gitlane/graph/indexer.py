"""
Commit indexing - rows and parent/child lookups for a loaded feed.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from gitlane.graph.types import FeedCommit


class DuplicateCommitError(ValueError):
    """The feed delivered the same commit hash twice."""

    def __init__(self, commit_hash: str, first_row: int, second_row: int) -> None:
        super().__init__(
            f"Commit {commit_hash} appears twice in the feed (rows {first_row} and {second_row})"
        )
        self.commit_hash = commit_hash
        self.first_row = first_row
        self.second_row = second_row


@dataclass(frozen=True)
class CommitIndex:
    """
    Row numbers and child links for the loaded window of history.

    Rows follow feed order (newest first). The children map is keyed by
    every parent hash referenced in the window, including parents that are
    not loaded yet, so a page that brings them in finds their children
    already collected.
    """

    commits: tuple[FeedCommit, ...] = ()
    # derived from commits; hashing goes by the commits alone
    rows: dict[str, int] = field(default_factory=dict, hash=False)
    children: dict[str, tuple[str, ...]] = field(default_factory=dict, hash=False)

    def __len__(self) -> int:
        return len(self.commits)

    def __contains__(self, commit_hash: object) -> bool:
        return commit_hash in self.rows

    def get(self, commit_hash: str) -> FeedCommit | None:
        """Look up a loaded commit by full hash."""
        row = self.rows.get(commit_hash)
        if row is None:
            return None
        return self.commits[row]

    def row_of(self, commit_hash: str) -> int | None:
        return self.rows.get(commit_hash)

    def children_of(self, commit_hash: str) -> tuple[str, ...]:
        """Children of a commit within the loaded window, in row order."""
        return self.children.get(commit_hash, ())

    def dangling_parents(self) -> set[str]:
        """Parent hashes referenced by loaded commits but not loaded themselves."""
        return {parent for parent in self.children if parent not in self.rows}

    def extend(self, commits: Iterable[FeedCommit]) -> "CommitIndex":
        """Return a new index with older commits appended after the current window."""
        all_commits = list(self.commits)
        rows = dict(self.rows)
        children = dict(self.children)

        for commit in commits:
            row = len(all_commits)
            first_row = rows.get(commit.hash)
            if first_row is not None:
                raise DuplicateCommitError(commit.hash, first_row, row)
            rows[commit.hash] = row
            all_commits.append(commit)

            for parent_hash in commit.parent_hashes:
                existing = children.get(parent_hash, ())
                if commit.hash not in existing:
                    children[parent_hash] = existing + (commit.hash,)

        return CommitIndex(commits=tuple(all_commits), rows=rows, children=children)


def index_commits(commits: Sequence[FeedCommit]) -> CommitIndex:
    """Index a feed of commits given newest first.

    Raises:
        DuplicateCommitError: if a hash occurs more than once.
    """
    return CommitIndex().extend(commits)
