"""
Git repository access using pygit2
"""

import itertools
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pygit2

from gitlane.graph.types import FeedCommit

logger = logging.getLogger(__name__)


class GitRepository:
    """Reads history and branch heads for the commit graph"""

    def __init__(self, repo_path: str | None = None) -> None:
        """Initialize repository"""
        if repo_path is None:
            repo_path = self._find_repo()

        try:
            self.repo = pygit2.Repository(repo_path)
        except pygit2.GitError as e:
            raise ValueError(f"Not a git repository: {repo_path}") from e
        self.path = repo_path

    def _find_repo(self) -> str:
        """Find git repository in current directory or parents"""
        current = Path.cwd()
        while current != current.parent:
            if (current / ".git").exists():
                return str(current)
            current = current.parent
        raise ValueError("Not in a git repository")

    def _branch_heads(self) -> dict[str, pygit2.Commit]:
        """Local and remote-tracking branches mapped to their head commits.

        Symbolic remote heads such as origin/HEAD are skipped; they only
        alias another remote branch.
        """
        heads: dict[str, pygit2.Commit] = {}
        for branch_name in self.repo.branches.local:
            heads[branch_name] = self.repo.branches.local[branch_name].peel(pygit2.Commit)
        for branch_name in self.repo.branches.remote:
            if branch_name.endswith("/HEAD"):
                continue
            heads[branch_name] = self.repo.branches.remote[branch_name].peel(pygit2.Commit)
        return heads

    def get_branch_refs(self) -> dict[str, str]:
        """Get local and remote branch names mapped to their head commit hash"""
        return {name: str(commit.id) for name, commit in self._branch_heads().items()}

    def get_checked_out_branch(self) -> str | None:
        """Get the checked-out branch name, or None for a detached or unborn HEAD"""
        if self.repo.head_is_unborn or self.repo.head_is_detached:
            return None
        return self.repo.head.shorthand

    def get_commits(self, skip: int = 0, max_count: int | None = None) -> list[FeedCommit]:
        """
        Get one page of history across all branches, newest first.

        Commits are walked in topological order (ties broken by time) so a
        child always comes before its parents, which the lane layout relies
        on. Paging through skip/max_count yields the same sequence as one
        long walk.
        """
        heads = [commit.id for commit in self._branch_heads().values()]
        if not self.repo.head_is_unborn and self.repo.head_is_detached:
            heads.append(self.repo.head.target)
        if not heads:
            return []

        sort_mode = pygit2.enums.SortMode.TOPOLOGICAL | pygit2.enums.SortMode.TIME
        walker = self.repo.walk(heads[0], sort_mode)
        for head in heads[1:]:
            walker.push(head)

        stop = None if max_count is None else skip + max_count
        commits = [self._to_feed_commit(c) for c in itertools.islice(walker, skip, stop)]
        logger.debug("Read %d commits from %s (skip=%d)", len(commits), self.path, skip)
        return commits

    def _to_feed_commit(self, commit: pygit2.Commit) -> FeedCommit:
        """Convert a pygit2 commit into a feed item"""
        tz = timezone(timedelta(minutes=commit.commit_time_offset))
        date = datetime.fromtimestamp(commit.commit_time, tz)
        return FeedCommit(
            hash=str(commit.id),
            parent_hashes=tuple(str(parent_id) for parent_id in commit.parent_ids),
            author_name=commit.author.name,
            author_email=commit.author.email,
            date=date.isoformat(),
            message=commit.message.strip().split("\n")[0],
        )
