"""
CommitHistory - the loaded commit window of one repository context.

A context is a repository path plus the checked-out branch. The history
owns exactly one accumulated feed and layout for that context. Switching
context throws everything away; pages fetched for an older context or
generation are discarded instead of merged, so a slow fetch can never leak
commits of one repository into another.
"""

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol

from gitlane.constants import DEFAULT_PAGE_SIZE
from gitlane.graph.layout import GraphLayout, empty_layout
from gitlane.graph.pagination import PaginationMerger
from gitlane.graph.types import FeedCommit, LayoutOptions

logger = logging.getLogger(__name__)


class CommitProvider(Protocol):
    """Source of history pages, e.g. GitRepository."""

    def get_commits(self, skip: int = 0, max_count: int | None = None) -> list[FeedCommit]: ...

    def get_branch_refs(self) -> dict[str, str]: ...

    def get_checked_out_branch(self) -> str | None: ...


@dataclass(frozen=True)
class HistoryContext:
    """Repository and branch the loaded history belongs to."""

    repo_path: str
    branch: str | None = None


@dataclass(frozen=True)
class FetchTicket:
    """Identifies the state a page request was issued against."""

    context: HistoryContext
    generation: int
    skip: int
    max_count: int


class CommitHistory:
    """Accumulated commits, pagination state and graph layout."""

    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        options: LayoutOptions | None = None,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"Page size must be positive, got {page_size}")
        self.page_size = page_size
        # current_branch is filled in per context by open()
        self._options = options or LayoutOptions()
        self._context: HistoryContext | None = None
        self._generation = 0
        self._layout = empty_layout()
        self.has_more = False
        self.loading = False

    @property
    def context(self) -> HistoryContext | None:
        return self._context

    @property
    def layout(self) -> GraphLayout:
        return self._layout

    @property
    def skip(self) -> int:
        """Number of commits loaded so far, the offset of the next page."""
        return len(self._layout)

    def open(
        self, context: HistoryContext, branch_refs: Mapping[str, str | None] | None = None
    ) -> None:
        """Switch to a repository context, discarding all loaded state."""
        self._context = context
        self._generation += 1
        options = dataclasses.replace(self._options, current_branch=context.branch)
        self._layout = empty_layout(options, branch_refs)
        self.has_more = True
        self.loading = False
        logger.debug("Opened history for %s (generation %d)", context.repo_path, self._generation)

    def open_repository(self, provider: CommitProvider, repo_path: str) -> bool:
        """
        Open the provider's repository at its checked-out branch.

        Nothing is discarded when the context is unchanged.

        Returns:
            True if the loaded history was reset.
        """
        context = HistoryContext(repo_path=repo_path, branch=provider.get_checked_out_branch())
        if context == self._context:
            return False
        self.open(context, provider.get_branch_refs())
        return True

    def begin_fetch(self, max_count: int | None = None) -> FetchTicket:
        """Start fetching the next page (page_size commits unless max_count is given)."""
        if self._context is None:
            raise ValueError("No repository context is open")
        self.loading = True
        return FetchTicket(
            context=self._context,
            generation=self._generation,
            skip=self.skip,
            max_count=max_count or self.page_size,
        )

    def is_current(self, ticket: FetchTicket) -> bool:
        return (
            ticket.context == self._context
            and ticket.generation == self._generation
            and ticket.skip == self.skip
        )

    def apply_page(
        self,
        ticket: FetchTicket,
        commits: Sequence[FeedCommit],
        branch_refs: Mapping[str, str | None] | None = None,
    ) -> bool:
        """
        Merge a fetched page into the layout.

        Returns:
            False if the page belonged to a stale request and was discarded.
        """
        if not self.is_current(ticket):
            logger.debug(
                "Discarding stale page of %d commits for %s", len(commits), ticket.context.repo_path
            )
            return False

        self.loading = False
        if not commits:
            self.has_more = False
            return True

        merger = PaginationMerger(self._layout.options)
        self._layout = merger.extend(self._layout, commits, branch_refs)
        return True

    def load_more(self, provider: CommitProvider, max_count: int | None = None) -> bool:
        """Fetch and apply the next page synchronously."""
        ticket = self.begin_fetch(max_count)
        commits = provider.get_commits(ticket.skip, ticket.max_count)
        return self.apply_page(ticket, commits, provider.get_branch_refs())

    def load_until(self, provider: CommitProvider, limit: int) -> GraphLayout:
        """Keep loading pages until limit commits are loaded or history ends."""
        while self.has_more and self.skip < limit:
            self.load_more(provider, min(self.page_size, limit - self.skip))
        return self._layout
