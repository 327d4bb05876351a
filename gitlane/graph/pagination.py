"""
Incremental layout for paged history.

Pages of older commits are appended below the loaded window. Instead of
laying out the whole accumulated feed again, the allocator is seeded with
the lanes still open at the old boundary and run over the new page only.
The result is identical to compute_layout() over the concatenated feed.
"""

import logging
from collections.abc import Sequence

from gitlane.graph.lanes import LaneAllocator
from gitlane.graph.layout import BranchRefs, GraphLayout, assemble_layout, compute_layout
from gitlane.graph.refs import ResolvedRefs, resolve_branch_refs
from gitlane.graph.types import FeedCommit, LayoutOptions

logger = logging.getLogger(__name__)


class PaginationMerger:
    """Grows a layout by appending strictly older commits."""

    def __init__(self, options: LayoutOptions | None = None) -> None:
        self.options = options or LayoutOptions()

    def extend(
        self,
        layout: GraphLayout,
        page: Sequence[FeedCommit],
        branch_refs: BranchRefs | None = None,
    ) -> GraphLayout:
        """
        Append a page of commits below an existing layout.

        Args:
            layout: Layout of the previously loaded window
            page: Older commits, newest first, continuing the feed
            branch_refs: Current ref table; defaults to the one the layout used

        Raises:
            DuplicateCommitError: if the page repeats an already loaded hash
        """
        if branch_refs is None:
            branch_refs = dict(layout.branch_refs)
        else:
            branch_refs = dict(branch_refs)

        index = layout.index.extend(page)
        resolved = resolve_branch_refs(branch_refs, index.rows)

        if not self._can_continue(layout, resolved):
            logger.debug("Recomputing layout for %d commits from scratch", len(index))
            return compute_layout(index.commits, branch_refs, self.options)

        allocation = LaneAllocator(self.options).allocate(page, resolved.by_hash, layout.state)
        logger.debug(
            "Appended %d commits at row %d (%d lanes open)",
            len(page),
            layout.state.next_row,
            len(allocation.state.active),
        )
        return assemble_layout(
            index,
            layout.nodes,
            layout.curves,
            allocation,
            resolved,
            branch_refs,
            self.options,
        )

    def _can_continue(self, layout: GraphLayout, resolved: ResolvedRefs) -> bool:
        """Check that nothing already laid out would change in a full recompute."""
        if layout.options != self.options:
            return False
        # Refs of placed commits steer lane continuation; they must be stable
        return all(node.refs == resolved.refs_for(node.hash) for node in layout.nodes)


def extend_layout(
    layout: GraphLayout,
    page: Sequence[FeedCommit],
    branch_refs: BranchRefs | None = None,
) -> GraphLayout:
    """Extend a layout with the options it was computed with."""
    return PaginationMerger(layout.options).extend(layout, page, branch_refs)

