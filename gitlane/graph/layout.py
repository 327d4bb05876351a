"""
Commit graph layout - the full pipeline from feed to lane diagram.

    feed + branch refs -> CommitIndex -> ResolvedRefs -> LaneAllocator
                       -> CurveResolver -> GraphLayout

GraphLayout is an immutable snapshot. It keeps the allocator state at the
bottom of the loaded window so PaginationMerger can grow it page by page.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from gitlane.graph.curves import CurveResolver
from gitlane.graph.indexer import CommitIndex, index_commits
from gitlane.graph.lanes import EMPTY_LANE_STATE, Allocation, LaneAllocator, LaneState
from gitlane.graph.refs import RefResolution, ResolvedRefs, resolve_branch_refs
from gitlane.graph.types import CommitNode, Curve, FeedCommit, Lane, LayoutOptions

BranchRefs = Mapping[str, str | None]


@dataclass(frozen=True)
class GraphLayout:
    """Positions, lanes and connectors for the loaded window of history."""

    nodes: tuple[CommitNode, ...] = ()
    lanes: tuple[Lane, ...] = ()
    curves: tuple[Curve, ...] = ()
    unresolved_refs: tuple[RefResolution, ...] = ()
    branch_refs: tuple[tuple[str, str | None], ...] = ()
    options: LayoutOptions = field(default_factory=LayoutOptions)
    index: CommitIndex = field(default_factory=CommitIndex, repr=False)
    state: LaneState = field(default=EMPTY_LANE_STATE, repr=False)

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, commit_hash: str) -> CommitNode | None:
        row = self.index.row_of(commit_hash)
        if row is None:
            return None
        return self.nodes[row]

    @property
    def num_columns(self) -> int:
        """Columns ever used, i.e. the width of the diagram in lanes."""
        if not self.lanes:
            return 0
        return max(lane.column for lane in self.lanes) + 1

    @property
    def open_lanes(self) -> tuple[Lane, ...]:
        return tuple(lane for lane in self.lanes if lane.is_open)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [
                {
                    "hash": node.hash,
                    "x": node.x,
                    "y": node.y,
                    "color": node.color,
                    "refs": list(node.refs),
                    "parents": list(node.parent_hashes),
                    "children": list(node.child_hashes),
                }
                for node in self.nodes
            ],
            "lanes": [
                {
                    "index": lane.index,
                    "column": lane.column,
                    "start": lane.start_y,
                    "end": None if lane.is_open else str(lane.end),
                    "color": lane.color,
                }
                for lane in self.lanes
            ],
            "curves": [
                {
                    "kind": curve.kind.value,
                    "from": [curve.from_column, curve.from_y],
                    "to": [curve.to_column, curve.to_y],
                    "commit": curve.commit_hash,
                    "color": curve.color,
                }
                for curve in self.curves
            ],
            "unresolved_refs": [
                {"name": ref.ref_name, "head": ref.head_hash, "status": ref.status.value}
                for ref in self.unresolved_refs
            ],
        }


def empty_layout(
    options: LayoutOptions | None = None, branch_refs: BranchRefs | None = None
) -> GraphLayout:
    """Layout of an empty window, the starting point for paging."""
    return GraphLayout(
        branch_refs=tuple((branch_refs or {}).items()),
        options=options or LayoutOptions(),
    )


def assemble_layout(
    index: CommitIndex,
    prior_nodes: Sequence[CommitNode],
    prior_curves: Sequence[Curve],
    allocation: Allocation,
    resolved: ResolvedRefs,
    branch_refs: BranchRefs,
    options: LayoutOptions,
) -> GraphLayout:
    """Combine an allocator pass with what was already laid out above it."""
    nodes: list[CommitNode] = []
    for node in prior_nodes:
        children = index.children_of(node.hash)
        if children != node.child_hashes:
            # Only a feed that lists a child after its parent gets here
            node = CommitNode(
                hash=node.hash,
                parent_hashes=node.parent_hashes,
                child_hashes=children,
                y=node.y,
                x=node.x,
                color=node.color,
                refs=node.refs,
                commit=node.commit,
            )
        nodes.append(node)

    for placement in allocation.placements:
        commit = index.commits[placement.y]
        nodes.append(
            CommitNode(
                hash=commit.hash,
                parent_hashes=commit.parent_hashes,
                child_hashes=index.children_of(commit.hash),
                y=placement.y,
                x=placement.x,
                color=placement.color,
                refs=resolved.refs_for(commit.hash),
                commit=commit,
            )
        )

    lanes = allocation.state.lanes
    curves = tuple(prior_curves) + CurveResolver().resolve(allocation.transitions, lanes)
    return GraphLayout(
        nodes=tuple(nodes),
        lanes=lanes,
        curves=curves,
        unresolved_refs=resolved.unresolved,
        branch_refs=tuple(branch_refs.items()),
        options=options,
        index=index,
        state=allocation.state,
    )


def compute_layout(
    commits: Sequence[FeedCommit],
    branch_refs: BranchRefs | None = None,
    options: LayoutOptions | None = None,
) -> GraphLayout:
    """
    Lay out a feed of commits from scratch.

    Args:
        commits: Commits newest first; parents may be missing from the feed
        branch_refs: Mapping of ref name to (possibly abbreviated) head hash
        options: Palette and continuation preferences

    Raises:
        DuplicateCommitError: if the feed contains a hash twice
    """
    options = options or LayoutOptions()
    branch_refs = dict(branch_refs or {})
    index = index_commits(commits)
    resolved = resolve_branch_refs(branch_refs, index.rows)
    allocation = LaneAllocator(options).allocate(index.commits, resolved.by_hash)
    return assemble_layout(index, (), (), allocation, resolved, branch_refs, options)
