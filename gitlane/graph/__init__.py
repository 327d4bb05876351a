"""Commit graph layout engine."""

from gitlane.graph.indexer import CommitIndex, DuplicateCommitError, index_commits
from gitlane.graph.lanes import LaneAllocator, LaneState
from gitlane.graph.layout import GraphLayout, compute_layout, empty_layout
from gitlane.graph.pagination import PaginationMerger, extend_layout
from gitlane.graph.refs import RefResolution, RefStatus, resolve_branch_refs
from gitlane.graph.types import (
    OPEN,
    ClosedEnd,
    CommitNode,
    Curve,
    CurveKind,
    FeedCommit,
    Lane,
    LayoutOptions,
    OpenEnd,
)

__all__ = [
    "OPEN",
    "ClosedEnd",
    "CommitIndex",
    "CommitNode",
    "Curve",
    "CurveKind",
    "DuplicateCommitError",
    "FeedCommit",
    "GraphLayout",
    "Lane",
    "LaneAllocator",
    "LaneState",
    "LayoutOptions",
    "OpenEnd",
    "PaginationMerger",
    "RefResolution",
    "RefStatus",
    "compute_layout",
    "empty_layout",
    "extend_layout",
    "index_commits",
    "resolve_branch_refs",
]
