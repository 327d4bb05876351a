"""Types and constants for commit graph layout."""

from dataclasses import dataclass, field
from enum import Enum

from gitlane.constants import DEFAULT_BRANCH_COLORS


@dataclass(frozen=True)
class FeedCommit:
    """A commit as delivered by the history feed (newest first)."""

    hash: str
    parent_hashes: tuple[str, ...] = ()
    author_name: str = ""
    author_email: str = ""
    date: str = ""
    message: str = ""

    @property
    def is_merge(self) -> bool:
        return len(self.parent_hashes) > 1

    @property
    def is_root(self) -> bool:
        return not self.parent_hashes


@dataclass(frozen=True)
class CommitNode:
    """A commit with its layout position."""

    hash: str
    parent_hashes: tuple[str, ...]
    child_hashes: tuple[str, ...]
    y: int
    x: int
    color: str
    refs: tuple[str, ...] = ()
    commit: FeedCommit | None = field(default=None, repr=False)


@dataclass(frozen=True)
class OpenEnd:
    """Lane is still active at the edge of the loaded history."""

    def __str__(self) -> str:
        return "open"


@dataclass(frozen=True)
class ClosedEnd:
    """Lane ended at a concrete row."""

    row: int

    def __str__(self) -> str:
        return str(self.row)


LaneEnd = OpenEnd | ClosedEnd

OPEN = OpenEnd()


@dataclass(frozen=True)
class Lane:
    """
    A vertical track reserved for one continuous line of history.

    The lane occupies its column over the half-open row range
    [start_y, end.row), or from start_y downwards while the end is open.
    """

    index: int
    column: int
    start_y: int
    end: LaneEnd
    color: str

    @property
    def is_open(self) -> bool:
        return isinstance(self.end, OpenEnd)

    def overlaps(self, other: "Lane") -> bool:
        """Check whether two lanes claim the same column at some row."""
        if self.column != other.column:
            return False
        self_end = self.end.row if isinstance(self.end, ClosedEnd) else None
        other_end = other.end.row if isinstance(other.end, ClosedEnd) else None
        # Empty ranges (a lane closed on its own start row) hold nothing
        if self_end is not None and self_end <= self.start_y:
            return False
        if other_end is not None and other_end <= other.start_y:
            return False
        starts_before_other_ends = other_end is None or self.start_y < other_end
        other_starts_before_self_ends = self_end is None or other.start_y < self_end
        return starts_before_other_ends and other_starts_before_self_ends


class CurveKind(Enum):
    """Connector kinds between lanes"""

    MERGE_IN = "merge-in"  # terminated lane joins the continuing lane
    BRANCH_OUT = "branch-out"  # merge commit opens a lane for an extra parent


@dataclass(frozen=True)
class Curve:
    """Geometry-independent connector between two lane positions."""

    kind: CurveKind
    from_column: int
    from_y: int
    to_column: int
    to_y: int
    commit_hash: str = ""
    color: str = ""


@dataclass(frozen=True)
class LayoutOptions:
    """Inputs that influence lane allocation besides the feed itself."""

    palette: tuple[str, ...] = DEFAULT_BRANCH_COLORS
    current_branch: str | None = None
    prefer_current_branch: bool = False

    def __post_init__(self) -> None:
        if not self.palette:
            raise ValueError("Lane palette must contain at least one color")


def get_lane_color(lane_index: int, palette: tuple[str, ...] = DEFAULT_BRANCH_COLORS) -> str:
    """Get the color for the n-th lane ever opened."""
    return palette[lane_index % len(palette)]
