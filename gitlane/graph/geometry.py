"""Pixel geometry for a laid-out graph (no drawing)."""

from dataclasses import dataclass

from gitlane.constants import (
    COMMIT_DETAILS_HEIGHT,
    DEFAULT_BRANCH_COLORS,
    DEFAULT_BRANCH_SPACING,
    DEFAULT_COMMIT_SPACING,
    DEFAULT_NODE_RADIUS,
)
from gitlane.graph.layout import GraphLayout
from gitlane.graph.types import ClosedEnd, CommitNode, Lane


@dataclass(frozen=True)
class GraphStyle:
    """Spacing and palette used to turn rows/columns into pixels."""

    commit_spacing: int = DEFAULT_COMMIT_SPACING
    branch_spacing: int = DEFAULT_BRANCH_SPACING
    node_radius: int = DEFAULT_NODE_RADIUS
    branch_colors: tuple[str, ...] = DEFAULT_BRANCH_COLORS

    @property
    def margin(self) -> int:
        return self.node_radius * 4


def dot_position(node: CommitNode, style: GraphStyle) -> tuple[int, int]:
    """Center of a commit dot."""
    x = style.branch_spacing * node.x + style.margin
    y = style.commit_spacing * node.y + style.margin
    return x, y


def graph_size(layout: GraphLayout, style: GraphStyle) -> tuple[int, int]:
    """Width and height needed to show every lane and row."""
    if not layout.nodes:
        return 0, 0
    width = layout.num_columns * (style.branch_spacing + style.node_radius * 2) + 3
    last_row = layout.nodes[-1].y
    height = last_row * style.commit_spacing + style.node_radius * 8 + COMMIT_DETAILS_HEIGHT
    return width, height


def lane_extent(lane: Lane, layout: GraphLayout, style: GraphStyle) -> tuple[int, int, int]:
    """
    Vertical segment of a lane as (x, top, bottom).

    Open lanes run down to the last loaded row so every unfinished line
    reaches the bottom of the loaded history.
    """
    x = style.branch_spacing * lane.column + style.margin
    top = style.commit_spacing * lane.start_y + style.margin
    if isinstance(lane.end, ClosedEnd):
        end_row = lane.end.row
    else:
        end_row = layout.nodes[-1].y if layout.nodes else lane.start_y
    bottom = style.commit_spacing * end_row + style.margin
    return x, top, bottom
