"""
Lane allocation - assigns a column and color to every commit.

The allocator makes a single greedy pass over the feed (newest first).
Each open lane waits for one commit hash; when that commit shows up the
lane claims it and moves on to wait for the commit's first parent. Extra
parents of merge commits open new lanes, and several lanes waiting for the
same commit collapse into the leftmost one.

Everything the pass needs to continue is captured in LaneState, so a later
page of older commits can pick up exactly where the previous pass stopped.
"""

import dataclasses
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from gitlane.graph.types import (
    OPEN,
    ClosedEnd,
    CurveKind,
    FeedCommit,
    Lane,
    LayoutOptions,
    get_lane_color,
)


@dataclass(frozen=True)
class ActiveLane:
    """An open lane as seen by the allocator between two commits."""

    index: int
    column: int
    color: str
    awaited_hash: str
    last_y: int  # row of the last commit the lane claimed (or its opening row)
    last_refs: tuple[str, ...] = ()


@dataclass(frozen=True)
class LaneState:
    """Allocator state at the boundary of the loaded history."""

    lanes: tuple[Lane, ...] = ()
    active: tuple[ActiveLane, ...] = ()  # sorted by column
    lanes_opened: int = 0
    next_row: int = 0

    @property
    def awaited_hashes(self) -> tuple[str, ...]:
        return tuple(lane.awaited_hash for lane in self.active)


EMPTY_LANE_STATE = LaneState()


@dataclass(frozen=True)
class Placement:
    """Column and color assigned to one commit."""

    hash: str
    y: int
    x: int
    color: str
    lane_index: int


@dataclass(frozen=True)
class LaneTransition:
    """
    A lane opening or terminating at a commit's row.

    For MERGE_IN, lane_index is the terminated lane and the transition runs
    from its column at its last active row into the continuing column.
    For BRANCH_OUT, lane_index is the newly opened lane and the transition
    runs from the merge commit into the new lane's column.
    """

    kind: CurveKind
    commit_hash: str
    lane_index: int
    from_column: int
    from_y: int
    to_column: int
    to_y: int


@dataclass(frozen=True)
class Allocation:
    """Result of one allocator pass."""

    placements: tuple[Placement, ...]
    transitions: tuple[LaneTransition, ...]
    state: LaneState


class LaneAllocator:
    """Greedy single-pass column assignment."""

    def __init__(self, options: LayoutOptions | None = None) -> None:
        self.options = options or LayoutOptions()

    def allocate(
        self,
        commits: Sequence[FeedCommit],
        refs_by_hash: Mapping[str, tuple[str, ...]] | None = None,
        seed: LaneState = EMPTY_LANE_STATE,
    ) -> Allocation:
        """
        Assign lanes to commits that follow the seeded boundary.

        Args:
            commits: Commits in feed order, continuing at row seed.next_row
            refs_by_hash: Branch ref names per commit hash
            seed: State left behind by the pass over the preceding commits

        Returns:
            Placements and transitions for the given commits only, plus the
            full lane list and the state at the new boundary.
        """
        refs_by_hash = refs_by_hash or {}
        lanes: list[Lane] = list(seed.lanes)
        # column -> lane currently holding it
        active: dict[int, ActiveLane] = {lane.column: lane for lane in seed.active}
        lanes_opened = seed.lanes_opened
        placements: list[Placement] = []
        transitions: list[LaneTransition] = []

        def open_lane(row: int, awaited_hash: str) -> ActiveLane:
            nonlocal lanes_opened
            column = 0
            while column in active:
                column += 1
            color = get_lane_color(lanes_opened, self.options.palette)
            lane = ActiveLane(
                index=lanes_opened,
                column=column,
                color=color,
                awaited_hash=awaited_hash,
                last_y=row,
            )
            lanes.append(
                Lane(index=lanes_opened, column=column, start_y=row, end=OPEN, color=color)
            )
            active[column] = lane
            lanes_opened += 1
            return lane

        def close_lane(lane: ActiveLane, row: int) -> None:
            del active[lane.column]
            lanes[lane.index] = dataclasses.replace(lanes[lane.index], end=ClosedEnd(row))

        for offset, commit in enumerate(commits):
            row = seed.next_row + offset
            arrivals = [active[c] for c in sorted(active) if active[c].awaited_hash == commit.hash]

            if arrivals:
                continuing = min(arrivals, key=self._continuation_key)
                for lane in arrivals:
                    if lane is continuing:
                        continue
                    close_lane(lane, row)
                    transitions.append(
                        LaneTransition(
                            kind=CurveKind.MERGE_IN,
                            commit_hash=commit.hash,
                            lane_index=lane.index,
                            from_column=lane.column,
                            from_y=lane.last_y,
                            to_column=continuing.column,
                            to_y=row,
                        )
                    )
            else:
                # Branch head (or top of history) with no child in the window
                continuing = open_lane(row, commit.hash)

            refs = refs_by_hash.get(commit.hash, ())
            placements.append(
                Placement(
                    hash=commit.hash,
                    y=row,
                    x=continuing.column,
                    color=continuing.color,
                    lane_index=continuing.index,
                )
            )

            if commit.parent_hashes:
                active[continuing.column] = dataclasses.replace(
                    continuing,
                    awaited_hash=commit.parent_hashes[0],
                    last_y=row,
                    last_refs=refs or continuing.last_refs,
                )
            else:
                close_lane(continuing, row)

            for parent_hash in commit.parent_hashes[1:]:
                branch = open_lane(row, parent_hash)
                transitions.append(
                    LaneTransition(
                        kind=CurveKind.BRANCH_OUT,
                        commit_hash=commit.hash,
                        lane_index=branch.index,
                        from_column=continuing.column,
                        from_y=row,
                        to_column=branch.column,
                        to_y=row,
                    )
                )

        state = LaneState(
            lanes=tuple(lanes),
            active=tuple(active[c] for c in sorted(active)),
            lanes_opened=lanes_opened,
            next_row=seed.next_row + len(commits),
        )
        return Allocation(placements=tuple(placements), transitions=tuple(transitions), state=state)

    def _continuation_key(self, lane: ActiveLane) -> tuple[bool, int]:
        """Sort key choosing which arriving lane carries on through the commit."""
        current = self.options.current_branch
        if self.options.prefer_current_branch and current:
            return (current not in lane.last_refs, lane.column)
        return (False, lane.column)
