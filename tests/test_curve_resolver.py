"""Tests for curve projection."""

from gitlane.graph.curves import CurveResolver
from gitlane.graph.lanes import LaneAllocator, LaneTransition
from gitlane.graph.types import ClosedEnd, Curve, CurveKind, FeedCommit, Lane


def commit(commit_hash: str, *parents: str) -> FeedCommit:
    return FeedCommit(hash=commit_hash, parent_hashes=parents)


class TestCurveResolver:
    """Curves mirror lane transitions one to one."""

    def test_projection_adds_lane_color(self):
        """Each curve takes the color of the lane it refers to."""
        lanes = (
            Lane(index=0, column=0, start_y=0, end=ClosedEnd(2), color="red"),
            Lane(index=1, column=1, start_y=1, end=ClosedEnd(2), color="blue"),
        )
        transition = LaneTransition(
            kind=CurveKind.MERGE_IN,
            commit_hash="a",
            lane_index=1,
            from_column=1,
            from_y=1,
            to_column=0,
            to_y=2,
        )

        assert CurveResolver().resolve([transition], lanes) == (
            Curve(CurveKind.MERGE_IN, 1, 1, 0, 2, commit_hash="a", color="blue"),
        )

    def test_one_curve_per_transition(self):
        """Resolving allocator output keeps count and order."""
        allocation = LaneAllocator().allocate(
            [commit("m", "a", "b"), commit("b", "r"), commit("a", "r"), commit("r")]
        )
        curves = CurveResolver().resolve(allocation.transitions, allocation.state.lanes)

        assert len(curves) == len(allocation.transitions)
        assert [c.kind for c in curves] == [t.kind for t in allocation.transitions]

    def test_group_by_commit(self):
        """Curves are grouped under the commit that recorded them."""
        allocation = LaneAllocator().allocate(
            [commit("m", "a", "b"), commit("b", "r"), commit("a", "r"), commit("r")]
        )
        curves = CurveResolver().resolve(allocation.transitions, allocation.state.lanes)
        grouped = CurveResolver.group_by_commit(curves)

        assert set(grouped) == {"m", "r"}
        assert [c.kind for c in grouped["m"]] == [CurveKind.BRANCH_OUT]
        assert [c.kind for c in grouped["r"]] == [CurveKind.MERGE_IN]
        assert CurveResolver.of_kind(curves, CurveKind.MERGE_IN) == grouped["r"]
