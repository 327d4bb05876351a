"""Connector curves derived from recorded lane transitions."""

from collections.abc import Iterable, Sequence

from gitlane.graph.lanes import LaneTransition
from gitlane.graph.types import Curve, CurveKind, Lane


class CurveResolver:
    """
    Projects lane transitions into renderer-facing curves.

    No layout decisions are made here. A merge-in curve takes the color of
    the lane that ends, a branch-out curve the color of the lane that opens,
    so a connector always matches the straight segment it belongs to.
    """

    def resolve(
        self, transitions: Iterable[LaneTransition], lanes: Sequence[Lane]
    ) -> tuple[Curve, ...]:
        return tuple(self._to_curve(transition, lanes) for transition in transitions)

    def _to_curve(self, transition: LaneTransition, lanes: Sequence[Lane]) -> Curve:
        lane = lanes[transition.lane_index]
        return Curve(
            kind=transition.kind,
            from_column=transition.from_column,
            from_y=transition.from_y,
            to_column=transition.to_column,
            to_y=transition.to_y,
            commit_hash=transition.commit_hash,
            color=lane.color,
        )

    @staticmethod
    def group_by_commit(curves: Iterable[Curve]) -> dict[str, list[Curve]]:
        """Curves keyed by the commit at whose row they were recorded."""
        grouped: dict[str, list[Curve]] = {}
        for curve in curves:
            grouped.setdefault(curve.commit_hash, []).append(curve)
        return grouped

    @staticmethod
    def of_kind(curves: Iterable[Curve], kind: CurveKind) -> list[Curve]:
        return [curve for curve in curves if curve.kind is kind]
