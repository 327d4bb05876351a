"""Tests for incremental layout of paged history."""

import pytest

from gitlane.graph.indexer import DuplicateCommitError
from gitlane.graph.layout import compute_layout, empty_layout
from gitlane.graph.pagination import PaginationMerger, extend_layout
from gitlane.graph.types import OPEN, ClosedEnd, FeedCommit, LayoutOptions


def commit(commit_hash: str, *parents: str) -> FeedCommit:
    return FeedCommit(hash=commit_hash, parent_hashes=parents)


class TestExtend:
    """Appending pages equals laying out the whole feed."""

    def test_open_lane_closes_on_next_page(self):
        """A lane left open by the first page closes when its parent arrives."""
        first = compute_layout([commit("c", "b"), commit("b", "a")])
        assert first.lanes[0].end == OPEN

        extended = extend_layout(first, [commit("a", "r"), commit("r")])
        full = compute_layout([commit("c", "b"), commit("b", "a"), commit("a", "r"), commit("r")])

        assert extended == full
        assert extended.lanes[0].end == ClosedEnd(3)
        assert first.lanes[0].end == OPEN  # earlier layout untouched

    def test_every_split_point(self, make_feed, make_refs):
        """For random histories every prefix/suffix split matches a full recompute."""
        for seed in range(12):
            feed = make_feed(seed, size=30)
            refs = make_refs(seed, feed)
            full = compute_layout(feed, refs)

            for split in range(len(feed) + 1):
                prefix = compute_layout(feed[:split], refs)
                extended = extend_layout(prefix, feed[split:])

                assert extended.nodes == full.nodes, (seed, split)
                assert extended.lanes == full.lanes, (seed, split)
                assert extended.curves == full.curves, (seed, split)
                assert extended == full, (seed, split)

    def test_many_small_pages(self, make_feed):
        """Paging three commits at a time matches a full recompute."""
        feed = make_feed(99, size=50)
        layout = empty_layout()
        for start in range(0, len(feed), 3):
            layout = extend_layout(layout, feed[start : start + 3])

        assert layout == compute_layout(feed)

    def test_current_branch_preference_across_pages(self, make_feed, make_refs):
        """Continuation preference state survives the page boundary."""
        feed = make_feed(7, size=40)
        refs = make_refs(7, feed, count=6)
        options = LayoutOptions(current_branch="branch-1", prefer_current_branch=True)
        full = compute_layout(feed, refs, options)

        for split in (1, 10, 25, 39):
            prefix = compute_layout(feed[:split], refs, options)
            assert PaginationMerger(options).extend(prefix, feed[split:]) == full

    def test_empty_page(self):
        """An empty page leaves the layout as it was."""
        layout = compute_layout([commit("c", "b"), commit("b", "a")])

        assert extend_layout(layout, []) == layout

    def test_from_empty_layout(self):
        """Extending the empty layout is a full layout."""
        feed = [commit("m", "a", "b"), commit("b", "r"), commit("a", "r"), commit("r")]

        assert extend_layout(empty_layout(), feed) == compute_layout(feed)

    def test_duplicate_across_pages(self):
        """A page repeating a loaded commit is rejected."""
        layout = compute_layout([commit("c", "b"), commit("b", "a")])

        with pytest.raises(DuplicateCommitError):
            extend_layout(layout, [commit("b", "a")])


class TestRecomputeFallback:
    """Cases where already placed commits would change."""

    def test_short_ref_becomes_ambiguous(self):
        """A ref that stops being unique drops from the earlier page too."""
        first_page = [commit("abc1000", "abc1999")]
        second_page = [commit("abc1999")]
        refs = {"topic": "abc1"}

        prefix = compute_layout(first_page, refs)
        assert prefix.node("abc1000").refs == ("topic",)

        extended = extend_layout(prefix, second_page)

        assert extended == compute_layout(first_page + second_page, refs)
        assert extended.node("abc1000").refs == ()
        assert [r.ref_name for r in extended.unresolved_refs] == ["topic"]

    def test_changed_ref_table(self):
        """A new ref table on the next page is applied everywhere."""
        feed = [commit("c", "b"), commit("b", "a"), commit("a")]
        prefix = compute_layout(feed[:2], {"main": "c"})

        extended = extend_layout(prefix, feed[2:], {"main": "b"})

        assert extended == compute_layout(feed, {"main": "b"})
        assert extended.node("b").refs == ("main",)

    def test_different_options(self):
        """A merger with other options recomputes with its own options."""
        feed = [commit("c", "b"), commit("b", "a"), commit("a")]
        options = LayoutOptions(palette=("red",))
        prefix = compute_layout(feed[:1])

        extended = PaginationMerger(options).extend(prefix, feed[1:])

        assert extended == compute_layout(feed, options=options)
        assert {n.color for n in extended.nodes} == {"red"}


class TestIncrementalPath:
    """Stable refs continue from saved state instead of recomputing."""

    @staticmethod
    def forbid_recompute(monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("full recompute was not expected")

        monkeypatch.setattr("gitlane.graph.pagination.compute_layout", fail)

    def test_seeded_extend_without_recompute(self, monkeypatch, make_feed):
        """Every split of a history with full-hash refs takes the seeded path."""
        feed = make_feed(11, size=30)
        refs = {name: feed[i * 7].hash for i, name in enumerate(["main", "topic", "release"])}
        full = compute_layout(feed, refs)
        prefixes = [compute_layout(feed[:split], refs) for split in range(len(feed) + 1)]
        self.forbid_recompute(monkeypatch)

        for split, prefix in enumerate(prefixes):
            assert extend_layout(prefix, feed[split:]) == full, split

    def test_placed_nodes_carried_over(self, monkeypatch):
        """Nodes from the earlier page are reused as they are."""
        prefix = compute_layout([commit("m", "a", "b"), commit("b", "r")], {"main": "m"})
        self.forbid_recompute(monkeypatch)

        extended = extend_layout(prefix, [commit("a", "r"), commit("r")])

        assert all(extended.nodes[i] is node for i, node in enumerate(prefix.nodes))
        assert extended.curves[: len(prefix.curves)] == prefix.curves

    def test_ambiguous_ref_triggers_recompute(self, monkeypatch):
        """A ref that becomes ambiguous goes through a full recompute."""
        calls = []
        real_compute = compute_layout

        def recording(*args, **kwargs):
            calls.append(args)
            return real_compute(*args, **kwargs)

        prefix = compute_layout([commit("abc1000", "abc1999")], {"topic": "abc1"})
        monkeypatch.setattr("gitlane.graph.pagination.compute_layout", recording)

        extend_layout(prefix, [commit("abc1999")])

        assert len(calls) == 1


class TestLayoutValue:
    """Layouts behave as immutable values."""

    def test_equal_layouts_hash_equal(self):
        """Layouts can be hashed, and equal layouts hash alike."""
        feed = [commit("m", "a", "b"), commit("b", "r"), commit("a", "r"), commit("r")]
        prefix = compute_layout(feed[:2], {"main": "m"})

        extended = extend_layout(prefix, feed[2:])
        full = compute_layout(feed, {"main": "m"})

        assert hash(extended) == hash(full)
        assert len({extended, full}) == 1
