"""Shared fixtures for graph layout tests."""

import hashlib
import random
from collections.abc import Callable

import pytest

from gitlane.graph.types import FeedCommit


def random_feed(
    seed: int,
    size: int = 40,
    merge_rate: float = 0.25,
    root_rate: float = 0.05,
    dangling_rate: float = 0.03,
) -> list[FeedCommit]:
    """
    Build a random history, newest first, with children listed before parents.

    Parents are picked among recent commits so branches stay short and
    interleave, which exercises lane recycling and merges.
    """
    rng = random.Random(seed)
    oldest_first: list[FeedCommit] = []

    for i in range(size):
        commit_hash = hashlib.sha1(f"{seed}-{i}".encode()).hexdigest()
        recent = [c.hash for c in oldest_first[-8:]]
        parents: list[str] = []
        if recent and rng.random() >= root_rate:
            count = 2 if len(recent) > 1 and rng.random() < merge_rate else 1
            if count == 2 and len(recent) > 2 and rng.random() < 0.1:
                count = 3
            parents = rng.sample(recent, count)
        if rng.random() < dangling_rate:
            parents.append(hashlib.sha1(f"missing-{seed}-{i}".encode()).hexdigest())
        oldest_first.append(
            FeedCommit(hash=commit_hash, parent_hashes=tuple(parents), message=f"commit {i}")
        )

    return list(reversed(oldest_first))


def random_refs(seed: int, feed: list[FeedCommit], count: int = 4) -> dict[str, str]:
    """Pick a few commits as branch heads, some given as abbreviated hashes."""
    rng = random.Random(seed)
    refs: dict[str, str] = {}
    for i, commit in enumerate(rng.sample(feed, min(count, len(feed)))):
        refs[f"branch-{i}"] = commit.hash[:7] if i % 2 else commit.hash
    return refs


@pytest.fixture
def make_feed() -> Callable[..., list[FeedCommit]]:
    return random_feed


@pytest.fixture
def make_refs() -> Callable[..., dict[str, str]]:
    return random_refs
