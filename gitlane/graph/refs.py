"""
Branch ref resolution against the loaded window of commits.

Branch heads may be reported as full or abbreviated hashes. Every head is
resolved through resolve_hash(), which never guesses: an abbreviation that
matches more than one loaded commit equally well is reported as ambiguous
and the ref is left unplotted.
"""

import bisect
import itertools
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class RefStatus(Enum):
    """Outcome of resolving a ref head against loaded commits"""

    RESOLVED = "resolved"
    MISSING = "missing"  # not loaded (yet), or no head at all
    AMBIGUOUS = "ambiguous"  # several loaded commits match equally well


@dataclass(frozen=True)
class RefResolution:
    """Resolution result for one branch ref."""

    ref_name: str
    head_hash: str | None
    status: RefStatus
    commit_hash: str | None = None
    candidates: tuple[str, ...] = ()

    @property
    def is_resolved(self) -> bool:
        return self.status is RefStatus.RESOLVED


@dataclass(frozen=True)
class ResolvedRefs:
    """Ref names per plotted commit plus the refs that could not be plotted."""

    by_hash: dict[str, tuple[str, ...]] = field(default_factory=dict)
    unresolved: tuple[RefResolution, ...] = ()

    def refs_for(self, commit_hash: str) -> tuple[str, ...]:
        return self.by_hash.get(commit_hash, ())


class HashLookup:
    """Sorted view of loaded hashes supporting prefix queries."""

    def __init__(self, hashes: Iterable[str]) -> None:
        self._hashes = sorted(set(hashes))
        self._hash_set = set(self._hashes)

    def __contains__(self, commit_hash: object) -> bool:
        return commit_hash in self._hash_set

    def starting_with(self, prefix: str) -> list[str]:
        """All loaded hashes that start with prefix."""
        start = bisect.bisect_left(self._hashes, prefix)
        matches: list[str] = []
        for candidate in itertools.islice(self._hashes, start, None):
            if not candidate.startswith(prefix):
                break
            matches.append(candidate)
        return matches

    def prefixes_of(self, value: str) -> list[str]:
        """Loaded hashes that are themselves strict prefixes of value."""
        return [
            value[:length] for length in range(1, len(value)) if value[:length] in self._hash_set
        ]


def resolve_hash(
    head_hash: str | None, lookup: HashLookup
) -> tuple[RefStatus, str | None, tuple[str, ...]]:
    """
    Resolve a possibly abbreviated head hash against loaded commits.

    Rules:
    1. An exact match wins outright.
    2. Otherwise every loaded hash that extends the head, or that the head
       extends, is a candidate scored by the length of the common prefix.
    3. The single best-scoring candidate wins; a tie at the top is ambiguous.

    Returns:
        (status, commit_hash, candidates) tuple
    """
    if not head_hash:
        return RefStatus.MISSING, None, ()

    head = head_hash.strip()
    if not head:
        return RefStatus.MISSING, None, ()

    if head in lookup:
        return RefStatus.RESOLVED, head, (head,)

    # Longer loaded hashes share the whole head; shorter ones share themselves
    scored = [(len(head), h) for h in lookup.starting_with(head)]
    scored.extend((len(h), h) for h in lookup.prefixes_of(head))
    if not scored:
        return RefStatus.MISSING, None, ()

    best_score = max(score for score, _ in scored)
    best = tuple(sorted(h for score, h in scored if score == best_score))
    if len(best) > 1:
        return RefStatus.AMBIGUOUS, None, best
    return RefStatus.RESOLVED, best[0], best


def resolve_branch_refs(
    branch_refs: Mapping[str, str | None], loaded_hashes: Iterable[str]
) -> ResolvedRefs:
    """Map every resolvable ref to its loaded commit, keeping ref table order."""
    lookup = HashLookup(loaded_hashes)
    by_hash: dict[str, tuple[str, ...]] = {}
    unresolved: list[RefResolution] = []

    for ref_name, head_hash in branch_refs.items():
        status, commit_hash, candidates = resolve_hash(head_hash, lookup)
        if status is RefStatus.RESOLVED and commit_hash is not None:
            by_hash[commit_hash] = by_hash.get(commit_hash, ()) + (ref_name,)
            continue

        if status is RefStatus.AMBIGUOUS:
            logger.debug(
                "Ref %s (%s) is ambiguous between %d commits", ref_name, head_hash, len(candidates)
            )
        unresolved.append(
            RefResolution(
                ref_name=ref_name,
                head_hash=head_hash,
                status=status,
                candidates=candidates,
            )
        )

    return ResolvedRefs(by_hash=by_hash, unresolved=tuple(unresolved))
