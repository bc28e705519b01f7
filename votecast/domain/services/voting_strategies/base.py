"""Shared contract and helpers for counting strategies.

A strategy is a pure function over a ballot set and the election's
candidate list. It never touches a store, never reads the clock and
never mutates its inputs, so tabulating the same ballots twice always
yields identical results.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from uuid import UUID

from votecast.domain.models.ballot import Ballot
from votecast.domain.models.candidate import Candidate
from votecast.domain.models.vote_result import VoteResult


class VotingStrategy(ABC):
    """Tabulation algorithm for one counting rule."""

    @abstractmethod
    def calculate_results(
        self, ballots: Sequence[Ballot], candidates: Sequence[Candidate]
    ) -> list[VoteResult]:
        """Tabulate ballots into per-candidate results.

        Args:
            ballots: Every stored ballot of the election.
            candidates: Every candidate of the election.

        Returns:
            One result per candidate, sorted by votes descending. Candidates
            with equal votes keep their input order.
        """
        ...

    @abstractmethod
    def validate_ballot(self, ballot: Ballot, candidate_count: int) -> bool:
        """Check that a ballot has the shape this rule requires."""
        ...


def majority_threshold(total_ballots: int) -> int:
    """Droop quota for a single winner: floor(total / 2) + 1."""
    return total_ballots // 2 + 1


def first_active_preference(
    ballot: Ballot, active: frozenset[UUID] | set[UUID]
) -> UUID | None:
    """Get the highest-ranked preference still in ``active``.

    Recomputed from scratch every round instead of keeping a cursor on the
    ballot. Returns None for an empty or exhausted ballot.
    """
    for candidate_id in ballot.preferences:
        if candidate_id in active:
            return candidate_id
    return None


def tally_round(
    ballots: Iterable[Ballot], active: frozenset[UUID] | set[UUID]
) -> dict[UUID, int]:
    """Count each ballot once for its first active preference."""
    counts = {candidate_id: 0 for candidate_id in active}
    for ballot in ballots:
        choice = first_active_preference(ballot, active)
        if choice is not None:
            counts[choice] += 1
    return counts


def lowest_candidate(counts: Mapping[UUID, int]) -> UUID:
    """Pick the candidate to eliminate.

    Fewest votes first; equal tallies are broken by the lowest candidate id.
    """
    return min(counts, key=lambda candidate_id: (counts[candidate_id], candidate_id))


def top_of_tally(counts: Mapping[UUID, int]) -> tuple[UUID | None, frozenset[UUID]]:
    """Find the winner or the tied leaders of a tally.

    Returns:
        ``(winner, tied)``. A single leader with votes > 0 is the winner.
        Two or more leaders with votes > 0 are tied and there is no winner.
        A top tally of zero yields neither.
    """
    if not counts:
        return None, frozenset()
    top = max(counts.values())
    if top == 0:
        return None, frozenset()
    leaders = frozenset(c for c, votes in counts.items() if votes == top)
    if len(leaders) == 1:
        return next(iter(leaders)), frozenset()
    return None, leaders


def build_results(
    candidates: Sequence[Candidate],
    counts: Mapping[UUID, int],
    total_ballots: int,
    winner: UUID | None = None,
    tied: frozenset[UUID] = frozenset(),
) -> list[VoteResult]:
    """Turn a final tally into sorted VoteResult lines.

    Candidates missing from ``counts`` (eliminated) report zero votes.
    """
    results = []
    for candidate in candidates:
        votes = counts.get(candidate.candidate_id, 0)
        percentage = (votes / total_ballots) * 100 if total_ballots > 0 else 0.0
        results.append(
            VoteResult(
                candidate_id=candidate.candidate_id,
                candidate_name=candidate.name,
                votes=votes,
                percentage=percentage,
                is_winner=candidate.candidate_id == winner,
                is_tied=candidate.candidate_id in tied,
            )
        )
    # sorted() is stable, so equal tallies keep candidate order
    return sorted(results, key=lambda result: result.votes, reverse=True)


def is_ranked_shape(ballot: Ballot, candidate_count: int) -> bool:
    """Ranked rules: one to ``candidate_count`` preferences, no duplicates."""
    if not ballot.preferences:
        return False
    if len(ballot.preferences) > candidate_count:
        return False
    return not ballot.has_duplicate_preferences
