"""Computed tabulation output.

Results are never persisted: they are recomputed from the stored ballots
on every request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True, eq=True)
class VoteResult:
    """Per-candidate tally line.

    Attributes:
        candidate_id: The candidate.
        candidate_name: Display name, copied for reporting.
        votes: Final-round vote count.
        percentage: votes / total ballots * 100 (0.0 when no ballots).
        is_winner: Whether the candidate won outright.
        is_tied: Whether the candidate shares the top tally with others.
    """

    candidate_id: UUID
    candidate_name: str
    votes: int
    percentage: float
    is_winner: bool = field(default=False)
    is_tied: bool = field(default=False)

    def to_dict(self) -> dict[str, object]:
        return {
            "candidate_id": str(self.candidate_id),
            "candidate_name": self.candidate_name,
            "votes": self.votes,
            "percentage": self.percentage,
            "is_winner": self.is_winner,
            "is_tied": self.is_tied,
        }


@dataclass(frozen=True, eq=True)
class ElectionOutcome:
    """Reporting summary of a closed election.

    Attributes:
        election_id: The election.
        results: Ordered tally lines.
        winner_candidate_id: The clear or tie-resolved winner, if any.
        has_tie: True while a flagged tie remains unresolved.
        resolution_kind: Value of the recorded tie resolution kind, if any.
    """

    election_id: UUID
    results: tuple[VoteResult, ...]
    winner_candidate_id: UUID | None = field(default=None)
    has_tie: bool = field(default=False)
    resolution_kind: str | None = field(default=None)
