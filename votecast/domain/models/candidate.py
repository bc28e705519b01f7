"""Candidate domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True, eq=True)
class Candidate:
    """A candidate standing in exactly one election.

    Name, party and biography are opaque to the voting core; only the
    identifier participates in casting and tabulation.

    Attributes:
        candidate_id: Unique identifier, scoped to one election.
        election_id: The election the candidate stands in.
        name: Display name.
        party: Party label.
        biography: Free text.
    """

    candidate_id: UUID
    election_id: UUID
    name: str
    party: str = field(default="")
    biography: str = field(default="")
