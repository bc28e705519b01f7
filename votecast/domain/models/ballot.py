"""Anonymous ballot domain model.

A Ballot is the stored record of one voter's choice(s) for one election.
It carries NO voter reference of any kind: the only identifiers on it are
its own opaque ID and the (public) election ID shared by every ballot of
that election.

Lifecycle:
    Created once at cast time, immutable thereafter, never updated.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from uuid import UUID

# The complete set of attributes a ballot may carry. Anonymity verification
# rejects any instance whose attributes differ from this set.
BALLOT_FIELDS: frozenset[str] = frozenset(
    {"ballot_id", "election_id", "preferences", "cast_at"}
)


@dataclass(frozen=True, eq=True)
class Ballot:
    """An anonymous ranked or unranked choice record.

    Attributes:
        ballot_id: Opaque, system-generated identifier.
        election_id: The election the ballot was cast in.
        preferences: Candidate IDs in preference order. Exactly one entry
            for plurality; one or more for ranked rules.
        cast_at: When the ballot was cast (timezone-aware UTC).
    """

    ballot_id: UUID
    election_id: UUID
    preferences: tuple[UUID, ...]
    cast_at: datetime

    def __post_init__(self) -> None:
        """Normalise preferences to a tuple and validate the timestamp.

        Raises:
            TypeError: If an identifier is not a UUID.
            ValueError: If cast_at is timezone-naive.
        """
        if not isinstance(self.preferences, tuple):
            object.__setattr__(self, "preferences", tuple(self.preferences))
        if not isinstance(self.ballot_id, UUID):
            raise TypeError(
                f"ballot_id must be UUID, got {type(self.ballot_id).__name__}"
            )
        if not isinstance(self.election_id, UUID):
            raise TypeError(
                f"election_id must be UUID, got {type(self.election_id).__name__}"
            )
        if self.cast_at.tzinfo is None:
            raise ValueError("cast_at must be timezone-aware (UTC)")

    @property
    def first_preference(self) -> UUID | None:
        """The top-ranked candidate, or None for an empty ballot."""
        return self.preferences[0] if self.preferences else None

    @property
    def has_duplicate_preferences(self) -> bool:
        return len(set(self.preferences)) != len(self.preferences)

    def is_for(self, candidate_id: UUID) -> bool:
        """Check whether the ballot ranks ``candidate_id`` at all."""
        return candidate_id in self.preferences

    def preference_rank(self, candidate_id: UUID) -> int | None:
        """Get the 1-based rank of ``candidate_id``, or None if unranked."""
        try:
            return self.preferences.index(candidate_id) + 1
        except ValueError:
            return None

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Names of the declared dataclass fields."""
        return frozenset(f.name for f in fields(cls))

    def to_dict(self) -> dict[str, object]:
        """Serialize to a dictionary (no voter data exists to leak)."""
        return {
            "ballot_id": str(self.ballot_id),
            "election_id": str(self.election_id),
            "preferences": [str(p) for p in self.preferences],
            "cast_at": self.cast_at.isoformat(),
        }
