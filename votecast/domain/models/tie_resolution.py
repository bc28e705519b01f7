"""Tie resolution domain model.

Records, once per election, how an exact tie among the top vote-getters
was broken after the election closed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class TieResolutionKind(Enum):
    """How a tie was broken.

    Kinds:
        RANDOM: Uniform draw among the tied candidates.
        MANUAL: Administrator picked one of the tied candidates.
        RECALL: Election voided; no winner, rerun required.
    """

    RANDOM = "RANDOM"
    MANUAL = "MANUAL"
    RECALL = "RECALL"


@dataclass(frozen=True, eq=True)
class TieResolution:
    """One-per-election record of a broken tie.

    Attributes:
        resolution_id: Unique identifier.
        election_id: The resolved election (unique across resolutions).
        kind: How the tie was broken.
        winner_candidate_id: The winner; None for RECALL.
        resolved_by: Identity of the resolving administrator.
        resolved_at: When the resolution was recorded (UTC).
        notes: Optional free text.
    """

    resolution_id: UUID
    election_id: UUID
    kind: TieResolutionKind
    winner_candidate_id: UUID | None
    resolved_by: str
    resolved_at: datetime
    notes: str | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate winner presence against the resolution kind.

        Raises:
            ValueError: If RECALL names a winner or RANDOM/MANUAL lacks one.
        """
        if self.kind is TieResolutionKind.RECALL:
            if self.winner_candidate_id is not None:
                raise ValueError("RECALL resolutions must not name a winner")
        elif self.winner_candidate_id is None:
            raise ValueError(f"{self.kind.value} resolutions must name a winner")
        if self.resolved_at.tzinfo is None:
            raise ValueError("resolved_at must be timezone-aware (UTC)")

    def to_dict(self) -> dict[str, object]:
        return {
            "resolution_id": str(self.resolution_id),
            "election_id": str(self.election_id),
            "kind": self.kind.value,
            "winner_candidate_id": (
                str(self.winner_candidate_id)
                if self.winner_candidate_id is not None
                else None
            ),
            "resolved_by": self.resolved_by,
            "resolved_at": self.resolved_at.isoformat(),
            "notes": self.notes,
        }
