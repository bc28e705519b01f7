"""Election domain model.

Only the lifecycle of an election matters to the voting core: its counting
rule selects the tabulation strategy, its status gates casting and
tabulation, and its start/end timestamps define the voting window.

State Machine:
    DRAFT -> ACTIVE (activation; requires at least two candidates)
    DRAFT -> CLOSED (closing a never-activated election, empty results)
    ACTIVE -> CLOSED (manual or automatic closure)

CLOSED is terminal. Status never moves backwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import UUID

from votecast.domain.errors.election import InvalidStateTransitionError


class CountingRule(Enum):
    """Tabulation algorithm an election uses.

    Values are the persisted codes.

    Rules:
        PLURALITY: First past the post, one choice per ballot.
        INSTANT_RUNOFF: Alternative vote, ranked ballots, iterative elimination.
        STV: Simplified single-winner single transferable vote.
        PREFERENTIAL: Ranked ballots counted with the STV rule.
    """

    PLURALITY = "FPTP"
    INSTANT_RUNOFF = "AV"
    STV = "STV"
    PREFERENTIAL = "PREFERENTIAL"

    @property
    def is_ranked(self) -> bool:
        """True if ballots under this rule carry a ranked preference list."""
        return self is not CountingRule.PLURALITY

    @property
    def label(self) -> str:
        """Human-readable name of the rule."""
        return _RULE_LABELS[self][0]

    @property
    def description(self) -> str:
        """One-line description of how the rule picks a winner."""
        return _RULE_LABELS[self][1]


_RULE_LABELS: dict[CountingRule, tuple[str, str]] = {
    CountingRule.PLURALITY: (
        "First Past The Post",
        "Winner takes all - candidate with most votes wins",
    ),
    CountingRule.INSTANT_RUNOFF: (
        "Alternative Vote",
        "Ranked choice with instant runoff",
    ),
    CountingRule.STV: (
        "Single Transferable Vote",
        "Ranked preferences with quota and one transfer round",
    ),
    CountingRule.PREFERENTIAL: (
        "Preferential Voting",
        "Voters rank candidates in order of preference",
    ),
}


class ElectionStatus(Enum):
    """Lifecycle status of an election.

    States:
        DRAFT: Being set up; candidates may change.
        ACTIVE: Accepting votes within the voting window.
        CLOSED: Voting ended; results available (terminal).
    """

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"

    def is_terminal(self) -> bool:
        """Check if no further transition is permitted from this status."""
        return not STATUS_TRANSITION_MATRIX[self]

    def valid_transitions(self) -> frozenset[ElectionStatus]:
        """Get the statuses this status may transition to."""
        return STATUS_TRANSITION_MATRIX[self]


STATUS_TRANSITION_MATRIX: dict[ElectionStatus, frozenset[ElectionStatus]] = {
    ElectionStatus.DRAFT: frozenset({ElectionStatus.ACTIVE, ElectionStatus.CLOSED}),
    ElectionStatus.ACTIVE: frozenset({ElectionStatus.CLOSED}),
    ElectionStatus.CLOSED: frozenset(),
}


@dataclass(frozen=True, eq=True)
class Election:
    """An election as seen by the voting core.

    Attributes:
        election_id: Unique identifier.
        name: Display name.
        counting_rule: Tabulation algorithm.
        start_date: Start of the voting window (timezone-aware, inclusive).
        end_date: End of the voting window (timezone-aware, inclusive).
        status: Current lifecycle status.
        description: Free text, opaque to the core.
    """

    election_id: UUID
    name: str
    counting_rule: CountingRule
    start_date: datetime
    end_date: datetime
    status: ElectionStatus = field(default=ElectionStatus.DRAFT)
    description: str = field(default="")

    def __post_init__(self) -> None:
        """Validate election fields.

        Raises:
            ValueError: If a timestamp is naive or the window is inverted.
        """
        if self.start_date.tzinfo is None or self.end_date.tzinfo is None:
            raise ValueError("start_date and end_date must be timezone-aware")
        if self.end_date < self.start_date:
            raise ValueError("end_date must not precede start_date")

    def is_within_voting_window(self, moment: datetime) -> bool:
        """Check whether ``moment`` lies within [start_date, end_date]."""
        return self.start_date <= moment <= self.end_date

    def can_transition_to(self, new_status: ElectionStatus) -> bool:
        """Check whether the transition matrix allows ``new_status``."""
        return new_status in self.status.valid_transitions()

    def with_status(self, new_status: ElectionStatus) -> Election:
        """Create a copy of this election in ``new_status``.

        Since Election is frozen, returns a new instance.

        Args:
            new_status: The target status.

        Returns:
            New Election with the updated status.

        Raises:
            InvalidStateTransitionError: If the transition is not allowed.
        """
        if not self.can_transition_to(new_status):
            raise InvalidStateTransitionError(
                election_id=self.election_id,
                from_status=self.status,
                to_status=new_status,
                allowed_transitions=list(self.status.valid_transitions()),
            )
        return replace(self, status=new_status)

    def to_dict(self) -> dict[str, object]:
        """Serialize to a dictionary suitable for event payloads."""
        return {
            "election_id": str(self.election_id),
            "name": self.name,
            "counting_rule": self.counting_rule.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "status": self.status.value,
        }
