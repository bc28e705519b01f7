"""Election lifecycle errors.

The election state machine only moves forward:

    DRAFT -> ACTIVE -> CLOSED
    DRAFT -> CLOSED

CLOSED is terminal. The candidate set is frozen once an election leaves
DRAFT.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from votecast.domain.exceptions import VotecastError

if TYPE_CHECKING:
    from votecast.domain.models.election import ElectionStatus


class ElectionLifecycleError(VotecastError):
    """Base error for election lifecycle and administration operations."""

    problem_type: str = "urn:votecast:election:lifecycle"
    title: str = "Election Lifecycle Error"
    status: int = 409

    def to_problem_dict(self) -> dict[str, Any]:
        """Serialize to RFC 7807 problem details."""
        return {
            "type": self.problem_type,
            "title": self.title,
            "status": self.status,
            "detail": str(self),
        }


class InsufficientCandidatesError(ElectionLifecycleError):
    """Raised when activating an election with too few candidates.

    Attributes:
        election_id: The election being activated.
        candidate_count: Number of candidates currently registered.
        required: Minimum number of candidates required.
    """

    problem_type = "urn:votecast:election:insufficient-candidates"
    title = "Insufficient Candidates"
    status = 422

    def __init__(self, election_id: UUID, candidate_count: int, required: int) -> None:
        self.election_id = election_id
        self.candidate_count = candidate_count
        self.required = required
        super().__init__(
            f"Election {election_id} must have at least {required} candidates "
            f"to be activated (has {candidate_count})"
        )


class InvalidStateTransitionError(ElectionLifecycleError):
    """Raised when a transition is not in the election transition matrix.

    Attributes:
        election_id: The election being transitioned.
        from_status: Current status of the election.
        to_status: Attempted target status.
        allowed_transitions: Valid target statuses from the current status.
    """

    problem_type = "urn:votecast:election:invalid-transition"
    title = "Invalid State Transition"

    def __init__(
        self,
        election_id: UUID,
        from_status: ElectionStatus,
        to_status: ElectionStatus,
        allowed_transitions: list[ElectionStatus] | None = None,
    ) -> None:
        self.election_id = election_id
        self.from_status = from_status
        self.to_status = to_status
        self.allowed_transitions = allowed_transitions or []

        allowed_str = (
            f" Valid transitions: {sorted(s.value for s in self.allowed_transitions)}"
            if self.allowed_transitions
            else ""
        )
        super().__init__(
            f"Invalid state transition for election {election_id}: "
            f"{from_status.value} -> {to_status.value}.{allowed_str}"
        )


class CandidateSetFrozenError(ElectionLifecycleError):
    """Raised when candidates are added or removed outside DRAFT.

    Attributes:
        election_id: The election whose candidates were modified.
        election_status: The election's current status.
    """

    problem_type = "urn:votecast:election:candidates-frozen"
    title = "Candidate Set Frozen"

    def __init__(self, election_id: UUID, election_status: ElectionStatus) -> None:
        self.election_id = election_id
        self.election_status = election_status
        super().__init__(
            f"Candidates of election {election_id} cannot change once it "
            f"leaves DRAFT (status: {election_status.value})"
        )


class CandidateNotFoundError(ElectionLifecycleError):
    """Raised when a candidate does not exist in the given election."""

    problem_type = "urn:votecast:election:candidate-not-found"
    title = "Candidate Not Found"
    status = 404

    def __init__(self, election_id: UUID, candidate_id: UUID) -> None:
        self.election_id = election_id
        self.candidate_id = candidate_id
        super().__init__(
            f"Candidate {candidate_id} not found in election {election_id}"
        )


class ElectionNotDraftError(ElectionLifecycleError):
    """Raised when deleting an election that has already been activated."""

    problem_type = "urn:votecast:election:not-draft"
    title = "Election Not Draft"

    def __init__(self, election_id: UUID, election_status: ElectionStatus) -> None:
        self.election_id = election_id
        self.election_status = election_status
        super().__init__(
            f"Only draft elections can be deleted; election {election_id} "
            f"is {election_status.value}"
        )


class InvalidElectionScheduleError(ElectionLifecycleError):
    """Raised when an election's voting window is malformed.

    Attributes:
        start_date: Requested start of voting.
        end_date: Requested end of voting.
        reason: Why the schedule was rejected.
    """

    problem_type = "urn:votecast:election:invalid-schedule"
    title = "Invalid Election Schedule"
    status = 422

    def __init__(self, start_date: datetime, end_date: datetime, reason: str) -> None:
        self.start_date = start_date
        self.end_date = end_date
        self.reason = reason
        super().__init__(f"Invalid election schedule: {reason}")
