"""Vote casting and tabulation errors.

Every error in this module is a recoverable precondition violation:
it is returned to the caller as the proximate cause, surfaced to the
end user, and never retried automatically.

Errors raised by ``VotingService.cast_vote`` (in precondition order):
1. VoterNotApprovedError
2. ElectionNotFoundError
3. ElectionNotActiveError
4. OutsideVotingWindowError
5. AlreadyVotedError
6. InvalidCandidateError
7. InvalidBallotShapeError

Errors raised by ``VotingService.calculate_results``:
- ElectionNotFoundError
- ElectionNotClosedError
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from votecast.domain.exceptions import VotecastError

if TYPE_CHECKING:
    from votecast.domain.models.election import ElectionStatus
    from votecast.domain.models.voter import RegistrationStatus


class VotingError(VotecastError):
    """Base error for vote casting and tabulation preconditions."""

    problem_type: str = "urn:votecast:voting:error"
    title: str = "Voting Error"
    status: int = 400

    def to_problem_dict(self) -> dict[str, Any]:
        """Serialize to RFC 7807 problem details.

        Returns:
            Dictionary with type, title, status and detail.
        """
        return {
            "type": self.problem_type,
            "title": self.title,
            "status": self.status,
            "detail": str(self),
        }


class VoterNotApprovedError(VotingError):
    """Raised when a voter whose registration is not APPROVED tries to vote.

    Attributes:
        voter_id: The voter attempting to vote.
        registration_status: The voter's current registration status.
    """

    problem_type = "urn:votecast:voting:not-approved"
    title = "Voter Not Approved"
    status = 403

    def __init__(
        self, voter_id: UUID, registration_status: RegistrationStatus
    ) -> None:
        self.voter_id = voter_id
        self.registration_status = registration_status
        super().__init__(
            f"Voter {voter_id} is not approved "
            f"(registration status: {registration_status.value})"
        )


class ElectionNotFoundError(VotingError):
    """Raised when the referenced election does not exist.

    Attributes:
        election_id: The election ID that was not found.
    """

    problem_type = "urn:votecast:election:not-found"
    title = "Election Not Found"
    status = 404

    def __init__(self, election_id: UUID) -> None:
        self.election_id = election_id
        super().__init__(f"Election {election_id} not found")


class ElectionNotActiveError(VotingError):
    """Raised when a vote is cast on an election that is not ACTIVE.

    Attributes:
        election_id: The election being voted in.
        election_status: The election's current status (DRAFT or CLOSED).
    """

    problem_type = "urn:votecast:election:not-active"
    title = "Election Not Active"
    status = 409

    def __init__(self, election_id: UUID, status: ElectionStatus) -> None:
        self.election_id = election_id
        self.election_status = status
        super().__init__(
            f"Election {election_id} is not active (status: {status.value})"
        )


class OutsideVotingWindowError(VotingError):
    """Raised when a vote is cast outside the election's [start, end] window.

    Attributes:
        election_id: The election being voted in.
        attempted_at: When the vote was attempted.
        start_date: Start of the voting window.
        end_date: End of the voting window.
    """

    problem_type = "urn:votecast:election:outside-window"
    title = "Outside Voting Window"
    status = 409

    def __init__(
        self,
        election_id: UUID,
        attempted_at: datetime,
        start_date: datetime,
        end_date: datetime,
    ) -> None:
        self.election_id = election_id
        self.attempted_at = attempted_at
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"Election {election_id} is not currently open for voting "
            f"(window {start_date.isoformat()} - {end_date.isoformat()}, "
            f"attempted at {attempted_at.isoformat()})"
        )


class AlreadyVotedError(VotingError):
    """Raised when a voter tries to vote twice in the same election.

    Raised both by the pre-persistence eligibility lookup and when the
    eligibility store's (voter_id, election_id) uniqueness constraint
    rejects a concurrent cast.

    Attributes:
        voter_id: The voter attempting a second vote.
        election_id: The election already voted in.
    """

    problem_type = "urn:votecast:voting:already-voted"
    title = "Already Voted"
    status = 409

    def __init__(self, voter_id: UUID, election_id: UUID) -> None:
        self.voter_id = voter_id
        self.election_id = election_id
        super().__init__(
            f"Voter {voter_id} has already voted in election {election_id}"
        )


class InvalidCandidateError(VotingError):
    """Raised when a submission references a candidate outside the election.

    Attributes:
        election_id: The election being voted in.
        candidate_id: The unknown candidate ID.
    """

    problem_type = "urn:votecast:voting:invalid-candidate"
    title = "Invalid Candidate"
    status = 422

    def __init__(self, election_id: UUID, candidate_id: UUID) -> None:
        self.election_id = election_id
        self.candidate_id = candidate_id
        super().__init__(
            f"Candidate {candidate_id} does not belong to election {election_id}"
        )


class InvalidBallotShapeError(VotingError):
    """Raised when a ballot does not fit the election's counting rule.

    Covers a missing selection (no single choice for plurality, no ranking
    for ranked rules) and a ballot rejected by the counting rule's
    validation (wrong length, duplicate preferences).

    Attributes:
        counting_rule: Value of the counting rule the ballot was built for.
        reason: Why the ballot was rejected.
    """

    problem_type = "urn:votecast:voting:invalid-ballot"
    title = "Invalid Ballot"
    status = 422

    def __init__(self, counting_rule: str, reason: str) -> None:
        self.counting_rule = counting_rule
        self.reason = reason
        super().__init__(f"Invalid {counting_rule} ballot: {reason}")


class ElectionNotClosedError(VotingError):
    """Raised when results are requested for an election that is not CLOSED.

    Attributes:
        election_id: The election whose results were requested.
        election_status: The election's current status.
    """

    problem_type = "urn:votecast:election:not-closed"
    title = "Election Not Closed"
    status = 409

    def __init__(self, election_id: UUID, status: ElectionStatus) -> None:
        self.election_id = election_id
        self.election_status = status
        super().__init__(
            f"Results only available for closed elections; election "
            f"{election_id} is {status.value}"
        )
