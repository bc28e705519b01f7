"""Domain errors for votecast.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from VotecastError.

Categories:
- VotingError: recoverable precondition violations on cast/tabulate
- ElectionLifecycleError: lifecycle and administration failures
- TieResolutionError: tie resolution precondition failures
- DuplicateRecordError: store-level uniqueness conflicts (adapter boundary)
- InvariantViolationError: fatal programming errors
"""

from votecast.domain.errors.election import (
    CandidateNotFoundError,
    CandidateSetFrozenError,
    ElectionLifecycleError,
    ElectionNotDraftError,
    InsufficientCandidatesError,
    InvalidElectionScheduleError,
    InvalidStateTransitionError,
)
from votecast.domain.errors.invariant import (
    AnonymityViolationError,
    InvariantViolationError,
    UnknownCountingRuleError,
)
from votecast.domain.errors.persistence import DuplicateRecordError
from votecast.domain.errors.tie_resolution import (
    InvalidTieSelectionError,
    NoTieError,
    TieAlreadyResolvedError,
    TieResolutionError,
)
from votecast.domain.errors.voting import (
    AlreadyVotedError,
    ElectionNotActiveError,
    ElectionNotClosedError,
    ElectionNotFoundError,
    InvalidBallotShapeError,
    InvalidCandidateError,
    OutsideVotingWindowError,
    VoterNotApprovedError,
    VotingError,
)

__all__: list[str] = [
    "AlreadyVotedError",
    "AnonymityViolationError",
    "CandidateNotFoundError",
    "CandidateSetFrozenError",
    "DuplicateRecordError",
    "ElectionLifecycleError",
    "ElectionNotActiveError",
    "ElectionNotClosedError",
    "ElectionNotDraftError",
    "ElectionNotFoundError",
    "InsufficientCandidatesError",
    "InvalidBallotShapeError",
    "InvalidCandidateError",
    "InvalidElectionScheduleError",
    "InvalidStateTransitionError",
    "InvalidTieSelectionError",
    "InvariantViolationError",
    "NoTieError",
    "OutsideVotingWindowError",
    "TieAlreadyResolvedError",
    "TieResolutionError",
    "UnknownCountingRuleError",
    "VoterNotApprovedError",
    "VotingError",
]
