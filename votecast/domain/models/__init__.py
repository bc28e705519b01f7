"""Domain models for votecast."""

from votecast.domain.models.audit_entry import AuditEntry
from votecast.domain.models.ballot import BALLOT_FIELDS, Ballot
from votecast.domain.models.candidate import Candidate
from votecast.domain.models.election import (
    STATUS_TRANSITION_MATRIX,
    CountingRule,
    Election,
    ElectionStatus,
)
from votecast.domain.models.notification import Notification, NotificationKind
from votecast.domain.models.tie_resolution import TieResolution, TieResolutionKind
from votecast.domain.models.vote_confirmation import VoteConfirmation
from votecast.domain.models.vote_result import ElectionOutcome, VoteResult
from votecast.domain.models.voter import RegistrationStatus, Voter
from votecast.domain.models.voter_eligibility import VoterEligibility

__all__: list[str] = [
    "AuditEntry",
    "BALLOT_FIELDS",
    "Ballot",
    "Candidate",
    "CountingRule",
    "Election",
    "ElectionOutcome",
    "ElectionStatus",
    "Notification",
    "NotificationKind",
    "RegistrationStatus",
    "STATUS_TRANSITION_MATRIX",
    "TieResolution",
    "TieResolutionKind",
    "VoteConfirmation",
    "VoteResult",
    "Voter",
    "VoterEligibility",
]
