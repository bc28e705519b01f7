"""Application ports - interfaces to the collaborators the core consumes."""

from votecast.application.ports.audit_log_repository import (
    AuditLogRepositoryProtocol,
)
from votecast.application.ports.ballot_repository import BallotRepositoryProtocol
from votecast.application.ports.candidate_repository import (
    CandidateRepositoryProtocol,
)
from votecast.application.ports.cast_recorder import CastRecorderProtocol
from votecast.application.ports.confirmation_repository import (
    ConfirmationRepositoryProtocol,
)
from votecast.application.ports.election_observer import ElectionObserverProtocol
from votecast.application.ports.election_repository import (
    ElectionRepositoryProtocol,
)
from votecast.application.ports.eligibility_repository import (
    EligibilityRepositoryProtocol,
)
from votecast.application.ports.tie_resolution_repository import (
    TieResolutionRepositoryProtocol,
)
from votecast.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "AuditLogRepositoryProtocol",
    "BallotRepositoryProtocol",
    "CandidateRepositoryProtocol",
    "CastRecorderProtocol",
    "ConfirmationRepositoryProtocol",
    "ElectionObserverProtocol",
    "ElectionRepositoryProtocol",
    "EligibilityRepositoryProtocol",
    "TieResolutionRepositoryProtocol",
    "TimeAuthorityProtocol",
]
