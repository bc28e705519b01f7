"""In-memory stub implementations of the application ports.

Used by tests and by build_voting_services when no database is
configured. Each stub enforces the uniqueness constraints of the real
store and raises DuplicateRecordError the way the SQLAlchemy adapters do.
"""

from votecast.infrastructure.stubs.audit_log_repository_stub import (
    AuditLogRepositoryStub,
)
from votecast.infrastructure.stubs.ballot_repository_stub import (
    BallotRepositoryStub,
    ConfirmationRepositoryStub,
)
from votecast.infrastructure.stubs.cast_recorder_stub import CastRecorderStub
from votecast.infrastructure.stubs.election_repository_stub import (
    CandidateRepositoryStub,
    ElectionRepositoryStub,
)
from votecast.infrastructure.stubs.eligibility_repository_stub import (
    EligibilityRepositoryStub,
)
from votecast.infrastructure.stubs.tie_resolution_repository_stub import (
    TieResolutionRepositoryStub,
)

__all__: list[str] = [
    "AuditLogRepositoryStub",
    "BallotRepositoryStub",
    "CandidateRepositoryStub",
    "CastRecorderStub",
    "ConfirmationRepositoryStub",
    "ElectionRepositoryStub",
    "EligibilityRepositoryStub",
    "TieResolutionRepositoryStub",
]
