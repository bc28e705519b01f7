"""SQLAlchemy persistence adapters for votecast."""

from votecast.infrastructure.persistence.repositories import (
    SqlAlchemyAuditLogRepository,
    SqlAlchemyBallotRepository,
    SqlAlchemyCandidateRepository,
    SqlAlchemyCastRecorder,
    SqlAlchemyConfirmationRepository,
    SqlAlchemyElectionRepository,
    SqlAlchemyEligibilityRepository,
    SqlAlchemyTieResolutionRepository,
)
from votecast.infrastructure.persistence.tables import metadata

__all__: list[str] = [
    "SqlAlchemyAuditLogRepository",
    "SqlAlchemyBallotRepository",
    "SqlAlchemyCandidateRepository",
    "SqlAlchemyCastRecorder",
    "SqlAlchemyConfirmationRepository",
    "SqlAlchemyElectionRepository",
    "SqlAlchemyEligibilityRepository",
    "SqlAlchemyTieResolutionRepository",
    "metadata",
]
