"""Bootstrap wiring for the voting service graph.

build_voting_services assembles repositories, the lifecycle emitter, its
observers and the services into one VotingServices container. The emitter
is owned by the container; there is no module-level emitter.

Without a session factory the in-memory stubs back every store, which
suits tests and local experiments. With one, the SQLAlchemy repositories
are used.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

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
from votecast.application.services.election_audit_logger import ElectionAuditLogger
from votecast.application.services.election_event_emitter import (
    ElectionEventEmitter,
)
from votecast.application.services.election_lifecycle_monitor import (
    ElectionLifecycleMonitor,
)
from votecast.application.services.election_notifier import ElectionNotifier
from votecast.application.services.election_service import ElectionService
from votecast.application.services.tie_resolution_service import (
    TieResolutionService,
)
from votecast.application.services.voting_service import VotingService
from votecast.config.voting_config import VotingConfig
from votecast.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)
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
from votecast.infrastructure.stubs import (
    AuditLogRepositoryStub,
    BallotRepositoryStub,
    CandidateRepositoryStub,
    CastRecorderStub,
    ConfirmationRepositoryStub,
    ElectionRepositoryStub,
    EligibilityRepositoryStub,
    TieResolutionRepositoryStub,
)

logger = get_logger()


@dataclass(frozen=True)
class VotingRepositories:
    """The stores behind the voting core."""

    elections: ElectionRepositoryProtocol
    candidates: CandidateRepositoryProtocol
    ballots: BallotRepositoryProtocol
    eligibility: EligibilityRepositoryProtocol
    confirmations: ConfirmationRepositoryProtocol
    cast_recorder: CastRecorderProtocol
    tie_resolutions: TieResolutionRepositoryProtocol
    audit_log: AuditLogRepositoryProtocol


@dataclass(frozen=True)
class VotingServices:
    """Assembled service graph.

    Attributes:
        voting: Casting and tabulation.
        elections: Lifecycle and administration.
        tie_resolution: Tie resolution and outcome reporting.
        emitter: Lifecycle fan-out, with audit_logger and notifier subscribed.
        audit_logger: Audit log observer.
        notifier: Notification observer.
        lifecycle_monitor: Background closer (not started).
        repositories: The underlying stores.
        time_authority: The clock shared by every service.
    """

    voting: VotingService
    elections: ElectionService
    tie_resolution: TieResolutionService
    emitter: ElectionEventEmitter
    audit_logger: ElectionAuditLogger
    notifier: ElectionNotifier
    lifecycle_monitor: ElectionLifecycleMonitor
    repositories: VotingRepositories
    time_authority: TimeAuthorityProtocol


def build_in_memory_repositories() -> VotingRepositories:
    ballots = BallotRepositoryStub()
    eligibility = EligibilityRepositoryStub()
    confirmations = ConfirmationRepositoryStub()
    return VotingRepositories(
        elections=ElectionRepositoryStub(),
        candidates=CandidateRepositoryStub(),
        ballots=ballots,
        eligibility=eligibility,
        confirmations=confirmations,
        cast_recorder=CastRecorderStub(eligibility, ballots, confirmations),
        tie_resolutions=TieResolutionRepositoryStub(),
        audit_log=AuditLogRepositoryStub(),
    )


def build_sql_repositories(
    session_factory: async_sessionmaker[AsyncSession],
) -> VotingRepositories:
    return VotingRepositories(
        elections=SqlAlchemyElectionRepository(session_factory),
        candidates=SqlAlchemyCandidateRepository(session_factory),
        ballots=SqlAlchemyBallotRepository(session_factory),
        eligibility=SqlAlchemyEligibilityRepository(session_factory),
        confirmations=SqlAlchemyConfirmationRepository(session_factory),
        cast_recorder=SqlAlchemyCastRecorder(session_factory),
        tie_resolutions=SqlAlchemyTieResolutionRepository(session_factory),
        audit_log=SqlAlchemyAuditLogRepository(session_factory),
    )


def build_voting_services(
    config: VotingConfig | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
    repositories: VotingRepositories | None = None,
) -> VotingServices:
    """Assemble the voting service graph.

    Args:
        config: Core configuration; read from the environment if omitted.
        session_factory: Use the SQL stores when given.
        time_authority: Clock; the system clock if omitted.
        repositories: Explicit stores, overriding session_factory.

    Returns:
        The wired VotingServices container.
    """
    config = config or VotingConfig.from_environment()
    time_authority = time_authority or SystemTimeAuthority()
    if repositories is None:
        if session_factory is not None:
            repositories = build_sql_repositories(session_factory)
        else:
            repositories = build_in_memory_repositories()

    audit_logger = ElectionAuditLogger(repositories.audit_log)
    notifier = ElectionNotifier()
    emitter = ElectionEventEmitter([audit_logger, notifier])

    voting = VotingService(
        election_repo=repositories.elections,
        candidate_repo=repositories.candidates,
        ballot_repo=repositories.ballots,
        eligibility_repo=repositories.eligibility,
        confirmation_repo=repositories.confirmations,
        cast_recorder=repositories.cast_recorder,
        time_authority=time_authority,
    )
    elections = ElectionService(
        election_repo=repositories.elections,
        candidate_repo=repositories.candidates,
        emitter=emitter,
        time_authority=time_authority,
        min_candidates=config.min_candidates,
    )
    tie_resolution = TieResolutionService(
        voting_service=voting,
        resolution_repo=repositories.tie_resolutions,
        time_authority=time_authority,
    )
    monitor = ElectionLifecycleMonitor(
        election_service=elections,
        time_authority=time_authority,
        interval_seconds=config.lifecycle_check_interval_seconds,
    )

    logger.info(
        "voting_services_built",
        store=type(repositories.elections).__name__,
        observer_count=emitter.observer_count,
        min_candidates=config.min_candidates,
    )
    return VotingServices(
        voting=voting,
        elections=elections,
        tie_resolution=tie_resolution,
        emitter=emitter,
        audit_logger=audit_logger,
        notifier=notifier,
        lifecycle_monitor=monitor,
        repositories=repositories,
        time_authority=time_authority,
    )
