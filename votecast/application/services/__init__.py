"""Application services for votecast.

Available services:
- BallotFactory: Builds ballots shaped for a counting rule
- AnonymousBallotAdapter: Splits a submission into ballot and receipt
- VotingService: Casting and tabulation orchestrator
- ElectionService: Lifecycle state machine and administration
- ElectionEventEmitter: Failure-isolated observer fan-out
- ElectionAuditLogger, ElectionNotifier: Lifecycle observers
- TieResolutionService: One-time tie resolution and outcome reporting
- ElectionLifecycleMonitor: Background closer for expired elections
"""

from votecast.application.services.anonymous_ballot_adapter import (
    AnonymousBallotAdapter,
)
from votecast.application.services.ballot_factory import BallotFactory
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

__all__: list[str] = [
    "AnonymousBallotAdapter",
    "BallotFactory",
    "ElectionAuditLogger",
    "ElectionEventEmitter",
    "ElectionLifecycleMonitor",
    "ElectionNotifier",
    "ElectionService",
    "TieResolutionService",
    "VotingService",
]
