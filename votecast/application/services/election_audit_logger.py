"""Audit log observer for election lifecycle transitions."""

from __future__ import annotations

from uuid import UUID, uuid4

from structlog import get_logger

from votecast.application.ports.audit_log_repository import (
    AuditLogRepositoryProtocol,
)
from votecast.domain.events.election_lifecycle import ElectionStateChangedEvent
from votecast.domain.models.audit_entry import AuditEntry

logger = get_logger(__name__)


class ElectionAuditLogger:
    """Persists one AuditEntry per election status change.

    Storage failures propagate to the emitter, which isolates them from
    the other observers and from the transition itself.
    """

    def __init__(self, audit_repo: AuditLogRepositoryProtocol) -> None:
        self._audit_repo = audit_repo

    async def on_state_change(self, event: ElectionStateChangedEvent) -> None:
        entry = AuditEntry(
            entry_id=uuid4(),
            election_id=event.election.election_id,
            election_name=event.election.name,
            previous_status=event.previous_status.value,
            new_status=event.new_status.value,
            recorded_at=event.occurred_at,
            details={
                "event_type": event.event_type,
                "counting_rule": event.election.counting_rule.value,
            },
        )
        await self._audit_repo.append(entry)
        logger.info(
            "election_audit_recorded",
            election_id=str(entry.election_id),
            action=entry.action,
        )

    async def get_entries(self, election_id: UUID) -> list[AuditEntry]:
        """Audit trail of one election, oldest first."""
        return await self._audit_repo.list_by_election(election_id)

    async def get_all_entries(self) -> list[AuditEntry]:
        return await self._audit_repo.list_all()

    async def count(self) -> int:
        return await self._audit_repo.count()
