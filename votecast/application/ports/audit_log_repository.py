"""Audit log repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from votecast.domain.models.audit_entry import AuditEntry


class AuditLogRepositoryProtocol(Protocol):
    """Protocol for append-only lifecycle audit storage."""

    async def append(self, entry: AuditEntry) -> None:
        ...

    async def list_by_election(self, election_id: UUID) -> list[AuditEntry]:
        """List an election's entries in the order they were recorded."""
        ...

    async def list_all(self) -> list[AuditEntry]:
        ...

    async def count(self) -> int:
        ...
