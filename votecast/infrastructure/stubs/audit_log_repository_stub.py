"""In-memory stub for AuditLogRepositoryProtocol."""

from __future__ import annotations

from uuid import UUID

from votecast.domain.models.audit_entry import AuditEntry


class AuditLogRepositoryStub:
    """Append-only in-memory audit log."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._entries: list[AuditEntry] = []

    async def append(self, entry: AuditEntry) -> None:
        self._entries.append(entry)

    async def list_by_election(self, election_id: UUID) -> list[AuditEntry]:
        return [e for e in self._entries if e.election_id == election_id]

    async def list_all(self) -> list[AuditEntry]:
        return list(self._entries)

    async def count(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Clear all entries (for test cleanup)."""
        self._entries.clear()
