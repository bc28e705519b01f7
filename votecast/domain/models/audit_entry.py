"""Audit log entry for election lifecycle transitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True, eq=True)
class AuditEntry:
    """One recorded election status change.

    Attributes:
        entry_id: Unique identifier.
        election_id: The election that changed status.
        election_name: Election name at the time of the change.
        previous_status: Status value before the change.
        new_status: Status value after the change.
        recorded_at: When the change happened (UTC).
        details: Additional structured context.
    """

    entry_id: UUID
    election_id: UUID
    election_name: str
    previous_status: str
    new_status: str
    recorded_at: datetime
    details: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def action(self) -> str:
        """Audit action label, e.g. ``election_draft_to_active``."""
        return (
            f"election_{self.previous_status.lower()}_to_{self.new_status.lower()}"
        )
