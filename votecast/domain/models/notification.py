"""Lifecycle notification record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class NotificationKind(Enum):
    """Kind of lifecycle notification."""

    ELECTION_OPENED = "election_opened"
    ELECTION_CLOSED = "election_closed"
    ELECTION_STATUS_CHANGE = "election_status_change"


@dataclass(frozen=True, eq=True)
class Notification:
    """A message announcing an election status change.

    Attributes:
        kind: What happened.
        election_id: The election concerned.
        message: Human-readable text.
        created_at: When the notification was produced (UTC).
    """

    kind: NotificationKind
    election_id: UUID
    message: str
    created_at: datetime
