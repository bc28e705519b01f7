"""Notifier observer for election lifecycle transitions.

Produces a human-readable notification per status change. Delivery
channels (email, push) are outside the core; notifications are kept in
memory for the process lifetime and exposed for querying.
"""

from __future__ import annotations

from uuid import UUID

from structlog import get_logger

from votecast.domain.events.election_lifecycle import ElectionStateChangedEvent
from votecast.domain.models.election import ElectionStatus
from votecast.domain.models.notification import Notification, NotificationKind

logger = get_logger(__name__)


class ElectionNotifier:
    """Records election_opened / election_closed / election_status_change."""

    def __init__(self) -> None:
        self._notifications: list[Notification] = []

    async def on_state_change(self, event: ElectionStateChangedEvent) -> None:
        name = event.election.name
        if event.new_status is ElectionStatus.ACTIVE:
            kind = NotificationKind.ELECTION_OPENED
            message = f'Election "{name}" is now open for voting.'
        elif event.new_status is ElectionStatus.CLOSED:
            kind = NotificationKind.ELECTION_CLOSED
            message = f'Election "{name}" has closed. Results are now available.'
        else:
            kind = NotificationKind.ELECTION_STATUS_CHANGE
            message = (
                f'Election "{name}" status changed from '
                f"{event.previous_status.value} to {event.new_status.value}."
            )

        notification = Notification(
            kind=kind,
            election_id=event.election.election_id,
            message=message,
            created_at=event.occurred_at,
        )
        self._notifications.append(notification)
        logger.info(
            "election_notification_created",
            election_id=str(notification.election_id),
            kind=kind.value,
        )

    def get_notifications(self) -> list[Notification]:
        return list(self._notifications)

    def get_notifications_for_election(self, election_id: UUID) -> list[Notification]:
        return [n for n in self._notifications if n.election_id == election_id]

    @property
    def count(self) -> int:
        return len(self._notifications)

    def clear(self) -> None:
        """Drop every recorded notification (for test isolation)."""
        self._notifications.clear()
