"""Election lifecycle event emitter.

Owned by whichever component assembles the service graph and injected
into ElectionService; there is no process-wide emitter. Fan-out is
sequential and failure-isolated: an observer that raises is logged and
skipped, the remaining observers still run, and the caller of the
transition never sees the failure.
"""

from __future__ import annotations

from structlog import get_logger

from votecast.application.ports.election_observer import ElectionObserverProtocol
from votecast.domain.events.election_lifecycle import ElectionStateChangedEvent

logger = get_logger(__name__)


class ElectionEventEmitter:
    """Holds observer references and fans lifecycle events out to them."""

    def __init__(
        self, observers: list[ElectionObserverProtocol] | None = None
    ) -> None:
        self._observers: list[ElectionObserverProtocol] = []
        for observer in observers or []:
            self.subscribe(observer)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def subscribe(self, observer: ElectionObserverProtocol) -> None:
        """Add an observer. Subscribing the same observer twice is a no-op."""
        if not any(existing is observer for existing in self._observers):
            self._observers.append(observer)

    def unsubscribe(self, observer: ElectionObserverProtocol) -> None:
        """Remove an observer. Unknown observers are ignored."""
        self._observers = [o for o in self._observers if o is not observer]

    async def emit(self, event: ElectionStateChangedEvent) -> int:
        """Deliver an event to every observer in subscription order.

        Args:
            event: The status change to deliver.

        Returns:
            Number of observers that handled the event without raising.
        """
        log = logger.bind(
            election_id=str(event.election.election_id),
            previous_status=event.previous_status.value,
            new_status=event.new_status.value,
        )
        delivered = 0
        for observer in list(self._observers):
            try:
                await observer.on_state_change(event)
            except Exception:
                log.exception("observer_failed", observer=type(observer).__name__)
                continue
            delivered += 1

        log.debug(
            "election_event_emitted",
            delivered=delivered,
            observer_count=len(self._observers),
        )
        return delivered
