"""Election lifecycle observer port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from votecast.domain.events.election_lifecycle import ElectionStateChangedEvent


@runtime_checkable
class ElectionObserverProtocol(Protocol):
    """Subscriber notified of every election status change.

    An observer may raise; the emitter isolates the failure so other
    observers still run and the transition stands.
    """

    async def on_state_change(self, event: ElectionStateChangedEvent) -> None:
        """Handle one status change."""
        ...
