"""Election lifecycle monitor background service.

Runs a background loop that periodically closes ACTIVE elections whose
end date has passed. Closure goes through ElectionService.close_election,
the same transition used by manual closure, so both paths emit the same
events to the same observers.

Note:
    This service should be started with the application lifecycle
    and stopped when the application shuts down.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Optional
from uuid import UUID

import structlog

from votecast.domain.models.election import ElectionStatus

if TYPE_CHECKING:
    from votecast.application.ports.time_authority import TimeAuthorityProtocol
    from votecast.application.services.election_service import ElectionService

DEFAULT_CHECK_INTERVAL_SECONDS = 60


class ElectionLifecycleMonitor:
    """Background closer for elections past their end date.

    Attributes:
        running: Whether the monitor is currently running.
        interval_seconds: The check interval in seconds.

    Example:
        >>> monitor = ElectionLifecycleMonitor(election_service, time_authority)
        >>> await monitor.start()
        >>> # ... application runs ...
        >>> await monitor.stop()
    """

    def __init__(
        self,
        election_service: "ElectionService",
        time_authority: "TimeAuthorityProtocol",
        interval_seconds: int = DEFAULT_CHECK_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the lifecycle monitor.

        Args:
            election_service: Service whose close_election is invoked.
            time_authority: Clock compared against each end date.
            interval_seconds: The check interval in seconds.
        """
        self._elections = election_service
        self._time = time_authority
        self._interval = interval_seconds
        self._running: bool = False
        self._task: Optional[asyncio.Task[None]] = None
        self._log = structlog.get_logger().bind(service="election_lifecycle_monitor")

    @property
    def running(self) -> bool:
        """Check if the monitor is running."""
        return self._running

    @property
    def interval_seconds(self) -> int:
        """Get the check interval in seconds."""
        return self._interval

    async def start(self) -> None:
        """Start the monitoring loop.

        Note:
            Calling start multiple times is safe (idempotent).
        """
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        self._log.info("election_lifecycle_monitor_started", interval=self._interval)

    async def stop(self) -> None:
        """Stop the monitoring loop gracefully.

        Note:
            Calling stop when not running is safe.
        """
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        self._log.info("election_lifecycle_monitor_stopped")

    async def _run_loop(self) -> None:
        """Internal monitoring loop.

        Handles exceptions gracefully to ensure the loop continues.
        """
        while self._running:
            try:
                start = self._time.monotonic()
                closed = await self.run_once()
                elapsed = self._time.monotonic() - start
                self._log.debug(
                    "lifecycle_check_complete",
                    closed_count=len(closed),
                    elapsed_seconds=elapsed,
                )
                await asyncio.sleep(max(0, self._interval - elapsed))

            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._log.error("lifecycle_check_failed", error=str(e))
                await asyncio.sleep(self._interval)

    async def run_once(self) -> list[UUID]:
        """Run a single check cycle.

        Closes every ACTIVE election whose end date is at or before now.
        A failure on one election is logged and the cycle moves on.

        Returns:
            IDs of the elections closed in this cycle.
        """
        now = self._time.utcnow()
        active = await self._elections.list_elections_by_status(ElectionStatus.ACTIVE)

        closed: list[UUID] = []
        for election in active:
            if election.end_date > now:
                continue
            try:
                await self._elections.close_election(election.election_id)
            except Exception as e:
                self._log.error(
                    "automatic_close_failed",
                    election_id=str(election.election_id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue
            closed.append(election.election_id)
            self._log.info(
                "election_closed_automatically",
                election_id=str(election.election_id),
                end_date=election.end_date.isoformat(),
            )
        return closed
