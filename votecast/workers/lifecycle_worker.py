"""Election lifecycle worker.

Runs ElectionLifecycleMonitor as a standalone process: every
VOTECAST_LIFECYCLE_CHECK_INTERVAL_SECONDS it closes ACTIVE elections whose
end date has passed, through the same close_election transition an
administrator uses.

Environment Variables:
- DATABASE_URL: PostgreSQL connection string (required)
- VOTECAST_LIFECYCLE_CHECK_INTERVAL_SECONDS, VOTECAST_MIN_CANDIDATES,
  VOTECAST_LOG_ENVIRONMENT: see votecast.config.voting_config
- VOTECAST_CREATE_SCHEMA: create missing tables on startup when "1",
  "true" or "yes"

Usage:
    python -m votecast.workers.lifecycle_worker
"""

from __future__ import annotations

import asyncio
import os
import signal

from dotenv import load_dotenv

from votecast.bootstrap.database import (
    close_database_engine,
    create_schema,
    get_session_factory,
)
from votecast.bootstrap.logging import configure_structlog
from votecast.bootstrap.voting import build_voting_services
from votecast.config.voting_config import VotingConfig
from votecast.infrastructure.observability import (
    correlation_scope,
    get_logger_for_service,
)


async def run_lifecycle_worker(
    config: VotingConfig, stop_event: asyncio.Event | None = None
) -> None:
    """Run the lifecycle monitor until ``stop_event`` is set.

    Every log line of the run, the monitor's included, carries the same
    correlation ID.

    Args:
        config: Core configuration.
        stop_event: Set to request shutdown; SIGINT/SIGTERM set it too.
    """
    stop_event = stop_event or asyncio.Event()
    log = get_logger_for_service("lifecycle_worker", component="worker")

    with correlation_scope() as run_id:
        session_factory = get_session_factory()
        if os.environ.get("VOTECAST_CREATE_SCHEMA", "").lower() in ("1", "true", "yes"):
            await create_schema()

        services = build_voting_services(config=config, session_factory=session_factory)
        monitor = services.lifecycle_monitor

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop_event.set)

        await monitor.start()
        log.info(
            "lifecycle_worker_started",
            interval_seconds=monitor.interval_seconds,
            run_id=run_id,
        )
        try:
            await stop_event.wait()
        finally:
            await monitor.stop()
            await close_database_engine()
            log.info("lifecycle_worker_stopped")


async def _run_from_env() -> None:
    load_dotenv()
    config = VotingConfig.from_environment()
    configure_structlog(config.log_environment)
    await run_lifecycle_worker(config)


if __name__ == "__main__":
    asyncio.run(_run_from_env())
