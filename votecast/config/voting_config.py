"""Voting core configuration.

Environment Variables:
- VOTECAST_LIFECYCLE_CHECK_INTERVAL_SECONDS: Seconds between automatic
  closure checks (default: 60)
- VOTECAST_MIN_CANDIDATES: Candidates required to activate an election
  (default: 2, never below 2)
- VOTECAST_LOG_ENVIRONMENT: "production" (JSON logs) or "development"
  (console logs) (default: production)

Unparseable or out-of-range values fall back to the defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_LIFECYCLE_CHECK_INTERVAL_SECONDS = 60
DEFAULT_MIN_CANDIDATES = 2
DEFAULT_LOG_ENVIRONMENT = "production"
LOG_ENVIRONMENTS = frozenset({"production", "development"})


def _get_int_env(key: str, default: int, minimum: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set, invalid, or below ``minimum``.
        minimum: Smallest accepted value.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


@dataclass(frozen=True)
class VotingConfig:
    """Configuration for the voting core.

    Attributes:
        lifecycle_check_interval_seconds: Interval of the lifecycle monitor.
        min_candidates: Candidates needed for DRAFT -> ACTIVE.
        log_environment: Log renderer selection.
    """

    lifecycle_check_interval_seconds: int = DEFAULT_LIFECYCLE_CHECK_INTERVAL_SECONDS
    min_candidates: int = DEFAULT_MIN_CANDIDATES
    log_environment: str = DEFAULT_LOG_ENVIRONMENT

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.lifecycle_check_interval_seconds < 1:
            raise ValueError(
                "lifecycle_check_interval_seconds must be positive, got "
                f"{self.lifecycle_check_interval_seconds}"
            )
        if self.min_candidates < 2:
            raise ValueError(
                f"min_candidates must be at least 2, got {self.min_candidates}"
            )
        if self.log_environment not in LOG_ENVIRONMENTS:
            raise ValueError(
                f"log_environment must be one of {sorted(LOG_ENVIRONMENTS)}, "
                f"got {self.log_environment!r}"
            )

    @classmethod
    def from_environment(cls) -> "VotingConfig":
        """Create config from environment variables with defaults."""
        log_environment = (
            os.environ.get("VOTECAST_LOG_ENVIRONMENT", DEFAULT_LOG_ENVIRONMENT)
            .strip()
            .lower()
        )
        if log_environment not in LOG_ENVIRONMENTS:
            log_environment = DEFAULT_LOG_ENVIRONMENT

        return cls(
            lifecycle_check_interval_seconds=_get_int_env(
                "VOTECAST_LIFECYCLE_CHECK_INTERVAL_SECONDS",
                DEFAULT_LIFECYCLE_CHECK_INTERVAL_SECONDS,
                minimum=1,
            ),
            min_candidates=_get_int_env(
                "VOTECAST_MIN_CANDIDATES", DEFAULT_MIN_CANDIDATES, minimum=2
            ),
            log_environment=log_environment,
        )


DEFAULT_VOTING_CONFIG = VotingConfig()
