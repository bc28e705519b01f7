"""Time Authority Protocol - interface for consistent timestamp provisioning.

Every service that needs the current time injects a TimeAuthorityProtocol
implementation instead of reading the host clock. The voting
window check, ballot and confirmation timestamps, lifecycle events and tie
resolutions all read the clock through this port.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    For production:
        Use SystemTimeAuthority from votecast/infrastructure/adapters/

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current time with timezone awareness (UTC)."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return current UTC time as a timezone-aware datetime."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Note:
            Only differences between values are meaningful.
        """
        ...
