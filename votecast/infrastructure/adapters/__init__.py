"""Infrastructure adapters for votecast.

Adapters implement the ports defined in the application layer.
"""

from votecast.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)

__all__: list[str] = ["SystemTimeAuthority"]
