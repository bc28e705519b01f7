"""Internal invariant violations.

These indicate a programming error upstream, never bad user input. They
abort the operation loudly and are never caught inside the core.
"""

from __future__ import annotations

from uuid import UUID

from votecast.domain.exceptions import VotecastError


class InvariantViolationError(VotecastError):
    """Base class for fatal internal invariant violations."""


class AnonymityViolationError(InvariantViolationError):
    """Raised when a ballot fails the post-construction anonymity check.

    Attributes:
        ballot_id: ID of the offending ballot (None if missing).
        reason: Which part of the check failed.
    """

    def __init__(self, ballot_id: UUID | None, reason: str) -> None:
        self.ballot_id = ballot_id
        self.reason = reason
        super().__init__(f"Ballot anonymity verification failed: {reason}")


class UnknownCountingRuleError(InvariantViolationError):
    """Raised when a counting rule outside the supported set reaches the core.

    Attributes:
        counting_rule: The unrecognised value.
    """

    def __init__(self, counting_rule: object) -> None:
        self.counting_rule = counting_rule
        super().__init__(f"Unknown counting rule: {counting_rule!r}")
