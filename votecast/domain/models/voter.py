"""Voter domain model.

Registration, authentication and credential storage happen outside the
core. The core only reads the voter's identity and registration status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID


class RegistrationStatus(Enum):
    """Voter registration status.

    States:
        PENDING: Awaiting approval.
        APPROVED: Allowed to vote.
        REJECTED: Registration denied.
        SUSPENDED: Temporarily disabled.
    """

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    SUSPENDED = "SUSPENDED"


@dataclass(frozen=True, eq=True)
class Voter:
    """An authenticated voter submitting a ballot.

    Attributes:
        voter_id: Unique identifier.
        name: Display name.
        registration_status: Current registration status.
    """

    voter_id: UUID
    name: str = field(default="")
    registration_status: RegistrationStatus = field(
        default=RegistrationStatus.PENDING
    )

    def is_approved(self) -> bool:
        return self.registration_status is RegistrationStatus.APPROVED

    def is_suspended(self) -> bool:
        return self.registration_status is RegistrationStatus.SUSPENDED

    def can_vote(self) -> bool:
        """Only approved voters may cast ballots."""
        return self.is_approved()
