"""Cast recorder port.

Persists the three records of one cast (the eligibility claim, the
anonymous ballot and the confirmation receipt) as a single unit: either all
three are stored or none is. The (voter_id, election_id) uniqueness of the
eligibility claim is enforced inside that unit.
"""

from __future__ import annotations

from typing import Protocol

from votecast.domain.models.ballot import Ballot
from votecast.domain.models.vote_confirmation import VoteConfirmation
from votecast.domain.models.voter_eligibility import VoterEligibility


class CastRecorderProtocol(Protocol):
    """Protocol for the atomic write of a cast vote."""

    async def record(
        self,
        eligibility: VoterEligibility,
        ballot: Ballot,
        confirmation: VoteConfirmation,
    ) -> None:
        """Store the claim, the ballot and the receipt together.

        Nothing is stored when any of the three writes fails.

        Args:
            eligibility: The voted claim for (voter_id, election_id).
            ballot: The anonymous ballot.
            confirmation: The voter's receipt.

        Raises:
            DuplicateRecordError: The voter already has a claim for the
                election (record_type "voter_eligibility"), or the ballot or
                confirmation ID is already stored.
        """
        ...
