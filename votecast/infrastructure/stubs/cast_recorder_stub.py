"""In-memory stub for CastRecorderProtocol.

Writes into the eligibility, ballot and confirmation stubs so that their
queries see recorded casts.
"""

from __future__ import annotations

from collections.abc import Callable

from votecast.domain.errors import DuplicateRecordError
from votecast.domain.models.ballot import Ballot
from votecast.domain.models.vote_confirmation import VoteConfirmation
from votecast.domain.models.voter_eligibility import VoterEligibility
from votecast.infrastructure.stubs.ballot_repository_stub import (
    BallotRepositoryStub,
    ConfirmationRepositoryStub,
)
from votecast.infrastructure.stubs.eligibility_repository_stub import (
    EligibilityRepositoryStub,
)


class CastRecorderStub:
    """In-memory stub implementation of CastRecorderProtocol.

    Every uniqueness check runs before the first write. A write that fails
    after that discards the records already written, so a cast is stored
    whole or not at all.
    """

    def __init__(
        self,
        eligibility_repo: EligibilityRepositoryStub,
        ballot_repo: BallotRepositoryStub,
        confirmation_repo: ConfirmationRepositoryStub,
    ) -> None:
        self._eligibility = eligibility_repo
        self._ballots = ballot_repo
        self._confirmations = confirmation_repo

    async def record(
        self,
        eligibility: VoterEligibility,
        ballot: Ballot,
        confirmation: VoteConfirmation,
    ) -> None:
        """Store the claim, the ballot and the receipt together.

        Nothing is stored when any write raises.

        Raises:
            DuplicateRecordError: A uniqueness check failed.
        """
        key = (eligibility.voter_id, eligibility.election_id)
        existing = await self._eligibility.get(*key)
        if existing is not None and existing.has_voted:
            raise DuplicateRecordError("voter_eligibility", key)
        if self._ballots.contains(ballot.ballot_id):
            raise DuplicateRecordError("ballot", (ballot.ballot_id,))
        if self._confirmations.contains(confirmation.confirmation_id):
            raise DuplicateRecordError(
                "vote_confirmation", (confirmation.confirmation_id,)
            )

        undo: list[Callable[[], None]] = []
        try:
            await self._eligibility.mark_voted(*key, confirmation.confirmed_at)
            undo.append(lambda: self._eligibility.discard(*key))
            await self._ballots.save(ballot)
            undo.append(lambda: self._ballots.discard(ballot.ballot_id))
            await self._confirmations.save(confirmation)
        except Exception:
            for step in reversed(undo):
                step()
            raise
