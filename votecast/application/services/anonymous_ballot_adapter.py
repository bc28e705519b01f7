"""Anonymization adapter.

Splits an authenticated vote submission into two records that share no
join key back to the choice:

- an anonymous Ballot (choices, no voter reference), and
- a VoteConfirmation (voter reference, no choices).

Both carry the same timestamp and the public election ID; their own IDs
are generated independently.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import fields
from datetime import datetime
from uuid import UUID, uuid4

from votecast.application.ports.time_authority import TimeAuthorityProtocol
from votecast.domain.errors import AnonymityViolationError, InvalidBallotShapeError
from votecast.domain.models.ballot import BALLOT_FIELDS, Ballot
from votecast.domain.models.vote_confirmation import VoteConfirmation


class AnonymousBallotAdapter:
    """Builds the ballot/confirmation pair and verifies ballot anonymity."""

    def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
        self._time = time_authority

    def anonymize(
        self,
        voter_id: UUID,
        election_id: UUID,
        single_choice: UUID | None = None,
        ranked_choices: Sequence[UUID] | None = None,
    ) -> tuple[Ballot, VoteConfirmation]:
        """Split a submission into an anonymous ballot and a receipt.

        Ranked choices win when non-empty; otherwise the single choice is
        wrapped in a one-element preference list.

        Args:
            voter_id: The authenticated voter (goes on the receipt only).
            election_id: The election voted in.
            single_choice: Single candidate choice.
            ranked_choices: Candidates in preference order.

        Returns:
            ``(ballot, confirmation)`` sharing only election_id and timestamp.

        Raises:
            InvalidBallotShapeError: If neither choice form is supplied.
        """
        if ranked_choices:
            preferences = tuple(ranked_choices)
        elif single_choice is not None:
            preferences = (single_choice,)
        else:
            raise InvalidBallotShapeError(
                "unspecified", "no candidate selection supplied"
            )

        ballot = Ballot(
            ballot_id=uuid4(),
            election_id=election_id,
            preferences=preferences,
            cast_at=self._time.utcnow(),
        )
        return self.anonymize_ballot(voter_id, ballot)

    def anonymize_ballot(
        self, voter_id: UUID, ballot: Ballot
    ) -> tuple[Ballot, VoteConfirmation]:
        """Pair an already built ballot with the voter's receipt.

        The ballot is returned unchanged; the receipt takes its timestamp
        and election ID and gets its own ID.

        Args:
            voter_id: The authenticated voter (goes on the receipt only).
            ballot: A ballot built and validated for the election's rule.

        Returns:
            ``(ballot, confirmation)``.
        """
        confirmation = VoteConfirmation(
            confirmation_id=uuid4(),
            voter_id=voter_id,
            election_id=ballot.election_id,
            confirmed_at=ballot.cast_at,
        )
        return ballot, confirmation

    def verify_anonymity(self, ballot: Ballot, voter_id: UUID | None = None) -> None:
        """Check that a ballot is structurally unable to identify a voter.

        A failure here is a programming error, never bad user input.

        Args:
            ballot: The ballot about to be persisted.
            voter_id: When given, no ballot value may equal it.

        Raises:
            AnonymityViolationError: If any check fails.
        """
        ballot_id = getattr(ballot, "ballot_id", None)
        if not isinstance(ballot, Ballot):
            raise AnonymityViolationError(ballot_id, "not a Ballot instance")
        if not isinstance(ballot.ballot_id, UUID):
            raise AnonymityViolationError(None, "missing ballot ID")
        if not isinstance(ballot.election_id, UUID):
            raise AnonymityViolationError(ballot_id, "missing election ID")
        if not isinstance(ballot.cast_at, datetime):
            raise AnonymityViolationError(ballot_id, "missing cast timestamp")

        declared = frozenset(f.name for f in fields(ballot))
        present = frozenset(vars(ballot))
        if declared != BALLOT_FIELDS or present != BALLOT_FIELDS:
            extra = sorted((declared | present) ^ BALLOT_FIELDS)
            raise AnonymityViolationError(
                ballot_id,
                "ballot attributes differ from the anonymous set: "
                + ", ".join(extra),
            )

        if voter_id is not None and (
            voter_id in (ballot.ballot_id, ballot.election_id)
            or voter_id in ballot.preferences
        ):
            raise AnonymityViolationError(ballot_id, "ballot carries the voter ID")
