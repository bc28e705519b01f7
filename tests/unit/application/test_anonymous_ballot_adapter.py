"""Unit tests for AnonymousBallotAdapter.

The ballot and the confirmation must share nothing but the election ID
and the timestamp, and the anonymity check must reject any ballot that
carries more than the anonymous attribute set.
"""

from dataclasses import asdict
from uuid import uuid4

import pytest

from tests.helpers.builders import make_ballot
from tests.helpers.fake_time_authority import FakeTimeAuthority
from votecast.application.services.anonymous_ballot_adapter import (
    AnonymousBallotAdapter,
)
from votecast.domain.errors import AnonymityViolationError, InvalidBallotShapeError
from votecast.domain.models.ballot import BALLOT_FIELDS


@pytest.fixture
def adapter(fake_time_authority: FakeTimeAuthority) -> AnonymousBallotAdapter:
    return AnonymousBallotAdapter(fake_time_authority)


class TestAnonymize:
    """Tests for the ballot/receipt split."""

    def test_single_choice(
        self, adapter: AnonymousBallotAdapter, fake_time_authority: FakeTimeAuthority
    ) -> None:
        voter_id, election_id, choice = uuid4(), uuid4(), uuid4()

        ballot, confirmation = adapter.anonymize(
            voter_id, election_id, single_choice=choice
        )

        assert ballot.preferences == (choice,)
        assert ballot.election_id == confirmation.election_id == election_id
        assert ballot.cast_at == confirmation.confirmed_at
        assert ballot.cast_at == fake_time_authority.utcnow()
        assert confirmation.voter_id == voter_id

    def test_ranked_choices_win_over_single(
        self, adapter: AnonymousBallotAdapter
    ) -> None:
        ranking = [uuid4(), uuid4()]

        ballot, _ = adapter.anonymize(
            uuid4(), uuid4(), single_choice=uuid4(), ranked_choices=ranking
        )

        assert ballot.preferences == tuple(ranking)

    def test_empty_ranking_falls_back_to_single(
        self, adapter: AnonymousBallotAdapter
    ) -> None:
        choice = uuid4()
        ballot, _ = adapter.anonymize(
            uuid4(), uuid4(), single_choice=choice, ranked_choices=[]
        )
        assert ballot.preferences == (choice,)

    def test_no_selection_rejected(self, adapter: AnonymousBallotAdapter) -> None:
        with pytest.raises(InvalidBallotShapeError) as exc_info:
            adapter.anonymize(uuid4(), uuid4())
        assert exc_info.value.counting_rule == "unspecified"

    def test_records_share_only_election_and_time(
        self, adapter: AnonymousBallotAdapter
    ) -> None:
        voter_id = uuid4()
        ballot, confirmation = adapter.anonymize(
            voter_id, uuid4(), single_choice=uuid4()
        )

        assert ballot.ballot_id != confirmation.confirmation_id
        assert voter_id not in asdict(ballot).values()
        assert voter_id not in ballot.preferences
        assert "voter_id" not in asdict(ballot)
        assert "preferences" not in confirmation.to_dict()

    def test_produced_ballot_passes_verification(
        self, adapter: AnonymousBallotAdapter
    ) -> None:
        voter_id = uuid4()
        ballot, _ = adapter.anonymize(voter_id, uuid4(), ranked_choices=[uuid4()])
        adapter.verify_anonymity(ballot, voter_id=voter_id)


class TestAnonymizeBallot:
    """Tests for pairing a prebuilt ballot with a receipt."""

    def test_ballot_is_kept_unchanged(self, adapter: AnonymousBallotAdapter) -> None:
        voter_id = uuid4()
        built = make_ballot(uuid4(), uuid4(), uuid4())

        ballot, confirmation = adapter.anonymize_ballot(voter_id, built)

        assert ballot is built
        assert confirmation.voter_id == voter_id
        assert confirmation.election_id == built.election_id
        assert confirmation.confirmed_at == built.cast_at
        assert confirmation.confirmation_id != built.ballot_id


class TestVerifyAnonymity:
    """Tests for the post-construction check."""

    def test_plain_ballot_passes(self, adapter: AnonymousBallotAdapter) -> None:
        ballot = make_ballot(uuid4(), uuid4())
        adapter.verify_anonymity(ballot)
        assert frozenset(vars(ballot)) == BALLOT_FIELDS

    def test_non_ballot_rejected(self, adapter: AnonymousBallotAdapter) -> None:
        with pytest.raises(AnonymityViolationError, match="not a Ballot"):
            adapter.verify_anonymity({"ballot_id": uuid4()})  # type: ignore[arg-type]

    def test_smuggled_attribute_rejected(
        self, adapter: AnonymousBallotAdapter
    ) -> None:
        ballot = make_ballot(uuid4(), uuid4())
        object.__setattr__(ballot, "voter_id", uuid4())

        with pytest.raises(AnonymityViolationError, match="voter_id") as exc_info:
            adapter.verify_anonymity(ballot)
        assert exc_info.value.ballot_id == ballot.ballot_id

    def test_voter_id_as_preference_rejected(
        self, adapter: AnonymousBallotAdapter
    ) -> None:
        voter_id = uuid4()
        ballot = make_ballot(uuid4(), voter_id)

        with pytest.raises(AnonymityViolationError, match="voter ID"):
            adapter.verify_anonymity(ballot, voter_id=voter_id)

    def test_voter_id_as_ballot_id_rejected(
        self, adapter: AnonymousBallotAdapter
    ) -> None:
        ballot = make_ballot(uuid4(), uuid4())

        with pytest.raises(AnonymityViolationError):
            adapter.verify_anonymity(ballot, voter_id=ballot.ballot_id)
