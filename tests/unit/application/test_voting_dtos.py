"""Unit tests for the voting request models."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from votecast.application.dtos.voting import CastVoteRequest, TieResolutionRequest
from votecast.domain.models.tie_resolution import TieResolutionKind


class TestCastVoteRequest:
    """Tests for CastVoteRequest."""

    def test_single_choice(self) -> None:
        election_id, choice = uuid4(), uuid4()
        request = CastVoteRequest(election_id=election_id, candidate_id=choice)

        assert request.preferences == ()
        assert request.referenced_candidates == (choice,)

    def test_preferences_coerced_from_list_and_strings(self) -> None:
        first, second = uuid4(), uuid4()
        request = CastVoteRequest(
            election_id=str(uuid4()), preferences=[str(first), str(second)]
        )
        assert request.preferences == (first, second)
        assert request.referenced_candidates == (first, second)

    def test_both_forms_referenced(self) -> None:
        choice, ranked = uuid4(), uuid4()
        request = CastVoteRequest(
            election_id=uuid4(), candidate_id=choice, preferences=[ranked]
        )
        assert request.referenced_candidates == (choice, ranked)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CastVoteRequest(election_id=uuid4(), voter_id=uuid4())

    def test_invalid_uuid_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CastVoteRequest(election_id="not-a-uuid")

    def test_frozen(self) -> None:
        request = CastVoteRequest(election_id=uuid4())
        with pytest.raises(ValidationError):
            request.candidate_id = uuid4()


class TestTieResolutionRequest:
    """Tests for TieResolutionRequest."""

    def test_kind_from_value(self) -> None:
        request = TieResolutionRequest(
            election_id=uuid4(), kind="RECALL", resolved_by="admin"
        )
        assert request.kind is TieResolutionKind.RECALL
        assert request.candidate_id is None
        assert request.notes is None

    @pytest.mark.parametrize("resolved_by", ["", "x" * 256])
    def test_resolved_by_length(self, resolved_by: str) -> None:
        with pytest.raises(ValidationError):
            TieResolutionRequest(
                election_id=uuid4(), kind="RANDOM", resolved_by=resolved_by
            )

    def test_notes_length(self) -> None:
        with pytest.raises(ValidationError):
            TieResolutionRequest(
                election_id=uuid4(),
                kind="RANDOM",
                resolved_by="admin",
                notes="n" * 2001,
            )

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TieResolutionRequest(
                election_id=uuid4(), kind="COIN_FLIP", resolved_by="admin"
            )
