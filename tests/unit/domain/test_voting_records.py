"""Unit tests for voter, receipt, eligibility, tie and audit records."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest

from tests.helpers.builders import CAST_AT, make_election
from votecast.domain.events import (
    ELECTION_STATE_CHANGED_EVENT_TYPE,
    ElectionStateChangedEvent,
)
from votecast.domain.models import (
    AuditEntry,
    ElectionStatus,
    RegistrationStatus,
    TieResolution,
    TieResolutionKind,
    VoteConfirmation,
    Voter,
    VoterEligibility,
)


class TestVoter:
    """Only approved voters may vote."""

    def test_approved_voter_can_vote(self) -> None:
        voter = Voter(voter_id=uuid4(), registration_status=RegistrationStatus.APPROVED)
        assert voter.is_approved()
        assert voter.can_vote()

    @pytest.mark.parametrize(
        "status",
        [
            RegistrationStatus.PENDING,
            RegistrationStatus.REJECTED,
            RegistrationStatus.SUSPENDED,
        ],
    )
    def test_other_statuses_cannot_vote(self, status: RegistrationStatus) -> None:
        assert not Voter(voter_id=uuid4(), registration_status=status).can_vote()

    def test_default_is_pending(self) -> None:
        voter = Voter(voter_id=uuid4())
        assert voter.registration_status is RegistrationStatus.PENDING
        assert not voter.is_suspended()


class TestVoteConfirmation:
    """Tests for the proof-of-cast receipt."""

    def test_confirmation_code_is_first_eight_hex_upper(self) -> None:
        confirmation = VoteConfirmation(
            confirmation_id=UUID("3f2a9c1b-0000-4000-8000-000000000000"),
            voter_id=uuid4(),
            election_id=uuid4(),
            confirmed_at=CAST_AT,
        )
        assert confirmation.confirmation_code == "3F2A9C1B"

    def test_naive_timestamp_rejected(self) -> None:
        with pytest.raises(ValueError):
            VoteConfirmation(
                confirmation_id=uuid4(),
                voter_id=uuid4(),
                election_id=uuid4(),
                confirmed_at=datetime(2026, 6, 15),
            )

    def test_to_dict_has_no_choice_content(self) -> None:
        confirmation = VoteConfirmation(
            confirmation_id=uuid4(),
            voter_id=uuid4(),
            election_id=uuid4(),
            confirmed_at=CAST_AT,
        )
        data = confirmation.to_dict()
        assert "preferences" not in data
        assert data["voter_id"] == str(confirmation.voter_id)


class TestVoterEligibility:
    """Tests for the voted flag."""

    def test_initial_record_has_not_voted(self) -> None:
        record = VoterEligibility.create_initial(uuid4(), uuid4())
        assert not record.has_voted
        assert record.voted_at is None

    def test_mark_as_voted(self) -> None:
        record = VoterEligibility.create_initial(uuid4(), uuid4())
        voted = record.mark_as_voted(CAST_AT)

        assert voted.has_voted
        assert voted.voted_at == CAST_AT
        assert not record.has_voted

    def test_voted_flag_never_reverts(self) -> None:
        later = datetime(2026, 6, 20, tzinfo=timezone.utc)
        voted = VoterEligibility.create_initial(uuid4(), uuid4()).mark_as_voted(CAST_AT)
        assert voted.mark_as_voted(later) is voted


class TestTieResolution:
    """Winner presence depends on the resolution kind."""

    def _make(
        self, kind: TieResolutionKind, winner: UUID | None
    ) -> TieResolution:
        return TieResolution(
            resolution_id=uuid4(),
            election_id=uuid4(),
            kind=kind,
            winner_candidate_id=winner,
            resolved_by="admin",
            resolved_at=CAST_AT,
        )

    def test_recall_has_no_winner(self) -> None:
        resolution = self._make(TieResolutionKind.RECALL, None)
        assert resolution.winner_candidate_id is None
        assert resolution.to_dict()["winner_candidate_id"] is None

    def test_recall_with_winner_rejected(self) -> None:
        with pytest.raises(ValueError, match="RECALL"):
            self._make(TieResolutionKind.RECALL, uuid4())

    @pytest.mark.parametrize(
        "kind", [TieResolutionKind.RANDOM, TieResolutionKind.MANUAL]
    )
    def test_random_and_manual_require_winner(self, kind: TieResolutionKind) -> None:
        with pytest.raises(ValueError, match="must name a winner"):
            self._make(kind, None)


class TestLifecycleRecords:
    """Tests for lifecycle events and audit entries."""

    def test_opening_event(self) -> None:
        election = make_election(status=ElectionStatus.ACTIVE)
        event = ElectionStateChangedEvent(
            election=election,
            previous_status=ElectionStatus.DRAFT,
            new_status=ElectionStatus.ACTIVE,
            occurred_at=CAST_AT,
        )

        assert event.event_type == ELECTION_STATE_CHANGED_EVENT_TYPE
        assert event.is_opening
        assert not event.is_closing
        assert event.to_dict()["previous_status"] == "DRAFT"

    def test_closing_event_from_draft(self) -> None:
        event = ElectionStateChangedEvent(
            election=make_election(status=ElectionStatus.CLOSED),
            previous_status=ElectionStatus.DRAFT,
            new_status=ElectionStatus.CLOSED,
            occurred_at=CAST_AT,
        )
        assert event.is_closing
        assert not event.is_opening

    def test_audit_action_label(self) -> None:
        entry = AuditEntry(
            entry_id=uuid4(),
            election_id=uuid4(),
            election_name="Board",
            previous_status="ACTIVE",
            new_status="CLOSED",
            recorded_at=CAST_AT,
        )
        assert entry.action == "election_active_to_closed"
        assert entry.details == {}
