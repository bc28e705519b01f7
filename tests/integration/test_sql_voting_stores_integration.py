"""Integration tests for the SQLAlchemy voting stores.

Runs the repositories against a real SQLAlchemy engine (in-memory SQLite
through aiosqlite) to check round-trips and the uniqueness constraints
the voting core depends on.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tests.helpers.builders import CAST_AT, make_ballot, make_candidates, make_election
from votecast.domain.errors import DuplicateRecordError
from votecast.domain.models.audit_entry import AuditEntry
from votecast.domain.models.election import CountingRule, ElectionStatus
from votecast.domain.models.tie_resolution import TieResolution, TieResolutionKind
from votecast.domain.models.vote_confirmation import VoteConfirmation
from votecast.domain.models.voter_eligibility import VoterEligibility
from votecast.infrastructure.persistence import (
    SqlAlchemyAuditLogRepository,
    SqlAlchemyBallotRepository,
    SqlAlchemyCandidateRepository,
    SqlAlchemyCastRecorder,
    SqlAlchemyConfirmationRepository,
    SqlAlchemyElectionRepository,
    SqlAlchemyEligibilityRepository,
    SqlAlchemyTieResolutionRepository,
)

pytestmark = pytest.mark.integration

SessionFactory = async_sessionmaker[AsyncSession]


class TestSchema:
    """Tests for schema creation."""

    @pytest.mark.asyncio
    async def test_tables_created(self, sql_engine: AsyncEngine) -> None:
        async with sql_engine.connect() as connection:
            names = await connection.run_sync(
                lambda sync_conn: set(inspect(sync_conn).get_table_names())
            )
        assert names == {
            "elections",
            "candidates",
            "ballots",
            "vote_confirmations",
            "voter_eligibility",
            "tie_resolutions",
            "election_audit_log",
        }

    @pytest.mark.asyncio
    async def test_ballot_table_has_no_voter_column(
        self, sql_engine: AsyncEngine
    ) -> None:
        async with sql_engine.connect() as connection:
            columns = await connection.run_sync(
                lambda sync_conn: {
                    c["name"] for c in inspect(sync_conn).get_columns("ballots")
                }
            )
        assert "voter_id" not in columns
        assert columns == {"id", "ballot_id", "election_id", "preferences", "cast_at"}


class TestElectionAndCandidateStores:
    """Round-trips for elections and candidates."""

    @pytest.mark.asyncio
    async def test_election_round_trip_and_status_update(
        self, sql_session_factory: SessionFactory
    ) -> None:
        repo = SqlAlchemyElectionRepository(sql_session_factory)
        election = make_election(counting_rule=CountingRule.INSTANT_RUNOFF)

        await repo.save(election)
        assert await repo.get(election.election_id) == election

        assert await repo.update_status(
            election.election_id, ElectionStatus.DRAFT, ElectionStatus.ACTIVE
        )
        stored = await repo.get(election.election_id)
        assert stored is not None and stored.status is ElectionStatus.ACTIVE
        assert stored.start_date == election.start_date
        assert await repo.list_by_status(ElectionStatus.ACTIVE) == [stored]
        assert await repo.list_by_status(ElectionStatus.DRAFT) == []

    @pytest.mark.asyncio
    async def test_status_update_is_compare_and_swap(
        self, sql_session_factory: SessionFactory
    ) -> None:
        repo = SqlAlchemyElectionRepository(sql_session_factory)
        election = make_election(status=ElectionStatus.CLOSED)
        await repo.save(election)

        assert not await repo.update_status(
            election.election_id, ElectionStatus.DRAFT, ElectionStatus.ACTIVE
        )
        assert not await repo.update_status(
            uuid4(), ElectionStatus.DRAFT, ElectionStatus.ACTIVE
        )
        stored = await repo.get(election.election_id)
        assert stored is not None and stored.status is ElectionStatus.CLOSED

    @pytest.mark.asyncio
    async def test_save_updates_existing(
        self, sql_session_factory: SessionFactory
    ) -> None:
        repo = SqlAlchemyElectionRepository(sql_session_factory)
        election = make_election()
        await repo.save(election)

        renamed = make_election(name="Renamed", election_id=election.election_id)
        await repo.save(renamed)

        assert len(await repo.list_all()) == 1
        stored = await repo.get(election.election_id)
        assert stored is not None and stored.name == "Renamed"

    @pytest.mark.asyncio
    async def test_candidates_keep_insertion_order(
        self, sql_session_factory: SessionFactory
    ) -> None:
        elections = SqlAlchemyElectionRepository(sql_session_factory)
        repo = SqlAlchemyCandidateRepository(sql_session_factory)
        election = make_election()
        await elections.save(election)
        candidates = make_candidates(election.election_id, ("Zed", "Amy", "Kim"))
        for candidate in candidates:
            await repo.save(candidate)

        assert await repo.list_by_election(election.election_id) == candidates
        assert await repo.count_by_election(election.election_id) == 3

        await repo.delete(candidates[0].candidate_id)
        assert await repo.get(candidates[0].candidate_id) is None
        await repo.delete_by_election(election.election_id)
        assert await repo.count_by_election(election.election_id) == 0


class TestBallotAndReceiptStores:
    """Ballots and confirmations are stored apart."""

    @pytest.mark.asyncio
    async def test_ballot_preserves_preference_order(
        self, sql_session_factory: SessionFactory
    ) -> None:
        repo = SqlAlchemyBallotRepository(sql_session_factory)
        election_id = uuid4()
        ranking = [uuid4() for _ in range(4)]
        ballot = make_ballot(election_id, *ranking)

        await repo.save(ballot)

        assert await repo.list_by_election(election_id) == [ballot]
        assert await repo.count_by_election(election_id) == 1
        assert await repo.count_by_election(uuid4()) == 0

    @pytest.mark.asyncio
    async def test_duplicate_ballot_id_rejected(
        self, sql_session_factory: SessionFactory
    ) -> None:
        repo = SqlAlchemyBallotRepository(sql_session_factory)
        ballot = make_ballot(uuid4(), uuid4())
        await repo.save(ballot)

        with pytest.raises(DuplicateRecordError) as exc_info:
            await repo.save(ballot)
        assert exc_info.value.record_type == "ballot"

    @pytest.mark.asyncio
    async def test_confirmations_newest_first(
        self, sql_session_factory: SessionFactory
    ) -> None:
        repo = SqlAlchemyConfirmationRepository(sql_session_factory)
        voter_id = uuid4()
        older = VoteConfirmation(
            confirmation_id=uuid4(),
            voter_id=voter_id,
            election_id=uuid4(),
            confirmed_at=CAST_AT,
        )
        newer = VoteConfirmation(
            confirmation_id=uuid4(),
            voter_id=voter_id,
            election_id=uuid4(),
            confirmed_at=CAST_AT + timedelta(minutes=5),
        )
        await repo.save(older)
        await repo.save(newer)

        assert await repo.list_by_voter(voter_id) == [newer, older]
        assert await repo.list_by_voter(uuid4()) == []


class TestEligibilityStore:
    """The (voter, election) pair can be claimed once."""

    @pytest.mark.asyncio
    async def test_mark_voted(self, sql_session_factory: SessionFactory) -> None:
        repo = SqlAlchemyEligibilityRepository(sql_session_factory)
        voter_id, election_id = uuid4(), uuid4()
        assert not await repo.has_voted(voter_id, election_id)

        record = await repo.mark_voted(voter_id, election_id, CAST_AT)

        assert record.has_voted
        assert await repo.has_voted(voter_id, election_id)
        stored = await repo.get(voter_id, election_id)
        assert stored is not None and stored.voted_at == CAST_AT
        assert not await repo.has_voted(voter_id, uuid4())

    @pytest.mark.asyncio
    async def test_second_claim_rejected(
        self, sql_session_factory: SessionFactory
    ) -> None:
        repo = SqlAlchemyEligibilityRepository(sql_session_factory)
        voter_id, election_id = uuid4(), uuid4()
        await repo.mark_voted(voter_id, election_id, CAST_AT)

        with pytest.raises(DuplicateRecordError) as exc_info:
            await repo.mark_voted(voter_id, election_id, CAST_AT)
        assert exc_info.value.key == (voter_id, election_id)


def _cast(voter_id, election_id):
    ballot = make_ballot(election_id, uuid4())
    confirmation = VoteConfirmation(
        confirmation_id=uuid4(),
        voter_id=voter_id,
        election_id=election_id,
        confirmed_at=ballot.cast_at,
    )
    eligibility = VoterEligibility.create_initial(voter_id, election_id).mark_as_voted(
        ballot.cast_at
    )
    return eligibility, ballot, confirmation


class TestCastRecorder:
    """Claim, ballot and receipt commit in one transaction."""

    @pytest.mark.asyncio
    async def test_records_all_three(self, sql_session_factory: SessionFactory) -> None:
        recorder = SqlAlchemyCastRecorder(sql_session_factory)
        eligibility, ballot, confirmation = _cast(uuid4(), uuid4())

        await recorder.record(eligibility, ballot, confirmation)

        claims = SqlAlchemyEligibilityRepository(sql_session_factory)
        assert await claims.has_voted(eligibility.voter_id, eligibility.election_id)
        ballots = SqlAlchemyBallotRepository(sql_session_factory)
        assert await ballots.list_by_election(ballot.election_id) == [ballot]
        receipts = SqlAlchemyConfirmationRepository(sql_session_factory)
        assert await receipts.list_by_voter(confirmation.voter_id) == [confirmation]

    @pytest.mark.asyncio
    async def test_failed_ballot_insert_rolls_back_claim(
        self, sql_session_factory: SessionFactory
    ) -> None:
        recorder = SqlAlchemyCastRecorder(sql_session_factory)
        ballots = SqlAlchemyBallotRepository(sql_session_factory)
        eligibility, ballot, confirmation = _cast(uuid4(), uuid4())
        await ballots.save(ballot)

        with pytest.raises(DuplicateRecordError) as exc_info:
            await recorder.record(eligibility, ballot, confirmation)

        assert exc_info.value.record_type == "ballot"
        claims = SqlAlchemyEligibilityRepository(sql_session_factory)
        assert await claims.get(eligibility.voter_id, eligibility.election_id) is None
        receipts = SqlAlchemyConfirmationRepository(sql_session_factory)
        assert await receipts.list_by_voter(confirmation.voter_id) == []

    @pytest.mark.asyncio
    async def test_second_claim_stores_no_ballot(
        self, sql_session_factory: SessionFactory
    ) -> None:
        recorder = SqlAlchemyCastRecorder(sql_session_factory)
        ballots = SqlAlchemyBallotRepository(sql_session_factory)
        voter_id, election_id = uuid4(), uuid4()
        await recorder.record(*_cast(voter_id, election_id))

        with pytest.raises(DuplicateRecordError) as exc_info:
            await recorder.record(*_cast(voter_id, election_id))

        assert exc_info.value.record_type == "voter_eligibility"
        assert await ballots.count_by_election(election_id) == 1


class TestTieResolutionStore:
    """One resolution per election."""

    @pytest.mark.asyncio
    async def test_round_trip_and_uniqueness(
        self, sql_session_factory: SessionFactory
    ) -> None:
        repo = SqlAlchemyTieResolutionRepository(sql_session_factory)
        election_id = uuid4()
        recall = TieResolution(
            resolution_id=uuid4(),
            election_id=election_id,
            kind=TieResolutionKind.RECALL,
            winner_candidate_id=None,
            resolved_by="admin",
            resolved_at=CAST_AT,
            notes="Rerun scheduled",
        )
        await repo.save(recall)
        assert await repo.get_by_election(election_id) == recall

        second = TieResolution(
            resolution_id=uuid4(),
            election_id=election_id,
            kind=TieResolutionKind.MANUAL,
            winner_candidate_id=uuid4(),
            resolved_by="admin",
            resolved_at=CAST_AT,
        )
        with pytest.raises(DuplicateRecordError):
            await repo.save(second)
        assert await repo.get_by_election(uuid4()) is None


class TestAuditLogStore:
    """Append-only audit trail."""

    @pytest.mark.asyncio
    async def test_append_and_list(self, sql_session_factory: SessionFactory) -> None:
        repo = SqlAlchemyAuditLogRepository(sql_session_factory)
        election_id = uuid4()
        entry = AuditEntry(
            entry_id=uuid4(),
            election_id=election_id,
            election_name="Board",
            previous_status="DRAFT",
            new_status="ACTIVE",
            recorded_at=CAST_AT,
            details={"counting_rule": "FPTP"},
        )

        await repo.append(entry)

        (stored,) = await repo.list_by_election(election_id)
        assert stored == entry
        assert stored.details == {"counting_rule": "FPTP"}
        assert await repo.count() == 1
        assert await repo.list_all() == [stored]
