"""SQLAlchemy async repositories implementing the application ports.

Each repository takes an ``async_sessionmaker`` and opens one short
transaction per call. Uniqueness violations surface from the driver as
``sqlalchemy.exc.IntegrityError`` and are raised as DuplicateRecordError,
which the services translate into domain errors.

Usage:
    from votecast.bootstrap.database import get_session_factory

    session_factory = get_session_factory()
    ballots = SqlAlchemyBallotRepository(session_factory)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from votecast.domain.errors import DuplicateRecordError
from votecast.domain.models.audit_entry import AuditEntry
from votecast.domain.models.ballot import Ballot
from votecast.domain.models.candidate import Candidate
from votecast.domain.models.election import CountingRule, Election, ElectionStatus
from votecast.domain.models.tie_resolution import TieResolution, TieResolutionKind
from votecast.domain.models.vote_confirmation import VoteConfirmation
from votecast.domain.models.voter_eligibility import VoterEligibility
from votecast.infrastructure.persistence.tables import (
    audit_log,
    ballots,
    candidates,
    elections,
    tie_resolutions,
    vote_confirmations,
    voter_eligibility,
)

logger = get_logger(__name__)


def _to_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc)


def _from_db(value: datetime) -> datetime:
    """Re-attach UTC to timestamps read back from drivers that drop it."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class _SessionRepository:
    """Base for repositories sharing one session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def _insert(
        self, statement: Any, record_type: str, key: tuple[object, ...]
    ) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await _execute_unique(session, statement, record_type, key)

    async def _write(self, *statements: Any) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                for statement in statements:
                    await session.execute(statement)

    async def _fetch(self, statement: Any) -> list[Any]:
        async with self._session_factory() as session:
            result = await session.execute(statement)
            return list(result.mappings().all())

    async def _scalar(self, statement: Any) -> Any:
        async with self._session_factory() as session:
            return (await session.execute(statement)).scalar_one()


async def _execute_unique(
    session: AsyncSession, statement: Any, record_type: str, key: tuple[object, ...]
) -> None:
    """Execute an insert, raising DuplicateRecordError on a unique violation.

    The enclosing transaction is rolled back as the error leaves it.
    """
    try:
        await session.execute(statement)
    except IntegrityError as e:
        logger.info(
            "unique_constraint_violation",
            record_type=record_type,
            error_type=type(e.orig).__name__ if e.orig is not None else None,
        )
        raise DuplicateRecordError(record_type, key) from e


def _election_from_row(row: Any) -> Election:
    return Election(
        election_id=row["election_id"],
        name=row["name"],
        description=row["description"],
        counting_rule=CountingRule(row["counting_rule"]),
        status=ElectionStatus(row["status"]),
        start_date=_from_db(row["start_date"]),
        end_date=_from_db(row["end_date"]),
    )


class SqlAlchemyElectionRepository(_SessionRepository):
    """ElectionRepositoryProtocol backed by the ``elections`` table."""

    async def save(self, election: Election) -> None:
        values = {
            "name": election.name,
            "description": election.description,
            "counting_rule": election.counting_rule.value,
            "status": election.status.value,
            "start_date": _to_utc(election.start_date),
            "end_date": _to_utc(election.end_date),
        }
        async with self._session_factory() as session:
            async with session.begin():
                existing = await session.execute(
                    select(elections.c.election_id).where(
                        elections.c.election_id == election.election_id
                    )
                )
                if existing.first() is None:
                    await session.execute(
                        insert(elections).values(
                            election_id=election.election_id, **values
                        )
                    )
                else:
                    await session.execute(
                        update(elections)
                        .where(elections.c.election_id == election.election_id)
                        .values(**values)
                    )

    async def get(self, election_id: UUID) -> Election | None:
        rows = await self._fetch(
            select(elections).where(elections.c.election_id == election_id)
        )
        return _election_from_row(rows[0]) if rows else None

    async def update_status(
        self, election_id: UUID, expected: ElectionStatus, new: ElectionStatus
    ) -> bool:
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    update(elections)
                    .where(
                        elections.c.election_id == election_id,
                        elections.c.status == expected.value,
                    )
                    .values(status=new.value)
                )
        return result.rowcount == 1

    async def list_all(self) -> list[Election]:
        rows = await self._fetch(
            select(elections).order_by(elections.c.start_date.desc())
        )
        return [_election_from_row(row) for row in rows]

    async def list_by_status(self, status: ElectionStatus) -> list[Election]:
        rows = await self._fetch(
            select(elections)
            .where(elections.c.status == status.value)
            .order_by(elections.c.end_date)
        )
        return [_election_from_row(row) for row in rows]

    async def delete(self, election_id: UUID) -> None:
        await self._write(
            delete(elections).where(elections.c.election_id == election_id)
        )


def _candidate_from_row(row: Any) -> Candidate:
    return Candidate(
        candidate_id=row["candidate_id"],
        election_id=row["election_id"],
        name=row["name"],
        party=row["party"],
        biography=row["biography"],
    )


class SqlAlchemyCandidateRepository(_SessionRepository):
    """CandidateRepositoryProtocol backed by the ``candidates`` table."""

    async def save(self, candidate: Candidate) -> None:
        await self._insert(
            insert(candidates).values(
                candidate_id=candidate.candidate_id,
                election_id=candidate.election_id,
                name=candidate.name,
                party=candidate.party,
                biography=candidate.biography,
            ),
            "candidate",
            (candidate.candidate_id,),
        )

    async def get(self, candidate_id: UUID) -> Candidate | None:
        rows = await self._fetch(
            select(candidates).where(candidates.c.candidate_id == candidate_id)
        )
        return _candidate_from_row(rows[0]) if rows else None

    async def list_by_election(self, election_id: UUID) -> list[Candidate]:
        rows = await self._fetch(
            select(candidates)
            .where(candidates.c.election_id == election_id)
            .order_by(candidates.c.id)
        )
        return [_candidate_from_row(row) for row in rows]

    async def count_by_election(self, election_id: UUID) -> int:
        return int(
            await self._scalar(
                select(func.count())
                .select_from(candidates)
                .where(candidates.c.election_id == election_id)
            )
        )

    async def delete(self, candidate_id: UUID) -> None:
        await self._write(
            delete(candidates).where(candidates.c.candidate_id == candidate_id)
        )

    async def delete_by_election(self, election_id: UUID) -> None:
        await self._write(
            delete(candidates).where(candidates.c.election_id == election_id)
        )


def _ballot_insert(ballot: Ballot) -> Any:
    return insert(ballots).values(
        ballot_id=ballot.ballot_id,
        election_id=ballot.election_id,
        preferences=[str(p) for p in ballot.preferences],
        cast_at=_to_utc(ballot.cast_at),
    )


def _confirmation_insert(confirmation: VoteConfirmation) -> Any:
    return insert(vote_confirmations).values(
        confirmation_id=confirmation.confirmation_id,
        voter_id=confirmation.voter_id,
        election_id=confirmation.election_id,
        confirmed_at=_to_utc(confirmation.confirmed_at),
    )


class SqlAlchemyBallotRepository(_SessionRepository):
    """BallotRepositoryProtocol backed by the ``ballots`` table."""

    async def save(self, ballot: Ballot) -> None:
        await self._insert(
            _ballot_insert(ballot),
            "ballot",
            (ballot.ballot_id,),
        )

    async def list_by_election(self, election_id: UUID) -> list[Ballot]:
        rows = await self._fetch(
            select(ballots)
            .where(ballots.c.election_id == election_id)
            .order_by(ballots.c.id)
        )
        return [
            Ballot(
                ballot_id=row["ballot_id"],
                election_id=row["election_id"],
                preferences=tuple(UUID(p) for p in row["preferences"]),
                cast_at=_from_db(row["cast_at"]),
            )
            for row in rows
        ]

    async def count_by_election(self, election_id: UUID) -> int:
        return int(
            await self._scalar(
                select(func.count())
                .select_from(ballots)
                .where(ballots.c.election_id == election_id)
            )
        )


class SqlAlchemyConfirmationRepository(_SessionRepository):
    """ConfirmationRepositoryProtocol backed by ``vote_confirmations``."""

    async def save(self, confirmation: VoteConfirmation) -> None:
        await self._insert(
            _confirmation_insert(confirmation),
            "vote_confirmation",
            (confirmation.confirmation_id,),
        )

    async def list_by_voter(self, voter_id: UUID) -> list[VoteConfirmation]:
        rows = await self._fetch(
            select(vote_confirmations)
            .where(vote_confirmations.c.voter_id == voter_id)
            .order_by(vote_confirmations.c.confirmed_at.desc())
        )
        return [
            VoteConfirmation(
                confirmation_id=row["confirmation_id"],
                voter_id=row["voter_id"],
                election_id=row["election_id"],
                confirmed_at=_from_db(row["confirmed_at"]),
            )
            for row in rows
        ]


class SqlAlchemyEligibilityRepository(_SessionRepository):
    """EligibilityRepositoryProtocol backed by ``voter_eligibility``.

    mark_voted relies on the (voter_id, election_id) unique constraint, so
    two concurrent claims from different processes cannot both succeed.
    """

    async def has_voted(self, voter_id: UUID, election_id: UUID) -> bool:
        record = await self.get(voter_id, election_id)
        return record is not None and record.has_voted

    async def mark_voted(
        self, voter_id: UUID, election_id: UUID, voted_at: datetime
    ) -> VoterEligibility:
        await self._insert(
            insert(voter_eligibility).values(
                voter_id=voter_id,
                election_id=election_id,
                has_voted=True,
                voted_at=_to_utc(voted_at),
            ),
            "voter_eligibility",
            (voter_id, election_id),
        )
        return VoterEligibility(
            voter_id=voter_id,
            election_id=election_id,
            has_voted=True,
            voted_at=voted_at,
        )

    async def get(self, voter_id: UUID, election_id: UUID) -> VoterEligibility | None:
        rows = await self._fetch(
            select(voter_eligibility).where(
                voter_eligibility.c.voter_id == voter_id,
                voter_eligibility.c.election_id == election_id,
            )
        )
        if not rows:
            return None
        row = rows[0]
        return VoterEligibility(
            voter_id=row["voter_id"],
            election_id=row["election_id"],
            has_voted=bool(row["has_voted"]),
            voted_at=_from_db(row["voted_at"]) if row["voted_at"] else None,
        )


class SqlAlchemyCastRecorder(_SessionRepository):
    """CastRecorderProtocol writing all three cast records in one transaction.

    The claim is inserted first, so a second cast by the same voter fails on
    the (voter_id, election_id) constraint before any ballot row is written.
    """

    async def record(
        self,
        eligibility: VoterEligibility,
        ballot: Ballot,
        confirmation: VoteConfirmation,
    ) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await _execute_unique(
                    session,
                    insert(voter_eligibility).values(
                        voter_id=eligibility.voter_id,
                        election_id=eligibility.election_id,
                        has_voted=True,
                        voted_at=_to_utc(confirmation.confirmed_at),
                    ),
                    "voter_eligibility",
                    (eligibility.voter_id, eligibility.election_id),
                )
                await _execute_unique(
                    session,
                    _ballot_insert(ballot),
                    "ballot",
                    (ballot.ballot_id,),
                )
                await _execute_unique(
                    session,
                    _confirmation_insert(confirmation),
                    "vote_confirmation",
                    (confirmation.confirmation_id,),
                )


class SqlAlchemyTieResolutionRepository(_SessionRepository):
    """TieResolutionRepositoryProtocol backed by ``tie_resolutions``."""

    async def save(self, resolution: TieResolution) -> None:
        await self._insert(
            insert(tie_resolutions).values(
                resolution_id=resolution.resolution_id,
                election_id=resolution.election_id,
                kind=resolution.kind.value,
                winner_candidate_id=resolution.winner_candidate_id,
                resolved_by=resolution.resolved_by,
                resolved_at=_to_utc(resolution.resolved_at),
                notes=resolution.notes,
            ),
            "tie_resolution",
            (resolution.election_id,),
        )

    async def get_by_election(self, election_id: UUID) -> TieResolution | None:
        rows = await self._fetch(
            select(tie_resolutions).where(
                tie_resolutions.c.election_id == election_id
            )
        )
        if not rows:
            return None
        row = rows[0]
        return TieResolution(
            resolution_id=row["resolution_id"],
            election_id=row["election_id"],
            kind=TieResolutionKind(row["kind"]),
            winner_candidate_id=row["winner_candidate_id"],
            resolved_by=row["resolved_by"],
            resolved_at=_from_db(row["resolved_at"]),
            notes=row["notes"],
        )


def _audit_entry_from_row(row: Any) -> AuditEntry:
    return AuditEntry(
        entry_id=row["entry_id"],
        election_id=row["election_id"],
        election_name=row["election_name"],
        previous_status=row["previous_status"],
        new_status=row["new_status"],
        recorded_at=_from_db(row["recorded_at"]),
        details=dict(row["details"] or {}),
    )


class SqlAlchemyAuditLogRepository(_SessionRepository):
    """AuditLogRepositoryProtocol backed by ``election_audit_log``."""

    async def append(self, entry: AuditEntry) -> None:
        await self._insert(
            insert(audit_log).values(
                entry_id=entry.entry_id,
                election_id=entry.election_id,
                election_name=entry.election_name,
                previous_status=entry.previous_status,
                new_status=entry.new_status,
                recorded_at=_to_utc(entry.recorded_at),
                details=entry.details,
            ),
            "audit_entry",
            (entry.entry_id,),
        )

    async def list_by_election(self, election_id: UUID) -> list[AuditEntry]:
        rows = await self._fetch(
            select(audit_log)
            .where(audit_log.c.election_id == election_id)
            .order_by(audit_log.c.id)
        )
        return [_audit_entry_from_row(row) for row in rows]

    async def list_all(self) -> list[AuditEntry]:
        rows = await self._fetch(select(audit_log).order_by(audit_log.c.id))
        return [_audit_entry_from_row(row) for row in rows]

    async def count(self) -> int:
        return int(
            await self._scalar(select(func.count()).select_from(audit_log))
        )
