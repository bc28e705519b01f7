"""Election service - lifecycle state machine and administration.

Transitions:
    activate_election: DRAFT -> ACTIVE, guarded by a minimum candidate count.
    close_election: DRAFT|ACTIVE -> CLOSED, no guard (zero votes is valid).

Every transition is a compare-and-swap on the stored status, so a CLOSED
election can never be moved back by a concurrent writer (another service
instance or the lifecycle worker process). Only a successful swap is
emitted to the lifecycle observers through the injected
ElectionEventEmitter. Observer failures never undo or fail a transition.

Within one service instance, lifecycle transitions and candidate changes
for the same election are serialized by a per-election asyncio.Lock, so the
candidate set checked at activation is the one that becomes ACTIVE.

Administration (create, candidates, delete) is limited to DRAFT elections
where it changes the candidate set.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from uuid import UUID, uuid4

from structlog import get_logger

from votecast.application.ports.candidate_repository import (
    CandidateRepositoryProtocol,
)
from votecast.application.ports.election_repository import (
    ElectionRepositoryProtocol,
)
from votecast.application.ports.time_authority import TimeAuthorityProtocol
from votecast.application.services.ballot_factory import coerce_counting_rule
from votecast.application.services.election_event_emitter import (
    ElectionEventEmitter,
)
from votecast.domain.errors import (
    CandidateNotFoundError,
    CandidateSetFrozenError,
    ElectionNotDraftError,
    ElectionNotFoundError,
    InsufficientCandidatesError,
    InvalidElectionScheduleError,
    InvalidStateTransitionError,
)
from votecast.domain.events.election_lifecycle import ElectionStateChangedEvent
from votecast.domain.models.candidate import Candidate
from votecast.domain.models.election import CountingRule, Election, ElectionStatus

logger = get_logger(__name__)

DEFAULT_MIN_CANDIDATES = 2


class ElectionService:
    """Drives the election lifecycle and election administration."""

    def __init__(
        self,
        election_repo: ElectionRepositoryProtocol,
        candidate_repo: CandidateRepositoryProtocol,
        emitter: ElectionEventEmitter,
        time_authority: TimeAuthorityProtocol,
        min_candidates: int = DEFAULT_MIN_CANDIDATES,
    ) -> None:
        """Initialize the election service.

        Args:
            election_repo: Election storage.
            candidate_repo: Candidate storage.
            emitter: Lifecycle event fan-out to observers.
            time_authority: Clock for event timestamps and schedule checks.
            min_candidates: Candidates required to activate (at least 2).
        """
        self._election_repo = election_repo
        self._candidate_repo = candidate_repo
        self._emitter = emitter
        self._time = time_authority
        self._min_candidates = min_candidates
        self._locks: dict[UUID, asyncio.Lock] = {}

    async def activate_election(self, election_id: UUID) -> Election:
        """Open a DRAFT election for voting.

        Returns:
            The activated election.

        Raises:
            ElectionNotFoundError: The election does not exist.
            InvalidStateTransitionError: The election is not DRAFT.
            InsufficientCandidatesError: Fewer candidates than required.
        """
        log = logger.bind(election_id=str(election_id))
        async with self._lock_for(election_id):
            election = await self._require(election_id)
            activated = election.with_status(ElectionStatus.ACTIVE)

            candidate_count = await self._candidate_repo.count_by_election(
                election_id
            )
            if candidate_count < self._min_candidates:
                log.warning(
                    "activation_rejected_insufficient_candidates",
                    candidate_count=candidate_count,
                    required=self._min_candidates,
                )
                raise InsufficientCandidatesError(
                    election_id, candidate_count, self._min_candidates
                )

            await self._transition(election, activated)
        log.info("election_activated", candidate_count=candidate_count)
        return activated

    async def close_election(self, election_id: UUID) -> Election:
        """Close an election. Shared by manual and automatic closure.

        Returns:
            The closed election.

        Raises:
            ElectionNotFoundError: The election does not exist.
            InvalidStateTransitionError: The election is already CLOSED.
        """
        async with self._lock_for(election_id):
            election = await self._require(election_id)
            closed = election.with_status(ElectionStatus.CLOSED)
            await self._transition(election, closed)
        logger.info(
            "election_closed",
            election_id=str(election_id),
            previous_status=election.status.value,
        )
        return closed

    async def create_election(
        self,
        name: str,
        counting_rule: CountingRule | str,
        start_date: datetime,
        end_date: datetime,
        description: str = "",
    ) -> Election:
        """Create a DRAFT election.

        Raises:
            InvalidElectionScheduleError: End is not after start, or start
                lies before today.
            UnknownCountingRuleError: The counting rule is not supported.
        """
        if end_date <= start_date:
            raise InvalidElectionScheduleError(
                start_date, end_date, "end date must be after start date"
            )
        if start_date.date() < self._time.utcnow().date():
            raise InvalidElectionScheduleError(
                start_date, end_date, "start date cannot be in the past"
            )

        election = Election(
            election_id=uuid4(),
            name=name,
            counting_rule=coerce_counting_rule(counting_rule),
            start_date=start_date,
            end_date=end_date,
            status=ElectionStatus.DRAFT,
            description=description,
        )
        await self._election_repo.save(election)
        logger.info(
            "election_created",
            election_id=str(election.election_id),
            counting_rule=election.counting_rule.value,
        )
        return election

    async def add_candidate(
        self, election_id: UUID, name: str, party: str = "", biography: str = ""
    ) -> Candidate:
        """Add a candidate to a DRAFT election.

        Raises:
            ElectionNotFoundError: The election does not exist.
            CandidateSetFrozenError: The election has left DRAFT.
        """
        async with self._lock_for(election_id):
            election = await self._require_draft_candidates(election_id)
            candidate = Candidate(
                candidate_id=uuid4(),
                election_id=election.election_id,
                name=name,
                party=party,
                biography=biography,
            )
            await self._candidate_repo.save(candidate)
        logger.info(
            "candidate_added",
            election_id=str(election_id),
            candidate_id=str(candidate.candidate_id),
        )
        return candidate

    async def remove_candidate(self, election_id: UUID, candidate_id: UUID) -> None:
        """Remove a candidate from a DRAFT election.

        Raises:
            ElectionNotFoundError: The election does not exist.
            CandidateSetFrozenError: The election has left DRAFT.
            CandidateNotFoundError: The candidate is not in this election.
        """
        async with self._lock_for(election_id):
            await self._require_draft_candidates(election_id)
            candidate = await self._candidate_repo.get(candidate_id)
            if candidate is None or candidate.election_id != election_id:
                raise CandidateNotFoundError(election_id, candidate_id)
            await self._candidate_repo.delete(candidate_id)
        logger.info(
            "candidate_removed",
            election_id=str(election_id),
            candidate_id=str(candidate_id),
        )

    async def delete_election(self, election_id: UUID) -> None:
        """Delete a DRAFT election together with its candidates.

        Raises:
            ElectionNotFoundError: The election does not exist.
            ElectionNotDraftError: The election has left DRAFT.
        """
        async with self._lock_for(election_id):
            election = await self._require(election_id)
            if election.status is not ElectionStatus.DRAFT:
                raise ElectionNotDraftError(election_id, election.status)
            await self._candidate_repo.delete_by_election(election_id)
            await self._election_repo.delete(election_id)
        logger.info("election_deleted", election_id=str(election_id))

    async def get_election(self, election_id: UUID) -> Election | None:
        return await self._election_repo.get(election_id)

    async def get_candidates(self, election_id: UUID) -> list[Candidate]:
        return await self._candidate_repo.list_by_election(election_id)

    async def list_elections(self) -> list[Election]:
        return await self._election_repo.list_all()

    async def list_elections_by_status(self, status: ElectionStatus) -> list[Election]:
        return await self._election_repo.list_by_status(status)

    async def _require(self, election_id: UUID) -> Election:
        election = await self._election_repo.get(election_id)
        if election is None:
            raise ElectionNotFoundError(election_id)
        return election

    async def _require_draft_candidates(self, election_id: UUID) -> Election:
        election = await self._require(election_id)
        if election.status is not ElectionStatus.DRAFT:
            raise CandidateSetFrozenError(election_id, election.status)
        return election

    def _lock_for(self, election_id: UUID) -> asyncio.Lock:
        return self._locks.setdefault(election_id, asyncio.Lock())

    async def _transition(self, before: Election, after: Election) -> None:
        """Swap the stored status from ``before`` to ``after`` and emit.

        Raises:
            ElectionNotFoundError: The election was deleted meanwhile.
            InvalidStateTransitionError: The stored status changed since
                ``before`` was read.
        """
        swapped = await self._election_repo.update_status(
            after.election_id, before.status, after.status
        )
        if not swapped:
            current = await self._require(after.election_id)
            logger.warning(
                "transition_lost_to_concurrent_update",
                election_id=str(after.election_id),
                expected_status=before.status.value,
                current_status=current.status.value,
                target_status=after.status.value,
            )
            raise InvalidStateTransitionError(
                election_id=after.election_id,
                from_status=current.status,
                to_status=after.status,
                allowed_transitions=list(current.status.valid_transitions()),
            )
        event = ElectionStateChangedEvent(
            election=after,
            previous_status=before.status,
            new_status=after.status,
            occurred_at=self._time.utcnow(),
        )
        await self._emitter.emit(event)
