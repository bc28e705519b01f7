"""Tie resolution service.

After an election closes with an exact tie among its top vote-getters,
an administrator records once how the tie is broken:

- RANDOM: uniform draw among the tied candidates from the operating
  system's CSPRNG (``secrets``); not seedable, not reproducible.
- MANUAL: the administrator names one of the tied candidates.
- RECALL: no winner; the election is void and must be rerun.

One resolution per election, ever. The store's uniqueness on election_id
guards concurrent attempts; its rejection surfaces as
TieAlreadyResolvedError.
"""

from __future__ import annotations

import secrets
from uuid import UUID, uuid4

from structlog import get_logger

from votecast.application.dtos.voting import TieResolutionRequest
from votecast.application.ports.tie_resolution_repository import (
    TieResolutionRepositoryProtocol,
)
from votecast.application.ports.time_authority import TimeAuthorityProtocol
from votecast.application.services.voting_service import VotingService
from votecast.domain.errors import (
    DuplicateRecordError,
    InvalidTieSelectionError,
    NoTieError,
    TieAlreadyResolvedError,
)
from votecast.domain.models.tie_resolution import TieResolution, TieResolutionKind
from votecast.domain.models.vote_result import ElectionOutcome

logger = get_logger(__name__)


class TieResolutionService:
    """Records and reports tie resolutions for closed elections."""

    def __init__(
        self,
        voting_service: VotingService,
        resolution_repo: TieResolutionRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        """Initialize the tie resolution service.

        Args:
            voting_service: Source of the closed election's results.
            resolution_repo: One-per-election resolution storage.
            time_authority: Clock for resolution timestamps.
        """
        self._voting = voting_service
        self._resolution_repo = resolution_repo
        self._time = time_authority

    async def resolve_tie(
        self,
        election_id: UUID,
        kind: TieResolutionKind,
        selected_candidate_id: UUID | None = None,
        notes: str | None = None,
        resolved_by: str = "system",
    ) -> TieResolution:
        """Record how a closed election's tie is broken.

        Args:
            election_id: The tied election.
            kind: RANDOM, MANUAL or RECALL.
            selected_candidate_id: Required for MANUAL, ignored otherwise.
            notes: Optional free text.
            resolved_by: Identity of the resolving administrator.

        Returns:
            The stored resolution.

        Raises:
            ElectionNotFoundError: The election does not exist.
            ElectionNotClosedError: The election is not CLOSED.
            NoTieError: The results carry no tie.
            TieAlreadyResolvedError: A resolution already exists.
            InvalidTieSelectionError: MANUAL pick missing or not tied.
        """
        log = logger.bind(election_id=str(election_id), kind=kind.value)

        results = await self._voting.calculate_results(election_id)
        tied = [result.candidate_id for result in results if result.is_tied]
        if not tied:
            log.warning("tie_resolution_rejected_no_tie")
            raise NoTieError(election_id)

        existing = await self._resolution_repo.get_by_election(election_id)
        if existing is not None:
            log.warning(
                "tie_resolution_rejected_already_resolved",
                existing_resolution_id=str(existing.resolution_id),
            )
            raise TieAlreadyResolvedError(election_id, existing.resolution_id)

        if kind is TieResolutionKind.RANDOM:
            winner: UUID | None = secrets.choice(tied)
        elif kind is TieResolutionKind.MANUAL:
            if selected_candidate_id is None or selected_candidate_id not in tied:
                raise InvalidTieSelectionError(election_id, kind, selected_candidate_id)
            winner = selected_candidate_id
        else:
            winner = None

        resolution = TieResolution(
            resolution_id=uuid4(),
            election_id=election_id,
            kind=kind,
            winner_candidate_id=winner,
            resolved_by=resolved_by,
            resolved_at=self._time.utcnow(),
            notes=notes,
        )
        try:
            await self._resolution_repo.save(resolution)
        except DuplicateRecordError:
            log.warning("tie_resolution_rejected_already_resolved")
            raise TieAlreadyResolvedError(election_id) from None

        log.info(
            "tie_resolved",
            resolution_id=str(resolution.resolution_id),
            winner_candidate_id=str(winner) if winner is not None else None,
            tied_count=len(tied),
        )
        return resolution

    async def resolve(self, request: TieResolutionRequest) -> TieResolution:
        """Resolve a tie from a validated request model."""
        return await self.resolve_tie(
            request.election_id,
            request.kind,
            selected_candidate_id=request.candidate_id,
            notes=request.notes,
            resolved_by=request.resolved_by,
        )

    async def get_resolution(self, election_id: UUID) -> TieResolution | None:
        return await self._resolution_repo.get_by_election(election_id)

    async def get_outcome(self, election_id: UUID) -> ElectionOutcome:
        """Summarize a closed election for reporting.

        The recorded resolution decides the winner when present (None for
        RECALL); otherwise the clear winner is reported, or ``has_tie``
        while a tie remains unresolved.

        Raises:
            ElectionNotFoundError: The election does not exist.
            ElectionNotClosedError: The election is not CLOSED.
        """
        results = await self._voting.calculate_results(election_id)
        resolution = await self._resolution_repo.get_by_election(election_id)

        if resolution is not None:
            return ElectionOutcome(
                election_id=election_id,
                results=tuple(results),
                winner_candidate_id=resolution.winner_candidate_id,
                has_tie=False,
                resolution_kind=resolution.kind.value,
            )

        winner = next((r.candidate_id for r in results if r.is_winner), None)
        return ElectionOutcome(
            election_id=election_id,
            results=tuple(results),
            winner_candidate_id=winner,
            has_tie=any(r.is_tied for r in results),
        )
