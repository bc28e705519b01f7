"""Voting service - casting and tabulation orchestrator.

Casting sequences seven fail-fast preconditions, builds the ballot,
anonymizes it, and persists the eligibility claim, the ballot and the
confirmation. Tabulation loads a snapshot of a closed election's ballots
and runs the counting strategy selected by the election's rule.

Writes for a cast:
The eligibility claim, the anonymous ballot and the confirmation receipt
go to the CastRecorder as one unit, so a failed cast leaves nothing
behind. The store's (voter_id, election_id) uniqueness rejects a
concurrent second cast inside that unit; the rejection is raised as
AlreadyVotedError.

The stored ballot is the one the factory built and the counting rule
validated.

Anonymity of logs: no log line here carries both the voter ID and any
preference content.
"""

from __future__ import annotations

from uuid import UUID

from structlog import get_logger

from votecast.application.dtos.voting import CastVoteRequest
from votecast.application.ports.ballot_repository import BallotRepositoryProtocol
from votecast.application.ports.candidate_repository import (
    CandidateRepositoryProtocol,
)
from votecast.application.ports.cast_recorder import CastRecorderProtocol
from votecast.application.ports.confirmation_repository import (
    ConfirmationRepositoryProtocol,
)
from votecast.application.ports.election_repository import (
    ElectionRepositoryProtocol,
)
from votecast.application.ports.eligibility_repository import (
    EligibilityRepositoryProtocol,
)
from votecast.application.ports.time_authority import TimeAuthorityProtocol
from votecast.application.services.anonymous_ballot_adapter import (
    AnonymousBallotAdapter,
)
from votecast.application.services.ballot_factory import (
    BallotFactory,
    coerce_counting_rule,
)
from votecast.domain.errors import (
    AlreadyVotedError,
    DuplicateRecordError,
    ElectionNotActiveError,
    ElectionNotClosedError,
    ElectionNotFoundError,
    InvalidBallotShapeError,
    InvalidCandidateError,
    OutsideVotingWindowError,
    VoterNotApprovedError,
)
from votecast.domain.models.election import Election, ElectionStatus
from votecast.domain.models.vote_confirmation import VoteConfirmation
from votecast.domain.models.vote_result import VoteResult
from votecast.domain.models.voter import Voter
from votecast.domain.models.voter_eligibility import VoterEligibility
from votecast.domain.services.voting_strategies import strategy_for

logger = get_logger(__name__)


class VotingService:
    """Casts anonymous votes and tabulates closed elections.

    Example:
        >>> service = VotingService(...)
        >>> confirmation = await service.cast_vote(
        ...     voter, CastVoteRequest(election_id=eid, candidate_id=cid)
        ... )
        >>> confirmation.confirmation_code
        '3F2A9C1B'
    """

    def __init__(
        self,
        election_repo: ElectionRepositoryProtocol,
        candidate_repo: CandidateRepositoryProtocol,
        ballot_repo: BallotRepositoryProtocol,
        eligibility_repo: EligibilityRepositoryProtocol,
        confirmation_repo: ConfirmationRepositoryProtocol,
        cast_recorder: CastRecorderProtocol,
        time_authority: TimeAuthorityProtocol,
        ballot_factory: BallotFactory | None = None,
        anonymizer: AnonymousBallotAdapter | None = None,
    ) -> None:
        """Initialize the voting service.

        Args:
            election_repo: Election lookup.
            candidate_repo: Candidate lookup by election.
            ballot_repo: Anonymous ballot storage.
            eligibility_repo: Voted flags with (voter, election) uniqueness.
            confirmation_repo: Proof-of-cast receipts.
            cast_recorder: Atomic write of claim, ballot and receipt.
            time_authority: Clock for the voting window and timestamps.
            ballot_factory: Optional factory; built from time_authority if omitted.
            anonymizer: Optional adapter; built from time_authority if omitted.
        """
        self._election_repo = election_repo
        self._candidate_repo = candidate_repo
        self._ballot_repo = ballot_repo
        self._eligibility_repo = eligibility_repo
        self._confirmation_repo = confirmation_repo
        self._cast_recorder = cast_recorder
        self._time = time_authority
        self._factory = ballot_factory or BallotFactory(time_authority)
        self._anonymizer = anonymizer or AnonymousBallotAdapter(time_authority)

    async def cast_vote(
        self, voter: Voter, request: CastVoteRequest
    ) -> VoteConfirmation:
        """Cast one voter's ballot in one election.

        Args:
            voter: The authenticated voter.
            request: Election ID plus a single choice or a ranking.

        Returns:
            The voter's confirmation receipt.

        Raises:
            VoterNotApprovedError: Registration is not APPROVED.
            ElectionNotFoundError: The election does not exist.
            ElectionNotActiveError: The election is not ACTIVE.
            OutsideVotingWindowError: Now is outside [start_date, end_date].
            AlreadyVotedError: The voter already voted in this election.
            InvalidCandidateError: A referenced candidate is not in the election.
            InvalidBallotShapeError: The ballot does not fit the counting rule.
            AnonymityViolationError: Internal invariant failure (fatal).
        """
        election_id = request.election_id
        log = logger.bind(voter_id=str(voter.voter_id), election_id=str(election_id))

        # Step 1: registration
        if not voter.can_vote():
            log.warning(
                "vote_rejected_not_approved",
                registration_status=voter.registration_status.value,
            )
            raise VoterNotApprovedError(voter.voter_id, voter.registration_status)

        # Step 2: election exists
        election = await self._election_repo.get(election_id)
        if election is None:
            log.warning("vote_rejected_election_not_found")
            raise ElectionNotFoundError(election_id)

        # Step 3: election accepting votes
        if election.status is not ElectionStatus.ACTIVE:
            log.warning("vote_rejected_not_active", status=election.status.value)
            raise ElectionNotActiveError(election_id, election.status)

        # Step 4: voting window
        now = self._time.utcnow()
        if not election.is_within_voting_window(now):
            log.warning("vote_rejected_outside_window", attempted_at=now.isoformat())
            raise OutsideVotingWindowError(
                election_id, now, election.start_date, election.end_date
            )

        # Step 5: one vote per voter
        if await self._eligibility_repo.has_voted(voter.voter_id, election_id):
            log.info("vote_rejected_already_voted", detection="pre_check")
            raise AlreadyVotedError(voter.voter_id, election_id)

        # Step 6: candidates belong to the election
        candidates = await self._candidate_repo.list_by_election(election_id)
        candidate_ids = {candidate.candidate_id for candidate in candidates}
        for candidate_id in request.referenced_candidates:
            if candidate_id not in candidate_ids:
                log.warning("vote_rejected_invalid_candidate")
                raise InvalidCandidateError(election_id, candidate_id)

        # Step 7: ballot shape for the counting rule
        rule = coerce_counting_rule(election.counting_rule)
        ballot = self._factory.create_ballot(
            rule,
            election_id,
            single_choice=request.candidate_id,
            ranked_choices=request.preferences,
        )
        if not strategy_for(rule).validate_ballot(ballot, len(candidates)):
            log.warning("vote_rejected_invalid_ballot", counting_rule=rule.value)
            raise InvalidBallotShapeError(
                rule.value, "ballot rejected by counting rule validation"
            )

        ballot, confirmation = self._anonymizer.anonymize_ballot(
            voter.voter_id, ballot
        )
        self._anonymizer.verify_anonymity(ballot, voter_id=voter.voter_id)

        eligibility = VoterEligibility.create_initial(
            voter.voter_id, election_id
        ).mark_as_voted(confirmation.confirmed_at)
        try:
            await self._cast_recorder.record(eligibility, ballot, confirmation)
        except DuplicateRecordError as e:
            if e.record_type != "voter_eligibility":
                raise
            log.info("vote_rejected_already_voted", detection="store_constraint")
            raise AlreadyVotedError(voter.voter_id, election_id) from None

        log.info(
            "vote_cast",
            confirmation_id=str(confirmation.confirmation_id),
            counting_rule=rule.value,
        )
        return confirmation

    async def calculate_results(self, election_id: UUID) -> list[VoteResult]:
        """Tabulate a closed election.

        Pure function of the stored ballots: two calls with no write in
        between return identical results.

        Raises:
            ElectionNotFoundError: The election does not exist.
            ElectionNotClosedError: The election is not CLOSED.
        """
        log = logger.bind(election_id=str(election_id))
        election = await self._require_closed(election_id)

        ballots = await self._ballot_repo.list_by_election(election_id)
        candidates = await self._candidate_repo.list_by_election(election_id)
        strategy = strategy_for(coerce_counting_rule(election.counting_rule))
        results = strategy.calculate_results(ballots, candidates)

        log.info(
            "results_calculated",
            counting_rule=election.counting_rule.value,
            ballot_count=len(ballots),
            candidate_count=len(candidates),
            has_winner=any(r.is_winner for r in results),
            has_tie=any(r.is_tied for r in results),
        )
        return results

    async def has_voted(self, voter_id: UUID, election_id: UUID) -> bool:
        return await self._eligibility_repo.has_voted(voter_id, election_id)

    async def get_vote_count(self, election_id: UUID) -> int:
        """Number of ballots stored for an election."""
        return await self._ballot_repo.count_by_election(election_id)

    async def get_voter_confirmations(self, voter_id: UUID) -> list[VoteConfirmation]:
        """The voter's voting history, newest first."""
        confirmations = await self._confirmation_repo.list_by_voter(voter_id)
        return sorted(confirmations, key=lambda c: c.confirmed_at, reverse=True)

    async def _require_closed(self, election_id: UUID) -> Election:
        election = await self._election_repo.get(election_id)
        if election is None:
            raise ElectionNotFoundError(election_id)
        if election.status is not ElectionStatus.CLOSED:
            raise ElectionNotClosedError(election_id, election.status)
        return election
