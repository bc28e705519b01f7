"""Simplified single-winner single transferable vote.

Only one elimination and redistribution round is performed. This is not a
full STV count: a candidate without a quota after that round can still win
on the highest tally.

When two or more candidates share that highest tally, all of them are
flagged as tied and no winner is declared. The first candidate at the
maximum is not picked; the tie is left for TieResolutionService.
"""

from __future__ import annotations

from collections.abc import Sequence

from votecast.domain.models.ballot import Ballot
from votecast.domain.models.candidate import Candidate
from votecast.domain.models.vote_result import VoteResult
from votecast.domain.services.voting_strategies.base import (
    VotingStrategy,
    build_results,
    is_ranked_shape,
    lowest_candidate,
    majority_threshold,
    tally_round,
    top_of_tally,
)


class SingleTransferableVoteStrategy(VotingStrategy):
    """Quota check, then at most one elimination round."""

    def calculate_results(
        self, ballots: Sequence[Ballot], candidates: Sequence[Candidate]
    ) -> list[VoteResult]:
        total = len(ballots)
        quota = majority_threshold(total)
        active = {candidate.candidate_id for candidate in candidates}
        counts = tally_round(ballots, active)

        for candidate_id, votes in counts.items():
            if votes >= quota:
                return build_results(candidates, counts, total, winner=candidate_id)

        if len(active) > 1:
            active.discard(lowest_candidate(counts))
            counts = tally_round(ballots, active)

        winner, tied = top_of_tally(counts)
        return build_results(candidates, counts, total, winner, tied)

    def validate_ballot(self, ballot: Ballot, candidate_count: int) -> bool:
        return is_ranked_shape(ballot, candidate_count)
