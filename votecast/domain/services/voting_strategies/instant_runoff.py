"""Instant-runoff (alternative vote) counting."""

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
)


class InstantRunoffStrategy(VotingStrategy):
    """Iterative elimination until a majority or a sole survivor.

    Every round tallies each ballot for its first preference that has not
    been eliminated. A candidate reaching floor(total / 2) + 1 wins at once
    and that round's tally is final. Otherwise the candidate with the fewest
    votes is eliminated (lowest candidate id on equal tallies) and the
    next round starts. Eliminated candidates report zero votes.
    """

    def calculate_results(
        self, ballots: Sequence[Ballot], candidates: Sequence[Candidate]
    ) -> list[VoteResult]:
        total = len(ballots)
        if not candidates:
            return []

        majority = majority_threshold(total)
        active = {candidate.candidate_id for candidate in candidates}
        counts = tally_round(ballots, active)
        winner = None

        while True:
            leaders = [c for c, votes in counts.items() if votes >= majority]
            if leaders:
                winner = leaders[0]
                break
            if len(active) <= 1:
                # Sole survivor wins by elimination if anyone backed them
                survivor = next(iter(active))
                if counts[survivor] > 0:
                    winner = survivor
                break
            active.discard(lowest_candidate(counts))
            counts = tally_round(ballots, active)

        return build_results(candidates, counts, total, winner)

    def validate_ballot(self, ballot: Ballot, candidate_count: int) -> bool:
        return is_ranked_shape(ballot, candidate_count)
