"""First past the post counting."""

from __future__ import annotations

from collections.abc import Sequence

from votecast.domain.models.ballot import Ballot
from votecast.domain.models.candidate import Candidate
from votecast.domain.models.vote_result import VoteResult
from votecast.domain.services.voting_strategies.base import (
    VotingStrategy,
    build_results,
    top_of_tally,
)


class PluralityStrategy(VotingStrategy):
    """Each ballot counts once for its only preference.

    The candidate with the highest tally wins. When two or more candidates
    share the highest tally they are all flagged tied and nobody is marked
    winner; the tie must then be resolved after closure.
    """

    def calculate_results(
        self, ballots: Sequence[Ballot], candidates: Sequence[Candidate]
    ) -> list[VoteResult]:
        counts = {candidate.candidate_id: 0 for candidate in candidates}
        for ballot in ballots:
            choice = ballot.first_preference
            if choice in counts:
                counts[choice] += 1

        winner, tied = top_of_tally(counts)
        return build_results(candidates, counts, len(ballots), winner, tied)

    def validate_ballot(self, ballot: Ballot, candidate_count: int) -> bool:
        return len(ballot.preferences) == 1
