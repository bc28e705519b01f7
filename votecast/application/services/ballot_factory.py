"""Ballot factory.

Builds a Ballot of the right shape for an election's counting rule from
raw selection input. Plurality ballots carry exactly the single choice;
ranked ballots carry the ranking as given. Counting-rule validation
(duplicates, length) is left to the rule's strategy.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID, uuid4

from votecast.application.ports.time_authority import TimeAuthorityProtocol
from votecast.domain.errors import InvalidBallotShapeError, UnknownCountingRuleError
from votecast.domain.models.ballot import Ballot
from votecast.domain.models.election import CountingRule


def coerce_counting_rule(counting_rule: CountingRule | str) -> CountingRule:
    """Resolve a counting rule value, failing closed on anything unknown.

    Raises:
        UnknownCountingRuleError: If the value is not a supported rule.
    """
    if isinstance(counting_rule, CountingRule):
        return counting_rule
    try:
        return CountingRule(counting_rule)
    except ValueError:
        raise UnknownCountingRuleError(counting_rule) from None


class BallotFactory:
    """Creates fresh ballots with a new ID and the current timestamp."""

    def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
        self._time = time_authority

    def create_ballot(
        self,
        counting_rule: CountingRule | str,
        election_id: UUID,
        single_choice: UUID | None = None,
        ranked_choices: Sequence[UUID] | None = None,
    ) -> Ballot:
        """Build a ballot for ``counting_rule``.

        Args:
            counting_rule: The election's counting rule (or its stored code).
            election_id: The election the ballot belongs to.
            single_choice: The chosen candidate (plurality).
            ranked_choices: Candidates in preference order (ranked rules).

        Returns:
            A new Ballot.

        Raises:
            InvalidBallotShapeError: If the selection the rule needs is missing.
            UnknownCountingRuleError: If the counting rule is not supported.
        """
        rule = coerce_counting_rule(counting_rule)

        if rule is CountingRule.PLURALITY:
            if single_choice is None:
                raise InvalidBallotShapeError(
                    rule.value, "a single candidate choice is required"
                )
            preferences: tuple[UUID, ...] = (single_choice,)
        elif rule.is_ranked:
            if not ranked_choices:
                raise InvalidBallotShapeError(
                    rule.value, "ranked preferences are required"
                )
            preferences = tuple(ranked_choices)
        else:
            raise UnknownCountingRuleError(rule)

        return Ballot(
            ballot_id=uuid4(),
            election_id=election_id,
            preferences=preferences,
            cast_at=self._time.utcnow(),
        )
