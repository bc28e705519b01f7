"""Counting strategies and their dispatch over CountingRule.

PREFERENTIAL elections are counted with the simplified STV rule.
"""

from __future__ import annotations

from votecast.domain.errors.invariant import UnknownCountingRuleError
from votecast.domain.models.election import CountingRule
from votecast.domain.services.voting_strategies.base import VotingStrategy
from votecast.domain.services.voting_strategies.instant_runoff import (
    InstantRunoffStrategy,
)
from votecast.domain.services.voting_strategies.plurality import PluralityStrategy
from votecast.domain.services.voting_strategies.single_transferable import (
    SingleTransferableVoteStrategy,
)


def strategy_for(counting_rule: CountingRule) -> VotingStrategy:
    """Select the strategy for a counting rule.

    Raises:
        UnknownCountingRuleError: If the rule has no strategy.
    """
    if counting_rule is CountingRule.PLURALITY:
        return PluralityStrategy()
    elif counting_rule is CountingRule.INSTANT_RUNOFF:
        return InstantRunoffStrategy()
    elif counting_rule in (CountingRule.STV, CountingRule.PREFERENTIAL):
        return SingleTransferableVoteStrategy()
    raise UnknownCountingRuleError(counting_rule)


__all__ = [
    "InstantRunoffStrategy",
    "PluralityStrategy",
    "SingleTransferableVoteStrategy",
    "VotingStrategy",
    "strategy_for",
]
