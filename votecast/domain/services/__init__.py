"""Domain services for votecast.

Pure business logic with no infrastructure dependencies.

Available services:
- strategy_for: Selects the counting strategy for an election's rule
- PluralityStrategy, InstantRunoffStrategy, SingleTransferableVoteStrategy
"""

from votecast.domain.services.voting_strategies import (
    InstantRunoffStrategy,
    PluralityStrategy,
    SingleTransferableVoteStrategy,
    VotingStrategy,
    strategy_for,
)

__all__ = [
    "InstantRunoffStrategy",
    "PluralityStrategy",
    "SingleTransferableVoteStrategy",
    "VotingStrategy",
    "strategy_for",
]
