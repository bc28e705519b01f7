"""Configuration for votecast."""

from votecast.config.voting_config import DEFAULT_VOTING_CONFIG, VotingConfig

__all__ = ["DEFAULT_VOTING_CONFIG", "VotingConfig"]
