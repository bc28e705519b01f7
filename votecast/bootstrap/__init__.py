"""Bootstrap wiring: service graph, logging and database sessions."""

from votecast.bootstrap.voting import (
    VotingRepositories,
    VotingServices,
    build_voting_services,
)

__all__ = ["VotingRepositories", "VotingServices", "build_voting_services"]
