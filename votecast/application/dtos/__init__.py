"""Application DTOs."""

from votecast.application.dtos.voting import CastVoteRequest, TieResolutionRequest

__all__: list[str] = ["CastVoteRequest", "TieResolutionRequest"]
