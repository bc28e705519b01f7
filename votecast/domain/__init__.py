"""
Domain layer - pure voting logic for votecast.

This layer contains:
- Entities and value objects (Ballot, Election, VoteConfirmation, ...)
- Lifecycle events
- Counting strategies
- Domain exceptions

This layer must NOT import from application, infrastructure, bootstrap,
config or workers. Only stdlib and typing imports are allowed.
"""

from votecast.domain.exceptions import VotecastError

__all__: list[str] = ["VotecastError"]
