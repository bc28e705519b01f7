"""Test helpers for votecast tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    make_election, make_candidates, make_ballot: Domain object builders

Usage:
    from tests.helpers import FakeTimeAuthority
"""

from tests.helpers.builders import make_ballot, make_candidates, make_election
from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = ["FakeTimeAuthority", "make_ballot", "make_candidates", "make_election"]
