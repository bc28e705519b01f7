"""
votecast - vote casting, anonymization and tabulation engine.

Accepts a voter's ballot, severs the link between voter identity and vote
content, stores the ballot, and computes election outcomes under plurality,
instant-runoff and single-transferable-vote counting rules.

Core guarantees:
- A stored ballot carries no voter reference of any kind
- At most one accepted vote per voter per election
- Tabulation is a deterministic, non-cryptographic pure function of ballots
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
