"""SQLAlchemy Core table definitions for the voting stores.

The ballot and confirmation tables share no column beyond election_id.
Uniqueness that the core relies on:

- voter_eligibility: (voter_id, election_id)
- tie_resolutions: election_id

Timestamps are stored in UTC.
"""

from __future__ import annotations

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
)

metadata = MetaData()

elections = Table(
    "elections",
    metadata,
    Column("election_id", Uuid, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("counting_rule", String(32), nullable=False),
    Column("status", String(16), nullable=False, index=True),
    Column("start_date", DateTime(timezone=True), nullable=False),
    Column("end_date", DateTime(timezone=True), nullable=False),
)

candidates = Table(
    "candidates",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("candidate_id", Uuid, nullable=False, unique=True),
    Column(
        "election_id",
        Uuid,
        ForeignKey("elections.election_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("name", String(255), nullable=False),
    Column("party", String(255), nullable=False, default=""),
    Column("biography", Text, nullable=False, default=""),
)

ballots = Table(
    "ballots",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("ballot_id", Uuid, nullable=False, unique=True),
    Column("election_id", Uuid, nullable=False, index=True),
    Column("preferences", JSON, nullable=False),
    Column("cast_at", DateTime(timezone=True), nullable=False),
)

vote_confirmations = Table(
    "vote_confirmations",
    metadata,
    Column("confirmation_id", Uuid, primary_key=True),
    Column("voter_id", Uuid, nullable=False, index=True),
    Column("election_id", Uuid, nullable=False),
    Column("confirmed_at", DateTime(timezone=True), nullable=False),
)

voter_eligibility = Table(
    "voter_eligibility",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("voter_id", Uuid, nullable=False),
    Column("election_id", Uuid, nullable=False),
    Column("has_voted", Boolean, nullable=False, default=False),
    Column("voted_at", DateTime(timezone=True), nullable=True),
    UniqueConstraint("voter_id", "election_id", name="uq_voter_eligibility_pair"),
)

tie_resolutions = Table(
    "tie_resolutions",
    metadata,
    Column("resolution_id", Uuid, primary_key=True),
    Column("election_id", Uuid, nullable=False, unique=True),
    Column("kind", String(16), nullable=False),
    Column("winner_candidate_id", Uuid, nullable=True),
    Column("resolved_by", String(255), nullable=False),
    Column("resolved_at", DateTime(timezone=True), nullable=False),
    Column("notes", Text, nullable=True),
)

audit_log = Table(
    "election_audit_log",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("entry_id", Uuid, nullable=False, unique=True),
    Column("election_id", Uuid, nullable=False, index=True),
    Column("election_name", String(255), nullable=False),
    Column("previous_status", String(16), nullable=False),
    Column("new_status", String(16), nullable=False),
    Column("recorded_at", DateTime(timezone=True), nullable=False),
    Column("details", JSON, nullable=False),
)
