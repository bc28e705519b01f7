"""
Integration test configuration.

Provides a real SQLAlchemy async engine on in-memory SQLite (aiosqlite) with
the voting schema created, and service graphs wired either to the in-memory
stubs or to the SQL stores.

Usage:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_example(sql_session_factory: async_sessionmaker) -> None:
        ...
"""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from tests.helpers.fake_time_authority import FakeTimeAuthority
from votecast.bootstrap.database import create_schema
from votecast.bootstrap.voting import VotingServices, build_voting_services
from votecast.config import VotingConfig

SQLITE_MEMORY_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def sql_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Per-test in-memory database with every voting table created.

    StaticPool keeps the single in-memory connection alive for all sessions.
    """
    engine = create_async_engine(
        SQLITE_MEMORY_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_session_factory(sql_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=sql_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(params=["memory", "sql"])
def voting_services(
    request: pytest.FixtureRequest,
    sql_session_factory: async_sessionmaker[AsyncSession],
    fake_time_authority: FakeTimeAuthority,
) -> VotingServices:
    """The full service graph, once per store backend."""
    return build_voting_services(
        config=VotingConfig(),
        session_factory=sql_session_factory if request.param == "sql" else None,
        time_authority=fake_time_authority,
    )
