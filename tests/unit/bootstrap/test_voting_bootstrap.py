"""Unit tests for service graph and database bootstrap."""

import pytest

from tests.helpers.fake_time_authority import FakeTimeAuthority
from votecast.bootstrap import build_voting_services
from votecast.bootstrap.database import (
    get_database_url,
    get_session_factory,
    mask_database_url,
    reset_database_bootstrap,
)
from votecast.bootstrap.voting import build_sql_repositories
from votecast.config import VotingConfig
from votecast.infrastructure.persistence import (
    SqlAlchemyCastRecorder,
    SqlAlchemyElectionRepository,
)
from votecast.infrastructure.stubs import CastRecorderStub, ElectionRepositoryStub


class TestBuildVotingServices:
    """Tests for build_voting_services wiring."""

    def test_in_memory_graph(self, fake_time_authority: FakeTimeAuthority) -> None:
        services = build_voting_services(
            config=VotingConfig(min_candidates=3, lifecycle_check_interval_seconds=5),
            time_authority=fake_time_authority,
        )

        assert isinstance(services.repositories.elections, ElectionRepositoryStub)
        assert isinstance(services.repositories.cast_recorder, CastRecorderStub)
        assert services.emitter.observer_count == 2
        assert services.time_authority is fake_time_authority
        assert services.lifecycle_monitor.interval_seconds == 5
        assert not services.lifecycle_monitor.running

    def test_graphs_do_not_share_emitters(
        self, fake_time_authority: FakeTimeAuthority
    ) -> None:
        first = build_voting_services(
            config=VotingConfig(), time_authority=fake_time_authority
        )
        second = build_voting_services(
            config=VotingConfig(), time_authority=fake_time_authority
        )
        assert first.emitter is not second.emitter
        assert first.notifier is not second.notifier

    def test_sql_repositories_from_session_factory(self) -> None:
        from sqlalchemy.ext.asyncio import async_sessionmaker

        repositories = build_sql_repositories(async_sessionmaker())
        assert isinstance(repositories.elections, SqlAlchemyElectionRepository)
        assert isinstance(repositories.cast_recorder, SqlAlchemyCastRecorder)


class TestDatabaseUrl:
    """Tests for DATABASE_URL handling."""

    @pytest.fixture(autouse=True)
    def reset(self):
        reset_database_bootstrap()
        yield
        reset_database_bootstrap()

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("postgresql://u:p@db:5432/votes", "postgresql+asyncpg://u:p@db:5432/votes"),
            ("postgres://u:p@db/votes", "postgresql+asyncpg://u:p@db/votes"),
            ("u:p@db/votes", "postgresql+asyncpg://u:p@db/votes"),
            ("sqlite+aiosqlite:///votes.db", "sqlite+aiosqlite:///votes.db"),
        ],
    )
    def test_normalized(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str
    ) -> None:
        monkeypatch.setenv("DATABASE_URL", raw)
        assert get_database_url() == expected

    def test_missing_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(ValueError, match="DATABASE_URL"):
            get_database_url()
        with pytest.raises(ValueError):
            get_session_factory()

    def test_mask_hides_password(self) -> None:
        masked = mask_database_url("postgresql+asyncpg://voter:s3cret@db:5432/votes")
        assert masked == "postgresql+asyncpg://voter:***@db:5432/votes"
        assert "s3cret" not in masked

    def test_mask_without_password(self) -> None:
        assert mask_database_url("sqlite+aiosqlite:///votes.db") == (
            "sqlite+aiosqlite:///votes.db"
        )
