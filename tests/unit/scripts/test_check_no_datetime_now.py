"""Unit tests for the direct clock read checker."""

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(REPO_ROOT / "scripts"))

from check_no_datetime_now import ALLOWED_FILES, check_file, find_violations  # noqa: E402


class TestCheckFile:
    """Tests for per-file scanning."""

    def test_flags_now_and_utcnow(self, tmp_path: Path) -> None:
        path = tmp_path / "clock.py"
        path.write_text(
            "from datetime import datetime\n"
            "a = datetime.now()\n"
            "# datetime.now() in a comment is fine\n"
            "b = datetime.utcnow()\n",
            encoding="utf-8",
        )

        assert [line for line, _ in check_file(path)] == [2, 4]

    def test_injected_clock_passes(self, tmp_path: Path) -> None:
        path = tmp_path / "service.py"
        path.write_text("now = self._time.utcnow()\n", encoding="utf-8")
        assert check_file(path) == []


class TestFindViolations:
    """Tests for package scanning."""

    def test_system_clock_adapter_is_allowed(self, tmp_path: Path) -> None:
        for allowed in ALLOWED_FILES:
            target = tmp_path / allowed
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("datetime.now(timezone.utc)\n", encoding="utf-8")
        assert find_violations(tmp_path) == {}

    def test_votecast_reads_clock_only_through_adapter(self) -> None:
        assert find_violations(REPO_ROOT / "votecast") == {}
