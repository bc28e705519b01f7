"""Unit tests for the import boundary checking script.

Tests verify that the hexagonal architecture import rules are enforced:
- domain/ imports NOTHING from other votecast layers
- application/ imports from domain/ only
- infrastructure/ imports from domain/ and application/
- config/ imports nothing from other layers
- bootstrap/ and workers/ wire everything together
"""

# Import from scripts directory
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(REPO_ROOT / "scripts"))

from check_imports import (  # noqa: E402
    ALLOWED_IMPORTS,
    check_file_imports,
    check_import_boundaries,
    format_violations,
    layer_of_module,
)

PACKAGE_DIR = REPO_ROOT / "votecast"


def _write_module(package_dir: Path, relative: str, source: str) -> Path:
    path = package_dir / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    return path


class TestAllowedImports:
    """Test that the allowed imports are correctly defined."""

    def test_domain_imports_nothing(self) -> None:
        assert ALLOWED_IMPORTS["domain"] == set()

    def test_application_imports_domain_only(self) -> None:
        assert ALLOWED_IMPORTS["application"] == {"domain"}

    def test_infrastructure_imports_inner_layers(self) -> None:
        assert ALLOWED_IMPORTS["infrastructure"] == {"domain", "application"}

    def test_config_is_standalone(self) -> None:
        assert ALLOWED_IMPORTS["config"] == set()


class TestLayerOfModule:
    """Tests for mapping module names to layers."""

    @pytest.mark.parametrize(
        ("module", "layer"),
        [
            ("votecast.domain.models.ballot", "domain"),
            ("votecast.application.services", "application"),
            ("votecast.workers.lifecycle_worker", "workers"),
            ("votecast", None),
            ("structlog", None),
            ("other.domain.models", None),
        ],
    )
    def test_layer(self, module: str, layer: str | None) -> None:
        assert layer_of_module(module) == layer


class TestCheckFileImports:
    """Tests for single-file checks."""

    def test_domain_importing_application_is_violation(self, tmp_path: Path) -> None:
        path = _write_module(
            tmp_path,
            "domain/models/bad.py",
            "from votecast.application.services import voting_service\n",
        )

        violations = check_file_imports(path, tmp_path)

        assert len(violations) == 1
        assert violations[0][1] == 1
        assert "domain layer cannot import from application" in violations[0][2]

    def test_application_importing_infrastructure_is_violation(
        self, tmp_path: Path
    ) -> None:
        path = _write_module(
            tmp_path,
            "application/services/bad.py",
            "import os\n\nimport votecast.infrastructure.stubs\n",
        )

        violations = check_file_imports(path, tmp_path)

        assert [v[1] for v in violations] == [3]

    def test_allowed_and_third_party_imports_pass(self, tmp_path: Path) -> None:
        path = _write_module(
            tmp_path,
            "infrastructure/persistence/ok.py",
            "import structlog\n"
            "from sqlalchemy import select\n"
            "from votecast.domain.errors import DuplicateRecordError\n"
            "from votecast.application.ports import ballot_repository\n"
            "from . import tables\n",
        )
        assert check_file_imports(path, tmp_path) == []

    def test_package_level_module_ignored(self, tmp_path: Path) -> None:
        path = _write_module(
            tmp_path, "__init__.py", "from votecast.bootstrap import voting\n"
        )
        assert check_file_imports(path, tmp_path) == []


class TestVotecastBoundaries:
    """The shipped package respects its own layering."""

    def test_no_violations(self) -> None:
        violations = check_import_boundaries(PACKAGE_DIR)
        assert violations == [], format_violations(violations)

    def test_format_violations(self) -> None:
        text = format_violations([("votecast/domain/x.py", 3, "bad import")])
        assert "votecast/domain/x.py:3: bad import" in text
        assert "Total: 1 violation(s)" in text
        assert format_violations([]) == ""
