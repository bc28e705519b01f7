#!/usr/bin/env python3
"""Check hexagonal architecture import boundaries for votecast.

Layering rules:
- domain/: Pure voting logic, NO imports from other votecast layers
- application/: Services and ports, may import from domain/ only
- infrastructure/: Adapters, may import from domain/ and application/
- config/: Plain settings, imports NOTHING from other layers
- bootstrap/: Wiring, may import from every inner layer and config/
- workers/: Process entry points, may import from everything

Usage:
    python scripts/check_imports.py [package_directory]

Exit codes:
    0: No violations found
    1: Violations found
"""
import ast
import sys
from pathlib import Path

PACKAGE = "votecast"

# What each layer CAN import from (besides itself)
ALLOWED_IMPORTS: dict[str, set[str]] = {
    "domain": set(),
    "application": {"domain"},
    "infrastructure": {"domain", "application"},
    "config": set(),
    "bootstrap": {"domain", "application", "infrastructure", "config"},
    "workers": {"domain", "application", "infrastructure", "config", "bootstrap"},
}


def imported_modules(node: ast.Import | ast.ImportFrom) -> list[str]:
    """Absolute module names referenced by an import statement."""
    if isinstance(node, ast.ImportFrom):
        if node.level or node.module is None:
            return []
        return [node.module]
    return [alias.name for alias in node.names]


def layer_of_file(py_file: Path, package_dir: Path) -> str | None:
    """Layer a file belongs to, or None for package-level modules."""
    try:
        parts = py_file.relative_to(package_dir).parts
    except ValueError:
        return None
    if len(parts) < 2:
        return None
    return parts[0] if parts[0] in ALLOWED_IMPORTS else None


def layer_of_module(module: str) -> str | None:
    """Layer a ``votecast.<layer>...`` module name points into."""
    parts = module.split(".")
    if len(parts) < 2 or parts[0] != PACKAGE:
        return None
    return parts[1] if parts[1] in ALLOWED_IMPORTS else None


def check_file_imports(py_file: Path, package_dir: Path) -> list[tuple[str, int, str]]:
    """Check a single file for import boundary violations.

    Returns:
        List of (file_path, line_number, violation_message) tuples.
    """
    file_layer = layer_of_file(py_file, package_dir)
    if file_layer is None:
        return []

    try:
        tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    except (SyntaxError, UnicodeDecodeError) as e:
        print(f"Warning: Could not parse {py_file}: {e}", file=sys.stderr)
        return []

    allowed = ALLOWED_IMPORTS[file_layer]
    violations: list[tuple[str, int, str]] = []
    for node in ast.walk(tree):
        if not isinstance(node, (ast.Import, ast.ImportFrom)):
            continue
        for module in imported_modules(node):
            target = layer_of_module(module)
            if target is None or target == file_layer or target in allowed:
                continue
            violations.append(
                (
                    str(py_file),
                    node.lineno,
                    f"{file_layer} layer cannot import from {target}",
                )
            )
    return violations


def check_import_boundaries(package_dir: Path) -> list[tuple[str, int, str]]:
    """Check every module under ``package_dir``."""
    if not package_dir.exists():
        print(f"Error: Package directory '{package_dir}' does not exist", file=sys.stderr)
        return []

    violations: list[tuple[str, int, str]] = []
    for py_file in sorted(package_dir.rglob("*.py")):
        violations.extend(check_file_imports(py_file, package_dir))
    return violations


def format_violations(violations: list[tuple[str, int, str]]) -> str:
    """Format violations for human-readable output."""
    if not violations:
        return ""

    lines = ["Import boundary violations found:", ""]
    for file_path, line_no, message in sorted(violations):
        lines.append(f"  {file_path}:{line_no}: {message}")
    lines.append("")
    lines.append(f"Total: {len(violations)} violation(s)")
    return "\n".join(lines)


def main() -> int:
    if len(sys.argv) > 1:
        package_dir = Path(sys.argv[1])
    else:
        package_dir = Path(__file__).parent.parent / PACKAGE

    violations = check_import_boundaries(package_dir)
    if violations:
        print(format_violations(violations))
        return 1
    print("No import boundary violations found.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
