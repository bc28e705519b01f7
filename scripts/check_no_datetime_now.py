#!/usr/bin/env python3
"""Pre-commit hook preventing direct clock reads in production code.

Casting windows, ballot timestamps and tie resolutions must all read the
injected TimeAuthorityProtocol so tests can control time. This script
scans votecast/ for datetime.now() / datetime.utcnow() calls outside the
system clock adapter.

Usage:
    python scripts/check_no_datetime_now.py [package_directory]

Exit codes:
    0: No violations found
    1: Direct clock reads found
"""

import re
import sys
from pathlib import Path

DATETIME_NOW_PATTERN = re.compile(r"datetime\s*\.\s*(now|utcnow)\s*\(")

# The only module allowed to read the host clock
ALLOWED_FILES = {
    Path("infrastructure/adapters/system_time_authority.py"),
}


def check_file(file_path: Path) -> list[tuple[int, str]]:
    """Return (line_number, line) for every direct clock read in a file."""
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []

    violations: list[tuple[int, str]] = []
    for line_num, line in enumerate(content.splitlines(), start=1):
        stripped = line.lstrip()
        if stripped.startswith("#"):
            continue
        if DATETIME_NOW_PATTERN.search(line):
            violations.append((line_num, stripped))
    return violations


def find_violations(package_dir: Path) -> dict[Path, list[tuple[int, str]]]:
    found: dict[Path, list[tuple[int, str]]] = {}
    for py_file in sorted(package_dir.rglob("*.py")):
        if py_file.relative_to(package_dir) in ALLOWED_FILES:
            continue
        violations = check_file(py_file)
        if violations:
            found[py_file] = violations
    return found


def main() -> int:
    if len(sys.argv) > 1:
        package_dir = Path(sys.argv[1])
    else:
        package_dir = Path(__file__).parent.parent / "votecast"

    found = find_violations(package_dir)
    if not found:
        print("No direct datetime.now() calls found.")
        return 0

    for path, violations in found.items():
        for line_num, line in violations:
            print(f"{path}:{line_num}: {line}")
    print("Inject TimeAuthorityProtocol instead of reading the clock directly.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
