"""Static checks that every shared error code is raised somewhere."""

from __future__ import annotations

import re
from pathlib import Path

from packages.cadence_shared.errors import codes

REPO_ROOT = Path(__file__).resolve().parents[2]
SOURCE_ROOTS = ("actors", "packages", "resources", "services")
CODES_FILE = REPO_ROOT / "packages" / "cadence_shared" / "errors" / "codes.py"


def _source_text() -> str:
    chunks: list[str] = []
    for root in SOURCE_ROOTS:
        for path in sorted((REPO_ROOT / root).rglob("*.py")):
            if path == CODES_FILE or "tests" in path.parts:
                continue
            chunks.append(path.read_text(encoding="utf-8"))
    return "\n".join(chunks)


def test_every_error_code_is_referenced_by_source() -> None:
    """Unreferenced codes are dead vocabulary and should be removed."""
    names = [name for name in vars(codes) if name.isupper()]
    text = _source_text()

    unused = [name for name in names if re.search(rf"\b{name}\b", text) is None]

    assert names
    assert unused == []
