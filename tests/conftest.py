from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


class ApiDirBuilder:
    """Writes annotated Lua files under a temporary `.api` directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def write(self, relative: str, content: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path


@pytest.fixture
def api_dir(tmp_path: Path) -> ApiDirBuilder:
    """Provide an annotation directory rooted at the pytest tmp_path."""
    return ApiDirBuilder(tmp_path / ".api")
