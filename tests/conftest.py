from __future__ import annotations

from pathlib import Path

import pytest

from agentdocs.postproc.markers import MarkerManager
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable upstream checkout rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty consumer project that receives the agent file."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def marker():
    """Return the literal marker token for ``(key, kind)``."""
    manager = MarkerManager()

    def _marker(key: str, kind: str) -> str:
        return manager.start_marker(key) if kind == "START" else manager.end_marker(key)

    return _marker
