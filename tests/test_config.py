"""Tests for agentdocs.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from agentdocs.config import AgentDocsConfig, load_config
from agentdocs.errors import ConfigError


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, AgentDocsConfig)
    assert config.root == tmp_path.resolve()
    assert config.output is None
    assert config.extensions == []
    assert config.docs_dir == ".agents-docs"
    assert config.presets == {}


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".agentdocs.yml").write_text(
        """
output: CLAUDE.md
extensions: [md, mdx, rst]
docs_dir: vendor/docs
presets:
  Widgets:
    repo: acme/widgets
    docs_path: site/docs
    default_tag: stable
    name: Acme Widgets
    packages: ["@acme/widgets"]
    tag_prefix: "v"
    extensions: md
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.output == "CLAUDE.md"
    assert config.extensions == ["md", "mdx", "rst"]
    assert config.docs_dir == "vendor/docs"
    preset = config.presets["widgets"]
    assert preset.repo == "acme/widgets"
    assert preset.docs_path == "site/docs"
    assert preset.default_tag == "stable"
    assert preset.name == "Acme Widgets"
    assert preset.packages == ("@acme/widgets",)
    assert preset.tag_prefix == "v"
    assert preset.extensions == ("md",)


def test_preset_defaults(tmp_path: Path) -> None:
    (tmp_path / ".agentdocs.yml").write_text(
        "presets:\n  tools:\n    repo: acme/tools\n    docs_path: docs\n"
        "  bare:\n    repo: acme/bare\n    docs_path: docs\n    tag_prefix: ''\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path / ".agentdocs.yml")

    tools = config.presets["tools"]
    assert tools.default_tag == "main"
    assert tools.name == "tools"
    assert tools.packages == ()
    assert tools.tag_prefix is None
    assert tools.extensions is None
    assert config.presets["bare"].tag_prefix == ""


def test_empty_config_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".agentdocs.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).docs_dir == ".agents-docs"


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "output: [unclosed\n",
        "docs_dir: ../outside\n",
        "presets:\n  broken:\n    repo: acme/broken\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str) -> None:
    (tmp_path / ".agentdocs.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
