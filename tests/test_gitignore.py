from __future__ import annotations

from pathlib import Path

from agentdocs.gitignore import ensure_gitignore_entry


def test_creates_gitignore_when_missing(tmp_path: Path) -> None:
    result = ensure_gitignore_entry(tmp_path)

    assert result.updated is True
    assert result.already_present is False
    assert (tmp_path / ".gitignore").read_text(encoding="utf-8") == "# agentdocs\n.agents-docs/\n"


def test_appends_after_existing_content(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_text("node_modules", encoding="utf-8")

    ensure_gitignore_entry(tmp_path)

    assert (tmp_path / ".gitignore").read_text(encoding="utf-8") == (
        "node_modules\n# agentdocs\n.agents-docs/\n"
    )


def test_existing_entry_is_left_alone(tmp_path: Path) -> None:
    for line in (".agents-docs", ".agents-docs/", "  .agents-docs/nextjs"):
        (tmp_path / ".gitignore").write_text(f"dist\n{line}\n", encoding="utf-8")

        result = ensure_gitignore_entry(tmp_path)

        assert result.updated is False
        assert result.already_present is True
        assert (tmp_path / ".gitignore").read_text(encoding="utf-8") == f"dist\n{line}\n"


def test_similar_names_do_not_count_as_present(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_text(".agents-docs-old/\n", encoding="utf-8")

    result = ensure_gitignore_entry(tmp_path)

    assert result.updated is True
    assert (tmp_path / ".gitignore").read_text(encoding="utf-8").endswith(
        "# agentdocs\n.agents-docs/\n"
    )


def test_custom_entry_dir_reuses_header(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_text("# agentdocs\n.agents-docs/\n", encoding="utf-8")

    ensure_gitignore_entry(tmp_path, entry_dir="vendor-docs")

    assert (tmp_path / ".gitignore").read_text(encoding="utf-8") == (
        "# agentdocs\n.agents-docs/\nvendor-docs/\n"
    )
