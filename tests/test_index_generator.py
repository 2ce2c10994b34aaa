"""Tests for agentdocs.index_generator."""

from __future__ import annotations

from agentdocs.index_generator import IndexGenerator, generate_index
from agentdocs.models import DocFile, DocSection, IndexMeta
from agentdocs.postproc.markers import inject_index
from agentdocs.tree import build_doc_tree


def _section(name: str, *paths: str, subsections: list[DocSection] | None = None) -> DocSection:
    return DocSection(
        name=name,
        files=[DocFile(relative_path=path) for path in paths],
        subsections=subsections or [],
    )


def test_generates_pipe_separated_format() -> None:
    result = generate_index(
        [_section("guide", "guide/intro.md", "guide/setup.md")],
        IndexMeta(
            name="TestLib",
            docs_path="./.agents-docs/testlib",
            version="1.0.0",
            output_file="AGENTS.md",
            lib_key="testlib",
        ),
    )

    assert result.split("|") == [
        "[TestLib Docs Index v1.0.0]",
        "root: ./.agents-docs/testlib",
        "IMPORTANT: Prefer retrieval-led reasoning over pre-training-led reasoning for any TestLib tasks.",
        "If docs missing, run: agentdocs --lib testlib --output AGENTS.md",
        "guide:{intro.md,setup.md}",
    ]
    assert "\n" not in result


def test_omits_version_suffix_without_version() -> None:
    result = generate_index([], IndexMeta(name="MyLib", docs_path="./docs"))

    assert result.startswith("[MyLib Docs Index]|")
    assert "If docs missing, run: agentdocs --output AGENTS.md" in result


def test_nested_sections_group_by_full_directory() -> None:
    sections = [
        _section(
            "api",
            subsections=[_section("endpoints", "api/endpoints/users.md", "api/endpoints/posts.md")],
        )
    ]

    result = generate_index(sections, IndexMeta(name="API", docs_path="./docs"))

    assert result.endswith("|api/endpoints:{users.md,posts.md}")


def test_directory_groups_follow_depth_first_order() -> None:
    tree = build_doc_tree(
        [
            DocFile("README.md"),
            DocFile("guide/intro.md"),
            DocFile("guide/advanced/hooks.md"),
            DocFile("api/ref.md"),
        ]
    )

    result = generate_index(tree, IndexMeta(name="Lib", docs_path="./docs"))

    assert result.split("|")[4:] == [
        ".:{README.md}",
        "api:{ref.md}",
        "guide:{intro.md}",
        "guide/advanced:{hooks.md}",
    ]


def test_regen_command_for_repo_mode() -> None:
    result = generate_index(
        [],
        IndexMeta(
            name="CustomLib",
            docs_path="./docs",
            repo="owner/repo",
            repo_docs_path="content",
            output_file="CLAUDE.md",
        ),
    )

    assert (
        "If docs missing, run: agentdocs --repo owner/repo --name customlib "
        "--docs-path content --output CLAUDE.md"
    ) in result


def test_regen_command_omits_docs_path_when_absent() -> None:
    result = generate_index(
        [], IndexMeta(name="CustomLib", docs_path="./docs", repo="owner/repo")
    )

    assert "--repo owner/repo" in result
    assert "--docs-path" not in result


def test_lib_key_takes_precedence_over_repo() -> None:
    result = IndexGenerator().generate(
        [], IndexMeta(name="React", docs_path="./docs", lib_key="react", repo="reactjs/react.dev")
    )

    assert "--lib react" in result
    assert "--repo" not in result


def test_empty_sections_still_have_header_parts() -> None:
    result = generate_index([], IndexMeta(name="EmptyLib", docs_path="./docs"))

    parts = result.split("|")
    assert len(parts) == 4
    assert "root: ./docs" in parts
    assert any(part.startswith("IMPORTANT: Prefer retrieval-led reasoning") for part in parts)


def test_escapes_structural_characters_in_file_names() -> None:
    sections = [
        _section(
            "guide",
            "guide/a,b.md",
            "guide/file|with|pipes.md",
            "guide/{braces}.md",
        )
    ]

    result = generate_index(sections, IndexMeta(name="TestLib", docs_path="./docs"))

    assert "a%2Cb.md" in result
    assert "a,b.md" not in result
    assert "file%7Cwith%7Cpipes.md" in result
    assert "%7Bbraces%7D.md" in result
    assert result.split("|")[-1] == "guide:{a%2Cb.md,file%7Cwith%7Cpipes.md,%7Bbraces%7D.md}"


def test_index_survives_repeated_injection() -> None:
    index = generate_index(
        [_section("guide", "guide/file|with|pipes.md", "guide/file,with,commas.md")],
        IndexMeta(name="TestLib", docs_path="./.agents-docs/testlib", version="main", lib_key="testlib"),
    )

    injected = inject_index("# My Project\n", index, "testlib")

    assert inject_index(injected, index, "testlib") == injected
    assert "<!-- DOCS-AGENTS-MD:testlib-START -->" in injected
    assert "<!-- DOCS-AGENTS-MD:testlib-END -->" in injected
