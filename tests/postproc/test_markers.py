"""Tests for namespaced marker injection."""

from __future__ import annotations

import re

from agentdocs.postproc.markers import (
    MarkerManager,
    has_existing_index,
    inject_index,
    remove_index,
)


def _three_blocks() -> str:
    content = "# Project\n"
    content = inject_index(content, "react idx", "react")
    content = inject_index(content, "nextjs idx", "nextjs")
    return inject_index(content, "vue idx", "vue")


def test_inject_into_empty_document(marker) -> None:
    result = inject_index("", "content", "react")
    assert result == f"{marker('react', 'START')}content{marker('react', 'END')}\n"


def test_inject_appends_with_one_blank_line(marker) -> None:
    block = f"{marker('nextjs', 'START')}content{marker('nextjs', 'END')}\n"

    assert inject_index("# My Project\n\nSome content.", "content", "nextjs") == (
        f"# My Project\n\nSome content.\n\n{block}"
    )
    assert inject_index("# My Project\n", "content", "nextjs") == f"# My Project\n\n{block}"


def test_inject_replaces_existing_block(marker) -> None:
    existing = (
        f"# Header\n\n{marker('react', 'START')}old content{marker('react', 'END')}\n\nFooter"
    )

    result = inject_index(existing, "new content", "react")

    assert result == (
        f"# Header\n\n{marker('react', 'START')}new content{marker('react', 'END')}\n\nFooter"
    )


def test_inject_is_idempotent() -> None:
    for document in ("", "# Project\n", "# Project", "text\n\n\n"):
        first = inject_index(document, "index v1", "lib")
        assert inject_index(first, "index v1", "lib") == first


def test_libraries_coexist_and_update_independently(marker) -> None:
    content = "# Project\n"
    content = inject_index(content, "react v1", "react")
    content = inject_index(content, "nextjs v1", "nextjs")
    nextjs_block = f"{marker('nextjs', 'START')}nextjs v1{marker('nextjs', 'END')}"

    content = inject_index(content, "react v2", "react")

    assert "react v2" in content
    assert "react v1" not in content
    assert content.count(nextjs_block) == 1


def test_inject_recovers_from_reordered_markers(marker) -> None:
    corrupted = f"# Header\n{marker('lib', 'END')}old{marker('lib', 'START')}\nFooter"

    result = inject_index(corrupted, "new content", "lib")

    assert result == (
        f"# Header\nold\nFooter\n\n{marker('lib', 'START')}new content{marker('lib', 'END')}\n"
    )


def test_inject_recovers_from_missing_end_marker(marker) -> None:
    start_only = f"Some text\n{marker('lib', 'START')}old content\nMore text"

    result = inject_index(start_only, "X", "lib")

    assert result.count(marker("lib", "START")) == 1
    assert result.count(marker("lib", "END")) == 1
    assert result.endswith(f"{marker('lib', 'START')}X{marker('lib', 'END')}\n")
    assert result.startswith("Some text\nold content\nMore text\n\n")


def test_has_existing_index(marker) -> None:
    content = f"before {marker('react', 'START')}stuff{marker('react', 'END')} after"

    assert has_existing_index(content, "react") is True
    assert has_existing_index(content, "nextjs") is False
    assert has_existing_index(content, "React") is False
    assert has_existing_index("", "react") is False


def test_plain_prefix_text_is_not_a_marker(marker) -> None:
    content = "This file uses DOCS-AGENTS-MD for indexing.\nSee docs for details."

    assert has_existing_index(content, "lib") is False
    result = inject_index(content, "index data", "lib")
    assert result.startswith(content)
    assert marker("lib", "START") in result


def test_remove_existing_block(marker) -> None:
    content = f"# Header\n\n{marker('react', 'START')}stuff{marker('react', 'END')}\n\nFooter"

    assert remove_index(content, "react") == "# Header\nFooter"


def test_remove_without_block_returns_document_unchanged() -> None:
    content = "# No markers here"
    assert remove_index(content, "react") is content


def test_remove_keeps_other_libraries() -> None:
    content = "# Project\n"
    content = inject_index(content, "react content", "react")
    content = inject_index(content, "vue content", "vue")

    content = remove_index(content, "react")

    assert "react content" not in content
    assert "vue content" in content


def test_remove_with_missing_end_keeps_trailing_text(marker) -> None:
    start_only = f"Some text\n{marker('lib', 'START')}content without end"

    assert remove_index(start_only, "lib") == "Some text\ncontent without end"


def test_remove_with_reordered_markers_strips_both(marker) -> None:
    corrupted = f"a{marker('lib', 'END')}b{marker('lib', 'START')}c"

    assert remove_index(corrupted, "lib") == "abc"


def test_remove_middle_block_keeps_clean_spacing(marker) -> None:
    content = remove_index(_three_blocks(), "nextjs")

    assert content == (
        f"# Project\n\n{marker('react', 'START')}react idx{marker('react', 'END')}\n"
        f"{marker('vue', 'START')}vue idx{marker('vue', 'END')}\n"
    )
    assert not re.search(r"\n{3,}", content)


def test_remove_first_block_keeps_clean_spacing() -> None:
    content = remove_index(_three_blocks(), "react")

    assert "react idx" not in content
    assert "nextjs idx" in content
    assert "vue idx" in content
    assert not re.search(r"\n{3,}", content)


def test_remove_then_inject_leaves_other_blocks_untouched(marker) -> None:
    original = _three_blocks()
    react_block = f"{marker('react', 'START')}react idx{marker('react', 'END')}"
    vue_block = f"{marker('vue', 'START')}vue idx{marker('vue', 'END')}"

    content = inject_index(remove_index(original, "nextjs"), "nextjs idx v2", "nextjs")

    assert content.count(react_block) == 1
    assert content.count(vue_block) == 1
    assert content.index(react_block) == original.index(react_block)
    assert "nextjs idx v2" in content
    assert not re.search(r"\n{3,}", content)


def test_remove_does_not_eat_newline_owned_by_content(marker) -> None:
    content = f"abc\n{marker('lib', 'START')}stuff{marker('lib', 'END')}\n"

    assert remove_index(content, "lib") == "abc\n"


def test_custom_prefix_namespaces_markers() -> None:
    manager = MarkerManager(prefix="MY-TOOL")

    result = manager.inject("", "payload", "lib")

    assert result == "<!-- MY-TOOL:lib-START -->payload<!-- MY-TOOL:lib-END -->\n"
    assert has_existing_index(result, "lib") is False
    assert manager.remove(result, "lib") == ""
