"""Documentation tree construction from flat file paths."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Sequence

from .constants import DEFAULT_EXTENSIONS
from .logging import get_logger
from .models import DocFile, DocSection

ROOT_SECTION = "."

logger = get_logger("tree")


def _iter_files(root: Path) -> Iterator[str]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""
        dirnames.sort()
        for filename in filenames:
            yield f"{rel_dir}/{filename}" if rel_dir else filename


def _extension(basename: str) -> str:
    # Last-dot suffix, so a bare ".md" file still counts as markdown.
    dot = basename.rfind(".")
    return basename[dot:].lower() if dot != -1 else ""


def collect_doc_files(
    directory: str | Path, extensions: Sequence[str] = DEFAULT_EXTENSIONS
) -> List[DocFile]:
    """Return doc files under ``directory`` sorted by relative path.

    Extensions match case-insensitively on both sides. Files named ``index.*``
    are navigation pages and never indexed. A missing directory yields ``[]``.
    """
    root = Path(directory)
    if not root.is_dir():
        return []

    suffixes = {f".{extension.lower().lstrip('.')}" for extension in extensions}
    matched: List[str] = []
    for rel_path in _iter_files(root):
        basename = rel_path.rsplit("/", 1)[-1]
        if _extension(basename) not in suffixes:
            continue
        if basename.startswith("index."):
            continue
        matched.append(rel_path)

    matched.sort()
    logger.debug("Collected %d doc files from %s", len(matched), root)
    return [DocFile(relative_path=rel_path) for rel_path in matched]


def build_doc_tree(files: Iterable[DocFile]) -> List[DocSection]:
    """Group files into sections by path segment, recursing without a depth limit."""
    root_files: List[DocFile] = []
    direct: Dict[str, List[DocFile]] = {}
    nested: Dict[str, List[DocFile]] = {}

    for file in files:
        parts = file.relative_path.split("/")
        if len(parts) < 2:
            root_files.append(file)
            continue

        top_dir = parts[0]
        direct.setdefault(top_dir, [])
        nested.setdefault(top_dir, [])
        if len(parts) == 2:
            direct[top_dir].append(file)
        else:
            nested[top_dir].append(DocFile(relative_path="/".join(parts[1:])))

    sections: List[DocSection] = []
    if root_files:
        sections.append(DocSection(name=ROOT_SECTION, files=_sorted_files(root_files)))

    for name, own_files in direct.items():
        subsections = [_with_prefix(child, name) for child in build_doc_tree(nested[name])]
        sections.append(
            DocSection(name=name, files=_sorted_files(own_files), subsections=subsections)
        )

    sections.sort(key=lambda section: (section.name != ROOT_SECTION, section.name))
    return sections


def iter_tree_files(sections: Iterable[DocSection]) -> Iterator[DocFile]:
    """Yield files depth-first: a section's own files before its subsections."""
    for section in sections:
        yield from section.files
        yield from iter_tree_files(section.subsections)


def _sorted_files(files: Iterable[DocFile]) -> List[DocFile]:
    return sorted(files, key=lambda file: file.relative_path)


def _with_prefix(section: DocSection, parent: str) -> DocSection:
    """Return a copy of ``section`` whose file paths start with ``parent``."""
    return DocSection(
        name=section.name,
        files=[DocFile(relative_path=f"{parent}/{file.relative_path}") for file in section.files],
        subsections=[_with_prefix(child, parent) for child in section.subsections],
    )


__all__ = ["ROOT_SECTION", "build_doc_tree", "collect_doc_files", "iter_tree_files"]
