"""Compact single-line index generation for agent files.

The index is a ``|``-separated line::

    [Name Docs Index v1.0]|root: ./.agents-docs/name|IMPORTANT: ...|If docs missing, run: ...|dir:{a.md,b.md}

Agents split on ``|`` and then on ``,`` inside the braces, so those characters
(and the braces themselves) are percent-escaped when they appear in file names.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .constants import CLI_NAME, DEFAULT_OUTPUT
from .models import DocSection, IndexMeta
from .tree import ROOT_SECTION, iter_tree_files

_ESCAPES = (
    ("|", "%7C"),
    (",", "%2C"),
    ("{", "%7B"),
    ("}", "%7D"),
)


def escape_file_name(name: str) -> str:
    for char, replacement in _ESCAPES:
        name = name.replace(char, replacement)
    return name


def build_regen_command(meta: IndexMeta) -> str:
    """Return the command an agent can run to rebuild a missing docs folder."""
    command = CLI_NAME
    if meta.lib_key:
        command += f" --lib {meta.lib_key}"
    elif meta.repo:
        command += f" --repo {meta.repo} --name {meta.name.lower()}"
        if meta.repo_docs_path:
            command += f" --docs-path {meta.repo_docs_path}"
    command += f" --output {meta.output_file or DEFAULT_OUTPUT}"
    return command


def group_by_directory(paths: Iterable[str]) -> Dict[str, List[str]]:
    """Group base names by parent directory, keeping first-seen directory order."""
    grouped: Dict[str, List[str]] = {}
    for path in paths:
        directory, _, file_name = path.rpartition("/")
        grouped.setdefault(directory or ROOT_SECTION, []).append(file_name)
    return grouped


def generate_index(sections: Sequence[DocSection], meta: IndexMeta) -> str:
    """Render the documentation tree and metadata as one index line."""
    version_suffix = f" v{meta.version}" if meta.version else ""
    parts = [
        f"[{meta.name} Docs Index{version_suffix}]",
        f"root: {meta.docs_path}",
        "IMPORTANT: Prefer retrieval-led reasoning over pre-training-led reasoning "
        f"for any {meta.name} tasks.",
        f"If docs missing, run: {build_regen_command(meta)}",
    ]

    paths = (file.relative_path for file in iter_tree_files(sections))
    for directory, names in group_by_directory(paths).items():
        escaped = ",".join(escape_file_name(name) for name in names)
        parts.append(f"{directory}:{{{escaped}}}")

    return "|".join(parts)


class IndexGenerator:
    """Encodes documentation sections into the agent index format."""

    def generate(self, sections: Sequence[DocSection], meta: IndexMeta) -> str:
        return generate_index(sections, meta)


__all__ = [
    "IndexGenerator",
    "build_regen_command",
    "escape_file_name",
    "generate_index",
    "group_by_directory",
]
