"""Keeps the docs download directory out of version control."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .constants import DOCS_BASE_DIR

COMMENT_HEADER = "# agentdocs"


@dataclass(frozen=True)
class GitignoreResult:
    path: Path
    updated: bool
    already_present: bool


def ensure_gitignore_entry(cwd: Path | str, entry_dir: str = DOCS_BASE_DIR) -> GitignoreResult:
    """Add ``<entry_dir>/`` to ``.gitignore``, creating the file when missing."""
    gitignore_path = Path(cwd) / ".gitignore"
    entry_pattern = re.compile(rf"^\s*{re.escape(entry_dir)}(?:/.*)?$")

    content = gitignore_path.read_text(encoding="utf-8") if gitignore_path.exists() else ""
    if any(entry_pattern.match(line) for line in content.splitlines()):
        return GitignoreResult(path=gitignore_path, updated=False, already_present=True)

    needs_newline = bool(content) and not content.endswith("\n")
    header = "" if COMMENT_HEADER in content else f"{COMMENT_HEADER}\n"
    new_content = content + ("\n" if needs_newline else "") + header + f"{entry_dir}/\n"
    gitignore_path.write_text(new_content, encoding="utf-8")

    return GitignoreResult(path=gitignore_path, updated=True, already_present=False)


__all__ = ["COMMENT_HEADER", "GitignoreResult", "ensure_gitignore_entry"]
