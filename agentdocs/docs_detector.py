"""Docs root detection from a flat list of repository paths."""

from __future__ import annotations

import posixpath
from typing import Dict, Iterable, List, Optional, Sequence

from .logging import get_logger
from .models import DirectoryScore

_EXCLUDED_DIRS = {
    "node_modules",
    ".github",
    ".git",
    "examples",
    "example",
    "__tests__",
    "test",
    "tests",
    "__mocks__",
    "fixtures",
    ".vitepress",
    "public",
    "images",
    "icons",
    "logo",
    "snippets",
}

_DOC_EXTENSIONS = {".md", ".mdx"}

_DOCS_LIKE_NAMES = {
    "docs",
    "doc",
    "documentation",
    "content",
    "guide",
    "guides",
    "wiki",
    "reference",
    "manual",
    "pages",
}

MIN_DOC_FILES = 3

logger = get_logger("docs_detector")


def _count_directories(paths: Iterable[str]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for path in paths:
        extension = posixpath.splitext(path)[1].lower()
        if extension not in _DOC_EXTENSIONS:
            continue
        directory = posixpath.dirname(path)
        if not directory:
            continue
        if any(part in _EXCLUDED_DIRS for part in directory.split("/")):
            continue
        counts[directory] = counts.get(directory, 0) + 1
    return counts


def _aggregate(counts: Dict[str, int]) -> Dict[str, int]:
    """Credit every directory's count to itself and all of its ancestors."""
    aggregated: Dict[str, int] = {}
    for directory, count in counts.items():
        parts = directory.split("/")
        for depth in range(1, len(parts) + 1):
            if parts[depth - 1] in _EXCLUDED_DIRS:
                continue
            ancestor = "/".join(parts[:depth])
            aggregated[ancestor] = aggregated.get(ancestor, 0) + count
    return aggregated


def _name_bonus(directory: str) -> int:
    leaf = directory.rsplit("/", 1)[-1]
    return 1 if leaf in _DOCS_LIKE_NAMES else 0


def score_directories(paths: Sequence[str]) -> List[DirectoryScore]:
    """Return ranked candidates holding at least ``MIN_DOC_FILES`` doc files."""
    aggregated = _aggregate(_count_directories(paths))
    candidates = [
        DirectoryScore(directory=directory, count=count, depth=len(directory.split("/")))
        for directory, count in aggregated.items()
        if count >= MIN_DOC_FILES
    ]
    return sorted(
        candidates,
        key=lambda score: (-_name_bonus(score.directory), -score.count, score.depth),
    )


def detect_docs_path(paths: Sequence[str]) -> Optional[str]:
    """Return the most likely docs directory relative to the repo root, or None."""
    ranked = score_directories(paths)
    if not ranked:
        logger.debug("No directory reached %d doc files", MIN_DOC_FILES)
        return None
    best = ranked[0]
    logger.debug(
        "Detected docs root %s (%d files, depth %d)", best.directory, best.count, best.depth
    )
    return best.directory


class DocsDetector:
    """Picks the documentation root for a repository file listing."""

    def detect(self, paths: Sequence[str]) -> Optional[str]:
        return detect_docs_path(paths)


__all__ = ["DocsDetector", "MIN_DOC_FILES", "detect_docs_path", "score_directories"]
