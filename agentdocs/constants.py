"""Shared constants used across agentdocs modules."""

from __future__ import annotations

import re

DOCS_BASE_DIR = ".agents-docs"
DEFAULT_OUTPUT = "AGENTS.md"
DEFAULT_EXTENSIONS: tuple[str, ...] = ("md", "mdx")
CLI_NAME = "agentdocs"

REPO_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+/[a-zA-Z0-9._-]+$")
TAG_PATTERN = re.compile(r"^[a-zA-Z0-9._\-/+@]+$")
NAME_PATTERN = re.compile(r"^[a-z0-9._-]+$")


def is_valid_repo(value: str) -> bool:
    return bool(REPO_PATTERN.match(value))


def is_valid_tag(value: str) -> bool:
    return bool(TAG_PATTERN.match(value))


def is_valid_name(value: str) -> bool:
    return bool(NAME_PATTERN.match(value))


def format_size(size: int) -> str:
    """Return a human-readable byte count (B, KB, MB)."""
    if size < 1024:
        return f"{size} B"
    kilobytes = size / 1024
    if kilobytes < 1024:
        return f"{kilobytes:.1f} KB"
    return f"{kilobytes / 1024:.1f} MB"


__all__ = [
    "CLI_NAME",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_OUTPUT",
    "DOCS_BASE_DIR",
    "NAME_PATTERN",
    "REPO_PATTERN",
    "TAG_PATTERN",
    "format_size",
    "is_valid_name",
    "is_valid_repo",
    "is_valid_tag",
]
