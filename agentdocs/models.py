"""Core data models shared across agentdocs components."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class DocFile:
    """A documentation file relative to the docs root."""

    relative_path: str


@dataclass
class DocSection:
    """One path segment in the documentation hierarchy."""

    name: str
    files: List[DocFile] = field(default_factory=list)
    subsections: List["DocSection"] = field(default_factory=list)


@dataclass(frozen=True)
class DirectoryScore:
    """Cumulative documentation evidence for a candidate directory."""

    directory: str
    count: int
    depth: int


@dataclass(frozen=True)
class IndexMeta:
    """Metadata rendered into the header and regeneration hint of an index."""

    name: str
    docs_path: str
    version: Optional[str] = None
    output_file: Optional[str] = None
    lib_key: Optional[str] = None
    repo: Optional[str] = None
    repo_docs_path: Optional[str] = None


__all__ = ["DirectoryScore", "DocFile", "DocSection", "IndexMeta"]
