"""Repository download and listing collaborators."""

from .clone import CloneResult, GitCloner, clone_docs, validate_docs_path, validate_repo, validate_tag
from .tree_fetch import GitHubTreeFetcher, fetch_repo_tree

__all__ = [
    "CloneResult",
    "GitCloner",
    "GitHubTreeFetcher",
    "clone_docs",
    "fetch_repo_tree",
    "validate_docs_path",
    "validate_repo",
    "validate_tag",
]
