"""GitHub Trees API client used to list repository files before download."""

from __future__ import annotations

import json
import os
from typing import Any, Callable, List, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from ..logging import get_logger

API_ROOT = "https://api.github.com"
REQUEST_TIMEOUT = 15.0

Opener = Callable[..., Any]

logger = get_logger("git.tree_fetch")


class GitHubTreeFetcher:
    """Lists blob paths of a repository at a ref.

    Every failure (rate limit, non-200 status, network error, timeout, bad JSON)
    collapses to ``None`` so callers can fall back to a default docs path.
    """

    def __init__(
        self,
        *,
        token: str | None = None,
        opener: Opener | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.token = token if token is not None else os.getenv("GITHUB_TOKEN")
        self._opener = opener or urlopen
        self.timeout = timeout

    def fetch(self, repo: str, tag: str) -> Optional[List[str]]:
        commit = self.get(f"/repos/{repo}/commits/{quote(tag)}")
        tree_sha = _dig(commit, "commit", "tree", "sha")
        if not isinstance(tree_sha, str) or not tree_sha:
            return None

        tree = self.get(f"/repos/{repo}/git/trees/{tree_sha}?recursive=1")
        entries = tree.get("tree") if isinstance(tree, dict) else None
        if not isinstance(entries, list):
            return None

        return [
            entry["path"]
            for entry in entries
            if isinstance(entry, dict)
            and entry.get("type") == "blob"
            and isinstance(entry.get("path"), str)
        ]

    def get(self, api_path: str) -> Optional[Any]:
        """GET ``api_path`` from the GitHub API and return decoded JSON, or None."""
        headers = {
            "User-Agent": "agentdocs",
            "Accept": "application/vnd.github.v3+json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        request = Request(f"{API_ROOT}{api_path}", headers=headers, method="GET")
        try:
            with self._opener(request, timeout=self.timeout) as response:
                status = getattr(response, "status", 200)
                if status != 200:
                    logger.debug("GitHub API %s returned %s", api_path, status)
                    return None
                raw = response.read()
        except HTTPError as exc:
            logger.debug("GitHub API %s failed with status %s", api_path, exc.code)
            return None
        except (URLError, TimeoutError, OSError) as exc:
            logger.debug("GitHub API %s unreachable: %s", api_path, exc)
            return None

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.debug("GitHub API %s returned invalid JSON", api_path)
            return None


def _dig(payload: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(payload, dict):
            return None
        payload = payload.get(key)
    return payload


def fetch_repo_tree(repo: str, tag: str) -> Optional[List[str]]:
    return GitHubTreeFetcher().fetch(repo, tag)


__all__ = ["GitHubTreeFetcher", "fetch_repo_tree"]
