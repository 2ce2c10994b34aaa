"""Shallow sparse-checkout download of a single docs folder."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Callable, Iterable, Mapping, Optional

from ..constants import is_valid_repo, is_valid_tag
from ..errors import CloneError, ValidationError
from ..logging import get_logger

DEFAULT_CLONE_TIMEOUT = 60.0
SPARSE_CHECKOUT_TIMEOUT = 10.0

# Stalled transfers are bounded by the subprocess timeout instead of git's own limit.
_GIT_ENV_OVERRIDES = {
    "GIT_HTTP_LOW_SPEED_LIMIT": "0",
    "GIT_HTTP_LOW_SPEED_TIME": "999999",
    "GIT_TERMINAL_PROMPT": "0",
}

Runner = Callable[..., None]

logger = get_logger("git.clone")


def validate_repo(repo: str) -> None:
    if not is_valid_repo(repo):
        raise ValidationError(
            f'Invalid repo format: "{repo}". Expected: owner/repo (e.g., vercel/next.js)'
        )


def validate_tag(tag: str) -> None:
    if not is_valid_tag(tag):
        raise ValidationError(
            f'Invalid tag format: "{tag}". Expected a git tag or branch name (e.g., v15.1.0, main)'
        )


def validate_docs_path(docs_path: str) -> None:
    if (
        not docs_path
        or ".." in docs_path
        or PurePosixPath(docs_path).is_absolute()
        or PureWindowsPath(docs_path).is_absolute()
    ):
        raise ValidationError(
            f'Invalid docs path: "{docs_path}". Must be a non-empty relative path without "..".'
        )


@dataclass(frozen=True)
class CloneResult:
    success: bool
    error: Optional[str] = None


class GitCloner:
    """Downloads ``docs_path`` of a GitHub repository at ``tag`` into a directory."""

    def __init__(self, runner: Runner | None = None) -> None:
        self._runner = runner or self._default_runner

    def clone_docs(
        self,
        *,
        repo: str,
        tag: str,
        docs_path: str,
        dest_dir: Path | str,
        timeout: float = DEFAULT_CLONE_TIMEOUT,
    ) -> CloneResult:
        """Return a CloneResult; invalid arguments raise before any I/O."""
        validate_repo(repo)
        validate_tag(tag)
        validate_docs_path(docs_path)

        temp_dir = Path(tempfile.mkdtemp(prefix="agentdocs-"))
        try:
            self._clone(repo, tag, temp_dir, timeout)
            self._run(
                ["git", "sparse-checkout", "set", docs_path],
                cwd=temp_dir,
                timeout=SPARSE_CHECKOUT_TIMEOUT,
            )

            source_dir = temp_dir / docs_path
            if not source_dir.exists():
                raise CloneError(
                    f'Docs folder "{docs_path}" not found in {repo}@{tag}. '
                    "Check the --docs-path value."
                )

            destination = Path(dest_dir)
            if destination.exists():
                shutil.rmtree(destination)
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(source_dir, destination)
            logger.debug("Copied %s to %s", source_dir, destination)
            return CloneResult(success=True)
        except (CloneError, OSError, subprocess.SubprocessError) as exc:
            return CloneResult(success=False, error=str(exc))
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

    def _clone(self, repo: str, tag: str, temp_dir: Path, timeout: float) -> None:
        args = [
            "git",
            "clone",
            "--depth",
            "1",
            "--filter=blob:none",
            "--sparse",
            "--progress",
            "--branch",
            tag,
            f"https://github.com/{repo}.git",
            ".",
        ]
        try:
            self._run(args, cwd=temp_dir, timeout=timeout)
        except subprocess.TimeoutExpired as exc:
            raise CloneError(
                f"Git clone timed out after {timeout:g}s. Check your network or try again."
            ) from exc
        except subprocess.CalledProcessError as exc:
            message = f"{exc.stderr or ''} {exc}"
            if "not found" in message or "did not match" in message:
                raise CloneError(
                    f'Could not find tag/branch "{tag}" in repo "{repo}". Verify it exists on GitHub.'
                ) from exc
            if "Could not resolve host" in message or "unable to access" in message:
                raise CloneError(
                    "Network error: Could not reach GitHub. Check your internet connection."
                ) from exc
            raise CloneError(f"git clone failed: {message.strip()}") from exc

    def _run(self, args: Iterable[str], *, cwd: Path, timeout: float) -> None:
        env = os.environ.copy()
        env.update(_GIT_ENV_OVERRIDES)
        self._runner(list(args), cwd=cwd, env=env, timeout=timeout)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        subprocess.run(
            list(args),
            cwd=str(cwd),
            env=dict(env) if env is not None else None,
            check=True,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
        )


def clone_docs(
    *,
    repo: str,
    tag: str,
    docs_path: str,
    dest_dir: Path | str,
    timeout: float = DEFAULT_CLONE_TIMEOUT,
) -> CloneResult:
    return GitCloner().clone_docs(
        repo=repo, tag=tag, docs_path=docs_path, dest_dir=dest_dir, timeout=timeout
    )


__all__ = [
    "CloneResult",
    "GitCloner",
    "clone_docs",
    "validate_docs_path",
    "validate_repo",
    "validate_tag",
]
