"""Installed library version detection from a project's package.json."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .logging import get_logger

_RANGE_PREFIX = re.compile(r"^[~^>=]+")

logger = get_logger("version_detector")


@dataclass(frozen=True)
class DetectedVersion:
    """A dependency version resolved to an optional git tag."""

    package_name: str
    version: str
    git_tag: Optional[str]


def _merged_dependencies(manifest: Dict[str, Any]) -> Dict[str, Any]:
    # peerDependencies > devDependencies > dependencies
    merged: Dict[str, Any] = {}
    for key in ("dependencies", "devDependencies", "peerDependencies"):
        section = manifest.get(key)
        if isinstance(section, dict):
            merged.update(section)
    return merged


def clean_version(specifier: str) -> Optional[str]:
    """Strip alias, workspace, and range prefixes; None when no version remains."""
    version = specifier
    if version.startswith("npm:"):
        at_index = version.rfind("@")
        if at_index <= 4:
            return None
        version = version[at_index + 1 :]
    if version.startswith("workspace:"):
        version = version[len("workspace:") :]
    version = _RANGE_PREFIX.sub("", version)
    if not any(char.isdigit() for char in version):
        return None
    return version


def detect_version(
    packages: Sequence[str],
    tag_prefix: Optional[str],
    cwd: Path | str | None = None,
) -> Optional[DetectedVersion]:
    """Return the first listed package found in package.json, or None."""
    manifest_path = Path(cwd or Path.cwd()) / "package.json"
    try:
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as exc:
        logger.debug("Ignoring unreadable %s: %s", manifest_path, exc)
        return None

    if not isinstance(manifest, dict):
        return None

    dependencies = _merged_dependencies(manifest)
    for package_name in packages:
        specifier = dependencies.get(package_name)
        if not specifier or not isinstance(specifier, str):
            continue
        version = clean_version(specifier)
        if version is None:
            continue
        git_tag = None if tag_prefix is None else f"{tag_prefix}{version}"
        logger.debug("Detected %s %s in %s", package_name, version, manifest_path)
        return DetectedVersion(package_name=package_name, version=version, git_tag=git_tag)

    return None


__all__ = ["DetectedVersion", "clean_version", "detect_version"]
