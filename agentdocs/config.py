"""Configuration loading for agentdocs (.agentdocs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .constants import DOCS_BASE_DIR
from .errors import ConfigError
from .registry import RegistryEntry

CONFIG_FILENAME = ".agentdocs.yml"


@dataclass
class AgentDocsConfig:
    """Project-level defaults defined in .agentdocs.yml."""

    root: Path
    output: Optional[str] = None
    extensions: List[str] = field(default_factory=list)
    docs_dir: str = DOCS_BASE_DIR
    presets: Dict[str, RegistryEntry] = field(default_factory=dict)


def load_config(config_path: Path) -> AgentDocsConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AgentDocsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    docs_dir = _as_str(data.get("docs_dir")) or DOCS_BASE_DIR
    if ".." in docs_dir or Path(docs_dir).is_absolute():
        raise ConfigError(f"docs_dir must be a relative path inside the project: {docs_dir}")

    presets: Dict[str, RegistryEntry] = {}
    for key, raw in _as_dict(data.get("presets")).items():
        presets[str(key).lower()] = _parse_preset(str(key), raw)

    return AgentDocsConfig(
        root=root,
        output=_as_str(data.get("output")),
        extensions=_as_str_list(data.get("extensions")),
        docs_dir=docs_dir,
        presets=presets,
    )


def _parse_preset(key: str, raw: Any) -> RegistryEntry:
    preset = _as_dict(raw)
    repo = _as_str(preset.get("repo"))
    docs_path = _as_str(preset.get("docs_path"))
    if not repo or not docs_path:
        raise ConfigError(f"Preset '{key}' requires 'repo' and 'docs_path'")

    extensions = _as_str_list(preset.get("extensions"))
    return RegistryEntry(
        repo=repo,
        docs_path=docs_path,
        default_tag=_as_str(preset.get("default_tag")) or "main",
        name=_as_str(preset.get("name")) or key,
        packages=tuple(_as_str_list(preset.get("packages"))),
        tag_prefix=_as_str(preset.get("tag_prefix")),
        extensions=tuple(extensions) if extensions else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["AgentDocsConfig", "CONFIG_FILENAME", "load_config"]
