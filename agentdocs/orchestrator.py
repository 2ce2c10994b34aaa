"""Pipeline orchestration for the add, remove, and list commands."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import List, Optional

from .config import AgentDocsConfig, load_config
from .constants import (
    DEFAULT_EXTENSIONS,
    DEFAULT_OUTPUT,
    is_valid_name,
    is_valid_repo,
    is_valid_tag,
)
from .docs_detector import DocsDetector
from .errors import CloneError, ValidationError
from .git.clone import GitCloner, validate_repo
from .git.tree_fetch import GitHubTreeFetcher
from .gitignore import ensure_gitignore_entry
from .index_generator import IndexGenerator
from .logging import get_logger
from .models import IndexMeta
from .postproc.markers import MarkerManager
from .prompting import Prompter
from .registry import Registry, RegistryEntry
from .tree import build_doc_tree, collect_doc_files
from .version_detector import detect_version

FALLBACK_DOCS_PATH = "docs"
_CUSTOM_CHOICE = "__custom__"
_VERSION_TAG = re.compile(r"^v\d")


@dataclass
class AddFlags:
    """Raw ``add`` options as supplied on the command line."""

    repo: Optional[str] = None
    tag: Optional[str] = None
    docs_path: Optional[str] = None
    name: Optional[str] = None
    lib: Optional[str] = None
    output: Optional[str] = None
    extensions: Optional[str] = None


@dataclass
class ResolvedOptions:
    """Fully resolved download and index settings for one documentation set."""

    repo: str
    tag: str
    docs_path: str
    name: str
    display_name: str
    output: str
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    lib_key: Optional[str] = None
    detected_version: Optional[str] = None

    @property
    def header_version(self) -> Optional[str]:
        if self.detected_version:
            return self.detected_version
        if _VERSION_TAG.match(self.tag):
            return self.tag[1:]
        return None


@dataclass
class AddOutcome:
    """Result of indexing one documentation set into an agent file."""

    path: Path
    created: bool
    size_before: int
    size_after: int
    file_count: int
    docs_link: str
    gitignore_updated: bool


class Orchestrator:
    """Coordinates option resolution, download, indexing, and injection."""

    def __init__(
        self,
        cwd: str | Path | None = None,
        *,
        config: AgentDocsConfig | None = None,
        cloner: GitCloner | None = None,
        tree_fetcher: GitHubTreeFetcher | None = None,
        detector: DocsDetector | None = None,
        index_generator: IndexGenerator | None = None,
        marker_manager: MarkerManager | None = None,
        prompter: Prompter | None = None,
    ) -> None:
        self.cwd = Path(cwd or Path.cwd()).expanduser().resolve()
        self.config = config or load_config(self.cwd)
        self.registry = Registry.with_overrides(self.config.presets)
        self.cloner = cloner or GitCloner()
        self.tree_fetcher = tree_fetcher or GitHubTreeFetcher()
        self.detector = detector or DocsDetector()
        self.index_generator = index_generator or IndexGenerator()
        self.marker_manager = marker_manager or MarkerManager()
        self.prompter = prompter or Prompter()
        self.logger = get_logger("orchestrator")

    # ------------------------------------------------------------------
    # Commands

    def run_add(self, flags: AddFlags) -> AddOutcome:
        """Download docs, build the index, and inject it into the agent file."""
        options = self.resolve_options(flags)
        target_path = self.resolve_output_path(options.output)
        docs_dir = self.cwd / self.config.docs_dir / options.name
        docs_link = f"./{PurePosixPath(self.config.docs_dir, options.name).as_posix()}"

        created = not target_path.exists()
        existing = "" if created else target_path.read_text(encoding="utf-8")

        self.logger.info(
            "Downloading %s docs from %s@%s", options.display_name, options.repo, options.tag
        )
        result = self.cloner.clone_docs(
            repo=options.repo,
            tag=options.tag,
            docs_path=options.docs_path,
            dest_dir=docs_dir,
        )
        if not result.success:
            raise CloneError(result.error or "Download failed")

        doc_files = collect_doc_files(docs_dir, options.extensions)
        if not doc_files:
            raise CloneError(
                f"No doc files found (extensions: {', '.join(options.extensions)}). "
                "Try --extensions to include other file types."
            )

        sections = build_doc_tree(doc_files)
        self.logger.debug("Built %d top-level sections", len(sections))
        index = self.index_generator.generate(
            sections,
            IndexMeta(
                name=options.display_name,
                docs_path=docs_link,
                version=options.header_version,
                output_file=options.output,
                lib_key=options.lib_key,
                repo=options.repo,
                repo_docs_path=options.docs_path,
            ),
        )

        updated = self.marker_manager.inject(existing, index, options.name)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_text(updated, encoding="utf-8")

        gitignore = ensure_gitignore_entry(self.cwd, self.config.docs_dir)
        return AddOutcome(
            path=target_path,
            created=created,
            size_before=len(existing.encode("utf-8")),
            size_after=len(updated.encode("utf-8")),
            file_count=len(doc_files),
            docs_link=docs_link,
            gitignore_updated=gitignore.updated,
        )

    def run_remove(self, name: str, output: str | None = None) -> Optional[Path]:
        """Remove the index block for ``name``; return the path when it changed."""
        target_path = self.resolve_output_path(output or self.config.output or DEFAULT_OUTPUT)
        if not target_path.exists():
            return None

        key = name.strip().lower()
        content = target_path.read_text(encoding="utf-8")
        if not self.marker_manager.has(content, key):
            return None

        target_path.write_text(self.marker_manager.remove(content, key), encoding="utf-8")
        return target_path

    def list_presets(self) -> List[str]:
        presets = self.registry.items()
        width = max((len(key) for key, _ in presets), default=0)
        lines = []
        for key, entry in presets:
            lines.append(
                f"  {key.ljust(width)}  {entry.repo} -> {entry.docs_path} ({entry.default_tag})"
            )
        return lines

    # ------------------------------------------------------------------
    # Option resolution

    def resolve_options(self, flags: AddFlags) -> ResolvedOptions:
        extensions = self._resolve_extensions(flags.extensions)
        output = flags.output or self.config.output or DEFAULT_OUTPUT

        if flags.docs_path is not None and not flags.docs_path.strip():
            raise ValidationError("--docs-path cannot be empty.")
        if flags.lib and flags.repo:
            raise ValidationError("--lib and --repo are mutually exclusive. Use one or the other.")

        if flags.lib:
            return self._resolve_preset(flags.lib, flags, output, extensions)
        if flags.repo:
            return self._resolve_repo(flags.repo, flags, output, extensions)
        if not self.prompter.interactive:
            raise ValidationError("--lib or --repo is required when not running in a terminal.")
        return self._prompt_for_options(output, extensions)

    def resolve_output_path(self, output: str) -> Path:
        target = (self.cwd / output).resolve()
        if target == self.cwd or self.cwd not in target.parents:
            raise ValidationError(
                f'Output path "{output}" resolves outside the project directory.'
            )
        return target

    def _resolve_extensions(self, raw: Optional[str]) -> List[str]:
        if raw:
            return [part.strip() for part in raw.split(",") if part.strip()]
        if self.config.extensions:
            return list(self.config.extensions)
        return list(DEFAULT_EXTENSIONS)

    def _resolve_preset(
        self, lib: str, flags: AddFlags, output: str, extensions: List[str]
    ) -> ResolvedOptions:
        ignored = [flag for flag, value in (("--name", flags.name), ("--docs-path", flags.docs_path)) if value]
        if ignored:
            self.logger.warning(
                "%s ignored when using --lib (registry values used)", ", ".join(ignored)
            )

        key = lib.lower()
        entry = self.registry.get(key)
        if entry is None:
            raise ValidationError(
                f'Unknown library: "{lib}". Run "agentdocs list" to see available presets.'
            )
        if flags.extensions and entry.extensions:
            self.logger.warning("--extensions ignored when using --lib (registry values used)")

        tag = flags.tag or entry.default_tag
        detected_version = None
        if not flags.tag:
            detected = self._detect_preset_version(entry)
            if detected is not None and self.prompter.confirm_or_auto_accept(
                f"Detected {entry.name} {detected[1]} -> use tag {detected[0]}?",
                f"Auto-detected {entry.name} {detected[1]} -> {detected[0]}",
            ):
                tag, detected_version = detected

        return ResolvedOptions(
            repo=entry.repo,
            tag=tag,
            docs_path=entry.docs_path,
            name=key,
            display_name=entry.name,
            output=output,
            extensions=list(entry.extensions) if entry.extensions else extensions,
            lib_key=key,
            detected_version=detected_version,
        )

    def _resolve_repo(
        self, repo: str, flags: AddFlags, output: str, extensions: List[str]
    ) -> ResolvedOptions:
        validate_repo(repo)
        if not flags.name:
            raise ValidationError(
                "--name is required when using --repo.\n"
                "Example: agentdocs --repo owner/repo --name mylib --tag main"
            )
        safe_name = flags.name.strip().lower()
        if not is_valid_name(safe_name):
            raise ValidationError(
                f'--name "{flags.name}" contains invalid characters. '
                "Use only letters, numbers, dots, hyphens, underscores."
            )

        tag = flags.tag or "main"
        docs_path = flags.docs_path or self._detect_docs_path(repo, tag) or FALLBACK_DOCS_PATH
        return ResolvedOptions(
            repo=repo,
            tag=tag,
            docs_path=docs_path,
            name=safe_name,
            display_name=flags.name.strip(),
            output=output,
            extensions=extensions,
        )

    def _prompt_for_options(self, output: str, extensions: List[str]) -> ResolvedOptions:
        print("\nagentdocs - Documentation Index for AI Agents\n")
        presets = dict(self.registry.items())
        choices = [(f"{preset.name} ({preset.repo})", key) for key, preset in presets.items()]
        choices.append(("Custom GitHub repo...", _CUSTOM_CHOICE))
        mode = self.prompter.select("Choose a library or enter custom repo", choices)

        if mode != _CUSTOM_CHOICE:
            entry = presets[mode]
            tag_initial = entry.default_tag
            detected_version = None
            detected = self._detect_preset_version(entry)
            if detected is not None:
                tag_initial, detected_version = detected
                print(f"  Detected {entry.name} {detected_version}")

            tag = self.prompter.ask(f"Git tag/branch for {entry.name}", default=tag_initial)
            if tag != tag_initial:
                detected_version = None

            return ResolvedOptions(
                repo=entry.repo,
                tag=tag,
                docs_path=entry.docs_path,
                name=mode,
                display_name=entry.name,
                output=self.prompter.output_file(),
                extensions=list(entry.extensions) if entry.extensions else extensions,
                lib_key=mode,
                detected_version=detected_version,
            )

        repo = self.prompter.ask_valid(
            "GitHub repo (owner/repo)",
            lambda value: None if is_valid_repo(value) else "Format: owner/repo",
        )
        name = self.prompter.ask_valid(
            "Library name (used for markers/directory)", _validate_name_answer
        )
        tag = self.prompter.ask_valid(
            "Git tag or branch",
            lambda value: None if is_valid_tag(value) else "Invalid characters in tag",
            default="main",
        )

        docs_path = self._detect_docs_path(repo, tag)
        if not docs_path:
            print("Could not auto-detect docs folder.")
            docs_path = self.prompter.ask_valid(
                "Path to docs folder in repo", _validate_docs_path_answer, default=FALLBACK_DOCS_PATH
            )

        return ResolvedOptions(
            repo=repo,
            tag=tag,
            docs_path=docs_path,
            name=name.lower(),
            display_name=name,
            output=self.prompter.output_file(),
            extensions=extensions,
        )

    # ------------------------------------------------------------------
    # Helpers

    def _detect_preset_version(self, entry: RegistryEntry) -> Optional[tuple[str, str]]:
        """Return ``(git_tag, version)`` for an installed preset package."""
        if not entry.packages or entry.tag_prefix is None:
            return None
        detected = detect_version(entry.packages, entry.tag_prefix, cwd=self.cwd)
        if detected is None or not detected.git_tag:
            return None
        return detected.git_tag, detected.version

    def _detect_docs_path(self, repo: str, tag: str) -> Optional[str]:
        self.logger.info("Detecting docs folder via GitHub API...")
        paths = self.tree_fetcher.fetch(repo, tag)
        if paths is None:
            self.logger.debug("Repository listing unavailable for %s@%s", repo, tag)
            return None

        detected = self.detector.detect(paths)
        if detected is None:
            self.logger.warning(
                'Could not auto-detect docs folder, using default "%s"', FALLBACK_DOCS_PATH
            )
            return None

        accepted = self.prompter.confirm_or_auto_accept(
            f'Detected docs at "{detected}". Use this path?',
            f'Auto-detected docs path: "{detected}"',
        )
        if not accepted:
            self.logger.warning('Using default "%s" path', FALLBACK_DOCS_PATH)
            return None
        return detected


def _validate_name_answer(value: str) -> Optional[str]:
    lowered = value.lower()
    if not lowered:
        return "Required"
    if not is_valid_name(lowered):
        return "Use only letters, numbers, dots, hyphens, underscores"
    return None


def _validate_docs_path_answer(value: str) -> Optional[str]:
    if not value:
        return "Required"
    if ".." in value:
        return "Path traversal (..) not allowed"
    if PurePosixPath(value).is_absolute():
        return "Must be a relative path"
    return None


__all__ = ["AddFlags", "AddOutcome", "Orchestrator", "ResolvedOptions"]
