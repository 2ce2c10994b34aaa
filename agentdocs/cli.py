"""CLI entrypoints for agentdocs commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .constants import format_size
from .errors import AgentDocsError
from .logging import configure_logging
from .orchestrator import AddFlags, Orchestrator
from .prompting import PromptCancelled

_COMMANDS = {"add", "remove", "list"}
_TOP_LEVEL_FLAGS = {"-v", "--verbose"}
_TOP_LEVEL_OPTIONS = {"--log-file"}


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_output_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output",
        default=None,
        help="Target agent file (default: AGENTS.md).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agentdocs",
        description=(
            "Download documentation from a GitHub repo and generate a compact index "
            "for AI coding agents."
        ),
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser(
        "add",
        help="Add or refresh the documentation index for a library (default command).",
    )
    _add_verbose_option(add_parser, suppress_default=True)
    add_parser.add_argument("--repo", help="GitHub repository (e.g., vercel/next.js).")
    add_parser.add_argument(
        "--tag",
        help="Git tag or branch (default: main for --repo, preset-specific for --lib).",
    )
    add_parser.add_argument(
        "--docs-path",
        dest="docs_path",
        help="Path to the docs folder in the repo (auto-detected when omitted).",
    )
    add_parser.add_argument(
        "--name",
        help="Library name for markers and the download directory (required with --repo).",
    )
    add_parser.add_argument(
        "--lib",
        help="Use a built-in library preset (e.g., nextjs, react, angular, tailwindcss).",
    )
    _add_output_option(add_parser)
    add_parser.add_argument(
        "--extensions",
        help="Comma-separated file extensions (default: md,mdx).",
    )

    remove_parser = subparsers.add_parser(
        "remove",
        help="Remove a library's index block from the agent file.",
    )
    _add_verbose_option(remove_parser, suppress_default=True)
    remove_parser.add_argument("name", help="Library name used when the index was added.")
    _add_output_option(remove_parser)

    list_parser = subparsers.add_parser("list", help="List all available library presets.")
    _add_verbose_option(list_parser, suppress_default=True)

    return parser


def _with_default_command(argv: list[str]) -> list[str]:
    """Insert ``add`` when no subcommand is given, so ``agentdocs --lib x`` works.

    Only the first argument after the top-level options can name a
    subcommand; later words may be option values such as ``--name list``.
    """
    position = 0
    while position < len(argv):
        if argv[position] in _TOP_LEVEL_FLAGS or argv[position].startswith("--log-file="):
            position += 1
        elif argv[position] in _TOP_LEVEL_OPTIONS:
            position += 2
        else:
            break
    if position < len(argv) and argv[position] in _COMMANDS | {"-h", "--help"}:
        return argv
    return [*argv[:position], "add", *argv[position:]]


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for agentdocs commands."""
    parser = _build_parser()
    args = parser.parse_args(_with_default_command(list(sys.argv[1:] if argv is None else argv)))

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        orchestrator = Orchestrator()
        if args.command == "add":
            _run_add(orchestrator, args)
        elif args.command == "remove":
            path = orchestrator.run_remove(args.name, args.output)
            if path is None:
                print(f"No index for {args.name.strip().lower()} found")
            else:
                print(f"Removed {args.name.strip().lower()} index from {_relativize(path)}")
        elif args.command == "list":
            print("\nAvailable library presets:\n")
            for line in orchestrator.list_presets():
                print(line)
            print("\n  Usage: agentdocs --lib <name>\n")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except PromptCancelled:
        parser.exit(0)
    except AgentDocsError as exc:
        parser.exit(1, f"Error: {exc}\n")
    except Exception as exc:  # pragma: no cover
        parser.exit(1, f"agentdocs {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _run_add(orchestrator: Orchestrator, args: argparse.Namespace) -> None:
    outcome = orchestrator.run_add(
        AddFlags(
            repo=args.repo,
            tag=args.tag,
            docs_path=args.docs_path,
            name=args.name,
            lib=args.lib,
            output=args.output,
            extensions=args.extensions,
        )
    )
    action = "Created" if outcome.created else "Updated"
    if outcome.created:
        size_info = format_size(outcome.size_after)
    else:
        size_info = f"{format_size(outcome.size_before)} -> {format_size(outcome.size_after)}"
    print(f"{action} {_relativize(outcome.path)} ({size_info})")
    print(f"{outcome.file_count} doc files indexed from {outcome.docs_link}")
    if outcome.gitignore_updated:
        print(f"Added {orchestrator.config.docs_dir} to .gitignore")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
