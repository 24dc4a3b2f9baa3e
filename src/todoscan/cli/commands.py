"""
CLI commands — argparse subcommands for todoscan.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from ..config import ProjectConfig
from ..core.engine import ParseEngine
from ..core.scanner import Scanner
from ..errors import TodoScanError
from ..models import TodoComment
from ..parsers.registry import default_registry
from . import formatter


def _get_config(args) -> ProjectConfig:
    """Load .todoscan.yaml and apply command-line overrides."""
    project_root = Path(args.project).resolve()
    config = ProjectConfig.load(project_root)

    if getattr(args, "reporter", None):
        config.reporter = args.reporter
    if getattr(args, "tags", None):
        config.tags = config.tags + [t.strip() for t in args.tags.split(",") if t.strip()]
    if getattr(args, "ignore", None):
        config.ignore = config.ignore + args.ignore
    if getattr(args, "associate", None):
        config.associate = {**config.associate, **_parse_associations(args.associate)}
    for flag in ("inline_files", "skip_unsupported", "exit_nicely"):
        if getattr(args, flag, False):
            setattr(config, flag, True)
    return config


def _parse_associations(values: list[str]) -> dict[str, Any]:
    """Turn ``.ext=parserA+parserB`` flags into registry entries."""
    result: dict[str, Any] = {}
    for value in values:
        ext, sep, parsers = value.partition("=")
        if not sep or not parsers:
            raise argparse.ArgumentTypeError(f"invalid association {value!r}, expected .ext=parser")
        result[ext.strip()] = {"parser_name": [p.strip() for p in parsers.split("+") if p.strip()]}
    return result


def _exit_code(todos: list, config: ProjectConfig) -> int:
    if config.exit_nicely:
        return 0
    return 1 if todos else 0


def _output(todos: list, config: ProjectConfig) -> int:
    print(formatter.report(todos, config.reporter))
    return _exit_code(todos, config)


def cmd_scan(args) -> int:
    """Parse files (or stdin) and report tagged comments."""
    config = _get_config(args)
    scanner = Scanner(config, ParseEngine(default_registry()), root=Path(args.project))

    if args.paths:
        files = scanner.discover_files(args.paths)
        if not files:
            print("No files found for reporting", file=sys.stderr)
            return 1
        todos = scanner.scan_files(files)
        return _output(todos, config)

    if sys.stdin.isatty():
        print("No input: pass file paths or pipe content with --filetype", file=sys.stderr)
        return 1
    if not args.filetype:
        print("--filetype is required when reading from stdin", file=sys.stderr)
        return 1

    extension = args.filetype if args.filetype.startswith(".") else f".{args.filetype}"
    todos = scanner.scan_text(sys.stdin.read(), extension, args.stdin_name)
    return _output(todos, config)


def cmd_report(args) -> int:
    """Render previously produced JSON todo lists."""
    config = _get_config(args)
    chunks: list[str] = []

    if args.files:
        for file in args.files:
            chunks.append(Path(file).read_text(encoding="utf-8"))
    elif sys.stdin.isatty():
        print("No input: pass JSON files or pipe JSON into stdin", file=sys.stderr)
        return 1
    else:
        chunks.append(sys.stdin.read())

    todos: list[TodoComment] = []
    for chunk in chunks:
        items = json.loads(chunk)
        if not isinstance(items, list) or not all(isinstance(i, Mapping) for i in items):
            raise ValueError("report input must be a JSON list of todo objects")
        todos.extend(TodoComment.from_dict(item) for item in items)
    return _output(todos, config)


def cmd_extensions(args) -> int:
    """List registered extensions and their parsers."""
    config = _get_config(args)
    registry = default_registry()
    if config.associate:
        registry.register_extensions(config.associate)

    entries = registry.entries()
    if args.json:
        print(json.dumps({ext: entries[ext].to_dict() for ext in sorted(entries)}, indent=2))
        return 0

    for ext in sorted(entries):
        entry = entries[ext]
        line = f"  {ext:12s} {', '.join(entry.parser_names)}"
        if entry.included_files:
            line += f"  (inline: {', '.join(entry.included_files)})"
        print(line)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="todoscan",
        description="Find TODO/FIXME and custom tagged comments in source files",
    )
    parser.add_argument(
        "--project", "-p", default=".",
        help="Directory holding .todoscan.yaml (default: current dir)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", default=False,
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command", help="Available commands")

    # scan
    p = sub.add_parser("scan", help="Parse files and report tagged comments")
    p.add_argument("paths", nargs="*", help="Files, directories or glob patterns")
    p.add_argument("--reporter", "-r", choices=sorted(formatter.REPORTERS))
    p.add_argument("--tags", "-t", help="Comma-separated list of extra tags")
    p.add_argument("--ignore", "-i", action="append", help="Gitignore-style pattern to skip")
    p.add_argument("--associate", "-A", action="append", help="Associate .ext=parser[+parser]")
    p.add_argument("--filetype", "-f", help="Extension used to parse stdin (e.g. .js)")
    p.add_argument("--stdin-name", default=None, help="Filename reported for stdin content")
    p.add_argument("--inline-files", "-I", action="store_true", help="Also parse embedded sections")
    p.add_argument("--skip-unsupported", "-S", action="store_true", help="Skip unsupported files")
    p.add_argument("--exit-nicely", "-x", action="store_true", help="Exit 0 even if todos are found")

    # report
    p = sub.add_parser("report", help="Render JSON todo lists")
    p.add_argument("files", nargs="*", help="JSON files produced by 'scan -r json'")
    p.add_argument("--reporter", "-r", choices=sorted(formatter.REPORTERS))
    p.add_argument("--exit-nicely", "-x", action="store_true", help="Exit 0 even if todos are found")

    # extensions
    p = sub.add_parser("extensions", help="List supported extensions")
    p.add_argument("--json", "-j", action="store_true", default=False, help="Output as JSON")

    return parser


def run_cli(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "scan": cmd_scan,
        "report": cmd_report,
        "extensions": cmd_extensions,
    }

    cmd = commands.get(args.command)
    if cmd is None:
        parser.print_help()
        return 1
    try:
        return cmd(args)
    except (TodoScanError, ValueError, OSError, argparse.ArgumentTypeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
