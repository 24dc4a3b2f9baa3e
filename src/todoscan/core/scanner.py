"""
Scanner — discover files, read them, and collect their tagged comments.

Paths may be files, directories (walked recursively) or glob patterns.
"""

from __future__ import annotations

import glob
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Optional

import pathspec

from ..config import ProjectConfig
from ..models import TodoComment
from .engine import ParseEngine, ParseRequest

logger = logging.getLogger(__name__)

CONCURRENCY_LIMIT = 50

# Default directories to always skip
ALWAYS_SKIP = {
    "__pycache__", ".git", ".hg", ".svn",
    "node_modules", ".venv", "venv", "env",
    "build", "dist", ".eggs", ".mypy_cache", ".pytest_cache",
    ".tox", ".nox",
}


class Scanner:
    """Find files and parse them with a ParseEngine."""

    def __init__(self, config: Optional[ProjectConfig] = None,
                 engine: Optional[ParseEngine] = None,
                 root: Optional[Path] = None,
                 max_workers: int = CONCURRENCY_LIMIT):
        self.config = config or ProjectConfig()
        self.engine = engine or ParseEngine()
        self.root = (root or Path.cwd()).resolve()
        self.max_workers = max(1, max_workers)
        self._ignore_spec = self._build_ignore_spec()
        if self.config.associate:
            self.engine.registry.register_extensions(self.config.associate)

    def _build_ignore_spec(self) -> Optional[pathspec.PathSpec]:
        if self.config.ignore:
            return pathspec.PathSpec.from_lines("gitwildmatch", self.config.ignore)
        return None

    def _ignored(self, path: Path) -> bool:
        if self._ignore_spec is None:
            return False
        try:
            rel = path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            rel = path.as_posix()
        return self._ignore_spec.match_file(rel)

    def discover_files(self, paths: Iterable[str]) -> list[Path]:
        """Expand paths, directories and globs into a de-duplicated file list."""
        found: dict[Path, None] = {}

        for raw in paths:
            if any(c in raw for c in "*?["):
                candidates = [Path(p) for p in sorted(glob.glob(raw, recursive=True))]
            else:
                candidates = [Path(raw)]

            for candidate in candidates:
                if candidate.is_dir():
                    for file in self._walk(candidate):
                        found.setdefault(file, None)
                elif candidate.is_file() and not self._ignored(candidate):
                    found.setdefault(candidate, None)

        return list(found)

    def _walk(self, directory: Path) -> list[Path]:
        results = []
        for dirpath, dirnames, filenames in os.walk(directory):
            dirnames[:] = sorted(
                d for d in dirnames
                if d not in ALWAYS_SKIP and not d.endswith(".egg-info")
                and not self._ignored(Path(dirpath) / d)
            )
            for fname in sorted(filenames):
                path = Path(dirpath) / fname
                if not self._ignored(path):
                    results.append(path)
        return results

    def scan(self, paths: Iterable[str]) -> list[TodoComment]:
        """Parse every discovered file; results keep discovery order."""
        return self.scan_files(self.discover_files(paths))

    def scan_files(self, files: list[Path]) -> list[TodoComment]:
        if self.config.skip_unsupported:
            supported = []
            for f in files:
                if self.engine.registry.is_supported(f.suffix):
                    supported.append(f)
                else:
                    logger.warning(f"Skipping unsupported file: {f}")
            files = supported

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            contents = list(pool.map(_read_text, files))

        todos: list[TodoComment] = []
        for path, content in zip(files, contents):
            todos.extend(self.scan_text(content, path.suffix, path.as_posix()))
        logger.info(f"Scanned {len(files)} file(s), found {len(todos)} item(s)")
        return todos

    def scan_text(self, content: str, extension: str,
                  filename: Optional[str] = None) -> list[TodoComment]:
        """Parse content that is already in memory (e.g. stdin)."""
        return self.engine.parse(ParseRequest(
            content=content,
            extension=extension,
            filename=filename,
            custom_tags=self.config.tags or None,
            with_inline_files=self.config.inline_files,
        ))


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")
