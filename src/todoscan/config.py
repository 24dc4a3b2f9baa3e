"""
Project configuration — loads .todoscan.yaml and provides defaults.

Supports:
- extra tags to recognize (e.g. REVIEW, HACK)
- ignore patterns (gitignore syntax)
- extension associations (e.g. ".cls" -> defaultParser)
- reporter and scanning switches
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_NAMES = (".todoscan.yaml", ".todoscan.yml")


@dataclass
class ProjectConfig:
    """Project configuration from .todoscan.yaml."""
    tags: list[str] = field(default_factory=list)
    ignore: list[str] = field(default_factory=list)
    associate: dict[str, Any] = field(default_factory=dict)  # ".ext" -> parser entry
    reporter: str = "table"
    inline_files: bool = False
    skip_unsupported: bool = False
    exit_nicely: bool = False

    @classmethod
    def load(cls, project_root: Path) -> "ProjectConfig":
        """Load config from the project root, or return defaults."""
        for name in CONFIG_NAMES:
            config_path = project_root / name
            if config_path.exists():
                break
        else:
            return cls()

        try:
            data = _load_yaml(config_path)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable config {config_path}: {e}")
            return cls()

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {config_path}: expected a mapping")
            return cls()
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "ProjectConfig":
        scan = data.get("scan", {}) or {}
        return cls(
            tags=[str(t) for t in data.get("tags", []) or []],
            ignore=[str(p) for p in data.get("ignore", []) or []],
            associate=dict(data.get("associate", {}) or {}),
            reporter=str(data.get("reporter", "table")),
            inline_files=bool(scan.get("inline_files", False)),
            skip_unsupported=bool(scan.get("skip_unsupported", False)),
            exit_nicely=bool(scan.get("exit_nicely", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.tags:
            result["tags"] = self.tags
        if self.ignore:
            result["ignore"] = self.ignore
        if self.associate:
            result["associate"] = self.associate
        if self.reporter != "table":
            result["reporter"] = self.reporter
        scan = {
            k: v for k, v in (
                ("inline_files", self.inline_files),
                ("skip_unsupported", self.skip_unsupported),
                ("exit_nicely", self.exit_nicely),
            ) if v
        }
        if scan:
            result["scan"] = scan
        return result


def _load_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
