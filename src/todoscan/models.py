"""
Domain models for extracted comments and extension associations.

Frozen dataclasses used across the package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union


@dataclass(frozen=True)
class TodoComment:
    """A tagged comment found in a file."""
    tag: str = "TODO"
    line: int = 1
    text: str = ""
    ref: str = ""
    file: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.line, int) or self.line < 1:
            raise ValueError(f"line must be a positive integer, got {self.line!r}")

    @property
    def key(self) -> tuple[int, str, str]:
        """Identity used to collapse duplicates within one result."""
        return (self.line, self.tag, self.text)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "tag": self.tag,
            "line": self.line,
            "text": self.text,
            "ref": self.ref,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TodoComment":
        return cls(
            tag=str(data.get("tag", "")),
            line=int(data.get("line", 0)),
            text=data.get("text") or "",
            ref=data.get("ref") or "",
            file=data.get("file"),
        )


@dataclass(frozen=True)
class ExtensionEntry:
    """Parsers registered for one file extension.

    ``parser_names`` keeps declaration order; ``included_files`` lists the
    extensions whose grammars also apply to embedded sections.
    """
    parser_names: tuple[str, ...] = ()
    included_files: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def build(
        cls,
        parser_name: Union[str, Sequence[str]],
        included_files: Optional[Sequence[str]] = None,
    ) -> "ExtensionEntry":
        """Normalize a single identifier or a list of them into an entry."""
        if isinstance(parser_name, str):
            names: tuple = (parser_name,)
        else:
            names = tuple(parser_name)
        return cls(parser_names=names, included_files=tuple(included_files or ()))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"parser_name": list(self.parser_names)}
        if self.included_files:
            result["included_files"] = list(self.included_files)
        return result
