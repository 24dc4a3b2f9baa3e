"""
Base parser types and the shared comment grammar machinery.

A parser factory takes a ``ParserConfig`` and returns an extraction function
``(content, filename) -> list[TodoComment]``. Builtin grammars are
``CommentGrammar`` instances, which are factories themselves.
"""

from __future__ import annotations

import bisect
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..errors import ValidationError
from ..models import TodoComment

BUILTIN_TAGS: tuple[str, ...] = ("TODO", "FIXME")

Extractor = Callable[[str, Optional[str]], list[TodoComment]]
ParserFactory = Callable[["ParserConfig"], Extractor]

# "text /ref" at the end of a message
_TRAILING_REF = re.compile(r"^(?P<text>.*?)\s+/(?P<ref>[^\s/]+)$")

# Start of line or after whitespace
_BOUNDARY = r"(?:^|(?<=\s))"


def validate_custom_tags(value: Any) -> tuple[str, ...]:
    """Check request-scoped tags and return them as a tuple."""
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValidationError("`custom_tags` must be a list of strings", field_name="custom_tags")
    for tag in value:
        if not isinstance(tag, str) or not tag.strip():
            raise ValidationError(
                f"`custom_tags` must only contain non-empty strings, got {tag!r}",
                field_name="custom_tags",
            )
    return tuple(tag.strip() for tag in value)


@dataclass(frozen=True)
class ParserConfig:
    """Tag configuration handed to every parser factory for one request."""
    custom_tags: tuple[str, ...] = ()

    @property
    def tags(self) -> tuple[str, ...]:
        """Custom tags first, then builtins, upper-cased and unique."""
        seen: dict[str, None] = {}
        for tag in (*self.custom_tags, *BUILTIN_TAGS):
            seen.setdefault(tag.upper(), None)
        return tuple(seen)

    def body_pattern(self) -> str:
        """Regex for a comment body: ``[@]TAG[(ref)][:] text``."""
        # Longest first so "TODOS" wins over "TODO" when both are tags
        names = sorted(self.tags, key=len, reverse=True)
        alternation = "|".join(re.escape(t) for t in names)
        return (
            r"@?(?P<tag>" + alternation + r")(?![\w-])"
            r"[ \t]*(?:\((?P<ref>[^)]*)\))?[ \t]*:?[ \t]*(?P<text>.*?)[ \t]*$"
        )


def make_comment(match: re.Match, line: int, filename: Optional[str]) -> TodoComment:
    """Build a TodoComment from a body match."""
    text = (match.group("text") or "").strip()
    ref = (match.group("ref") or "").strip()
    if not ref:
        trailing = _TRAILING_REF.match(text)
        if trailing:
            text = trailing.group("text").strip()
            ref = trailing.group("ref")
    return TodoComment(
        tag=match.group("tag").upper(),
        line=line,
        text=text,
        ref=ref,
        file=filename,
    )


class CommentExtractor(ABC):
    """Abstract extraction function bound to one tag configuration."""

    def __call__(self, content: str, filename: Optional[str] = None) -> list[TodoComment]:
        return self.extract(content, filename)

    @abstractmethod
    def extract(self, content: str, filename: Optional[str] = None) -> list[TodoComment]:
        """Return every tagged comment in ``content``."""


@dataclass(frozen=True)
class CommentGrammar:
    """Comment syntax of one language family.

    ``line_markers`` are regexes opening a comment that runs to end of line;
    ``blocks`` are (open, close) regex pairs, matched with MULTILINE so a
    delimiter may be pinned to its own line. ``block_prefix`` strips
    decoration at the start of each line inside a block (e.g. `` * `` in C).

    With ``anchor_blocks`` an opener only counts at line start or after
    whitespace, like line markers, so ``"lib/*"`` in a string opens nothing.
    """
    name: str
    line_markers: tuple[str, ...] = ()
    blocks: tuple[tuple[str, str], ...] = ()
    block_prefix: str = r"[ \t]*"
    anchor_blocks: bool = True

    def __call__(self, config: ParserConfig) -> Extractor:
        return GrammarExtractor(self, config)


class GrammarExtractor(CommentExtractor):
    """Regex-driven extractor for a ``CommentGrammar``."""

    def __init__(self, grammar: CommentGrammar, config: ParserConfig):
        self.grammar = grammar
        body = config.body_pattern()
        self._line_re: Optional[re.Pattern] = None
        self._block_re: Optional[re.Pattern] = None
        if grammar.line_markers:
            markers = "|".join(f"(?:{m})" for m in grammar.line_markers)
            self._line_re = re.compile(
                _BOUNDARY + r"(?:" + markers + r")[ \t]*" + body, re.IGNORECASE,
            )
        if grammar.blocks:
            anchor = _BOUNDARY if grammar.anchor_blocks else ""
            alternatives = [
                f"{anchor}(?:{open_})(?P<b{i}>.*?)(?:{close})"
                for i, (open_, close) in enumerate(grammar.blocks)
            ]
            self._block_re = re.compile("|".join(alternatives), re.DOTALL | re.MULTILINE)
        self._inner_re = re.compile(grammar.block_prefix + body, re.IGNORECASE)

    def extract(self, content: str, filename: Optional[str] = None) -> list[TodoComment]:
        content = content.replace("\r\n", "\n")
        line_starts = [0] + [m.end() for m in re.finditer("\n", content)]

        def line_of(offset: int) -> int:
            return bisect.bisect_right(line_starts, offset)

        comments: list[TodoComment] = []
        spans: list[tuple[int, int]] = []

        if self._block_re is not None:
            for block in self._block_re.finditer(content):
                spans.append(block.span())
                group = next(g for g, v in block.groupdict().items() if v is not None)
                inner_start = block.start(group)
                offset = inner_start
                for raw in block.group(group).split("\n"):
                    m = self._inner_re.match(raw)
                    if m:
                        comments.append(make_comment(m, line_of(offset), filename))
                    offset += len(raw) + 1

        if self._line_re is not None:
            for index, start in enumerate(line_starts):
                end = content.find("\n", start)
                raw = content[start:] if end == -1 else content[start:end]
                m = self._line_re.search(raw)
                # a marker swallowed by a block may precede a real one
                while m and _inside(start + m.start(), spans):
                    m = self._line_re.search(raw, m.start() + 1)
                if m:
                    comments.append(make_comment(m, index + 1, filename))

        comments.sort(key=lambda c: c.line)
        return comments


def _inside(offset: int, spans: list[tuple[int, int]]) -> bool:
    return any(start <= offset < end for start, end in spans)
