"""
Reporters — render a list of tagged comments for display.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Union
from xml.sax.saxutils import quoteattr

from ..models import TodoComment

Reporter = Callable[[list[TodoComment]], str]


def _normalize(todos: Iterable[Any]) -> list[TodoComment]:
    return [TodoComment.from_dict(t) if isinstance(t, Mapping) else t for t in todos]


def _group_by_file(todos: list[TodoComment]) -> dict[str, list[TodoComment]]:
    groups: dict[str, list[TodoComment]] = {}
    for t in todos:
        groups.setdefault(t.file or "", []).append(t)
    return groups


def format_table(todos: list[TodoComment]) -> str:
    """Per-file listing with aligned columns and a summary line."""
    if not todos:
        return "No todos/fixmes found."

    lines = []
    for file, items in _group_by_file(todos).items():
        lines.append(file or "<stdin>")
        for t in items:
            ref = f" [{t.ref}]" if t.ref else ""
            lines.append(f"  line {t.line:<5d} {t.tag:8s} {t.text}{ref}")
        lines.append("")

    counts: dict[str, int] = {}
    for t in todos:
        counts[t.tag] = counts.get(t.tag, 0) + 1
    summary = ", ".join(f"{n} {tag}" for tag, n in counts.items())
    lines.append(f"Found {len(todos)} item(s): {summary}")
    return "\n".join(lines)


def format_json(todos: list[TodoComment]) -> str:
    return json.dumps([t.to_dict() for t in todos], indent=2)


def format_raw(todos: list[TodoComment]) -> str:
    """One ``file:line tag text`` entry per line."""
    return "\n".join(
        f"{t.file or '<stdin>'}:{t.line} {t.tag} {t.text}".rstrip() for t in todos
    )


def format_markdown(todos: list[TodoComment]) -> str:
    """Markdown with one section per tag, listing file/line/text."""
    by_tag: dict[str, list[TodoComment]] = {}
    for t in todos:
        by_tag.setdefault(t.tag, []).append(t)

    lines = []
    for tag, items in by_tag.items():
        lines.append(f"### {tag}s")
        lines.append("| Filename | line # | {} |".format(tag))
        lines.append("|:------|:------:|:------|")
        for t in items:
            text = t.text.replace("|", "\\|")
            if t.ref:
                text = f"{text} ({t.ref})"
            lines.append(f"| [{t.file}]({t.file}#L{t.line}) | {t.line} | {text} |")
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def format_xml(todos: list[TodoComment]) -> str:
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<todos>"]
    for t in todos:
        attrs = " ".join(
            f"{k}={quoteattr(str(v))}" for k, v in t.to_dict().items() if v not in (None, "")
        )
        lines.append(f"  <todo {attrs} />")
    lines.append("</todos>")
    return "\n".join(lines)


REPORTERS: dict[str, Reporter] = {
    "table": format_table,
    "json": format_json,
    "raw": format_raw,
    "markdown": format_markdown,
    "xml": format_xml,
}


def report(todos: Iterable[Any], reporter: Union[str, Reporter] = "table") -> str:
    """Render todos with a builtin reporter name or a custom callable."""
    items = _normalize(todos)
    if callable(reporter):
        return reporter(items)
    fn = REPORTERS.get(reporter)
    if fn is None:
        raise ValueError(f"Unknown reporter: {reporter} (choose from {', '.join(REPORTERS)})")
    return fn(items)
