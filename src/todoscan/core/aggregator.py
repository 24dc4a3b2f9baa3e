"""
Aggregator — fan out to every active parser, then merge, sort and dedup.

Merge order is the order of the parser identifiers, never completion order,
so running the parsers on a thread pool gives the same result as running them
one after another.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Optional, Sequence

from ..models import TodoComment
from ..parsers.base import Extractor, ParserConfig, ParserFactory
from .resolver import ParserResolver

logger = logging.getLogger(__name__)


def merge_results(results: Iterable[Iterable[Any]]) -> list[TodoComment]:
    """Concatenate parser outputs in the given order."""
    merged: list[TodoComment] = []
    for items in results:
        for item in items:
            if isinstance(item, Mapping):
                item = TodoComment.from_dict(item)
            merged.append(item)
    return merged


def sort_by_line(comments: Iterable[TodoComment]) -> list[TodoComment]:
    """Stable sort; items on the same line keep their emission order."""
    return sorted(comments, key=lambda c: c.line)


def dedupe(comments: Iterable[TodoComment]) -> list[TodoComment]:
    """Drop items whose (line, tag, text) was already seen, keeping the first."""
    seen: set[tuple[int, str, str]] = set()
    kept: list[TodoComment] = []
    for comment in comments:
        key = comment.key
        if key in seen:
            continue
        seen.add(key)
        kept.append(comment)
    return kept


class Aggregator:
    """Run a request's parsers and combine their output."""

    def __init__(self, resolver: Optional[ParserResolver] = None, max_workers: int = 1):
        self.resolver = resolver or ParserResolver()
        self.max_workers = max(1, max_workers)

    def instantiate(self, identifiers: Sequence[str], config: ParserConfig,
                    overrides: Optional[Mapping[str, ParserFactory]] = None) -> list[Extractor]:
        """Resolve every identifier and call its factory once."""
        return [self.resolver.resolve(name, overrides)(config) for name in identifiers]

    def run(self, content: str, filename: Optional[str], identifiers: Sequence[str],
            config: ParserConfig,
            overrides: Optional[Mapping[str, ParserFactory]] = None) -> list[TodoComment]:
        extractors = self.instantiate(identifiers, config, overrides)

        if self.max_workers > 1 and len(extractors) > 1:
            # map() yields in submission order and re-raises the first failure
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(extractors))) as pool:
                results = list(pool.map(lambda fn: fn(content, filename), extractors))
        else:
            results = [fn(content, filename) for fn in extractors]

        merged = merge_results(results)
        comments = dedupe(sort_by_line(merged))
        logger.debug(
            f"{filename or '<content>'}: {len(identifiers)} parser(s), "
            f"{len(merged)} item(s), {len(comments)} after dedup"
        )
        return comments
