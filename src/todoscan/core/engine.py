"""
Parse engine — the public entry point for extracting comments from content.

One request runs: validate → merge registry additions → check support →
resolve active parsers → aggregate. Any failure ends the request with no
partial output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from ..errors import UnsupportedExtensionError, ValidationError
from ..models import TodoComment
from ..parsers.base import ParserConfig, ParserFactory, validate_custom_tags
from ..parsers.registry import ExtensionRegistry, default_registry
from .aggregator import Aggregator
from .resolver import ParserResolver

logger = logging.getLogger(__name__)


@dataclass
class ParseRequest:
    """Everything needed to parse one piece of content."""
    content: str = ""
    extension: str = ""
    filename: Optional[str] = None
    associate_parser: Mapping[str, Any] = field(default_factory=dict)
    custom_parsers: Mapping[str, ParserFactory] = field(default_factory=dict)
    custom_tags: Optional[Sequence[str]] = None
    with_inline_files: bool = False


class ParseEngine:
    """Orchestrate registry, resolver and aggregator for parse requests.

    Registry additions passed with a request are merged into ``registry``
    itself, so they stay visible to every later request on that registry.
    """

    def __init__(self, registry: Optional[ExtensionRegistry] = None,
                 resolver: Optional[ParserResolver] = None,
                 max_workers: int = 1):
        self.registry = registry if registry is not None else default_registry()
        self.resolver = resolver or ParserResolver()
        self.aggregator = Aggregator(self.resolver, max_workers=max_workers)

    def parse(self, request: ParseRequest) -> list[TodoComment]:
        if not isinstance(request.extension, str) or not request.extension:
            raise ValidationError("`extension` is required", field_name="extension")
        if not isinstance(request.content, str):
            raise ValidationError("`content` must be a string", field_name="content")
        custom_tags = validate_custom_tags(request.custom_tags)

        if request.associate_parser:
            self.registry.register_extensions(request.associate_parser)

        if not self.registry.is_supported(request.extension):
            raise UnsupportedExtensionError(request.extension)

        identifiers = self.registry.resolve_active_parsers(
            request.extension, include_embedded=request.with_inline_files,
        )
        logger.debug(f"{request.extension}: active parsers {identifiers}")

        return self.aggregator.run(
            request.content,
            request.filename,
            identifiers,
            ParserConfig(custom_tags=custom_tags),
            overrides=request.custom_parsers,
        )

    def parse_text(self, content: str, extension: str, **options: Any) -> list[TodoComment]:
        """Keyword form of ``parse``; options mirror ``ParseRequest`` fields."""
        return self.parse(ParseRequest(content=content, extension=extension, **options))


_default_engine = ParseEngine()


def parse(content: str, extension: str, *,
          filename: Optional[str] = None,
          associate_parser: Optional[Mapping[str, Any]] = None,
          custom_parsers: Optional[Mapping[str, ParserFactory]] = None,
          custom_tags: Optional[Sequence[str]] = None,
          with_inline_files: bool = False) -> list[TodoComment]:
    """Extract tagged comments from ``content`` using the default registry."""
    return _default_engine.parse(ParseRequest(
        content=content,
        extension=extension,
        filename=filename,
        associate_parser=associate_parser or {},
        custom_parsers=custom_parsers or {},
        custom_tags=custom_tags,
        with_inline_files=with_inline_files,
    ))
