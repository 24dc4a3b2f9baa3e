"""
Parser resolver — turn a parser identifier into a factory.

Caller-supplied overrides win over the builtin catalogue.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..errors import UnknownParserError
from ..parsers.base import ParserFactory
from ..parsers.grammars import BUILTIN_PARSERS

logger = logging.getLogger(__name__)


class ParserResolver:
    """Look up parser factories by identifier."""

    def __init__(self, catalogue: Optional[Mapping[str, ParserFactory]] = None):
        self.catalogue: Mapping[str, ParserFactory] = (
            BUILTIN_PARSERS if catalogue is None else catalogue
        )

    def resolve(self, identifier: str,
                overrides: Optional[Mapping[str, ParserFactory]] = None) -> ParserFactory:
        if overrides and identifier in overrides:
            logger.debug(f"Parser {identifier}: using caller override")
            return overrides[identifier]
        factory = self.catalogue.get(identifier)
        if factory is None:
            raise UnknownParserError(identifier)
        return factory

    def available(self) -> list[str]:
        """Identifiers known to the builtin catalogue."""
        return sorted(self.catalogue)
