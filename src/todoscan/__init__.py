"""
todoscan — extract TODO/FIXME style comments from source files.
"""

from .core.engine import ParseEngine, ParseRequest, parse
from .errors import (
    TodoScanError,
    UnknownParserError,
    UnsupportedExtensionError,
    ValidationError,
)
from .models import ExtensionEntry, TodoComment
from .parsers.base import BUILTIN_TAGS, ParserConfig
from .parsers.registry import (
    ExtensionRegistry,
    default_registry,
    is_supported,
    register_extensions,
)
from .cli.formatter import report

__version__ = "0.1.0"

__all__ = [
    "parse",
    "ParseEngine",
    "ParseRequest",
    "register_extensions",
    "is_supported",
    "default_registry",
    "ExtensionRegistry",
    "ExtensionEntry",
    "TodoComment",
    "ParserConfig",
    "BUILTIN_TAGS",
    "report",
    "TodoScanError",
    "ValidationError",
    "UnsupportedExtensionError",
    "UnknownParserError",
]
