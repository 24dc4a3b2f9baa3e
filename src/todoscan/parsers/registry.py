"""
Extension registry — maps file extensions to comment parsers.

The default registry is seeded once with the builtin table and only grows or
overwrites through ``register_extensions``; it is never reset.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..errors import UnsupportedExtensionError, ValidationError
from ..models import ExtensionEntry

logger = logging.getLogger(__name__)

_MARKUP_SECTIONS = (".html", ".js", ".css")

BUILTIN_EXTENSIONS: dict[str, Any] = {
    ".bash": "coffeeParser",
    ".c": "defaultParser",
    ".cjs": "defaultParser",
    ".cjsx": "coffeeParser",
    ".clj": "clojureParser",
    ".cljs": "clojureParser",
    ".cljc": "clojureParser",
    ".coffee": "coffeeParser",
    ".cpp": "defaultParser",
    ".cr": "coffeeParser",
    ".cs": "defaultParser",
    ".cson": "coffeeParser",
    ".css": "defaultParser",
    ".ctp": ("defaultParser", _MARKUP_SECTIONS),
    ".cts": "defaultParser",
    ".ejs": "ejsParser",
    ".erb": "ejsParser",
    ".erl": "erlangParser",
    ".es": "defaultParser",
    ".es6": "defaultParser",
    ".ex": "coffeeParser",
    ".exs": "coffeeParser",
    ".fs": "fsharpParser",
    ".gd": "coffeeParser",
    ".go": "defaultParser",
    ".h": "defaultParser",
    ".haml": "hamlParser",
    ".handlebars": "hbsParser",
    ".hbs": "hbsParser",
    ".hcl": ["defaultParser", "coffeeParser"],
    ".hgn": "hbsParser",
    ".hogan": "hbsParser",
    ".hrl": "erlangParser",
    ".hs": "haskellParser",
    ".htm": "twigParser",
    ".html": "twigParser",
    ".jade": "jadeParser",
    ".java": "defaultParser",
    ".jl": "pythonParser",
    ".js": "defaultParser",
    ".jsx": "defaultParser",
    ".kt": "defaultParser",
    ".less": "defaultParser",
    ".lua": "luaParser",
    ".m": "defaultParser",
    ".markdown": "twigParser",
    ".md": "twigParser",
    ".mjs": "defaultParser",
    ".mm": "defaultParser",
    ".mts": "defaultParser",
    ".mustache": "hbsParser",
    ".njk": "twigParser",
    ".pas": "pascalParser",
    ".php": ("defaultParser", _MARKUP_SECTIONS),
    ".pl": "coffeeParser",
    ".pm": "coffeeParser",
    ".proto": "defaultParser",
    ".pug": "jadeParser",
    ".py": "pythonParser",
    ".rb": "coffeeParser",
    ".rs": "defaultParser",
    ".sass": "defaultParser",
    ".scala": "defaultParser",
    ".scss": "defaultParser",
    ".sh": "coffeeParser",
    ".sql": ["defaultParser", "haskellParser"],
    ".ss": "ssParser",
    ".styl": "defaultParser",
    ".svelte": ("twigParser", _MARKUP_SECTIONS),
    ".swift": "defaultParser",
    ".tex": "latexParser",
    ".tf": ["defaultParser", "coffeeParser"],
    ".ts": "defaultParser",
    ".tsx": "defaultParser",
    ".twig": "twigParser",
    ".vue": ("twigParser", _MARKUP_SECTIONS),
    ".yaml": "coffeeParser",
    ".yml": "coffeeParser",
    ".zsh": "coffeeParser",
}


def _check_extension(extension: Any) -> None:
    if not isinstance(extension, str) or len(extension) <= 1 or extension[0] != ".":
        raise ValidationError(
            f"Cannot register extension: invalid extension {extension!r}",
            field_name="extension",
        )


def to_entry(extension: str, value: Any) -> ExtensionEntry:
    """Validate one registry value and normalize it into an ExtensionEntry.

    Accepts an ExtensionEntry, a mapping with ``parser_name`` (or
    ``parserName``) and optional ``included_files`` (or ``includedFiles``),
    or a bare identifier / list of identifiers.
    """
    _check_extension(extension)

    if isinstance(value, ExtensionEntry):
        names, included = value.parser_names, value.included_files
    elif isinstance(value, Mapping):
        names = value.get("parser_name", value.get("parserName"))
        included = value.get("included_files", value.get("includedFiles")) or ()
    else:
        names, included = value, ()

    if isinstance(names, str):
        names = (names,)
    if not isinstance(names, (list, tuple)) or not names:
        raise ValidationError(
            f"Cannot register extension {extension}: `parser_name` is missing",
            field_name="parser_name",
        )
    for name in names:
        if not isinstance(name, str) or not name:
            raise ValidationError(
                f"Cannot register extension {extension}: invalid parser name {name!r}",
                field_name="parser_name",
            )
    if isinstance(included, str) or not isinstance(included, (list, tuple)):
        raise ValidationError(
            f"Cannot register extension {extension}: `included_files` must be a list",
            field_name="included_files",
        )
    for inc in included:
        _check_extension(inc)

    return ExtensionEntry.build(list(names), included)


class ExtensionRegistry:
    """Extension → parser identifiers, plus embedded-section declarations."""

    def __init__(self, entries: Optional[Mapping[str, Any]] = None):
        self._entries: dict[str, ExtensionEntry] = {}
        if entries:
            self.register_extensions(entries)

    @classmethod
    def with_builtins(cls) -> "ExtensionRegistry":
        registry = cls()
        for ext, value in BUILTIN_EXTENSIONS.items():
            if isinstance(value, tuple):
                value = ExtensionEntry.build(value[0], value[1])
            registry._entries[ext] = to_entry(ext, value)
        return registry

    def register_extensions(self, entries: Mapping[str, Any]) -> None:
        """Merge entries into the registry, overwriting existing keys.

        Every entry is validated before anything is applied, so a malformed
        entry leaves the registry untouched.
        """
        if not entries:
            return
        if not isinstance(entries, Mapping):
            raise ValidationError("extension entries must be a mapping", field_name="entries")

        validated = {ext: to_entry(ext, value) for ext, value in entries.items()}

        for ext, entry in validated.items():
            if ext in self._entries:
                logger.debug(f"Extension {ext}: {self._entries[ext].parser_names} -> {entry.parser_names}")
            self._entries[ext] = entry
        logger.debug(f"Registered {len(validated)} extension(s): {', '.join(validated)}")

    def is_supported(self, extension: str) -> bool:
        return extension in self._entries

    def get(self, extension: str) -> Optional[ExtensionEntry]:
        return self._entries.get(extension)

    def extensions(self) -> list[str]:
        return sorted(self._entries)

    def entries(self) -> dict[str, ExtensionEntry]:
        """Snapshot of the current associations."""
        return dict(self._entries)

    def copy(self) -> "ExtensionRegistry":
        clone = ExtensionRegistry()
        clone._entries = dict(self._entries)
        return clone

    def resolve_active_parsers(self, extension: str, include_embedded: bool = False) -> list[str]:
        """Parser identifiers to run for an extension, first occurrence wins.

        Included extensions are expanded one level deep, and only when
        ``include_embedded`` is set.
        """
        entry = self._entries.get(extension)
        if entry is None:
            raise UnsupportedExtensionError(extension)

        names = list(entry.parser_names)
        if include_embedded:
            for included in entry.included_files:
                sub = self._entries.get(included)
                if sub is None:
                    raise UnsupportedExtensionError(included)
                names.extend(sub.parser_names)

        return list(dict.fromkeys(names))

    def __contains__(self, extension: object) -> bool:
        return extension in self._entries

    def __len__(self) -> int:
        return len(self._entries)


_default_registry = ExtensionRegistry.with_builtins()


def default_registry() -> ExtensionRegistry:
    """The process-wide registry used by the module-level API."""
    return _default_registry


def register_extensions(entries: Mapping[str, Any]) -> None:
    """Extend the default registry at runtime."""
    _default_registry.register_extensions(entries)


def is_supported(extension: str) -> bool:
    """Whether the default registry knows the extension."""
    return _default_registry.is_supported(extension)


def supported_extensions() -> set[str]:
    """Return all file extensions we can parse."""
    return set(_default_registry.extensions())
