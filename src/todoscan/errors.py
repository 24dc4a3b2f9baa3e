"""Exceptions raised by the parse engine and the extension registry."""

from __future__ import annotations

from typing import Optional


class TodoScanError(Exception):
    """Base exception for all todoscan errors."""


class ValidationError(TodoScanError, ValueError):
    """Malformed registry entries or request options."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(message)
        self.field_name = field_name


class UnsupportedExtensionError(TodoScanError, LookupError):
    """No parser is registered for the extension."""

    def __init__(self, extension: str):
        super().__init__(f"extension {extension} is not supported")
        self.extension = extension


class UnknownParserError(TodoScanError, LookupError):
    """A parser identifier is neither overridden nor builtin."""

    def __init__(self, identifier: str):
        super().__init__(f"unknown parser: {identifier}")
        self.identifier = identifier
