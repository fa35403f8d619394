from __future__ import annotations


class GenerationError(Exception):
    """Raised when a descriptor cannot be converted to a type declaration."""


class UnsupportedNestedTypeError(GenerationError):
    """Raised for a nested message type that is not a synthetic map entry."""

    def __init__(self, message_name: str, nested_name: str):
        self.message_name = message_name
        self.nested_name = nested_name
        super().__init__(
            f"Unsupported nested type '{nested_name}' in message '{message_name}'. "
            f"Only map entries may be nested; declare '{nested_name}' at file level."
        )


class InvalidDescriptorError(GenerationError):
    """Raised when a descriptor breaks an invariant the mapping rules rely on."""


class RequestError(Exception):
    """Raised when the request cannot be read or the response cannot be written."""
