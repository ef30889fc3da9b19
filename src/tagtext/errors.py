from __future__ import annotations


class TagTextError(Exception):
    """Base class for all errors raised by tagtext."""


class ConfigurationError(TagTextError):
    """Raised when a language or its classification tables are not available."""


class InvalidArgument(TagTextError, ValueError):
    """Raised when an operation receives a parameter it cannot work with."""


class NotFound(TagTextError, LookupError):
    """Raised when a named transformation is not recorded on a document."""
