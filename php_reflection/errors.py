# php_reflection/errors.py
"""
Exception hierarchy for the reflection model builder.

Lookup misses are never errors in this package: every resolution chain
ends in "create a new node".  The exceptions below cover the few places
where a caller breaks a contract or a resource cannot be loaded.

Hierarchy::

    ReflectionError (base)
    ├── InvalidArgumentError   - caller-contract violation (also a ValueError)
    ├── ProxyResolutionError   - proxy outlived the builder that created it
    ├── InternalTypesError     - built-in types table could not be loaded
    └── EventReplayError       - malformed discovery-event stream
"""

from __future__ import annotations

from typing import Any, Optional


class ReflectionError(Exception):
    """Base exception for all reflection builder errors."""

    def __init__(self, message: str, *, detail: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail is not None:
            return f"{self.message} ({self.detail!r})"
        return self.message


class InvalidArgumentError(ReflectionError, ValueError):
    """Raised when a build operation receives an argument it cannot accept."""
    pass


class ProxyResolutionError(ReflectionError):
    """Raised when a proxy is resolved after its builder was discarded."""
    pass


class InternalTypesError(ReflectionError):
    """Raised when an internal-types table is missing or malformed."""
    pass


class EventReplayError(ReflectionError):
    """Raised when a recorded discovery-event stream cannot be replayed."""
    pass
