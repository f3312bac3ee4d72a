"""php_reflection: reflection model builder for static source analysis.

A source parser reports what it discovers (classes, interfaces, functions,
members, literals) to a :class:`DefaultBuilder`; the builder assembles a
cross-referenced model of packages and types that analyzers traverse.

Submodules
----------
builder
    ``AbstractBuilder`` (the parser-facing operations) and
    ``DefaultBuilder``.
registry
    Package, function and type registries, including the class /
    interface resolution algorithm.
identifiers
    Qualified identifier analysis (``foo::bar::Baz``).
internal_types
    Oracle for built-in type names and their pseudo-packages.
proxy
    Deferred class/interface references.
values
    Literal value nodes and the per-session flyweight cache.
ast_nodes
    Package, type, function and member nodes.
events
    Replay of recorded discovery events (S-expressions).
errors, config
    Exception hierarchy and builder settings.

Usage
-----
Command-line::

    python -m php_reflection events.sexp -v

Programmatic::

    from php_reflection import DefaultBuilder

    builder = DefaultBuilder()
    builder.build_class("Foo")
    builder.build_class("app::Foo")      # same node, now in package app
    [p.name for p in builder]            # ['app']
"""

from __future__ import annotations

__version__: str = "0.1.0"

from php_reflection.builder import AbstractBuilder, DefaultBuilder
from php_reflection.config import BuilderConfig
from php_reflection.errors import (
    EventReplayError,
    InternalTypesError,
    InvalidArgumentError,
    ProxyResolutionError,
    ReflectionError,
)
from php_reflection.identifiers import GLOBAL_PACKAGE, SEPARATOR, IdentifierAnalyzer
from php_reflection.internal_types import InternalTypes

__all__: list[str] = [
    "__version__",
    "AbstractBuilder",
    "BuilderConfig",
    "DefaultBuilder",
    "EventReplayError",
    "GLOBAL_PACKAGE",
    "IdentifierAnalyzer",
    "InternalTypes",
    "InternalTypesError",
    "InvalidArgumentError",
    "ProxyResolutionError",
    "ReflectionError",
    "SEPARATOR",
]
