"""
php_reflection.identifiers
==========================

Splits qualified type identifiers into a local name and a package name.

A qualified identifier is a name optionally prefixed with a package path,
segments joined by :data:`SEPARATOR`::

    foo::bar::Baz     local "Baz",      package "foo::bar"
    Baz               local "Baz",      package GLOBAL_PACKAGE
    ::Baz             local "Baz",      package GLOBAL_PACKAGE (root scope)
    ArrayIterator     local "ArrayIterator", package "+spl" (built in)
    +spl::Countable   local "Countable", package "+spl"

Identifiers are parsed with a small PEG grammar.  A segment is any run
of characters other than ``:`` and whitespace, so pseudo-package names
and the output of ``AbstractType.qualified_name`` split like any other
name.  Anything the grammar rejects (empty strings, dangling or doubled
separators, whitespace) is not an error: the whole string becomes the
local name in the default package.

Depends on:
    - parsimonious      (PEG parser)
"""

from __future__ import annotations

import logging
from typing import Dict, NamedTuple, Optional, Tuple

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import NodeVisitor

from php_reflection.internal_types import InternalTypes, InternalTypesOracle

logger = logging.getLogger(__name__)

#: Package path separator.
SEPARATOR = "::"

#: Name of the default package holding symbols with no known package.
GLOBAL_PACKAGE = "+global"


QUALIFIED_NAME_GRAMMAR = Grammar(r'''
    qualified   = root? segment (sep segment)*
    root        = "::"
    sep         = "::"
    segment     = ~r"[^:\s]+"
''')


class QualifiedName(NamedTuple):
    """Result of analysing one identifier."""
    local_name: str
    package_name: str
    normalized_name: str

    @property
    def is_default(self) -> bool:
        return self.package_name == GLOBAL_PACKAGE


class _Segments(NamedTuple):
    rooted: bool
    segments: Tuple[str, ...]


class _QualifiedNameVisitor(NodeVisitor):
    """Parse tree → :class:`_Segments`."""

    def generic_visit(self, node, visited_children):
        return visited_children

    def visit_qualified(self, node, visited_children):
        root, first, rest = visited_children
        segments = [first] + [pair[1] for pair in rest]
        return _Segments(rooted=bool(root), segments=tuple(segments))

    def visit_root(self, node, visited_children):
        return True

    def visit_sep(self, node, visited_children):
        return None

    def visit_segment(self, node, visited_children):
        return node.text


class IdentifierAnalyzer:
    """Extracts local and package names from qualified identifiers.

    Parameters
    ----------
    internal_types : InternalTypesOracle, optional
        Consulted for unqualified names only.  Defaults to the bundled
        :class:`InternalTypes` table.
    """

    def __init__(self, internal_types: Optional[InternalTypesOracle] = None) -> None:
        self._internal_types = (
            internal_types if internal_types is not None else InternalTypes.default()
        )
        self._visitor = _QualifiedNameVisitor()
        self._cache: Dict[str, QualifiedName] = {}

    @property
    def internal_types(self) -> InternalTypesOracle:
        return self._internal_types

    def analyze(self, qualified_id: str) -> QualifiedName:
        """Split *qualified_id* into local name, package name and lookup key."""
        cached = self._cache.get(qualified_id)
        if cached is not None:
            return cached

        parsed = self._parse(qualified_id)
        if parsed is None:
            result = QualifiedName(qualified_id, GLOBAL_PACKAGE, qualified_id.lower())
        else:
            local = parsed.segments[-1]
            result = QualifiedName(local, self._package_of(parsed), local.lower())

        self._cache[qualified_id] = result
        return result

    def local_name(self, qualified_id: str) -> str:
        return self.analyze(qualified_id).local_name

    def package_name(self, qualified_id: str) -> str:
        return self.analyze(qualified_id).package_name

    def _parse(self, qualified_id: str) -> Optional[_Segments]:
        try:
            tree = QUALIFIED_NAME_GRAMMAR.parse(qualified_id)
        except ParseError:
            logger.debug("Malformed identifier %r placed in %s", qualified_id, GLOBAL_PACKAGE)
            return None
        return self._visitor.visit(tree)

    def _package_of(self, parsed: _Segments) -> str:
        if len(parsed.segments) > 1:
            # A root prefix on a multi-segment name stays part of the package.
            package = SEPARATOR.join(parsed.segments[:-1])
            return SEPARATOR + package if parsed.rooted else package
        local = parsed.segments[0]
        if self._internal_types.is_internal(local):
            return self._internal_types.package_for(local)
        return GLOBAL_PACKAGE


_default_analyzer: Optional[IdentifierAnalyzer] = None


def _analyzer() -> IdentifierAnalyzer:
    global _default_analyzer
    if _default_analyzer is None:
        _default_analyzer = IdentifierAnalyzer()
    return _default_analyzer


def local_name(qualified_id: str) -> str:
    """Local name of *qualified_id* using the bundled internal-types table."""
    return _analyzer().local_name(qualified_id)


def package_name(qualified_id: str) -> str:
    """Package name of *qualified_id* using the bundled internal-types table."""
    return _analyzer().package_name(qualified_id)
