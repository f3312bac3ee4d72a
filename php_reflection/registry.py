"""
php_reflection.registry
=======================

Get-or-create registries behind the builder.

``PackageRegistry``
    name → :class:`Package`, one instance per name per session.
``FunctionRegistry``
    name → :class:`Function`; the first registration wins.
``TypeRegistry``
    (normalized name, package name) → :class:`Class` / :class:`Interface`,
    kept in two separate maps.

Type resolution
---------------
Source is analysed in file order, so a type is often mentioned before its
declaration, or mentioned without its package.  Such a mention creates a
*placeholder* in the default package.  ``build_class`` and
``build_interface`` resolve a name in four steps:

1. An instance registered at exactly (name, package) is reused.
2. An instance registered at (name, default package) is moved to the
   requested package and reused.
3. A request for the default package reuses the first instance registered
   under the name in any package, without moving it.
4. Otherwise a new instance is created and registered.

``build_interface`` additionally discards a default-package *class*
placeholder registered under the same name: the guess "class" is replaced
by the declared interface.

None of these paths raise on a miss; the last resort is always a new node.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Type, TypeVar

from php_reflection.ast_nodes import (
    AbstractType,
    Class,
    Function,
    Interface,
    Package,
    SourceFile,
)
from php_reflection.identifiers import GLOBAL_PACKAGE, IdentifierAnalyzer, QualifiedName

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=AbstractType)

#: normalized name → package name → node
TypeMap = Dict[str, Dict[str, AbstractType]]


# ---------------------------------------------------------------------------
# PackageRegistry
# ---------------------------------------------------------------------------

class PackageRegistry:
    """Insertion-ordered get-or-create map of packages.

    The default package is created up front and always present in the
    registry; whether it is *reported* is up to the builder.
    """

    def __init__(self) -> None:
        self._packages: Dict[str, Package] = {}
        self.default = self.build(GLOBAL_PACKAGE)

    def build(self, name: str) -> Package:
        package = self._packages.get(name)
        if package is None:
            package = Package(name)
            self._packages[name] = package
            logger.debug("New package %r", name)
        return package

    def get(self, name: str) -> Optional[Package]:
        return self._packages.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._packages

    def __iter__(self) -> Iterator[Package]:
        return iter(list(self._packages.values()))

    def __len__(self) -> int:
        return len(self._packages)


# ---------------------------------------------------------------------------
# FunctionRegistry
# ---------------------------------------------------------------------------

class FunctionRegistry:
    """Get-or-create map of free functions, all owned by the default package."""

    def __init__(self, default_package: Package, default_file: SourceFile) -> None:
        self._default_package = default_package
        self._default_file = default_file
        self._functions: Dict[str, Function] = {}

    def build(self, name: str, line: int = 0) -> Function:
        function = self._functions.get(name)
        if function is None:
            function = Function(name, line)
            function.set_source_file(self._default_file)
            self._default_package.add_function(function)
            self._functions[name] = function
            logger.debug("New function %r at line %d", name, line)
        return function

    def get(self, name: str) -> Optional[Function]:
        return self._functions.get(name)

    def __iter__(self) -> Iterator[Function]:
        return iter(list(self._functions.values()))

    def __len__(self) -> int:
        return len(self._functions)


# ---------------------------------------------------------------------------
# TypeRegistry
# ---------------------------------------------------------------------------

class TypeRegistry:
    """Class and interface maps plus the resolution algorithm.

    Parameters
    ----------
    analyzer : IdentifierAnalyzer
        Splits identifiers into (local name, package name).
    packages : PackageRegistry
        Where target packages are created and looked up.
    default_file : SourceFile
        Source unit attached to every newly created type.
    """

    def __init__(
        self,
        analyzer: IdentifierAnalyzer,
        packages: PackageRegistry,
        default_file: SourceFile,
    ) -> None:
        self._analyzer = analyzer
        self._packages = packages
        self._default_file = default_file
        self._classes: TypeMap = {}
        self._interfaces: TypeMap = {}

    # ----- public build operations ------------------------------------------

    def build_class(self, qualified_name: str, line: int = 0) -> Class:
        qname = self._analyzer.analyze(qualified_name)
        return self._resolve(self._classes, Class, qname, line)  # type: ignore[return-value]

    def build_interface(self, qualified_name: str, line: int = 0) -> Interface:
        qname = self._analyzer.analyze(qualified_name)
        self._discard_class_placeholder(qname)
        return self._resolve(self._interfaces, Interface, qname, line)  # type: ignore[return-value]

    def build_proxy_subject(self, identifier: str, line: int = 0) -> AbstractType:
        """Resolve a name whose kind (class or interface) is unknown.

        Prefers an exact match, then (for unqualified names only) any
        class or interface with that name, and finally assumes a class.
        """
        qname = self._analyzer.analyze(identifier)

        instance = self.find_exact(qname)
        if instance is not None:
            return instance
        instance = self.find_best(qname)
        if instance is not None:
            return instance
        return self.build_class(identifier, line)

    # ----- lookups ----------------------------------------------------------

    def find_exact(self, qname: QualifiedName) -> Optional[AbstractType]:
        """Class, then interface, registered at exactly (name, package)."""
        for type_map in (self._classes, self._interfaces):
            instance = type_map.get(qname.normalized_name, {}).get(qname.package_name)
            if instance is not None:
                return instance
        return None

    def find_best(self, qname: QualifiedName) -> Optional[AbstractType]:
        """First class, then first interface, registered under the name.

        Only unqualified (default-package) names fall back to a match in
        another package.
        """
        if not qname.is_default:
            return None
        for type_map in (self._classes, self._interfaces):
            entries = type_map.get(qname.normalized_name)
            if entries:
                return next(iter(entries.values()))
        return None

    def classes(self) -> List[Class]:
        return [c for entries in self._classes.values() for c in entries.values()]  # type: ignore[misc]

    def interfaces(self) -> List[Interface]:
        return [i for entries in self._interfaces.values() for i in entries.values()]  # type: ignore[misc]

    def class_at(self, normalized_name: str, package_name: str) -> Optional[Class]:
        return self._classes.get(normalized_name, {}).get(package_name)  # type: ignore[return-value]

    def interface_at(self, normalized_name: str, package_name: str) -> Optional[Interface]:
        return self._interfaces.get(normalized_name, {}).get(package_name)  # type: ignore[return-value]

    # ----- algorithm --------------------------------------------------------

    def _resolve(
        self,
        type_map: TypeMap,
        factory: Type[T],
        qname: QualifiedName,
        line: int,
    ) -> AbstractType:
        name = qname.normalized_name
        package_name = qname.package_name
        entries = type_map.get(name)

        # 1) exact match
        if entries and package_name in entries:
            return entries[package_name]

        # 2) default-package placeholder moves to the requested package
        if entries and GLOBAL_PACKAGE in entries:
            instance = entries.pop(GLOBAL_PACKAGE)
            entries[package_name] = instance
            self._packages.build(package_name).add_type(instance)
            logger.debug(
                "Moved %s %r from %s to %s",
                factory.__name__, instance.name, GLOBAL_PACKAGE, package_name,
            )
            return instance

        # 3) unqualified request reuses any existing instance
        if entries and qname.is_default:
            return next(iter(entries.values()))

        # 4) new instance
        instance = factory(qname.local_name, line)
        instance.set_source_file(self._default_file)
        type_map.setdefault(name, {})[package_name] = instance
        self._packages.build(package_name).add_type(instance)
        logger.debug("New %s %r in %s", factory.__name__, qname.local_name, package_name)
        return instance

    def _discard_class_placeholder(self, qname: QualifiedName) -> None:
        entries = self._classes.get(qname.normalized_name)
        if not entries:
            return
        instance = entries.get(qname.package_name)
        if instance is None:
            return
        package = instance.package
        if package is None or not package.is_default:
            return

        package.remove_type(instance)
        del entries[qname.package_name]
        if not entries:
            del self._classes[qname.normalized_name]
        logger.debug("Class placeholder %r replaced by interface", instance.name)
