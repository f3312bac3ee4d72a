"""
php_reflection.proxy
====================

Deferred references to classes and interfaces.

The parser often meets a type name (in a signature, an ``extends`` clause,
a ``catch``) before the type itself is declared.  Instead of guessing, it
asks the builder for a :class:`ClassOrInterfaceProxy`.  The proxy stores
only the identifier; every read goes back to the builder's type registry,
so a proxy created early resolves to the real declaration once it exists.
Nothing about a failed or premature resolution is remembered.

Proxies hold a weak reference to their builder: the builder owns its
proxies, not the other way round.
"""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from php_reflection.errors import ProxyResolutionError

if TYPE_CHECKING:
    from php_reflection.ast_nodes import (
        AbstractType,
        ClassOrInterfaceConstant,
        Method,
        Package,
        SourceFile,
    )
    from php_reflection.builder import AbstractBuilder

logger = logging.getLogger(__name__)


class ClassOrInterfaceProxy:
    """Lazily resolved handle for a class or interface.

    Parameters
    ----------
    builder : AbstractBuilder
        The builder whose registries answer resolution requests.
    identifier : str
        The qualified identifier as written in source.
    """

    __slots__ = ("identifier", "_builder_ref")

    def __init__(self, builder: AbstractBuilder, identifier: str) -> None:
        self.identifier = identifier
        self._builder_ref = weakref.ref(builder)

    def _builder(self) -> AbstractBuilder:
        builder = self._builder_ref()
        if builder is None:
            raise ProxyResolutionError(
                "Proxy resolved after its builder was discarded",
                detail=self.identifier,
            )
        return builder

    def get_subject(self) -> AbstractType:
        """Resolve against the builder's current registry state."""
        return self._builder().build_proxy_subject(self.identifier)

    @property
    def package(self) -> Optional[Package]:
        return self.get_subject().package

    # ----- read-through accessors ---------------------------------------

    @property
    def name(self) -> str:
        return self.get_subject().name

    @property
    def line(self) -> int:
        return self.get_subject().line

    @property
    def is_interface(self) -> bool:
        return self.get_subject().is_interface

    @property
    def source_file(self) -> Optional[SourceFile]:
        return self.get_subject().source_file

    @property
    def methods(self) -> List[Method]:
        return self.get_subject().methods

    @property
    def constants(self) -> List[ClassOrInterfaceConstant]:
        return self.get_subject().constants

    @property
    def dependencies(self) -> List[ClassOrInterfaceProxy]:
        return self.get_subject().dependencies

    @property
    def child_types(self) -> List[AbstractType]:
        return self.get_subject().child_types

    def __repr__(self) -> str:
        return f"ClassOrInterfaceProxy({self.identifier!r})"


class ProxyResolver:
    """Get-or-create cache of proxies, keyed by case-folded identifier."""

    def __init__(self, builder: AbstractBuilder) -> None:
        self._builder_ref = weakref.ref(builder)
        self._proxies: Dict[str, ClassOrInterfaceProxy] = {}

    def build(self, identifier: str) -> ClassOrInterfaceProxy:
        key = identifier.lower()
        proxy = self._proxies.get(key)
        if proxy is None:
            builder = self._builder_ref()
            if builder is None:
                raise ProxyResolutionError("Builder was discarded", detail=identifier)
            proxy = ClassOrInterfaceProxy(builder, identifier)
            self._proxies[key] = proxy
            logger.debug("New proxy for %r", identifier)
        return proxy

    def realize(self) -> List[Package]:
        """Resolve every cached proxy; return the packages they land in."""
        packages: List[Package] = []
        for proxy in list(self._proxies.values()):
            package = proxy.package
            if package is not None:
                packages.append(package)
        return packages

    def __iter__(self) -> Iterator[ClassOrInterfaceProxy]:
        return iter(list(self._proxies.values()))

    def __len__(self) -> int:
        return len(self._proxies)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier.lower() in self._proxies
