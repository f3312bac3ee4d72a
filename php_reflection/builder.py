"""
php_reflection.builder
======================

The model assembler: the object a source parser talks to.

The parser calls one ``build_*`` method per construct it discovers, in
source order.  The builder never validates language rules; it decides
*identity* (is this the same class as before?) and *placement* (which
package does it belong to?), and hands back the canonical node.

Public API
----------
    AbstractBuilder     - the producer boundary every builder implements
    DefaultBuilder      - registry-backed implementation

Typical usage::

    from php_reflection import DefaultBuilder

    builder = DefaultBuilder()
    user = builder.build_class("app::models::User", 12)
    base = builder.build_class_or_interface_proxy("app::models::Model")
    user.add_dependency(base)

    for package in builder.get_packages():
        print(package.name, [t.name for t in package.types])
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Union

from php_reflection.ast_nodes import (
    AbstractType,
    ArrayElement,
    ArrayExpression,
    CatchStatement,
    Class,
    ClassOrInterfaceConstant,
    ClassOrInterfaceConstantValue,
    ConstantValue,
    Function,
    Interface,
    Method,
    Package,
    Parameter,
    Property,
    SourceFile,
)
from php_reflection.config import BuilderConfig
from php_reflection.errors import InvalidArgumentError
from php_reflection.identifiers import GLOBAL_PACKAGE, IdentifierAnalyzer
from php_reflection.internal_types import InternalTypesOracle
from php_reflection.proxy import ClassOrInterfaceProxy, ProxyResolver
from php_reflection.registry import FunctionRegistry, PackageRegistry, TypeRegistry
from php_reflection.values import (
    MemberFalseValue,
    MemberNullValue,
    MemberNumericValue,
    MemberScalarValue,
    MemberTrueValue,
    TypeTag,
    ValueFactory,
)

logger = logging.getLogger(__name__)


class AbstractBuilder(ABC):
    """Operations a parser may call while walking source."""

    GLOBAL_PACKAGE = GLOBAL_PACKAGE

    @abstractmethod
    def build_package(self, name: str) -> Package: ...

    @abstractmethod
    def build_class(self, name: str, line: Optional[int] = None) -> Class: ...

    @abstractmethod
    def build_interface(self, name: str, line: Optional[int] = None) -> Interface: ...

    @abstractmethod
    def build_proxy_subject(self, identifier: str) -> AbstractType: ...

    @abstractmethod
    def build_method(self, name: str, line: Optional[int] = None) -> Method: ...

    @abstractmethod
    def build_property(self, name: str, line: Optional[int] = None) -> Property: ...

    @abstractmethod
    def build_parameter(self, name: str, line: Optional[int] = None) -> Parameter: ...

    @abstractmethod
    def build_function(self, name: str, line: Optional[int] = None) -> Function: ...

    @abstractmethod
    def build_class_or_interface_constant(self, identifier: str) -> ClassOrInterfaceConstant: ...

    @abstractmethod
    def build_class_or_interface_constant_value(
        self,
        owner: Union[AbstractType, ClassOrInterfaceProxy],
        identifier: str,
    ) -> ClassOrInterfaceConstantValue: ...

    @abstractmethod
    def build_class_or_interface_proxy(self, identifier: str) -> ClassOrInterfaceProxy: ...

    @abstractmethod
    def build_constant_value(self, identifier: str) -> ConstantValue: ...

    @abstractmethod
    def build_array_expression(self) -> ArrayExpression: ...

    @abstractmethod
    def build_array_element(self) -> ArrayElement: ...

    @abstractmethod
    def build_catch_statement(self) -> CatchStatement: ...

    @abstractmethod
    def build_null_value(self) -> MemberNullValue: ...

    @abstractmethod
    def build_true_value(self) -> MemberTrueValue: ...

    @abstractmethod
    def build_false_value(self) -> MemberFalseValue: ...

    @abstractmethod
    def build_numeric_value(self, type: TypeTag, value: str, negative: bool) -> MemberNumericValue: ...

    @abstractmethod
    def build_scalar_value(self, type: TypeTag, value: Optional[str] = None) -> MemberScalarValue: ...

    @abstractmethod
    def get_packages(self) -> List[Package]: ...

    def __iter__(self) -> Iterator[Package]:
        return iter(self.get_packages())


class DefaultBuilder(AbstractBuilder):
    """Registry-backed builder for one analysis session.

    Parameters
    ----------
    config : BuilderConfig, optional
        Builder settings.  Configuration warnings are logged, not raised.
    internal_types : InternalTypesOracle, optional
        Overrides the oracle described by *config*.
    """

    def __init__(
        self,
        config: Optional[BuilderConfig] = None,
        internal_types: Optional[InternalTypesOracle] = None,
    ) -> None:
        self._config = config or BuilderConfig()
        for warning in self._config.validate():
            logger.warning("BuilderConfig: %s", warning)

        if internal_types is None:
            internal_types = self._config.load_internal_types()
        self.analyzer = IdentifierAnalyzer(internal_types)

        self.default_file = SourceFile(None)
        self._packages = PackageRegistry()
        self._functions = FunctionRegistry(self._packages.default, self.default_file)
        self._types = TypeRegistry(self.analyzer, self._packages, self.default_file)
        self._proxies = ProxyResolver(self)
        self._values = ValueFactory()

    @property
    def config(self) -> BuilderConfig:
        return self._config

    @property
    def default_package(self) -> Package:
        return self._packages.default

    def _line(self, line: Optional[int]) -> int:
        return self._config.default_line if line is None else line

    # ----- packages, types, functions ----------------------------------------

    def build_package(self, name: str) -> Package:
        return self._packages.build(name)

    def build_class(self, name: str, line: Optional[int] = None) -> Class:
        """Return the class for *name*, creating or relocating it as needed.

        Where possible pass a qualified name (``"php::depend::Parser"``);
        an unqualified name reuses any class already known by that name.
        """
        return self._types.build_class(name, self._line(line))

    def build_interface(self, name: str, line: Optional[int] = None) -> Interface:
        """Return the interface for *name*.

        A class placeholder with the same name in the default package is
        dropped: it was a guess made before the declaration was seen.
        """
        return self._types.build_interface(name, self._line(line))

    def build_proxy_subject(self, identifier: str) -> AbstractType:
        return self._types.build_proxy_subject(identifier, self._config.default_line)

    def build_function(self, name: str, line: Optional[int] = None) -> Function:
        return self._functions.build(name, self._line(line))

    def build_class_or_interface_proxy(self, identifier: str) -> ClassOrInterfaceProxy:
        return self._proxies.build(identifier)

    # ----- members and expressions -------------------------------------------

    def build_method(self, name: str, line: Optional[int] = None) -> Method:
        return Method(name, self._line(line))

    def build_property(self, name: str, line: Optional[int] = None) -> Property:
        return Property(name, self._line(line))

    def build_parameter(self, name: str, line: Optional[int] = None) -> Parameter:
        return Parameter(name, self._line(line))

    def build_class_or_interface_constant(self, identifier: str) -> ClassOrInterfaceConstant:
        return ClassOrInterfaceConstant(identifier)

    def build_class_or_interface_constant_value(
        self,
        owner: Union[AbstractType, ClassOrInterfaceProxy],
        identifier: str,
    ) -> ClassOrInterfaceConstantValue:
        if owner is None:
            raise InvalidArgumentError(
                "Class or interface constant reference needs an owner",
                detail=identifier,
            )
        if not isinstance(owner, (AbstractType, ClassOrInterfaceProxy)):
            raise InvalidArgumentError(
                f"Owner of constant {identifier!r} must be a class, interface or proxy",
                detail=type(owner).__name__,
            )
        return ClassOrInterfaceConstantValue(owner, identifier)

    def build_constant_value(self, identifier: str) -> ConstantValue:
        return ConstantValue(identifier)

    def build_array_expression(self) -> ArrayExpression:
        return ArrayExpression()

    def build_array_element(self) -> ArrayElement:
        return ArrayElement()

    def build_catch_statement(self) -> CatchStatement:
        return CatchStatement()

    # ----- literal values ----------------------------------------------------

    def build_null_value(self) -> MemberNullValue:
        return self._values.null()

    def build_true_value(self) -> MemberTrueValue:
        return self._values.true()

    def build_false_value(self) -> MemberFalseValue:
        return self._values.false()

    def build_numeric_value(self, type: TypeTag, value: str, negative: bool) -> MemberNumericValue:
        return self._values.numeric(type, value, negative)

    def build_scalar_value(self, type: TypeTag, value: Optional[str] = None) -> MemberScalarValue:
        return self._values.scalar(type, value)

    # ----- results -----------------------------------------------------------

    def get_packages(self) -> List[Package]:
        """All packages, in creation order.

        Every outstanding proxy is resolved first, so packages that are
        only reachable through a forward reference are included.  The
        default package is left out when it holds no types and no
        functions.
        """
        # resolving a proxy registers the package its subject lands in
        reached = self._proxies.realize()
        logger.debug("Resolved %d proxies", len(reached))

        default = self._packages.default
        return [
            package for package in self._packages
            if package is not default or not default.is_empty()
        ]

    @property
    def classes(self) -> List[Class]:
        return self._types.classes()

    @property
    def interfaces(self) -> List[Interface]:
        return self._types.interfaces()

    @property
    def functions(self) -> List[Function]:
        return list(self._functions)

    @property
    def proxies(self) -> List[ClassOrInterfaceProxy]:
        return list(self._proxies)

    def __repr__(self) -> str:
        return (
            f"DefaultBuilder(packages={len(self._packages)}, "
            f"classes={len(self.classes)}, interfaces={len(self.interfaces)}, "
            f"functions={len(self._functions)})"
        )
