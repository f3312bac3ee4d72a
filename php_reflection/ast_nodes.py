# php_reflection/ast_nodes.py
"""
Reflection model node definitions.

Packages own types and functions; types own methods, properties and
constants.  Ownership links are only changed through the owner's
``add_*`` / ``remove_*`` methods so that a node's back-reference and the
owner's collection never disagree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Union

from php_reflection.identifiers import GLOBAL_PACKAGE
from php_reflection.values import MemberValue

if TYPE_CHECKING:
    from php_reflection.proxy import ClassOrInterfaceProxy


# ── Source files ────────────────────────────────────────────────

class SourceFile:
    """A source unit.  ``path`` is ``None`` for the builder's placeholder file."""

    __slots__ = ("path",)

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f"SourceFile({self.path!r})"


# ── Packages ────────────────────────────────────────────────────

class Package:
    """A named container of types and functions.

    Attributes
    ----------
    name : str
        Package name.  :data:`GLOBAL_PACKAGE` names the default package.
    """

    __slots__ = ("name", "_types", "_functions")

    def __init__(self, name: str) -> None:
        self.name = name
        # dicts as insertion-ordered sets
        self._types: Dict[AbstractType, None] = {}
        self._functions: Dict[Function, None] = {}

    @property
    def is_default(self) -> bool:
        return self.name == GLOBAL_PACKAGE

    @property
    def types(self) -> List[AbstractType]:
        return list(self._types)

    @property
    def classes(self) -> List[Class]:
        return [t for t in self._types if isinstance(t, Class)]

    @property
    def interfaces(self) -> List[Interface]:
        return [t for t in self._types if isinstance(t, Interface)]

    @property
    def functions(self) -> List[Function]:
        return list(self._functions)

    def add_type(self, type_: AbstractType) -> AbstractType:
        """Adopt *type_*, detaching it from its previous package."""
        if type_.package is self and type_ in self._types:
            return type_
        if type_.package is not None:
            type_.package.remove_type(type_)
        self._types[type_] = None
        type_.package = self
        return type_

    def remove_type(self, type_: AbstractType) -> None:
        self._types.pop(type_, None)
        if type_.package is self:
            type_.package = None

    def add_function(self, function: Function) -> Function:
        if function.package is self and function in self._functions:
            return function
        if function.package is not None:
            function.package.remove_function(function)
        self._functions[function] = None
        function.package = self
        return function

    def remove_function(self, function: Function) -> None:
        self._functions.pop(function, None)
        if function.package is self:
            function.package = None

    def is_empty(self) -> bool:
        return not self._types and not self._functions

    def __contains__(self, node: object) -> bool:
        return node in self._types or node in self._functions

    def __repr__(self) -> str:
        return (
            f"Package({self.name!r}, types={len(self._types)}, "
            f"functions={len(self._functions)})"
        )


# ── Types ───────────────────────────────────────────────────────

class AbstractType:
    """Common state of classes and interfaces.

    Attributes
    ----------
    name : str
        Display name, in the spelling that first created the node.
    normalized_name : str
        Case-folded lookup key.
    line : int
        Declaration line (0 when unknown).
    package : Package or None
        Current owning package; maintained by :class:`Package`.
    source_file : SourceFile or None
        Source unit the type was found in.
    """

    __slots__ = (
        "name", "normalized_name", "line", "package", "source_file",
        "_methods", "_constants", "_dependencies", "_child_types",
    )

    def __init__(self, name: str, line: int = 0) -> None:
        self.name = name
        self.normalized_name = name.lower()
        self.line = line
        self.package: Optional[Package] = None
        self.source_file: Optional[SourceFile] = None
        self._methods: List[Method] = []
        self._constants: List[ClassOrInterfaceConstant] = []
        self._dependencies: Dict[ClassOrInterfaceProxy, None] = {}
        self._child_types: Dict[AbstractType, None] = {}

    is_interface = False

    @property
    def methods(self) -> List[Method]:
        return list(self._methods)

    @property
    def constants(self) -> List[ClassOrInterfaceConstant]:
        return list(self._constants)

    @property
    def dependencies(self) -> List[ClassOrInterfaceProxy]:
        return list(self._dependencies)

    @property
    def child_types(self) -> List[AbstractType]:
        return list(self._child_types)

    def add_method(self, method: Method) -> Method:
        if method.parent is not None and method.parent is not self:
            method.parent.remove_method(method)
        if method not in self._methods:
            self._methods.append(method)
        method.parent = self
        return method

    def remove_method(self, method: Method) -> None:
        if method in self._methods:
            self._methods.remove(method)
        if method.parent is self:
            method.parent = None

    def find_method(self, name: str) -> Optional[Method]:
        key = name.lower()
        for method in self._methods:
            if method.name.lower() == key:
                return method
        return None

    def add_constant(self, constant: ClassOrInterfaceConstant) -> ClassOrInterfaceConstant:
        if constant not in self._constants:
            self._constants.append(constant)
        constant.parent = self
        return constant

    def add_dependency(self, proxy: ClassOrInterfaceProxy) -> ClassOrInterfaceProxy:
        self._dependencies[proxy] = None
        return proxy

    def add_child_type(self, child: AbstractType) -> AbstractType:
        if child is not self:
            self._child_types[child] = None
        return child

    def set_source_file(self, source_file: SourceFile) -> None:
        self.source_file = source_file

    @property
    def qualified_name(self) -> str:
        if self.package is None or self.package.is_default:
            return self.name
        return f"{self.package.name}::{self.name}"

    def __repr__(self) -> str:
        pkg = self.package.name if self.package is not None else None
        return f"{type(self).__name__}({self.name!r}, package={pkg!r}, line={self.line})"


class Class(AbstractType):
    __slots__ = ("_properties", "is_abstract")

    def __init__(self, name: str, line: int = 0) -> None:
        super().__init__(name, line)
        self._properties: List[Property] = []
        self.is_abstract = False

    @property
    def properties(self) -> List[Property]:
        return list(self._properties)

    def add_property(self, prop: Property) -> Property:
        if prop not in self._properties:
            self._properties.append(prop)
        prop.parent = self
        return prop


class Interface(AbstractType):
    __slots__ = ()

    is_interface = True


# ── Callables ───────────────────────────────────────────────────

class _Callable:
    __slots__ = ("name", "line", "_parameters")

    def __init__(self, name: str, line: int = 0) -> None:
        self.name = name
        self.line = line
        self._parameters: List[Parameter] = []

    @property
    def parameters(self) -> List[Parameter]:
        return list(self._parameters)

    def add_parameter(self, parameter: Parameter) -> Parameter:
        if parameter not in self._parameters:
            parameter.position = len(self._parameters)
            self._parameters.append(parameter)
        parameter.owner = self
        return parameter

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, line={self.line})"


class Function(_Callable):
    """A free function; always registered in the default package."""

    __slots__ = ("package", "source_file")

    def __init__(self, name: str, line: int = 0) -> None:
        super().__init__(name, line)
        self.package: Optional[Package] = None
        self.source_file: Optional[SourceFile] = None

    def set_source_file(self, source_file: SourceFile) -> None:
        self.source_file = source_file


class Method(_Callable):
    __slots__ = ("parent", "is_static", "is_abstract")

    def __init__(self, name: str, line: int = 0) -> None:
        super().__init__(name, line)
        self.parent: Optional[AbstractType] = None
        self.is_static = False
        self.is_abstract = False


class Parameter:
    """A formal parameter.  ``type_hint`` is a proxy to the hinted type, if any."""

    __slots__ = ("name", "line", "position", "owner", "type_hint", "default_value")

    def __init__(self, name: str, line: int = 0) -> None:
        self.name = name
        self.line = line
        self.position = 0
        self.owner: Optional[_Callable] = None
        self.type_hint: Optional[ClassOrInterfaceProxy] = None
        self.default_value: Optional[Union[MemberValue, ArrayExpression, ConstantValue]] = None

    def __repr__(self) -> str:
        return f"Parameter({self.name!r}, position={self.position})"


class Property:
    __slots__ = ("name", "line", "parent", "default_value", "is_static")

    def __init__(self, name: str, line: int = 0) -> None:
        self.name = name
        self.line = line
        self.parent: Optional[Class] = None
        self.default_value: Optional[Union[MemberValue, ArrayExpression, ConstantValue]] = None
        self.is_static = False

    def __repr__(self) -> str:
        return f"Property({self.name!r}, line={self.line})"


# ── Constants and expressions ───────────────────────────────────

class ClassOrInterfaceConstant:
    __slots__ = ("name", "parent", "value")

    def __init__(self, name: str) -> None:
        self.name = name
        self.parent: Optional[AbstractType] = None
        self.value: Optional[Union[MemberValue, ArrayExpression, ConstantValue]] = None

    def __repr__(self) -> str:
        return f"ClassOrInterfaceConstant({self.name!r})"


class ClassOrInterfaceConstantValue:
    """Reference to a constant declared on a class or interface (``Owner::NAME``)."""

    __slots__ = ("owner", "name")

    def __init__(self, owner: Union[AbstractType, ClassOrInterfaceProxy], name: str) -> None:
        self.owner = owner
        self.name = name

    def __repr__(self) -> str:
        return f"ClassOrInterfaceConstantValue({self.owner!r}, {self.name!r})"


class ConstantValue:
    """Reference to a global constant."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"ConstantValue({self.name!r})"


class ArrayElement:
    __slots__ = ("key", "value")

    def __init__(self) -> None:
        self.key: Optional[object] = None
        self.value: Optional[object] = None


class ArrayExpression:
    __slots__ = ("_elements",)

    def __init__(self) -> None:
        self._elements: List[ArrayElement] = []

    @property
    def elements(self) -> List[ArrayElement]:
        return list(self._elements)

    def add_element(self, element: ArrayElement) -> ArrayElement:
        self._elements.append(element)
        return element

    def __len__(self) -> int:
        return len(self._elements)


class CatchStatement:
    """A ``catch`` clause: the caught type (a proxy) and the bound variable."""

    __slots__ = ("exception_type", "variable")

    def __init__(self) -> None:
        self.exception_type: Optional[ClassOrInterfaceProxy] = None
        self.variable: Optional[str] = None
