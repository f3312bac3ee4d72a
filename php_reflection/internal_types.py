"""
php_reflection.internal_types
=============================

The internal-types oracle: knows which type names are built into the
language runtime (and therefore never declared in analysed source) and
which pseudo-package each of them lives in.

The identifier analyzer only needs two questions answered, captured by the
:class:`InternalTypesOracle` protocol.  :class:`InternalTypes` is the
bundled implementation.  Its table is written as S-expressions, one form
per pseudo-package::

    (+spl ArrayIterator ArrayObject Countable)
    (+standard stdClass Exception)

Depends on:
    - sexpdata          (S-expression parsing)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Protocol, Tuple

from php_reflection.errors import InternalTypesError
from php_reflection.sexp import SexpSyntaxError, parse_many

logger = logging.getLogger(__name__)


class InternalTypesOracle(Protocol):
    """What the identifier analyzer asks about built-in type names."""

    def is_internal(self, name: str) -> bool:
        ...

    def package_for(self, name: str) -> str:
        ...


# ---------------------------------------------------------------------------
# Bundled table
# ---------------------------------------------------------------------------

DEFAULT_INTERNAL_TYPES = r"""
(+standard
    stdClass __PHP_Incomplete_Class Directory php_user_filter
    Exception ErrorException
    Traversable Iterator IteratorAggregate ArrayAccess Serializable)

(+spl
    AppendIterator ArrayIterator ArrayObject BadFunctionCallException
    BadMethodCallException CachingIterator Countable DirectoryIterator
    DomainException EmptyIterator FilterIterator InfiniteIterator
    InvalidArgumentException IteratorIterator LengthException LimitIterator
    LogicException NoRewindIterator OuterIterator OutOfBoundsException
    OutOfRangeException OverflowException ParentIterator RangeException
    RecursiveArrayIterator RecursiveCachingIterator RecursiveDirectoryIterator
    RecursiveFilterIterator RecursiveIterator RecursiveIteratorIterator
    RegexIterator RuntimeException SeekableIterator SimpleXMLIterator
    SplFileInfo SplFileObject SplObjectStorage SplObserver SplSubject
    SplTempFileObject UnderflowException UnexpectedValueException)

(+reflection
    Reflection ReflectionClass ReflectionException ReflectionExtension
    ReflectionFunction ReflectionFunctionAbstract ReflectionMethod
    ReflectionObject ReflectionParameter ReflectionProperty Reflector)

(+date DateTime DateTimeZone)

(+dom
    DOMAttr DOMCdataSection DOMCharacterData DOMComment DOMConfiguration
    DOMDocument DOMDocumentFragment DOMDocumentType DOMDomError DOMElement
    DOMEntity DOMEntityReference DOMErrorHandler DOMException
    DOMImplementation DOMImplementationList DOMImplementationSource
    DOMLocator DOMNameList DOMNameSpaceNode DOMNamedNodeMap DOMNode
    DOMNodeList DOMNotation DOMProcessingInstruction DOMStringExtend
    DOMStringList DOMText DOMTypeinfo DOMUserDataHandler DOMXPath)

(+libxml LibXMLError)

(+simplexml SimpleXMLElement)

(+pdo PDO PDOException PDOStatement)

(+xmlreader XMLReader)

(+xmlwriter XMLWriter)

(+xsl XSLTProcessor)
"""


# ---------------------------------------------------------------------------
# Table parsing
# ---------------------------------------------------------------------------

def parse_table(text: str) -> Dict[str, str]:
    """Parse an internal-types table into ``{lowercased type: package}``.

    Raises
    ------
    InternalTypesError
        If the text is not a sequence of ``(package name...)`` forms.
    """
    try:
        forms = parse_many(text)
    except SexpSyntaxError as exc:
        raise InternalTypesError("Failed to parse internal-types table") from exc

    table: Dict[str, str] = {}
    for form in forms:
        if not isinstance(form, list) or len(form) < 1:
            raise InternalTypesError("Malformed internal-types entry", detail=form)
        package, *names = form
        if not isinstance(package, str) or not package:
            raise InternalTypesError("Package name must be a symbol", detail=package)
        for name in names:
            if not isinstance(name, str):
                raise InternalTypesError("Type name must be a symbol", detail=name)
            table[name.lower()] = package
    return table


# ---------------------------------------------------------------------------
# Oracle
# ---------------------------------------------------------------------------

class InternalTypes:
    """Table-driven :class:`InternalTypesOracle`.

    Parameters
    ----------
    table : Mapping[str, str], optional
        Type name → pseudo-package.  Keys are matched case-insensitively.
        Defaults to the bundled table.
    """

    _shared: Optional["InternalTypes"] = None

    def __init__(self, table: Optional[Mapping[str, str]] = None) -> None:
        if table is None:
            table = parse_table(DEFAULT_INTERNAL_TYPES)
        self._types: Dict[str, str] = {k.lower(): v for k, v in table.items()}

    @classmethod
    def default(cls) -> "InternalTypes":
        """Shared instance backed by the bundled table."""
        if cls._shared is None:
            cls._shared = cls()
        return cls._shared

    @classmethod
    def from_sexp(cls, text: str) -> "InternalTypes":
        return cls(parse_table(text))

    @classmethod
    def from_file(cls, path: Path) -> "InternalTypes":
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise InternalTypesError("Cannot read internal-types table", detail=str(path)) from exc
        logger.debug("Loading internal types from %s", path)
        return cls.from_sexp(text)

    def extended(self, extra: Mapping[str, str]) -> "InternalTypes":
        """Return a copy of this oracle with *extra* entries added."""
        merged = dict(self._types)
        merged.update({k.lower(): v for k, v in extra.items()})
        return InternalTypes(merged)

    def is_internal(self, name: str) -> bool:
        return name.lower() in self._types

    def package_for(self, name: str) -> str:
        """Pseudo-package of a built-in type.

        Raises ``KeyError`` for names that are not built in; callers ask
        :meth:`is_internal` first.
        """
        return self._types[name.lower()]

    @property
    def packages(self) -> List[str]:
        """All pseudo-package names, in table order."""
        seen: Dict[str, None] = {}
        for package in self._types.values():
            seen.setdefault(package, None)
        return list(seen)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self._types.items())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_internal(name)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"InternalTypes({len(self._types)} types, {len(self.packages)} packages)"
