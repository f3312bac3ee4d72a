"""
php_reflection.events
=====================

Replays a recorded stream of discovery events into a builder.

A parser front-end can dump the calls it would make as S-expressions; the
same stream replayed later reproduces the model without the parser.  This
is also how test fixtures describe small code bases.

Format
------
::

    (package NAME)
    (class NAME [LINE] MEMBER...)
    (interface NAME [LINE] MEMBER...)
    (function NAME [LINE] (parameter NAME [LINE])...)
    (proxy ID)

    MEMBER := (method NAME [LINE] (parameter NAME [LINE])...)
            | (property NAME [LINE])
            | (constant NAME)
            | (extends ID...) | (implements ID...) | (depends ID...)

Names may be written as symbols or as strings.  ``extends`` and
``implements`` add a proxy to the type's dependencies and, once the whole
stream has been replayed, register the type as a child of whatever the
proxy resolves to.  Linking happens last so that parents declared further
down the stream are found.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from php_reflection.ast_nodes import AbstractType, Class
from php_reflection.builder import AbstractBuilder, DefaultBuilder
from php_reflection.errors import EventReplayError
from php_reflection.proxy import ClassOrInterfaceProxy
from php_reflection.sexp import SexpSyntaxError, parse_many

logger = logging.getLogger(__name__)

Form = List[Any]


def _head(form: Any) -> str:
    if not isinstance(form, list) or not form or not isinstance(form[0], str):
        raise EventReplayError("Event must be a non-empty list headed by a symbol", detail=form)
    return form[0]


def _name_and_line(form: Form) -> Tuple[str, Optional[int], Form]:
    """Split ``(head NAME [LINE] rest...)``."""
    if len(form) < 2 or not isinstance(form[1], str):
        raise EventReplayError(f"'{form[0]}' needs a name", detail=form)
    name = form[1]
    rest = form[2:]
    line: Optional[int] = None
    if rest and isinstance(rest[0], int) and not isinstance(rest[0], bool):
        line = rest[0]
        rest = rest[1:]
    return name, line, rest


class EventReplayer:
    """Feeds parsed event forms to a builder.

    Parameters
    ----------
    builder : AbstractBuilder, optional
        Target builder; a fresh :class:`DefaultBuilder` when omitted.
    """

    def __init__(self, builder: Optional[AbstractBuilder] = None) -> None:
        self.builder = builder if builder is not None else DefaultBuilder()
        self._parents: List[Tuple[AbstractType, ClassOrInterfaceProxy]] = []
        self._top: Dict[str, Callable[[Form], Any]] = {
            "package": self._package,
            "class": self._class,
            "interface": self._interface,
            "function": self._function,
            "proxy": self._proxy,
        }
        self.events = 0

    def replay(self, text: str) -> AbstractBuilder:
        try:
            forms = parse_many(text)
        except SexpSyntaxError as exc:
            raise EventReplayError("Malformed event stream") from exc
        return self.replay_forms(forms)

    def replay_forms(self, forms: List[Any]) -> AbstractBuilder:
        for form in forms:
            head = _head(form)
            handler = self._top.get(head)
            if handler is None:
                raise EventReplayError(f"Unknown event {head!r}", detail=form)
            handler(form)
            self.events += 1
        self._link_parents()
        logger.info("Replayed %d events", self.events)
        return self.builder

    # ----- top-level events ---------------------------------------------------

    def _package(self, form: Form) -> None:
        name, _, _ = _name_and_line(form)
        self.builder.build_package(name)

    def _class(self, form: Form) -> None:
        name, line, members = _name_and_line(form)
        self._members(self.builder.build_class(name, line), members)

    def _interface(self, form: Form) -> None:
        name, line, members = _name_and_line(form)
        self._members(self.builder.build_interface(name, line), members)

    def _function(self, form: Form) -> None:
        name, line, rest = _name_and_line(form)
        function = self.builder.build_function(name, line)
        for sub in rest:
            if _head(sub) != "parameter":
                raise EventReplayError("Functions only take parameters", detail=sub)
            pname, pline, _ = _name_and_line(sub)
            function.add_parameter(self.builder.build_parameter(pname, pline))

    def _proxy(self, form: Form) -> None:
        name, _, _ = _name_and_line(form)
        self.builder.build_class_or_interface_proxy(name)

    # ----- members --------------------------------------------------------------

    def _members(self, owner: AbstractType, members: Form) -> None:
        for member in members:
            head = _head(member)
            if head == "method":
                self._method(owner, member)
            elif head == "property":
                if not isinstance(owner, Class):
                    raise EventReplayError("Only classes have properties", detail=member)
                name, line, _ = _name_and_line(member)
                owner.add_property(self.builder.build_property(name, line))
            elif head == "constant":
                name, _, _ = _name_and_line(member)
                owner.add_constant(self.builder.build_class_or_interface_constant(name))
            elif head in ("extends", "implements", "depends"):
                self._references(owner, head, member[1:])
            else:
                raise EventReplayError(f"Unknown member {head!r}", detail=member)

    def _method(self, owner: AbstractType, form: Form) -> None:
        name, line, rest = _name_and_line(form)
        method = owner.add_method(self.builder.build_method(name, line))
        for sub in rest:
            if _head(sub) != "parameter":
                raise EventReplayError("Methods only take parameters", detail=sub)
            pname, pline, _ = _name_and_line(sub)
            method.add_parameter(self.builder.build_parameter(pname, pline))

    def _references(self, owner: AbstractType, head: str, identifiers: Form) -> None:
        if not identifiers:
            raise EventReplayError(f"'{head}' needs at least one identifier")
        for identifier in identifiers:
            if not isinstance(identifier, str):
                raise EventReplayError(f"'{head}' takes identifiers", detail=identifier)
            proxy = owner.add_dependency(self.builder.build_class_or_interface_proxy(identifier))
            if head != "depends":
                self._parents.append((owner, proxy))

    def _link_parents(self) -> None:
        for child, proxy in self._parents:
            proxy.get_subject().add_child_type(child)
        self._parents.clear()


def replay_events(text: str, builder: Optional[AbstractBuilder] = None) -> AbstractBuilder:
    """Replay an event stream; return the builder holding the model."""
    return EventReplayer(builder).replay(text)


def replay_file(path: Path, builder: Optional[AbstractBuilder] = None) -> AbstractBuilder:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise EventReplayError("Cannot read event stream", detail=str(path)) from exc
    return replay_events(text, builder)
