# tests/test_events.py
"""
Tests for replaying recorded discovery events into a builder.
"""

import pytest

from php_reflection import DefaultBuilder, EventReplayError
from php_reflection.ast_nodes import Class, Interface
from php_reflection.events import EventReplayer, replay_events, replay_file
from tests.conftest import BROKEN_EVENTS, SAMPLE_EVENTS


class TestSampleStream:

    @pytest.fixture
    def model(self):
        return replay_events(SAMPLE_EVENTS)

    def test_packages(self, model):
        assert [p.name for p in model.get_packages()] == ["+global", "app", "vendor::lib"]

    def test_types(self, model):
        app = model.build_package("app")
        assert [t.name for t in app.types] == ["Child", "Base", "Runnable"]
        assert isinstance(model.build_class("app::Child"), Class)
        assert isinstance(model.build_interface("app::Runnable"), Interface)

    def test_forward_parent_linked(self, model):
        child = model.build_class("app::Child")
        base = model.build_class("app::Base")
        runnable = model.build_interface("app::Runnable")
        assert base.child_types == [child]
        assert runnable.child_types == [child]
        assert [p.identifier for p in child.dependencies] == ["app::Base", "app::Runnable"]

    def test_members(self, model):
        child = model.build_class("app::Child")
        assert child.line == 3
        run = child.find_method("run")
        assert run.line == 4
        assert [p.name for p in run.parameters] == ["$x"]
        assert [p.name for p in child.properties] == ["$name"]
        assert [c.name for c in child.constants] == ["MAX"]

    def test_functions(self, model):
        helper = model.functions[0]
        assert helper.name == "helper"
        assert helper.line == 30
        assert [p.name for p in helper.parameters] == ["$a"]

    def test_proxy_only_package(self, model):
        thing = model.build_class_or_interface_proxy("vendor::lib::Thing")
        assert thing.package.name == "vendor::lib"


class TestReplayer:

    def test_uses_given_builder(self, builder):
        assert replay_events("(package app)", builder) is builder
        assert "app" in builder._packages

    def test_counts_events(self):
        replayer = EventReplayer()
        replayer.replay("(class Foo) (interface Bar) (function baz)")
        assert replayer.events == 3
        assert isinstance(replayer.builder, DefaultBuilder)

    def test_line_optional(self):
        model = replay_events("(class Foo (method run))")
        assert model.build_class("Foo").line == 0
        assert model.build_class("Foo").find_method("run").line == 0

    def test_depends_is_not_a_parent(self):
        model = replay_events("(class A (depends B)) (class B)")
        assert model.build_class("B").child_types == []
        assert [p.identifier for p in model.build_class("A").dependencies] == ["B"]

    def test_replay_file(self, tmp_path):
        path = tmp_path / "events.sexp"
        path.write_text(SAMPLE_EVENTS, encoding="utf-8")
        model = replay_file(path)
        assert [c.name for c in model.classes] == ["Child", "Base"]
        assert [i.name for i in model.interfaces] == ["Runnable"]

    def test_replay_missing_file(self, tmp_path):
        with pytest.raises(EventReplayError):
            replay_file(tmp_path / "absent.sexp")


class TestMalformedStreams:

    @pytest.mark.parametrize("text", [
        BROKEN_EVENTS,
        "(widget Foo)",
        "(class)",
        "(class 42)",
        "Foo",
        "(interface Foo (property $x))",
        "(class Foo (frobnicate))",
        "(class Foo (extends))",
        "(function foo (method bar))",
    ])
    def test_rejected(self, text):
        with pytest.raises(EventReplayError):
            replay_events(text)
