# tests/test_proxy.py
"""
Tests for deferred class/interface references.
"""

import gc

import pytest

from php_reflection import DefaultBuilder, ProxyResolutionError
from php_reflection.ast_nodes import Interface


class TestProxyCache:

    def test_one_proxy_per_identifier(self, builder):
        first = builder.build_class_or_interface_proxy("app::Foo")
        assert builder.build_class_or_interface_proxy("APP::foo") is first

    def test_keeps_first_spelling(self, builder):
        builder.build_class_or_interface_proxy("app::Foo")
        proxy = builder.build_class_or_interface_proxy("app::FOO")
        assert proxy.identifier == "app::Foo"

    def test_listed(self, builder):
        proxy = builder.build_class_or_interface_proxy("Foo")
        assert builder.proxies == [proxy]
        assert "foo" in builder._proxies


class TestResolution:

    def test_forward_reference(self, builder):
        proxy = builder.build_class_or_interface_proxy("Foo")
        cls = builder.build_class("Foo", 12)
        assert proxy.get_subject() is cls
        assert proxy.line == 12

    def test_resolves_against_current_state(self, builder):
        proxy = builder.build_class_or_interface_proxy("Runnable")
        guess = proxy.get_subject()
        iface = builder.build_interface("Runnable")
        assert guess is not iface
        assert proxy.get_subject() is iface
        assert proxy.is_interface

    def test_read_through(self, builder):
        cls = builder.build_class("app::Foo")
        cls.add_method(builder.build_method("run"))
        proxy = builder.build_class_or_interface_proxy("app::Foo")
        assert proxy.name == "Foo"
        assert [m.name for m in proxy.methods] == ["run"]
        assert proxy.package.name == "app"
        assert proxy.source_file is builder.default_file

    def test_interface_subject(self, builder):
        builder.build_interface("app::Runnable")
        proxy = builder.build_class_or_interface_proxy("app::Runnable")
        assert isinstance(proxy.get_subject(), Interface)

    def test_unresolved_package_is_enumerated(self, builder):
        builder.build_class("app::Foo")
        builder.build_class_or_interface_proxy("other::pkg::Bar")
        names = [p.name for p in builder.get_packages()]
        assert names == ["app", "other::pkg"]


class TestBuilderLifetime:

    def test_dead_builder(self):
        builder = DefaultBuilder()
        proxy = builder.build_class_or_interface_proxy("Foo")
        del builder
        gc.collect()
        with pytest.raises(ProxyResolutionError):
            proxy.get_subject()
