# tests/test_builder.py
"""
Tests for the builder facade: package enumeration, free functions,
member and expression allocation, configuration.
"""

import logging

import pytest

from php_reflection import (
    AbstractBuilder,
    BuilderConfig,
    DefaultBuilder,
    GLOBAL_PACKAGE,
    InternalTypes,
    InvalidArgumentError,
)
from php_reflection.ast_nodes import (
    ArrayElement,
    ArrayExpression,
    CatchStatement,
    ClassOrInterfaceConstant,
    ConstantValue,
    Method,
    Parameter,
    Property,
)


class TestAbstractBuilder:

    def test_not_instantiable(self):
        with pytest.raises(TypeError):
            AbstractBuilder()

    def test_default_package_name(self):
        assert AbstractBuilder.GLOBAL_PACKAGE == GLOBAL_PACKAGE == "+global"


class TestPackages:

    def test_build_package_idempotent(self, builder):
        assert builder.build_package("app") is builder.build_package("app")

    def test_empty_session(self, builder):
        assert builder.get_packages() == []

    def test_default_package_omitted_when_empty(self, builder):
        builder.build_class("app::Foo")
        assert [p.name for p in builder.get_packages()] == ["app"]

    def test_default_package_reported_with_types(self, builder):
        builder.build_class("Foo")
        assert [p.name for p in builder.get_packages()] == [GLOBAL_PACKAGE]

    def test_default_package_reported_with_functions(self, builder):
        builder.build_function("helper")
        packages = builder.get_packages()
        assert [p.name for p in packages] == [GLOBAL_PACKAGE]
        assert packages[0] is builder.default_package

    def test_creation_order(self, builder):
        builder.build_class("b::Foo")
        builder.build_package("a")
        builder.build_class("Bar")
        names = [p.name for p in builder.get_packages()]
        assert names == [GLOBAL_PACKAGE, "b", "a"]

    def test_empty_explicit_package_reported(self, builder):
        builder.build_package("empty")
        assert [p.name for p in builder.get_packages()] == ["empty"]

    def test_iteration(self, builder):
        builder.build_class("app::Foo")
        assert [p.name for p in builder] == ["app"]

    def test_promoted_type_leaves_default_empty(self, builder):
        builder.build_class("Foo")
        builder.build_class("app::Foo")
        assert [p.name for p in builder.get_packages()] == ["app"]


class TestFunctions:

    def test_idempotent(self, builder):
        first = builder.build_function("helper", 3)
        again = builder.build_function("helper", 9)
        assert again is first
        assert first.line == 3

    def test_default_package(self, builder):
        function = builder.build_function("helper")
        assert function.package is builder.default_package
        assert function.source_file is builder.default_file
        assert builder.functions == [function]

    def test_parameters(self, builder):
        function = builder.build_function("helper")
        a = function.add_parameter(builder.build_parameter("$a"))
        b = function.add_parameter(builder.build_parameter("$b"))
        assert (a.position, b.position) == (0, 1)
        assert a.owner is function


class TestMembers:

    def test_fresh_instances(self, builder):
        assert builder.build_method("run") is not builder.build_method("run")
        assert isinstance(builder.build_method("run", 4), Method)
        assert isinstance(builder.build_property("$x"), Property)
        assert isinstance(builder.build_parameter("$x"), Parameter)

    def test_method_attachment(self, builder):
        cls = builder.build_class("Foo")
        method = cls.add_method(builder.build_method("Run", 5))
        assert method.parent is cls
        assert cls.find_method("run") is method

    def test_property_attachment(self, builder):
        cls = builder.build_class("Foo")
        prop = cls.add_property(builder.build_property("$x", 2))
        assert prop.parent is cls
        assert cls.properties == [prop]

    def test_constant(self, builder):
        iface = builder.build_interface("Foo")
        constant = iface.add_constant(builder.build_class_or_interface_constant("MAX"))
        assert isinstance(constant, ClassOrInterfaceConstant)
        assert constant.parent is iface


class TestExpressions:

    def test_constant_value(self, builder):
        value = builder.build_constant_value("PHP_EOL")
        assert isinstance(value, ConstantValue)
        assert value.name == "PHP_EOL"

    def test_array_expression(self, builder):
        array = builder.build_array_expression()
        element = array.add_element(builder.build_array_element())
        element.value = builder.build_null_value()
        assert isinstance(array, ArrayExpression)
        assert isinstance(element, ArrayElement)
        assert len(array) == 1

    def test_catch_statement(self, builder):
        catch = builder.build_catch_statement()
        catch.exception_type = builder.build_class_or_interface_proxy("Exception")
        assert isinstance(catch, CatchStatement)
        assert catch.exception_type.package.name == "+standard"


class TestClassOrInterfaceConstantValue:

    def test_class_owner(self, builder):
        cls = builder.build_class("Foo")
        value = builder.build_class_or_interface_constant_value(cls, "MAX")
        assert value.owner is cls
        assert value.name == "MAX"

    def test_proxy_owner(self, builder):
        proxy = builder.build_class_or_interface_proxy("Foo")
        value = builder.build_class_or_interface_constant_value(proxy, "MAX")
        assert value.owner is proxy

    def test_missing_owner(self, builder):
        with pytest.raises(InvalidArgumentError):
            builder.build_class_or_interface_constant_value(None, "MAX")

    def test_wrong_owner_is_value_error(self, builder):
        with pytest.raises(ValueError):
            builder.build_class_or_interface_constant_value("Foo", "MAX")


class TestConfiguration:

    def test_default_line(self):
        builder = DefaultBuilder(BuilderConfig(default_line=1))
        assert builder.build_class("Foo").line == 1
        assert builder.build_method("run").line == 1
        assert builder.build_class("Bar", 0).line == 0

    def test_proxy_fallback_uses_default_line(self):
        builder = DefaultBuilder(BuilderConfig(default_line=1))
        assert builder.build_class_or_interface_proxy("Foo").line == 1

    def test_extra_internal_types(self):
        builder = DefaultBuilder(BuilderConfig(extra_internal_types={"Widget": "+gui"}))
        assert builder.build_class("Widget").package.name == "+gui"
        assert builder.build_class("ArrayIterator").package.name == "+spl"

    def test_internal_types_file(self, tmp_path):
        path = tmp_path / "types.sexp"
        path.write_text("(+gui Widget)", encoding="utf-8")
        builder = DefaultBuilder(BuilderConfig(internal_types_file=path))
        assert builder.build_class("Widget").package.name == "+gui"
        assert builder.build_class("ArrayIterator").package.name == GLOBAL_PACKAGE

    def test_injected_oracle(self):
        builder = DefaultBuilder(internal_types=InternalTypes({"Widget": "+gui"}))
        assert builder.build_class("widget").package.name == "+gui"

    def test_injected_empty_oracle(self):
        builder = DefaultBuilder(internal_types=InternalTypes({}))
        assert builder.build_class("ArrayIterator").package.name == GLOBAL_PACKAGE

    def test_warnings_logged(self, tmp_path, caplog):
        config = BuilderConfig(
            internal_types_file=tmp_path / "absent.sexp",
            extra_internal_types={"Widget": "gui"},
            default_line=-1,
        )
        assert len(config.validate()) == 3
        with caplog.at_level(logging.WARNING, logger="php_reflection"):
            DefaultBuilder(config)
        messages = [r.getMessage() for r in caplog.records]
        assert any("default_line" in m for m in messages)
        assert any("'gui'" in m for m in messages)
        assert any("absent.sexp" in m for m in messages)

    def test_valid_config(self):
        assert BuilderConfig().validate() == []

    def test_repr(self, builder):
        builder.build_class("Foo")
        assert "classes=1" in repr(builder)
