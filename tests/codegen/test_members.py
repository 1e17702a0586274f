"""Tests for descriptor fields and accessor properties."""

import numpy as np

from effectgen.codegen.backends import CSharpBackend
from effectgen.codegen.ir import (
    Cast,
    DefaultValue,
    ExprStmt,
    MemberAttributes,
    MethodInvoke,
    ObjectCreate,
    Primitive,
    Return,
    This,
    TypeOf,
    TypeRef,
    VariableRef,
)
from effectgen.codegen.members import (
    build_accessor_property,
    build_descriptor_field,
    build_sampler_field,
    descriptor_name,
    summary_comment,
)
from effectgen.model import ConstantRegister, ShaderModel, TargetFramework
from effectgen.values import RegisterType


def _model(*registers, framework=TargetFramework.WPF):
    return ShaderModel(
        generated_namespace="Effects",
        generated_class_name="Glow",
        target_framework=framework,
        registers=tuple(registers),
    )


def test_descriptor_name():
    assert descriptor_name("Radius") == "RadiusProperty"


class TestSummaryComment:
    def test_empty(self):
        assert summary_comment(None) == []
        assert summary_comment("") == []

    def test_escapes_markup(self):
        assert summary_comment("a < b & c") == [
            "<summary>a &lt; b &amp; c</summary>"
        ]


class TestSamplerField:
    def test_registration_by_index(self):
        field = build_sampler_field("Glow", "Input", 0)
        assert field.name == "InputProperty"
        assert field.type == TypeRef("DependencyProperty")
        assert field.attributes == MemberAttributes.PUBLIC | MemberAttributes.STATIC
        assert field.init.method == "RegisterPixelShaderSamplerProperty"
        assert field.init.args == [
            Primitive("Input"),
            TypeOf(TypeRef("Glow")),
            Primitive(0),
        ]

    def test_brush_register_uses_sampler_registration(self):
        register = ConstantRegister("Mask", RegisterType.BRUSH, 3)
        field = build_descriptor_field(_model(register), register)
        assert field.init == build_sampler_field("Glow", "Mask", 3).init

    def test_sampler_has_no_default_or_callback(self):
        register = ConstantRegister("Mask", RegisterType.BRUSH, 3)
        text = CSharpBackend().emit_expr(
            build_descriptor_field(_model(register), register).init
        )
        assert text == (
            'ShaderEffect.RegisterPixelShaderSamplerProperty("Mask", typeof(Glow), 3)'
        )
        assert "PixelShaderConstantCallback" not in text
        assert "Metadata" not in text


class TestValueField:
    def test_registration_arguments(self):
        register = ConstantRegister(
            "Radius", RegisterType.FLOAT, 1, np.float32(5.0)
        )
        field = build_descriptor_field(_model(register), register)
        assert field.name == "RadiusProperty"
        assert field.init.method == "Register"

        name, property_type, owner_type, metadata = field.init.args
        assert name == Primitive("Radius")
        assert property_type == TypeOf(TypeRef("System.Single"))
        assert owner_type == TypeOf(TypeRef("Glow"))
        assert isinstance(metadata, ObjectCreate)
        assert metadata.type == TypeRef("UIPropertyMetadata")

        default, callback = metadata.args
        assert default == Cast(TypeRef("System.Single"), Primitive(np.float32(5.0)))
        assert callback == MethodInvoke(
            None, "PixelShaderConstantCallback", [Primitive(1)]
        )

    def test_silverlight_metadata(self):
        register = ConstantRegister("Radius", RegisterType.FLOAT, 1)
        field = build_descriptor_field(
            _model(register, framework=TargetFramework.SILVERLIGHT), register
        )
        metadata = field.init.args[3]
        assert metadata.type == TypeRef("PropertyMetadata")

    def test_missing_default_uses_type_default(self):
        register = ConstantRegister("Amount", RegisterType.DOUBLE, 2)
        field = build_descriptor_field(_model(register), register)
        assert field.init.args[3].args[0] == DefaultValue(TypeRef("System.Double"))

    def test_rendered_csharp(self):
        register = ConstantRegister(
            "Radius", RegisterType.FLOAT, 1, np.float32(5.0)
        )
        field = build_descriptor_field(_model(register), register)
        assert CSharpBackend().emit_expr(field.init) == (
            'DependencyProperty.Register("Radius", typeof(float), typeof(Glow), '
            "new UIPropertyMetadata(((float)(5F)), PixelShaderConstantCallback(1)))"
        )


class TestAccessorProperty:
    def test_getter_and_setter(self):
        prop = build_accessor_property("Radius", RegisterType.FLOAT)
        descriptor = VariableRef("RadiusProperty")
        assert prop.type == TypeRef("System.Single")
        assert prop.attributes == MemberAttributes.PUBLIC | MemberAttributes.FINAL
        assert prop.getter == [
            Return(
                Cast(
                    TypeRef("System.Single"),
                    MethodInvoke(This(), "GetValue", [descriptor]),
                )
            )
        ]
        [setter] = prop.setter
        assert isinstance(setter, ExprStmt)
        assert setter.expr.method == "SetValue"
        assert setter.expr.args == [descriptor, VariableRef("value")]

    def test_sampler_and_value_accessors_share_shape(self):
        brush = build_accessor_property("Mask", RegisterType.BRUSH)
        value = build_accessor_property("Mask", RegisterType.FLOAT)
        assert brush.setter == value.setter
        assert brush.getter[0].value.expr == value.getter[0].value.expr

    def test_description_becomes_summary(self):
        prop = build_accessor_property("Radius", RegisterType.FLOAT, "Blur radius.")
        assert prop.comments == ["<summary>Blur radius.</summary>"]
        assert build_accessor_property("Radius", RegisterType.FLOAT).comments == []
