"""Dependency property members of the generated class.

Every bindable input is exposed as a pair of members: a public static
``DependencyProperty`` field registering the property with the framework, and
a typed property forwarding to ``GetValue``/``SetValue``.
"""

from html import escape

from effectgen.codegen.ir import (
    Cast,
    ExprStmt,
    Field,
    MemberAttributes,
    MethodInvoke,
    ObjectCreate,
    Primitive,
    Property,
    Return,
    This,
    TypeOf,
    TypeRef,
    TypeRefExpr,
    VariableRef,
)
from effectgen.codegen.literals import create_type_ref, synthesize_default_value
from effectgen.model import ConstantRegister, ShaderModel
from effectgen.values import RegisterType

DESCRIPTOR_TYPE = "DependencyProperty"
EFFECT_BASE_TYPE = "ShaderEffect"
CONSTANT_CALLBACK = "PixelShaderConstantCallback"
SAMPLER_REGISTRATION = "RegisterPixelShaderSamplerProperty"


def descriptor_name(property_name: str) -> str:
    return f"{property_name}Property"


def summary_comment(text: str | None) -> list[str]:
    """XML documentation summary for a description, if there is one."""
    if not text:
        return []
    return [f"<summary>{escape(text, quote=False)}</summary>"]


def build_sampler_field(
    class_name: str, property_name: str, register_number: int
) -> Field:
    """Descriptor field for a sampler input, registered by index only."""
    return Field(
        name=descriptor_name(property_name),
        attributes=MemberAttributes.PUBLIC | MemberAttributes.STATIC,
        type=TypeRef(DESCRIPTOR_TYPE),
        init=MethodInvoke(
            TypeRefExpr(TypeRef(EFFECT_BASE_TYPE)),
            SAMPLER_REGISTRATION,
            [
                Primitive(property_name),
                TypeOf(TypeRef(class_name)),
                Primitive(register_number),
            ],
        ),
    )


def build_descriptor_field(model: ShaderModel, register: ConstantRegister) -> Field:
    """Descriptor field for a shader register.

    Samplers are registered by register index. Value registers are registered
    with metadata carrying their default value and the callback that pushes
    the value into the constant buffer at their register index.
    """
    if register.register_type.is_sampler:
        return build_sampler_field(
            model.generated_class_name, register.name, register.register_number
        )

    metadata = ObjectCreate(
        TypeRef(model.target_framework.metadata_type),
        [
            synthesize_default_value(register.default_value, register.register_type),
            MethodInvoke(
                None, CONSTANT_CALLBACK, [Primitive(register.register_number)]
            ),
        ],
    )
    return Field(
        name=descriptor_name(register.name),
        attributes=MemberAttributes.PUBLIC | MemberAttributes.STATIC,
        type=TypeRef(DESCRIPTOR_TYPE),
        init=MethodInvoke(
            TypeRefExpr(TypeRef(DESCRIPTOR_TYPE)),
            "Register",
            [
                Primitive(register.name),
                TypeOf(create_type_ref(register.register_type)),
                TypeOf(TypeRef(model.generated_class_name)),
                metadata,
            ],
        ),
    )


def build_accessor_property(
    name: str, register_type: RegisterType, description: str | None = None
) -> Property:
    """Typed property wrapping a descriptor field.

    Identical for sampler and value registers.
    """
    type_ref = create_type_ref(register_type)
    descriptor = VariableRef(descriptor_name(name))
    return Property(
        name=name,
        attributes=MemberAttributes.PUBLIC | MemberAttributes.FINAL,
        comments=summary_comment(description),
        type=type_ref,
        getter=[
            Return(Cast(type_ref, MethodInvoke(This(), "GetValue", [descriptor])))
        ],
        setter=[
            ExprStmt(
                MethodInvoke(This(), "SetValue", [descriptor, VariableRef("value")])
            )
        ],
    )
