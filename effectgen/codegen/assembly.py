"""Assembly of the complete compile unit for a shader effect class."""

from loguru import logger

from effectgen.codegen.constructors import INPUT_PROPERTY, build_constructor
from effectgen.codegen.ir import ClassDecl, CompileUnit, Member, Namespace, TypeRef
from effectgen.codegen.members import (
    EFFECT_BASE_TYPE,
    build_accessor_property,
    build_descriptor_field,
    build_sampler_field,
    summary_comment,
)
from effectgen.codegen.options import DEFAULT_SHADER_EXTENSION
from effectgen.model import ShaderModel
from effectgen.values import RegisterType

# Imports every generated effect class needs
FRAMEWORK_IMPORTS = [
    "System",
    "System.Windows",
    "System.Windows.Media",
    "System.Windows.Media.Effects",
    "System.Windows.Media.Media3D",
]


def build_class(
    model: ShaderModel,
    include_external_constructor: bool,
    shader_extension: str = DEFAULT_SHADER_EXTENSION,
) -> ClassDecl:
    """Build the effect class declaration.

    Members are, in order: the constructor, the ``Input`` sampler descriptor
    and property, then a descriptor and a property for each register.
    """
    members: list[Member] = [
        build_constructor(model, include_external_constructor, shader_extension),
        build_sampler_field(model.generated_class_name, INPUT_PROPERTY, 0),
        build_accessor_property(INPUT_PROPERTY, RegisterType.BRUSH),
    ]
    for register in model.registers:
        members.append(build_descriptor_field(model, register))
        members.append(
            build_accessor_property(
                register.name, register.register_type, register.description
            )
        )

    return ClassDecl(
        name=model.generated_class_name,
        base_types=[TypeRef(EFFECT_BASE_TYPE)],
        members=members,
        comments=summary_comment(model.description),
    )


def build_compile_unit(
    model: ShaderModel,
    include_external_constructor: bool = False,
    shader_extension: str = DEFAULT_SHADER_EXTENSION,
) -> CompileUnit:
    """Build the compile unit for a shader model.

    Args:
        model: Shader model to generate the class for
        include_external_constructor: Generate the constructor taking a
            ``PixelShader`` instead of the resource-loading one
        shader_extension: File extension of the compiled shader resource

    Returns:
        A compile unit with an unnamed namespace holding the imports and the
        model's namespace holding the class
    """
    logger.debug(
        f"Assembling {model.generated_namespace}.{model.generated_class_name} "
        f"with {len(model.registers)} registers"
    )
    imports = Namespace(name="", imports=list(FRAMEWORK_IMPORTS))
    namespace = Namespace(
        name=model.generated_namespace,
        types=[build_class(model, include_external_constructor, shader_extension)],
    )
    return CompileUnit(namespaces=[imports, namespace])
