"""Constructor of the generated class.

The class gets exactly one of two constructors: one taking an already loaded
``PixelShader``, or a parameterless one loading the compiled shader from the
assembly's resources. Both end with the same sequence of update calls, the
``Input`` sampler first and then every register in model order.
"""

from enum import Enum, auto

from loguru import logger

from effectgen.codegen.ir import (
    Assign,
    Constructor,
    ExprStmt,
    FieldRef,
    MemberAttributes,
    MethodInvoke,
    ObjectCreate,
    Parameter,
    Primitive,
    PropertyRef,
    Snippet,
    Stmt,
    This,
    TypeRef,
    TypeRefExpr,
    VariableDecl,
    VariableRef,
)
from effectgen.codegen.members import descriptor_name
from effectgen.codegen.options import DEFAULT_SHADER_EXTENSION
from effectgen.model import ShaderModel

INPUT_PROPERTY = "Input"
SHADER_TYPE = "PixelShader"


class ConstructorKind(Enum):
    """Shape of the generated constructor."""

    EXTERNAL_INSTANCE = auto()
    SELF_LOADING = auto()

    @classmethod
    def select(cls, include_external_constructor: bool) -> "ConstructorKind":
        if include_external_constructor:
            return cls.EXTERNAL_INSTANCE
        return cls.SELF_LOADING


def shader_resource_uri(
    model: ShaderModel, shader_extension: str = DEFAULT_SHADER_EXTENSION
) -> str:
    """Relative pack URI of the compiled shader embedded next to the class."""
    return (
        f"/{model.generated_namespace};component/"
        f"{model.generated_class_name}.{shader_extension}"
    )


def update_order(model: ShaderModel) -> list[str]:
    """Names of the properties pushed to the shader, in call order."""
    return [INPUT_PROPERTY] + [register.name for register in model.registers]


def create_update_call(property_name: str) -> ExprStmt:
    return ExprStmt(
        MethodInvoke(
            This(), "UpdateShaderValue", [VariableRef(descriptor_name(property_name))]
        )
    )


def _load_shader_statements(model: ShaderModel, shader_extension: str) -> list[Stmt]:
    local = VariableRef("pixelShader")
    uri = ObjectCreate(
        TypeRef("Uri"),
        [
            Primitive(shader_resource_uri(model, shader_extension)),
            FieldRef(TypeRefExpr(TypeRef("UriKind")), "Relative"),
        ],
    )
    return [
        VariableDecl(
            TypeRef(SHADER_TYPE), "pixelShader", ObjectCreate(TypeRef(SHADER_TYPE))
        ),
        Assign(PropertyRef(local, "UriSource"), uri),
        Assign(PropertyRef(This(), SHADER_TYPE), local),
    ]


def build_constructor(
    model: ShaderModel,
    include_external_constructor: bool,
    shader_extension: str = DEFAULT_SHADER_EXTENSION,
) -> Constructor:
    """Build the constructor of the generated class.

    Args:
        model: Shader model
        include_external_constructor: Take the ``PixelShader`` as a parameter
            instead of loading it from resources
        shader_extension: File extension of the compiled shader resource

    Returns:
        The constructor declaration
    """
    kind = ConstructorKind.select(include_external_constructor)
    logger.debug(
        f"Building {kind.name.lower()} constructor for {model.generated_class_name}"
    )

    params: list[Parameter] = []
    match kind:
        case ConstructorKind.EXTERNAL_INSTANCE:
            params.append(Parameter("shader", TypeRef(SHADER_TYPE)))
            body: list[Stmt] = [
                Assign(PropertyRef(This(), SHADER_TYPE), VariableRef("shader"))
            ]
        case ConstructorKind.SELF_LOADING:
            body = _load_shader_statements(model, shader_extension)

    body.append(Snippet(""))
    body.extend(create_update_call(name) for name in update_order(model))

    return Constructor(
        name=model.generated_class_name,
        attributes=MemberAttributes.PUBLIC,
        params=params,
        body=body,
    )
