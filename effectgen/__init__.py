from effectgen.codegen import get_source_text
from effectgen.codegen.errors import EffectGenError, RenderError
from effectgen.codegen.options import OutputLanguage, RenderOptions
from effectgen.model import ConstantRegister, ShaderModel, TargetFramework
from effectgen.values import (
    Color,
    Point,
    Point3D,
    Point4D,
    RegisterType,
    Size,
    Vector,
    Vector3D,
)

__version__ = "0.1.0"


__all__ = [
    "get_source_text",
    "EffectGenError",
    "RenderError",
    "OutputLanguage",
    "RenderOptions",
    "ConstantRegister",
    "ShaderModel",
    "TargetFramework",
    "Color",
    "Point",
    "Point3D",
    "Point4D",
    "RegisterType",
    "Size",
    "Vector",
    "Vector3D",
]
