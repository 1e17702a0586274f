"""Helpers for building shader models from plain test data."""

from typing import Any

from effectgen import (
    Color,
    ConstantRegister,
    Point,
    Point3D,
    Point4D,
    RegisterType,
    ShaderModel,
    Size,
    TargetFramework,
    Vector,
    Vector3D,
)
from effectgen.values import SCALAR_DTYPES

_COMPOSITE_TYPES = {
    RegisterType.POINT: Point,
    RegisterType.VECTOR: Vector,
    RegisterType.SIZE: Size,
    RegisterType.POINT3D: Point3D,
    RegisterType.VECTOR3D: Vector3D,
    RegisterType.POINT4D: Point4D,
    RegisterType.COLOR: Color,
}


def make_default(register_type: RegisterType, raw: Any) -> Any:
    """Convert a raw YAML value to the default value shape of a register type."""
    if raw is None:
        return None
    if register_type in SCALAR_DTYPES:
        return SCALAR_DTYPES[register_type](raw)
    return _COMPOSITE_TYPES[register_type](*raw)


def make_model(data: dict[str, Any]) -> ShaderModel:
    """Build a shader model from a test case dictionary."""
    registers = []
    for item in data.get("registers", []):
        register_type = RegisterType[item["type"]]
        registers.append(
            ConstantRegister(
                name=item["name"],
                register_type=register_type,
                register_number=item["index"],
                default_value=make_default(register_type, item.get("default")),
                description=item.get("description"),
            )
        )
    return ShaderModel(
        generated_namespace=data["namespace"],
        generated_class_name=data["class_name"],
        description=data.get("description"),
        target_framework=TargetFramework[data.get("framework", "wpf").upper()],
        registers=tuple(registers),
    )


def update_calls(code: str) -> list[str]:
    """Names of the properties passed to UpdateShaderValue, in order."""
    marker = "UpdateShaderValue("
    names = []
    for line in code.splitlines():
        if marker in line:
            argument = line.split(marker, 1)[1].split(")", 1)[0]
            names.append(argument.removesuffix("Property"))
    return names
