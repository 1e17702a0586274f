"""
Shader model consumed by the code generator.

The model is produced by the shader parser from a compiled pixel shader and is
read-only from here on. Register order matters: it fixes both the member
declaration order and the order of the constructor's update calls.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from effectgen.values import RegisterType


class TargetFramework(Enum):
    """Host framework flavour the wrapper class is generated for."""

    WPF = auto()
    SILVERLIGHT = auto()

    @property
    def metadata_type(self) -> str:
        """Property metadata class used when registering value properties.

        Silverlight has no ``UIPropertyMetadata``.
        """
        if self is TargetFramework.WPF:
            return "UIPropertyMetadata"
        return "PropertyMetadata"


@dataclass(frozen=True)
class ConstantRegister:
    """One constant slot of a pixel shader.

    Attributes:
        name: Identifier-safe register name, unique within the model
        register_type: Declared type of the register
        register_number: Register index, unique within the model
        default_value: Optional default whose type matches ``register_type``
        description: Optional human-readable description
    """

    name: str
    register_type: RegisterType
    register_number: int
    default_value: Any = None
    description: str | None = None


@dataclass(frozen=True)
class ShaderModel:
    """Everything needed to generate one shader effect wrapper class.

    Attributes:
        generated_namespace: Namespace of the generated class
        generated_class_name: Name of the generated class
        description: Optional class description
        target_framework: Host framework flavour
        registers: Constant registers in declaration order
    """

    generated_namespace: str
    generated_class_name: str
    description: str | None = None
    target_framework: TargetFramework = TargetFramework.WPF
    registers: tuple[ConstantRegister, ...] = field(default_factory=tuple)
