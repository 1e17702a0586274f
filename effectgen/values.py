"""Runtime shapes of register default values.

These mirror the host framework's value types so that a default value read
from a compiled shader can be carried to the code generator with its exact
type. Scalars are numpy scalar types, which pin the numeric width
(``numpy.float32`` is ``Single``, ``numpy.float64`` is ``Double``, ...).
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np


class RegisterType(Enum):
    """Declared type of a constant register, valued by its CLR type name."""

    BOOL = "System.Boolean"
    INT = "System.Int32"
    FLOAT = "System.Single"
    DOUBLE = "System.Double"
    POINT = "Point"
    VECTOR = "Vector"
    SIZE = "Size"
    POINT3D = "Point3D"
    VECTOR3D = "Vector3D"
    POINT4D = "Point4D"
    COLOR = "Color"
    BRUSH = "Brush"

    @property
    def is_primitive(self) -> bool:
        return self in SCALAR_DTYPES

    @property
    def is_sampler(self) -> bool:
        """Brush-like registers are bound by sampler index, not by value."""
        return self is RegisterType.BRUSH


# Scalar register types and the numpy type holding their values
SCALAR_DTYPES: dict[RegisterType, type[np.generic]] = {
    RegisterType.BOOL: np.bool_,
    RegisterType.INT: np.int32,
    RegisterType.FLOAT: np.float32,
    RegisterType.DOUBLE: np.float64,
}

# numpy scalar type -> CLR primitive type name
CLR_PRIMITIVES: dict[type[np.generic], str] = {
    np.bool_: "System.Boolean",
    np.uint8: "System.Byte",
    np.int8: "System.SByte",
    np.int16: "System.Int16",
    np.uint16: "System.UInt16",
    np.int32: "System.Int32",
    np.uint32: "System.UInt32",
    np.int64: "System.Int64",
    np.uint64: "System.UInt64",
    np.float32: "System.Single",
    np.float64: "System.Double",
}


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Vector:
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Size cannot be negative: {self.width}x{self.height}")


@dataclass(frozen=True)
class Point3D:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class Vector3D:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class Point4D:
    x: float
    y: float
    z: float
    w: float


@dataclass(frozen=True)
class Color:
    """An sRGB color with byte channels, in ARGB order like the framework."""

    a: int
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.a, self.r, self.g, self.b):
            if not 0 <= int(channel) <= 255:
                raise ValueError(f"Color channel out of range 0..255: {channel}")


def to_usual_type(value: object) -> object:
    """Canonicalize 2- and 3-component values to ``Point``/``Point3D``.

    ``Vector`` and ``Size`` share ``Point``'s layout, ``Vector3D`` shares
    ``Point3D``'s. Any other value is returned unchanged.
    """
    match value:
        case Vector(x, y):
            return Point(x, y)
        case Size(width, height):
            return Point(width, height)
        case Vector3D(x, y, z):
            return Point3D(x, y, z)
    return value


# Builtin Python scalar type -> CLR type name
_PYTHON_TYPES: dict[type, str] = {
    bool: "System.Boolean",
    float: "System.Double",
    str: "System.String",
}

_VALUE_TYPES = (Point, Vector, Size, Point3D, Vector3D, Point4D, Color)


def type_name_of(value: object) -> str:
    """Return the CLR type name for a default value.

    Values of types the host framework has no counterpart for are named
    ``System.Object``.
    """
    value_type = type(value)
    if value_type in CLR_PRIMITIVES:
        return CLR_PRIMITIVES[value_type]
    if value_type in _PYTHON_TYPES:
        return _PYTHON_TYPES[value_type]
    if value_type in _VALUE_TYPES:
        return value_type.__name__
    return "System.Object"
