"""Default-value literal synthesis.

Turns a register's runtime default value into an expression that rebuilds the
same value in generated source, so the wrapper class never needs the generator
at runtime. Numeric type and precision are preserved: scalars are wrapped in an
explicit cast to their exact type, vector components are emitted as doubles
and color channels as bytes.
"""

import numpy as np
from loguru import logger

from effectgen.codegen.ir import (
    Cast,
    DefaultValue,
    Expr,
    MethodInvoke,
    ObjectCreate,
    Primitive,
    TypeRef,
    TypeRefExpr,
)
from effectgen.values import (
    CLR_PRIMITIVES,
    SCALAR_DTYPES,
    Color,
    Point,
    Point3D,
    Point4D,
    RegisterType,
    Size,
    Vector,
    Vector3D,
    to_usual_type,
    type_name_of,
)


def create_type_ref(register_type: RegisterType) -> TypeRef:
    """Type reference for a declared register type."""
    return TypeRef(register_type.value)


def _double(component: float) -> Primitive:
    return Primitive(np.float64(component))


def _byte(channel: int) -> Primitive:
    return Primitive(np.uint8(channel))


# Candidate widths for plain integers without a declared type, narrowest first
_INTEGER_WIDTHS: tuple[type[np.generic], ...] = (np.int32, np.int64, np.uint64)


def _fits(scalar_type: type[np.generic], value: bool | int | float) -> bool:
    """Whether ``value`` converts to ``scalar_type`` without overflowing."""
    if issubclass(scalar_type, np.integer):
        info = np.iinfo(scalar_type)
        return info.min <= value <= info.max
    if issubclass(scalar_type, np.floating) and isinstance(value, int):
        return abs(value) <= float(np.finfo(scalar_type).max)
    return True


def _pin_scalar(value: object, declared_type: RegisterType | None) -> object:
    """Give plain Python scalars an exact numpy type.

    The declared scalar type wins when there is one, so a ``float`` register
    with a default of ``5.0`` is emitted as a ``float`` and not a ``double``.
    Without one, integers take the narrowest of ``int32``/``int64``/``uint64``
    holding them. Values no candidate type can hold are returned unchanged.
    """
    if not isinstance(value, bool | int | float) or isinstance(value, np.generic):
        return value

    if declared_type is not None and declared_type.is_primitive:
        scalar_type = SCALAR_DTYPES[declared_type]
        if not _fits(scalar_type, value):
            logger.debug(f"Default {value!r} does not fit {declared_type.value}")
            return value
        return scalar_type(value)

    if isinstance(value, bool):
        return np.bool_(value)
    if isinstance(value, float):
        return np.float64(value)
    for scalar_type in _INTEGER_WIDTHS:
        if _fits(scalar_type, value):
            return scalar_type(value)
    return value


def _fallback(value: object, declared_type: RegisterType | None) -> Expr:
    if declared_type is not None:
        return DefaultValue(create_type_ref(declared_type))
    if value is None:
        return Primitive(None)
    return DefaultValue(TypeRef(type_name_of(value)))


def synthesize_default_value(
    value: object, declared_type: RegisterType | None = None
) -> Expr:
    """Build the expression reconstructing a default value.

    Never raises for any input: values of an unsupported shape fall back to
    the default value of their type.

    Args:
        value: Runtime default value, or None when the register has none
        declared_type: Declared type of the register, if known

    Returns:
        An expression tree for the value
    """
    value = _pin_scalar(value, declared_type)

    match value:
        case None:
            return _fallback(None, declared_type)

        case np.generic() if type(value) in CLR_PRIMITIVES:
            return Cast(TypeRef(CLR_PRIMITIVES[type(value)]), Primitive(value))

        case Point() | Vector() | Size():
            point = to_usual_type(value)
            return ObjectCreate(
                TypeRef(type_name_of(value)), [_double(point.x), _double(point.y)]
            )

        case Point3D() | Vector3D():
            point3d = to_usual_type(value)
            return ObjectCreate(
                TypeRef(type_name_of(value)),
                [_double(point3d.x), _double(point3d.y), _double(point3d.z)],
            )

        case Point4D(x, y, z, w):
            return ObjectCreate(
                TypeRef("Point4D"), [_double(x), _double(y), _double(z), _double(w)]
            )

        case Color(a, r, g, b):
            return MethodInvoke(
                TypeRefExpr(TypeRef("Color")),
                "FromArgb",
                [_byte(a), _byte(r), _byte(g), _byte(b)],
            )

        case _:
            logger.debug(
                f"No literal form for default of type {type(value).__name__}, "
                "using the type's default value"
            )
            return _fallback(value, declared_type)
