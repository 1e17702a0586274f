"""Visual Basic backend."""

import math
import re

import numpy as np

from effectgen.codegen.backends.base import AUTO_GENERATED_HEADER, Backend, format_real
from effectgen.codegen.errors import RenderError
from effectgen.codegen.ir import (
    Assign,
    Cast,
    ClassDecl,
    CompileUnit,
    Constructor,
    DefaultValue,
    Expr,
    ExprStmt,
    Field,
    FieldRef,
    Member,
    MemberAttributes,
    MethodInvoke,
    Namespace,
    ObjectCreate,
    Primitive,
    Property,
    PropertyRef,
    Return,
    Snippet,
    Stmt,
    This,
    TypeOf,
    TypeRefExpr,
    VariableDecl,
    VariableRef,
)

# Reserved words, compared case-insensitively
VB_KEYWORDS = frozenset(
    word.lower()
    for word in """
    AddHandler AddressOf Alias And AndAlso As Boolean ByRef Byte ByVal Call Case
    Catch CBool CByte CChar CDate CDbl CDec Char CInt Class CLng CObj Const
    Continue CSByte CShort CSng CStr CType CUInt CULng CUShort Date Decimal
    Declare Default Delegate Dim DirectCast Do Double Each Else ElseIf End EndIf
    Enum Erase Error Event Exit False Finally For Friend Function Get GetType
    GetXMLNamespace Global GoSub GoTo Handles If Implements Imports In Inherits
    Integer Interface Is IsNot Let Lib Like Long Loop Me Mod Module MustInherit
    MustOverride MyBase MyClass NameOf Namespace Narrowing New Next Not Nothing
    NotInheritable NotOverridable Object Of On Operator Option Optional Or OrElse
    Overloads Overridable Overrides ParamArray Partial Private Property Protected
    Public RaiseEvent ReadOnly ReDim REM RemoveHandler Resume Return SByte Select
    Set Shadows Shared Short Single Static Step Stop String Structure Sub
    SyncLock Then Throw To True Try TryCast TypeOf UInteger ULong UShort Using
    Variant Wend When While Widening With WithEvents WriteOnly Xor
    """.split()
)

VB_PRIMITIVE_TYPES = {
    "System.Boolean": "Boolean",
    "System.Byte": "Byte",
    "System.SByte": "SByte",
    "System.Int16": "Short",
    "System.UInt16": "UShort",
    "System.Int32": "Integer",
    "System.UInt32": "UInteger",
    "System.Int64": "Long",
    "System.UInt64": "ULong",
    "System.Single": "Single",
    "System.Double": "Double",
    "System.String": "String",
    "System.Object": "Object",
}

_CAST_INTEGERS = {
    np.uint8: "Byte",
    np.int8: "SByte",
}
_SUFFIXED_INTEGERS = {
    np.int16: "S",
    np.uint16: "US",
    np.int32: "",
    np.uint32: "UI",
    np.int64: "L",
    np.uint64: "UL",
}

# Minimum values whose magnitude overflows the suffixed literal's type
_MIN_VALUE_LITERALS = {
    np.int16: "CType(-32768, Short)",
    np.int64: "&H8000000000000000L",
}

_SHARED_FIELD_RE = re.compile(r"Public Shared (?!ReadOnly )")
_XML_COMMENT_RE = re.compile(r"(?<!')'<")


class VisualBasicBackend(Backend):
    """Writes compile units as Visual Basic source."""

    name = "Visual Basic"
    file_extension = "vb"
    keywords = VB_KEYWORDS
    case_sensitive = False
    primitive_types = VB_PRIMITIVE_TYPES

    def emit(self, unit: CompileUnit) -> str:
        lines = [f"'{line}" for line in AUTO_GENERATED_HEADER]
        lines.extend(["", "Option Strict Off", "Option Explicit On", ""])

        for namespace in unit.namespaces:
            lines.extend(self._emit_namespace(namespace))

        return "\n".join(lines) + "\n"

    def post_process(self, text: str) -> str:
        # Shared members are only the registered descriptor fields
        text = _SHARED_FIELD_RE.sub("Public Shared ReadOnly ", text)
        return _XML_COMMENT_RE.sub("'''<", text)

    # --- Declarations ---

    def _emit_namespace(self, namespace: Namespace) -> list[str]:
        if not namespace.name:
            lines = [f"Imports {name}" for name in namespace.imports]
            if lines:
                lines.append("")
            for class_decl in namespace.types:
                lines.extend(self._emit_class(class_decl, 0))
            return lines

        lines = [f"Namespace {namespace.name}"]
        for name in namespace.imports:
            lines.append(f"{self.indent(1)}Imports {name}")
        for class_decl in namespace.types:
            lines.append("")
            lines.extend(self._emit_class(class_decl, 1))
        lines.append("End Namespace")
        return lines

    def _emit_class(self, class_decl: ClassDecl, level: int) -> list[str]:
        prefix = self.indent(level)
        lines = self._emit_comments(class_decl.comments, level)
        lines.append(f"{prefix}Public Class {class_decl.name}")
        for base_type in class_decl.base_types:
            base_name = self.type_name(base_type)
            lines.append(f"{self.indent(level + 1)}Inherits {base_name}")

        groups = [
            [m for m in class_decl.members if isinstance(m, kind)]
            for kind in (Field, Constructor, Property)
        ]
        for group in groups:
            if not group:
                continue
            lines.append("")
            for member in group:
                lines.extend(self._emit_member(member, level + 1))

        lines.append(f"{prefix}End Class")
        return lines

    def _emit_comments(self, comments: list[str], level: int) -> list[str]:
        prefix = self.indent(level)
        return [f"{prefix}'{line}" for text in comments for line in text.split("\n")]

    def _emit_member(self, member: Member, level: int) -> list[str]:
        prefix = self.indent(level)
        lines = self._emit_comments(member.comments, level)

        match member:
            case Field(name=name, attributes=attributes, type=type_, init=init):
                decl = f"{_modifiers(attributes)}{name} As {self.type_name(type_)}"
                if init is not None:
                    decl += f" = {self.emit_expr(init)}"
                lines.append(f"{prefix}{decl}")

            case Constructor(attributes=attributes, params=params, body=body):
                params_str = ", ".join(
                    f"ByVal {p.name} As {self.type_name(p.type)}" for p in params
                )
                lines.append(f"{prefix}{_modifiers(attributes)}Sub New({params_str})")
                for stmt in body:
                    lines.append(self._emit_stmt(stmt, level + 1))
                lines.append(f"{prefix}End Sub")

            case Property(name=name, attributes=attributes, type=type_):
                modifiers = _modifiers(attributes)
                if not attributes & (MemberAttributes.FINAL | MemberAttributes.STATIC):
                    modifiers += "Overridable "
                type_name = self.type_name(type_)
                lines.append(f"{prefix}{modifiers}Property {name}() As {type_name}")
                for accessor, body in (("Get", member.getter), ("Set", member.setter)):
                    if not body:
                        continue
                    lines.append(f"{self.indent(level + 1)}{accessor}")
                    for stmt in body:
                        lines.append(self._emit_stmt(stmt, level + 2))
                    lines.append(f"{self.indent(level + 1)}End {accessor}")
                lines.append(f"{prefix}End Property")

            case _:
                raise RenderError("Unsupported member", member)

        return lines

    # --- Statements ---

    def _emit_stmt(self, stmt: Stmt, level: int) -> str:
        prefix = self.indent(level)

        match stmt:
            case VariableDecl(type_, name, init):
                decl = f"Dim {name} As {self.type_name(type_)}"
                if init is not None:
                    decl += f" = {self.emit_expr(init)}"
                return f"{prefix}{decl}"

            case Assign(target, value):
                return f"{prefix}{self.emit_expr(target)} = {self.emit_expr(value)}"

            case ExprStmt(expr):
                return f"{prefix}{self.emit_expr(expr)}"

            case Return(value):
                if value is None:
                    return f"{prefix}Return"
                return f"{prefix}Return {self.emit_expr(value)}"

            case Snippet(text):
                return f"{prefix}{text}" if text else ""

        raise RenderError(f"Unsupported statement: {type(stmt).__name__}")

    # --- Expressions ---

    def emit_expr(self, expr: Expr) -> str:
        match expr:
            case Primitive(value):
                return self.literal(value)

            case Cast(target_type, inner):
                return f"CType({self.emit_expr(inner)}, {self.type_name(target_type)})"

            case DefaultValue(type_):
                return f"CType(Nothing, {self.type_name(type_)})"

            case TypeOf(type_):
                return f"GetType({self.type_name(type_)})"

            case TypeRefExpr(type_):
                return self.type_name(type_)

            case This():
                return "Me"

            case VariableRef(name):
                return name

            case FieldRef(target, name) | PropertyRef(target, name):
                return f"{self.emit_expr(target)}.{name}"

            case MethodInvoke(target, method, args):
                args_str = ", ".join(self.emit_expr(a) for a in args)
                if target is None:
                    return f"{method}({args_str})"
                return f"{self.emit_expr(target)}.{method}({args_str})"

            case ObjectCreate(type_, args):
                args_str = ", ".join(self.emit_expr(a) for a in args)
                return f"New {self.type_name(type_)}({args_str})"

        raise RenderError(f"Unsupported expression: {type(expr).__name__}")

    def literal(self, value: object) -> str:
        """Format a primitive value as a Visual Basic literal."""
        if value is None:
            return "Nothing"
        if isinstance(value, bool | np.bool_):
            return "True" if value else "False"
        if isinstance(value, str):
            return _string_literal(value)

        value_type = type(value)
        if value_type in _CAST_INTEGERS:
            return f"CType({int(value)}, {_CAST_INTEGERS[value_type]})"
        if value_type in _MIN_VALUE_LITERALS and value == np.iinfo(value_type).min:
            return _MIN_VALUE_LITERALS[value_type]
        if value_type in _SUFFIXED_INTEGERS:
            return f"{int(value)}{_SUFFIXED_INTEGERS[value_type]}"
        if value_type is np.float32:
            return _real_literal(value, "Single", "!")
        if isinstance(value, float):
            return _real_literal(np.float64(value), "Double", "R")
        if isinstance(value, int):
            return str(value)

        raise RenderError(f"Unsupported primitive value: {value!r}")


def _string_literal(value: str) -> str:
    """Quote a string; control characters are concatenated with ChrW."""
    parts: list[str] = []
    current = ""
    for char in value:
        if ord(char) < 32:
            if current:
                parts.append(f'"{current}"')
                current = ""
            parts.append(f"ChrW({ord(char)})")
        else:
            current += '""' if char == '"' else char
    if current or not parts:
        parts.append(f'"{current}"')
    return " & ".join(parts)


def _real_literal(value: np.floating, keyword: str, suffix: str) -> str:
    if math.isnan(value):
        return f"{keyword}.NaN"
    if math.isinf(value):
        return f"{keyword}.{'Positive' if value > 0 else 'Negative'}Infinity"
    return f"{format_real(value)}{suffix}"


def _modifiers(attributes: MemberAttributes) -> str:
    modifiers = ""
    if attributes & MemberAttributes.PUBLIC:
        modifiers += "Public "
    if attributes & MemberAttributes.STATIC:
        modifiers += "Shared "
    return modifiers
