"""C# backend."""

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
from effectgen.codegen.members import DESCRIPTOR_TYPE

CSHARP_KEYWORDS = frozenset(
    """
    abstract as base bool break byte case catch char checked class const continue
    decimal default delegate do double else enum event explicit extern false
    finally fixed float for foreach goto if implicit in int interface internal is
    lock long namespace new null object operator out override params private
    protected public readonly ref return sbyte sealed short sizeof stackalloc
    static string struct switch this throw true try typeof uint ulong unchecked
    unsafe ushort using virtual void volatile while
    """.split()
)

CSHARP_PRIMITIVE_TYPES = {
    "System.Boolean": "bool",
    "System.Byte": "byte",
    "System.SByte": "sbyte",
    "System.Int16": "short",
    "System.UInt16": "ushort",
    "System.Int32": "int",
    "System.UInt32": "uint",
    "System.Int64": "long",
    "System.UInt64": "ulong",
    "System.Single": "float",
    "System.Double": "double",
    "System.String": "string",
    "System.Object": "object",
}

# Integer types without a literal suffix are written as a cast
_CAST_INTEGERS = {
    np.uint8: "byte",
    np.int8: "sbyte",
    np.int16: "short",
    np.uint16: "ushort",
}
_SUFFIXED_INTEGERS = {
    np.int32: "",
    np.uint32: "u",
    np.int64: "L",
    np.uint64: "ul",
}

_STRING_ESCAPES = str.maketrans(
    {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}
)

# An ordinary comment opening an XML tag, but not the generated-file header
# and not a comment that already is a documentation comment.
_XML_COMMENT_RE = re.compile(r"(?<!/)// <(?!/?auto-generated)")


class CSharpBackend(Backend):
    """Writes compile units as C# source."""

    name = "C#"
    file_extension = "cs"
    keywords = CSHARP_KEYWORDS
    primitive_types = CSHARP_PRIMITIVE_TYPES

    def emit(self, unit: CompileUnit) -> str:
        lines = [f"//{line}" for line in AUTO_GENERATED_HEADER]
        lines.append("")

        for namespace in unit.namespaces:
            lines.extend(self._emit_namespace(namespace))

        return "\n".join(lines) + "\n"

    def post_process(self, text: str) -> str:
        # Descriptor fields are never reassigned after registration
        text = text.replace(
            f"public static {DESCRIPTOR_TYPE}",
            f"public static readonly {DESCRIPTOR_TYPE}",
        )
        return _XML_COMMENT_RE.sub("/// <", text)

    # --- Declarations ---

    def _emit_namespace(self, namespace: Namespace) -> list[str]:
        if not namespace.name:
            lines = [f"using {name};" for name in namespace.imports]
            if lines:
                lines.append("")
            for class_decl in namespace.types:
                lines.extend(self._emit_class(class_decl, 0))
            return lines

        lines = [f"namespace {namespace.name} {{"]
        for name in namespace.imports:
            lines.append(f"{self.indent(1)}using {name};")
        for class_decl in namespace.types:
            lines.append("")
            lines.extend(self._emit_class(class_decl, 1))
        lines.append("}")
        return lines

    def _emit_class(self, class_decl: ClassDecl, level: int) -> list[str]:
        prefix = self.indent(level)
        lines = self._emit_comments(class_decl.comments, level)
        header = f"{prefix}public class {class_decl.name}"
        if class_decl.base_types:
            bases = ", ".join(self.type_name(t) for t in class_decl.base_types)
            header += f" : {bases}"
        lines.append(f"{header} {{")

        for group in _member_groups(class_decl.members):
            lines.append("")
            for member in group:
                lines.extend(self._emit_member(member, class_decl.name, level + 1))

        lines.append(f"{prefix}}}")
        return lines

    def _emit_comments(self, comments: list[str], level: int) -> list[str]:
        prefix = self.indent(level)
        return [f"{prefix}// {line}" for text in comments for line in text.split("\n")]

    def _emit_member(self, member: Member, class_name: str, level: int) -> list[str]:
        prefix = self.indent(level)
        lines = self._emit_comments(member.comments, level)

        match member:
            case Field(name=name, attributes=attributes, type=type_, init=init):
                decl = f"{_modifiers(attributes)}{self.type_name(type_)} {name}"
                if init is not None:
                    decl += f" = {self.emit_expr(init)}"
                lines.append(f"{prefix}{decl};")

            case Constructor(attributes=attributes, params=params, body=body):
                params_str = ", ".join(
                    f"{self.type_name(p.type)} {p.name}" for p in params
                )
                signature = f"{_modifiers(attributes)}{class_name}({params_str})"
                lines.append(f"{prefix}{signature} {{")
                for stmt in body:
                    lines.append(self._emit_stmt(stmt, level + 1))
                lines.append(f"{prefix}}}")

            case Property(name=name, attributes=attributes, type=type_):
                modifiers = _modifiers(attributes)
                if not attributes & (MemberAttributes.FINAL | MemberAttributes.STATIC):
                    modifiers += "virtual "
                lines.append(f"{prefix}{modifiers}{self.type_name(type_)} {name} {{")
                for accessor, body in (("get", member.getter), ("set", member.setter)):
                    if not body:
                        continue
                    lines.append(f"{self.indent(level + 1)}{accessor} {{")
                    for stmt in body:
                        lines.append(self._emit_stmt(stmt, level + 2))
                    lines.append(f"{self.indent(level + 1)}}}")
                lines.append(f"{prefix}}}")

            case _:
                raise RenderError("Unsupported member", member)

        return lines

    # --- Statements ---

    def _emit_stmt(self, stmt: Stmt, level: int) -> str:
        prefix = self.indent(level)

        match stmt:
            case VariableDecl(type_, name, init):
                decl = f"{self.type_name(type_)} {name}"
                if init is not None:
                    decl += f" = {self.emit_expr(init)}"
                return f"{prefix}{decl};"

            case Assign(target, value):
                return f"{prefix}{self.emit_expr(target)} = {self.emit_expr(value)};"

            case ExprStmt(expr):
                return f"{prefix}{self.emit_expr(expr)};"

            case Return(value):
                if value is None:
                    return f"{prefix}return;"
                return f"{prefix}return {self.emit_expr(value)};"

            case Snippet(text):
                return f"{prefix}{text}" if text else ""

        raise RenderError(f"Unsupported statement: {type(stmt).__name__}")

    # --- Expressions ---

    def emit_expr(self, expr: Expr) -> str:
        match expr:
            case Primitive(value):
                return self.literal(value)

            case Cast(target_type, inner):
                return f"(({self.type_name(target_type)})({self.emit_expr(inner)}))"

            case DefaultValue(type_):
                return f"default({self.type_name(type_)})"

            case TypeOf(type_):
                return f"typeof({self.type_name(type_)})"

            case TypeRefExpr(type_):
                return self.type_name(type_)

            case This():
                return "this"

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
                return f"new {self.type_name(type_)}({args_str})"

        raise RenderError(f"Unsupported expression: {type(expr).__name__}")

    def literal(self, value: object) -> str:
        """Format a primitive value as a C# literal."""
        if value is None:
            return "null"
        if isinstance(value, bool | np.bool_):
            return "true" if value else "false"
        if isinstance(value, str):
            return f'"{value.translate(_STRING_ESCAPES)}"'

        value_type = type(value)
        if value_type in _CAST_INTEGERS:
            return f"(({_CAST_INTEGERS[value_type]})({int(value)}))"
        if value_type in _SUFFIXED_INTEGERS:
            return f"{int(value)}{_SUFFIXED_INTEGERS[value_type]}"
        if value_type is np.float32:
            return _real_literal(value, "float", "F")
        if isinstance(value, float):
            return _real_literal(np.float64(value), "double", "D")
        if isinstance(value, int):
            return str(value)

        raise RenderError(f"Unsupported primitive value: {value!r}")


def _real_literal(value: np.floating, keyword: str, suffix: str) -> str:
    if math.isnan(value):
        return f"{keyword}.NaN"
    if math.isinf(value):
        return f"{keyword}.{'Positive' if value > 0 else 'Negative'}Infinity"
    return f"{format_real(value)}{suffix}"


def _modifiers(attributes: MemberAttributes) -> str:
    modifiers = ""
    if attributes & MemberAttributes.PUBLIC:
        modifiers += "public "
    if attributes & MemberAttributes.STATIC:
        modifiers += "static "
    return modifiers


def _member_groups(members: list[Member]) -> list[list[Member]]:
    """Split members into fields, constructors and properties, keeping order."""
    groups: list[list[Member]] = [
        [m for m in members if isinstance(m, Field)],
        [m for m in members if isinstance(m, Constructor)],
        [m for m in members if isinstance(m, Property)],
    ]
    return [group for group in groups if group]
