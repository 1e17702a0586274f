"""Language-neutral syntax tree for generated wrapper classes."""

from dataclasses import dataclass, field
from enum import Flag, auto
from typing import Any


class MemberAttributes(Flag):
    """Access and scope modifiers of a type member."""

    NONE = 0
    PUBLIC = auto()
    STATIC = auto()
    FINAL = auto()


# Types


@dataclass
class TypeRef:
    """Reference to a type.

    Primitive types use their CLR name (``System.Double``) and are mapped to
    the language keyword by the backend; other types are referenced by their
    short name.
    """

    name: str

    def __str__(self) -> str:
        return self.name


# Expressions


@dataclass
class Expr:
    """Base for all expressions."""

    pass


@dataclass
class Primitive(Expr):
    """Literal value: None, str, bool, int, float or a numpy scalar."""

    value: Any


@dataclass
class Cast(Expr):
    """Explicit conversion of an expression to a type."""

    target_type: TypeRef
    expr: Expr


@dataclass
class DefaultValue(Expr):
    """The default value of a type."""

    type: TypeRef


@dataclass
class TypeOf(Expr):
    """Runtime type object of a type."""

    type: TypeRef


@dataclass
class TypeRefExpr(Expr):
    """A type used as the target of a static member access."""

    type: TypeRef


@dataclass
class This(Expr):
    """The current instance."""

    pass


@dataclass
class VariableRef(Expr):
    """Reference to a local, argument or unqualified member."""

    name: str


@dataclass
class FieldRef(Expr):
    """Field access on a target."""

    target: Expr
    name: str


@dataclass
class PropertyRef(Expr):
    """Property access on a target."""

    target: Expr
    name: str


@dataclass
class MethodInvoke(Expr):
    """Method call; an absent target calls an unqualified method."""

    target: Expr | None
    method: str
    args: list[Expr] = field(default_factory=list)


@dataclass
class ObjectCreate(Expr):
    """Constructor call (e.g., new Point(1D, 2D))."""

    type: TypeRef
    args: list[Expr] = field(default_factory=list)


# Statements


@dataclass
class Stmt:
    """Base for all statements."""

    pass


@dataclass
class VariableDecl(Stmt):
    """Local variable declaration."""

    type: TypeRef
    name: str
    init: Expr | None = None


@dataclass
class Assign(Stmt):
    """Assignment."""

    target: Expr
    value: Expr


@dataclass
class ExprStmt(Stmt):
    """Expression as statement."""

    expr: Expr


@dataclass
class Return(Stmt):
    """Return statement."""

    value: Expr | None = None


@dataclass
class Snippet(Stmt):
    """Verbatim line; an empty snippet renders as a blank line."""

    text: str = ""


# Members


@dataclass
class Member:
    """Base for all type members."""

    name: str
    attributes: MemberAttributes = MemberAttributes.PUBLIC
    comments: list[str] = field(default_factory=list)


@dataclass
class Field(Member):
    """Field declaration with an optional initializer."""

    type: TypeRef = field(default_factory=lambda: TypeRef("System.Object"))
    init: Expr | None = None


@dataclass
class Parameter:
    """Method or constructor parameter."""

    name: str
    type: TypeRef


@dataclass
class Constructor(Member):
    """Instance constructor; its name is the declaring class name."""

    params: list[Parameter] = field(default_factory=list)
    body: list[Stmt] = field(default_factory=list)


@dataclass
class Property(Member):
    """Property with get and set accessors."""

    type: TypeRef = field(default_factory=lambda: TypeRef("System.Object"))
    getter: list[Stmt] = field(default_factory=list)
    setter: list[Stmt] = field(default_factory=list)


# Types and namespaces


@dataclass
class ClassDecl:
    """Class declaration."""

    name: str
    base_types: list[TypeRef] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)


@dataclass
class Namespace:
    """Namespace; the unnamed one only carries imports."""

    name: str
    imports: list[str] = field(default_factory=list)
    types: list[ClassDecl] = field(default_factory=list)


@dataclass
class CompileUnit:
    """A complete generated source file."""

    namespaces: list[Namespace] = field(default_factory=list)
