"""Backend abstraction for serializing the syntax tree.

A Backend encapsulates everything needed to write a compile unit in one
output language:
- Syntax of every tree node (emission)
- Mapping of primitive CLR types to language keywords
- Reserved words that identifiers must not collide with
- Textual fixups applied to the emitted source
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Iterator

import numpy as np
from loguru import logger

from effectgen.codegen.errors import RenderError
from effectgen.codegen.ir import (
    ClassDecl,
    CompileUnit,
    Constructor,
    Member,
    TypeRef,
    VariableDecl,
)
from effectgen.codegen.options import RenderOptions

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Lines of the header marking the file as generated
AUTO_GENERATED_HEADER = [
    "------------------------------------------------------------------------------",
    " <auto-generated>",
    "     This code was generated by a tool.",
    "",
    "     Changes to this file may cause incorrect behavior and will be lost if",
    "     the code is regenerated.",
    " </auto-generated>",
    "------------------------------------------------------------------------------",
]


def format_real(value: np.floating) -> str:
    """Shortest text that parses back to exactly ``value`` at its own width.

    Whole numbers carry no fraction (``5``); very large or very small
    magnitudes use an exponent (``1E+30``).
    """
    magnitude = abs(float(value))
    if magnitude != 0.0 and (magnitude >= 1e15 or magnitude < 1e-5):
        text = np.format_float_scientific(value, unique=True, trim="-", exp_digits=2)
        return text.upper()
    return np.format_float_positional(value, unique=True, trim="-")


class Backend(ABC):
    """Base class for all output language backends."""

    name: str
    file_extension: str
    keywords: frozenset[str] = frozenset()
    case_sensitive: bool = True
    primitive_types: dict[str, str] = {}

    def __init__(self, options: RenderOptions | None = None):
        self.options = options or RenderOptions()

    # --- Entry point ---

    def render(self, unit: CompileUnit) -> str:
        """Serialize a compile unit and apply the language's fixups.

        Raises:
            RenderError: If an identifier cannot be written in this language
        """
        self.validate(unit)
        text = self.emit(unit)
        logger.debug(f"Emitted {len(text)} characters of {self.name}")
        return self.post_process(text)

    @abstractmethod
    def emit(self, unit: CompileUnit) -> str:
        """Serialize the tree to source text without fixups."""
        ...

    @abstractmethod
    def post_process(self, text: str) -> str:
        """Apply the language's textual fixups. Must be idempotent."""
        ...

    # --- Identifiers ---

    def is_keyword(self, name: str) -> bool:
        if self.case_sensitive:
            return name in self.keywords
        return name.lower() in self.keywords

    def validate_identifier(self, name: str) -> None:
        if not IDENTIFIER_RE.match(name):
            raise RenderError(f"Invalid {self.name} identifier", name)
        if self.is_keyword(name):
            raise RenderError(f"Reserved word in {self.name}", name)

    def validate(self, unit: CompileUnit) -> None:
        """Check every declared name in the tree.

        Raises:
            RenderError: Naming the declaration that carries the bad name
        """
        for name, node in _declared_names(unit):
            try:
                self.validate_identifier(name)
            except RenderError as e:
                raise e.with_node(node) from e

    # --- Helpers shared by emitters ---

    def indent(self, level: int) -> str:
        return self.options.indent_string * level

    def type_name(self, type_ref: TypeRef) -> str:
        """Map a type reference to its name in this language."""
        return self.primitive_types.get(type_ref.name, type_ref.name)


def _declared_names(unit: CompileUnit) -> Iterator[tuple[str, object]]:
    for namespace in unit.namespaces:
        if namespace.name:
            for segment in namespace.name.split("."):
                yield segment, namespace
        for class_decl in namespace.types:
            yield from _class_names(class_decl)


def _class_names(class_decl: ClassDecl) -> Iterator[tuple[str, object]]:
    yield class_decl.name, class_decl
    for member in class_decl.members:
        yield from _member_names(member)


def _member_names(member: Member) -> Iterator[tuple[str, object]]:
    yield member.name, member
    match member:
        case Constructor(params=params, body=body):
            for param in params:
                yield param.name, param
            for stmt in body:
                if isinstance(stmt, VariableDecl):
                    yield stmt.name, stmt
