"""Configuration of the rendering stage."""

from dataclasses import dataclass
from enum import Enum, auto

# Extension of compiled pixel shader resources
DEFAULT_SHADER_EXTENSION = "ps"


class OutputLanguage(Enum):
    """Supported output languages."""

    CSHARP = auto()
    VISUAL_BASIC = auto()

    @classmethod
    def from_name(cls, name: str) -> "OutputLanguage":
        """Look a language up by enum name or file extension (``cs``, ``vb``).

        Raises:
            ValueError: If the name matches no language
        """
        aliases = {
            "cs": cls.CSHARP,
            "csharp": cls.CSHARP,
            "c#": cls.CSHARP,
            "vb": cls.VISUAL_BASIC,
            "visual_basic": cls.VISUAL_BASIC,
            "visualbasic": cls.VISUAL_BASIC,
        }
        key = name.strip().lower()
        if key not in aliases:
            raise ValueError(f"Unsupported output language: {name}")
        return aliases[key]


@dataclass(frozen=True)
class RenderOptions:
    """Formatting options for generated source.

    Attributes:
        indent_using_tabs: Indent with one tab per level
        indent_spaces: Spaces per indentation level when not using tabs
    """

    indent_using_tabs: bool = False
    indent_spaces: int = 4

    def __post_init__(self) -> None:
        if self.indent_spaces < 0:
            raise ValueError(
                f"indent_spaces must be non-negative, got {self.indent_spaces}"
            )

    @property
    def indent_string(self) -> str:
        if self.indent_using_tabs:
            return "\t"
        return " " * self.indent_spaces
