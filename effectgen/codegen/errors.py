"""
Exceptions raised while generating wrapper class source code.
"""

from typing import Any


class EffectGenError(Exception):
    """Base exception for code generation failures.

    The optional ``node`` is the tree node or identifier the error is about;
    its kind and name are appended to the message when available.

    Examples:
        >>> raise EffectGenError("Unsupported member", node)
        EffectGenError: Unsupported member (in Field 'Radius')
    """

    def __init__(self, message: str, node: Any | None = None):
        self.message = message
        self.node = node

        location_info = ""
        if node is not None:
            name = getattr(node, "name", None)
            if name is not None:
                location_info = f" (in {type(node).__name__} '{name}')"
            elif isinstance(node, str):
                location_info = f" (at '{node}')"

        super().__init__(f"{message}{location_info}")

    def with_node(self, node: Any) -> "EffectGenError":
        """Create an error of the same type and message about another node."""
        return type(self)(self.message, node)


class RenderError(EffectGenError):
    """Raised when a backend cannot serialize the tree.

    Typically an identifier that is not valid in the output language or
    collides with one of its reserved words. Identifiers are never renamed.
    """
