"""Output language backends and their registry."""

from loguru import logger

from effectgen.codegen.backends.base import Backend
from effectgen.codegen.backends.csharp import CSharpBackend
from effectgen.codegen.backends.visualbasic import VisualBasicBackend
from effectgen.codegen.options import OutputLanguage, RenderOptions

# Registry of output languages to their backend implementations
_BACKEND_REGISTRY: dict[OutputLanguage, type[Backend]] = {
    OutputLanguage.CSHARP: CSharpBackend,
    OutputLanguage.VISUAL_BASIC: VisualBasicBackend,
}


def create_backend(
    language: OutputLanguage = OutputLanguage.CSHARP,
    options: RenderOptions | None = None,
) -> Backend:
    """Create a backend for the given output language.

    Args:
        language: The language to write
        options: Formatting options, defaults to four-space indentation

    Returns:
        A backend instance

    Raises:
        ValueError: If the language is not supported
    """
    if language not in _BACKEND_REGISTRY:
        raise ValueError(f"Unsupported output language: {language}")

    backend_class = _BACKEND_REGISTRY[language]
    logger.debug(f"Using {backend_class.__name__} for {language.name}")
    return backend_class(options)


def register_backend(language: OutputLanguage, backend_class: type[Backend]) -> None:
    """Register a backend implementation for an output language.

    Args:
        language: The language to register
        backend_class: The backend class to associate with the language
    """
    _BACKEND_REGISTRY[language] = backend_class


__all__ = [
    "Backend",
    "CSharpBackend",
    "VisualBasicBackend",
    "create_backend",
    "register_backend",
]
