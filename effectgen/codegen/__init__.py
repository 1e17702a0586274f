"""
Code generation for shader effect wrapper classes.

This module provides the top-level interface: a shader model goes in, the
source of one class deriving from ``ShaderEffect`` comes out.
"""

from loguru import logger

from effectgen.codegen.assembly import build_compile_unit
from effectgen.codegen.backends import create_backend
from effectgen.codegen.options import (
    DEFAULT_SHADER_EXTENSION,
    OutputLanguage,
    RenderOptions,
)
from effectgen.model import ShaderModel


def get_source_text(
    model: ShaderModel,
    include_external_constructor: bool = False,
    language: OutputLanguage = OutputLanguage.CSHARP,
    options: RenderOptions | None = None,
    shader_extension: str = DEFAULT_SHADER_EXTENSION,
) -> str:
    """Generate the wrapper class source for a shader model.

    Args:
        model: The shader model
        include_external_constructor: Generate a constructor taking a loaded
            ``PixelShader`` instead of one loading it from resources
        language: Output language
        options: Formatting options
        shader_extension: File extension of the compiled shader resource

    Returns:
        Source text of one complete class

    Raises:
        RenderError: If the model's names cannot be written in ``language``

    Examples:
        # C# with the resource-loading constructor
        code = get_source_text(model)

        # Visual Basic, indented with tabs
        code = get_source_text(
            model,
            language=OutputLanguage.VISUAL_BASIC,
            options=RenderOptions(indent_using_tabs=True),
        )
    """
    logger.debug(
        f"Generating {model.generated_class_name} as {language.name}, "
        f"external constructor: {include_external_constructor}"
    )
    unit = build_compile_unit(model, include_external_constructor, shader_extension)
    backend = create_backend(language, options)
    return backend.render(unit)


__all__ = ["get_source_text"]
