"""Fixtures and configuration for pytest."""

import numpy as np
import pytest

from effectgen import (
    Color,
    ConstantRegister,
    Point,
    RegisterType,
    ShaderModel,
    TargetFramework,
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "gold: full-output comparison test")


@pytest.fixture
def blur_model() -> ShaderModel:
    """A single float register with a default, the smallest useful effect."""
    return ShaderModel(
        generated_namespace="Effects.Generated",
        generated_class_name="BlurEffect",
        registers=(
            ConstantRegister(
                name="Radius",
                register_type=RegisterType.FLOAT,
                register_number=1,
                default_value=np.float32(5.0),
            ),
        ),
    )


@pytest.fixture
def empty_model() -> ShaderModel:
    """An effect with no registers besides the implicit Input sampler."""
    return ShaderModel(
        generated_namespace="Effects",
        generated_class_name="PassThrough",
    )


@pytest.fixture
def mixed_model() -> ShaderModel:
    """Value registers of several kinds interleaved with a sampler."""
    return ShaderModel(
        generated_namespace="Shaders",
        generated_class_name="Ripple",
        description="Concentric ripples.",
        target_framework=TargetFramework.WPF,
        registers=(
            ConstantRegister("Center", RegisterType.POINT, 1, Point(0.5, 0.5)),
            ConstantRegister("Texture2", RegisterType.BRUSH, 2),
            ConstantRegister(
                "Tint", RegisterType.COLOR, 3, Color(255, 0, 128, 255), "Tint color."
            ),
            ConstantRegister("Amplitude", RegisterType.DOUBLE, 4),
        ),
    )
