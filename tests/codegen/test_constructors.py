"""Tests for the generated constructor."""

import pytest

from effectgen.codegen.assembly import build_compile_unit
from effectgen.codegen.backends import CSharpBackend, VisualBasicBackend
from effectgen.codegen.constructors import (
    ConstructorKind,
    build_constructor,
    shader_resource_uri,
    update_order,
)
from effectgen.codegen.ir import (
    Assign,
    ExprStmt,
    Parameter,
    PropertyRef,
    Snippet,
    This,
    TypeRef,
    VariableDecl,
    VariableRef,
)
from tests.utils import update_calls


@pytest.mark.parametrize(
    "include_external,expected",
    [(True, ConstructorKind.EXTERNAL_INSTANCE), (False, ConstructorKind.SELF_LOADING)],
)
def test_select_kind(include_external, expected):
    assert ConstructorKind.select(include_external) is expected


def test_shader_resource_uri(blur_model):
    assert shader_resource_uri(blur_model) == (
        "/Effects.Generated;component/BlurEffect.ps"
    )
    assert shader_resource_uri(blur_model, "fx") == (
        "/Effects.Generated;component/BlurEffect.fx"
    )


def test_update_order(mixed_model):
    assert update_order(mixed_model) == [
        "Input",
        "Center",
        "Texture2",
        "Tint",
        "Amplitude",
    ]


class TestExternalInstance:
    def test_takes_shader_parameter(self, blur_model):
        ctor = build_constructor(blur_model, include_external_constructor=True)
        assert ctor.name == "BlurEffect"
        assert ctor.params == [Parameter("shader", TypeRef("PixelShader"))]
        assert ctor.body[0] == Assign(
            PropertyRef(This(), "PixelShader"), VariableRef("shader")
        )

    def test_does_not_load_resources(self, blur_model):
        ctor = build_constructor(blur_model, include_external_constructor=True)
        assert not any(isinstance(stmt, VariableDecl) for stmt in ctor.body)


class TestSelfLoading:
    def test_parameterless(self, blur_model):
        ctor = build_constructor(blur_model, include_external_constructor=False)
        assert ctor.params == []

    def test_loads_from_resource(self, blur_model):
        ctor = build_constructor(blur_model, include_external_constructor=False)
        declaration, uri_assignment, shader_assignment = ctor.body[:3]
        assert declaration.name == "pixelShader"
        assert declaration.type == TypeRef("PixelShader")
        assert uri_assignment.target == PropertyRef(
            VariableRef("pixelShader"), "UriSource"
        )
        assert shader_assignment == Assign(
            PropertyRef(This(), "PixelShader"), VariableRef("pixelShader")
        )

    def test_rendered_uri(self, blur_model):
        ctor = build_constructor(blur_model, include_external_constructor=False)
        text = CSharpBackend().emit_expr(ctor.body[1].value)
        assert text == (
            'new Uri("/Effects.Generated;component/BlurEffect.ps", UriKind.Relative)'
        )


@pytest.mark.parametrize("include_external", [True, False])
def test_update_calls_follow_blank_line(mixed_model, include_external):
    ctor = build_constructor(mixed_model, include_external)
    blank = next(i for i, stmt in enumerate(ctor.body) if isinstance(stmt, Snippet))
    updates = ctor.body[blank + 1 :]
    assert all(isinstance(stmt, ExprStmt) for stmt in updates)
    assert [stmt.expr.args[0].name for stmt in updates] == [
        "InputProperty",
        "CenterProperty",
        "Texture2Property",
        "TintProperty",
        "AmplitudeProperty",
    ]


def test_empty_model_updates_only_input(empty_model):
    ctor = build_constructor(empty_model, include_external_constructor=True)
    updates = [stmt for stmt in ctor.body if isinstance(stmt, ExprStmt)]
    assert len(updates) == 1


@pytest.mark.parametrize("backend_class", [CSharpBackend, VisualBasicBackend])
def test_rendered_update_order(mixed_model, backend_class):
    code = backend_class().render(build_compile_unit(mixed_model))
    assert update_calls(code) == update_order(mixed_model)
