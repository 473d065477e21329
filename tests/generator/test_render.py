# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for rendering declarations to TypeScript."""

from typebridge.generator.context import DeclarationContext
from typebridge.generator.options import GeneratorOptions
from typebridge.generator.render import default_template, generate_typescript, render_declarations
from typebridge.metadata.catalog import TypeCatalog
from typebridge.metadata.loader import parse_descriptors
from typebridge.model.declarations import ConstructorDeclaration, MemberDeclaration

_SOURCE = """\
types:
  - name: Demo.Color
    kind: enum
    members: [{name: Red, value: 0}, {name: Green, value: 1}]
  - name: Demo.Point
    fields: [{name: x, type: int}]
    properties: [{name: color, type: Demo.Color}, {name: z, type: "int?"}]
  - name: Demo.IShape
    kind: interface
    properties: [{name: Area, type: double, attributes: [Computed]}]
    methods:
      - {name: Scale, parameters: [{name: factor, type: double}]}
      - {name: Describe, return_type: string}
  - name: Demo.Circle
    interfaces: [Demo.IShape]
    methods:
      - {name: Scale, parameters: [{name: factor, type: double}, {name: origin, type: Demo.Point}]}
      - {name: Describe, return_type: string}
"""


def _generate(*roots: str, options: GeneratorOptions | None = None) -> str:
    """Render TypeScript for the named roots of the shared descriptor document."""
    catalog = TypeCatalog(parse_descriptors(_SOURCE))
    return generate_typescript([catalog.resolve(r) for r in roots], catalog, options)


class TestRender:
    def test_enum_and_class(self) -> None:
        assert _generate("Demo.Point") == (
            "export enum Color {\n"
            "    Red = 0,\n"
            "    Green = 1,\n"
            "}\n"
            "\n"
            "export class Point {\n"
            "    x: number;\n"
            "    color: Color;\n"
            "    z?: number;\n"
            "}\n"
        )

    def test_empty_context_renders_nothing(self) -> None:
        assert render_declarations(DeclarationContext()) == ""

    def test_interface_methods_are_signatures(self) -> None:
        options = GeneratorOptions(should_generate_method=lambda method, draft: True)
        output = _generate("Demo.IShape", options=options)
        assert "export interface IShape {\n" in output
        assert "    Scale(factor: number): void;\n" in output
        assert "    Describe(): string;\n" in output

    def test_class_methods_get_bodies(self) -> None:
        options = GeneratorOptions(should_generate_method=lambda method, draft: True)
        output = _generate("Demo.Circle", options=options)
        assert "export class Circle implements IShape {\n" in output
        assert "    Scale(factor: number, origin: Point): void {}\n" in output
        assert '    Describe(): string {\n        throw new Error("Not implemented");\n    }\n' in output

    def test_types_separated_by_blank_line(self) -> None:
        output = _generate("Demo.Circle")
        assert output == (
            "export interface IShape {\n    Area: number;\n}\n\nexport class Circle implements IShape {\n}\n"
        )

    def test_decorators(self) -> None:
        options = GeneratorOptions(use_decorators=lambda member: [f"{a}()" for a in member.attributes])
        output = _generate("Demo.IShape", options=options)
        assert "    @Computed()\n    Area: number;\n" in output

    def test_constructor(self) -> None:
        options = GeneratorOptions(
            ctor_generator=lambda t: ConstructorDeclaration(
                parameters=[MemberDeclaration("x", "number")],
                body=["this.x = x;"],
            )
        )
        output = _generate("Demo.Point", options=options)
        assert "    constructor(x: number) {\n        this.x = x;\n    }\n" in output

    def test_custom_template(self) -> None:
        catalog = TypeCatalog(parse_descriptors(_SOURCE))
        output = generate_typescript(
            [catalog.resolve("Demo.Point")],
            catalog,
            template="{% for t in types %}{{ t.target_name }}:{{ t.members | length }}{% endfor %}",
        )
        assert output == "Point:3"

    def test_default_template_is_packaged(self) -> None:
        assert "export enum" in default_template()
