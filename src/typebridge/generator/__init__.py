# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declaration generator: type graph walk, shape classification and rendering."""

from typebridge.generator.context import DeclarationContext
from typebridge.generator.graph import TypeGraphBuilder, collect_declarations
from typebridge.generator.naming import NameResolver, strip_generic_arity
from typebridge.generator.options import GeneratorOptions
from typebridge.generator.render import default_template, generate_typescript, render_declarations
from typebridge.generator.shapes import ANY, ShapeClassifier, primitive_expression

__all__ = [
    "ANY",
    "DeclarationContext",
    "GeneratorOptions",
    "NameResolver",
    "ShapeClassifier",
    "TypeGraphBuilder",
    "collect_declarations",
    "default_template",
    "generate_typescript",
    "primitive_expression",
    "render_declarations",
    "strip_generic_arity",
]
