# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""TypeBridge: translate nominal type graphs into TypeScript declarations."""

from typebridge.generator import (
    DeclarationContext,
    GeneratorOptions,
    collect_declarations,
    generate_typescript,
    render_declarations,
)
from typebridge.metadata import DescriptorError, TypeCatalog, load_descriptors

__all__ = [
    "DeclarationContext",
    "DescriptorError",
    "GeneratorOptions",
    "TypeCatalog",
    "collect_declarations",
    "generate_typescript",
    "load_descriptors",
    "render_declarations",
]
