# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of a populated declaration context to TypeScript source.

The default jinja2 template ships with the package and is read once per
process. Callers may pass their own template text; it receives ``enums``
and ``types`` (the context's ordered declaration lists) plus the
``member_text`` and ``parameter_list`` filters.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import cache
from importlib import resources

from jinja2 import Environment

from typebridge.generator.context import DeclarationContext
from typebridge.generator.graph import collect_declarations
from typebridge.generator.options import GeneratorOptions
from typebridge.metadata.provider import MetadataProvider, TypeLike
from typebridge.model.declarations import MemberDeclaration

# ###############
# Public Interface
# ###############


@cache
def default_template() -> str:
    """Return the text of the built-in declarations template."""
    return (
        resources.files("typebridge.generator")
        .joinpath("templates")
        .joinpath("declarations.ts.j2")
        .read_text(encoding="utf-8")
    )


def render_declarations(context: DeclarationContext, template: str | None = None) -> str:
    """Render every declaration of *context* with a jinja2 template.

    Args:
        context: A populated declaration context.
        template: Template text; the built-in template when omitted.

    Returns:
        The rendered source text.
    """
    source = _environment().from_string(template if template is not None else default_template())
    return source.render(enums=context.enums, types=context.types)


def generate_typescript(
    roots: Iterable[TypeLike],
    provider: MetadataProvider,
    options: GeneratorOptions | None = None,
    template: str | None = None,
) -> str:
    """Collect declarations reachable from *roots* and render them.

    Args:
        roots: Types to start from, in order.
        provider: Metadata source for the types.
        options: Generation policies; defaults apply when omitted.
        template: Optional template text replacing the built-in one.

    Returns:
        TypeScript source declaring every discovered type and enum.
    """
    return render_declarations(collect_declarations(roots, provider, options), template)


# ################
# Implementation
# ################


def _environment() -> Environment:
    env = Environment(
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["member_text"] = _member_text
    env.filters["parameter_list"] = _parameter_list
    return env


def _member_text(member: MemberDeclaration) -> str:
    optional = "?" if member.is_nullable else ""
    return f"{member.name}{optional}: {member.type_expression}"


def _parameter_list(parameters: list[MemberDeclaration]) -> str:
    return ", ".join(_member_text(p) for p in parameters)
