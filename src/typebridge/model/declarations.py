# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declaration records produced by the type graph walk.

Records reference each other only through target type expression strings
(``Array<Foo>``, ``Bar<Baz>``), never through object references.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############


@dataclass
class MemberDeclaration:
    """A field, property or method parameter in the target model.

    Attributes:
        name: Target member name.
        type_expression: Resolved target type expression.
        is_nullable: True when the source type was a nullable value wrapper.
        decorators: Decorator texts supplied by policy, rendered in order.
    """

    name: str
    type_expression: str
    is_nullable: bool = False
    decorators: list[str] = field(default_factory=list)


@dataclass
class MethodDeclaration:
    """A method signature in the target model.

    Attributes:
        signature: Method name plus an optional generic parameter clause.
        parameters: Ordered parameter declarations.
        return_type_expression: Resolved return type expression.
        decorators: Decorator texts supplied by policy.
    """

    signature: str
    parameters: list[MemberDeclaration] = field(default_factory=list)
    return_type_expression: str = "void"
    decorators: list[str] = field(default_factory=list)


@dataclass
class ConstructorDeclaration:
    """Constructor metadata for class emission, supplied by a ctor policy."""

    parameters: list[MemberDeclaration] = field(default_factory=list)
    body: list[str] = field(default_factory=list)
    decorators: list[str] = field(default_factory=list)


@dataclass(eq=False)
class TypeDeclaration:
    """One nominal (non-enum) target declaration.

    Instances compare by identity; the declaration context holds exactly one
    per original type identity.

    Attributes:
        original: Handle of the source type (a generic definition for
            generic types).
        target_name: Final, collision-free target name.
        header: Pre-rendered declaration header, e.g.
            ``export class Box<T> extends Base implements IThing``.
        is_interface: True when emitted as an interface.
        members: Fields then properties, in provider order.
        methods: Methods in provider order.
        constructor: Optional constructor metadata (class emission only).
    """

    original: Hashable
    target_name: str
    header: str = ""
    is_interface: bool = False
    members: list[MemberDeclaration] = field(default_factory=list)
    methods: list[MethodDeclaration] = field(default_factory=list)
    constructor: ConstructorDeclaration | None = None


@dataclass(frozen=True)
class EnumField:
    """A named enum member with its integral value as a decimal string."""

    name: str
    value: str


@dataclass(eq=False)
class EnumDeclaration:
    """One enum declaration in the target model."""

    original: Hashable
    target_name: str
    fields: list[EnumField] = field(default_factory=list)
