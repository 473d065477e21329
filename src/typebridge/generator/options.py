# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generation policies.

Every strategy is optional. When a strategy is absent the generator falls
back to the documented default of the corresponding field.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from typebridge.metadata.provider import MemberInfo, MethodInfo, TypeLike
from typebridge.model.declarations import ConstructorDeclaration, MemberDeclaration, MethodDeclaration

# ###############
# Public Interface
# ###############


@dataclass
class GeneratorOptions:
    """Configuration record for one generation call.

    Attributes:
        skip_type_patterns: Regular expressions searched in a type's display
            form. Matching types are never declared and resolve to ``any``.
        use_interface_for_classes: ``(type) -> bool``. True emits a class as
            an interface. Default: classes stay classes.
        default_base_type: ``(type) -> str | None``. Base expression used when
            a class's real base is excluded. Default: no base.
        ctor_generator: ``(type) -> ConstructorDeclaration | None`` for class
            emission. Default: no constructor.
        should_generate_member: ``(member, draft) -> bool``. Default: every
            field and property is emitted.
        should_generate_method: ``(method, draft) -> bool``. Default: no
            methods are emitted.
        member_renamer: ``(member or method) -> str``. Default: source name.
        use_decorators: ``(member or method) -> list[str]``. Default: none.
        type_renamer: ``(raw name) -> str`` applied before collision
            resolution. Default: unchanged.
        use_date_for_datetime: Map date-like primitives to ``Date`` instead
            of ``string``.
    """

    skip_type_patterns: list[str] = field(default_factory=list)
    use_interface_for_classes: Callable[[TypeLike], bool] | None = None
    default_base_type: Callable[[TypeLike], str | None] | None = None
    ctor_generator: Callable[[TypeLike], ConstructorDeclaration | None] | None = None
    should_generate_member: Callable[[MemberInfo, MemberDeclaration], bool] | None = None
    should_generate_method: Callable[[MethodInfo, MethodDeclaration], bool] | None = None
    member_renamer: Callable[[MemberInfo | MethodInfo], str] | None = None
    use_decorators: Callable[[MemberInfo | MethodInfo], list[str]] | None = None
    type_renamer: Callable[[str], str] | None = None
    use_date_for_datetime: bool = False
