# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-call registry of discovered declarations."""

from __future__ import annotations

import re
from collections.abc import Hashable

from typebridge.generator.options import GeneratorOptions
from typebridge.model.declarations import EnumDeclaration, TypeDeclaration

# ###############
# Public Interface
# ###############


class DeclarationContext:
    """Holds every declaration discovered during one generation call.

    A type declaration is *reserved* as soon as its identity is first seen,
    which is what breaks reference cycles, and *committed* to the ordered
    output once its header is complete. Base types therefore precede the
    types deriving from them in :attr:`types`.

    Args:
        options: Policies in effect for this call.
    """

    def __init__(self, options: GeneratorOptions | None = None) -> None:
        self.options = options if options is not None else GeneratorOptions()
        self.types: list[TypeDeclaration] = []
        self.enums: list[EnumDeclaration] = []
        self._types_by_identity: dict[Hashable, TypeDeclaration] = {}
        self._enums_by_identity: dict[Hashable, EnumDeclaration] = {}
        self._names: set[str] = set()
        self._skip_patterns = [re.compile(p) for p in self.options.skip_type_patterns]

    def find_type(self, identity: Hashable) -> TypeDeclaration | None:
        """Return the declaration reserved for *identity*, if any."""
        return self._types_by_identity.get(identity)

    def find_enum(self, identity: Hashable) -> EnumDeclaration | None:
        """Return the enum declaration registered for *identity*, if any."""
        return self._enums_by_identity.get(identity)

    def reserve_type(self, declaration: TypeDeclaration) -> None:
        """Bind a declaration to its identity and name before it is populated."""
        self._types_by_identity[declaration.original] = declaration
        self._names.add(declaration.target_name)

    def commit_type(self, declaration: TypeDeclaration) -> None:
        """Append a reserved declaration to the ordered output."""
        self.types.append(declaration)

    def add_enum(self, declaration: EnumDeclaration) -> None:
        """Register and commit an enum declaration."""
        self._enums_by_identity[declaration.original] = declaration
        self._names.add(declaration.target_name)
        self.enums.append(declaration)

    def is_name_taken(self, name: str) -> bool:
        """True if any registered declaration already uses *name*."""
        return name in self._names

    def is_skipped(self, display_name: str | None) -> bool:
        """True if *display_name* matches any configured skip pattern."""
        return display_name is not None and any(p.search(display_name) for p in self._skip_patterns)
