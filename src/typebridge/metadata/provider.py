# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Read-only metadata provider contract consumed by the generator.

The generator never inspects source types directly. Every question about a
type (its kind, base, interfaces, generic shape and members) goes through a
:class:`MetadataProvider`, which answers over opaque, hashable handles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from typebridge.model.descriptors import TypeCode

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class TypeHandle:
    """Identity of a source type.

    A non-empty ``arguments`` tuple marks a constructed generic instance
    (``Box`1[Int32]``); a generic definition has no arguments.
    """

    name: str
    arguments: tuple[TypeLike, ...] = ()


@dataclass(frozen=True)
class GenericParameterHandle:
    """Identity of an open generic parameter of a type or method."""

    owner: str
    name: str
    position: int


TypeLike = TypeHandle | GenericParameterHandle


@dataclass(frozen=True)
class MemberInfo:
    """A field or property as reported by the provider."""

    name: str
    type: TypeLike
    declaring_type: TypeHandle
    is_property: bool = False
    attributes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ParameterInfo:
    """A method parameter as reported by the provider."""

    name: str
    type: TypeLike


@dataclass(frozen=True)
class MethodInfo:
    """A method signature as reported by the provider."""

    name: str
    declaring_type: TypeHandle
    generic_parameters: tuple[GenericParameterHandle, ...] = ()
    parameters: tuple[ParameterInfo, ...] = ()
    return_type: TypeLike | None = None
    is_special_name: bool = False
    attributes: tuple[str, ...] = ()


class MetadataProvider(Protocol):
    """Capabilities the generator needs from a source type model.

    All methods are pure queries. Answers for constructed generic instances
    have the instance's type arguments substituted for the definition's
    generic parameters.
    """

    def is_generic_parameter(self, t: TypeLike) -> bool: ...

    def is_enum(self, t: TypeLike) -> bool: ...

    def is_interface(self, t: TypeLike) -> bool: ...

    def is_class(self, t: TypeLike) -> bool: ...

    def is_abstract(self, t: TypeLike) -> bool: ...

    def type_code(self, t: TypeLike) -> TypeCode: ...

    def name(self, t: TypeLike) -> str:
        """Raw short name including any generic arity marker (``Box`1``)."""
        ...

    def full_name(self, t: TypeLike) -> str: ...

    def display_name(self, t: TypeLike) -> str:
        """Full display form matched by skip patterns (``Demo.Box`1[T]``)."""
        ...

    def is_root_type(self, t: TypeLike) -> bool: ...

    def base_type(self, t: TypeLike) -> TypeLike | None: ...

    def interfaces(self, t: TypeLike) -> list[TypeLike]:
        """Every interface the type exposes, including inherited ones."""
        ...

    def is_generic(self, t: TypeLike) -> bool: ...

    def is_constructed_generic(self, t: TypeLike) -> bool: ...

    def generic_arguments(self, t: TypeLike) -> list[TypeLike]:
        """Type arguments of an instance, or parameters of a definition."""
        ...

    def generic_definition(self, t: TypeLike) -> TypeLike: ...

    def generic_constraints(self, p: TypeLike) -> list[TypeLike]: ...

    def requires_default_constructor(self, p: TypeLike) -> bool: ...

    def nullable_underlying(self, t: TypeLike) -> TypeLike | None: ...

    def enum_members(self, t: TypeLike) -> list[tuple[str, int]]: ...

    def fields(self, t: TypeLike) -> list[MemberInfo]: ...

    def properties(self, t: TypeLike) -> list[MemberInfo]: ...

    def methods(self, t: TypeLike) -> list[MethodInfo]: ...
