# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shape classification of source types into target type expressions.

Rules are tried in a fixed order and the first match wins:

1. generic parameter -> its own name
2. enum -> the enum declaration's name
3. primitive -> fixed primitive name
4. dictionary-like -> ``{ [key: K]: V }``
5. sequence-like -> ``Array<T>``
6. anything else -> a registered nominal declaration

Dictionaries are tested before sequences because map abstractions are
enumerable too, and both are tested before the nominal fallback so that a
collection used as a member type never gets a declaration of its own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typebridge.generator.context import DeclarationContext
from typebridge.metadata.provider import MetadataProvider, TypeLike
from typebridge.model.descriptors import TypeCode

if TYPE_CHECKING:
    from typebridge.generator.graph import TypeGraphBuilder

# ###############
# Public Interface
# ###############

ANY = "any"

DICTIONARY_DEFINITIONS: frozenset[str] = frozenset(
    {
        "System.Collections.Generic.IDictionary`2",
        "System.Collections.Generic.IReadOnlyDictionary`2",
    }
)
SEQUENCE_DEFINITION = "System.Collections.Generic.IEnumerable`1"
UNTYPED_SEQUENCE = "System.Collections.IEnumerable"

_PRIMITIVE_EXPRESSIONS: dict[TypeCode, str] = {
    TypeCode.BOOLEAN: "boolean",
    TypeCode.SBYTE: "number",
    TypeCode.BYTE: "number",
    TypeCode.INT16: "number",
    TypeCode.UINT16: "number",
    TypeCode.INT32: "number",
    TypeCode.UINT32: "number",
    TypeCode.INT64: "number",
    TypeCode.UINT64: "number",
    TypeCode.SINGLE: "number",
    TypeCode.DOUBLE: "number",
    TypeCode.DECIMAL: "number",
    TypeCode.CHAR: "string",
    TypeCode.STRING: "string",
    TypeCode.GUID: "string",
    TypeCode.VOID: "void",
}


def primitive_expression(code: TypeCode, *, use_date_for_datetime: bool = False) -> str:
    """Map a primitive type code to its target primitive name."""
    if code is TypeCode.DATETIME:
        return "Date" if use_date_for_datetime else "string"
    return _PRIMITIVE_EXPRESSIONS.get(code, ANY)


class ShapeClassifier:
    """Turns source types into target type expressions.

    Args:
        provider: Metadata source.
        builder: Graph builder used to register enums and nominal types.
    """

    def __init__(self, provider: MetadataProvider, builder: TypeGraphBuilder) -> None:
        self._provider = provider
        self._builder = builder

    def is_primitive(self, t: TypeLike) -> bool:
        """True if *t* maps to a fixed target primitive."""
        provider = self._provider
        return not provider.is_generic_parameter(t) and provider.type_code(t) is not TypeCode.OBJECT

    def type_expression(self, t: TypeLike, context: DeclarationContext) -> str:
        """Return the target type expression for *t*, registering as needed."""
        provider = self._provider
        if provider.is_generic_parameter(t):
            return provider.name(t)

        if provider.is_enum(t):
            enum_decl = self._builder.register_enum(t, context)
            return enum_decl.target_name if enum_decl is not None else ANY

        if self.is_primitive(t):
            return primitive_expression(
                provider.type_code(t),
                use_date_for_datetime=context.options.use_date_for_datetime,
            )

        dictionary = self._dictionary_expression(t, context)
        if dictionary is not None:
            return dictionary

        sequence = self._sequence_expression(t, context)
        if sequence is not None:
            return sequence

        type_decl = self._builder.register_type(t, context)
        if type_decl is None:
            return ANY
        if provider.is_generic(t):
            arguments = ", ".join(self.type_expression(a, context) for a in provider.generic_arguments(t))
            return f"{type_decl.target_name}<{arguments}>"
        return type_decl.target_name

    # ################
    # Implementation
    # ################

    def _dictionary_expression(self, t: TypeLike, context: DeclarationContext) -> str | None:
        provider = self._provider
        for candidate in [*provider.interfaces(t), t]:
            if not provider.is_constructed_generic(candidate):
                continue
            if provider.full_name(provider.generic_definition(candidate)) not in DICTIONARY_DEFINITIONS:
                continue
            key_type, value_type = provider.generic_arguments(candidate)
            key = self.type_expression(key_type, context)
            value = self.type_expression(value_type, context)
            return f"{{ [key: {key}]: {value} }}"
        return None

    def _sequence_expression(self, t: TypeLike, context: DeclarationContext) -> str | None:
        provider = self._provider
        candidates = [t, *provider.interfaces(t)]
        for candidate in candidates:
            if not provider.is_constructed_generic(candidate):
                continue
            if provider.full_name(provider.generic_definition(candidate)) == SEQUENCE_DEFINITION:
                (element,) = provider.generic_arguments(candidate)
                return f"Array<{self.type_expression(element, context)}>"
        if any(provider.full_name(c) == UNTYPED_SEQUENCE for c in candidates):
            return f"Array<{ANY}>"
        return None
