# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""In-memory metadata provider built from descriptor documents.

The catalog resolves every type reference of its descriptors once, at
construction time, and reports all problems together. Queries on
constructed generic instances substitute the instance's arguments for the
definition's generic parameters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from typebridge.metadata.loader import DescriptorError, builtin_descriptors
from typebridge.metadata.provider import (
    GenericParameterHandle,
    MemberInfo,
    MethodInfo,
    ParameterInfo,
    TypeHandle,
    TypeLike,
)
from typebridge.metadata.typeref import NULLABLE_TYPE_NAME, TypeReference, parse_type_reference
from typebridge.model.descriptors import (
    DescriptorSet,
    GenericParameterDef,
    MemberDef,
    TypeCode,
    TypeDef,
    TypeKind,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

ROOT_TYPE_NAME = "System.Object"

# Lowercase shorthands accepted in type references.
TYPE_ALIASES: dict[str, str] = {
    "object": "System.Object",
    "void": "System.Void",
    "bool": "System.Boolean",
    "char": "System.Char",
    "byte": "System.Byte",
    "short": "System.Int16",
    "int": "System.Int32",
    "long": "System.Int64",
    "float": "System.Single",
    "double": "System.Double",
    "decimal": "System.Decimal",
    "string": "System.String",
    "guid": "System.Guid",
    "datetime": "System.DateTime",
}


class UnknownTypeError(DescriptorError):
    """Raised when a requested type name is not defined in the catalog."""


class TypeCatalog:
    """A :class:`~typebridge.metadata.provider.MetadataProvider` over descriptors.

    Args:
        descriptors: User descriptors. Built-in system types are always added.

    Raises:
        DescriptorError: If any descriptor is inconsistent (duplicate names,
            undefined or malformed references, arity mismatches, misplaced
            enum members, interface/class misuse, inheritance cycles).
    """

    def __init__(self, descriptors: DescriptorSet | None = None) -> None:
        user_types = descriptors.types if descriptors is not None else []
        self._defs: dict[str, TypeDef] = {}
        self._short_names: dict[str, list[str]] = {}
        self._user_type_names: list[str] = []
        self._compiled: dict[str, _CompiledType] = {}
        self._parameters: dict[tuple[str, str], _CompiledParameter] = {}

        errors: list[str] = []
        builtin_names = set()
        for type_def in builtin_descriptors().types:
            self._add_definition(type_def, errors)
            builtin_names.add(type_def.name)
        for type_def in user_types:
            if type_def.name in builtin_names:
                errors.append(f"Type '{type_def.name}' redefines a built-in type")
                continue
            if self._add_definition(type_def, errors):
                self._user_type_names.append(type_def.name)

        for type_def in self._defs.values():
            errors.extend(_check_definition(type_def))
            self._compiled[type_def.name] = self._compile(type_def, errors)
        errors.extend(_inheritance_cycles(self._compiled))

        if errors:
            raise DescriptorError("Invalid descriptors:\n" + "\n".join(f"  {e}" for e in errors))
        logger.debug("Catalog ready with %d user types", len(self._user_type_names))

    @property
    def type_names(self) -> list[str]:
        """Full names of user-declared types, in document order."""
        return list(self._user_type_names)

    def resolve(self, reference: str) -> TypeHandle:
        """Resolve a type reference string to a handle.

        Raises:
            UnknownTypeError: If the reference names an undefined type.
            DescriptorError: If the reference is malformed.
        """
        errors: list[str] = []
        handle = self._resolve(parse_type_reference(reference), {}, errors, "lookup")
        if errors or not isinstance(handle, TypeHandle):
            raise UnknownTypeError(errors[0] if errors else f"'{reference}' is not a type")
        return handle

    # -- Classification ------------------------------------------------

    def is_generic_parameter(self, t: TypeLike) -> bool:
        return isinstance(t, GenericParameterHandle)

    def is_enum(self, t: TypeLike) -> bool:
        return self._kind(t) is TypeKind.ENUM

    def is_interface(self, t: TypeLike) -> bool:
        return self._kind(t) is TypeKind.INTERFACE

    def is_class(self, t: TypeLike) -> bool:
        return self._kind(t) is TypeKind.CLASS

    def is_abstract(self, t: TypeLike) -> bool:
        return isinstance(t, TypeHandle) and self._defs[t.name].abstract

    def type_code(self, t: TypeLike) -> TypeCode:
        if isinstance(t, GenericParameterHandle):
            return TypeCode.OBJECT
        return self._defs[t.name].type_code

    # -- Naming --------------------------------------------------------

    def name(self, t: TypeLike) -> str:
        if isinstance(t, GenericParameterHandle):
            return t.name
        return t.name.rsplit(".", 1)[-1]

    def full_name(self, t: TypeLike) -> str:
        return t.name

    def display_name(self, t: TypeLike) -> str:
        if isinstance(t, GenericParameterHandle) or not self.is_generic(t):
            return t.name
        arguments = ",".join(self.display_name(a) for a in self.generic_arguments(t))
        return f"{t.name}[{arguments}]"

    # -- Inheritance ---------------------------------------------------

    def is_root_type(self, t: TypeLike) -> bool:
        return isinstance(t, TypeHandle) and t.name == ROOT_TYPE_NAME

    def base_type(self, t: TypeLike) -> TypeLike | None:
        if isinstance(t, GenericParameterHandle):
            return None
        base = self._compiled[t.name].base
        return _substitute(base, self._substitution(t)) if base is not None else None

    def interfaces(self, t: TypeLike) -> list[TypeLike]:
        if isinstance(t, GenericParameterHandle):
            return []
        result: list[TypeLike] = []

        def add(iface: TypeLike) -> None:
            if iface in result:
                return
            result.append(iface)
            for inherited in self.interfaces(iface):
                add(inherited)

        substitution = self._substitution(t)
        for iface in self._compiled[t.name].interfaces:
            add(_substitute(iface, substitution))
        base = self.base_type(t)
        if base is not None:
            for iface in self.interfaces(base):
                add(iface)
        return result

    # -- Generics ------------------------------------------------------

    def is_generic(self, t: TypeLike) -> bool:
        return isinstance(t, TypeHandle) and bool(self._defs[t.name].generic_parameters)

    def is_constructed_generic(self, t: TypeLike) -> bool:
        return isinstance(t, TypeHandle) and bool(t.arguments)

    def generic_arguments(self, t: TypeLike) -> list[TypeLike]:
        if isinstance(t, GenericParameterHandle):
            return []
        if t.arguments:
            return list(t.arguments)
        return list(self._compiled[t.name].parameters)

    def generic_definition(self, t: TypeLike) -> TypeLike:
        if isinstance(t, GenericParameterHandle):
            return t
        return TypeHandle(t.name)

    def generic_constraints(self, p: TypeLike) -> list[TypeLike]:
        if not isinstance(p, GenericParameterHandle):
            return []
        return list(self._parameters[(p.owner, p.name)].constraints)

    def requires_default_constructor(self, p: TypeLike) -> bool:
        if not isinstance(p, GenericParameterHandle):
            return False
        return self._parameters[(p.owner, p.name)].default_constructor

    def nullable_underlying(self, t: TypeLike) -> TypeLike | None:
        if isinstance(t, TypeHandle) and t.name == NULLABLE_TYPE_NAME and t.arguments:
            return t.arguments[0]
        return None

    # -- Members -------------------------------------------------------

    def enum_members(self, t: TypeLike) -> list[tuple[str, int]]:
        if not self.is_enum(t):
            return []
        return [(m.name, m.value) for m in self._defs[t.name].members]

    def fields(self, t: TypeLike) -> list[MemberInfo]:
        return self._members(t, properties=False)

    def properties(self, t: TypeLike) -> list[MemberInfo]:
        return self._members(t, properties=True)

    def methods(self, t: TypeLike) -> list[MethodInfo]:
        if isinstance(t, GenericParameterHandle):
            return []
        substitution = self._substitution(t)
        return [
            MethodInfo(
                name=m.name,
                declaring_type=t,
                generic_parameters=m.generic_parameters,
                parameters=tuple(ParameterInfo(p.name, _substitute(p.type, substitution)) for p in m.parameters),
                return_type=_substitute(m.return_type, substitution),
                is_special_name=m.is_special_name,
                attributes=m.attributes,
            )
            for m in self._compiled[t.name].methods
        ]

    # -- Construction helpers ------------------------------------------

    def _add_definition(self, type_def: TypeDef, errors: list[str]) -> bool:
        if type_def.name in self._defs:
            errors.append(f"Duplicate type name '{type_def.name}'")
            return False
        self._defs[type_def.name] = type_def
        self._short_names.setdefault(type_def.name.rsplit(".", 1)[-1], []).append(type_def.name)
        return True

    def _compile(self, type_def: TypeDef, errors: list[str]) -> _CompiledType:
        compiled = _CompiledType()
        scope = self._declare_parameters(type_def.name, type_def.generic_parameters, compiled.parameters)
        self._compile_constraints(type_def.name, type_def.generic_parameters, scope, errors)
        where = f"type '{type_def.name}'"

        if type_def.base is not None:
            compiled.base = self._resolve_text(type_def.base, scope, errors, f"base of {where}")
            if compiled.base is not None and not self.is_class(compiled.base):
                errors.append(f"Base of {where} must be a class, got '{type_def.base}'")
        elif type_def.kind is TypeKind.CLASS and type_def.name != ROOT_TYPE_NAME:
            compiled.base = TypeHandle(ROOT_TYPE_NAME)

        for text in type_def.interfaces:
            iface = self._resolve_text(text, scope, errors, f"interfaces of {where}")
            if iface is None:
                continue
            if not self.is_interface(iface):
                errors.append(f"'{text}' in interfaces of {where} is not an interface")
                continue
            compiled.interfaces.append(iface)

        compiled.fields = self._compile_members(type_def.fields, scope, errors, where)
        compiled.properties = self._compile_members(type_def.properties, scope, errors, where)

        for index, method in enumerate(type_def.methods):
            owner = f"{type_def.name}::{method.name}#{index}"
            method_parameters: list[GenericParameterHandle] = []
            method_scope = {**scope, **self._declare_parameters(owner, method.generic_parameters, method_parameters)}
            self._compile_constraints(owner, method.generic_parameters, method_scope, errors)
            method_where = f"method '{method.name}' of {where}"
            parameters = []
            for param in method.parameters:
                resolved = self._resolve_text(param.type, method_scope, errors, method_where)
                if resolved is not None:
                    parameters.append(_CompiledParameterSlot(param.name, resolved))
            return_type = self._resolve_text(method.return_type, method_scope, errors, method_where)
            compiled.methods.append(
                _CompiledMethod(
                    name=method.name,
                    generic_parameters=tuple(method_parameters),
                    parameters=tuple(parameters),
                    return_type=return_type if return_type is not None else TypeHandle("System.Void"),
                    is_special_name=method.special_name,
                    attributes=tuple(method.attributes),
                )
            )
        return compiled

    def _declare_parameters(
        self,
        owner: str,
        parameters: list[GenericParameterDef],
        into: list[GenericParameterHandle],
    ) -> dict[str, GenericParameterHandle]:
        scope: dict[str, GenericParameterHandle] = {}
        for position, param in enumerate(parameters):
            handle = GenericParameterHandle(owner, param.name, position)
            into.append(handle)
            scope[param.name] = handle
            self._parameters[(owner, param.name)] = _CompiledParameter(default_constructor=param.default_constructor)
        return scope

    def _compile_constraints(
        self,
        owner: str,
        parameters: list[GenericParameterDef],
        scope: dict[str, GenericParameterHandle],
        errors: list[str],
    ) -> None:
        for param in parameters:
            where = f"constraints of '{param.name}' in '{owner}'"
            for text in param.constraints:
                resolved = self._resolve_text(text, scope, errors, where)
                if resolved is not None:
                    self._parameters[(owner, param.name)].constraints.append(resolved)

    def _compile_members(
        self,
        members: list[MemberDef],
        scope: dict[str, GenericParameterHandle],
        errors: list[str],
        where: str,
    ) -> list[_CompiledMember]:
        compiled = []
        for member in members:
            resolved = self._resolve_text(member.type, scope, errors, f"member '{member.name}' of {where}")
            if resolved is not None:
                compiled.append(_CompiledMember(member.name, resolved, tuple(member.attributes)))
        return compiled

    def _resolve_text(
        self,
        text: str,
        scope: dict[str, GenericParameterHandle],
        errors: list[str],
        where: str,
    ) -> TypeLike | None:
        try:
            ref = parse_type_reference(text)
        except DescriptorError as exc:
            errors.append(f"{where}: {exc}")
            return None
        return self._resolve(ref, scope, errors, where)

    def _resolve(
        self,
        ref: TypeReference,
        scope: dict[str, GenericParameterHandle],
        errors: list[str],
        where: str,
    ) -> TypeLike | None:
        if not ref.arguments and ref.name in scope:
            return scope[ref.name]

        full_name = self._lookup_name(ref, errors, where)
        if full_name is None:
            return None

        arity = len(self._defs[full_name].generic_parameters)
        if ref.arguments and len(ref.arguments) != arity:
            errors.append(f"{where}: '{full_name}' expects {arity} type argument(s), got {len(ref.arguments)}")
            return None

        arguments = []
        for argument in ref.arguments:
            resolved = self._resolve(argument, scope, errors, where)
            if resolved is None:
                return None
            arguments.append(resolved)
        return TypeHandle(full_name, tuple(arguments))

    def _lookup_name(self, ref: TypeReference, errors: list[str], where: str) -> str | None:
        name = TYPE_ALIASES.get(ref.name, ref.name)
        candidates = [name]
        if ref.arguments and "`" not in name:
            candidates.append(f"{name}`{len(ref.arguments)}")
        for candidate in candidates:
            if candidate in self._defs:
                return candidate
        for candidate in candidates:
            matches = self._short_names.get(candidate, [])
            if len(matches) == 1:
                return matches[0]
            if len(matches) > 1:
                errors.append(f"{where}: ambiguous type name '{ref.name}' ({', '.join(sorted(matches))})")
                return None
        errors.append(f"{where}: undefined type '{ref.name}'")
        return None

    # -- Query helpers -------------------------------------------------

    def _kind(self, t: TypeLike) -> TypeKind | None:
        if isinstance(t, GenericParameterHandle):
            return None
        return self._defs[t.name].kind

    def _substitution(self, t: TypeHandle) -> dict[GenericParameterHandle, TypeLike]:
        if not t.arguments:
            return {}
        return dict(zip(self._compiled[t.name].parameters, t.arguments, strict=True))

    def _members(self, t: TypeLike, *, properties: bool) -> list[MemberInfo]:
        if isinstance(t, GenericParameterHandle):
            return []
        compiled = self._compiled[t.name]
        substitution = self._substitution(t)
        return [
            MemberInfo(
                name=m.name,
                type=_substitute(m.type, substitution),
                declaring_type=t,
                is_property=properties,
                attributes=m.attributes,
            )
            for m in (compiled.properties if properties else compiled.fields)
        ]


# ################
# Implementation
# ################


@dataclass
class _CompiledParameter:
    default_constructor: bool = False
    constraints: list[TypeLike] = field(default_factory=list)


@dataclass(frozen=True)
class _CompiledMember:
    name: str
    type: TypeLike
    attributes: tuple[str, ...]


@dataclass(frozen=True)
class _CompiledParameterSlot:
    name: str
    type: TypeLike


@dataclass(frozen=True)
class _CompiledMethod:
    name: str
    generic_parameters: tuple[GenericParameterHandle, ...]
    parameters: tuple[_CompiledParameterSlot, ...]
    return_type: TypeLike
    is_special_name: bool
    attributes: tuple[str, ...]


@dataclass
class _CompiledType:
    parameters: list[GenericParameterHandle] = field(default_factory=list)
    base: TypeLike | None = None
    interfaces: list[TypeLike] = field(default_factory=list)
    fields: list[_CompiledMember] = field(default_factory=list)
    properties: list[_CompiledMember] = field(default_factory=list)
    methods: list[_CompiledMethod] = field(default_factory=list)


def _substitute(t: TypeLike, substitution: dict[GenericParameterHandle, TypeLike]) -> TypeLike:
    """Replace generic parameters in *t* according to *substitution*."""
    if not substitution:
        return t
    if isinstance(t, GenericParameterHandle):
        return substitution.get(t, t)
    if not t.arguments:
        return t
    return TypeHandle(t.name, tuple(_substitute(a, substitution) for a in t.arguments))


def _check_definition(type_def: TypeDef) -> list[str]:
    """Check shape rules of a single definition that need no resolution."""
    errors: list[str] = []
    where = f"type '{type_def.name}'"
    if type_def.kind is TypeKind.ENUM:
        if type_def.fields or type_def.properties or type_def.methods or type_def.generic_parameters:
            errors.append(f"Enum {where} may only declare members")
        seen: set[str] = set()
        for member in type_def.members:
            if member.name in seen:
                errors.append(f"Duplicate member '{member.name}' in enum {where}")
            seen.add(member.name)
    elif type_def.members:
        errors.append(f"Only enums may declare enum members, but {where} does")

    if type_def.kind is TypeKind.INTERFACE and type_def.base is not None:
        errors.append(f"Interface {where} cannot declare a base type; list it under interfaces")

    short_name = type_def.name.rsplit(".", 1)[-1]
    if "`" in short_name:
        marker = short_name.split("`", 1)[1]
        if not marker.isdigit() or int(marker) != len(type_def.generic_parameters):
            errors.append(
                f"Arity marker of {where} does not match its {len(type_def.generic_parameters)} generic parameter(s)"
            )
    return errors


def _inheritance_cycles(compiled: dict[str, _CompiledType]) -> list[str]:
    """Report each cycle through base types and interfaces, by definition name."""
    parents = {
        name: [p.name for p in [entry.base, *entry.interfaces] if isinstance(p, TypeHandle)]
        for name, entry in compiled.items()
    }
    errors: list[str] = []
    finished: set[str] = set()
    path: list[str] = []

    def visit(name: str) -> None:
        path.append(name)
        for parent in parents.get(name, []):
            if parent in path:
                cycle = [*path[path.index(parent) :], parent]
                errors.append(f"Inheritance cycle: {' -> '.join(cycle)}")
            elif parent not in finished:
                visit(parent)
        path.pop()
        finished.add(name)

    for name in parents:
        if name not in finished:
            visit(name)
    return errors
