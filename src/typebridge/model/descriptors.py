# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptor documents describing the source type model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class TypeKind(Enum):
    """Declaration kinds of the source type model."""

    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    ENUM = "enum"


class TypeCode(Enum):
    """Primitive classification of a source type.

    ``OBJECT`` marks every structural type (classes, structs, interfaces,
    collections). ``GUID`` is the opaque 128-bit identifier type.
    """

    OBJECT = "object"
    BOOLEAN = "boolean"
    CHAR = "char"
    SBYTE = "sbyte"
    BYTE = "byte"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    SINGLE = "single"
    DOUBLE = "double"
    DECIMAL = "decimal"
    DATETIME = "datetime"
    STRING = "string"
    GUID = "guid"
    VOID = "void"


class GenericParameterDef(BaseModel):
    """A generic type or method parameter and its constraints."""

    name: str
    constraints: list[str] = _Field(default_factory=list)
    default_constructor: bool = False


class MemberDef(BaseModel):
    """A field or property of a type."""

    name: str
    type: str
    attributes: list[str] = _Field(default_factory=list)


class ParameterDef(BaseModel):
    """A method parameter."""

    name: str
    type: str


class MethodDef(BaseModel):
    """A method signature. Bodies are never described."""

    name: str
    generic_parameters: list[GenericParameterDef] = _Field(default_factory=list)
    parameters: list[ParameterDef] = _Field(default_factory=list)
    return_type: str = "System.Void"
    special_name: bool = False
    attributes: list[str] = _Field(default_factory=list)


class EnumMemberDef(BaseModel):
    """A named integral enum member."""

    name: str
    value: int


class TypeDef(BaseModel):
    """A single type of the source model.

    ``name`` is the full name including namespace and, for generic types,
    the arity marker (``Demo.Box`1``). Type references (``base``,
    ``interfaces``, member and parameter types) use the same notation with
    bracketed arguments: ``Demo.Box`1[System.Int32]``.
    """

    name: str
    kind: TypeKind = TypeKind.CLASS
    type_code: TypeCode = TypeCode.OBJECT
    abstract: bool = False
    generic_parameters: list[GenericParameterDef] = _Field(default_factory=list)
    base: str | None = None
    interfaces: list[str] = _Field(default_factory=list)
    fields: list[MemberDef] = _Field(default_factory=list)
    properties: list[MemberDef] = _Field(default_factory=list)
    methods: list[MethodDef] = _Field(default_factory=list)
    members: list[EnumMemberDef] = _Field(default_factory=list)


class DescriptorSet(BaseModel):
    """Top-level model of a descriptor document."""

    types: list[TypeDef] = _Field(default_factory=list)
