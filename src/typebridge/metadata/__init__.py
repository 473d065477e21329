# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Metadata providers: the generator's read-only view of source types."""

from typebridge.metadata.catalog import ROOT_TYPE_NAME, TYPE_ALIASES, TypeCatalog, UnknownTypeError
from typebridge.metadata.loader import DescriptorError, builtin_descriptors, load_descriptors, parse_descriptors
from typebridge.metadata.provider import (
    GenericParameterHandle,
    MemberInfo,
    MetadataProvider,
    MethodInfo,
    ParameterInfo,
    TypeHandle,
    TypeLike,
)
from typebridge.metadata.typeref import TypeReference, TypeReferenceError, parse_type_reference

__all__ = [
    "DescriptorError",
    "GenericParameterHandle",
    "MemberInfo",
    "MetadataProvider",
    "MethodInfo",
    "ParameterInfo",
    "ROOT_TYPE_NAME",
    "TYPE_ALIASES",
    "TypeCatalog",
    "TypeHandle",
    "TypeLike",
    "TypeReference",
    "TypeReferenceError",
    "UnknownTypeError",
    "builtin_descriptors",
    "load_descriptors",
    "parse_descriptors",
    "parse_type_reference",
]
