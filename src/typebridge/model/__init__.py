# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Source descriptors and target declaration records."""

from typebridge.model.declarations import (
    ConstructorDeclaration,
    EnumDeclaration,
    EnumField,
    MemberDeclaration,
    MethodDeclaration,
    TypeDeclaration,
)
from typebridge.model.descriptors import (
    DescriptorSet,
    EnumMemberDef,
    GenericParameterDef,
    MemberDef,
    MethodDef,
    ParameterDef,
    TypeCode,
    TypeDef,
    TypeKind,
)

__all__ = [
    # Source descriptors
    "TypeKind",
    "TypeCode",
    "GenericParameterDef",
    "MemberDef",
    "ParameterDef",
    "MethodDef",
    "EnumMemberDef",
    "TypeDef",
    "DescriptorSet",
    # Target declarations
    "MemberDeclaration",
    "MethodDeclaration",
    "ConstructorDeclaration",
    "TypeDeclaration",
    "EnumField",
    "EnumDeclaration",
]
