# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type graph walk: discovery and registration of declarations.

Starting from caller-supplied roots, every nominal type and enum reachable
through members, method signatures, base types, interfaces, generic
arguments and generic constraints is registered exactly once in a
:class:`~typebridge.generator.context.DeclarationContext`.

Cycles are broken by reserving a declaration under its identity before any
of its dependencies are visited. A generic argument structure that keeps
growing without bottoming out is not a cycle and ends in ``RecursionError``,
which propagates to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from typebridge.generator.context import DeclarationContext
from typebridge.generator.naming import NameResolver, strip_generic_arity
from typebridge.generator.options import GeneratorOptions
from typebridge.generator.shapes import ShapeClassifier
from typebridge.metadata.provider import MetadataProvider, MethodInfo, TypeLike
from typebridge.model.declarations import (
    ConstructorDeclaration,
    EnumDeclaration,
    EnumField,
    MemberDeclaration,
    MethodDeclaration,
    TypeDeclaration,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def collect_declarations(
    roots: Iterable[TypeLike],
    provider: MetadataProvider,
    options: GeneratorOptions | None = None,
) -> DeclarationContext:
    """Walk the type graph from *roots* and return the populated context.

    Args:
        roots: Types to start from, in order.
        provider: Metadata source for the types.
        options: Generation policies; defaults apply when omitted.

    Returns:
        A fresh :class:`DeclarationContext` holding every discovered
        declaration.

    Raises:
        RecursionError: If generic arguments nest without bound.
    """
    context = DeclarationContext(options)
    TypeGraphBuilder(provider).populate(roots, context)
    logger.info(
        "Collected %d type declaration(s) and %d enum declaration(s)",
        len(context.types),
        len(context.enums),
    )
    return context


class TypeGraphBuilder:
    """Registers declarations for source types into a context.

    Args:
        provider: Metadata source for the types.
    """

    def __init__(self, provider: MetadataProvider) -> None:
        self._provider = provider
        self.classifier = ShapeClassifier(provider, self)

    def populate(self, roots: Iterable[TypeLike], context: DeclarationContext) -> None:
        """Register every root and, transitively, everything it references."""
        for root in roots:
            if self._provider.is_enum(root):
                self.register_enum(root, context)
            else:
                self.register_type(root, context)

    def register_enum(self, t: TypeLike, context: DeclarationContext) -> EnumDeclaration | None:
        """Register an enum, or return the existing declaration for it.

        Returns ``None`` when the enum matches a skip pattern.
        """
        provider = self._provider
        existing = context.find_enum(t)
        if existing is not None:
            return existing

        if context.is_skipped(provider.display_name(t)):
            logger.debug("Skipping enum '%s'", provider.display_name(t))
            return None

        name = NameResolver(context.options.type_renamer).resolve(provider.name(t), context)
        fields = [EnumField(member, str(value)) for member, value in provider.enum_members(t)]
        declaration = EnumDeclaration(original=t, target_name=name, fields=fields)
        context.add_enum(declaration)
        logger.debug("Registered enum '%s' as '%s'", provider.display_name(t), name)
        return declaration

    def register_type(self, t: TypeLike, context: DeclarationContext) -> TypeDeclaration | None:
        """Register a nominal type, or return the existing declaration for it.

        Constructed generic instances register their arguments, then resolve
        to the declaration of their generic definition.

        Returns ``None`` (the type is represented as ``any``) for generic
        parameters, primitives, enums and types matching a skip pattern.
        """
        provider = self._provider
        if provider.is_generic_parameter(t) or self.classifier.is_primitive(t):
            return None
        if provider.is_enum(t):
            self.register_enum(t, context)
            return None
        if context.is_skipped(provider.display_name(t)):
            logger.debug("Skipping type '%s'", provider.display_name(t))
            return None

        if provider.is_constructed_generic(t):
            for argument in provider.generic_arguments(t):
                self.register_type(argument, context)
            definition = provider.generic_definition(t)
            logger.debug("Retargeting '%s' onto '%s'", provider.display_name(t), provider.display_name(definition))
            t = definition

        existing = context.find_type(t)
        if existing is not None:
            return existing

        options = context.options
        is_interface = provider.is_interface(t) or (
            options.use_interface_for_classes is not None and options.use_interface_for_classes(t)
        )
        name = NameResolver(options.type_renamer).resolve(strip_generic_arity(provider.name(t)), context)
        declaration = TypeDeclaration(original=t, target_name=name, is_interface=is_interface)
        context.reserve_type(declaration)

        declaration.header, declaration.constructor = self._header(t, declaration, context)
        context.commit_type(declaration)
        logger.debug("Registered type '%s' as '%s'", provider.display_name(t), name)

        declaration.members.extend(self._members(t, context))
        declaration.methods.extend(self._methods(t, context))
        return declaration

    # ################
    # Implementation
    # ################

    def _header(
        self,
        t: TypeLike,
        declaration: TypeDeclaration,
        context: DeclarationContext,
    ) -> tuple[str, ConstructorDeclaration | None]:
        """Synthesize the declaration header and optional constructor."""
        provider = self._provider
        options = context.options
        is_interface = declaration.is_interface

        interface_refs = self._interface_references(t, context)

        base_ref = ""
        if provider.is_class(t):
            base = provider.base_type(t)
            if base is not None and not provider.is_root_type(base) and self.register_type(base, context) is not None:
                base_ref = self.classifier.type_expression(base, context)
            elif options.default_base_type is not None:
                base_ref = options.default_base_type(t) or ""

        signature = declaration.target_name
        if provider.is_generic(t):
            parameters = [
                self._generic_parameter_clause(p, is_interface, context) for p in provider.generic_arguments(t)
            ]
            signature = f"{signature}<{', '.join(parameters)}>"

        constructor = None
        if is_interface:
            header = f"export interface {signature}"
            if base_ref:
                interface_refs.insert(0, base_ref)
        else:
            abstract = " abstract" if provider.is_abstract(t) else ""
            header = f"export{abstract} class {signature}"
            if base_ref:
                header = f"{header} extends {base_ref}"
            if options.ctor_generator is not None:
                constructor = options.ctor_generator(t)

        if interface_refs:
            keyword = "extends" if is_interface else "implements"
            header = f"{header} {keyword} {', '.join(interface_refs)}"
        return header, constructor

    def _interface_references(self, t: TypeLike, context: DeclarationContext) -> list[str]:
        """Return the most-derived, registrable interfaces *t* implements itself."""
        provider = self._provider
        interfaces = provider.interfaces(t)
        base = provider.base_type(t)
        inherited = set(provider.interfaces(base)) if base is not None else set()
        implied = {parent for iface in interfaces for parent in provider.interfaces(iface)}

        refs = []
        for iface in interfaces:
            if iface in inherited or iface in implied:
                continue
            if self.register_type(iface, context) is None:
                continue
            refs.append(self.classifier.type_expression(iface, context))
        return refs

    def _generic_parameter_clause(self, parameter: TypeLike, is_interface: bool, context: DeclarationContext) -> str:
        """Render one generic parameter with its constraints (``T extends A & B``)."""
        provider = self._provider
        constraints = [
            self.classifier.type_expression(c, context)
            for c in provider.generic_constraints(parameter)
            if self.register_type(c, context) is not None
        ]
        name = provider.name(parameter)
        if not is_interface and provider.requires_default_constructor(parameter):
            constraints.append(f"{{ new(): {name} }}")
        if constraints:
            return f"{name} extends {' & '.join(constraints)}"
        return name

    def _unwrap(self, t: TypeLike) -> tuple[TypeLike, bool]:
        """Strip a nullable value wrapper, reporting whether one was present."""
        underlying = self._provider.nullable_underlying(t)
        if underlying is None:
            return t, False
        return underlying, True

    def _members(self, t: TypeLike, context: DeclarationContext) -> list[MemberDeclaration]:
        """Fields first, then properties, each in provider order."""
        provider = self._provider
        options = context.options
        should_generate = options.should_generate_member

        members = []
        for member in [*provider.fields(t), *provider.properties(t)]:
            member_type, nullable = self._unwrap(member.type)
            draft = MemberDeclaration(
                name=options.member_renamer(member) if options.member_renamer is not None else member.name,
                type_expression=self.classifier.type_expression(member_type, context),
                is_nullable=nullable,
                decorators=list(options.use_decorators(member)) if options.use_decorators is not None else [],
            )
            if should_generate is None or should_generate(member, draft):
                members.append(draft)
        return members

    def _methods(self, t: TypeLike, context: DeclarationContext) -> list[MethodDeclaration]:
        """Methods in provider order, excluding compiler-synthesized accessors."""
        should_generate = context.options.should_generate_method
        if should_generate is None:
            return []

        methods = []
        for method in self._provider.methods(t):
            if method.is_special_name:
                continue
            draft = self._method_declaration(method, context)
            if should_generate(method, draft):
                methods.append(draft)
        return methods

    def _method_declaration(self, method: MethodInfo, context: DeclarationContext) -> MethodDeclaration:
        options = context.options
        signature = options.member_renamer(method) if options.member_renamer is not None else method.name
        if method.generic_parameters:
            generic_names = ", ".join(self.classifier.type_expression(p, context) for p in method.generic_parameters)
            signature = f"{signature}<{generic_names}>"

        parameters = []
        for parameter in method.parameters:
            parameter_type, nullable = self._unwrap(parameter.type)
            parameters.append(
                MemberDeclaration(parameter.name, self.classifier.type_expression(parameter_type, context), nullable)
            )

        return_type = "void"
        if method.return_type is not None:
            unwrapped, nullable = self._unwrap(method.return_type)
            return_type = self.classifier.type_expression(unwrapped, context)
            if nullable:
                return_type = f"{return_type} | null"

        return MethodDeclaration(
            signature=signature,
            parameters=parameters,
            return_type_expression=return_type,
            decorators=list(options.use_decorators(method)) if options.use_decorators is not None else [],
        )
