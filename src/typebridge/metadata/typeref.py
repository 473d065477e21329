# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for type reference strings used inside descriptor documents.

Grammar::

    reference := name arguments? '?'?
    arguments := '[' reference (',' reference)* ']'
    name      := identifier ('.' identifier)* ('`' digits)?

A trailing ``?`` is shorthand for ``System.Nullable`1[...]``.
"""

from __future__ import annotations

from dataclasses import dataclass

from typebridge.metadata.loader import DescriptorError

# ###############
# Public Interface
# ###############

NULLABLE_TYPE_NAME = "System.Nullable`1"


@dataclass(frozen=True)
class TypeReference:
    """An unresolved, parsed type reference."""

    name: str
    arguments: tuple[TypeReference, ...] = ()


class TypeReferenceError(DescriptorError):
    """Raised when a type reference string is syntactically invalid."""

    def __init__(self, text: str, message: str, column: int) -> None:
        super().__init__(f"Invalid type reference '{text}' at column {column}: {message}")
        self.column = column


def parse_type_reference(text: str) -> TypeReference:
    """Parse a type reference string.

    Args:
        text: Reference text, e.g. ``System.Collections.Generic.List`1[Demo.Item]``.

    Returns:
        The parsed :class:`TypeReference`.

    Raises:
        TypeReferenceError: If the text is not a valid reference.
    """
    return _ReferenceParser(text).parse()


# ################
# Implementation
# ################


class _ReferenceParser:
    """Recursive-descent parser over the characters of one reference string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def parse(self) -> TypeReference:
        ref = self._parse_reference()
        self._skip_whitespace()
        if self._pos != len(self._text):
            self._fail(f"unexpected '{self._text[self._pos]}'")
        return ref

    def _parse_reference(self) -> TypeReference:
        self._skip_whitespace()
        name = self._parse_name()
        arguments: list[TypeReference] = []
        self._skip_whitespace()
        if self._peek() == "[":
            self._pos += 1
            arguments.append(self._parse_reference())
            self._skip_whitespace()
            while self._peek() == ",":
                self._pos += 1
                arguments.append(self._parse_reference())
                self._skip_whitespace()
            if self._peek() != "]":
                self._fail("expected ']' or ','")
            self._pos += 1
            self._skip_whitespace()
        ref = TypeReference(name, tuple(arguments))
        if self._peek() == "?":
            self._pos += 1
            ref = TypeReference(NULLABLE_TYPE_NAME, (ref,))
        return ref

    def _parse_name(self) -> str:
        start = self._pos
        self._parse_identifier()
        while self._peek() == ".":
            self._pos += 1
            self._parse_identifier()
        if self._peek() == "`":
            self._pos += 1
            digits_start = self._pos
            while self._peek().isdigit():
                self._pos += 1
            if self._pos == digits_start:
                self._fail("expected generic arity after '`'")
        return self._text[start : self._pos]

    def _parse_identifier(self) -> None:
        ch = self._peek()
        if not (ch.isalpha() or ch == "_"):
            self._fail("expected a type name" if ch else "unexpected end of reference")
        while self._pos < len(self._text) and (self._text[self._pos].isalnum() or self._text[self._pos] in "_+"):
            self._pos += 1

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _skip_whitespace(self) -> None:
        while self._peek().isspace():
            self._pos += 1

    def _fail(self, message: str) -> None:
        raise TypeReferenceError(self._text, message, self._pos + 1)
