# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Target naming: rename policy plus deterministic collision breaking."""

from __future__ import annotations

import logging
from collections.abc import Callable

from typebridge.generator.context import DeclarationContext

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def strip_generic_arity(name: str) -> str:
    """Drop the generic arity marker from a raw name (``Box`1`` -> ``Box``)."""
    return name.split("`", 1)[0]


class NameResolver:
    """Produces collision-free target names.

    Args:
        renamer: Optional rename policy applied before collision checks.
    """

    def __init__(self, renamer: Callable[[str], str] | None = None) -> None:
        self._renamer = renamer

    def resolve(self, raw_name: str, context: DeclarationContext) -> str:
        """Return a name not yet used by any declaration in *context*.

        The first free candidate among ``name``, ``name$1``, ``name$2``, ...
        is chosen, so repeated runs over the same input agree.
        """
        name = self._renamer(raw_name) if self._renamer is not None else raw_name
        candidate = name
        suffix = 1
        while context.is_name_taken(candidate):
            candidate = f"{name}${suffix}"
            suffix += 1
        if candidate != name:
            logger.debug("Name '%s' already taken, using '%s'", name, candidate)
        return candidate
