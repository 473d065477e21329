# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading of YAML and JSON descriptor documents."""

from __future__ import annotations

import json
from functools import cache
from importlib import resources
from pathlib import Path

import yaml
from pydantic import ValidationError

from typebridge.model.descriptors import DescriptorSet

# ###############
# Public Interface
# ###############


class DescriptorError(Exception):
    """Raised when a descriptor document cannot be loaded or is inconsistent."""


def load_descriptors(path: Path) -> DescriptorSet:
    """Load a descriptor document from a ``.yaml``, ``.yml`` or ``.json`` file.

    Args:
        path: Path to the descriptor document.

    Returns:
        The validated :class:`DescriptorSet`.

    Raises:
        DescriptorError: If the file cannot be read, is not valid YAML/JSON,
            or does not match the descriptor schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DescriptorError(f"Descriptor file not found: {path}") from None
    except OSError as exc:
        raise DescriptorError(f"Cannot read descriptor file: {exc}") from exc

    return parse_descriptors(text, source_label=str(path), as_json=path.suffix == ".json")


def parse_descriptors(text: str, source_label: str = "<string>", *, as_json: bool = False) -> DescriptorSet:
    """Parse descriptor document text into a :class:`DescriptorSet`.

    Args:
        text: Raw document content.
        source_label: Human-readable label used in error messages.
        as_json: Parse as JSON instead of YAML.

    Raises:
        DescriptorError: If the text is malformed or fails schema validation.
    """
    try:
        data = json.loads(text) if as_json else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise DescriptorError(f"Invalid document in {source_label}: {exc}") from exc

    if data is None:
        return DescriptorSet()
    if not isinstance(data, dict):
        raise DescriptorError(f"{source_label}: descriptor document must be a mapping")

    try:
        return DescriptorSet.model_validate(data)
    except ValidationError as exc:
        raise DescriptorError(f"{source_label}: {exc}") from exc


@cache
def builtin_descriptors() -> DescriptorSet:
    """Return the built-in system types shipped with the package."""
    text = resources.files("typebridge.metadata").joinpath("builtins.yaml").read_text(encoding="utf-8")
    return parse_descriptors(text, source_label="<builtins>")
