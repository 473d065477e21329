# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the ``typebridge.yaml`` options file."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from typebridge.generator.naming import strip_generic_arity
from typebridge.generator.options import GeneratorOptions
from typebridge.metadata.provider import MemberInfo, MethodInfo, TypeLike

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = "typebridge.yaml"

MEMBER_NAMING_STYLES = ("preserve", "camel-case")


class OptionsConfigError(Exception):
    """Raised when an options file is invalid or cannot be loaded."""


@dataclass
class OptionsConfig:
    """The parsed contents of an options file.

    Attributes:
        skip_type_patterns: Regexes excluding types by display form.
        interface_for_classes: ``True``/``False`` for all classes, or regexes
            selecting the classes emitted as interfaces.
        default_base_type: Base expression for classes whose base is excluded.
        use_date_for_datetime: Map date-like primitives to ``Date``.
        member_naming: ``"preserve"`` or ``"camel-case"``.
        type_name_format: Format string with a ``{name}`` placeholder.
        include_methods: Emit method signatures.
        exclude_members: Regexes over member names that are never emitted.
        decorators: Descriptor attribute name to decorator text.
    """

    skip_type_patterns: list[str] = field(default_factory=list)
    interface_for_classes: bool | list[str] = False
    default_base_type: str | None = None
    use_date_for_datetime: bool = False
    member_naming: str = "preserve"
    type_name_format: str = "{name}"
    include_methods: bool = False
    exclude_members: list[str] = field(default_factory=list)
    decorators: dict[str, str] = field(default_factory=dict)


def load_options_config(path: Path) -> OptionsConfig:
    """Load and parse an options file.

    Args:
        path: Path to the ``typebridge.yaml`` file.

    Returns:
        An OptionsConfig populated from the file.

    Raises:
        OptionsConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise OptionsConfigError(f"Options file not found: {path}") from None
    except OSError as exc:
        raise OptionsConfigError(f"Cannot read options file: {exc}") from exc

    return parse_options_config(text, source_label=str(path))


def parse_options_config(text: str, source_label: str = "<string>") -> OptionsConfig:
    """Parse options YAML text into an OptionsConfig.

    An empty document yields the defaults.

    Raises:
        OptionsConfigError: If the YAML is invalid or a key has the wrong shape.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise OptionsConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return OptionsConfig()
    if not isinstance(data, dict):
        raise OptionsConfigError(f"{source_label}: options must be a YAML mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise OptionsConfigError(f"{source_label}: unknown option '{unknown[0]}'")

    config = OptionsConfig()
    config.skip_type_patterns = _optional_pattern_list(data, "skip-type-patterns", source_label)
    config.exclude_members = _optional_pattern_list(data, "exclude-members", source_label)
    config.use_date_for_datetime = _optional_bool(data, "use-date-for-datetime", False, source_label)
    config.include_methods = _optional_bool(data, "include-methods", False, source_label)

    if "interface-for-classes" in data:
        value = data["interface-for-classes"]
        if isinstance(value, bool):
            config.interface_for_classes = value
        else:
            config.interface_for_classes = _optional_pattern_list(data, "interface-for-classes", source_label)

    if "default-base-type" in data:
        config.default_base_type = _require_string(data, "default-base-type", source_label)

    if "member-naming" in data:
        style = _require_string(data, "member-naming", source_label)
        if style not in MEMBER_NAMING_STYLES:
            raise OptionsConfigError(
                f"{source_label}: 'member-naming' must be one of {', '.join(MEMBER_NAMING_STYLES)}"
            )
        config.member_naming = style

    if "type-name-format" in data:
        fmt = _require_string(data, "type-name-format", source_label)
        if "{name}" not in fmt:
            raise OptionsConfigError(f"{source_label}: 'type-name-format' must contain '{{name}}'")
        config.type_name_format = fmt

    if "decorators" in data:
        raw = data["decorators"]
        if not isinstance(raw, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in raw.items()):
            raise OptionsConfigError(f"{source_label}: 'decorators' must map attribute names to strings")
        config.decorators = dict(raw)

    return config


def options_from_config(
    config: OptionsConfig,
    display_name: Callable[[TypeLike], str] | None = None,
) -> GeneratorOptions:
    """Build generation policies from a parsed options file.

    Args:
        config: The parsed options.
        display_name: Display form of a type, used to match
            ``interface-for-classes`` patterns. Required when that option is
            a pattern list.

    Returns:
        The equivalent :class:`GeneratorOptions`.
    """
    options = GeneratorOptions(
        skip_type_patterns=list(config.skip_type_patterns),
        use_date_for_datetime=config.use_date_for_datetime,
    )

    if config.interface_for_classes is True:
        options.use_interface_for_classes = lambda t: True
    elif isinstance(config.interface_for_classes, list) and config.interface_for_classes:
        if display_name is None:
            raise OptionsConfigError("'interface-for-classes' patterns need a display name function")
        patterns = [re.compile(p) for p in config.interface_for_classes]
        options.use_interface_for_classes = lambda t: any(p.search(display_name(t)) for p in patterns)

    if config.default_base_type is not None:
        base = config.default_base_type
        options.default_base_type = lambda t: base

    if config.member_naming == "camel-case":
        options.member_renamer = _camel_case_name

    if config.type_name_format != "{name}":
        fmt = config.type_name_format
        options.type_renamer = lambda name: fmt.replace("{name}", strip_generic_arity(name))

    if config.exclude_members:
        excluded = [re.compile(p) for p in config.exclude_members]
        options.should_generate_member = lambda member, draft: not any(p.search(member.name) for p in excluded)

    if config.include_methods:
        options.should_generate_method = lambda method, draft: True

    if config.decorators:
        mapping = dict(config.decorators)
        options.use_decorators = lambda member: [mapping[a] for a in member.attributes if a in mapping]

    return options


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset(
    {
        "skip-type-patterns",
        "interface-for-classes",
        "default-base-type",
        "use-date-for-datetime",
        "member-naming",
        "type-name-format",
        "include-methods",
        "exclude-members",
        "decorators",
    }
)


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a string field from a mapping, raising OptionsConfigError if mistyped."""
    value = mapping[key]
    if not isinstance(value, str):
        raise OptionsConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _optional_bool(mapping: dict[str, object], key: str, default: bool, source_label: str) -> bool:
    if key not in mapping:
        return default
    value = mapping[key]
    if not isinstance(value, bool):
        raise OptionsConfigError(f"{source_label}: '{key}' must be true or false")
    return value


def _optional_pattern_list(mapping: dict[str, object], key: str, source_label: str) -> list[str]:
    """Extract a list of valid regular expressions, defaulting to empty."""
    if key not in mapping:
        return []
    value = mapping[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise OptionsConfigError(f"{source_label}: '{key}' must be a list of strings")
    for index, pattern in enumerate(value):
        try:
            re.compile(pattern)
        except re.error as exc:
            raise OptionsConfigError(f"{source_label}: {key}[{index}] is not a valid pattern: {exc}") from exc
    return list(value)


def _camel_case_name(member: MemberInfo | MethodInfo) -> str:
    name = member.name
    return name[:1].lower() + name[1:]
