# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the typebridge.yaml options file."""

from pathlib import Path

import pytest

from typebridge.config.options_file import (
    OptionsConfig,
    OptionsConfigError,
    load_options_config,
    options_from_config,
    parse_options_config,
)
from typebridge.metadata.catalog import TypeCatalog
from typebridge.metadata.loader import parse_descriptors
from typebridge.metadata.provider import MemberInfo, TypeHandle
from typebridge.model.declarations import MemberDeclaration


def _member(name: str, *attributes: str) -> MemberInfo:
    """Build a string-typed member carrying the given attributes."""
    return MemberInfo(
        name=name,
        type=TypeHandle("System.String"),
        declaring_type=TypeHandle("Demo.Item"),
        attributes=attributes,
    )


# ###############
# Parsing
# ###############


class TestParseOptionsConfig:
    def test_empty_document_gives_defaults(self) -> None:
        assert parse_options_config("") == OptionsConfig()

    def test_all_keys(self) -> None:
        config = parse_options_config("""\
skip-type-patterns: ['^System\\.']
interface-for-classes: ['Dto$']
default-base-type: Model
use-date-for-datetime: true
member-naming: camel-case
type-name-format: "I{name}"
include-methods: true
exclude-members: [Password]
decorators: {Required: "required()"}
""")
        assert config.skip_type_patterns == ["^System\\."]
        assert config.interface_for_classes == ["Dto$"]
        assert config.default_base_type == "Model"
        assert config.use_date_for_datetime
        assert config.member_naming == "camel-case"
        assert config.type_name_format == "I{name}"
        assert config.include_methods
        assert config.exclude_members == ["Password"]
        assert config.decorators == {"Required": "required()"}

    def test_interface_for_classes_bool(self) -> None:
        assert parse_options_config("interface-for-classes: true").interface_for_classes is True

    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("- a\n- b\n", "must be a YAML mapping"),
            ("colour: red", "unknown option 'colour'"),
            ("skip-type-patterns: System", "must be a list of strings"),
            ("skip-type-patterns: ['(']", "is not a valid pattern"),
            ("use-date-for-datetime: yes please", "must be true or false"),
            ("member-naming: snake", "must be one of"),
            ("type-name-format: Dto", "must contain '{name}'"),
            ("default-base-type: 3", "must be a string"),
            ("decorators: [Required]", "must map attribute names to strings"),
            ("skip-type-patterns: [unclosed", "Invalid YAML"),
        ],
    )
    def test_invalid(self, text: str, message: str) -> None:
        with pytest.raises(OptionsConfigError, match=message):
            parse_options_config(text)


class TestLoadOptionsConfig:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "typebridge.yaml"
        path.write_text("include-methods: true\n", encoding="utf-8")
        assert load_options_config(path).include_methods

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(OptionsConfigError, match="not found"):
            load_options_config(tmp_path / "typebridge.yaml")

    def test_error_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "typebridge.yaml"
        path.write_text("colour: red\n", encoding="utf-8")
        with pytest.raises(OptionsConfigError, match="typebridge.yaml"):
            load_options_config(path)


# ###############
# Policies
# ###############


class TestOptionsFromConfig:
    def test_defaults(self) -> None:
        options = options_from_config(OptionsConfig())
        assert options.use_interface_for_classes is None
        assert options.member_renamer is None
        assert options.type_renamer is None
        assert options.should_generate_member is None
        assert options.should_generate_method is None
        assert options.use_decorators is None

    def test_simple_values(self) -> None:
        options = options_from_config(
            OptionsConfig(skip_type_patterns=["Secret"], use_date_for_datetime=True, default_base_type="Model")
        )
        assert options.skip_type_patterns == ["Secret"]
        assert options.use_date_for_datetime
        assert options.default_base_type(TypeHandle("Demo.Item")) == "Model"

    def test_all_classes_as_interfaces(self) -> None:
        options = options_from_config(OptionsConfig(interface_for_classes=True))
        assert options.use_interface_for_classes(TypeHandle("Demo.Item"))

    def test_interface_patterns_match_display_name(self) -> None:
        catalog = TypeCatalog(parse_descriptors("types: [{name: Demo.ItemDto}, {name: Demo.Item}]"))
        options = options_from_config(OptionsConfig(interface_for_classes=["Dto$"]), catalog.display_name)
        assert options.use_interface_for_classes(catalog.resolve("Demo.ItemDto"))
        assert not options.use_interface_for_classes(catalog.resolve("Demo.Item"))

    def test_interface_patterns_need_display_name(self) -> None:
        with pytest.raises(OptionsConfigError):
            options_from_config(OptionsConfig(interface_for_classes=["Dto$"]))

    def test_camel_case_members(self) -> None:
        options = options_from_config(OptionsConfig(member_naming="camel-case"))
        assert options.member_renamer(_member("CreatedAt")) == "createdAt"

    def test_type_name_format(self) -> None:
        options = options_from_config(OptionsConfig(type_name_format="{name}Model"))
        assert options.type_renamer("Box`1") == "BoxModel"

    def test_exclude_members(self) -> None:
        options = options_from_config(OptionsConfig(exclude_members=["^Pass"]))
        draft = MemberDeclaration("x", "string")
        assert not options.should_generate_member(_member("Password"), draft)
        assert options.should_generate_member(_member("Name"), draft)

    def test_include_methods(self) -> None:
        options = options_from_config(OptionsConfig(include_methods=True))
        assert options.should_generate_method is not None

    def test_decorators(self) -> None:
        options = options_from_config(OptionsConfig(decorators={"Required": "required()"}))
        assert options.use_decorators(_member("Name", "Required", "Obsolete")) == ["required()"]
