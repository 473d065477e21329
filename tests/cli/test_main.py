# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the TypeBridge CLI entry point."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from typebridge.cli.main import main

SAMPLES_DIR = Path(__file__).parent.parent.parent / "samples"
SHOP_DESCRIPTORS = SAMPLES_DIR / "shop.yaml"
SHOP_OPTIONS = SAMPLES_DIR / "typebridge.yaml"

# ###############
# Helpers
# ###############


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    """Run the CLI with *args* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["typebridge", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0
    assert "usage: typebridge" in capsys.readouterr().out


# -------- init tests --------


def test_init_writes_options_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init writes a typebridge.yaml with every option at its default."""
    assert _run(monkeypatch, "init", str(tmp_path)) == 0
    content = (tmp_path / "typebridge.yaml").read_text(encoding="utf-8")
    assert "skip-type-patterns: []" in content
    assert "include-methods: false" in content


def test_init_default_directory_uses_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init with no directory argument uses the current working directory."""
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "init") == 0
    assert (tmp_path / "typebridge.yaml").exists()


def test_init_starter_file_is_valid(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """The starter options file is accepted by generate."""
    assert _run(monkeypatch, "init", str(tmp_path)) == 0
    code = _run(monkeypatch, "generate", str(SHOP_DESCRIPTORS), "--config", str(tmp_path / "typebridge.yaml"))
    assert code == 0


def test_init_fails_if_file_exists(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init refuses to overwrite an existing options file."""
    (tmp_path / "typebridge.yaml").write_text("include-methods: true\n", encoding="utf-8")
    assert _run(monkeypatch, "init", str(tmp_path)) == 1
    assert (tmp_path / "typebridge.yaml").read_text(encoding="utf-8") == "include-methods: true\n"


def test_init_fails_for_missing_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init exits with code 1 when the target directory does not exist."""
    assert _run(monkeypatch, "init", str(tmp_path / "missing")) == 1


# -------- generate tests --------


def test_generate_sample_to_stdout(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """generate renders the sample descriptors with the sample options."""
    assert _run(monkeypatch, "generate", str(SHOP_DESCRIPTORS), "--config", str(SHOP_OPTIONS)) == 0
    output = capsys.readouterr().out
    assert "export enum OrderStatus {\n    Pending = 0,\n    Paid = 1,\n    Shipped = 5,\n}\n" in output
    assert "export interface IAuditable extends IEntity {\n    createdAt: Date;\n}\n" in output
    assert "export abstract class EntityBase implements IAuditable {\n" in output
    assert "export class Page<T extends IEntity> {\n    items: Array<T>;\n    total: number;\n}\n" in output
    assert "    tags: { [key: string]: number };\n" in output
    assert "export class CustomerPage extends Page<Customer> {\n}\n" in output
    assert "export class OrderLine {\n    sku: string;\n    quantity: number;\n    discount?: number;\n}\n" in output
    assert (
        "export class Order extends EntityBase {\n"
        "    status: OrderStatus;\n"
        "    customer: Customer;\n"
        "    @required()\n"
        "    total: number;\n"
        "    shippedAt?: Date;\n"
        "    lines: Array<OrderLine>;\n"
        "    addLine(line: OrderLine): void {}\n"
        "    find<TLine>(sku: string): TLine {\n"
        '        throw new Error("Not implemented");\n'
        "    }\n"
        "}\n"
    ) in output
    assert "get_Total" not in output
    assert "List" not in output


def test_generate_base_types_come_first(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """Every base declaration precedes the declarations extending it."""
    assert _run(monkeypatch, "generate", str(SHOP_DESCRIPTORS), "--config", str(SHOP_OPTIONS)) == 0
    output = capsys.readouterr().out
    assert output.index("class EntityBase") < output.index("class Customer")
    assert output.index("class Page<") < output.index("class CustomerPage")


def test_generate_to_output_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """generate --output writes the declarations to a file, creating parent directories."""
    output_path = tmp_path / "out" / "shop.ts"
    code = _run(
        monkeypatch,
        "generate",
        str(SHOP_DESCRIPTORS),
        "--config",
        str(SHOP_OPTIONS),
        "--output",
        str(output_path),
    )
    assert code == 0
    assert "export class Customer extends EntityBase" in output_path.read_text(encoding="utf-8")


def test_generate_selected_roots(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """--root limits generation to what the named types reach."""
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "generate", str(SHOP_DESCRIPTORS), "--root", "Shop.OrderLine") == 0
    assert capsys.readouterr().out == (
        "export class OrderLine {\n    Sku: string;\n    Quantity: number;\n    Discount?: number;\n}\n"
    )


def test_generate_reads_options_from_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """Without --config, typebridge.yaml in the working directory is used."""
    (tmp_path / "typebridge.yaml").write_text("member-naming: camel-case\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "generate", str(SHOP_DESCRIPTORS), "--root", "OrderLine") == 0
    assert "    sku: string;\n" in capsys.readouterr().out


def test_generate_unknown_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """An undefined root type is reported and exits with code 1."""
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "generate", str(SHOP_DESCRIPTORS), "--root", "Shop.Invoice") == 1
    assert "undefined type 'Shop.Invoice'" in capsys.readouterr().err


def test_generate_invalid_descriptors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """Inconsistent descriptors are reported and exit with code 1."""
    descriptors = tmp_path / "bad.yaml"
    descriptors.write_text("types:\n  - {name: Demo.Item, base: Demo.Missing}\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "generate", str(descriptors)) == 1
    assert "undefined type 'Demo.Missing'" in capsys.readouterr().err


def test_generate_missing_descriptor_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """A missing descriptor file exits with code 1."""
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "generate", str(tmp_path / "missing.yaml")) == 1


def test_generate_invalid_options(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """An invalid options file is reported and exits with code 1."""
    options = tmp_path / "options.yaml"
    options.write_text("colour: red\n", encoding="utf-8")
    assert _run(monkeypatch, "generate", str(SHOP_DESCRIPTORS), "--config", str(options)) == 1
    assert "unknown option 'colour'" in capsys.readouterr().err


def test_generate_inheritance_cycle(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """A type that inherits from itself is reported as an invalid descriptor."""
    descriptors = tmp_path / "grow.yaml"
    descriptors.write_text(
        "types:\n"
        "  - name: Demo.IGrow`1\n"
        "    kind: interface\n"
        "    generic_parameters: [{name: T}]\n"
        '    interfaces: ["Demo.IGrow`1[List[T]]"]\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "generate", str(descriptors)) == 1
    assert "Inheritance cycle" in capsys.readouterr().err


def test_generate_unbounded_generics(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """Generic arguments that nest without bound are reported, not raised."""
    monkeypatch.chdir(tmp_path)
    with patch("typebridge.cli.main.collect_declarations", side_effect=RecursionError):
        assert _run(monkeypatch, "generate", str(SHOP_DESCRIPTORS)) == 1
    assert "nest without bound" in capsys.readouterr().err


def test_inspect_unbounded_generics(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """The inspect command reports unbounded nesting the same way."""
    monkeypatch.chdir(tmp_path)
    with patch("typebridge.cli.main.collect_declarations", side_effect=RecursionError):
        assert _run(monkeypatch, "inspect", str(SHOP_DESCRIPTORS)) == 1
    assert "nest without bound" in capsys.readouterr().err


# -------- inspect tests --------


def test_inspect_lists_declarations(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """inspect prints one line per declaration with its source type."""
    assert _run(monkeypatch, "inspect", str(SHOP_DESCRIPTORS), "--config", str(SHOP_OPTIONS)) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "enum       OrderStatus  (Shop.OrderStatus)",
        "interface  IEntity  (Shop.IEntity)",
        "interface  IAuditable  (Shop.IAuditable)",
        "class      EntityBase  (Shop.EntityBase)",
        "class      Page  (Shop.Page`1[T])",
        "class      Customer  (Shop.Customer)",
        "class      Order  (Shop.Order)",
        "class      OrderLine  (Shop.OrderLine)",
        "class      CustomerPage  (Shop.CustomerPage)",
    ]
