# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the TypeBridge command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from typebridge.config.options_file import (
    CONFIG_FILE_NAME,
    OptionsConfigError,
    load_options_config,
    options_from_config,
)
from typebridge.generator.graph import collect_declarations
from typebridge.generator.options import GeneratorOptions
from typebridge.generator.render import render_declarations
from typebridge.metadata.catalog import TypeCatalog
from typebridge.metadata.loader import DescriptorError, load_descriptors
from typebridge.metadata.provider import TypeHandle

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the TypeBridge CLI."""
    parser = argparse.ArgumentParser(
        prog="typebridge",
        description="TypeBridge: translate typed model descriptors into TypeScript declarations",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a starter options file",
        description=f"Create a {CONFIG_FILE_NAME} with the default options.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the options file to (default: current directory)",
    )

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate TypeScript declarations",
        description="Generate TypeScript declarations for the types in a descriptor document.",
    )
    _add_descriptor_arguments(generate_parser)
    generate_parser.add_argument(
        "--output",
        "-o",
        help="File to write the declarations to (default: standard output)",
    )

    # inspect subcommand
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="List the declarations that would be generated",
        description="Print the target names of every declaration reachable from the roots.",
    )
    _add_descriptor_arguments(inspect_parser)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_STARTER_CONFIG = """\
# TypeBridge options
# Types whose display form matches any of these patterns become `any`.
skip-type-patterns: []
# true, false, or a list of patterns selecting classes emitted as interfaces.
interface-for-classes: false
use-date-for-datetime: false
member-naming: preserve
type-name-format: "{name}"
include-methods: false
exclude-members: []
decorators: {}
"""


def _add_descriptor_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("descriptors", help="Descriptor document (.yaml, .yml or .json)")
    parser.add_argument(
        "--root",
        action="append",
        default=[],
        metavar="NAME",
        help="Type to start from; repeatable (default: every type in the document)",
    )
    parser.add_argument(
        "--config",
        help=f"Options file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every registration")


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "inspect":
        return _cmd_inspect(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        print(f"Error: options file already exists at '{config_file}'.", file=sys.stderr)
        return 1

    config_file.write_text(_STARTER_CONFIG, encoding="utf-8")
    print(f"Wrote options file '{config_file}'.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    loaded = _load_inputs(args)
    if loaded is None:
        return 1
    catalog, roots, options = loaded

    try:
        output = render_declarations(collect_declarations(roots, catalog, options))
    except RecursionError:
        print("Error: generic type arguments nest without bound; cannot generate.", file=sys.stderr)
        return 1

    if args.output is None:
        sys.stdout.write(output)
        return 0

    output_path = Path(args.output)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output, encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot write '{output_path}': {exc}", file=sys.stderr)
        return 1
    print(f"Wrote {output_path}")
    return 0


def _cmd_inspect(args: argparse.Namespace) -> int:
    """Handle the inspect subcommand."""
    loaded = _load_inputs(args)
    if loaded is None:
        return 1
    catalog, roots, options = loaded

    try:
        context = collect_declarations(roots, catalog, options)
    except RecursionError:
        print("Error: generic type arguments nest without bound; cannot generate.", file=sys.stderr)
        return 1

    for enum_decl in context.enums:
        print(f"enum       {enum_decl.target_name}  ({catalog.display_name(enum_decl.original)})")
    for type_decl in context.types:
        kind = "interface" if type_decl.is_interface else "class"
        print(f"{kind:<10} {type_decl.target_name}  ({catalog.display_name(type_decl.original)})")
    return 0


def _load_inputs(args: argparse.Namespace) -> tuple[TypeCatalog, list[TypeHandle], GeneratorOptions] | None:
    """Load descriptors, roots and options, reporting any error to stderr."""
    try:
        catalog = TypeCatalog(load_descriptors(Path(args.descriptors)))
        root_names = args.root or catalog.type_names
        roots = [catalog.resolve(name) for name in root_names]
    except DescriptorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None

    config_path = Path(args.config) if args.config else Path.cwd() / CONFIG_FILE_NAME
    options = GeneratorOptions()
    if args.config or config_path.exists():
        try:
            options = options_from_config(load_options_config(config_path), catalog.display_name)
        except OptionsConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return None

    return catalog, roots, options
