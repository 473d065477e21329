#!/usr/bin/env python3
# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CI checks locally: format, lint, tests, sample generation, build.

Pass step names to run a subset, e.g. ``tools/ci.py lint tests``.
"""

import argparse
import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: dict[str, list[str]] = {
    "format": ["uv", "run", "ruff", "format", "--check", "src/", "tests/"],
    "lint": ["uv", "run", "ruff", "check", "src/", "tests/"],
    "tests": ["uv", "run", "pytest", "--cov=typebridge", "--cov-report=term-missing"],
    "sample": [
        "uv",
        "run",
        "typebridge",
        "generate",
        "samples/shop.yaml",
        "--config",
        "samples/typebridge.yaml",
        "--output",
        "build/sample/shop.ts",
    ],
    "build": ["uv", "build"],
}


def main() -> int:
    """Run the selected CI steps and print a summary."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("steps", nargs="*", help=f"Steps to run: {', '.join(STEPS)} (default: all)")
    selected = parser.parse_args().steps or list(STEPS)
    unknown = [s for s in selected if s not in STEPS]
    if unknown:
        parser.error(f"unknown step '{unknown[0]}'")

    results = [_run_step(name, STEPS[name]) for name in selected]

    _banner("Summary")
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {'PASS' if passed else 'FAIL'}  {name} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    _banner(name)
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=pathlib.Path(__file__).parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(f"  {title}"))
    print(sep)


if __name__ == "__main__":
    sys.exit(main())
