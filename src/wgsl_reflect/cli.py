# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Command-line entry point for wgsl_reflect.

Reads a WGSL compute shader, extracts its reflection metadata, validates the
binding layout and prints the result as text, JSON or YAML.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console

from ._version import __version__
from .api import parse_compute_shader, validate_compute_shader
from .errors import ReflectError, StructuralViolation
from .export import dump_metadata
from .logging import configure_logging, get_logger, wants_color
from .report import format_metadata, print_metadata

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="wgsl-reflect",
        description="Extract compute pipeline reflection data from WGSL",
    )
    p.add_argument("shader", type=Path, help="Path to the WGSL source file")
    p.add_argument(
        "--format",
        choices=["text", "json", "yaml"],
        default="text",
        help="Output format for the extracted metadata",
    )
    p.add_argument(
        "--no-validate",
        action="store_true",
        help="Print the metadata without validating the binding layout",
    )
    p.add_argument(
        "--collect-all",
        action="store_true",
        help="Report every offending binding instead of only the first",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail on out-of-range binding declarations instead of skipping them",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v: info, -vv: debug)",
    )
    p.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="Decrease verbosity (can be used multiple times)",
    )
    p.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output mode",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"wgsl-reflect {__version__}",
    )
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Base 1 (warnings), +1 per -v, -1 per -q, clamp [0..3]
    verbosity = max(0, min(3, 1 + int(args.verbose) - int(args.quiet)))
    use_color = wants_color(args.color)
    configure_logging(verbosity, use_color=use_color)
    logger = get_logger()

    try:
        source = args.shader.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("cannot read %s: %s", args.shader, e)
        return EXIT_USAGE

    try:
        metadata = parse_compute_shader(source, strict=args.strict)
        if not args.no_validate:
            validate_compute_shader(metadata, collect_all=args.collect_all)
    except StructuralViolation as e:
        for v in e.report.violations:
            logger.error("invalid layout in %s: %s", args.shader, v)
        return EXIT_INVALID
    except ReflectError as e:
        logger.error("%s: %s", args.shader, e.message)
        return EXIT_INVALID

    if args.format == "text":
        if use_color:
            print_metadata(metadata, Console(force_terminal=True))
        else:
            sys.stdout.write(format_metadata(metadata) + "\n")
    else:
        sys.stdout.write(dump_metadata(metadata, args.format))
        if args.format == "json":
            sys.stdout.write("\n")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
