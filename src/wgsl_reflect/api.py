# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""High-level API used by pipeline and bind group layout setup code."""

from __future__ import annotations

from typing import Optional

from .bindings import scan_bindings
from .entry import scan_entry
from .logging import get_logger
from .model import ShaderMetadata
from .validator import ValidationReport, validate
from .errors import StructuralViolation

__all__ = [
    "parse_compute_shader",
    "validate_compute_shader",
    "reflect_compute_shader",
]


def parse_compute_shader(
    source: Optional[str], *, strict: bool = False
) -> ShaderMetadata:
    """Extract entry point, workgroup size and bindings from ``source``.

    The returned metadata is populated but not validated. Out-of-range
    binding declarations are listed in ``metadata.skipped``; with
    ``strict=True`` the first of them is raised instead.

    Raises:
        EntryNotFoundError: the source has no compute entry declaration.
        MalformedBindingDeclaration: strict mode and a declaration was skipped.
    """
    entry = scan_entry(source)
    metadata = ShaderMetadata(
        entry=entry.name, workgroup_size=list(entry.workgroup_size)
    )
    metadata.reset_groups()
    scan = scan_bindings(source, metadata)
    if strict and scan.skipped:
        raise scan.skipped[0]
    get_logger().info(
        "parsed '%s' workgroup_size=%s bindings=%d skipped=%d",
        metadata.entry,
        tuple(metadata.workgroup_size),
        scan.recorded,
        len(scan.skipped),
    )
    return metadata


def validate_compute_shader(
    metadata: ShaderMetadata, *, collect_all: bool = False
) -> ValidationReport:
    """Validate the binding table; raise :class:`StructuralViolation` on failure.

    Returns the (empty) report on success so callers can chain on it.
    """
    report = validate(metadata, collect_all=collect_all)
    if not report.ok:
        raise StructuralViolation(report)
    return report


def reflect_compute_shader(
    source: Optional[str], *, strict: bool = False
) -> ShaderMetadata:
    metadata = parse_compute_shader(source, strict=strict)
    validate_compute_shader(metadata)
    return metadata
