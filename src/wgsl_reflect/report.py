# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Read-only renderings of :class:`ShaderMetadata`.

Nothing here validates; callers decide whether the metadata is trustworthy.
"""

from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .model import ShaderMetadata


def format_metadata(metadata: ShaderMetadata) -> str:
    """Render entry, workgroup size and active groups as plain text."""
    x, y, z = metadata.workgroup_size
    lines: List[str] = [
        f"Entry: {metadata.entry}",
        f"Workgroup size: ({x}, {y}, {z})",
    ]
    for g in metadata.active_groups():
        lines.append(f"Group {g.group}:")
        for b in g.iter_bindings():
            lines.append(
                f"  Binding {b.binding}: {b.kind.value}<{b.usage}>"
            )
    for s in metadata.skipped:
        lines.append(f"Skipped: {s.message}")
    return "\n".join(lines)


def build_table(metadata: ShaderMetadata) -> Table:
    x, y, z = metadata.workgroup_size
    table = Table(
        title=f"{metadata.entry} @workgroup_size({x}, {y}, {z})",
        show_lines=False,
    )
    table.add_column("Group", justify="right")
    table.add_column("Binding", justify="right")
    table.add_column("Kind")
    table.add_column("Usage")
    table.add_column("Syntax", style="dim")
    for g in metadata.active_groups():
        for b in g.iter_bindings():
            table.add_row(
                str(g.group),
                str(b.binding),
                b.kind.value,
                b.usage,
                b.syntax.value,
            )
    return table


def print_metadata(
    metadata: ShaderMetadata, console: Optional[Console] = None
) -> None:
    console = console or Console()
    console.print(build_table(metadata))
    for s in metadata.skipped:
        console.print(f"[yellow]skipped[/yellow] {s.message}", markup=True)


__all__ = ["format_metadata", "build_table", "print_metadata"]
