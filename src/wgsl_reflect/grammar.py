# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Declaration shapes recognized by the entry and binding scanners.

Both tables are closed and ordered. The entry scanner takes the first entry
shape that matches anywhere in the source. The binding scanner walks every
binding shape over the whole source, in table order:

  1. ``@group(G) @binding(B) var<USAGE>``
  2. ``@group(G) @binding(B) texture<USAGE>``
  3. ``[[group(G), binding(B)]] var<USAGE>``
  4. ``[[group(G), binding(B)]] texture<USAGE>``
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from .model import DeclarationSyntax, ResourceKind

# ASCII digits only. Index runs are unbounded so oversized numbers still match
# and get reported; workgroup sizes stop at 10 digits.
_NUM = r"\s*([0-9]+)\s*"
_SIZE = r"\s*([0-9]{1,10})\s*"
_IDENT = r"([A-Za-z0-9_]+)"

# Indices with more digits than this are reported as OVERSIZED_INDEX.
INDEX_DIGITS = 9
OVERSIZED_INDEX = 10**INDEX_DIGITS


def parse_index(digits: str) -> int:
    """Convert a captured group/binding number without unbounded int parsing."""
    if len(digits) > INDEX_DIGITS:
        return OVERSIZED_INDEX
    return int(digits)


@dataclass(frozen=True)
class EntryShape:
    dimensions: int
    pattern: re.Pattern

    def __str__(self) -> str:
        return f"workgroup_size/{self.dimensions}"


def _entry_pattern(dimensions: int) -> re.Pattern:
    sizes = ",".join([_SIZE] * dimensions)
    return re.compile(
        rf"@compute\s*@workgroup_size\({sizes}\)\s*fn\s+{_IDENT}",
        re.ASCII,
    )


ENTRY_SHAPES: Tuple[EntryShape, ...] = tuple(
    EntryShape(n, _entry_pattern(n)) for n in (1, 2, 3)
)


@dataclass(frozen=True)
class BindingShape:
    syntax: DeclarationSyntax
    kind: ResourceKind
    pattern: re.Pattern

    def __str__(self) -> str:
        return f"{self.syntax.value}/{self.kind.value}"


_ATTRIBUTE_PREFIX = rf"@group\({_NUM}\)\s*@binding\({_NUM}\)"
_LEGACY_PREFIX = rf"\[\[\s*group\({_NUM}\)\s*,\s*binding\({_NUM}\)\s*\]\]"


def _binding_pattern(prefix: str, kind: ResourceKind) -> re.Pattern:
    return re.compile(rf"{prefix}\s*{kind.value}<([^>]+)>", re.ASCII)


BINDING_SHAPES: Tuple[BindingShape, ...] = tuple(
    BindingShape(syntax, kind, _binding_pattern(prefix, kind))
    for syntax, prefix in (
        (DeclarationSyntax.ATTRIBUTE, _ATTRIBUTE_PREFIX),
        (DeclarationSyntax.LEGACY, _LEGACY_PREFIX),
    )
    for kind in (ResourceKind.VAR, ResourceKind.TEXTURE)
)


__all__ = [
    "EntryShape",
    "BindingShape",
    "ENTRY_SHAPES",
    "BINDING_SHAPES",
    "OVERSIZED_INDEX",
    "parse_index",
]
