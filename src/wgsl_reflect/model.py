# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Typed data model for compute shader reflection.

The group and binding tables have a fixed number of slots (``MAX_GROUPS``
groups of ``MAX_BINDINGS`` bindings). Scanners write into existing slots and
never resize the tables; structural invariants are left to the validator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from .constants import DEFAULT_WORKGROUP_SIZE, MAX_BINDINGS, MAX_GROUPS
from .errors import MalformedBindingDeclaration


class ResourceKind(str, Enum):
    VAR = "var"
    TEXTURE = "texture"


class DeclarationSyntax(str, Enum):
    ATTRIBUTE = "attribute"  # @group(0) @binding(0)
    LEGACY = "legacy"  # [[group(0), binding(0)]]


@dataclass
class BindingDescriptor:
    binding: int
    group: int
    usage: str
    kind: ResourceKind = ResourceKind.VAR
    syntax: DeclarationSyntax = DeclarationSyntax.ATTRIBUTE

    @property
    def usage_tokens(self) -> List[str]:
        return split_usage(self.usage)


def _empty_binding_slots() -> List[Optional[BindingDescriptor]]:
    return [None] * MAX_BINDINGS


@dataclass
class GroupLayout:
    group: int
    bindings: List[Optional[BindingDescriptor]] = field(
        default_factory=_empty_binding_slots
    )
    num_bindings: int = 0

    @property
    def active(self) -> bool:
        return self.num_bindings > 0

    def iter_bindings(self) -> Iterator[BindingDescriptor]:
        """Yield the populated slots in ascending binding order."""
        for b in self.bindings:
            if b is not None:
                yield b


def _empty_groups() -> List[GroupLayout]:
    return [GroupLayout(group=i) for i in range(MAX_GROUPS)]


@dataclass
class ShaderMetadata:
    entry: str = ""
    workgroup_size: List[int] = field(
        default_factory=lambda: list(DEFAULT_WORKGROUP_SIZE)
    )
    groups: List[GroupLayout] = field(default_factory=_empty_groups)
    skipped: List[MalformedBindingDeclaration] = field(default_factory=list)

    def reset_groups(self) -> None:
        """Reinitialize every group slot to its index with no bindings."""
        self.groups = _empty_groups()
        self.skipped = []

    def active_groups(self) -> Iterator[GroupLayout]:
        for g in self.groups:
            if g.active:
                yield g

    def binding(self, group: int, binding: int) -> Optional[BindingDescriptor]:
        if not (0 <= group < MAX_GROUPS and 0 <= binding < MAX_BINDINGS):
            return None
        return self.groups[group].bindings[binding]


def split_usage(usage: str) -> List[str]:
    """Split a usage string such as ``"storage, read_write"`` into tokens."""
    return usage.replace(",", " ").split()


def truncate_utf8(text: str, capacity: int) -> str:
    """Cut ``text`` to at most ``capacity`` UTF-8 bytes on a character boundary."""
    raw = text.encode("utf-8")
    if len(raw) <= capacity:
        return text
    return raw[:capacity].decode("utf-8", errors="ignore")


__all__ = [
    "ResourceKind",
    "DeclarationSyntax",
    "BindingDescriptor",
    "GroupLayout",
    "ShaderMetadata",
    "split_usage",
    "truncate_utf8",
]
