# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Structural validation of a populated group/binding table.

Rules, evaluated per binding in this order:
 1. OUT_OF_BOUNDS: binding index >= MAX_BINDINGS
 2. POSITION_MISMATCH: binding index differs from its table position
 3. GROUP_MISMATCH: stored group differs from the owning group
 4. USAGE_LENGTH: usage empty or longer than MAX_USAGE_LENGTH
 5. USAGE_TOKEN: usage contains a token outside USAGE_TOKENS

Bindings are visited group-ascending, then position-ascending. By default
validation stops at the first binding that breaks any rule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, Dict, Iterator, List, Optional

from .constants import MAX_BINDINGS, MAX_USAGE_LENGTH, USAGE_TOKENS
from .model import BindingDescriptor, GroupLayout, ShaderMetadata, split_usage


class Rule(IntFlag):
    NONE = 0
    OUT_OF_BOUNDS = 1
    POSITION_MISMATCH = 2
    GROUP_MISMATCH = 4
    USAGE_LENGTH = 8
    USAGE_TOKEN = 16


_RULE_ORDER = (
    Rule.OUT_OF_BOUNDS,
    Rule.POSITION_MISMATCH,
    Rule.GROUP_MISMATCH,
    Rule.USAGE_LENGTH,
    Rule.USAGE_TOKEN,
)


@dataclass(frozen=True)
class BindingViolation:
    group: int
    binding: int  # table position of the offending slot
    rules: Rule

    @property
    def rule_names(self) -> List[str]:
        return [r.name for r in _RULE_ORDER if r in self.rules]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self.group,
            "binding": self.binding,
            "rules": self.rule_names,
        }

    def __str__(self) -> str:
        return (
            f"group {self.group} binding {self.binding}: "
            + ", ".join(self.rule_names)
        )


@dataclass
class ValidationReport:
    violations: List[BindingViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def first(self) -> Optional[BindingViolation]:
        return self.violations[0] if self.violations else None

    def __bool__(self) -> bool:
        return self.ok


def check_binding(
    descriptor: Optional[BindingDescriptor], position: int, group: int
) -> Rule:
    """Return the rules broken by the descriptor stored at ``position``."""
    if descriptor is None:
        # Nothing was written here although the count covers this slot.
        return Rule.POSITION_MISMATCH

    rules = Rule.NONE
    if descriptor.binding >= MAX_BINDINGS:
        rules |= Rule.OUT_OF_BOUNDS
    if descriptor.binding != position:
        rules |= Rule.POSITION_MISMATCH
    if descriptor.group != group:
        rules |= Rule.GROUP_MISMATCH
    usage = descriptor.usage
    if not usage or len(usage) > MAX_USAGE_LENGTH:
        rules |= Rule.USAGE_LENGTH
    elif any(t not in USAGE_TOKENS for t in split_usage(usage)):
        rules |= Rule.USAGE_TOKEN
    return rules


def _iter_group_violations(layout: GroupLayout) -> Iterator[BindingViolation]:
    counted = min(layout.num_bindings, MAX_BINDINGS)
    for position in range(counted):
        rules = check_binding(layout.bindings[position], position, layout.group)
        if rules:
            yield BindingViolation(layout.group, position, rules)
    if layout.num_bindings > MAX_BINDINGS:
        # More writes than slots: at least one declaration was duplicated.
        yield BindingViolation(layout.group, MAX_BINDINGS, Rule.OUT_OF_BOUNDS)


def validate(
    metadata: ShaderMetadata, collect_all: bool = False
) -> ValidationReport:
    """Check the group/binding table of ``metadata``.

    Returns a report listing the offending bindings. With the default
    ``collect_all=False`` the report holds at most the first offender.
    """
    report = ValidationReport()
    for layout in metadata.active_groups():
        for violation in _iter_group_violations(layout):
            report.violations.append(violation)
            if not collect_all:
                return report
    return report


__all__ = [
    "Rule",
    "BindingViolation",
    "ValidationReport",
    "check_binding",
    "validate",
]
