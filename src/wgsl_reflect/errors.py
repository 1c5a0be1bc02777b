# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Error definitions for wgsl_reflect."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .validator import ValidationReport

E_ENTRY_NOT_FOUND = "E_ENTRY_NOT_FOUND"
E_BINDING_SCAN = "E_BINDING_SCAN"
E_BINDING_OUT_OF_RANGE = "E_BINDING_OUT_OF_RANGE"
E_STRUCTURAL_VIOLATION = "E_STRUCTURAL_VIOLATION"
E_METADATA_DOCUMENT = "E_METADATA_DOCUMENT"


@dataclass
class ReflectError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class EntryNotFoundError(ReflectError):
    """No ``@compute @workgroup_size(...) fn`` declaration in the source."""

    def __init__(self, message: str = "no compute entry declaration found"):
        super().__init__(code=E_ENTRY_NOT_FOUND, message=message)


class BindingScanError(ReflectError):
    def __init__(self, message: str):
        super().__init__(code=E_BINDING_SCAN, message=message)


class MalformedBindingDeclaration(ReflectError):
    """A binding declaration whose group or binding number is out of range.

    The scanner records these as values and keeps going; they are raised
    only when the caller asks for strict parsing.
    """

    def __init__(self, group: int, binding: int, offset: int, text: str):
        super().__init__(
            code=E_BINDING_OUT_OF_RANGE,
            message=(
                f"binding declaration @group({group}) @binding({binding}) "
                f"at offset {offset} is out of range"
            ),
            context={
                "group": group,
                "binding": binding,
                "offset": offset,
                "text": text,
            },
        )
        self.group = group
        self.binding = binding
        self.offset = offset
        self.text = text


class StructuralViolation(ReflectError):
    def __init__(self, report: "ValidationReport"):
        first = report.first
        if first is None:
            raise ValueError("StructuralViolation requires a failing report")
        super().__init__(
            code=E_STRUCTURAL_VIOLATION,
            message=(
                f"group {first.group} binding {first.binding}: "
                + ", ".join(first.rule_names)
            ),
            context={"violations": [v.to_dict() for v in report.violations]},
        )
        self.report = report
        self.group = first.group
        self.binding = first.binding
        self.rules = first.rules


class MetadataDocumentError(ReflectError):
    def __init__(self, message: str, path: str = "(root)"):
        super().__init__(
            code=E_METADATA_DOCUMENT,
            message=f"metadata document invalid at {path}: {message}",
            context={"path": path},
        )


__all__ = [
    "ReflectError",
    "EntryNotFoundError",
    "BindingScanError",
    "MalformedBindingDeclaration",
    "StructuralViolation",
    "MetadataDocumentError",
    "E_ENTRY_NOT_FOUND",
    "E_BINDING_SCAN",
    "E_BINDING_OUT_OF_RANGE",
    "E_STRUCTURAL_VIOLATION",
    "E_METADATA_DOCUMENT",
]
