# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Export metadata to JSON/YAML documents and load it back.

Loaded documents are checked against ``metadata.schema.json`` before any
table is rebuilt, so a document can never address slots outside the fixed
capacities.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List

import jsonschema
import yaml

from .errors import MalformedBindingDeclaration, MetadataDocumentError
from .model import (
    BindingDescriptor,
    DeclarationSyntax,
    ResourceKind,
    ShaderMetadata,
)

_SCHEMA_RESOURCE = "metadata.schema.json"

__all__ = [
    "load_schema",
    "metadata_to_dict",
    "metadata_from_dict",
    "dump_metadata",
    "load_metadata",
]


@lru_cache(maxsize=1)
def load_schema() -> Dict[str, Any]:
    text = (
        resources.files(__package__)
        .joinpath(_SCHEMA_RESOURCE)
        .read_text(encoding="utf-8")
    )
    return json.loads(text)


def metadata_to_dict(metadata: ShaderMetadata) -> Dict[str, Any]:
    groups: List[Dict[str, Any]] = []
    for g in metadata.active_groups():
        groups.append(
            {
                "group": g.group,
                "num_bindings": g.num_bindings,
                "bindings": [
                    {
                        "binding": b.binding,
                        "group": b.group,
                        "usage": b.usage,
                        "kind": b.kind.value,
                        "syntax": b.syntax.value,
                    }
                    for b in g.iter_bindings()
                ],
            }
        )
    return {
        "entry": metadata.entry,
        "workgroup_size": list(metadata.workgroup_size),
        "groups": groups,
        "skipped": [
            {
                "group": s.group,
                "binding": s.binding,
                "offset": s.offset,
                "text": s.text,
            }
            for s in metadata.skipped
        ],
    }


def _check_document(doc: Any) -> None:
    try:
        jsonschema.validate(instance=doc, schema=load_schema())
    except jsonschema.ValidationError as e:
        path = "->".join(str(p) for p in e.path) if e.path else "(root)"
        raise MetadataDocumentError(e.message, path) from e


def metadata_from_dict(doc: Dict[str, Any]) -> ShaderMetadata:
    """Rebuild :class:`ShaderMetadata` from an exported document.

    Raises:
        MetadataDocumentError: the document does not match the schema.
    """
    _check_document(doc)
    metadata = ShaderMetadata(
        entry=doc["entry"], workgroup_size=list(doc["workgroup_size"])
    )
    for gd in doc["groups"]:
        layout = metadata.groups[gd["group"]]
        for bd in gd["bindings"]:
            layout.bindings[bd["binding"]] = BindingDescriptor(
                binding=bd["binding"],
                group=bd["group"],
                usage=bd["usage"],
                kind=ResourceKind(bd.get("kind", "var")),
                syntax=DeclarationSyntax(bd.get("syntax", "attribute")),
            )
        layout.num_bindings = gd.get("num_bindings", len(gd["bindings"]))
    for sd in doc.get("skipped", []):
        metadata.skipped.append(
            MalformedBindingDeclaration(
                sd["group"], sd["binding"], sd["offset"], sd["text"]
            )
        )
    return metadata


def dump_metadata(metadata: ShaderMetadata, fmt: str = "json") -> str:
    doc = metadata_to_dict(metadata)
    if fmt == "json":
        return json.dumps(doc, indent=2)
    if fmt == "yaml":
        return yaml.safe_dump(doc, sort_keys=False)
    raise ValueError(f"Unsupported metadata format '{fmt}'")


def load_metadata(text: str) -> ShaderMetadata:
    """Parse a JSON or YAML metadata document (JSON is a YAML subset)."""
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MetadataDocumentError(f"not a JSON/YAML document: {e}") from e
    return metadata_from_dict(doc)
