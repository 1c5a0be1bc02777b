# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Resource binding declaration scanner.

Populates the group/binding table of a :class:`ShaderMetadata` in place.
Insertion is permissive: duplicates and gaps are written as found and left
for :mod:`wgsl_reflect.validator` to report. Only the table bounds are
enforced here, since out-of-range numbers come straight from shader text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .constants import MAX_BINDINGS, MAX_GROUPS, USAGE_CAPACITY
from .errors import BindingScanError, MalformedBindingDeclaration
from .grammar import BINDING_SHAPES, parse_index
from .logging import get_logger
from .model import BindingDescriptor, ShaderMetadata, truncate_utf8


@dataclass
class BindingScan:
    matched: int = 0
    skipped: List[MalformedBindingDeclaration] = field(default_factory=list)

    @property
    def recorded(self) -> int:
        return self.matched - len(self.skipped)


def scan_bindings(
    source: Optional[str], metadata: Optional[ShaderMetadata]
) -> BindingScan:
    """Scan ``source`` for binding declarations and record them in ``metadata``.

    Every shape in :data:`BINDING_SHAPES` is run over the whole source in
    turn; within a shape, matches are non-overlapping and visited front to
    back. The group table of ``metadata`` is expected to be reset already.

    Declarations with a group outside ``[0, MAX_GROUPS)`` or a binding
    outside ``[0, MAX_BINDINGS)`` are not written. They are returned in
    ``BindingScan.skipped`` and appended to ``metadata.skipped``.
    """
    if source is None:
        raise BindingScanError("shader source is None")
    if metadata is None:
        raise BindingScanError("metadata is None")

    logger = get_logger()
    result = BindingScan()
    for shape in BINDING_SHAPES:
        for m in shape.pattern.finditer(source):
            result.matched += 1
            group = parse_index(m.group(1))
            binding = parse_index(m.group(2))
            if not (0 <= group < MAX_GROUPS and 0 <= binding < MAX_BINDINGS):
                bad = MalformedBindingDeclaration(
                    group, binding, m.start(), m.group(0)
                )
                logger.warning("skipping %s", bad.message)
                result.skipped.append(bad)
                metadata.skipped.append(bad)
                continue

            usage = m.group(3).strip()
            bounded = truncate_utf8(usage, USAGE_CAPACITY)
            if bounded != usage:
                logger.warning(
                    "usage of group %d binding %d exceeds %d bytes; truncated",
                    group,
                    binding,
                    USAGE_CAPACITY,
                )

            layout = metadata.groups[group]
            layout.bindings[binding] = BindingDescriptor(
                binding=binding,
                group=group,
                usage=bounded,
                kind=shape.kind,
                syntax=shape.syntax,
            )
            layout.num_bindings += 1
            logger.debug(
                "%s: group %d binding %d usage '%s'",
                shape,
                group,
                binding,
                bounded,
            )

    return result


__all__ = ["BindingScan", "scan_bindings"]
