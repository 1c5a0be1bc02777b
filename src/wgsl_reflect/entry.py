# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Compute entry point scanner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .constants import DEFAULT_WORKGROUP_SIZE, ENTRY_NAME_CAPACITY
from .errors import EntryNotFoundError
from .grammar import ENTRY_SHAPES
from .logging import get_logger
from .model import truncate_utf8


@dataclass(frozen=True)
class EntryPoint:
    workgroup_size: Tuple[int, int, int]
    name: str


def scan_entry(
    source: Optional[str],
    defaults: Sequence[int] = DEFAULT_WORKGROUP_SIZE,
) -> EntryPoint:
    """Find the compute entry declaration and its workgroup size.

    Shapes with one, two and three explicit dimensions are tried in that
    order; the first shape matching anywhere in ``source`` wins. Dimensions
    the declaration leaves out keep their value from ``defaults``. Only
    ASCII sizes of up to 10 digits are recognized.

    Raises:
        EntryNotFoundError: no shape matched (or ``source`` is None).
    """
    logger = get_logger()
    if source is None:
        raise EntryNotFoundError("shader source is None")
    if len(defaults) != 3:
        raise ValueError(
            f"defaults must have 3 dimensions, got {len(defaults)}"
        )

    for shape in ENTRY_SHAPES:
        m = shape.pattern.search(source)
        if m is None:
            continue
        sizes = list(defaults)
        for i in range(shape.dimensions):
            sizes[i] = int(m.group(i + 1))
        name = m.group(shape.dimensions + 1)
        bounded = truncate_utf8(name, ENTRY_NAME_CAPACITY)
        if bounded != name:
            logger.warning(
                "entry name '%s...' exceeds %d bytes; truncated",
                name[:32],
                ENTRY_NAME_CAPACITY,
            )
        logger.debug(
            "entry '%s' matched %s at offset %d", bounded, shape, m.start()
        )
        return EntryPoint(
            workgroup_size=(sizes[0], sizes[1], sizes[2]), name=bounded
        )

    raise EntryNotFoundError()


__all__ = ["EntryPoint", "scan_entry"]
