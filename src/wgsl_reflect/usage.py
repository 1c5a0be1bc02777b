# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Map binding usage qualifiers to WebGPU buffer usage and binding types."""

from __future__ import annotations

from enum import IntFlag
from typing import Optional

from .model import BindingDescriptor, ResourceKind


class BufferUsage(IntFlag):
    # Bit values match WGPUBufferUsage / GPUBufferUsage.
    NONE = 0x0
    MAP_READ = 0x1
    MAP_WRITE = 0x2
    COPY_SRC = 0x4
    COPY_DST = 0x8
    INDEX = 0x10
    VERTEX = 0x20
    UNIFORM = 0x40
    STORAGE = 0x80
    INDIRECT = 0x100
    QUERY_RESOLVE = 0x200


def get_buffer_usage(binding: BindingDescriptor) -> BufferUsage:
    """Buffer usage flags needed to back ``binding``.

    Uniform buffers are written from the host; storage buffers that the
    shader may write are also readable back.
    """
    if binding.kind is ResourceKind.TEXTURE:
        return BufferUsage.NONE
    tokens = set(binding.usage_tokens)
    usage = BufferUsage.NONE
    if "uniform" in tokens:
        usage |= BufferUsage.UNIFORM | BufferUsage.COPY_DST
    if "storage" in tokens:
        usage |= BufferUsage.STORAGE | BufferUsage.COPY_DST
        if "read_write" in tokens:
            usage |= BufferUsage.COPY_SRC
    return usage


def buffer_binding_type(binding: BindingDescriptor) -> Optional[str]:
    """Return the ``GPUBufferBindingType`` for ``binding``, or None."""
    if binding.kind is ResourceKind.TEXTURE:
        return None
    tokens = set(binding.usage_tokens)
    if "uniform" in tokens:
        return "uniform"
    if "storage" in tokens:
        # var<storage> defaults to read access in WGSL.
        return "storage" if "read_write" in tokens else "read-only-storage"
    return None


__all__ = ["BufferUsage", "get_buffer_usage", "buffer_binding_type"]
