# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""wgsl_reflect package

Extracts compute pipeline reflection metadata (entry point, workgroup size
and group/binding layout) from WGSL compute shader source, without a shader
compiler, and validates the resulting binding table.

Typical use::

    from wgsl_reflect import parse_compute_shader, validate_compute_shader

    meta = parse_compute_shader(source)
    validate_compute_shader(meta)
"""

from ._version import __version__  # noqa: F401
from .api import (
    parse_compute_shader,
    reflect_compute_shader,
    validate_compute_shader,
)
from .constants import MAX_BINDINGS, MAX_GROUPS
from .errors import (
    EntryNotFoundError,
    MalformedBindingDeclaration,
    ReflectError,
    StructuralViolation,
)
from .model import BindingDescriptor, GroupLayout, ShaderMetadata

__all__ = [
    "__version__",
    "parse_compute_shader",
    "validate_compute_shader",
    "reflect_compute_shader",
    "MAX_GROUPS",
    "MAX_BINDINGS",
    "ReflectError",
    "EntryNotFoundError",
    "MalformedBindingDeclaration",
    "StructuralViolation",
    "BindingDescriptor",
    "GroupLayout",
    "ShaderMetadata",
]
