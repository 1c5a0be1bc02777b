# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Fixed capacities and vocabularies shared by the scanners and validator."""

from __future__ import annotations

# Table capacities. Group and binding numbers must lie in [0, MAX_*).
MAX_GROUPS = 8
MAX_BINDINGS = 8

# Byte capacities of the stored strings (UTF-8).
ENTRY_NAME_CAPACITY = 255
USAGE_CAPACITY = 255

# A usage string is only accepted when it fits in this many characters.
MAX_USAGE_LENGTH = 50

USAGE_TOKENS = frozenset({"storage", "uniform", "read", "read_write"})

DEFAULT_WORKGROUP_SIZE = (1, 1, 1)

__all__ = [
    "MAX_GROUPS",
    "MAX_BINDINGS",
    "ENTRY_NAME_CAPACITY",
    "USAGE_CAPACITY",
    "MAX_USAGE_LENGTH",
    "USAGE_TOKENS",
    "DEFAULT_WORKGROUP_SIZE",
]
