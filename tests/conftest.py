# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

import logging

import pytest

from wgsl_reflect.logging import get_logger


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers the CLI installs so they don't outlive capsys streams."""
    yield
    logger = get_logger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
