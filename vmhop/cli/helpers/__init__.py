# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Shared helpers for the vmhop CLI."""

from vmhop.utils.logging import console

from vmhop.cli.helpers.utils import (
    get_config,
    handle_errors,
    show_error_panel,
)

__all__ = [
    "console",
    "get_config",
    "handle_errors",
    "show_error_panel",
]
