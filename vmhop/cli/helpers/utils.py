# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Shared plumbing for vmhop commands."""

import functools
import sys
from typing import Callable, Optional

import click
from rich.panel import Panel

from vmhop.host_config import HostConfig
from vmhop.utils.exceptions import VmhopError
from vmhop.utils.logging import console, get_logger

logger = get_logger(__name__)


def show_error_panel(title: str, message: str, hint: Optional[str] = None) -> None:
    """Print a red-bordered panel with an optional hint line."""
    body = message if not hint else f"{message}\n\n[blue]Hint:[/blue] {hint}"
    console.print(Panel(body, title=f"[red]{title}[/red]", border_style="red"))


def get_config(ctx: click.Context) -> HostConfig:
    """HostConfig built by the root command."""
    config = ctx.find_object(HostConfig)
    if config is None:
        config = HostConfig()
        ctx.obj = config
    return config


def handle_errors(func: Callable) -> Callable:
    """Turn uncaught errors in a command into an error panel and exit 1.

    VmhopError carries its own hint. click's own exceptions and sys.exit
    pass through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (SystemExit, click.ClickException):
            raise
        except VmhopError as exc:
            logger.debug(f"{func.__name__} failed: {exc}")
            show_error_panel("Error", str(exc), exc.hint)
            sys.exit(1)
        except Exception as exc:
            logger.error(f"Unexpected error in {func.__name__}", exc=exc, console_output=False)
            show_error_panel("Unexpected error", str(exc), "Run with --debug and check the log file")
            sys.exit(1)

    return wrapper
