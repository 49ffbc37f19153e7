# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""vmhop CLI package."""

import os
from pathlib import Path

import click

from vmhop import __version__
from vmhop.host_config import HostConfig
from vmhop.utils.logging import configure_logging, log_startup_info


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="vmhop")
@click.option("--debug", is_flag=True, help="Verbose output and debug logging.")
@click.option("-u", "--user", default=None, help="SSH login user (default: root).")
@click.option(
    "--port-store",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Port store file (default: ~/.ssh_ports.json).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/vmhop/config.yml).",
)
@click.pass_context
def cli(ctx, debug, user, port_store, config_path):
    """vmhop - Pick a Vultr or BinaryLane server and SSH into it.

    Ports that differ from 22 are remembered per host in ~/.ssh_ports.json.
    """
    if debug:
        os.environ["VMHOP_DEBUG"] = "1"
    configure_logging(debug=debug)
    log_startup_info()

    ctx.obj = HostConfig(config_path=config_path, user=user, port_store=port_store)

    if ctx.invoked_subcommand is None:
        from vmhop.cli.commands.connect import connect

        ctx.invoke(connect)


def main():
    """Main entry point."""
    cli()


from vmhop.cli.commands import connect  # noqa: E402,F401
from vmhop.cli.commands import ports  # noqa: E402,F401
