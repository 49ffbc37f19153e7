# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Pick a server and connect, or list the inventory."""

from typing import List

import click
from rich.table import Table

from vmhop.cli import cli
from vmhop.cli.helpers import console, get_config, handle_errors
from vmhop.cli.picker import filter_servers, format_server, prompt_for_server
from vmhop.core.port_store import PortStore
from vmhop.core.session import run_session
from vmhop.core.ssh_agent import ensure_ssh_agent
from vmhop.host_config import HostConfig
from vmhop.models.server import HostTarget, Server
from vmhop.providers import build_providers, fetch_all_servers
from vmhop.utils.logging import get_logger

logger = get_logger(__name__)

NO_SERVERS_MESSAGE = "No servers found from either Vultr or BinaryLane."


def _load_servers(config: HostConfig) -> List[Server]:
    providers = build_providers(config)
    if not any(p.configured for p in providers):
        logger.warning(
            "No provider API keys configured. Set VULTR_API_KEY and/or BINARYLANE_API_KEY "
            "(environment, .env or ~/.config/vmhop/config.yml)"
        )
        return []

    with console.status("[blue]Fetching servers...[/blue]"):
        return fetch_all_servers(providers)


@cli.command()
@click.option("--host", default=None, help="Connect to this host directly, skipping the picker.")
@click.option("--no-agent", is_flag=True, help="Don't start ssh-agent or add keys.")
@click.pass_context
@handle_errors
def connect(ctx, host, no_agent):
    """Pick a server and open an SSH session (default command)."""
    config = get_config(ctx)

    if config.manage_agent and not no_agent:
        ensure_ssh_agent()

    if host:
        run_session(HostTarget(host=host, user=config.ssh_user), config)
        return

    servers = _load_servers(config)
    if not servers:
        console.print(f"[red]{NO_SERVERS_MESSAGE}[/red]")
        return

    server = prompt_for_server(servers)
    if server is None:
        console.print("[yellow]Operation cancelled[/yellow]")
        return

    logger.debug(f"Selected {format_server(server)}")
    run_session(HostTarget.from_server(server, config.ssh_user), config)


@cli.command(name="list")
@click.argument("query", required=False, default="")
@click.pass_context
@handle_errors
def list_servers(ctx, query):
    """List servers from all providers, optionally filtered by QUERY."""
    config = get_config(ctx)

    servers = filter_servers(_load_servers(config), query)
    if not servers:
        console.print(f"[yellow]{NO_SERVERS_MESSAGE}[/yellow]")
        return

    ports = PortStore(config.port_store_path).load()

    table = Table(title="Servers")
    table.add_column("Name", style="green")
    table.add_column("IP", style="yellow")
    table.add_column("Provider")
    table.add_column("Tags", style="blue")
    table.add_column("Port", justify="right")

    for server in servers:
        provider_style = "cyan" if server.provider == "vultr" else "magenta"
        port = ports.get(server.ip)
        table.add_row(
            server.name,
            server.ip,
            f"[{provider_style}]{server.provider}[/{provider_style}]",
            ", ".join(server.tags),
            str(port) if port else f"[dim]{config.default_port}[/dim]",
        )

    console.print(table)
