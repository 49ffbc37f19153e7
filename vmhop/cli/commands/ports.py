# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Inspect and edit remembered SSH ports."""

import click
from rich.table import Table

from vmhop.cli import cli
from vmhop.cli.helpers import console, get_config, handle_errors
from vmhop.core.port_store import PortStore, parse_port
from vmhop.utils.exceptions import InvalidPortInput, StoreWriteError


@cli.group(invoke_without_command=True)
@click.pass_context
def ports(ctx):
    """Remembered SSH ports (list/set/forget)."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(ports_list)


@ports.command(name="list")
@click.pass_context
@handle_errors
def ports_list(ctx):
    """Show remembered ports."""
    store = PortStore(get_config(ctx).port_store_path)
    entries = store.load()

    if not entries:
        console.print(f"[dim]No remembered ports in {store.path}[/dim]")
        return

    table = Table(title=str(store.path))
    table.add_column("Host", style="green")
    table.add_column("Port", justify="right", style="yellow")
    for host, port in sorted(entries.items()):
        table.add_row(host, str(port))
    console.print(table)


@ports.command(name="set")
@click.argument("host")
@click.argument("port")
@click.pass_context
@handle_errors
def ports_set(ctx, host, port):
    """Remember PORT for HOST."""
    value = parse_port(port)
    if value is None:
        raise InvalidPortInput(port)

    store = PortStore(get_config(ctx).port_store_path)
    if not store.save(host, value):
        raise StoreWriteError(store.path, "see log for details")
    console.print(f"[green]✓ {host} -> {value}[/green]")


@ports.command(name="forget")
@click.argument("host")
@click.pass_context
@handle_errors
def ports_forget(ctx, host):
    """Forget the remembered port for HOST."""
    store = PortStore(get_config(ctx).port_store_path)
    if store.remove(host):
        console.print(f"[green]✓ Forgot port for {host}[/green]")
    else:
        console.print(f"[yellow]No remembered port for {host}[/yellow]")
