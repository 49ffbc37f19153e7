# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Searchable server picker."""

from typing import List, Optional, Sequence

import questionary

from vmhop.models.server import Server

# questionary replaces a None value with the title, so Cancel needs its own marker
CANCEL = "__cancel__"

PICKER_STYLE = questionary.Style(
    [
        ("qmark", "fg:ansiblue bold"),
        ("question", "fg:ansiblue"),
        ("pointer", "fg:ansigreen bold"),
        ("highlighted", "fg:ansigreen"),
    ]
)


def format_server(server: Server) -> str:
    """One picker line: name (ip) [provider] {tags}"""
    label = f"{server.name} ({server.ip}) [{server.provider}]"
    if server.tags:
        label += " {" + ", ".join(server.tags) + "}"
    return label


def filter_servers(servers: Sequence[Server], query: str) -> List[Server]:
    """Servers whose name, ip, provider or tags contain query (any case)."""
    needle = query.strip().lower()
    if not needle:
        return list(servers)
    return [server for server in servers if needle in server.search_text]


def build_choices(servers: Sequence[Server]) -> List[questionary.Choice]:
    """One choice per server plus a trailing Cancel."""
    choices = [questionary.Choice(title=format_server(server), value=server) for server in servers]
    choices.append(questionary.Choice(title="Cancel", value=CANCEL))
    return choices


def prompt_for_server(servers: Sequence[Server]) -> Optional[Server]:
    """Let the operator type to filter and pick a server.

    Returns:
        The chosen server, or None for Cancel / Ctrl+C
    """
    try:
        selected = questionary.select(
            "Search and select a server (or Cancel to exit):",
            choices=build_choices(servers),
            use_search_filter=True,
            use_jk_keys=False,
            style=PICKER_STYLE,
        ).ask()
    except KeyboardInterrupt:
        return None

    if selected is None or selected == CANCEL:
        return None
    return selected
