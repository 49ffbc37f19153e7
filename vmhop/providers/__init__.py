# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Cloud inventory providers."""

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, List, Sequence

from vmhop.models.server import Server
from vmhop.providers.base import InventoryProvider
from vmhop.providers.binarylane import BinaryLaneProvider
from vmhop.providers.vultr import VultrProvider

if TYPE_CHECKING:
    from vmhop.host_config import HostConfig


def build_providers(config: "HostConfig") -> List[InventoryProvider]:
    """Providers in display order."""
    return [
        VultrProvider(config.vultr_api_key, timeout=config.provider_timeout),
        BinaryLaneProvider(config.binarylane_api_key, timeout=config.provider_timeout),
    ]


def fetch_all_servers(providers: Sequence[InventoryProvider]) -> List[Server]:
    """Fetch every provider in parallel and keep servers that have an IP.

    Order follows `providers`, not completion order.
    """
    if not providers:
        return []

    with ThreadPoolExecutor(max_workers=len(providers)) as executor:
        results = list(executor.map(lambda p: p.fetch(), providers))

    return [server for servers in results for server in servers if server.ip]


__all__ = [
    "BinaryLaneProvider",
    "InventoryProvider",
    "VultrProvider",
    "build_providers",
    "fetch_all_servers",
]
