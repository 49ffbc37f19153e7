# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Vultr instances (https://www.vultr.com/api/#tag/instances)."""

from typing import Any, List

from vmhop.models.server import Server
from vmhop.providers.base import InventoryProvider


class VultrProvider(InventoryProvider):
    name = "vultr"
    url = "https://api.vultr.com/v2/instances"

    def parse(self, data: Any) -> List[Server]:
        servers = []
        for instance in data.get("instances") or []:
            instance_id = str(instance["id"])
            servers.append(
                Server(
                    provider=self.name,
                    id=instance_id,
                    name=instance.get("label") or f"Vultr-{instance_id}",
                    ip=instance.get("main_ip") or None,
                    tags=list(instance.get("tags") or []),
                )
            )
        return servers
