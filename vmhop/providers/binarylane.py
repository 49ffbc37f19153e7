# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""BinaryLane servers (https://api.binarylane.com.au/reference/)."""

from typing import Any, List, Optional

from vmhop.models.server import Server
from vmhop.providers.base import InventoryProvider


def _first_ipv4(server: dict) -> Optional[str]:
    v4 = (server.get("networks") or {}).get("v4") or []
    if not v4:
        return None
    return v4[0].get("ip_address") or None


class BinaryLaneProvider(InventoryProvider):
    name = "binarylane"
    url = "https://api.binarylane.com.au/v2/servers"

    def parse(self, data: Any) -> List[Server]:
        servers = []
        for server in data.get("servers") or []:
            server_id = str(server["id"])
            servers.append(
                Server(
                    provider=self.name,
                    id=server_id,
                    name=server.get("name") or f"BL-Server-{server_id}",
                    ip=_first_ipv4(server),
                )
            )
        return servers
