# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Inventory records and connection targets."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Server:
    """A VM as reported by one provider."""

    provider: str
    id: str
    name: str
    ip: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    @property
    def search_text(self) -> str:
        """Lowercased text the picker filters on."""
        return " ".join([self.name, self.ip or "", self.provider, *self.tags]).lower()


@dataclass(frozen=True)
class HostTarget:
    """Where to connect and as whom. Fixed for one session."""

    host: str
    user: str

    @property
    def destination(self) -> str:
        return f"{self.user}@{self.host}"

    @classmethod
    def from_server(cls, server: Server, user: str) -> "HostTarget":
        if not server.ip:
            raise ValueError(f"Server {server.name} has no IP address")
        return cls(host=server.ip, user=user)
