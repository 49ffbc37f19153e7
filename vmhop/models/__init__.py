# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Data models for vmhop."""

from vmhop.models.host_config import (
    HostConfigModel,
    ProviderKeyConfig,
    ProvidersConfig,
    SSHConfig,
)
from vmhop.models.server import HostTarget, Server

__all__ = [
    "HostConfigModel",
    "HostTarget",
    "ProviderKeyConfig",
    "ProvidersConfig",
    "SSHConfig",
    "Server",
]
