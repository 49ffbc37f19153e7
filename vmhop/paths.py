# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Centralized path definitions for vmhop.

Usage:
    from vmhop.paths import HostPaths

    config_file = HostPaths.config_file()
    store = HostPaths.port_store_file()
"""

from pathlib import Path


class HostPaths:
    """Paths on the operator's machine."""

    # XDG config directory for vmhop
    @staticmethod
    def config_dir() -> Path:
        """~/.config/vmhop/"""
        return Path.home() / ".config" / "vmhop"

    @staticmethod
    def config_file() -> Path:
        """~/.config/vmhop/config.yml"""
        return HostPaths.config_dir() / "config.yml"

    @staticmethod
    def env_file() -> Path:
        """~/.config/vmhop/.env - API keys."""
        return HostPaths.config_dir() / ".env"

    # XDG data directory
    @staticmethod
    def data_dir() -> Path:
        """~/.local/share/vmhop/"""
        return Path.home() / ".local" / "share" / "vmhop"

    @staticmethod
    def log_dir() -> Path:
        """~/.local/share/vmhop/logs/"""
        return HostPaths.data_dir() / "logs"

    # Shared with other tools, must stay at this exact location
    @staticmethod
    def port_store_file() -> Path:
        """~/.ssh_ports.json - memoized SSH ports keyed by host."""
        return Path.home() / ".ssh_ports.json"


class SSHDefaults:
    """Defaults for the spawned ssh client."""

    BINARY = "ssh"
    PORT = 22
    USER = "root"

    # ssh exits with 255 when the connection itself failed
    CONNECTION_ERROR_STATUS = 255

    MIN_PORT = 1
    MAX_PORT = 65535
