# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Durable host -> SSH port mapping.

The store is a flat JSON object such as ``{"203.0.113.7": 2222}``. Every
operation reads the whole file and every write replaces the whole file.
There is no locking: two vmhop processes saving at the same moment can lose
one of the writes.

Nothing here raises to the caller. Unreadable files behave like an empty
store and failed writes are reported and return False.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Optional

from vmhop.paths import HostPaths, SSHDefaults
from vmhop.utils.exceptions import StoreReadError, StoreWriteError
from vmhop.utils.logging import get_logger

logger = get_logger(__name__)

_PORT_TEXT = re.compile(r"\+?[0-9]+")


def parse_port(value: Any) -> Optional[int]:
    """Return value as a port number in 1-65535, or None if it isn't one.

    Accepts ints and strings of ASCII digits with surrounding whitespace and
    at most one leading "+".
    Booleans are rejected even though they are ints.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        port = value
    elif isinstance(value, str):
        text = value.strip()
        if not _PORT_TEXT.fullmatch(text):
            return None
        port = int(text)
    else:
        return None

    if SSHDefaults.MIN_PORT <= port <= SSHDefaults.MAX_PORT:
        return port
    return None


class PortStore:
    """Reads and writes the memoized port file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else HostPaths.port_store_file()

    def _read(self) -> Dict[str, int]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise StoreReadError(self.path, str(e)) from e
        except json.JSONDecodeError as e:
            raise StoreReadError(self.path, f"invalid JSON ({e})") from e

        if not isinstance(raw, dict):
            raise StoreReadError(self.path, "expected a JSON object")

        ports: Dict[str, int] = {}
        for host, value in raw.items():
            port = parse_port(value)
            if port is None:
                logger.warning(
                    f"Ignoring invalid port {value!r} for {host} in {self.path}",
                    console_output=False,
                )
                continue
            ports[str(host)] = port
        return ports

    def _write(self, ports: Dict[str, int]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(ports, indent=2), encoding="utf-8")
        except OSError as e:
            raise StoreWriteError(self.path, str(e)) from e

    def load(self) -> Dict[str, int]:
        """Load the full mapping. Missing or unreadable files give {}."""
        if not self.path.exists():
            logger.debug(f"No port store at {self.path}")
            return {}

        try:
            return self._read()
        except StoreReadError as e:
            logger.error("Error loading port configurations", exc=e)
            return {}

    def get(self, host: str) -> Optional[int]:
        """Remembered port for host, or None."""
        return self.load().get(host)

    def save(self, host: str, port: int) -> bool:
        """Set the port for host and write the whole mapping back.

        Returns:
            True if the file was written
        """
        valid = parse_port(port)
        if valid is None:
            logger.error(f"Refusing to save invalid port {port!r} for {host}")
            return False

        ports = self.load()
        ports[host] = valid
        try:
            self._write(ports)
        except StoreWriteError as e:
            logger.error("Error saving port configuration", exc=e)
            return False

        logger.debug(f"Saved port {valid} for {host} to {self.path}")
        return True

    def remove(self, host: str) -> bool:
        """Forget the port for host.

        Returns:
            True if an entry existed and the file was rewritten
        """
        ports = self.load()
        if host not in ports:
            return False

        del ports[host]
        try:
            self._write(ports)
        except StoreWriteError as e:
            logger.error("Error saving port configuration", exc=e)
            return False

        logger.debug(f"Removed port entry for {host} from {self.path}")
        return True
