# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Exception types shared across vmhop.

None of these escape the connect workflow: each is caught by the component
that can react to it and turned into an operator-visible message.
"""

from pathlib import Path
from typing import Optional


class VmhopError(Exception):
    """Base class for vmhop errors."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint


class StoreReadError(VmhopError):
    """The port store file exists but could not be read or parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Cannot read port store {path}: {reason}")


class StoreWriteError(VmhopError):
    """The port store file could not be written."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Cannot write port store {path}: {reason}")


class LaunchError(VmhopError):
    """The ssh client process could not be started at all."""

    def __init__(self, binary: str, reason: str):
        self.binary = binary
        super().__init__(
            f"Failed to start SSH process '{binary}': {reason}",
            hint="Check that OpenSSH is installed and on your PATH",
        )


class InvalidPortInput(VmhopError):
    """Text that is not an integer port in 1-65535."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid port: {value!r}", hint="Use a number between 1 and 65535")


class ProviderError(VmhopError):
    """An inventory provider request failed."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        super().__init__(f"Error fetching {provider} servers: {reason}")
