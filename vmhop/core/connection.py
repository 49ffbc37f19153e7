# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""One interactive ssh attempt and how its exit status is read.

ssh reports connection-level problems (refused, timed out, unreachable,
authentication rejected before a shell started) with exit status 255. Any
other status means a session was established and then ended, even when the
remote shell's last command failed, so it counts as a success.
"""

import subprocess
from enum import Enum
from typing import List, Sequence

from vmhop.paths import SSHDefaults
from vmhop.utils.exceptions import LaunchError
from vmhop.utils.logging import get_logger

logger = get_logger(__name__)


class ConnectionOutcome(Enum):
    """Result of a single ssh attempt."""

    SUCCESS = "success"
    FAILURE = "failure"
    LAUNCH_ERROR = "launch_error"


def classify_exit_status(status: int) -> ConnectionOutcome:
    """Map an ssh exit status to an outcome. Only 255 is a failure."""
    if status == SSHDefaults.CONNECTION_ERROR_STATUS:
        return ConnectionOutcome.FAILURE
    return ConnectionOutcome.SUCCESS


def build_ssh_command(
    host: str,
    port: int,
    user: str,
    ssh_binary: str = SSHDefaults.BINARY,
    extra_args: Sequence[str] = (),
) -> List[str]:
    """Build the argv for an interactive session."""
    return [ssh_binary, *extra_args, "-p", str(port), f"{user}@{host}"]


def _spawn(cmd: List[str]) -> int:
    """Run cmd attached to this terminal and return its exit status.

    Raises:
        LaunchError: If the process could not be started
    """
    try:
        # No capture: ssh inherits stdin/stdout/stderr
        process = subprocess.Popen(cmd)
    except FileNotFoundError as e:
        raise LaunchError(cmd[0], "command not found") from e
    except OSError as e:
        raise LaunchError(cmd[0], str(e)) from e

    # Ctrl+C reaches ssh as well; its exit status decides what happened
    while True:
        try:
            return process.wait()
        except KeyboardInterrupt:
            continue


def attempt_connection(
    host: str,
    port: int,
    user: str,
    ssh_binary: str = SSHDefaults.BINARY,
    extra_args: Sequence[str] = (),
) -> ConnectionOutcome:
    """Open an interactive ssh session and block until it ends.

    Args:
        host: IP address or resolvable name
        port: Port to connect to
        user: Login user
        ssh_binary: ssh client executable
        extra_args: Extra options placed before -p

    Returns:
        ConnectionOutcome for the finished process
    """
    cmd = build_ssh_command(host, port, user, ssh_binary, extra_args)

    logger.print(
        f"\n[blue]Attempting SSH into[/blue] [green]{user}@{host}[/green] "
        f"[dim]on port {port}[/dim]..."
    )
    logger.print('(Use Ctrl+D or type "exit" to disconnect)\n', style="dim")
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        status = _spawn(cmd)
    except LaunchError as e:
        logger.error(str(e))
        if e.hint:
            logger.print(f"Hint: {e.hint}", style="dim")
        return ConnectionOutcome.LAUNCH_ERROR

    outcome = classify_exit_status(status)
    logger.debug(f"ssh to {host}:{port} exited with {status} -> {outcome.value}", console_output=False)

    if outcome is ConnectionOutcome.SUCCESS:
        logger.success("SSH session ended.")
    return outcome
