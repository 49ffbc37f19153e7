# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Make sure an ssh-agent with a loaded key is available before connecting."""

import os
import re
import subprocess
from typing import Dict

from vmhop.utils.logging import get_logger

logger = get_logger(__name__)

# ssh-add -l exit codes
AGENT_HAS_KEYS = 0
AGENT_NO_KEYS = 1
AGENT_UNAVAILABLE = 2

_AGENT_VAR = re.compile(r"^(SSH_AUTH_SOCK|SSH_AGENT_PID)=([^;]+);", re.MULTILINE)


def parse_agent_output(output: str) -> Dict[str, str]:
    """Extract SSH_AUTH_SOCK and SSH_AGENT_PID from `ssh-agent -s` output."""
    return {name: value for name, value in _AGENT_VAR.findall(output)}


def agent_status() -> int:
    """Exit status of `ssh-add -l` (see AGENT_* constants)."""
    result = subprocess.run(
        ["ssh-add", "-l"],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    return result.returncode


def start_agent() -> bool:
    """Start ssh-agent and export its variables into this process.

    Child ssh processes inherit os.environ, so they find the new agent.
    """
    logger.info("Starting ssh-agent...")
    result = subprocess.run(["ssh-agent", "-s"], capture_output=True, text=True, timeout=10)
    if result.returncode != 0:
        logger.warning(f"ssh-agent failed: {result.stderr.strip()}")
        return False

    env = parse_agent_output(result.stdout)
    if "SSH_AUTH_SOCK" not in env:
        logger.warning("Could not parse ssh-agent output")
        return False

    os.environ.update(env)
    logger.debug(f"ssh-agent running: {env}")
    return True


def add_default_key() -> bool:
    """Run ssh-add interactively so the operator can enter a passphrase."""
    logger.info("Adding SSH key...")
    result = subprocess.run(["ssh-add"])
    return result.returncode == 0


def ensure_ssh_agent() -> bool:
    """Start an agent and add the default key when needed.

    Never raises; problems are reported and the caller carries on, since ssh
    can still prompt for keys or passwords on its own.

    Returns:
        True if an agent with at least one identity is available afterwards
    """
    try:
        status = agent_status()
        if status == AGENT_UNAVAILABLE:
            if not start_agent():
                return False
            status = agent_status()

        if status == AGENT_NO_KEYS:
            add_default_key()
            status = agent_status()

        return status == AGENT_HAS_KEYS
    except FileNotFoundError as e:
        logger.warning(f"OpenSSH agent tools not found: {e}")
        return False
    except (OSError, subprocess.SubprocessError) as e:
        logger.error("Error setting up SSH agent", exc=e)
        return False
