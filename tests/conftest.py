# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Pytest fixtures for vmhop tests.

Nothing here touches the network or spawns a real ssh: connection attempts
are scripted and HOME points at a temporary directory.
"""

import pytest

from vmhop.core.connection import ConnectionOutcome
from vmhop.core.port_store import PortStore
from vmhop.host_config import HostConfig


class ScriptedConnect:
    """Stands in for a connection attempt, replaying a list of outcomes.

    Records every (target, port) it was called with.
    """

    def __init__(self, *outcomes: ConnectionOutcome):
        self.outcomes = list(outcomes)
        self.calls = []

    def __call__(self, target, port):
        self.calls.append((target, port))
        if not self.outcomes:
            raise AssertionError(f"Unexpected attempt #{len(self.calls)} on port {port}")
        return self.outcomes.pop(0)

    @property
    def ports(self):
        return [port for _, port in self.calls]


class ScriptedPrompt:
    """Stands in for the port prompt."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = 0

    def __call__(self, default):
        self.calls += 1
        return self.answers.pop(0)


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """Point HOME at a temp dir and run from an empty working directory.

    Yields:
        Path: The fake home directory
    """
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for var in ("VULTR_API_KEY", "BINARYLANE_API_KEY", "VMHOP_PORT_STORE", "VMHOP_SSH_USER"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "ssh_ports.json"


@pytest.fixture
def store(store_path):
    return PortStore(store_path)


@pytest.fixture
def config(fake_home, store_path):
    """HostConfig with defaults, an empty environment and a temp port store."""
    return HostConfig(
        config_path=fake_home / ".config" / "vmhop" / "config.yml",
        environ={},
        port_store=store_path,
    )


@pytest.fixture
def connect_script():
    """Factory: connect_script(ConnectionOutcome.FAILURE, ConnectionOutcome.SUCCESS)"""
    return ScriptedConnect


@pytest.fixture
def prompt_script():
    """Factory: prompt_script(2200) or prompt_script(None) for an aborted prompt."""
    return ScriptedPrompt
