# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Tests for vmhop/core/ssh_agent.py"""

import os
import subprocess
from unittest.mock import Mock, patch

import pytest

from vmhop.core.ssh_agent import ensure_ssh_agent, parse_agent_output

AGENT_OUTPUT = (
    "SSH_AUTH_SOCK=/tmp/ssh-XXXXabcd/agent.1234; export SSH_AUTH_SOCK;\n"
    "SSH_AGENT_PID=1235; export SSH_AGENT_PID;\n"
    "echo Agent pid 1235;\n"
)


def _result(returncode=0, stdout="", stderr=""):
    return Mock(returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def clean_agent_env(monkeypatch):
    monkeypatch.delenv("SSH_AUTH_SOCK", raising=False)
    monkeypatch.delenv("SSH_AGENT_PID", raising=False)


class TestParseAgentOutput:
    def test_parses_sh_output(self):
        assert parse_agent_output(AGENT_OUTPUT) == {
            "SSH_AUTH_SOCK": "/tmp/ssh-XXXXabcd/agent.1234",
            "SSH_AGENT_PID": "1235",
        }

    def test_garbage(self):
        assert parse_agent_output("nothing here") == {}


class TestEnsureSSHAgent:
    @patch("vmhop.core.ssh_agent.subprocess.run")
    def test_agent_with_keys_does_nothing_else(self, mock_run):
        mock_run.return_value = _result(0)

        assert ensure_ssh_agent() is True
        mock_run.assert_called_once()
        assert mock_run.call_args[0][0] == ["ssh-add", "-l"]

    @patch("vmhop.core.ssh_agent.subprocess.run")
    def test_no_keys_runs_ssh_add(self, mock_run):
        mock_run.side_effect = [_result(1), _result(0), _result(0)]

        with patch("vmhop.core.ssh_agent.logger"):
            assert ensure_ssh_agent() is True

        commands = [c[0][0] for c in mock_run.call_args_list]
        assert commands == [["ssh-add", "-l"], ["ssh-add"], ["ssh-add", "-l"]]

    @patch("vmhop.core.ssh_agent.subprocess.run")
    def test_no_agent_starts_one_and_exports_env(self, mock_run, clean_agent_env):
        mock_run.side_effect = [
            _result(2),
            _result(0, stdout=AGENT_OUTPUT),
            _result(1),
            _result(0),
            _result(0),
        ]

        with patch("vmhop.core.ssh_agent.logger"):
            assert ensure_ssh_agent() is True

        assert os.environ["SSH_AUTH_SOCK"] == "/tmp/ssh-XXXXabcd/agent.1234"
        assert os.environ["SSH_AGENT_PID"] == "1235"
        commands = [c[0][0] for c in mock_run.call_args_list]
        assert commands[1] == ["ssh-agent", "-s"]

    @patch("vmhop.core.ssh_agent.subprocess.run")
    def test_agent_start_failure_is_not_fatal(self, mock_run, clean_agent_env):
        mock_run.side_effect = [_result(2), _result(1, stderr="boom")]

        with patch("vmhop.core.ssh_agent.logger"):
            assert ensure_ssh_agent() is False

    @patch("vmhop.core.ssh_agent.subprocess.run")
    def test_missing_tools_is_not_fatal(self, mock_run):
        mock_run.side_effect = FileNotFoundError("ssh-add")

        with patch("vmhop.core.ssh_agent.logger") as mock_logger:
            assert ensure_ssh_agent() is False

        mock_logger.warning.assert_called_once()

    @patch("vmhop.core.ssh_agent.subprocess.run")
    def test_timeout_is_not_fatal(self, mock_run, clean_agent_env):
        mock_run.side_effect = [_result(2), subprocess.TimeoutExpired(["ssh-agent"], 10)]

        with patch("vmhop.core.ssh_agent.logger") as mock_logger:
            assert ensure_ssh_agent() is False

        mock_logger.error.assert_called_once()
