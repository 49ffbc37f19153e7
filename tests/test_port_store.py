# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Tests for vmhop/core/port_store.py"""

import json
from unittest.mock import patch

import pytest

from vmhop.core.port_store import PortStore, parse_port
from vmhop.paths import HostPaths


class TestParsePort:
    """Port validation shared by the store and the prompt"""

    @pytest.mark.parametrize("value", [22, 2222, 65535, 1, "22", " 2200 ", "65535"])
    def test_accepts_valid_ports(self, value):
        assert parse_port(value) == int(str(value).strip())

    def test_single_plus_sign(self):
        assert parse_port("+2222") == 2222

    @pytest.mark.parametrize(
        "value",
        [
            0, 65536, -1, "0", "65536", "-1", "abc", "", "22.5", None, 22.0, True, [22],
            "--1", "+-5", "-+22", "++22", "\u00b2", "\u0662\u0662",
        ],
    )
    def test_rejects_invalid_ports(self, value):
        assert parse_port(value) is None


class TestLoad:
    """Reading the store"""

    def test_missing_file_is_empty(self, store):
        """First run: no file, no error shown"""
        with patch("vmhop.core.port_store.logger") as mock_logger:
            assert store.load() == {}

        mock_logger.error.assert_not_called()
        mock_logger.warning.assert_not_called()

    def test_reads_existing_mapping(self, store, store_path):
        store_path.write_text(json.dumps({"203.0.113.7": 2222, "198.51.100.1": 22}))

        assert store.load() == {"203.0.113.7": 2222, "198.51.100.1": 22}

    def test_corrupt_json_is_empty_and_reported(self, store, store_path):
        store_path.write_text("{not json")

        with patch("vmhop.core.port_store.logger") as mock_logger:
            assert store.load() == {}

        mock_logger.error.assert_called_once()

    def test_non_object_json_is_empty(self, store, store_path):
        store_path.write_text("[22, 2222]")

        with patch("vmhop.core.port_store.logger"):
            assert store.load() == {}

    def test_unreadable_path_is_empty(self, tmp_path):
        """A directory where the file should be can't be read"""
        path = tmp_path / "ports"
        path.mkdir()

        with patch("vmhop.core.port_store.logger") as mock_logger:
            assert PortStore(path).load() == {}

        mock_logger.error.assert_called_once()

    def test_invalid_entries_are_dropped(self, store, store_path):
        store_path.write_text(
            json.dumps({"a": 2222, "b": 0, "c": "abc", "d": 70000, "e": "2200", "f": None})
        )

        assert store.load() == {"a": 2222, "e": 2200}

    def test_non_ascii_digits_are_dropped(self, store, store_path):
        """Digit-like characters int() refuses must not break loading"""
        store_path.write_text(json.dumps({"203.0.113.7": "\u00b2", "198.51.100.1": 2022}))

        assert store.load() == {"198.51.100.1": 2022}
        assert store.get("203.0.113.7") is None

    def test_get(self, store, store_path):
        store_path.write_text(json.dumps({"203.0.113.7": 2222}))

        assert store.get("203.0.113.7") == 2222
        assert store.get("198.51.100.1") is None

    def test_default_location_is_home_ssh_ports(self, fake_home):
        assert PortStore().path == fake_home / ".ssh_ports.json"
        assert HostPaths.port_store_file() == fake_home / ".ssh_ports.json"


class TestSave:
    """Writing the store"""

    def test_round_trip_leaves_other_hosts_alone(self, store, store_path):
        store_path.write_text(json.dumps({"198.51.100.1": 2022, "198.51.100.2": 22}))

        assert store.save("203.0.113.7", 2200) is True

        assert store.load() == {
            "198.51.100.1": 2022,
            "198.51.100.2": 22,
            "203.0.113.7": 2200,
        }

    def test_overwrites_existing_entry(self, store):
        store.save("203.0.113.7", 2200)
        store.save("203.0.113.7", 2201)

        assert store.load() == {"203.0.113.7": 2201}

    def test_creates_file_as_indented_json(self, store, store_path):
        store.save("203.0.113.7", 2200)

        assert store_path.read_text() == json.dumps({"203.0.113.7": 2200}, indent=2)

    def test_creates_missing_parent_directory(self, tmp_path):
        store = PortStore(tmp_path / "nested" / "ports.json")

        assert store.save("h", 2222) is True
        assert store.load() == {"h": 2222}

    def test_replaces_corrupt_file(self, store, store_path):
        store_path.write_text("garbage")

        with patch("vmhop.core.port_store.logger"):
            assert store.save("h", 2222) is True

        assert store.load() == {"h": 2222}

    @pytest.mark.parametrize("port", [0, 65536, -1, "abc"])
    def test_refuses_invalid_port(self, store, store_path, port):
        with patch("vmhop.core.port_store.logger"):
            assert store.save("h", port) is False

        assert not store_path.exists()

    def test_write_failure_returns_false(self, tmp_path):
        path = tmp_path / "ports"
        path.mkdir()

        with patch("vmhop.core.port_store.logger") as mock_logger:
            assert PortStore(path).save("h", 2222) is False

        assert mock_logger.error.call_count >= 1


class TestRemove:
    """Forgetting hosts"""

    def test_removes_only_that_host(self, store):
        store.save("a", 2222)
        store.save("b", 2200)

        assert store.remove("a") is True
        assert store.load() == {"b": 2200}

    def test_unknown_host(self, store):
        store.save("a", 2222)

        assert store.remove("zzz") is False
        assert store.load() == {"a": 2222}
