# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Minimal .env parsing for API keys."""

from pathlib import Path


def parse_env_file(env_path: Path) -> dict[str, str]:
    """Parse a .env file into a dictionary.

    Handles:
    - KEY=value format (an optional leading "export " is dropped)
    - Quoted values (single and double quotes)
    - Comments (lines starting with #)
    - Empty lines
    - Inline comments after unquoted values

    Args:
        env_path: Path to .env file

    Returns:
        Dictionary of environment variables
    """
    env_vars: dict[str, str] = {}

    if not env_path.exists():
        return env_vars

    try:
        content = env_path.read_text()
    except OSError:
        return env_vars

    for line in content.splitlines():
        line = line.strip()

        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export ") :].strip()

        if not key:
            continue

        value = value.strip()
        quoted = len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"')

        if quoted:
            value = value[1:-1]
        elif " #" in value:
            value = value.split(" #")[0].strip()

        env_vars[key] = value

    return env_vars
