"""Centralized host-side configuration for vmhop.

Built once by the CLI and handed to the components that need it.
"""

import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional

import yaml
from pydantic import ValidationError

from vmhop.models.host_config import HostConfigModel
from vmhop.paths import HostPaths
from vmhop.utils.env import parse_env_file

logger = logging.getLogger(__name__)


def load_environment(
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> dict[str, str]:
    """Merge .env files below the real environment.

    Priority (highest first): process environment, ./.env, ~/.config/vmhop/.env
    """
    merged: dict[str, str] = {}
    merged.update(parse_env_file(HostPaths.env_file()))
    merged.update(parse_env_file((cwd or Path.cwd()) / ".env"))
    merged.update(os.environ if environ is None else environ)
    return merged


class HostConfig:
    """Manages configuration from ~/.config/vmhop/config.yml plus environment."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        user: Optional[str] = None,
        port_store: Optional[Path] = None,
    ):
        self.config_path = config_path or HostPaths.config_file()
        self.env = load_environment(environ)
        self._user_override = user
        self._port_store_override = port_store
        self._model = self._load()

    def _load(self) -> HostConfigModel:
        """Load configuration from file, falling back to defaults."""
        if not self.config_path.exists():
            return HostConfigModel()

        try:
            with open(self.config_path) as f:
                raw_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {self.config_path}: {e}")
            return HostConfigModel()

        if not isinstance(raw_config, dict):
            logger.warning(f"Ignoring {self.config_path}: expected a mapping at top level")
            return HostConfigModel()

        try:
            return HostConfigModel.model_validate(raw_config)
        except ValidationError as e:
            logger.warning(f"Config validation errors: {e}")
            return HostConfigModel()

    @property
    def ssh_user(self) -> str:
        """Login user. Priority: --user, VMHOP_SSH_USER, config, "root"."""
        return self._user_override or self.env.get("VMHOP_SSH_USER") or self._model.ssh.user

    @property
    def ssh_binary(self) -> str:
        return self._model.ssh.binary

    @property
    def default_port(self) -> int:
        return self._model.ssh.default_port

    @property
    def ssh_extra_args(self) -> List[str]:
        return list(self._model.ssh.extra_args)

    @property
    def manage_agent(self) -> bool:
        return self._model.ssh.manage_agent

    @property
    def port_store_path(self) -> Path:
        """Port store file. Priority: --port-store, VMHOP_PORT_STORE, config, ~/.ssh_ports.json."""
        if self._port_store_override:
            return Path(self._port_store_override).expanduser()
        env_path = self.env.get("VMHOP_PORT_STORE")
        if env_path:
            return Path(env_path).expanduser()
        if self._model.port_store:
            return Path(self._model.port_store).expanduser()
        return HostPaths.port_store_file()

    @property
    def vultr_api_key(self) -> Optional[str]:
        if not self._model.providers.vultr.enabled:
            return None
        return self.env.get("VULTR_API_KEY") or self._model.providers.vultr.api_key

    @property
    def binarylane_api_key(self) -> Optional[str]:
        if not self._model.providers.binarylane.enabled:
            return None
        return self.env.get("BINARYLANE_API_KEY") or self._model.providers.binarylane.api_key

    @property
    def provider_timeout(self) -> float:
        return self._model.providers.timeout
