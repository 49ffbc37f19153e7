# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT

"""Pydantic models for host configuration (~/.config/vmhop/config.yml)."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SSHConfig(BaseModel):
    """How the ssh client is invoked.

    manage_agent: Start ssh-agent and load the default key before connecting
                  when no agent or no identities are available.
    """

    user: str = "root"
    binary: str = "ssh"
    default_port: int = Field(default=22, gt=0, lt=65536)
    extra_args: List[str] = Field(default_factory=list)
    manage_agent: bool = True

    @field_validator("user", "binary")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class ProviderKeyConfig(BaseModel):
    """API credentials for one provider."""

    api_key: Optional[str] = None
    enabled: bool = True


class ProvidersConfig(BaseModel):
    """Inventory provider settings."""

    vultr: ProviderKeyConfig = Field(default_factory=ProviderKeyConfig)
    binarylane: ProviderKeyConfig = Field(default_factory=ProviderKeyConfig)
    timeout: float = Field(default=15.0, gt=0)


class HostConfigModel(BaseModel):
    """Root model for config.yml."""

    model_config = ConfigDict(extra="ignore")

    ssh: SSHConfig = Field(default_factory=SSHConfig)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    port_store: Optional[str] = None
