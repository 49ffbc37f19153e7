# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Base class for cloud inventory providers."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

import requests

from vmhop.models.server import Server
from vmhop.utils.exceptions import ProviderError
from vmhop.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryProvider(ABC):
    """Lists the VMs of one cloud account over its REST API.

    Subclasses set `name` and `url` and implement `parse`.
    """

    name: str = ""
    url: str = ""

    def __init__(self, api_key: Optional[str], timeout: float = 15.0):
        self.api_key = api_key
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get_json(self) -> Any:
        try:
            resp = requests.get(
                self.url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise ProviderError(self.name, str(e)) from e
        except ValueError as e:
            raise ProviderError(self.name, f"invalid JSON response ({e})") from e

    @abstractmethod
    def parse(self, data: Any) -> List[Server]:
        """Map the API response body to servers."""

    def fetch(self) -> List[Server]:
        """Fetch and parse the inventory. Errors are reported and give []."""
        if not self.configured:
            logger.debug(f"No API key for {self.name}, skipping")
            return []

        try:
            servers = self.parse(self._get_json())
        except ProviderError as e:
            logger.error(str(e))
            return []
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"Unexpected {self.name} response", exc=e)
            return []

        logger.debug(f"{self.name}: {len(servers)} servers")
        return servers
