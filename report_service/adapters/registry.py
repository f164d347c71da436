# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Platform Adapter Registry

Maps each platform to its adapter class and builds adapter instances
bound to a gateway client.
"""

from typing import Dict, Iterable, Optional, Type, Union

from ..client.gateway_client import GatewayClient
from ..models.project_data import Platform
from ..utils.errors import UnsupportedPlatformError
from .base import BasePlatformAdapter
from .jira import JiraAdapter
from .monday import MondayAdapter
from .trofos import TrofosAdapter


class AdapterRegistry:
    """Platform -> adapter class lookup"""

    def __init__(self, adapters: Optional[Iterable[Type[BasePlatformAdapter]]] = None):
        self._adapters: Dict[Platform, Type[BasePlatformAdapter]] = {}
        for adapter_cls in adapters or ():
            self.register(adapter_cls)

    def register(self, adapter_cls: Type[BasePlatformAdapter]) -> None:
        self._adapters[adapter_cls.platform] = adapter_cls

    @property
    def platforms(self) -> list:
        return list(self._adapters)

    def create(self, platform: Union[str, Platform], client: GatewayClient) -> BasePlatformAdapter:
        """
        Create the adapter for a platform.

        Raises:
            UnsupportedPlatformError: If no adapter is registered for the platform
        """
        resolved = Platform.parse(platform)
        adapter_cls = self._adapters.get(resolved)
        if adapter_cls is None:
            raise UnsupportedPlatformError(resolved.value)
        return adapter_cls(client)


def default_registry() -> AdapterRegistry:
    return AdapterRegistry([JiraAdapter, MondayAdapter, TrofosAdapter])
