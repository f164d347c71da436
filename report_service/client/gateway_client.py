# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

# Report Service Gateway Client
"""
Async client for the platform integrations gateway.
Every failure is raised as a ConnectorError subclass.
"""

import logging
from typing import Any, Optional

import httpx

from ..config import Settings
from ..utils.errors import ConnectorAuthError, ConnectorError, ConnectorNotFoundError

logger = logging.getLogger(__name__)


class GatewayClient:
    """
    Async client for the integrations gateway.

    Usage:
        async with GatewayClient("http://localhost:3000", token) as client:
            body = await client.get_json("/api/connections/c1/projects/p1")
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize gateway client.

        Args:
            base_url: Gateway base URL
            token: Optional bearer token
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token = token
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "GatewayClient":
        return cls(
            base_url=settings.api_gateway_url,
            token=settings.api_gateway_token,
            timeout=float(settings.request_timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "GatewayClient":
        """Enter async context."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context."""
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get HTTP client, creating one if needed."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self._token:
                headers["Authorization"] = f"Bearer {self._token}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def get_json(self, path: str) -> Any:
        """
        GET a path and return its decoded JSON body.

        Raises:
            ConnectorAuthError: 401/403
            ConnectorNotFoundError: 404
            ConnectorError: network failure, timeout, other non-200,
                malformed JSON or an empty body
        """
        client = self._get_client()
        url = f"{self.base_url}{path}"
        try:
            response = await client.get(path)
        except httpx.TimeoutException as e:
            raise ConnectorError(f"Request timed out after {self.timeout}s", url=url) from e
        except httpx.HTTPError as e:
            raise ConnectorError(f"Request failed: {e}", url=url) from e

        if response.status_code in (401, 403):
            raise ConnectorAuthError(
                "Gateway authentication failed. Please verify the connection credentials.",
                status_code=response.status_code,
                url=url,
            )
        if response.status_code == 404:
            raise ConnectorNotFoundError("Resource not found on gateway", url=url)
        if response.status_code != 200:
            raise ConnectorError(
                f"Unexpected status {response.status_code}",
                status_code=response.status_code,
                url=url,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ConnectorError("Malformed JSON in gateway response", status_code=200, url=url) from e
        if body is None or body == {} or body == []:
            raise ConnectorError("Empty gateway response", status_code=200, url=url)

        logger.debug("GET %s -> %d", url, response.status_code)
        return body
