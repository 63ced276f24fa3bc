# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""HTTPS client for the Treblle discovery endpoint.

One ``DeliveryClient`` owns one pooled ``httpx.AsyncClient`` for the
lifetime of an invocation. Every batch POST reuses its keep-alive
connections.
"""

import json
import logging
from typing import Sequence

import httpx

from ..models.api import DiscoveredApi

logger = logging.getLogger(__name__)

USER_AGENT = "Treblle-AWS-Discovery/1.0"

DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_LIMITS = httpx.Limits(
    max_connections=50,
    max_keepalive_connections=10,
    keepalive_expiry=30.0,
)


class DeliveryError(Exception):
    """Raised when a batch is rejected or cannot be transmitted."""

    def __init__(self, message: str, status_code: int | None = None):
        """
        Args:
            message: Error description
            status_code: HTTP status returned by the endpoint, None on transport errors
        """
        super().__init__(message)
        self.status_code = status_code


def encode_batch(apis: Sequence[DiscoveredApi]) -> bytes:
    """Serialize a batch as a compact JSON array."""
    payload = [api.to_payload() for api in apis]
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


class DeliveryClient:
    """
    Async client posting inventory batches to the discovery endpoint.

    Use as an async context manager so the connection pool is opened and
    closed with the invocation::

        async with DeliveryClient(url, api_key) as client:
            await client.post_batch(apis)
    """

    def __init__(
        self,
        endpoint_url: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        limits: httpx.Limits | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            endpoint_url: Full URL batches are POSTed to
            api_key: Value of the x-api-key header
            timeout: Per-request timeout in seconds
            limits: Connection pool limits (keep-alive, max sockets)
            transport: Optional transport override (used by tests)
        """
        self.endpoint_url = endpoint_url
        self._api_key = api_key
        self._timeout = timeout
        self._limits = limits or DEFAULT_LIMITS
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "DeliveryClient":
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            limits=self._limits,
            transport=self._transport,
        )
        logger.debug(f"Opened delivery connection pool for {self.endpoint_url}")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _headers(self, body: bytes) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Content-Length": str(len(body)),
            "x-api-key": self._api_key,
            "User-Agent": USER_AGENT,
        }

    async def post_batch(self, apis: Sequence[DiscoveredApi]) -> str:
        """
        POST one batch of APIs.

        Args:
            apis: The batch to send

        Returns:
            Response body text on a 2xx status

        Raises:
            DeliveryError: On a non-2xx status or a transport failure
        """
        if self._client is None:
            raise RuntimeError("DeliveryClient must be entered before posting")

        body = encode_batch(apis)
        try:
            response = await self._client.post(
                self.endpoint_url,
                content=body,
                headers=self._headers(body),
            )
        except httpx.HTTPError as exc:
            raise DeliveryError(f"Transport error: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise DeliveryError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response.text
