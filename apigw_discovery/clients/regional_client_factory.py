# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Factory for creating per-region API Gateway clients."""

import logging
import threading

import boto3
from botocore.config import Config

from .aws_client import ApiGatewayClient

logger = logging.getLogger(__name__)


class RegionalClientFactory:
    """
    Creates one ApiGatewayClient per region for a single invocation.

    A factory is built by the discovery pipeline at the start of a run and
    dropped at the end of it, so clients never outlive the invocation and
    are never shared between regions.

    ``get_client`` is called from worker threads. boto3 sessions are not
    thread-safe, so client creation is serialized on a lock.
    """

    def __init__(
        self,
        session: boto3.Session | None = None,
        boto_config: Config | None = None,
    ):
        """
        Initialize with a boto3 session and config.

        Args:
            session: boto3 session the clients are created from.
                     If None, a new session using ambient credentials is created.
            boto_config: Optional botocore Config applied to all clients.
                         If None, each client uses the default adaptive-retry config.
        """
        self._session = session or boto3.Session()
        self._boto_config = boto_config
        self._clients: dict[str, ApiGatewayClient] = {}
        self._lock = threading.Lock()

    def get_client(self, region: str) -> ApiGatewayClient:
        """
        Get or create the API Gateway client for a region.

        Args:
            region: AWS region code (e.g., "us-east-1", "eu-west-1")

        Returns:
            ApiGatewayClient configured for the region. Repeated calls with
            the same region return the same instance.
        """
        with self._lock:
            if region in self._clients:
                return self._clients[region]

            logger.debug(f"Creating API Gateway clients for region {region}")
            client = ApiGatewayClient(
                region=region,
                session=self._session,
                boto_config=self._boto_config,
            )
            self._clients[region] = client
            return client

    def clear_clients(self) -> None:
        """Drop every client created by this factory."""
        with self._lock:
            client_count = len(self._clients)
            self._clients.clear()
        logger.debug(f"Cleared {client_count} regional clients")
