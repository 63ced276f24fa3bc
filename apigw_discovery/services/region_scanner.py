# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Scan of a single region.

Unlike stage lookups, a region scan does not swallow errors: anything
that escapes the enumerator is logged with the region and re-raised so
the orchestrator can record the region as failed.
"""

import logging

from ..clients.aws_client import run_blocking
from ..clients.regional_client_factory import RegionalClientFactory
from ..models.api import DiscoveredApi
from .api_enumerator import DEFAULT_PAGE_SIZE, ApiEnumerator

logger = logging.getLogger(__name__)


class RegionScanner:
    """Runs the API enumerator for one region at a time."""

    def __init__(
        self,
        client_factory: RegionalClientFactory,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        """
        Args:
            client_factory: Source of the per-region API Gateway clients
            page_size: Page size handed to the enumerator
        """
        self.client_factory = client_factory
        self.page_size = page_size

    async def scan_region(self, account_id: str, region: str) -> list[DiscoveredApi]:
        """
        Discover all REST and HTTP APIs of ``account_id`` in ``region``.

        Raises:
            Exception: Whatever the client creation or enumeration raised
        """
        logger.info(f"Scanning account {account_id} in region {region}...")
        try:
            # Building boto3 clients loads service models from disk
            client = await run_blocking(self.client_factory.get_client, region)
            enumerator = ApiEnumerator(
                client=client,
                account_id=account_id,
                region=region,
                page_size=self.page_size,
            )
            return await enumerator.discover_all()
        except Exception as e:
            logger.error(f"Error scanning {account_id}/{region}: {e}")
            raise
