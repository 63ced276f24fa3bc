# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""End-to-end discovery pipeline.

identity lookup -> parallel region scan -> batched delivery -> summary.

All resources (boto3 session, regional clients, the thread pool for boto3
calls, HTTPS connection pool) are created for one run and released when it ends.
"""

import logging

import boto3
import httpx

from ..clients.aws_client import StsClient, aws_executor
from ..clients.delivery_client import DeliveryClient
from ..clients.regional_client_factory import RegionalClientFactory
from ..config import Settings
from ..models.delivery import DeliveryReport
from ..models.summary import DiscoverySummary
from .batch_delivery import BatchDeliveryService
from .identity_service import IdentityService
from .multi_region_scanner import MultiRegionScanner
from .region_scanner import RegionScanner

logger = logging.getLogger(__name__)

# Blocking boto3 calls a region has in flight at once: the REST and HTTP walks
AWS_CALLS_PER_REGION = 2


class DiscoveryService:
    """
    Runs one discovery of the invoking account.

    Only the identity lookup can make a run fail. Regional and delivery
    failures are reported in the summary.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        multi_region_scanner: MultiRegionScanner,
        delivery_client: DeliveryClient,
        batch_size: int = 50,
        pacing_delay_seconds: float = 0.1,
        client_factory: RegionalClientFactory | None = None,
    ):
        """
        Args:
            identity_service: Resolves the account id
            multi_region_scanner: Scans all regions in parallel
            delivery_client: Not yet opened client for the discovery endpoint
            batch_size: APIs per delivery request
            pacing_delay_seconds: Pause between delivery requests
            client_factory: Regional client factory to release after the run
        """
        self.identity_service = identity_service
        self.multi_region_scanner = multi_region_scanner
        self.delivery_client = delivery_client
        self.batch_size = batch_size
        self.pacing_delay_seconds = pacing_delay_seconds
        self.client_factory = client_factory

    async def run(self, regions: list[str]) -> DiscoverySummary:
        """
        Discover and deliver the APIs of the invoking account.

        Args:
            regions: Validated regions to scan

        Returns:
            Summary of the run

        Raises:
            AWSAPIError: If the account id cannot be resolved
        """
        try:
            with aws_executor(max_workers=AWS_CALLS_PER_REGION * len(regions)):
                account_id = await self.identity_service.get_account_id()
                logger.info(
                    f"Will scan current account {account_id} in {len(regions)} regions: "
                    f"{', '.join(regions)}"
                )

                inventory = await self.multi_region_scanner.scan_all_regions(account_id, regions)
        finally:
            if self.client_factory is not None:
                self.client_factory.clear_clients()

        report = DeliveryReport()
        if inventory.apis:
            async with self.delivery_client as client:
                delivery = BatchDeliveryService(
                    delivery_client=client,
                    batch_size=self.batch_size,
                    pacing_delay_seconds=self.pacing_delay_seconds,
                )
                report = await delivery.send_in_batches(inventory.apis)

        metadata = inventory.region_metadata
        return DiscoverySummary(
            total_apis=inventory.total_apis,
            target_account=account_id,
            regions_scanned=len(metadata.successful_regions),
            regions_requested=len(regions),
            regions_failed=len(metadata.failed_regions),
            regions=list(regions),
            batches_sent=report.batches_sent,
            batches_failed=report.batches_failed,
        )


def build_discovery_service(
    settings: Settings,
    session: boto3.Session | None = None,
    delivery_transport: httpx.AsyncBaseTransport | None = None,
) -> DiscoveryService:
    """
    Wire a DiscoveryService from settings.

    Args:
        settings: Validated settings (token and regions present)
        session: boto3 session to use; a new one on ambient credentials if None
        delivery_transport: Optional httpx transport for the delivery client

    Returns:
        Ready-to-run DiscoveryService
    """
    session = session or boto3.Session()

    identity_service = IdentityService(StsClient(region=settings.aws_region, session=session))
    client_factory = RegionalClientFactory(session=session)
    scanner = MultiRegionScanner(
        RegionScanner(client_factory=client_factory, page_size=settings.page_size)
    )
    delivery_client = DeliveryClient(
        endpoint_url=settings.discovery_endpoint_url,
        api_key=settings.treblle_sdk_token or "",
        transport=delivery_transport,
    )

    return DiscoveryService(
        identity_service=identity_service,
        multi_region_scanner=scanner,
        delivery_client=delivery_client,
        batch_size=settings.batch_size,
        pacing_delay_seconds=settings.batch_delay_seconds,
        client_factory=client_factory,
    )
