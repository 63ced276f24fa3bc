# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Multi-region scanner service for orchestrating parallel API discovery.

This module provides the MultiRegionScanner class that scans every
requested region concurrently, isolates regional failures and aggregates
the APIs found into a single inventory.
"""

import asyncio
import logging
import time

from ..models.api import DiscoveredApi
from ..models.scan import AggregatedInventory, RegionalScanResult, RegionScanMetadata
from .region_scanner import RegionScanner

logger = logging.getLogger(__name__)


class MultiRegionScanner:
    """
    Orchestrates API discovery across regions.

    All regions are started at once; there is no concurrency limit other
    than the number of requested regions. The scanner waits for every
    region to settle, so one failing region never cancels or hides the
    others.
    """

    def __init__(self, region_scanner: RegionScanner):
        """
        Args:
            region_scanner: Scanner used for each individual region
        """
        self.region_scanner = region_scanner

    async def scan_all_regions(self, account_id: str, regions: list[str]) -> AggregatedInventory:
        """
        Scan ``regions`` in parallel and aggregate the results.

        Args:
            account_id: Account being scanned, used for labelling
            regions: Validated regions, in the order they were requested

        Returns:
            Aggregated inventory of all successful regions
        """
        logger.info(f"Starting parallel scan of {len(regions)} regions...")

        regional_results = await self._scan_regions_parallel(account_id, regions)
        aggregated = self._aggregate_results(regional_results)

        logger.info(
            f"Scan complete: {len(aggregated.region_metadata.successful_regions)} successful, "
            f"{len(aggregated.region_metadata.failed_regions)} failed regions"
        )
        logger.info(f"Total APIs discovered: {aggregated.total_apis}")

        return aggregated

    async def _scan_regions_parallel(
        self,
        account_id: str,
        regions: list[str],
    ) -> list[RegionalScanResult]:
        """
        Run one scan task per region and tag each settled outcome.

        Returns:
            One RegionalScanResult per requested region, same order as ``regions``
        """
        durations_ms: dict[int, int] = {}

        async def scan_timed(index: int, region: str) -> list[DiscoveredApi]:
            start_time = time.time()
            try:
                return await self.region_scanner.scan_region(account_id, region)
            finally:
                durations_ms[index] = int((time.time() - start_time) * 1000)

        tasks = [scan_timed(index, region) for index, region in enumerate(regions)]

        # return_exceptions=True ensures we get results from all tasks
        results = await asyncio.gather(*tasks, return_exceptions=True)

        processed_results: list[RegionalScanResult] = []
        for index, result in enumerate(results):
            region = regions[index]
            duration_ms = durations_ms.get(index, 0)
            if isinstance(result, BaseException):
                logger.error(f"✗ Error scanning {account_id}/{region} after {duration_ms}ms: {result}")
                processed_results.append(
                    RegionalScanResult(
                        region=region,
                        success=False,
                        error_message=str(result) or type(result).__name__,
                        scan_duration_ms=duration_ms,
                    )
                )
            else:
                logger.info(f"✓ Found {len(result)} APIs in {account_id}/{region} ({duration_ms}ms)")
                processed_results.append(
                    RegionalScanResult(
                        region=region,
                        success=True,
                        apis=result,
                        scan_duration_ms=duration_ms,
                    )
                )

        return processed_results

    def _aggregate_results(
        self,
        regional_results: list[RegionalScanResult],
    ) -> AggregatedInventory:
        """
        Concatenate the APIs of all successful regions.

        Duplicates are kept; the order is region order, then the order
        each region returned its APIs in.
        """
        successful_results = [r for r in regional_results if r.success]
        failed_results = [r for r in regional_results if not r.success]

        all_apis: list[DiscoveredApi] = []
        for result in successful_results:
            all_apis.extend(result.apis)

        region_metadata = RegionScanMetadata(
            total_regions=len(regional_results),
            successful_regions=[r.region for r in successful_results],
            failed_regions=[r.region for r in failed_results],
        )

        return AggregatedInventory(
            apis=all_apis,
            region_metadata=region_metadata,
            regional_results=regional_results,
        )
