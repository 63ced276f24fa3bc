# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Batched delivery of the inventory to the discovery endpoint.

Batches are sent one after another with a short pause in between. A
failed batch is logged and counted; it is never retried and never stops
the batches after it.
"""

import asyncio
import logging
from typing import Sequence, TypeVar

from ..clients.delivery_client import DeliveryClient, DeliveryError
from ..models.api import DiscoveredApi
from ..models.delivery import DeliveryReport

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50
DEFAULT_PACING_DELAY_SECONDS = 0.1

T = TypeVar("T")


def chunk_apis(items: Sequence[T], batch_size: int = DEFAULT_BATCH_SIZE) -> list[list[T]]:
    """
    Split ``items`` into consecutive chunks of at most ``batch_size``.

    Concatenating the chunks gives back ``items`` in the same order.

    Raises:
        ValueError: If batch_size is not positive
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    return [list(items[i : i + batch_size]) for i in range(0, len(items), batch_size)]


class BatchDeliveryService:
    """Sends an API inventory to the discovery endpoint in fixed-size batches."""

    def __init__(
        self,
        delivery_client: DeliveryClient,
        batch_size: int = DEFAULT_BATCH_SIZE,
        pacing_delay_seconds: float = DEFAULT_PACING_DELAY_SECONDS,
    ):
        """
        Args:
            delivery_client: Open client shared by every batch
            batch_size: Maximum APIs per request
            pacing_delay_seconds: Pause between two batches (not after the last)
        """
        self.delivery_client = delivery_client
        self.batch_size = batch_size
        self.pacing_delay_seconds = pacing_delay_seconds

    async def send_in_batches(self, apis: Sequence[DiscoveredApi]) -> DeliveryReport:
        """
        Deliver ``apis`` batch by batch.

        Args:
            apis: Full aggregated inventory

        Returns:
            Counts of sent and failed batches
        """
        batches = chunk_apis(apis, self.batch_size)
        report = DeliveryReport(total_apis=len(apis), total_batches=len(batches))
        if not batches:
            return report

        logger.info(f"Sending {len(apis)} APIs in {len(batches)} batches")

        for index, batch in enumerate(batches):
            batch_number = index + 1
            logger.info(f"Sending batch {batch_number}/{len(batches)} with {len(batch)} APIs")

            try:
                await self.delivery_client.post_batch(batch)
                report.batches_sent += 1
                logger.info(f"Successfully sent batch {batch_number}")
            except DeliveryError as e:
                report.batches_failed += 1
                report.failed_batch_numbers.append(batch_number)
                logger.error(f"Error sending batch {batch_number}: {e}")

            if index < len(batches) - 1:
                await asyncio.sleep(self.pacing_delay_seconds)

        if report.batches_failed:
            logger.warning(
                f"{report.batches_failed} of {report.total_batches} batches failed: "
                f"{report.failed_batch_numbers}"
            )

        return report
