# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Multi-region scanning data models.

This module contains Pydantic models for the outcome of scanning a single
region and for the inventory aggregated across all requested regions.
"""

from pydantic import BaseModel, Field

from .api import DiscoveredApi


class RegionalScanResult(BaseModel):
    """Result from scanning a single region.

    Either ``success`` is True and ``apis`` holds what the region returned,
    or ``success`` is False and ``error_message`` says why the region failed.
    """

    region: str = Field(..., description="AWS region code")
    success: bool = Field(..., description="Whether the scan succeeded")
    apis: list[DiscoveredApi] = Field(
        default_factory=list,
        description="APIs found in this region",
    )
    error_message: str | None = Field(
        default=None,
        description="Error message if scan failed",
    )
    scan_duration_ms: int = Field(
        default=0,
        ge=0,
        description="Scan duration in milliseconds",
    )


class RegionScanMetadata(BaseModel):
    """Metadata about which regions were scanned."""

    total_regions: int = Field(..., ge=0, description="Total regions attempted")
    successful_regions: list[str] = Field(
        default_factory=list,
        description="Regions scanned successfully",
    )
    failed_regions: list[str] = Field(
        default_factory=list,
        description="Regions that failed to scan",
    )


class AggregatedInventory(BaseModel):
    """APIs collected from every region that scanned successfully."""

    apis: list[DiscoveredApi] = Field(
        default_factory=list,
        description="Concatenated APIs of all successful regions, in region order",
    )
    region_metadata: RegionScanMetadata = Field(
        ...,
        description="Metadata about which regions were scanned",
    )
    regional_results: list[RegionalScanResult] = Field(
        default_factory=list,
        description="Per-region outcome, in the order regions were requested",
    )

    @property
    def total_apis(self) -> int:
        return len(self.apis)
