# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Parsing and validation of the requested scan regions."""

import logging

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Regions the collector knows how to scan
KNOWN_REGIONS: frozenset[str] = frozenset([
    "us-east-1", "us-east-2", "us-west-1", "us-west-2",
    "eu-west-1", "eu-west-2", "eu-west-3", "eu-central-1", "eu-north-1", "eu-south-1",
    "ap-southeast-1", "ap-southeast-2", "ap-southeast-3",
    "ap-northeast-1", "ap-northeast-2", "ap-northeast-3",
    "ap-south-1", "ap-east-1",
    "ca-central-1", "sa-east-1", "af-south-1", "me-south-1",
])


def parse_region_list(raw: str | None) -> list[str]:
    """
    Split a comma-separated region string.

    Whitespace around each token is stripped and empty tokens are dropped.

    Args:
        raw: Value of SCAN_REGIONS (may be None)

    Returns:
        Region tokens in input order
    """
    if not raw:
        return []
    return [token.strip() for token in raw.split(",") if token.strip()]


def validate_regions(regions: list[str]) -> list[str]:
    """
    Keep only the regions present in KNOWN_REGIONS.

    Unknown regions are logged as a warning and dropped, they are not an
    error. Order is preserved and duplicates are left as they are.

    Args:
        regions: Parsed region tokens

    Returns:
        Valid regions in input order
    """
    valid = [r for r in regions if r in KNOWN_REGIONS]
    invalid = [r for r in regions if r not in KNOWN_REGIONS]

    if invalid:
        logger.warning(f"Invalid regions ignored: {', '.join(invalid)}")

    return valid


def resolve_scan_regions(raw: str | None) -> list[str]:
    """
    Parse and validate SCAN_REGIONS.

    Raises:
        ConfigurationError: If no valid region remains
    """
    regions = validate_regions(parse_region_list(raw))
    if not regions:
        raise ConfigurationError("No valid regions found in SCAN_REGIONS")
    return regions
