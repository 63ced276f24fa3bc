"""Service layer for the API Gateway discovery collector."""

from .api_enumerator import ApiEnumerator
from .batch_delivery import BatchDeliveryService, chunk_apis
from .discovery_service import DiscoveryService, build_discovery_service
from .identity_service import IdentityService
from .multi_region_scanner import MultiRegionScanner
from .region_scanner import RegionScanner
from .region_validator import (
    KNOWN_REGIONS,
    parse_region_list,
    resolve_scan_regions,
    validate_regions,
)
from .stage_resolver import StageResolver

__all__ = [
    "ApiEnumerator",
    "BatchDeliveryService",
    "chunk_apis",
    "DiscoveryService",
    "build_discovery_service",
    "IdentityService",
    "MultiRegionScanner",
    "RegionScanner",
    "KNOWN_REGIONS",
    "parse_region_list",
    "resolve_scan_regions",
    "validate_regions",
    "StageResolver",
]
