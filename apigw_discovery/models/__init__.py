"""Data models for the API Gateway discovery collector."""

from .enums import ApiType
from .api import DiscoveredApi, build_endpoint
from .scan import AggregatedInventory, RegionalScanResult, RegionScanMetadata
from .delivery import DeliveryReport
from .summary import DiscoverySummary

__all__ = [
    "ApiType",
    "DiscoveredApi",
    "build_endpoint",
    "AggregatedInventory",
    "RegionalScanResult",
    "RegionScanMetadata",
    "DeliveryReport",
    "DiscoverySummary",
]
