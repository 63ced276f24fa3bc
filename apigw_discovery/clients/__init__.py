"""AWS and delivery client wrappers."""

from .aws_client import ApiGatewayClient, AWSAPIError, StsClient
from .delivery_client import DeliveryClient, DeliveryError
from .regional_client_factory import RegionalClientFactory

__all__ = [
    "ApiGatewayClient",
    "AWSAPIError",
    "StsClient",
    "DeliveryClient",
    "DeliveryError",
    "RegionalClientFactory",
]
