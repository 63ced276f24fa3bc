# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Stage lookup for REST and HTTP APIs.

A failed stage lookup never aborts the enumeration of the API it belongs
to: errors are logged and an empty stage list is returned instead.
"""

import logging

from ..clients.aws_client import ApiGatewayClient

logger = logging.getLogger(__name__)


class StageResolver:
    """Resolves the deployed stage names of an API."""

    def __init__(self, client: ApiGatewayClient):
        self.client = client

    async def get_rest_api_stages(self, api_id: str) -> list[str]:
        """
        Stage names of a REST API, or an empty list on any error.

        Args:
            api_id: REST API identifier
        """
        try:
            response = await self.client.get_rest_api_stages(api_id)
            return [s["stageName"] for s in response.get("item") or [] if s.get("stageName")]
        except Exception as e:
            logger.error(f"Error getting stages for REST API {api_id}: {e}")
            return []

    async def get_http_api_stages(self, api_id: str) -> list[str]:
        """
        Stage names of an HTTP API, or an empty list on any error.

        Args:
            api_id: HTTP API identifier
        """
        try:
            response = await self.client.get_http_api_stages(api_id)
            return [s["StageName"] for s in response.get("Items") or [] if s.get("StageName")]
        except Exception as e:
            logger.error(f"Error getting stages for HTTP API {api_id}: {e}")
            return []
