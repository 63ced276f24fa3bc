# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Paginated enumeration of the REST and HTTP APIs of one region.

Each product is walked page by page until the pagination cursor runs out.
A failing page request ends that walk early; what was collected from
earlier pages is kept.
"""

import asyncio
import logging

from ..clients.aws_client import ApiGatewayClient
from ..models.api import DiscoveredApi, build_endpoint
from ..models.enums import ApiType
from .stage_resolver import StageResolver

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 500


class ApiEnumerator:
    """
    Lists every REST and HTTP API of one account in one region.

    Stages are resolved for each API as it is found and the public
    execute-api endpoint is attached.
    """

    def __init__(
        self,
        client: ApiGatewayClient,
        account_id: str,
        region: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        stage_resolver: StageResolver | None = None,
    ):
        """
        Args:
            client: API Gateway client bound to ``region``
            account_id: Account the APIs are attributed to
            region: AWS region code
            page_size: Items requested per page
            stage_resolver: Stage lookup to use (built from ``client`` if None)
        """
        self.client = client
        self.account_id = account_id
        self.region = region
        self.page_size = page_size
        self.stage_resolver = stage_resolver or StageResolver(client)

    def _build_api(
        self,
        api_id: str,
        api_name: str | None,
        api_type: ApiType,
        stages: list[str],
    ) -> DiscoveredApi:
        return DiscoveredApi(
            account_id=self.account_id,
            region=self.region,
            api_id=api_id,
            api_name=api_name,
            api_type=api_type,
            stages=tuple(stages),
            endpoint=build_endpoint(api_id, self.region),
        )

    async def discover_rest_apis(self) -> list[DiscoveredApi]:
        """
        Walk GetRestApis using the ``position`` cursor.

        Returns:
            REST APIs found before the cursor ran out or a request failed
        """
        apis: list[DiscoveredApi] = []
        position: str | None = None

        while True:
            try:
                response = await self.client.get_rest_apis(limit=self.page_size, position=position)

                for item in response.get("items") or []:
                    api_id = item["id"]
                    stages = await self.stage_resolver.get_rest_api_stages(api_id)
                    apis.append(self._build_api(api_id, item.get("name"), ApiType.REST, stages))

                position = response.get("position")
            except Exception as e:
                logger.error(f"Error getting REST APIs in {self.region}: {e}")
                break

            if not position:
                break

        return apis

    async def discover_http_apis(self) -> list[DiscoveredApi]:
        """
        Walk GetApis using the ``NextToken`` cursor.

        Returns:
            HTTP APIs found before the cursor ran out or a request failed
        """
        apis: list[DiscoveredApi] = []
        next_token: str | None = None

        while True:
            try:
                response = await self.client.get_http_apis(
                    max_results=self.page_size, next_token=next_token
                )

                for item in response.get("Items") or []:
                    api_id = item["ApiId"]
                    stages = await self.stage_resolver.get_http_api_stages(api_id)
                    apis.append(self._build_api(api_id, item.get("Name"), ApiType.HTTP, stages))

                next_token = response.get("NextToken")
            except Exception as e:
                logger.error(f"Error getting HTTP APIs in {self.region}: {e}")
                break

            if not next_token:
                break

        return apis

    async def discover_all(self) -> list[DiscoveredApi]:
        """
        Run both walks concurrently.

        Returns:
            REST APIs followed by HTTP APIs
        """
        rest_apis, http_apis = await asyncio.gather(
            self.discover_rest_apis(),
            self.discover_http_apis(),
        )
        return [*rest_apis, *http_apis]
