# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Discovered API model."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import ApiType

EXECUTE_API_ENDPOINT_TEMPLATE = "https://{api_id}.execute-api.{region}.amazonaws.com"


def build_endpoint(api_id: str, region: str) -> str:
    """Public execute-api endpoint of an API in a region."""
    return EXECUTE_API_ENDPOINT_TEMPLATE.format(api_id=api_id, region=region)


class DiscoveredApi(BaseModel):
    """A REST or HTTP API found in one region of the scanned account.

    Instances are immutable. Two APIs with identical fields compare equal;
    the inventory never deduplicates them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    account_id: str = Field(..., alias="accountId", description="AWS account id")
    region: str = Field(..., description="AWS region code")
    api_id: str = Field(..., alias="apiId", description="API Gateway identifier")
    api_name: str | None = Field(default=None, alias="apiName", description="API name")
    api_type: ApiType = Field(..., alias="apiType", description="REST or HTTP")
    stages: tuple[str, ...] = Field(
        default=(),
        description="Deployed stage names in the order AWS returned them",
    )
    endpoint: str = Field(..., description="Public execute-api endpoint URL")

    def to_payload(self) -> dict:
        """Wire representation sent to the discovery endpoint."""
        return self.model_dump(mode="json", by_alias=True)
