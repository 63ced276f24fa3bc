# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Status report returned by the function."""

from pydantic import BaseModel, ConfigDict, Field

COMPLETED_MESSAGE = "API discovery completed successfully"


class DiscoverySummary(BaseModel):
    """Operational summary of one discovery run.

    Serialized with camelCase keys as the body of the 200 response.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(default=COMPLETED_MESSAGE)
    total_apis: int = Field(..., ge=0, alias="totalApis")
    target_account: str = Field(..., alias="targetAccount")
    regions_scanned: int = Field(..., ge=0, alias="regionsScanned")
    regions_requested: int = Field(..., ge=0, alias="regionsRequested")
    regions_failed: int = Field(..., ge=0, alias="regionsFailed")
    regions: list[str] = Field(default_factory=list)
    batches_sent: int = Field(default=0, ge=0, alias="batchesSent")
    batches_failed: int = Field(default=0, ge=0, alias="batchesFailed")

    def to_body(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
