"""Batch delivery report model."""

from pydantic import BaseModel, Field


class DeliveryReport(BaseModel):
    """Outcome of sending the inventory to the discovery endpoint."""

    total_apis: int = Field(default=0, ge=0, description="APIs handed to delivery")
    total_batches: int = Field(default=0, ge=0, description="Number of batches built")
    batches_sent: int = Field(default=0, ge=0, description="Batches accepted (2xx)")
    batches_failed: int = Field(default=0, ge=0, description="Batches that failed")
    failed_batch_numbers: list[int] = Field(
        default_factory=list,
        description="1-based numbers of the batches that failed",
    )
