"""
Pydantic schemas for counter endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field


class CounterResponse(BaseModel):
    """Today's count for the calling user."""
    count: int = Field(..., ge=0, description="Server-side count for today (completed batches)")

    model_config = ConfigDict(json_schema_extra={"example": {"count": 1}})
