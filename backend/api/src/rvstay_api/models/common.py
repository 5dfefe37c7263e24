"""Shared API response models.

Domain models live in rvstay.models; this module only holds HTTP-layer
wrappers. Error bodies use rvstay.models.errors.ToolError.
"""

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Service health report."""

    model_config = ConfigDict(strict=True)

    status: str = Field(..., examples=["healthy"])
    environment: str = Field(..., examples=["dev"])
    version: str = Field(..., examples=["0.1.0"])
