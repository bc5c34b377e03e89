"""Pydantic schemas for admission endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HandledRequestResponse(BaseModel):
    """Response returned for an admitted request."""

    status: str = Field("handled", description="Always 'handled' for admitted requests.")
    client_id: str = Field(..., description="Identifier of the admitted client.")


class ClientsResponse(BaseModel):
    """Admission configuration as seen by the running registry."""

    client_count: int = Field(..., description="Number of recognized clients.")
    algorithm: str = Field(..., description="Rate limiting algorithm in use.")
    capacity: int = Field(..., description="Maximum burst size per client.")
    window_millis: int = Field(
        ..., description="Milliseconds for an empty bucket to fully refill."
    )
