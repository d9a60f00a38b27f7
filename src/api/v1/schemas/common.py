"""Schemas shared by every v1 resource."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "THREAD_NOT_FOUND",
                "message": "Thread not found: 456e4567-e89b-12d3-a456-426614174000",
                "details": {"thread_id": "456e4567-e89b-12d3-a456-426614174000"},
            }
        },
    )

    error_code: str
    message: str
    details: Any | None = None
