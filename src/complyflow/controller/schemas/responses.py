"""Error body shared by every ComplyFlow endpoint.

The web client only relies on ``error``; ``code`` and the tracing fields are
for logs and support tickets.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned with every 4xx and 5xx response."""

    success: bool = Field(False, description="Always false")
    error: str = Field(..., description="Human-readable message")
    code: str = Field(..., description="Stable machine-readable code")
    field: Optional[str] = Field(None, description="Offending request field")
    details: Optional[Dict[str, Any]] = Field(None, description="Extra context")
    request_id: Optional[str] = Field(None, description="Value of X-Request-ID")
    path: Optional[str] = Field(None, description="Request path")
    method: Optional[str] = Field(None, description="Request method")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    stack_trace: Optional[str] = Field(None, description="Development only")

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "error": "Invalid plan tier: tier_gold",
                "code": "INVALID_PLAN_TIER",
                "details": {"tier_id": "tier_gold"},
                "request_id": "5f0c6b9e-1d2a-4c3b-9e8f-7a6b5c4d3e2f",
                "path": "/functions/v1/create-checkout-session",
                "method": "POST",
                "timestamp": "2026-10-18T09:00:00Z",
            }
        }


def error_body(code: str, message: str, **fields: Any) -> Dict[str, Any]:
    """Serialize an ErrorResponse, leaving out empty fields."""
    return ErrorResponse(code=code, error=message, **fields).model_dump(
        mode="json", exclude_none=True
    )
