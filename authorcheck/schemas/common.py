from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    error_id: str | None = Field(default=None, alias="errorId")


class ExternalAnalysisResponse(BaseModel):
    success: bool = True
    data: dict[str, Any]
    model: str
    timestamp: str


class HealthResponse(BaseModel):
    status: str = "ok"
