# API request/response models
# Pydantic models for API endpoint data validation

from datetime import datetime

from pydantic import BaseModel, Field

from ..models.tool import Tool


class CatalogRequest(BaseModel):
    """Request model for replacing the tool catalog."""

    tools: list[Tool] = Field(
        default_factory=list, description="Full current catalog of aggregated tools"
    )


class CatalogResponse(BaseModel):
    """Response model for catalog rebuilds."""

    status: str
    tool_count: int


class ToolSearchRequest(BaseModel):
    """Request model for tool search endpoint."""

    query: str = Field(
        "", description="Natural language query; empty matches everything lexically"
    )
    limit: int | None = Field(
        None, ge=0, description="Maximum tools to return, defaults to the configured limit"
    )


class ToolSearchResponse(BaseModel):
    """Response model for tool search endpoint."""

    tools: list[Tool]
    strategy: str
    query_id: str
    timestamp: datetime


class ToolCountResponse(BaseModel):
    """Response model for the index size endpoint."""

    tool_count: int
    strategy: str
