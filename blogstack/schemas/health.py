from typing import Literal

from pydantic import BaseModel, Field


class ServicesStatus(BaseModel):
    """Status of the services the API depends on."""

    database: Literal["healthy", "unhealthy"] = Field(description="Store-of-record status")
    search_backend: Literal["elasticsearch", "memory"] = Field(
        description="Search index implementation in use",
    )
    search: Literal["healthy", "unhealthy"] = Field(description="Search index status")


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    version: str = Field(description="API version")
    status: Literal["ok", "degraded"] = Field(description="Overall health status")
    timestamp: str = Field(description="Current timestamp")
    services: ServicesStatus = Field(description="Status of dependent services")
