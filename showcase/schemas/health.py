"""Health check payload."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus database reachability, for load balancers and uptime probes."""

    status: Literal["ok"] = "ok"
    service: str = Field(default="showcase", description="Service name")
    environment: str = Field(description="APP_ENV of the running instance")
    database: Literal["connected", "disconnected"]
