"""Registered service instances and their health status."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ServiceStatus(str, Enum):
    """Health status of a service instance."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


@dataclass
class ServiceInstance:
    """A single running instance of a registered service."""

    id: str = ""
    service_name: str = ""
    host: str = ""
    port: int = 0
    health_url: str = ""
    version: str = ""
    status: ServiceStatus = ServiceStatus.UNKNOWN
    weight: int = 1
    metadata: dict[str, str] = field(default_factory=dict)
    registered_at: datetime | None = None
    last_heartbeat: datetime | None = None

    def address(self) -> str:
        """Return the instance address as ``host:port``."""
        return f"{self.host}:{self.port}"

    def is_healthy(self) -> bool:
        """Return True when the instance is marked healthy."""
        return self.status == ServiceStatus.HEALTHY