"""Requests and responses of the registry API."""

from __future__ import annotations

from dataclasses import dataclass, field

from gotway.errors import InvalidRequestError
from gotway.route import Route

DEFAULT_HEALTH_URL = "/health"


class ValidationError(InvalidRequestError):
    """Raised when a registration request is incomplete or invalid."""


@dataclass
class RegisterRequest:
    """A service's request to register an instance and its routes."""

    service_name: str = ""
    host: str = ""
    port: int = 0
    health_url: str = ""
    version: str = ""
    base_path: str = ""
    routes: list[Route] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)

    def validate(self) -> None:
        """Check required fields and fill in the default health URL."""
        if not self.service_name:
            raise ValidationError("service_name is required")
        if not self.host:
            raise ValidationError("host is required")
        if self.port <= 0 or self.port > 65535:
            raise ValidationError("port must be between 1 and 65535")
        if not self.base_path:
            raise ValidationError("base_path is required")
        if not self.routes:
            raise ValidationError("at least one route is required")
        if not self.health_url:
            self.health_url = DEFAULT_HEALTH_URL


@dataclass
class RegisterResponse:
    instance_id: str
    heartbeat_interval: int
    heartbeat_url: str
    registered_routes: list[str] = field(default_factory=list)


@dataclass
class HeartbeatRequest:
    instance_id: str


@dataclass
class HeartbeatResponse:
    status: str


@dataclass
class DeregisterRequest:
    instance_id: str