"""Routes exposed by services and the entries stored for them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Route:
    """An HTTP route a service exposes, relative to its base path."""

    method: str = ""
    path: str = ""
    public: bool = False
    rate_limit: int = 0
    scopes: list[str] = field(default_factory=list)

    def full_path(self, base_path: str) -> str:
        """Join the base path and the route path."""
        if not base_path:
            return self.path
        if not self.path:
            return base_path
        return f"{base_path}{self.path}"

    def key(self, base_path: str) -> str:
        """Return the ``METHOD:full_path`` key identifying this route."""
        return f"{self.method}:{self.full_path(base_path)}"


@dataclass
class RouteEntry:
    """A route as recorded in the registry, with its owning service."""

    service_name: str = ""
    base_path: str = ""
    route: Route = field(default_factory=Route)
    registered_at: datetime | None = None