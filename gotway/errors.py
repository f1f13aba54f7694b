"""Errors raised by the service registry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class CollisionType(str, Enum):
    """How a new route conflicts with an existing one."""

    EXACT = "exact"
    PATTERN = "pattern"


@dataclass
class RouteCollision:
    """A conflict between a requested route and a registered one."""

    method: str
    path: str
    collision_type: CollisionType
    registered_by: str
    registered_at: datetime | None = None


class RegistryError(Exception):
    """Base class for registry errors."""

    default_message = "registry error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class CollisionError(RegistryError):
    """Raised when requested routes collide with registered ones."""

    def __init__(self, collisions: list[RouteCollision]) -> None:
        self.collisions = list(collisions)
        super().__init__(self._describe())

    def _describe(self) -> str:
        parts = "; ".join(
            f"{c.method} {c.path} conflicts with {c.registered_by} "
            f"({CollisionType(c.collision_type).value})"
            for c in self.collisions
        )
        return f"route collisions detected: {parts}"

    def __str__(self) -> str:
        return self._describe()


class ServiceNotFoundError(RegistryError, LookupError):
    default_message = "service not found"


class InstanceNotFoundError(RegistryError, LookupError):
    default_message = "instance not found"


class RouteNotFoundError(RegistryError, LookupError):
    default_message = "route not found"


class InvalidRequestError(RegistryError, ValueError):
    default_message = "invalid request"