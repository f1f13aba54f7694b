"""In-memory registry of service instances and the routes they expose."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable

from gotway.collision import normalize_path, paths_overlap
from gotway.errors import (
    CollisionError,
    CollisionType,
    InstanceNotFoundError,
    RouteCollision,
)
from gotway.registration import RegisterRequest, RegisterResponse
from gotway.route import Route, RouteEntry
from gotway.service import ServiceInstance, ServiceStatus

logger = logging.getLogger(__name__)

HEARTBEAT_URL = "/internal/registry/heartbeat"
_MIN_CLEANUP_INTERVAL = timedelta(seconds=1)


def _route_key(method: str, path: str) -> str:
    return f"{method}:{path}"


@dataclass
class RegistryConfig:
    """Settings that govern heartbeats and route collision checks."""

    heartbeat_ttl: timedelta = field(default_factory=timedelta)
    health_check_interval: timedelta = field(default_factory=timedelta)
    allow_same_service_overwrite: bool = False
    strict_pattern_matching: bool = False


class Registry:
    """Keeps track of live service instances and the routes they own."""

    def __init__(self, config: RegistryConfig | None = None) -> None:
        self.config = config if config is not None else RegistryConfig()
        self._lock = threading.RLock()
        self._instances: dict[str, ServiceInstance] = {}
        self._services: dict[str, list[str]] = {}
        self._routes: dict[str, RouteEntry] = {}
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    # -- background cleanup -------------------------------------------------

    def start(self) -> None:
        """Start the background loop that expires stale instances."""
        self._thread = threading.Thread(
            target=self._cleanup_loop, name="registry-cleanup", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the background cleanup loop and wait for it to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _cleanup_loop(self) -> None:
        interval = max(self.config.heartbeat_ttl / 2, _MIN_CLEANUP_INTERVAL)
        while not self._stop_event.wait(interval.total_seconds()):
            self.cleanup()

    def cleanup(self) -> None:
        """Mark late instances unhealthy and remove those long overdue."""
        ttl = self.config.heartbeat_ttl
        with self._lock:
            now = datetime.now()
            expired: list[str] = []
            for instance_id, instance in self._instances.items():
                last = instance.last_heartbeat or instance.registered_at or now
                elapsed = now - last
                if elapsed > ttl * 2:
                    expired.append(instance_id)
                    logger.info(
                        "removing expired instance instance_id=%s service=%s last_heartbeat=%s",
                        instance_id,
                        instance.service_name,
                        instance.last_heartbeat,
                    )
                elif elapsed > ttl and instance.status == ServiceStatus.HEALTHY:
                    instance.status = ServiceStatus.UNHEALTHY
                    logger.warning(
                        "marking instance unhealthy instance_id=%s service=%s elapsed=%s",
                        instance_id,
                        instance.service_name,
                        elapsed,
                    )
            for instance_id in expired:
                self._remove_instance(instance_id)

    def _remove_instance(self, instance_id: str) -> bool:
        instance = self._instances.get(instance_id)
        if instance is None:
            return False

        service_name = instance.service_name
        ids = self._services.get(service_name, [])
        if instance_id in ids:
            ids.remove(instance_id)

        if not ids:
            self._routes = {
                key: entry
                for key, entry in self._routes.items()
                if entry.service_name != service_name
            }
            self._services.pop(service_name, None)

        del self._instances[instance_id]
        return True

    # -- collisions ---------------------------------------------------------

    def _exact_collision(
        self, service_name: str, method: str, path: str
    ) -> RouteCollision | None:
        entry = self._routes.get(_route_key(method, path))
        if entry is None or entry.service_name == service_name:
            return None
        return RouteCollision(
            method=method,
            path=path,
            collision_type=CollisionType.EXACT,
            registered_by=entry.service_name,
            registered_at=entry.registered_at,
        )

    def _pattern_collisions(
        self, service_name: str, method: str, path: str
    ) -> list[RouteCollision]:
        normalized_new = normalize_path(path)
        collisions = []
        for key, entry in self._routes.items():
            if entry.service_name == service_name:
                continue
            existing_method, sep, existing_path = key.partition(":")
            if not sep or existing_method != method:
                continue
            if paths_overlap(normalized_new, normalize_path(existing_path)):
                collisions.append(
                    RouteCollision(
                        method=method,
                        path=path,
                        collision_type=CollisionType.PATTERN,
                        registered_by=entry.service_name,
                        registered_at=entry.registered_at,
                    )
                )
        return collisions

    def validate_routes(
        self, service_name: str, base_path: str, routes: Iterable[Route]
    ) -> list[RouteCollision]:
        """Return the collisions the given routes would cause."""
        collisions: list[RouteCollision] = []
        with self._lock:
            for route in routes:
                full_path = route.full_path(base_path)
                exact = self._exact_collision(service_name, route.method, full_path)
                if exact is not None:
                    collisions.append(exact)
                    continue
                if self.config.strict_pattern_matching:
                    collisions.extend(
                        self._pattern_collisions(service_name, route.method, full_path)
                    )
        return collisions

    # -- registration -------------------------------------------------------

    def register(self, request: RegisterRequest) -> RegisterResponse:
        """Register a new instance and its routes.

        Raises ValidationError for an invalid request and CollisionError when
        routes conflict with those of another service.
        """
        request.validate()

        with self._lock:
            collisions = self.validate_routes(
                request.service_name, request.base_path, request.routes
            )
            if collisions:
                raise CollisionError(collisions)

            instance_id = str(uuid.uuid4())
            now = datetime.now()
            self._instances[instance_id] = ServiceInstance(
                id=instance_id,
                service_name=request.service_name,
                host=request.host,
                port=request.port,
                health_url=request.health_url,
                version=request.version,
                status=ServiceStatus.HEALTHY,
                weight=1,
                metadata=request.metadata,
                registered_at=now,
                last_heartbeat=now,
            )
            self._services.setdefault(request.service_name, []).append(instance_id)

            registered_routes = []
            for route in request.routes:
                key = _route_key(route.method, route.full_path(request.base_path))
                self._routes[key] = RouteEntry(
                    service_name=request.service_name,
                    base_path=request.base_path,
                    route=route,
                    registered_at=now,
                )
                registered_routes.append(key)

        return RegisterResponse(
            instance_id=instance_id,
            heartbeat_interval=int(self.config.heartbeat_ttl.total_seconds()),
            heartbeat_url=HEARTBEAT_URL,
            registered_routes=registered_routes,
        )

    def deregister(self, instance_id: str) -> None:
        """Remove an instance; its service's routes go with its last instance."""
        with self._lock:
            if not self._remove_instance(instance_id):
                raise InstanceNotFoundError()

    def heartbeat(self, instance_id: str) -> None:
        """Record that an instance is still alive."""
        with self._lock:
            instance = self._instances.get(instance_id)
            if instance is None:
                raise InstanceNotFoundError()
            instance.last_heartbeat = datetime.now()

    # -- queries ------------------------------------------------------------

    def get_instance(self, instance_id: str) -> ServiceInstance | None:
        with self._lock:
            return self._instances.get(instance_id)

    def _instances_of(self, service_name: str) -> list[ServiceInstance]:
        return [
            self._instances[i]
            for i in self._services.get(service_name, [])
            if i in self._instances
        ]

    def get_instances(self, service_name: str) -> list[ServiceInstance]:
        """Return every instance of a service, empty if it is unknown."""
        with self._lock:
            return self._instances_of(service_name)

    def get_healthy_instances(self, service_name: str) -> list[ServiceInstance]:
        """Return the healthy instances of a service."""
        with self._lock:
            return [i for i in self._instances_of(service_name) if i.is_healthy()]

    def get_route(self, method: str, path: str) -> RouteEntry | None:
        with self._lock:
            return self._routes.get(_route_key(method, path))

    def get_all_services(self) -> dict[str, list[ServiceInstance]]:
        """Map each service with at least one instance to its instances."""
        with self._lock:
            result = {}
            for service_name in self._services:
                instances = self._instances_of(service_name)
                if instances:
                    result[service_name] = instances
            return result

    def get_all_routes(self) -> dict[str, RouteEntry]:
        """Return a copy of the route table keyed by ``METHOD:path``."""
        with self._lock:
            return dict(self._routes)