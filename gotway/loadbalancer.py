"""Strategies for choosing one instance out of many."""

from __future__ import annotations

import itertools
import threading
from abc import ABC, abstractmethod
from typing import Sequence

from gotway.service import ServiceInstance


class LoadBalancer(ABC):
    """Chooses an instance to send a request to."""

    @abstractmethod
    def select(self, instances: Sequence[ServiceInstance]) -> ServiceInstance | None:
        """Return the chosen instance, or None when there are none."""


class RoundRobinBalancer(LoadBalancer):
    """Cycles through instances in order; safe to share between threads."""

    def __init__(self) -> None:
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def select(self, instances: Sequence[ServiceInstance]) -> ServiceInstance | None:
        if not instances:
            return None
        with self._lock:
            n = next(self._counter)
        return instances[n % len(instances)]