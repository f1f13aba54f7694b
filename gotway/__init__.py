"""In-memory service registry for an API gateway: registration, heartbeats, route collisions, load balancing and token claims."""

__version__ = "0.1.0"