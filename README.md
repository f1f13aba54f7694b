# gotway

An in-memory service registry for an API gateway. Backend services register
themselves with the routes they serve, keep their registration alive with
heartbeats, and are dropped again when they go quiet. The registry refuses
registrations whose routes clash with routes another service already owns.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Registering a service

```python
from datetime import timedelta

from gotway.registry import Registry, RegistryConfig
from gotway.registration import RegisterRequest
from gotway.route import Route

registry = Registry(RegistryConfig(heartbeat_ttl=timedelta(seconds=30)))

response = registry.register(
    RegisterRequest(
        service_name="user-service",
        host="localhost",
        port=8081,
        base_path="/api/v1",
        routes=[Route(method="GET", path="/users"), Route(method="POST", path="/users")],
    )
)
print(response.instance_id)
print(response.heartbeat_interval)  # 30
print(response.registered_routes)   # ['GET:/api/v1/users', 'POST:/api/v1/users']
```

`RegisterRequest.validate()` runs first: a missing service name, host, base
path or route list, or a port outside 1–65535, raises
`gotway.registration.ValidationError` (a subclass of
`gotway.errors.InvalidRequestError`). An empty `health_url` is set to `/health`.

Routes already owned by another service raise `gotway.errors.CollisionError`,
whose `collisions` list holds `RouteCollision` records saying which route
clashed, with which service, and whether the clash was `CollisionType.EXACT`
or `CollisionType.PATTERN`. Pattern checks treat `:name` and `{name}`
parameters as wildcards, so `/users/:id` clashes with `/users/{userId}`; they
are only made when `RegistryConfig.strict_pattern_matching` is set. A service
may re-register its own routes. `registry.validate_routes(service_name,
base_path, routes)` returns the collisions without registering anything, and
`gotway.collision.normalize_path` and `paths_overlap` expose the matching rules.

## Heartbeats and expiry

```python
registry.heartbeat(response.instance_id)
registry.start()   # background cleanup thread
...
registry.stop()    # stops the thread and waits for it
```

An instance whose last heartbeat is older than the TTL is marked unhealthy;
older than twice the TTL, it is removed, and when a service loses its last
instance its routes go with it. The background loop runs every half TTL, but
no more often than once a second. `registry.cleanup()` runs one such pass by
hand. `registry.deregister(instance_id)` removes an instance at once. Unknown
ids given to `heartbeat` or `deregister` raise
`gotway.errors.InstanceNotFoundError`.

## Looking things up

```python
registry.get_instance(response.instance_id)    # ServiceInstance or None
registry.get_route("GET", "/api/v1/users")     # RouteEntry or None
registry.get_instances("user-service")         # list, empty if unknown
registry.get_healthy_instances("user-service")
registry.get_all_services()                    # {service name: [instances]}
registry.get_all_routes()                      # {"METHOD:path": RouteEntry}
```

## Choosing an instance

```python
from gotway.loadbalancer import RoundRobinBalancer

balancer = RoundRobinBalancer()
instance = balancer.select(registry.get_healthy_instances("user-service"))
if instance is not None:
    print(instance.address())   # "localhost:8081"
```

`RoundRobinBalancer` cycles through the list in order and may be shared between
threads. Other strategies can subclass `gotway.loadbalancer.LoadBalancer`.

## Token claims

`gotway.token` holds the claims carried by external and internal tokens.
`ExternalClaims.validate()` checks expiry, not-before time and subject;
`InternalClaims.validate()` checks expiry, subject, issuer and audience.
`InternalClaims` also has `validate_audience`, `validate_issuer`,
`add_to_trace` for the chain of services a request passed through, and
`has_scope` / `has_all_scopes`. Failures raise subclasses of
`gotway.token.TokenError`, such as `TokenExpiredError` or
`TokenAudienceMismatchError`.

## What it does not do

Everything lives in memory inside one process: there is no HTTP server or
API endpoint, no request proxying, no persistent storage, no configuration
loading and no command to run. The token module holds and checks claims only;
it does not sign, encode or decode tokens.