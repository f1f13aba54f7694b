[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gotway"
version = "0.1.0"
description = "In-memory service registry for an API gateway: registration, heartbeats, route collision checks, round-robin load balancing and token claims."
requires-python = ">=3.10"
dependencies = []
keywords = ["api-gateway", "service-registry", "service-discovery", "load-balancing", "routing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gotway"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
