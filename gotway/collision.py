"""Path normalisation and overlap checks used to detect route collisions."""

from __future__ import annotations

import re

_PARAM_PATTERN = re.compile(r":[^/]+|\{[^}]+\}")

WILDCARD = "*"


def normalize_path(path: str) -> str:
    """Replace ``:name`` and ``{name}`` parameters with ``*``."""
    return _PARAM_PATTERN.sub(WILDCARD, path)


def paths_overlap(path1: str, path2: str) -> bool:
    """Tell whether two normalised paths can match the same request path."""
    if path1 == path2:
        return True

    segments1 = path1.strip("/").split("/")
    segments2 = path2.strip("/").split("/")
    if len(segments1) != len(segments2):
        return False

    return all(
        s1 == WILDCARD or s2 == WILDCARD or s1 == s2
        for s1, s2 in zip(segments1, segments2)
    )