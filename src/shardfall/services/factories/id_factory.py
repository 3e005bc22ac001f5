"""Utilities for creating deterministic instance identifiers."""
from __future__ import annotations

import re

from shardfall.core.rng import RNG

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lower-case a display name and collapse anything non-alphanumeric to underscores."""
    return _NON_SLUG.sub("_", value.lower()).strip("_") or "unit"


def make_instance_id(prefix: str, rng: RNG) -> str:
    """Generate a deterministic '<prefix>_<6 digits>' identifier using the provided RNG."""
    suffix = rng.randint(100000, 999999)
    return f"{slugify(prefix)}_{suffix}"
