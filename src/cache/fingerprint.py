"""Stable content hashes for request descriptors.

Pure functions; the fingerprint is the only key the cache stores under.
"""

import hashlib
import json
from collections.abc import Mapping
from typing import Any


def drop_nulls(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy without None values, recursing into nested mappings."""
    return {
        key: drop_nulls(value) if isinstance(value, Mapping) else value
        for key, value in mapping.items()
        if value is not None
    }


def fingerprint(mapping: Mapping[str, Any]) -> str:
    """SHA-256 of the canonical JSON form of ``mapping``.

    Key order does not matter and null values are ignored, so
    ``{"a": 1, "b": None}`` and ``{"a": 1}`` share a fingerprint.
    """
    canonical = json.dumps(
        drop_nulls(mapping),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
