"""Helpers that keep identifiers and secrets out of log lines."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from typing import Any

_SECRET_FIELDS = frozenset({"password"})


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


def loggable_fields(payload: Mapping[str, Any]) -> list[str]:
    """Field names of a record body, minus secrets, sorted for stable output."""
    return sorted(key for key in payload if key not in _SECRET_FIELDS)
