"""Dependency wiring for routes."""

from __future__ import annotations

from fastapi import Request

from tasktracker.errors import RecordNotFoundError
from tasktracker.repositories.memory import InMemoryStore


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def require_collection(collection: str, request: Request) -> str:
    """Resolve the ``collection`` path segment; unknown collections are a 404."""
    if not get_store(request).has_collection(collection):
        raise RecordNotFoundError("Resource not found")
    return collection
