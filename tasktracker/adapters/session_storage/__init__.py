"""Durable session storage adapters."""

from .base import SessionStorage
from .file_storage import FileSessionStorage
from .memory_storage import MemorySessionStorage

__all__ = ["FileSessionStorage", "MemorySessionStorage", "SessionStorage"]
