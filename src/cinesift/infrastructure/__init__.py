"""Infrastructure module for cross-cutting concerns."""

from .container import Container
from .logging import setup_logging
from .storage import JsonFileStore, MemoryStore

__all__ = [
    "Container",
    "JsonFileStore",
    "MemoryStore",
    "setup_logging",
]
