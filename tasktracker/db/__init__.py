"""Database package."""

from .client import TaskStore, items, keep_connecting, metadata

__all__ = [
    "TaskStore",
    "items",
    "metadata",
    "keep_connecting",
]
