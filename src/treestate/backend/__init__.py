"""Repository backends: the git CLI in production, fixtures in tests."""

from __future__ import annotations

from .base import RepositoryBackend
from .git import GitBackend
from .memory import MemoryBackend

__all__ = [
    "GitBackend",
    "MemoryBackend",
    "RepositoryBackend",
]
