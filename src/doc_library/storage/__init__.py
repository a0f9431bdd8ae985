"""Backing file storage for uploaded documents."""

from __future__ import annotations

import logging

from doc_library.app.settings import LibrarySettings, get_library_settings

from .backends import LocalBackend, MemoryBackend
from .base import (
    InvalidNameError,
    StorageBackend,
    StorageError,
    StoredFile,
    StoredFileNotFound,
)

logger = logging.getLogger(__name__)


def easy_storage(settings: LibrarySettings | None = None) -> StorageBackend:
    """Build the backend selected by ``DOCLIB_STORAGE_BACKEND``."""
    settings = settings or get_library_settings()
    if settings.storage_backend == "memory":
        logger.info("Using in-memory file storage")
        return MemoryBackend()
    backend = LocalBackend(settings.storage_root)
    logger.info("Using local file storage at %s", backend.base_path)
    return backend


__all__ = [
    "easy_storage",
    "InvalidNameError",
    "LocalBackend",
    "MemoryBackend",
    "StorageBackend",
    "StorageError",
    "StoredFile",
    "StoredFileNotFound",
]
