"""Backing file storage interface.

Backends store opaque binaries under flat, generated file names. The
document service owns naming and policy; backends only move bytes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AsyncIterable, AsyncIterator

DEFAULT_CHUNK_SIZE = 64 * 1024


class StorageError(Exception):
    """Base error raised by storage backends."""


class StoredFileNotFound(StorageError):
    """The named file does not exist on the backing store."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Stored file not found: {name}")


class InvalidNameError(StorageError):
    """The name is not a plain file name (separators, traversal, empty)."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid stored file name: {name!r}")


def check_name(name: str) -> str:
    if (
        not name
        or name in {".", ".."}
        or "/" in name
        or "\\" in name
        or "\x00" in name
    ):
        raise InvalidNameError(name)
    return name


@dataclass(frozen=True)
class StoredFile:
    name: str
    path: str
    size: int


class StorageBackend(ABC):
    """Abstract storage backend.

    ``save`` consumes an async stream of chunks. If the stream raises or the
    task is cancelled part way through, the backend removes whatever it had
    written and re-raises; a name either holds a complete file or nothing.
    """

    @abstractmethod
    async def save(self, name: str, chunks: AsyncIterable[bytes]) -> StoredFile:
        """Write ``chunks`` to a new file called ``name``.

        Raises:
            StorageIOError: ``name`` already exists or the write failed
        """

    @abstractmethod
    async def exists(self, name: str) -> bool:
        """Check whether ``name`` is stored."""

    @abstractmethod
    async def open_stream(self, name: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
        """Return an async iterator over the file's bytes.

        Raises:
            StoredFileNotFound: if ``name`` is not stored
        """

    @abstractmethod
    async def delete(self, name: str) -> bool:
        """Delete ``name``; returns False if it was not there."""

    @abstractmethod
    async def list_names(self) -> list[str]:
        """List every stored file name."""

    @abstractmethod
    def path_for(self, name: str) -> str:
        """Full storage path (or URI) recorded on the document."""

    async def read_bytes(self, name: str) -> bytes:
        stream = await self.open_stream(name)
        return b"".join([chunk async for chunk in stream])
