from __future__ import annotations

from typing import AsyncIterable, AsyncIterator

from doc_library.exceptions import StorageIOError

from ..base import (
    DEFAULT_CHUNK_SIZE,
    StorageBackend,
    StoredFile,
    StoredFileNotFound,
    check_name,
)


class MemoryBackend(StorageBackend):
    """In-process backend for tests and throwaway runs.

    Chunks are buffered and only published once the stream completes, so a
    failed or cancelled save leaves nothing behind. Existing names are never
    overwritten.
    """

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}

    def path_for(self, name: str) -> str:
        return f"memory://{check_name(name)}"

    async def save(self, name: str, chunks: AsyncIterable[bytes]) -> StoredFile:
        if check_name(name) in self._files:
            raise StorageIOError(f"Could not create {name}: already exists")
        buffer = bytearray()
        async for chunk in chunks:
            buffer.extend(chunk)
        if name in self._files:
            raise StorageIOError(f"Could not create {name}: already exists")
        self._files[name] = bytes(buffer)
        return StoredFile(name=name, path=self.path_for(name), size=len(buffer))

    async def exists(self, name: str) -> bool:
        return check_name(name) in self._files

    async def open_stream(self, name: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
        data = self._files.get(check_name(name))
        if data is None:
            raise StoredFileNotFound(name)
        return self._chunks(data, chunk_size)

    @staticmethod
    async def _chunks(data: bytes, chunk_size: int) -> AsyncIterator[bytes]:
        for start in range(0, len(data), chunk_size):
            yield data[start:start + chunk_size]

    async def delete(self, name: str) -> bool:
        return self._files.pop(check_name(name), None) is not None

    async def list_names(self) -> list[str]:
        return sorted(self._files)

    def clear(self) -> None:
        self._files.clear()
