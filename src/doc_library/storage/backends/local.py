from __future__ import annotations

import logging
from pathlib import Path
from typing import AsyncIterable, AsyncIterator

import anyio

from doc_library.exceptions import StorageIOError

from ..base import (
    DEFAULT_CHUNK_SIZE,
    StorageBackend,
    StoredFile,
    StoredFileNotFound,
    check_name,
)

logger = logging.getLogger(__name__)


class LocalBackend(StorageBackend):
    """Filesystem backend rooted at a single storage directory.

    Files are created with exclusive mode so an existing name is never
    overwritten. Disk errors surface as ``StorageIOError``.
    """

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path).resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_file_path(self, name: str) -> Path:
        return self.base_path / check_name(name)

    def path_for(self, name: str) -> str:
        return str(self._get_file_path(name))

    async def save(self, name: str, chunks: AsyncIterable[bytes]) -> StoredFile:
        path = self._get_file_path(name)
        try:
            fh = await anyio.open_file(path, "xb")
        except OSError as exc:
            raise StorageIOError(f"Could not create {name}: {exc}") from exc

        size = 0
        try:
            async with fh:
                async for chunk in chunks:
                    await fh.write(chunk)
                    size += len(chunk)
        except BaseException as exc:
            # partial file: remove synchronously so cancellation cannot skip it
            path.unlink(missing_ok=True)
            logger.warning("Discarded partial file %s after %d bytes (%s)", name, size, type(exc).__name__)
            if isinstance(exc, OSError):
                raise StorageIOError(f"Could not write {name}: {exc}") from exc
            raise

        return StoredFile(name=name, path=str(path), size=size)

    async def exists(self, name: str) -> bool:
        return await anyio.Path(self._get_file_path(name)).is_file()

    async def open_stream(self, name: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
        path = self._get_file_path(name)
        if not await anyio.Path(path).is_file():
            raise StoredFileNotFound(name)
        return self._read_chunks(path, chunk_size)

    async def _read_chunks(self, path: Path, chunk_size: int) -> AsyncIterator[bytes]:
        try:
            async with await anyio.open_file(path, "rb") as fh:
                while chunk := await fh.read(chunk_size):
                    yield chunk
        except OSError as exc:
            raise StorageIOError(f"Could not read {path.name}: {exc}") from exc

    async def delete(self, name: str) -> bool:
        try:
            await anyio.Path(self._get_file_path(name)).unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageIOError(f"Could not delete {name}: {exc}") from exc
        return True

    async def list_names(self) -> list[str]:
        names = [p.name async for p in anyio.Path(self.base_path).iterdir() if await p.is_file()]
        return sorted(names)
