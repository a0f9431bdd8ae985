"""File-backed document service.

Sits between the record store and the storage backend. An upload becomes a
stored file plus a document record; a document id becomes a byte stream.
The two lifetimes are kept in step with an explicit two-phase sequence:

1. write the file (the backend removes partial output on failure)
2. commit the record; if that fails, delete the file before re-raising
"""

from __future__ import annotations

import logging
import re
import secrets
import time
from pathlib import PurePath
from typing import Any, AsyncIterable, AsyncIterator, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from doc_library.app.settings import MAX_UPLOAD_BYTES, LibrarySettings
from doc_library.exceptions import (
    FileMissing,
    FileTooLarge,
    NotFound,
    StorageIOError,
    UnsupportedFileType,
    ValidationError,
)
from doc_library.records import KNOWN_CATEGORIES, Document, DocumentCreate, RecordStore, User, UserCreate
from doc_library.storage import InvalidNameError, StorageBackend, StoredFileNotFound
from doc_library.storage.base import DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

_EXTENSION_RE = re.compile(r"\.[a-z0-9]{1,8}")

M = TypeVar("M", bound=BaseModel)

UploadSource = Union[bytes, AsyncIterable[bytes], Any]


def validate_payload(model: Type[M], data: Union[M, Mapping[str, Any]]) -> M:
    """Validate ``data`` against ``model``, raising our ``ValidationError``."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ValidationError(problems) from exc


def media_type(content_type: Optional[str]) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


def storage_extension(filename: Optional[str]) -> str:
    suffix = PurePath((filename or "").replace("\\", "/")).suffix.lower()
    return suffix if _EXTENSION_RE.fullmatch(suffix) else ".pdf"


def generate_file_name(filename: Optional[str]) -> str:
    """``file-<epoch ms>-<9 random digits><ext>``; never derived from the client's path."""
    millis = int(time.time() * 1000)
    return f"file-{millis}-{secrets.randbelow(10**9):09d}{storage_extension(filename)}"


async def iter_source(source: UploadSource, chunk_size: int) -> AsyncIterator[bytes]:
    """Yield chunks from raw bytes, an object with ``async read(n)``, or an async iterable."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        for start in range(0, len(data), chunk_size):
            yield data[start:start + chunk_size]
        return
    read = getattr(source, "read", None)
    if read is not None:
        while chunk := await read(chunk_size):
            yield chunk
        return
    async for chunk in source:
        yield chunk


class DocumentService:
    """Coordinates the record store with the backing file storage.

    All failures surface as ``DocLibraryError`` subclasses; the HTTP layer
    turns them into ``{message, kind}`` responses.
    """

    def __init__(
        self,
        store: RecordStore,
        storage: StorageBackend,
        *,
        max_upload_bytes: int = MAX_UPLOAD_BYTES,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.store = store
        self.storage = storage
        self.max_upload_bytes = max_upload_bytes
        self.chunk_size = chunk_size

    @classmethod
    def from_settings(
        cls, store: RecordStore, storage: StorageBackend, settings: LibrarySettings
    ) -> "DocumentService":
        return cls(
            store,
            storage,
            max_upload_bytes=settings.max_upload_bytes,
            chunk_size=settings.chunk_size,
        )

    # ------------------------------------------------------------------ users

    def register_user(self, data: Union[UserCreate, Mapping[str, Any]]) -> User:
        user = self.store.create_user(validate_payload(UserCreate, data))
        logger.info("Registered user %s", user.id)
        return user

    def list_users(self) -> list[User]:
        return self.store.list_users()

    def get_user(self, user_id: str) -> User:
        user = self.store.get_user(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    # -------------------------------------------------------------- catalogue

    def get_document(self, document_id: str) -> Document:
        document = self.store.get_document(document_id)
        if document is None:
            raise NotFound("Document not found")
        return document

    def search(self, query: Optional[str] = None, category: Optional[str] = None) -> list[Document]:
        if not query and not category:
            return self.store.list_documents()
        return self.store.search_documents(query or "", category or None)

    # ----------------------------------------------------------------- upload

    async def upload(
        self,
        metadata: Union[DocumentCreate, Mapping[str, Any]],
        source: UploadSource,
        *,
        filename: Optional[str],
        content_type: Optional[str],
        size: Optional[int] = None,
    ) -> Document:
        """Store an uploaded PDF and record its metadata.

        Args:
            metadata: title, author, category and optional fields
            source: the file body (bytes, async iterable, or object with ``async read``)
            filename: client file name, only consulted for its extension
            content_type: declared MIME type, must be ``application/pdf``
            size: declared size if known, checked before any write

        Returns:
            The created document record

        Raises:
            ValidationError: metadata missing or malformed (nothing written)
            UnsupportedFileType: declared type is not PDF (nothing written)
            FileTooLarge: declared or streamed size over the limit (partial file removed)
            StorageIOError: the backend failed (partial file removed)
        """
        data = validate_payload(DocumentCreate, metadata)
        if data.category not in KNOWN_CATEGORIES:
            logger.debug("Upload uses uncatalogued category %r", data.category)
        if media_type(content_type) != PDF_CONTENT_TYPE:
            raise UnsupportedFileType()
        if size is not None and size > self.max_upload_bytes:
            raise FileTooLarge(self._too_large_message())

        name = await self._unused_file_name(filename)
        stored = await self.storage.save(name, self._limited(iter_source(source, self.chunk_size)))

        try:
            document = self.store.create_document(data, stored.name, stored.path, stored.size)
        except Exception:
            logger.error("Record commit failed for %s; removing stored file", stored.name, exc_info=True)
            await self._discard(stored.name)
            raise

        logger.info(
            "Uploaded document %s",
            document.id,
            extra={"document_id": document.id, "file_name": stored.name, "file_size": stored.size},
        )
        return document

    async def _unused_file_name(self, filename: Optional[str]) -> str:
        name = generate_file_name(filename)
        while await self.storage.exists(name):
            name = generate_file_name(filename)
        return name

    async def _limited(self, chunks: AsyncIterator[bytes]) -> AsyncIterator[bytes]:
        total = 0
        async for chunk in chunks:
            total += len(chunk)
            if total > self.max_upload_bytes:
                raise FileTooLarge(self._too_large_message())
            yield chunk

    def _too_large_message(self) -> str:
        return f"File exceeds the maximum upload size of {self.max_upload_bytes} bytes"

    async def _discard(self, name: str) -> None:
        try:
            await self.storage.delete(name)
        except StorageIOError:
            logger.exception("Could not remove orphaned file %s", name)

    # --------------------------------------------------------------- download

    async def open_download(self, document_id: str) -> tuple[Document, AsyncIterator[bytes]]:
        """Look up a document and open its backing file.

        Raises:
            NotFound: no such document
            FileMissing: the record exists but its file does not
        """
        document = self.get_document(document_id)
        try:
            stream = await self.storage.open_stream(document.file_name, self.chunk_size)
        except StoredFileNotFound as exc:
            logger.error(
                "Document %s has no backing file",
                document.id,
                extra={"document_id": document.id, "file_name": document.file_name},
            )
            raise FileMissing() from exc
        return document, stream

    async def open_stored_file(self, name: str) -> AsyncIterator[bytes]:
        """Open a stored file by generated name. No record lookup."""
        try:
            return await self.storage.open_stream(name, self.chunk_size)
        except (StoredFileNotFound, InvalidNameError) as exc:
            raise NotFound("File not found") from exc

    # ----------------------------------------------------------------- delete

    async def delete(self, document_id: str) -> bool:
        """Delete the backing file, then the record.

        A file that is already gone is tolerated. Returns True only if the
        record was removed.
        """
        document = self.get_document(document_id)
        if not await self.storage.delete(document.file_name):
            logger.warning(
                "Backing file for document %s was already missing",
                document.id,
                extra={"document_id": document.id, "file_name": document.file_name},
            )
        deleted = self.store.delete_document(document.id)
        if deleted:
            logger.info("Deleted document %s", document.id, extra={"document_id": document.id})
        return deleted

    # ---------------------------------------------------------------- cleanup

    async def prune_orphans(self) -> list[str]:
        """Delete stored files that no document references.

        Only safe while no upload is in flight (startup, maintenance).
        """
        referenced = {doc.file_name for doc in self.store.list_documents()}
        orphans = [name for name in await self.storage.list_names() if name not in referenced]
        for name in orphans:
            await self.storage.delete(name)
        if orphans:
            logger.info("Pruned %d orphaned file(s)", len(orphans))
        return orphans
