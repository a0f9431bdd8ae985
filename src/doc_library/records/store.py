from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Optional

from doc_library.exceptions import DuplicateEmail

from .models import Document, DocumentCreate, User, UserCreate

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class RecordStore:
    """In-memory authoritative table of users and documents.

    - Records are keyed by a generated UUID4 and never mutated after insert.
    - Every operation runs under one re-entrant lock, so the duplicate-email
      check and the insert it guards are a single critical section.
    - Listings return snapshots in insertion order.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: dict[str, User] = {}
        self._documents: dict[str, Document] = {}

    # ------------------------------------------------------------------ users

    def create_user(self, data: UserCreate) -> User:
        with self._lock:
            if self.get_user_by_email(data.email) is not None:
                raise DuplicateEmail()
            user_id = _new_id()
            while user_id in self._users:
                user_id = _new_id()
            user = User(**data.model_dump(), id=user_id, created_at=_now())
            self._users[user.id] = user
        logger.debug("Created user %s", user.id)
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def list_users(self) -> list[User]:
        with self._lock:
            return list(self._users.values())

    def count_users(self) -> int:
        with self._lock:
            return len(self._users)

    # -------------------------------------------------------------- documents

    def create_document(
        self,
        data: DocumentCreate,
        file_name: str,
        file_path: str,
        file_size: int,
    ) -> Document:
        with self._lock:
            doc_id = _new_id()
            while doc_id in self._documents:
                doc_id = _new_id()
            document = Document(
                **data.model_dump(),
                id=doc_id,
                file_name=file_name,
                file_path=file_path,
                file_size=file_size,
                created_at=_now(),
            )
            self._documents[document.id] = document
        logger.debug("Created document record %s -> %s", document.id, file_name)
        return document

    def get_document(self, document_id: str) -> Optional[Document]:
        with self._lock:
            return self._documents.get(document_id)

    def list_documents(self) -> list[Document]:
        with self._lock:
            return list(self._documents.values())

    def count_documents(self) -> int:
        with self._lock:
            return len(self._documents)

    def search_documents(self, query: str = "", category: Optional[str] = None) -> list[Document]:
        with self._lock:
            return [
                doc
                for doc in self._documents.values()
                if doc.matches(query) and (not category or doc.category == category)
            ]

    def delete_document(self, document_id: str) -> bool:
        with self._lock:
            return self._documents.pop(document_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._users.clear()
            self._documents.clear()
