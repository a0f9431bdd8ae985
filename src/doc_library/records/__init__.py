"""Record store: the in-memory table of users and documents."""

from .models import KNOWN_CATEGORIES, Document, DocumentCreate, User, UserCreate
from .store import RecordStore

__all__ = [
    "KNOWN_CATEGORIES",
    "Document",
    "DocumentCreate",
    "RecordStore",
    "User",
    "UserCreate",
]
