from . import api, app

from .exceptions import (
    DocLibraryError,
    DuplicateEmail,
    FileMissing,
    FileTooLarge,
    NotFound,
    StorageIOError,
    UnsupportedFileType,
    ValidationError,
)
from .api import create_app
from .documents import DocumentService
from .records import Document, RecordStore, User

__all__ = [
    # Modules
    "app",
    "api",
    # Application
    "create_app",
    "DocumentService",
    "RecordStore",
    "Document",
    "User",
    # Errors
    "DocLibraryError",
    "DuplicateEmail",
    "FileMissing",
    "FileTooLarge",
    "NotFound",
    "StorageIOError",
    "UnsupportedFileType",
    "ValidationError",
]
